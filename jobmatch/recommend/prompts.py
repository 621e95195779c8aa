# jobmatch/recommend/prompts.py
from typing import List, Optional

from jobmatch.models import ResumeProfile, JobListing
from jobmatch.utils import format_years


RANKING_SYSTEM_PROMPT = """You are an expert job matching assistant with deep knowledge of career paths, skill requirements and hiring practices.
You compare candidate profiles with job listings and return structured, honest assessments.
Always answer with a JSON array only: no markdown, no commentary."""

SALARY_SYSTEM_PROMPT = """You are a compensation analyst. You estimate realistic salary bands from a candidate profile and a job listing.
All salary figures are annual, in thousands of US dollars.
Always answer with a single JSON object only."""

SUCCESS_SYSTEM_PROMPT = """You are a senior recruiter. You estimate how likely a candidate is to be offered a given role and explain the main risks.
All probabilities and sub-scores are integers from 0 to 100.
Always answer with a single JSON object only."""

ALERTS_SYSTEM_PROMPT = """You are an intelligent job alert system that creates personalized job search criteria based on candidate profiles and career goals."""


def _truncate(text: str, limit: int) -> str:
    text = text or ''
    if len(text) > limit:
        return text[:limit] + '...'
    return text


def profile_summary(profile: ResumeProfile) -> str:
    experience = ', '.join(f"{e.title} at {e.company}" for e in profile.experience) or 'Not specified'
    education = ', '.join(f"{e.degree} in {e.field}" for e in profile.education) or 'Not specified'

    return f"""RESUME PROFILE:
- Skills: {', '.join(profile.skills) or 'Not specified'}
- Years of Experience: {format_years(profile.years_of_experience)}
- Industry: {profile.industry or 'Not specified'}
- Location: {profile.location or 'Not specified'}
- Experience: {experience}
- Education: {education}"""


def job_summary(
    job: JobListing,
    index: Optional[int] = None,
    description_chars: int = 800,
    requirements_chars: int = 500
) -> str:
    header = f"JOB {index} (id: \"{job.id}\")" if index is not None else f"JOB (id: \"{job.id}\")"

    return f"""{header}:
Title: {job.title}
Company: {job.company}
Location: {job.location}
Salary Range: {job.salary_range or 'Not specified'}
Description: {_truncate(job.description, description_chars)}
Requirements: {_truncate(job.requirements, requirements_chars)}"""


def build_ranking_prompt(
    profile: ResumeProfile,
    jobs: List[JobListing],
    search_goal: Optional[str] = None,
    description_chars: int = 800,
    requirements_chars: int = 500
) -> str:
    jobs_block = '\n\n'.join(
        job_summary(job, idx, description_chars, requirements_chars)
        for idx, job in enumerate(jobs, 1)
    )

    goal = ''
    if search_goal:
        goal = f"\nSEARCH GOAL (weight match scores and reasons to reflect this): {search_goal}\n"

    return f"""Analyze this resume profile and rank these job listings by how well they match.{goal}

{profile_summary(profile)}

AVAILABLE JOBS:
{jobs_block}

For each job provide:
1. jobId: the exact id from the job list above.
2. matchScore (0-100): how well the background aligns with the job. Do not return 0 unless there is no overlap.
3. mustHaveKeywords: up to 5 must-have skills or phrases from the job, each with up to 2 equivalent spellings.
4. confidence (0-100): how confident you are in this assessment.
5. reasons: exactly 3 one-line strings: title/industry alignment, a concrete technical skill match, and recent relevant experience. Do not list missing skills here.
6. salaryPrediction: predicted salary band in thousands.
7. successProbability: chance of an offer with a breakdown.
8. recommendedActions: up to 3 concrete next steps for this application.

Return a JSON array, highest matchScore first:
[
  {{
    "jobId": "<exact id>",
    "matchScore": <0-100>,
    "mustHaveKeywords": [{{"phrase": "<keyword>", "equivalents": ["<alt>", "<alt>"]}}],
    "confidence": <0-100>,
    "reasons": ["<title/industry reason>", "<technical skill reason>", "<recent achievement reason>"],
    "salaryPrediction": {{"predictedMin": <number>, "predictedMedian": <number>, "predictedMax": <number>, "confidence": <0-100>}},
    "successProbability": {{"overallProbability": <0-100>, "breakdown": {{"qualifications": <0-100>, "experience": <0-100>, "skills": <0-100>, "location": <0-100>}}, "riskFactors": ["<risk>"], "improvementSuggestions": ["<suggestion>"]}},
    "recommendedActions": ["<action>"]
  }}
]

Return ONLY the JSON array."""


def build_salary_prompt(profile: ResumeProfile, job: JobListing) -> str:
    current = f"{profile.current_salary:g}k" if profile.current_salary else 'Not specified'

    return f"""Predict the salary this candidate can expect for the job below.

{profile_summary(profile)}
- Current Salary: {current}

{job_summary(job)}

Return a JSON object with this exact structure:
{{
  "predictedMin": <number in thousands>,
  "predictedMedian": <number in thousands>,
  "predictedMax": <number in thousands>,
  "confidence": <0-100>,
  "marketComparison": {{"percentile": <0-100>, "industryAverage": <number in thousands>}},
  "factors": ["<factor 1>", "<factor 2>", "<factor 3>"]
}}

Return ONLY valid JSON, no additional text."""


def build_success_prompt(profile: ResumeProfile, job: JobListing) -> str:
    return f"""Estimate the probability that this candidate receives an offer for the job below.

{profile_summary(profile)}

{job_summary(job)}

Return a JSON object with this exact structure:
{{
  "overallProbability": <0-100>,
  "breakdown": {{
    "qualifications": <0-100>,
    "experience": <0-100>,
    "skills": <0-100>,
    "location": <0-100>
  }},
  "riskFactors": ["<risk 1>", "<risk 2>"],
  "improvementSuggestions": ["<suggestion 1>", "<suggestion 2>"]
}}

Return ONLY valid JSON, no additional text."""


def describe_profile_changes(
    profile: ResumeProfile,
    previous: Optional[ResumeProfile]
) -> str:
    if previous is None:
        return "This is a new profile."

    lines = []
    new_skills = [s for s in profile.skills if s not in previous.skills]
    if new_skills:
        lines.append(f"- New skills: {', '.join(new_skills)}")
    if profile.years_of_experience > (previous.years_of_experience or 0):
        lines.append(
            f"- Experience increased from {format_years(previous.years_of_experience)} "
            f"to {format_years(profile.years_of_experience)} years"
        )
    if len(profile.experience) > len(previous.experience):
        lines.append("- New experience added")

    if not lines:
        return "No significant profile changes."
    return "PROFILE CHANGES DETECTED:\n" + '\n'.join(lines)


def build_alerts_prompt(profile: ResumeProfile, previous: Optional[ResumeProfile] = None) -> str:
    return f"""Generate job alert criteria based on this candidate profile.

CURRENT PROFILE:
- Skills: {', '.join(profile.skills) or 'Not specified'}
- Years of Experience: {format_years(profile.years_of_experience)}
- Industry: {profile.industry or 'Not specified'}
- Location: {profile.location or 'Not specified'}
- Current Role: {profile.current_title or 'Not specified'}

{describe_profile_changes(profile, previous)}

Create 2-3 job alert configurations covering current skills, natural career progression and related roles.

Return a JSON array with this exact structure:
[
  {{
    "criteria": {{
      "keywords": ["<keyword 1>", "<keyword 2>", "<keyword 3>"],
      "location": "<location or 'Remote' or 'Any'>",
      "salaryMin": <number in thousands or null>,
      "salaryMax": <number in thousands or null>,
      "industry": "<industry or null>",
      "experienceLevel": "<entry|mid|senior|executive or null>"
    }},
    "frequency": "daily|weekly|realtime",
    "description": "<what this alert finds>"
  }}
]

Return ONLY valid JSON, no additional text."""
