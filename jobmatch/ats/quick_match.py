# jobmatch/ats/quick_match.py
from jobmatch.models import ResumeProfile, JobListing
from jobmatch.utils import clamp_round


class QuickMatchScorer:
    """
    Lightweight match score for real-time use

    No completion service, no keyword extraction: four additive signals
    (skills 40, experience level 20, location 20, title 20).
    """

    def score(self, profile: ResumeProfile, job: JobListing) -> int:
        total = (
            self._skills_score(profile, job) +
            self._experience_level_score(profile, job) +
            self._location_score(profile, job) +
            self._title_score(profile, job)
        )
        return clamp_round(total)

    def _skills_score(self, profile: ResumeProfile, job: JobListing) -> float:
        job_text = f"{job.title} {job.description} {job.requirements}".lower()
        matched = [s for s in profile.skills if s and s.lower() in job_text]
        return len(matched) / max(len(profile.skills), 1) * 40

    def _experience_level_score(self, profile: ResumeProfile, job: JobListing) -> int:
        if not job.experience_level:
            return 10

        level = job.experience_level.lower()
        years = profile.years_of_experience or 0

        if years >= 3 and 'senior' in level:
            return 20
        if years >= 1 and 'mid' in level:
            return 15
        if years < 2 and 'entry' in level:
            return 20
        return 10

    def _location_score(self, profile: ResumeProfile, job: JobListing) -> int:
        job_location = (job.location or '').lower()

        if 'remote' in job_location:
            return 20
        if profile.location and profile.location.lower() in job_location:
            return 20
        return 5  # partial credit

    def _title_score(self, profile: ResumeProfile, job: JobListing) -> int:
        job_title = (job.title or '').lower()
        titles = [e.title.lower() for e in profile.experience if e.title]

        if job_title and any(t in job_title or job_title in t for t in titles):
            return 20
        return 5
