# jobmatch/ats/pillars.py
import re
import logging
from typing import List, Optional

from jobmatch.config import MatchingConfig
from jobmatch.models import ResumeProfile, JobListing
from jobmatch.ats.models import (
    MustHaveKeyword, KeywordDensityResult, TitleExperienceResult, GapPenaltyResult
)
from jobmatch.ats.matcher import KeywordMatcher, normalize, build_resume_text
from jobmatch.ats.tenure import TenureParser
from jobmatch.utils import clamp, clamp_round, round_half_up, format_years

logger = logging.getLogger(__name__)


class PillarScorer:
    """
    The four ATS pillars

    1. Keyword density (0-100)
    2. Title and tenure alignment (0-100)
    3. Formatting integrity (0-100)
    4. Gap penalty (0-40, subtracted after weighting)
    """

    # Formatting integrity points per section present
    SECTION_POINTS = {
        'experience': 40,
        'education': 30,
        'skills': 20,
        'location': 10,
    }

    def __init__(
        self,
        config: Optional[MatchingConfig] = None,
        tenure_parser: Optional[TenureParser] = None,
        keyword_matcher: Optional[KeywordMatcher] = None
    ):
        self.config = config or MatchingConfig()
        self.tenure_parser = tenure_parser or TenureParser(self.config)
        self.keyword_matcher = keyword_matcher or KeywordMatcher(self.config)
        self.relocation_re = re.compile(self.config.relocation_pattern, re.IGNORECASE)

    def keyword_density(
        self,
        profile: ResumeProfile,
        keywords: List[MustHaveKeyword]
    ) -> KeywordDensityResult:
        """Pillar 1: weighted share of must-have keywords found in the resume"""
        return self.keyword_matcher.match_keywords(profile, keywords)

    def title_and_experience(
        self,
        profile: ResumeProfile,
        job: JobListing,
        job_text: Optional[str] = None
    ) -> TitleExperienceResult:
        """
        Pillar 2: title alignment and tenure, averaged

        Title: containment either way 100, else word overlap
        (>=0.5 -> 75, >=0.25 -> 50, else 25).
        Tenure: no requirement 80, met 100, one year short 70,
        else proportional up to 60 plus a critical issue.
        """
        if job_text is None:
            job_text = job.full_text

        title_score = self._title_score(profile, job)

        critical_issues: List[str] = []
        required_years = self.tenure_parser.parse(job_text)
        profile_years = profile.years_of_experience or 0

        if required_years is None:
            tenure_score = 80
        elif profile_years >= required_years:
            tenure_score = 100
        elif profile_years >= required_years - 1:
            tenure_score = 70
        else:
            ratio = profile_years / required_years if required_years > 0 else 0
            tenure_score = max(0, round_half_up(ratio * 60))
            critical_issues.append(
                f"Tenure: job requires {required_years}+ years; "
                f"profile shows ~{format_years(profile_years)} years"
            )

        score = clamp_round(title_score * 0.5 + tenure_score * 0.5)

        return TitleExperienceResult(
            score=score,
            title_score=title_score,
            tenure_score=tenure_score,
            required_years=required_years,
            critical_issues=critical_issues
        )

    def _title_score(self, profile: ResumeProfile, job: JobListing) -> int:
        job_title = normalize(job.title)
        profile_titles = [normalize(e.title) for e in profile.experience]

        # Plain containment: an empty title on either side matches
        if any(job_title in t or t in job_title for t in profile_titles):
            return 100

        title_words = [w for w in job_title.split() if len(w) >= 2]
        if not title_words:
            return 25

        overlap = sum(1 for w in title_words if any(w in t for t in profile_titles))
        overlap_ratio = overlap / len(title_words)

        if overlap_ratio >= 0.5:
            return 75
        elif overlap_ratio >= 0.25:
            return 50
        return 25

    def formatting_integrity(self, profile: ResumeProfile) -> int:
        """Pillar 3: structural completeness of the profile"""
        score = 0

        if profile.experience:
            score += self.SECTION_POINTS['experience']
        if profile.education:
            score += self.SECTION_POINTS['education']
        if profile.skills:
            score += self.SECTION_POINTS['skills']
        if profile.location and profile.location.strip():
            score += self.SECTION_POINTS['location']

        return int(clamp(score, 0, 100))

    def gap_penalty(
        self,
        profile: ResumeProfile,
        job: JobListing,
        missing: List[str],
        critical_issues: List[str]
    ) -> GapPenaltyResult:
        """
        Pillar 4: subtractive penalty for missing must-haves and location

        Critical issues are listed in the messages but carry no extra points.
        """
        messages: List[str] = []
        penalty = 0

        top_missing = missing[:self.config.max_missing_penalized]
        if top_missing:
            penalty += min(
                self.config.missing_penalty_cap,
                len(top_missing) * self.config.missing_keyword_penalty
            )
            messages.extend(f'Missing: "{phrase}"' for phrase in top_missing)

        location_message = self._location_gap(profile, job)
        if location_message:
            penalty += self.config.location_penalty
            messages.append(location_message)

        messages.extend(critical_issues)

        return GapPenaltyResult(
            penalty=int(min(self.config.gap_penalty_cap, penalty)),
            messages=messages
        )

    def _location_gap(self, profile: ResumeProfile, job: JobListing) -> Optional[str]:
        job_location = (job.location or '').lower()
        profile_location = (profile.location or '').lower()

        if not job_location or 'remote' in job_location:
            return None

        job_city = re.split(r'[,;]', job_location)[0].strip()
        if not job_city or not profile_location:
            return None

        if job_city in profile_location:
            return None

        if self.relocation_re.search(build_resume_text(profile)):
            return None

        return f'Location: job in {job_city}; consider adding "willing to relocate" if applicable'
