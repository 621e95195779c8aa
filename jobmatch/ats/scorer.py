# jobmatch/ats/scorer.py
import logging
from typing import List, Optional

from jobmatch.config import MatchingConfig
from jobmatch.models import ResumeProfile, JobListing
from jobmatch.ats.models import ATSJobScoreResult, MustHaveKeyword, ScoreBreakdown
from jobmatch.ats.keyword_extractor import KeywordExtractor
from jobmatch.ats.pillars import PillarScorer
from jobmatch.utils import clamp_round

logger = logging.getLogger(__name__)


class ATSScorer:
    """
    Calculate the ATS score of a profile against one job

    Weighted sum of keyword density, title/tenure and formatting,
    minus the gap penalty, clamped to 0-100.
    """

    def __init__(
        self,
        config: Optional[MatchingConfig] = None,
        keyword_extractor: Optional[KeywordExtractor] = None,
        pillar_scorer: Optional[PillarScorer] = None
    ):
        self.config = config or MatchingConfig()
        self.keyword_extractor = keyword_extractor or KeywordExtractor(self.config)
        self.pillar_scorer = pillar_scorer or PillarScorer(self.config)

    @property
    def weights(self) -> dict:
        return {
            'keyword': self.config.keyword_weight,
            'title_experience': self.config.title_experience_weight,
            'formatting': self.config.formatting_weight,
        }

    def score(
        self,
        profile: ResumeProfile,
        job: JobListing,
        keywords: Optional[List[MustHaveKeyword]] = None
    ) -> ATSJobScoreResult:
        """
        Score a profile against a job

        Args:
            profile: Candidate profile
            job: Job listing
            keywords: Must-have keywords supplied from elsewhere; when given
                they replace the locally extracted list

        Returns:
            ATSJobScoreResult with score, strengths, gaps and breakdown
        """
        if keywords is None:
            keywords = self.keyword_extractor.extract(job)

        density = self.pillar_scorer.keyword_density(profile, keywords)
        title_exp = self.pillar_scorer.title_and_experience(profile, job, job.full_text)
        formatting = self.pillar_scorer.formatting_integrity(profile)
        gap = self.pillar_scorer.gap_penalty(
            profile, job, density.missing, title_exp.critical_issues
        )

        ats_score = self.aggregate(density.score, title_exp.score, formatting, gap.penalty)

        result = ATSJobScoreResult(
            ats_score=ats_score,
            key_strengths=density.key_strengths,
            gaps=gap.messages,
            critical_match_issues=title_exp.critical_issues,
            breakdown=ScoreBreakdown(
                keyword_density=density.score,
                title_and_experience=title_exp.score,
                formatting_integrity=formatting,
                gap_penalty=gap.penalty
            )
        )

        logger.info(f"ATS Score for job {job.id}: {result.ats_score}/100 ({result.grade})")
        return result

    def aggregate(
        self,
        keyword_score: float,
        title_experience_score: float,
        formatting_score: float,
        gap_penalty: float
    ) -> int:
        """Weighted pillars minus penalty, rounded and clamped to 0-100"""
        weighted = (
            keyword_score * self.config.keyword_weight +
            title_experience_score * self.config.title_experience_weight +
            formatting_score * self.config.formatting_weight
        )
        return clamp_round(weighted - gap_penalty)
