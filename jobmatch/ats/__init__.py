"""
ATS (Applicant Tracking System) scoring for job listings
"""

from jobmatch.ats.models import (
    MustHaveKeyword, ATSJobScoreResult, ScoreBreakdown,
    KeywordDensityResult, TitleExperienceResult, GapPenaltyResult
)
from jobmatch.ats.keyword_extractor import KeywordExtractor
from jobmatch.ats.tenure import TenureParser
from jobmatch.ats.matcher import KeywordMatcher
from jobmatch.ats.pillars import PillarScorer
from jobmatch.ats.scorer import ATSScorer
from jobmatch.ats.quick_match import QuickMatchScorer

__all__ = [
    'MustHaveKeyword',
    'ATSJobScoreResult',
    'ScoreBreakdown',
    'KeywordDensityResult',
    'TitleExperienceResult',
    'GapPenaltyResult',
    'KeywordExtractor',
    'TenureParser',
    'KeywordMatcher',
    'PillarScorer',
    'ATSScorer',
    'QuickMatchScorer',
]
