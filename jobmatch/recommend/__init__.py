"""
AI-assisted recommendations: ranking, salary, success probability and alerts
"""

from jobmatch.recommend.ranker import (
    JobRecommendationRanker, reasons_to_why_match_sentence, resolve_match_score, keywords_from_ai
)
from jobmatch.recommend.salary import SalaryPredictor, SalaryRangeParser
from jobmatch.recommend.success import SuccessProbabilityEstimator
from jobmatch.recommend.alerts import JobAlertGenerator

__all__ = [
    'JobRecommendationRanker',
    'reasons_to_why_match_sentence',
    'resolve_match_score',
    'keywords_from_ai',
    'SalaryPredictor',
    'SalaryRangeParser',
    'SuccessProbabilityEstimator',
    'JobAlertGenerator',
]
