"""
Completion service access and AI response models
"""

from jobmatch.ai.completion_client import (
    CompletionClient, CompletionService, CompletionRequest, CompletionResponse
)
from jobmatch.ai.json_extract import extract_json, parse_response, ParsedResponse
from jobmatch.ai.models import (
    SalaryPrediction, MarketComparison, SuccessProbability, SuccessBreakdown,
    JobRecommendation, JobAlert, AlertCriteria
)

__all__ = [
    'CompletionClient',
    'CompletionService',
    'CompletionRequest',
    'CompletionResponse',
    'extract_json',
    'parse_response',
    'ParsedResponse',
    'SalaryPrediction',
    'MarketComparison',
    'SuccessProbability',
    'SuccessBreakdown',
    'JobRecommendation',
    'JobAlert',
    'AlertCriteria',
]
