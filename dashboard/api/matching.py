# dashboard/api/matching.py

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import Any, Dict, Iterator, List, Optional
import logging

from dashboard.config import settings
from jobmatch.config import MatchingConfig, get_config
from jobmatch.models import ResumeProfile, JobListing
from jobmatch.exceptions import CompletionServiceError
from jobmatch.ai.completion_client import CompletionClient, CompletionService
from jobmatch.ats import ATSScorer, KeywordExtractor, QuickMatchScorer
from jobmatch.recommend import (
    JobRecommendationRanker, SalaryPredictor, SuccessProbabilityEstimator,
    JobAlertGenerator, keywords_from_ai
)

router = APIRouter()
logger = logging.getLogger(__name__)


class MatchRequest(BaseModel):
    profile: Dict[str, Any]
    job: Dict[str, Any]
    user_id: Optional[str] = None


class ATSRequest(MatchRequest):
    must_have_keywords: Optional[List[Any]] = None


class KeywordRequest(BaseModel):
    job: Dict[str, Any]


class RecommendationRequest(BaseModel):
    profile: Dict[str, Any]
    jobs: List[Dict[str, Any]]
    limit: Optional[int] = None
    search_goal: Optional[str] = None
    user_id: Optional[str] = None


class AlertRequest(BaseModel):
    profile: Dict[str, Any]
    previous_profile: Optional[Dict[str, Any]] = None
    user_id: Optional[str] = None


# ============= Dependencies =============

def get_matching_config() -> MatchingConfig:
    """Engine config from JOBMATCH_CONFIG (or config/matching.yaml), defaults otherwise"""
    return get_config()


def get_completion_service() -> Iterator[CompletionService]:
    """One client per request; its session is closed once the response is built"""
    client = CompletionClient(settings.completion_config())
    try:
        yield client
    finally:
        client.close()


def _bad_gateway(exc: CompletionServiceError) -> HTTPException:
    logger.error(f"Completion service failed: {exc}")
    return HTTPException(
        status_code=502,
        detail={"message": str(exc), "error_type": exc.error_type, "retryable": exc.retryable}
    )


# ============= Local scoring =============

@router.post("/ats")
def ats_score(
    request: ATSRequest,
    config: MatchingConfig = Depends(get_matching_config)
) -> Dict:
    """ATS score for one profile/job pair"""
    profile = ResumeProfile.from_dict(request.profile)
    job = JobListing.from_dict(request.job)

    keywords = keywords_from_ai(request.must_have_keywords, config) or None
    result = ATSScorer(config).score(profile, job, keywords)

    return result.to_dict()


@router.post("/quick")
def quick_match(request: MatchRequest) -> Dict:
    """Heuristic quick match score"""
    profile = ResumeProfile.from_dict(request.profile)
    job = JobListing.from_dict(request.job)

    return {"jobId": job.id, "matchScore": QuickMatchScorer().score(profile, job)}


@router.post("/keywords")
def extract_keywords(
    request: KeywordRequest,
    config: MatchingConfig = Depends(get_matching_config)
) -> Dict:
    """Must-have keywords extracted from a job listing"""
    job = JobListing.from_dict(request.job)
    keywords = KeywordExtractor(config).extract(job)

    return {"jobId": job.id, "keywords": [k.to_dict() for k in keywords]}


# ============= AI-assisted =============

@router.post("/recommendations")
def recommendations(
    request: RecommendationRequest,
    config: MatchingConfig = Depends(get_matching_config),
    service: CompletionService = Depends(get_completion_service)
) -> Dict:
    """Ranked recommendations for a profile"""
    profile = ResumeProfile.from_dict(request.profile)
    jobs = [JobListing.from_dict(job) for job in request.jobs]
    limit = request.limit if request.limit is not None else settings.default_recommendation_limit

    ranker = JobRecommendationRanker(service, config, timeout=settings.ranking_timeout)
    try:
        ranked = ranker.rank(profile, jobs, limit, request.search_goal, request.user_id)
    except CompletionServiceError as e:
        raise _bad_gateway(e)

    return {
        "recommendations": [r.to_dict() for r in ranked],
        "count": len(ranked)
    }


@router.post("/salary")
def salary_prediction(
    request: MatchRequest,
    config: MatchingConfig = Depends(get_matching_config),
    service: CompletionService = Depends(get_completion_service)
) -> Dict:
    """Predicted salary band for a profile/job pair"""
    profile = ResumeProfile.from_dict(request.profile)
    job = JobListing.from_dict(request.job)

    predictor = SalaryPredictor(service, config, timeout=settings.estimation_timeout)
    try:
        prediction = predictor.predict(profile, job, request.user_id)
    except CompletionServiceError as e:
        raise _bad_gateway(e)

    return prediction.to_dict()


@router.post("/success")
def success_probability(
    request: MatchRequest,
    config: MatchingConfig = Depends(get_matching_config),
    service: CompletionService = Depends(get_completion_service)
) -> Dict:
    """Chance of an offer for a profile/job pair"""
    profile = ResumeProfile.from_dict(request.profile)
    job = JobListing.from_dict(request.job)

    estimator = SuccessProbabilityEstimator(service, config, timeout=settings.estimation_timeout)
    try:
        estimate = estimator.estimate(profile, job, request.user_id)
    except CompletionServiceError as e:
        raise _bad_gateway(e)

    return {**estimate.to_dict(), "level": estimate.level}


@router.post("/alerts")
def job_alerts(
    request: AlertRequest,
    config: MatchingConfig = Depends(get_matching_config),
    service: CompletionService = Depends(get_completion_service)
) -> Dict:
    """Suggested job alerts for a profile"""
    profile = ResumeProfile.from_dict(request.profile)
    previous = ResumeProfile.from_dict(request.previous_profile) if request.previous_profile else None

    generator = JobAlertGenerator(service, config, timeout=settings.estimation_timeout)
    try:
        alerts = generator.generate(profile, previous, request.user_id)
    except CompletionServiceError as e:
        raise _bad_gateway(e)

    return {"alerts": [a.to_dict() for a in alerts], "count": len(alerts)}
