# jobmatch/recommend/success.py
import logging
from typing import Optional

from jobmatch.config import MatchingConfig
from jobmatch.models import ResumeProfile, JobListing
from jobmatch.ai.completion_client import CompletionService, CompletionRequest
from jobmatch.ai.json_extract import parse_response
from jobmatch.ai.models import SuccessProbability
from jobmatch.recommend.prompts import SUCCESS_SYSTEM_PROMPT, build_success_prompt

logger = logging.getLogger(__name__)


class SuccessProbabilityEstimator:
    """
    Estimate the chance of an offer via the completion service
    """

    def __init__(
        self,
        completion_service: CompletionService,
        config: Optional[MatchingConfig] = None,
        timeout: float = 45.0
    ):
        self.completion_service = completion_service
        self.config = config or MatchingConfig()
        self.timeout = timeout

    def estimate(
        self,
        profile: ResumeProfile,
        job: JobListing,
        user_id: Optional[str] = None
    ) -> SuccessProbability:
        """
        Estimate success probability for a job

        Returns:
            SuccessProbability; neutral 50s when the output is unusable

        Raises:
            CompletionServiceError: when the service cannot be reached
        """
        logger.info(f"Estimating success probability for job {job.id}")

        request = CompletionRequest(
            prompt=build_success_prompt(profile, job),
            system_message=SUCCESS_SYSTEM_PROMPT,
            user_id=user_id,
            feature_name="success_probability"
        )
        response = self.completion_service.complete(request, timeout=self.timeout)

        parsed = parse_response(response.content, self.config)
        data = parsed.data
        if isinstance(data, list):
            data = next((item for item in data if isinstance(item, dict)), {})
        elif 'overallProbability' not in data and isinstance(data.get('successProbability'), dict):
            # Wrapped as {"successProbability": {...}}
            data = data['successProbability']

        if parsed.is_fallback:
            logger.warning(f"Success estimate for job {job.id} fell back to neutral values")

        return SuccessProbability.from_response(data)
