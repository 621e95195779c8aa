# jobmatch/recommend/salary.py
import re
import logging
from typing import Any, Optional, Tuple, List

from jobmatch.config import MatchingConfig
from jobmatch.models import ResumeProfile, JobListing
from jobmatch.ai.completion_client import CompletionService, CompletionRequest
from jobmatch.ai.json_extract import parse_response
from jobmatch.ai.models import SalaryPrediction
from jobmatch.recommend.prompts import SALARY_SYSTEM_PROMPT, build_salary_prompt
from jobmatch.utils import round_half_up

logger = logging.getLogger(__name__)


class SalaryRangeParser:
    """Turn an advertised salary range into an annual band in thousands"""

    NUMBER_PATTERN = re.compile(r'(\d{1,3}(?:,\d{3})+|\d+(?:\.\d+)?)\s*([kK])?')

    # Annualization factors
    PERIOD_PATTERNS = {
        'hourly': (re.compile(r'per hour|hourly|/\s*hour|/\s*hr\b', re.IGNORECASE), 2080),
        'monthly': (re.compile(r'per month|monthly|/\s*month|/\s*mo\b', re.IGNORECASE), 12),
    }

    def parse(self, text: Any) -> Optional[Tuple[int, int]]:
        """
        Parse e.g. "$90k - $140k", "90,000-140,000 per year", "$45/hour"

        Returns:
            (min, max) in thousands, or None when no figure is found
        """
        if text is None or isinstance(text, bool):
            return None
        text = str(text)

        matches = self.NUMBER_PATTERN.findall(text)[:2]
        if not matches:
            return None

        has_k = any(suffix for _, suffix in matches)
        multiplier = 1
        for _, (pattern, factor) in self.PERIOD_PATTERNS.items():
            if pattern.search(text):
                multiplier = factor
                break

        values: List[float] = []
        for raw, suffix in matches:
            value = float(raw.replace(',', ''))
            if multiplier > 1:
                value = value * multiplier / 1000
            elif suffix or (has_k and value < 1000):
                pass  # already thousands
            elif value >= 1000:
                value = value / 1000
            values.append(value)

        low, high = values[0], values[-1]
        if low > high:
            low, high = high, low

        return round_half_up(low), round_half_up(high)


class SalaryPredictor:
    """
    Predict a salary band for a profile/job pair via the completion service
    """

    def __init__(
        self,
        completion_service: CompletionService,
        config: Optional[MatchingConfig] = None,
        timeout: float = 45.0,
        range_parser: Optional[SalaryRangeParser] = None
    ):
        self.completion_service = completion_service
        self.config = config or MatchingConfig()
        self.timeout = timeout
        self.range_parser = range_parser or SalaryRangeParser()

    def predict(
        self,
        profile: ResumeProfile,
        job: JobListing,
        user_id: Optional[str] = None
    ) -> SalaryPrediction:
        """
        Predict salary for a job

        Unparsable output gives a prediction built from the job's advertised
        range (or zeros) with neutral confidence.

        Raises:
            CompletionServiceError: when the service cannot be reached
        """
        logger.info(f"Predicting salary for job {job.id}")

        request = CompletionRequest(
            prompt=build_salary_prompt(profile, job),
            system_message=SALARY_SYSTEM_PROMPT,
            user_id=user_id,
            feature_name="salary_prediction"
        )
        response = self.completion_service.complete(request, timeout=self.timeout)

        parsed = parse_response(response.content, self.config)
        data = parsed.data
        if isinstance(data, list):
            data = next((item for item in data if isinstance(item, dict)), {})

        default_min, default_max = self.advertised_band(job)
        prediction = SalaryPrediction.from_response(data, default_min, default_max)

        if parsed.is_fallback:
            logger.warning(f"Salary prediction for job {job.id} fell back to defaults")

        return prediction

    def advertised_band(self, job: JobListing) -> Tuple[int, int]:
        band = self.range_parser.parse(job.salary_range)
        return band if band else (0, 0)
