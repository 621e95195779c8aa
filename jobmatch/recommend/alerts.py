# jobmatch/recommend/alerts.py
import time
import logging
from datetime import datetime
from typing import List, Optional, Any, Dict

from jobmatch.config import MatchingConfig
from jobmatch.models import ResumeProfile
from jobmatch.ai.completion_client import CompletionService, CompletionRequest
from jobmatch.ai.json_extract import parse_response
from jobmatch.ai.models import JobAlert, AlertCriteria, _strings, _amount
from jobmatch.recommend.prompts import ALERTS_SYSTEM_PROMPT, build_alerts_prompt

logger = logging.getLogger(__name__)


FREQUENCIES = ('daily', 'weekly', 'realtime')
DEFAULT_FREQUENCY = 'weekly'


def normalize_frequency(value: Any) -> str:
    if isinstance(value, str) and value.strip().lower() in FREQUENCIES:
        return value.strip().lower()
    return DEFAULT_FREQUENCY


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    if not text or text.lower() == 'null':
        return None
    return text


def _optional_amount(value: Any) -> Optional[int]:
    amount = _amount(value, -1)
    return amount if amount >= 0 else None


class JobAlertGenerator:
    """
    Suggest saved-search alerts for a profile, taking recent profile changes into account
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

    def generate(
        self,
        profile: ResumeProfile,
        previous_profile: Optional[ResumeProfile] = None,
        user_id: Optional[str] = None
    ) -> List[JobAlert]:
        """
        Generate alert criteria

        Args:
            profile: Current candidate profile
            previous_profile: Earlier version of the profile, if known
            user_id: Caller/session id forwarded to the service

        Returns:
            List of JobAlert; empty when the output is unusable

        Raises:
            CompletionServiceError: when the service cannot be reached
        """
        logger.info("Generating job alerts")

        request = CompletionRequest(
            prompt=build_alerts_prompt(profile, previous_profile),
            system_message=ALERTS_SYSTEM_PROMPT,
            user_id=user_id,
            feature_name="job_alerts"
        )
        response = self.completion_service.complete(request, timeout=self.timeout)

        parsed = parse_response(response.content, self.config)
        if parsed.is_fallback:
            logger.warning("Alert response unusable; no alerts generated")
            return []

        data = parsed.data
        if isinstance(data, dict):
            data = data['alerts'] if isinstance(data.get('alerts'), list) else [data]

        stamp = int(time.time() * 1000)
        now = datetime.now()
        alerts = []

        for item in data:
            if not isinstance(item, dict) or not isinstance(item.get('criteria'), dict):
                continue
            alerts.append(JobAlert(
                id=f"alert-{stamp}-{len(alerts)}",
                criteria=self._criteria(item['criteria']),
                frequency=normalize_frequency(item.get('frequency')),
                description=_optional_text(item.get('description')) or '',
                last_checked=now,
                active=True
            ))

        logger.info(f"Generated {len(alerts)} alerts")
        return alerts

    def _criteria(self, raw: Dict[str, Any]) -> AlertCriteria:
        keywords = raw.get('keywords')
        if isinstance(keywords, str):
            keywords = [keywords]

        return AlertCriteria(
            keywords=_strings(keywords),
            location=_optional_text(raw.get('location')),
            salary_min=_optional_amount(raw.get('salaryMin')),
            salary_max=_optional_amount(raw.get('salaryMax')),
            industry=_optional_text(raw.get('industry')),
            experience_level=_optional_text(raw.get('experienceLevel'))
        )
