# jobmatch/recommend/ranker.py
import logging
from typing import List, Optional, Dict, Any

from jobmatch.config import MatchingConfig
from jobmatch.models import ResumeProfile, JobListing
from jobmatch.ats.models import MustHaveKeyword
from jobmatch.ats.scorer import ATSScorer
from jobmatch.ai.completion_client import CompletionService, CompletionRequest
from jobmatch.ai.json_extract import parse_response, ParsedResponse
from jobmatch.ai.models import JobRecommendation, SalaryPrediction, SuccessProbability, _strings
from jobmatch.recommend.prompts import RANKING_SYSTEM_PROMPT, build_ranking_prompt
from jobmatch.recommend.salary import SalaryRangeParser
from jobmatch.utils import to_number, clamp_round

logger = logging.getLogger(__name__)


WHY_MATCH_PREFIX = "Your profile aligns with this role"


def reasons_to_why_match_sentence(reasons: Optional[List[str]]) -> str:
    """
    One sentence summarizing the reasons

    [] -> '', [a] -> "...: a.", [a, b] -> "...: a and b.",
    [a, b, c] -> "...: a, b, and c."
    """
    cleaned = [r.strip() for r in (reasons or []) if r and r.strip()]
    if not cleaned:
        return ''

    if len(cleaned) == 1:
        joined = cleaned[0]
    elif len(cleaned) == 2:
        joined = f"{cleaned[0]} and {cleaned[1]}"
    else:
        joined = f"{', '.join(cleaned[:-1])}, and {cleaned[-1]}"

    return f"{WHY_MATCH_PREFIX}: {joined}."


def resolve_match_score(entry: Dict[str, Any]) -> int:
    """
    matchScore when it is a positive number, else the success probability, else 0

    A legitimate 0 from the model is indistinguishable from a missing score
    and also falls through to the success probability.
    """
    raw = to_number(entry.get('matchScore'))
    if raw is not None and raw > 0:
        return clamp_round(raw)

    success = entry.get('successProbability')
    if isinstance(success, dict):
        probability = to_number(success.get('overallProbability'))
        if probability is not None:
            return clamp_round(probability)

    return 0


def keywords_from_ai(raw: Any, config: Optional[MatchingConfig] = None) -> List[MustHaveKeyword]:
    """
    Convert must-have keywords supplied by the completion service (or a caller)

    Accepts strings or {"phrase"|"keyword"|"term", "equivalents"} objects.
    First keyword weighs 1.1, the rest 1.0; capped at
    max_external_keywords with max_equivalents each.
    """
    config = config or MatchingConfig()
    if not isinstance(raw, list):
        return []

    keywords: List[MustHaveKeyword] = []
    seen = set()

    for item in raw:
        if isinstance(item, str):
            phrase, equivalents = item, []
        elif isinstance(item, dict):
            phrase = item.get('phrase') or item.get('keyword') or item.get('term') or ''
            equivalents = item.get('equivalents') or []
        else:
            continue

        phrase = str(phrase).strip()
        if not phrase or phrase.lower() in seen:
            continue
        seen.add(phrase.lower())

        if not isinstance(equivalents, list):
            equivalents = []
        equivalents = tuple(
            str(e).strip() for e in equivalents if e is not None and str(e).strip()
        )[:config.max_equivalents]

        keywords.append(MustHaveKeyword(
            phrase=phrase,
            weight=1.1 if not keywords else 1.0,
            equivalents=equivalents
        ))

        if len(keywords) >= config.max_external_keywords:
            break

    return keywords


class JobRecommendationRanker:
    """
    Rank jobs for a profile with the completion service and merge in ATS scores
    """

    def __init__(
        self,
        completion_service: CompletionService,
        config: Optional[MatchingConfig] = None,
        ats_scorer: Optional[ATSScorer] = None,
        timeout: float = 60.0
    ):
        """
        Args:
            completion_service: Anything with complete(request, timeout)
            config: Matching configuration
            ats_scorer: ATS engine used for every ranked job
            timeout: Seconds per completion attempt
        """
        self.completion_service = completion_service
        self.config = config or MatchingConfig()
        self.ats_scorer = ats_scorer or ATSScorer(self.config)
        self.timeout = timeout
        self.salary_parser = SalaryRangeParser()

    def rank(
        self,
        profile: ResumeProfile,
        jobs: List[JobListing],
        limit: int = 10,
        search_goal: Optional[str] = None,
        user_id: Optional[str] = None
    ) -> List[JobRecommendation]:
        """
        Rank jobs for a profile

        Args:
            profile: Candidate profile
            jobs: Job listings; only the first max_jobs_per_prompt are sent
            limit: Maximum recommendations returned
            search_goal: Free text steering the ranking (e.g. career switch)
            user_id: Caller/session id forwarded to the service

        Returns:
            Recommendations in the service's order, truncated to limit

        Raises:
            CompletionServiceError: when the service cannot be reached
        """
        if not jobs or limit <= 0:
            return []

        candidates = jobs[:self.config.max_jobs_per_prompt]
        logger.info(f"Ranking {len(candidates)} of {len(jobs)} jobs (limit {limit})")

        request = CompletionRequest(
            prompt=build_ranking_prompt(
                profile,
                candidates,
                search_goal,
                self.config.description_prompt_chars,
                self.config.requirements_prompt_chars
            ),
            system_message=RANKING_SYSTEM_PROMPT,
            user_id=user_id,
            feature_name="job_matching"
        )
        response = self.completion_service.complete(request, timeout=self.timeout)
        parsed = parse_response(response.content, self.config)

        if parsed.is_fallback:
            logger.warning("Ranking response unusable; no AI recommendations")

        jobs_by_id = {}
        for job in candidates:
            jobs_by_id.setdefault(str(job.id), job)

        recommendations: List[JobRecommendation] = []
        seen_ids = set()

        for entry in self._entries(parsed):
            job_id = entry.get('jobId')
            job = jobs_by_id.get(str(job_id)) if job_id is not None else None
            if job is None or job.id in seen_ids:
                continue
            seen_ids.add(job.id)

            recommendations.append(self._build_recommendation(profile, job, entry))

            if len(recommendations) >= limit:
                break

        logger.info(f"Built {len(recommendations)} recommendations")
        return recommendations

    def _entries(self, parsed: ParsedResponse) -> List[Dict[str, Any]]:
        data = parsed.data
        if isinstance(data, dict):
            if isinstance(data.get('recommendations'), list):
                data = data['recommendations']
            else:
                data = [data]
        return [entry for entry in data if isinstance(entry, dict)]

    def _build_recommendation(
        self,
        profile: ResumeProfile,
        job: JobListing,
        entry: Dict[str, Any]
    ) -> JobRecommendation:
        keywords = keywords_from_ai(entry.get('mustHaveKeywords'), self.config)

        # AI keywords replace the locally extracted list when present
        ats_result = self.ats_scorer.score(profile, job, keywords or None)

        reasons = _strings(entry.get('reasons'))

        confidence = to_number(entry.get('confidence'))

        salary = None
        if isinstance(entry.get('salaryPrediction'), dict):
            band = self.salary_parser.parse(job.salary_range) or (0, 0)
            salary = SalaryPrediction.from_response(entry['salaryPrediction'], *band)

        success = None
        if isinstance(entry.get('successProbability'), dict):
            success = SuccessProbability.from_response(entry['successProbability'])

        return JobRecommendation(
            job=job,
            match_score=resolve_match_score(entry),
            ats_score=ats_result.ats_score,
            confidence=clamp_round(confidence) if confidence is not None else self.config.neutral_score,
            reasons=reasons,
            why_match=reasons_to_why_match_sentence(reasons),
            salary_prediction=salary,
            success_probability=success,
            recommended_actions=_strings(entry.get('recommendedActions')),
            ats_result=ats_result
        )
