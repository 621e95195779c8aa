# jobmatch/ats/matcher.py
import re
import logging
from typing import List, Optional, Tuple

from jobmatch.config import MatchingConfig
from jobmatch.models import ResumeProfile
from jobmatch.ats.models import MustHaveKeyword, KeywordDensityResult
from jobmatch.utils import clamp_round

logger = logging.getLogger(__name__)


def normalize(text: str) -> str:
    """Lowercase, punctuation to spaces, collapsed whitespace"""
    text = re.sub(r'[^\w\s]', ' ', text or '')
    return re.sub(r'\s+', ' ', text).strip().lower()


def build_resume_text(profile: ResumeProfile) -> str:
    """Flattened, lowercased searchable text from a profile"""
    parts: List[str] = list(profile.skills)

    for exp in profile.experience:
        parts.extend([exp.title, exp.description, exp.company])

    for edu in profile.education:
        parts.extend([edu.degree, edu.field, edu.institution])

    return ' '.join(p or '' for p in parts).lower()


class KeywordMatcher:
    """
    Match must-have keywords against a profile's resume text
    """

    # Repeated use earns a bonus; the combined multiplier never exceeds this
    MAX_FREQUENCY_MULTIPLIER = 1.15

    def __init__(self, config: Optional[MatchingConfig] = None):
        self.config = config or MatchingConfig()

    def match_keywords(
        self,
        profile: ResumeProfile,
        keywords: List[MustHaveKeyword]
    ) -> KeywordDensityResult:
        """
        Weighted keyword coverage of the profile

        Returns:
            KeywordDensityResult with 0-100 score, matched phrases
            (key strengths) and missing phrases in keyword order
        """
        resume_text = build_resume_text(profile)
        resume_norm = normalize(resume_text)

        total_weight = 0.0
        matched_weight = 0.0
        key_strengths: List[str] = []
        missing: List[str] = []

        for keyword in keywords:
            total_weight += keyword.weight

            matched, count = self._match_single_keyword(keyword, resume_text, resume_norm)
            if not matched:
                missing.append(keyword.phrase)
                continue

            matched_weight += keyword.weight * self._frequency_multiplier(count)
            if len(key_strengths) < self.config.max_key_strengths:
                key_strengths.append(keyword.phrase)

        if total_weight > 0:
            score = clamp_round(matched_weight / total_weight * 100)
        else:
            score = 0

        logger.debug(
            f"Keyword density {score}/100: {len(keywords) - len(missing)} of "
            f"{len(keywords)} keywords matched"
        )

        return KeywordDensityResult(
            score=score,
            key_strengths=key_strengths,
            missing=missing,
            matched_weight=matched_weight,
            total_weight=total_weight
        )

    def _match_single_keyword(
        self,
        keyword: MustHaveKeyword,
        resume_text: str,
        resume_norm: str
    ) -> Tuple[bool, int]:
        """(matched, raw occurrence count) for the phrase, then its equivalents"""
        if self._phrase_matches(keyword.phrase, resume_text, resume_norm):
            return True, self._count_occurrences(keyword.phrase, resume_text)

        for equivalent in keyword.equivalents:
            if self._exact_match(equivalent, resume_text, resume_norm):
                return True, self._count_occurrences(equivalent, resume_text)

        return False, 0

    def _phrase_matches(self, phrase: str, resume_text: str, resume_norm: str) -> bool:
        return (
            self._exact_match(phrase, resume_text, resume_norm) or
            self._token_match(phrase, resume_norm)
        )

    def _exact_match(self, phrase: str, resume_text: str, resume_norm: str) -> bool:
        phrase_norm = normalize(phrase)
        phrase_lower = (phrase or '').lower()

        # A phrase made only of punctuation normalizes to '' and must match raw
        if phrase_norm and phrase_norm in resume_norm:
            return True
        return bool(phrase_lower) and phrase_lower in resume_text

    def _token_match(self, phrase: str, resume_norm: str) -> bool:
        """Every token present somewhere, in any order"""
        tokens = normalize(phrase).split()
        if not tokens:
            return False
        return all(len(t) >= 2 and t in resume_norm for t in tokens)

    def _count_occurrences(self, phrase: str, resume_text: str) -> int:
        if not phrase:
            return 0
        return len(re.findall(re.escape(phrase), resume_text, re.IGNORECASE))

    def _frequency_multiplier(self, count: int) -> float:
        if count >= 2:
            multiplier = 1.1
        elif count == 1:
            multiplier = 1.0
        else:
            multiplier = 0.0
        return min(multiplier, self.MAX_FREQUENCY_MULTIPLIER)
