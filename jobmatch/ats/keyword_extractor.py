# jobmatch/ats/keyword_extractor.py
import re
import logging
from typing import List, Set, Optional, Iterable
from collections import Counter

from jobmatch.config import MatchingConfig
from jobmatch.models import JobListing
from jobmatch.ats.models import MustHaveKeyword
from jobmatch.utils import strip_punctuation

logger = logging.getLogger(__name__)


QUOTED_PATTERN = re.compile(r'"([^"]+)"')
BULLET_PREFIX = re.compile(r'^[\s•\-*]+\s*')


class KeywordExtractor:
    """
    Extract weighted must-have phrases from a job listing

    Discovery order is priority order: quoted phrases, title words,
    requirement words and bigrams, then a word-frequency fallback.
    """

    def __init__(self, config: Optional[MatchingConfig] = None):
        self.config = config or MatchingConfig()
        self.stop_words = self.config.stop_word_set

    def extract(self, job: JobListing) -> List[MustHaveKeyword]:
        """
        Extract must-have keywords from a job listing

        Args:
            job: Job listing to scan

        Returns:
            Ordered list of MustHaveKeyword, capped at config.max_keywords
        """
        text = f"{job.title or ''} {job.requirements or ''} {job.description or ''}"

        keywords: List[MustHaveKeyword] = []
        seen: Set[str] = set()

        # 1. Quoted phrases (highest weight)
        self._add(keywords, seen, self._quoted_phrases(text), self.config.quoted_phrase_weight)

        # 2. Role terms from the title
        self._add(keywords, seen, self._title_words(job.title or ''), self.config.title_word_weight)

        # 3. Requirement lines: single words and adjacent pairs
        self._extract_requirement_terms(job.requirements or '', keywords, seen)

        # 4. Frequent words not captured yet
        self._add(keywords, seen, self._frequent_words(text, seen), self.config.frequency_word_weight)

        keywords = keywords[:self.config.max_keywords]
        logger.debug(f"Extracted {len(keywords)} must-have keywords for job {job.id}")
        return keywords

    def _add(
        self,
        keywords: List[MustHaveKeyword],
        seen: Set[str],
        phrases: Iterable[str],
        weight: float
    ) -> None:
        for phrase in phrases:
            if phrase and phrase not in seen:
                seen.add(phrase)
                keywords.append(MustHaveKeyword(phrase=phrase, weight=weight))

    def _quoted_phrases(self, text: str) -> List[str]:
        phrases = []
        for match in QUOTED_PATTERN.finditer(text):
            phrase = match.group(1).strip().lower()
            if 2 <= len(phrase) <= 50:
                phrases.append(phrase)
        return phrases

    def _title_words(self, title: str) -> List[str]:
        words = []
        for raw in title.split():
            word = strip_punctuation(raw).lower()
            if len(word) >= 2 and word not in self.stop_words:
                words.append(word)
        return words

    def _extract_requirement_terms(
        self,
        requirements: str,
        keywords: List[MustHaveKeyword],
        seen: Set[str]
    ) -> None:
        """Single words (weight 1.0) and bigrams (weight 1.1) from each requirement line"""
        lines = [BULLET_PREFIX.sub('', line).strip() for line in requirements.split('\n')]

        for line in filter(None, lines):
            words = [
                w for w in line.lower().split()
                if len(w) >= 2 and strip_punctuation(w) not in self.stop_words
            ]

            for i, raw in enumerate(words):
                word = strip_punctuation(raw)
                if len(word) >= 2:
                    self._add(keywords, seen, [word], self.config.requirement_word_weight)

                if i < len(words) - 1:
                    bigram = re.sub(r'[^\w\s]', '', f"{raw} {words[i + 1]}")
                    if len(bigram) >= 4:
                        self._add(keywords, seen, [bigram], self.config.requirement_bigram_weight)

    def _frequent_words(self, text: str, seen: Set[str]) -> List[str]:
        """Top words by frequency; ties keep first-seen order"""
        counts: Counter = Counter()

        for raw in text.lower().split():
            word = re.sub(r'[^a-z0-9]', '', raw)
            if len(word) >= 3 and word not in self.stop_words and re.search(r'[a-z]', word):
                counts[word] += 1

        candidates = [(w, c) for w, c in counts.items() if w not in seen]
        candidates.sort(key=lambda item: item[1], reverse=True)

        return [w for w, _ in candidates[:self.config.frequency_fallback_size]]
