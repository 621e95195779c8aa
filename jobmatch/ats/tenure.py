# jobmatch/ats/tenure.py
import re
import logging
from typing import Optional, List, Pattern

from jobmatch.config import MatchingConfig

logger = logging.getLogger(__name__)


class TenureParser:
    """
    Extract required years of experience from job text
    """

    def __init__(self, config: Optional[MatchingConfig] = None):
        self.config = config or MatchingConfig()
        self.patterns: List[Pattern] = [
            re.compile(p, re.IGNORECASE) for p in self.config.tenure_patterns
        ]

    def parse(self, text: str) -> Optional[int]:
        """
        Extract required years

        Patterns are tried in order and the first match wins. A range such
        as "3-5 years" yields its lower bound.

        Returns:
            Years as int, or None when no pattern matches
        """
        if not text:
            return None

        for pattern in self.patterns:
            match = pattern.search(text)
            if match:
                try:
                    return int(match.group(1))
                except (ValueError, IndexError):
                    continue

        return None
