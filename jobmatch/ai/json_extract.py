# jobmatch/ai/json_extract.py
import copy
import json
import re
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from jobmatch.config import MatchingConfig

logger = logging.getLogger(__name__)


FENCE_PATTERN = re.compile(r'```(?:json|JSON)?\s*([\s\S]*?)```')

OPEN_BRACKET_PATTERN = re.compile(r'[\[{]')

_decoder = json.JSONDecoder()


def fallback_value(config: Optional[MatchingConfig] = None) -> Dict[str, Any]:
    """Fresh copy of the degenerate-but-valid result used when parsing fails"""
    config = config or MatchingConfig()
    return copy.deepcopy(config.fallback_response)


@dataclass(frozen=True)
class ParsedResponse:
    """
    Completion output after the single validation step

    Either parsed JSON (is_fallback False) or the fallback object.
    """
    data: Any
    is_fallback: bool = False

    @classmethod
    def valid(cls, data: Any) -> 'ParsedResponse':
        return cls(data=data, is_fallback=False)

    @classmethod
    def fallback(cls, config: Optional[MatchingConfig] = None) -> 'ParsedResponse':
        return cls(data=fallback_value(config), is_fallback=True)


def _first_json_value(text: str) -> Optional[Any]:
    """
    First top-level array, else first top-level object

    Scans opening brackets left to right; once a value decodes the scan
    resumes after it, so arrays nested inside an object are never
    candidates. Prose between and after values is ignored.
    """
    first_object = None
    pos = 0

    while True:
        match = OPEN_BRACKET_PATTERN.search(text, pos)
        if match is None:
            break
        try:
            value, end = _decoder.raw_decode(text, match.start())
        except ValueError:
            pos = match.start() + 1
            continue

        if isinstance(value, list):
            return value
        if first_object is None:
            first_object = value
        pos = end

    return first_object


def parse_response(text: Optional[str], config: Optional[MatchingConfig] = None) -> ParsedResponse:
    """
    Recover JSON from loosely formatted completion text

    Handles markdown fences, leading prose like "Here is the JSON:" and
    trailing commentary. Never raises.
    """
    trimmed = (text or '').strip()

    if trimmed:
        # Fenced blocks first, then the whole text
        candidates = [m.group(1).strip() for m in FENCE_PATTERN.finditer(trimmed)]
        candidates.append(trimmed)

        for candidate in candidates:
            value = _first_json_value(candidate)
            if value is not None:
                return ParsedResponse.valid(value)

    logger.warning(f"JSON parsing failed, using fallback. Raw text: {trimmed[:200]!r}")
    return ParsedResponse.fallback(config)


def extract_json(text: Optional[str], config: Optional[MatchingConfig] = None) -> Any:
    """Parsed JSON from completion text, or the fallback object"""
    return parse_response(text, config).data
