# jobmatch/config.py
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Tuple
import yaml


DEFAULT_STOP_WORDS: Tuple[str, ...] = (
    'the', 'and', 'for', 'with', 'from', 'this', 'that', 'have', 'will', 'your',
    'are', 'not', 'can', 'all', 'has', 'been', 'may', 'its', 'new', 'any', 'our',
    'out', 'use', 'one', 'two', 'etc', 'ability', 'required', 'preferred', 'must',
)

# Order matters: the first pattern that matches decides the required years.
# The range pattern captures the lower bound ("3-5 years" -> 3).
DEFAULT_TENURE_PATTERNS: Tuple[str, ...] = (
    r'(?:minimum|at least|min\.?)\s*(\d+)\+?\s*(?:years?|yrs?)',
    r'(\d+)\+\s*(?:years?|yrs?)',
    r'(\d+)\s*[-–]\s*\d+\s*(?:years?|yrs?)',
    r'(\d+)\s*(?:years?|yrs?)\s*(?:experience|of experience)',
)

RELOCATION_PATTERN = r'relocat|willing to move|open to (?:relocation|relocate)'


def _default_fallback() -> Dict[str, Any]:
    return {
        'mustHaveKeywords': [],
        'successProbability': {'overallProbability': 50},
        'overallProbability': 50,
    }


@dataclass(frozen=True)
class MatchingConfig:
    """Vocabulary, patterns and limits used by the scoring engine"""

    # Vocabulary
    stop_words: Tuple[str, ...] = DEFAULT_STOP_WORDS
    tenure_patterns: Tuple[str, ...] = DEFAULT_TENURE_PATTERNS
    relocation_pattern: str = RELOCATION_PATTERN

    # Keyword extraction
    max_keywords: int = 30
    max_external_keywords: int = 5
    max_equivalents: int = 2
    frequency_fallback_size: int = 20
    quoted_phrase_weight: float = 1.2
    title_word_weight: float = 1.1
    requirement_word_weight: float = 1.0
    requirement_bigram_weight: float = 1.1
    frequency_word_weight: float = 1.0

    # Pillar weights (sum to 1.0); the gap penalty is subtracted afterwards
    keyword_weight: float = 0.5
    title_experience_weight: float = 0.3
    formatting_weight: float = 0.2

    # Caps
    max_key_strengths: int = 10
    max_missing_penalized: int = 5
    missing_keyword_penalty: int = 6
    missing_penalty_cap: int = 25
    location_penalty: int = 10
    gap_penalty_cap: int = 40

    # Completion-assisted ranking
    max_jobs_per_prompt: int = 20
    description_prompt_chars: int = 800
    requirements_prompt_chars: int = 500
    neutral_score: int = 50
    fallback_response: Dict[str, Any] = field(default_factory=_default_fallback, hash=False)

    def __post_init__(self):
        # YAML gives lists; keep the vocabulary immutable
        object.__setattr__(self, 'stop_words', tuple(w.lower() for w in self.stop_words))
        object.__setattr__(self, 'tenure_patterns', tuple(self.tenure_patterns))

    @property
    def stop_word_set(self) -> frozenset:
        return frozenset(self.stop_words)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'MatchingConfig':
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in known})

    @classmethod
    def from_yaml(cls, path: str) -> 'MatchingConfig':
        """Load configuration from YAML file"""
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data.get('matching', {}))


@dataclass(frozen=True)
class CompletionConfig:
    """Where and how the completion service is called"""
    base_url: str = "http://localhost:3000/api/generate"
    model: str = "gpt-4o-mini"
    ranking_timeout: float = 60.0
    estimation_timeout: float = 45.0
    max_retries: int = 2
    backoff_min: float = 1.0
    backoff_max: float = 10.0

    @classmethod
    def from_env(cls) -> 'CompletionConfig':
        """
        Build config from environment

        AI_GENERATE_URL wins over AI_API_BASE (which gets /api/generate appended).
        """
        kwargs: Dict[str, Any] = {}

        generate_url = os.getenv('AI_GENERATE_URL')
        api_base = os.getenv('AI_API_BASE')
        if generate_url:
            kwargs['base_url'] = generate_url
        elif api_base:
            kwargs['base_url'] = f"{api_base.rstrip('/')}/api/generate"

        if os.getenv('AI_MODEL'):
            kwargs['model'] = os.environ['AI_MODEL']

        if os.getenv('AI_MAX_RETRIES'):
            kwargs['max_retries'] = int(os.environ['AI_MAX_RETRIES'])

        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: str) -> 'CompletionConfig':
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        known = {f.name for f in fields(cls)}
        section = data.get('completion', {}) or {}
        return cls(**{k: v for k, v in section.items() if k in known})


def get_config() -> MatchingConfig:
    """Get matching configuration"""
    config_path = os.getenv('JOBMATCH_CONFIG', 'config/matching.yaml')

    if os.path.exists(config_path):
        return MatchingConfig.from_yaml(config_path)
    return MatchingConfig()


def get_completion_config() -> CompletionConfig:
    """Completion settings from YAML when present, else environment"""
    config_path = os.getenv('JOBMATCH_CONFIG', 'config/matching.yaml')

    if os.path.exists(config_path):
        with open(config_path, 'r') as f:
            data = yaml.safe_load(f) or {}
        if data.get('completion'):
            return CompletionConfig.from_yaml(config_path)
    return CompletionConfig.from_env()
