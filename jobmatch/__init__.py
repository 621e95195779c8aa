"""
Resume-to-job matching: ATS scoring, quick match and AI-assisted recommendations
"""

from jobmatch.config import MatchingConfig, CompletionConfig, get_config, get_completion_config
from jobmatch.exceptions import JobMatchError, CompletionServiceError, InvalidInputError
from jobmatch.models import ResumeProfile, JobListing, ExperienceEntry, EducationEntry

__version__ = "1.0.0"

__all__ = [
    'MatchingConfig',
    'CompletionConfig',
    'get_config',
    'get_completion_config',
    'JobMatchError',
    'CompletionServiceError',
    'InvalidInputError',
    'ResumeProfile',
    'JobListing',
    'ExperienceEntry',
    'EducationEntry',
]
