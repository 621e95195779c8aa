# jobmatch/exceptions.py
from typing import Optional


class JobMatchError(Exception):
    """Base exception for the matching engine"""


class InvalidInputError(JobMatchError, ValueError):
    """Profile or job payload could not be turned into a model"""


class CompletionServiceError(JobMatchError):
    """
    Completion service call failed after retries

    Distinct from a response that arrived but could not be parsed;
    that case never raises and yields a fallback value instead.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        status_code: Optional[int] = None,
        retryable: bool = False
    ):
        super().__init__(message)
        self.error_type = error_type      # network, timeout, server, client, rate_limit, unknown
        self.status_code = status_code
        self.retryable = retryable

    def __repr__(self):
        return (
            f"<CompletionServiceError: {self.error_type} "
            f"status={self.status_code} retryable={self.retryable}>"
        )
