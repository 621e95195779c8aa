# jobmatch/ai/completion_client.py
import logging
from dataclasses import dataclass
from typing import Optional, Dict, Any, Protocol

import requests
from tenacity import (
    Retrying,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception,
    before_sleep_log
)

from jobmatch.config import CompletionConfig
from jobmatch.exceptions import CompletionServiceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletionRequest:
    """One prompt for the completion service"""
    prompt: str
    system_message: str = ""
    model: Optional[str] = None        # client default when None
    user_id: Optional[str] = None
    feature_name: str = "job_matching"

    def to_payload(self, default_model: str) -> Dict[str, Any]:
        return {
            'model': self.model or default_model,
            'systemMessage': self.system_message,
            'prompt': self.prompt,
            'userId': self.user_id,
            'feature_name': self.feature_name,
        }


@dataclass(frozen=True)
class CompletionResponse:
    """Raw text returned by the completion service"""
    content: str = ""


class CompletionService(Protocol):
    """Anything that turns a CompletionRequest into a CompletionResponse"""

    def complete(
        self,
        request: CompletionRequest,
        timeout: Optional[float] = None
    ) -> CompletionResponse:
        ...


def _is_transient(exc: BaseException) -> bool:
    return isinstance(exc, CompletionServiceError) and exc.retryable


class CompletionClient:
    """
    HTTP client for the hosted completion endpoint

    Transient failures (connection errors, timeouts, 408/429/5xx) are retried
    with exponential backoff; anything else raises CompletionServiceError at once.
    A response that arrives is returned as-is, parsing is the caller's job.
    """

    def __init__(
        self,
        config: Optional[CompletionConfig] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize completion client

        Args:
            config: Endpoint, model, timeouts and retry policy
            session: requests session (a new one when None)
        """
        self.config = config or CompletionConfig.from_env()
        self.session = session or requests.Session()

    def complete(
        self,
        request: CompletionRequest,
        timeout: Optional[float] = None
    ) -> CompletionResponse:
        """
        Send one request, retrying transient failures

        Args:
            request: Prompt and metadata
            timeout: Seconds per attempt (ranking timeout when None)

        Returns:
            CompletionResponse

        Raises:
            CompletionServiceError: when the call fails after retries
        """
        timeout = timeout or self.config.ranking_timeout

        retrying = Retrying(
            stop=stop_after_attempt(self.config.max_retries + 1),
            wait=wait_exponential(
                multiplier=self.config.backoff_min,
                min=self.config.backoff_min,
                max=self.config.backoff_max
            ),
            retry=retry_if_exception(_is_transient),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True
        )

        return retrying(self._post, request, timeout)

    def _post(self, request: CompletionRequest, timeout: float) -> CompletionResponse:
        payload = request.to_payload(self.config.model)
        logger.debug(f"Calling completion service ({request.feature_name}) at {self.config.base_url}")

        try:
            response = self.session.post(
                self.config.base_url,
                json=payload,
                headers={'Content-Type': 'application/json'},
                timeout=timeout
            )
        except requests.Timeout as e:
            logger.error(f"Completion request timed out after {timeout}s")
            raise CompletionServiceError(
                f"Completion request timed out after {timeout}s",
                error_type="timeout",
                retryable=True
            ) from e
        except requests.ConnectionError as e:
            logger.error(f"Completion service unreachable: {e}")
            raise CompletionServiceError(
                f"Completion service unreachable: {e}",
                error_type="network",
                retryable=True
            ) from e
        except requests.RequestException as e:
            logger.error(f"Completion request failed: {e}")
            raise CompletionServiceError(str(e), error_type="unknown") from e

        self._raise_for_status(response)

        try:
            body = response.json()
        except ValueError:
            # Not an envelope; hand the text over and let extraction decide
            return CompletionResponse(content=response.text or "")

        if isinstance(body, dict):
            content = body.get('content')
            return CompletionResponse(content=content if isinstance(content, str) else "")

        return CompletionResponse(content=response.text or "")

    def _raise_for_status(self, response: requests.Response) -> None:
        status = response.status_code
        if status < 400:
            return

        if status in (408, 504):
            error_type, retryable = "timeout", True
        elif status == 429:
            error_type, retryable = "rate_limit", True
        elif status >= 500:
            error_type, retryable = "server", True
        else:
            error_type, retryable = "client", False

        logger.error(f"Completion service returned HTTP {status}")
        raise CompletionServiceError(
            f"Completion service returned HTTP {status}",
            error_type=error_type,
            status_code=status,
            retryable=retryable
        )

    def close(self):
        """Cleanup resources"""
        self.session.close()
