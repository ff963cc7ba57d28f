import logging
from collections.abc import Callable
from typing import Any

import httpx
from tenacity import RetryCallState, retry, retry_if_exception, stop_after_attempt, wait_exponential_jitter

logger = logging.getLogger(__name__)

type RetryDecorator = Callable[[Callable[..., Any]], Callable[..., Any]]


def is_retryable(exc: BaseException) -> bool:
    """Transport failures, throttling and server errors are worth retrying; other 4xx responses are not."""
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        return status == 429 or status >= 500
    return False


def default_http_retry(label: str, *, attempts: int = 3) -> RetryDecorator:
    """Return a tenacity retry decorator configured for calls to the sports-data APIs.

    *label* is interpolated into the warning message emitted before each
    retry attempt, e.g. ``"Retrying <label> (attempt 2): <error>"``.
    """

    def _log_retry(retry_state: RetryCallState) -> None:
        logger.warning("Retrying %s (attempt %d): %s", label, retry_state.attempt_number, retry_state.outcome)

    return retry(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential_jitter(initial=1, max=10),
        retry=retry_if_exception(is_retryable),
        before_sleep=_log_retry,
        reraise=True,
    )
