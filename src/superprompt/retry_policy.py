"""Retry policy for model calls.

Only transient transport errors are retried. Provider errors and empty
responses surface immediately so callers can fall back or report them.
"""

from __future__ import annotations

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from .logging_config import get_logger

logger = get_logger(__name__)


LLM_TRANSIENT_EXCEPTIONS: tuple[type[Exception], ...] = (
    TimeoutError,
    ConnectionError,
)


def log_retry_attempt(retry_state: RetryCallState) -> None:
    """Log retry attempts with context."""
    exception = retry_state.outcome.exception() if retry_state.outcome else None
    wait_time = retry_state.next_action.sleep if retry_state.next_action else 0

    logger.warning(
        "retry_attempt",
        attempt=retry_state.attempt_number,
        wait_seconds=round(wait_time, 2),
        exception_type=type(exception).__name__ if exception else None,
        exception_msg=str(exception)[:100] if exception else None,
    )


# Retry policy for model calls (longer backoff for rate limits and slow providers)
llm_retry = retry(
    reraise=True,
    stop=stop_after_attempt(3),
    wait=wait_exponential_jitter(initial=2, max=30, jitter=2),
    retry=retry_if_exception_type(LLM_TRANSIENT_EXCEPTIONS),
    before_sleep=log_retry_attempt,
)
