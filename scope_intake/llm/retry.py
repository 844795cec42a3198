# scope_intake/llm/retry.py
"""Backoff policy for question generation calls to Ollama."""

import logging

import httpx
from ollama import ResponseError
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

RETRYABLE_STATUSES = frozenset({408, 429, 500, 502, 503, 504})
OUT_OF_MEMORY_MARKER = "requires more system memory"


def is_retryable(exception: BaseException) -> bool:
    """
    Whether a failed question generation call is worth repeating.

    The server being down, a timed-out request (usually a cold model load)
    and transient HTTP statuses are retried. A model too large for the host
    fails the turn at once; the session reports it as a generation error.
    """
    if isinstance(exception, (ConnectionError, httpx.TimeoutException)):
        return True

    if isinstance(exception, ResponseError):
        if exception.status_code not in RETRYABLE_STATUSES:
            return False
        return OUT_OF_MEMORY_MARKER not in str(exception).lower()

    return False


# Three attempts, 4s..60s apart; the last error is re-raised unchanged
ollama_retry = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=4, max=60),
    retry=retry_if_exception(is_retryable),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
