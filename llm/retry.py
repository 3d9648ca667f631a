"""Retry policy with exponential backoff for LLM calls."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Matched by class name so the openai package stays optional.
_FAIL_FAST_NAMES = {
    "AuthenticationError",
    "PermissionDeniedError",
    "BadRequestError",
    "NotFoundError",
    "UnprocessableEntityError",
}

_RETRYABLE_NAMES = {
    "RateLimitError",
    "APITimeoutError",
    "APIConnectionError",
    "InternalServerError",
    "ServiceUnavailableError",
}


def _status_code(exc: BaseException) -> int | None:
    value = getattr(exc, "status_code", None)
    if value is None:
        value = getattr(getattr(exc, "response", None), "status_code", None)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value)


class RetryPolicy:
    """Exponential backoff capped at ``max_backoff_seconds``."""

    max_retries: int
    max_backoff_seconds: float
    sleep_fn: Callable[[float], None]

    def __init__(
        self,
        max_retries: int = 3,
        max_backoff_seconds: float = 8.0,
        sleep_fn: Callable[[float], None] | None = None,
    ) -> None:
        self.max_retries = max_retries
        self.max_backoff_seconds = max_backoff_seconds
        self.sleep_fn = sleep_fn or time.sleep

    def backoff_seconds(self, attempt_index: int) -> float:
        return min(float(1 << attempt_index), self.max_backoff_seconds)

    def execute(self, operation: Callable[[], T]) -> T:
        retries = 0
        while True:
            try:
                return operation()
            except Exception as exc:  # noqa: BLE001
                if not self.is_retryable(exc) or retries >= self.max_retries:
                    raise
                delay = self.backoff_seconds(retries)
                retries += 1
                logger.debug(
                    f"Retrying after {exc.__class__.__name__} "
                    f"(attempt {retries}/{self.max_retries}, sleeping {delay}s)"
                )
                self.sleep_fn(delay)

    def is_retryable(self, exc: Exception) -> bool:
        if isinstance(exc, ValueError):
            return False
        name = exc.__class__.__name__
        if name in _FAIL_FAST_NAMES:
            return False
        if isinstance(exc, (TimeoutError, ConnectionError)) or name in _RETRYABLE_NAMES:
            return True
        if name == "APIStatusError":
            status = _status_code(exc)
            return status is not None and (status >= 500 or status == 429)
        return False
