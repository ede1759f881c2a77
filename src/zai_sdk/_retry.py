"""Retry policy for the HTTP transport."""

from __future__ import annotations

import random
import time
from collections.abc import Callable
from dataclasses import dataclass
from email.utils import parsedate_to_datetime

from zai_sdk._constants import (
    RETRY_INITIAL_DELAY,
    RETRY_JITTER,
    RETRY_MAX_DELAY,
    RETRY_MULTIPLIER,
)
from zai_sdk.exceptions import (
    APITimeoutError,
    NetworkError,
    RateLimitError,
    ServerError,
    ZaiError,
)

RETRYABLE_ERRORS: tuple[type[ZaiError], ...] = (
    NetworkError,
    APITimeoutError,
    ServerError,
    RateLimitError,
)


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff with jitter; honors Retry-After.

    The n-th retry waits ``initial_delay * multiplier ** (n - 1)`` seconds,
    capped at ``max_delay``, plus up to ``jitter`` of that delay. A server
    Retry-After hint raises the delay to at least the hinted value.
    """

    max_retries: int = 3
    initial_delay: float = RETRY_INITIAL_DELAY
    multiplier: float = RETRY_MULTIPLIER
    max_delay: float = RETRY_MAX_DELAY
    jitter: float = RETRY_JITTER

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def should_retry(self, error: ZaiError, attempt: int) -> bool:
        """Whether ``error`` from attempt number ``attempt`` may be retried."""
        return attempt < self.max_attempts and isinstance(error, RETRYABLE_ERRORS)

    def compute_backoff(
        self,
        attempt: int,
        *,
        retry_after: float | None = None,
        rand: Callable[[], float] = random.random,
    ) -> float:
        """Delay in seconds before the attempt that follows ``attempt``."""
        delay = self.initial_delay * (self.multiplier ** max(0, attempt - 1))
        delay = min(delay, self.max_delay)
        delay += delay * self.jitter * rand()
        if retry_after is not None:
            delay = max(delay, retry_after)
        return delay


def parse_retry_after(value: str | None, now: float | None = None) -> float | None:
    """Parse a Retry-After header given in seconds or as an HTTP date.

    Returns the delay in seconds, or None if the header is absent or invalid.
    """
    if not value:
        return None
    value = value.strip()
    try:
        seconds = float(value)
    except ValueError:
        pass
    else:
        return max(0.0, seconds)

    try:
        retry_at = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if retry_at is None:
        return None
    current = time.time() if now is None else now
    return max(0.0, retry_at.timestamp() - current)
