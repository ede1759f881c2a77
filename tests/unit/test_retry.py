"""Unit tests for the retry policy."""

from __future__ import annotations

from email.utils import formatdate

import pytest

from zai_sdk import (
    APITimeoutError,
    AuthenticationError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    SerializationError,
    ServerError,
    ValidationError,
    ZaiError,
)
from zai_sdk._retry import RetryPolicy, parse_retry_after


class TestShouldRetry:
    """Tests for RetryPolicy.should_retry()."""

    @pytest.mark.parametrize(
        "error",
        [NetworkError(), APITimeoutError(), ServerError(), RateLimitError()],
    )
    def test_transient_errors_are_retried(self, error: ZaiError) -> None:
        assert RetryPolicy(max_retries=3).should_retry(error, attempt=1)

    @pytest.mark.parametrize(
        "error",
        [ValidationError(), AuthenticationError(), NotFoundError(), SerializationError()],
    )
    def test_permanent_errors_are_not_retried(self, error: ZaiError) -> None:
        assert not RetryPolicy(max_retries=3).should_retry(error, attempt=1)

    def test_budget_is_respected(self) -> None:
        policy = RetryPolicy(max_retries=2)

        assert policy.max_attempts == 3
        assert policy.should_retry(ServerError(), attempt=2)
        assert not policy.should_retry(ServerError(), attempt=3)

    def test_zero_retries(self) -> None:
        assert not RetryPolicy(max_retries=0).should_retry(ServerError(), attempt=1)


class TestComputeBackoff:
    """Tests for RetryPolicy.compute_backoff()."""

    def test_exponential_without_jitter(self) -> None:
        policy = RetryPolicy()

        delays = [policy.compute_backoff(n, rand=lambda: 0.0) for n in range(1, 6)]

        assert delays == [0.5, 1.0, 2.0, 4.0, 8.0]

    def test_capped_at_max_delay(self) -> None:
        policy = RetryPolicy()

        assert policy.compute_backoff(10, rand=lambda: 0.0) == 8.0

    def test_jitter_adds_at_most_a_quarter(self) -> None:
        policy = RetryPolicy()

        assert policy.compute_backoff(1, rand=lambda: 1.0) == pytest.approx(0.625)
        assert 0.5 <= policy.compute_backoff(1) <= 0.625

    def test_retry_after_is_a_floor(self) -> None:
        policy = RetryPolicy()

        assert policy.compute_backoff(1, retry_after=3.0, rand=lambda: 0.0) == 3.0
        assert policy.compute_backoff(4, retry_after=1.0, rand=lambda: 0.0) == 4.0


class TestParseRetryAfter:
    """Tests for parse_retry_after()."""

    def test_seconds(self) -> None:
        assert parse_retry_after("2") == 2.0
        assert parse_retry_after(" 1.5 ") == 1.5

    def test_negative_seconds_clamp_to_zero(self) -> None:
        assert parse_retry_after("-4") == 0.0

    def test_http_date(self) -> None:
        now = 1_700_000_000.0
        header = formatdate(now + 30, usegmt=True)

        assert parse_retry_after(header, now=now) == pytest.approx(30.0)

    @pytest.mark.parametrize("value", [None, "", "soon"])
    def test_missing_or_invalid(self, value: str | None) -> None:
        assert parse_retry_after(value) is None
