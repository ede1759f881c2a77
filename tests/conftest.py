"""Pytest configuration for Z.ai SDK tests.

This file contains shared fixtures for all tests. HTTP traffic is mocked
with respx; no test talks to the real platform.

Run tests:
    uv run pytest tests/ -v
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from typing import Any

import pytest

from zai_sdk import ClientConfig, RecordingSink, TokenCache, ZaiClient
from zai_sdk._http import HTTPClient


class FakeClock:
    """Monotonic clock that only moves when slept on."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def sse_body(*events: Any, done: bool = True) -> bytes:
    """Build an SSE body with one ``data:`` event per item."""
    lines = []
    for event in events:
        data = event if isinstance(event, str) else json.dumps(event)
        lines.append(f"data: {data}\n\n")
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep ZAI_* variables from the developer's shell out of tests."""
    for name in (
        "ZAI_API_KEY",
        "ZAI_BASE_URL",
        "ZAI_TIMEOUT",
        "ZAI_MAX_RETRIES",
        "ZAI_DISABLE_TOKEN_CACHE",
        "ZAI_SOURCE_CHANNEL",
        "ZAI_ACCEPT_LANGUAGE",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def base_url() -> str:
    """Return test base URL."""
    return "https://api.example.test/v4"


@pytest.fixture
def api_key() -> str:
    """Return a well-formed test credential."""
    return "test-key-id.test-key-secret"


@pytest.fixture
def token_cache() -> TokenCache:
    """Return a token cache isolated from the process-wide one."""
    return TokenCache()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config(api_key: str, base_url: str) -> ClientConfig:
    return ClientConfig(api_key=api_key, base_url=base_url, timeout=30.0)


@pytest.fixture
def make_http(
    config: ClientConfig,
    token_cache: TokenCache,
    sink: RecordingSink,
    clock: FakeClock,
) -> Iterator[Callable[..., HTTPClient]]:
    """Factory for HTTPClient instances driven by the fake clock."""
    created: list[HTTPClient] = []

    def factory(**changes: Any) -> HTTPClient:
        http = HTTPClient(
            config.clone(**changes),
            token_cache=token_cache,
            attempt_sink=sink,
            sleep=clock.sleep,
            clock=clock,
        )
        created.append(http)
        return http

    yield factory
    for http in created:
        http.close()


@pytest.fixture
def client(
    api_key: str,
    base_url: str,
    token_cache: TokenCache,
    sink: RecordingSink,
) -> Iterator[ZaiClient]:
    """Client without retries for resource tests."""
    with ZaiClient(
        api_key=api_key,
        base_url=base_url,
        max_retries=0,
        token_cache=token_cache,
        attempt_sink=sink,
    ) as zai:
        yield zai
