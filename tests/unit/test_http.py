"""Unit tests for the HTTP transport: headers, retries, deadlines, cancellation."""

from __future__ import annotations

import json
import re
import threading
from collections.abc import Callable, Iterator
from typing import Any

import httpx
import jwt
import pytest
import respx

from zai_sdk import (
    APITimeoutError,
    AuthenticationError,
    CallOptions,
    CancellationError,
    CancellationToken,
    ClientConfig,
    NetworkError,
    RateLimitError,
    RecordingSink,
    SerializationError,
    ServerError,
    TokenCache,
    ValidationError,
)
from zai_sdk._http import FilePart, HTTPClient, RequestDescriptor, join_url
from zai_sdk.types.chat import ChatCompletionRequest, Message

from conftest import FakeClock

MakeHTTP = Callable[..., HTTPClient]

OK_BODY = {"id": "ok-1", "value": 42}


class TrackedBody(httpx.SyncByteStream):
    """Response body that remembers whether it was closed."""

    def __init__(self, content: bytes) -> None:
        self._content = content
        self.closed = False

    def __iter__(self) -> Iterator[bytes]:
        yield self._content

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def tracked_http(
    config: ClientConfig,
    token_cache: TokenCache,
    clock: FakeClock,
) -> Iterator[tuple[HTTPClient, list[TrackedBody], list[httpx.Response]]]:
    """HTTPClient over a mock transport that serves queued responses.

    Yields the client, the bodies handed out so far, and the queue to fill.
    """
    bodies: list[TrackedBody] = []
    queue: list[httpx.Response] = []

    def handler(request: httpx.Request) -> httpx.Response:
        queued = queue.pop(0)
        body = TrackedBody(queued.content)
        bodies.append(body)
        return httpx.Response(queued.status_code, headers=queued.headers, stream=body)

    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    http = HTTPClient(
        config,
        http_client=http_client,
        token_cache=token_cache,
        sleep=clock.sleep,
        clock=clock,
    )
    yield http, bodies, queue
    http.close()
    http_client.close()


# =============================================================================
# URL and Request Building
# =============================================================================


class TestJoinUrl:
    """Tests for join_url()."""

    @pytest.mark.parametrize(
        ("base", "path"),
        [
            ("https://api.example.test/v4", "/chat/completions"),
            ("https://api.example.test/v4/", "/chat/completions"),
            ("https://api.example.test/v4", "chat/completions"),
            ("https://api.example.test/v4/", "chat/completions"),
        ],
    )
    def test_exactly_one_slash(self, base: str, path: str) -> None:
        assert join_url(base, path) == "https://api.example.test/v4/chat/completions"


class TestRequestHeaders:
    """Tests for the headers sent with every request."""

    @respx.mock
    def test_standard_headers(self, base_url: str, make_http: MakeHTTP) -> None:
        route = respx.post(f"{base_url}/chat/completions").mock(
            return_value=httpx.Response(200, json=OK_BODY)
        )
        http = make_http()

        http.post("/chat/completions", dict, json={"model": "glm-4.6"})

        request = route.calls.last.request
        assert request.headers["Accept"] == "application/json"
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["User-Agent"].startswith("zai-sdk-python/")
        assert request.headers["x-source-channel"] == "python-sdk"
        assert request.headers["Accept-Language"] == "en-US,en"
        assert re.fullmatch(r"[0-9a-f]{32}", request.headers["X-Request-Id"])

    @respx.mock
    def test_bearer_token_is_signed_jwt(self, base_url: str, make_http: MakeHTTP) -> None:
        route = respx.get(f"{base_url}/files").mock(
            return_value=httpx.Response(200, json=OK_BODY)
        )
        http = make_http()

        http.get("/files", dict)

        scheme, token = route.calls.last.request.headers["Authorization"].split(" ", 1)
        assert scheme == "Bearer"
        assert jwt.get_unverified_header(token)["sign_type"] == "SIGN"
        claims = jwt.decode(
            token,
            "test-key-secret",
            algorithms=["HS256"],
            options={"verify_exp": False},
        )
        assert claims["api_key"] == "test-key-id"

    @respx.mock
    def test_call_options_headers(self, base_url: str, make_http: MakeHTTP) -> None:
        route = respx.get(f"{base_url}/files").mock(
            return_value=httpx.Response(200, json=OK_BODY)
        )
        http = make_http()
        options = CallOptions(
            accept_language="zh-CN,zh",
            extra_headers={"X-Custom": "yes", "Authorization": "Bearer spoofed"},
        )

        http.get("/files", dict, options=options)

        request = route.calls.last.request
        assert request.headers["Accept-Language"] == "zh-CN,zh"
        assert request.headers["X-Custom"] == "yes"
        assert request.headers["Authorization"] != "Bearer spoofed"

    @respx.mock
    def test_model_body_omits_unset_fields(self, base_url: str, make_http: MakeHTTP) -> None:
        route = respx.post(f"{base_url}/chat/completions").mock(
            return_value=httpx.Response(200, json=OK_BODY)
        )
        http = make_http()
        request = ChatCompletionRequest(model="glm-4.6", messages=[Message.user("Hi")])

        http.post("/chat/completions", dict, json=request)

        body = json.loads(route.calls.last.request.content)
        assert body == {"model": "glm-4.6", "messages": [{"role": "user", "content": "Hi"}]}

    @respx.mock
    def test_query_params_skip_none(self, base_url: str, make_http: MakeHTTP) -> None:
        route = respx.get(f"{base_url}/batches").mock(
            return_value=httpx.Response(200, json=OK_BODY)
        )
        http = make_http()

        http.get("/batches", dict, params=[("after", None), ("limit", 5)])

        assert dict(route.calls.last.request.url.params) == {"limit": "5"}

    @respx.mock
    def test_multipart_body(self, base_url: str, make_http: MakeHTTP) -> None:
        route = respx.post(f"{base_url}/files/ocr").mock(
            return_value=httpx.Response(200, json=OK_BODY)
        )
        http = make_http()

        http.post(
            "/files/ocr",
            dict,
            files={"file": FilePart(b"\x89PNG-bytes", "note.png")},
            data={"tool_type": "hand_write", "probability": True, "language_type": None},
        )

        request = route.calls.last.request
        assert request.headers["Content-Type"].startswith("multipart/form-data")
        body = request.read()
        assert b'name="tool_type"' in body
        assert b"hand_write" in body
        assert b'name="probability"\r\n\r\ntrue' in body
        assert b"language_type" not in body
        assert b'filename="note.png"' in body
        assert b"Content-Type: image/png" in body
        assert b"\x89PNG-bytes" in body


class TestFilePart:
    """Tests for FilePart content type resolution."""

    def test_guessed_from_filename(self) -> None:
        assert FilePart(b"", "audio.wav").resolved_content_type() in (
            "audio/wav",
            "audio/x-wav",
        )

    def test_unknown_extension(self) -> None:
        assert FilePart(b"", "blob.zzz").resolved_content_type() == "application/octet-stream"

    def test_explicit_type_wins(self) -> None:
        part = FilePart(b"", "doc.pdf", content_type="application/x-custom")
        assert part.resolved_content_type() == "application/x-custom"


# =============================================================================
# Responses
# =============================================================================


class TestResponses:
    """Tests for decoding and raw responses."""

    @respx.mock
    def test_invalid_json_raises_serialization_error(
        self, base_url: str, make_http: MakeHTTP
    ) -> None:
        respx.get(f"{base_url}/files").mock(return_value=httpx.Response(200, text="not json"))
        http = make_http()

        with pytest.raises(SerializationError) as exc_info:
            http.get("/files", dict)

        assert exc_info.value.body == "not json"

    @respx.mock
    def test_request_raw(self, base_url: str, make_http: MakeHTTP) -> None:
        respx.get(f"{base_url}/files/f-1/content").mock(
            return_value=httpx.Response(
                200,
                content=b"line-1\nline-2\n",
                headers={"Content-Type": "application/jsonl", "X-Request-ID": "srv-9"},
            )
        )
        http = make_http()

        response = http.request_raw(RequestDescriptor("GET", "/files/f-1/content"))

        assert response.status_code == 200
        assert response.content == b"line-1\nline-2\n"
        assert response.content_type == "application/jsonl"
        assert response.request_id == "srv-9"

    @respx.mock
    def test_error_carries_server_request_id(
        self, base_url: str, make_http: MakeHTTP
    ) -> None:
        respx.post(f"{base_url}/chat/completions").mock(
            return_value=httpx.Response(
                400,
                json={"error": {"code": "1211", "message": "Model not found"}},
                headers={"X-Request-ID": "srv-1"},
            )
        )
        http = make_http()

        with pytest.raises(ValidationError) as exc_info:
            http.post("/chat/completions", dict, json={"model": "nope"})

        assert exc_info.value.message == "Model not found"
        assert exc_info.value.code == "1211"
        assert exc_info.value.request_id == "srv-1"
        assert exc_info.value.attempts == 1

    def test_success_body_is_closed(
        self, tracked_http: tuple[HTTPClient, list[TrackedBody], list[httpx.Response]]
    ) -> None:
        http, bodies, queue = tracked_http
        queue.append(httpx.Response(200, json=OK_BODY))

        assert http.get("/files", dict) == OK_BODY
        assert [body.closed for body in bodies] == [True]

    def test_error_bodies_are_closed(
        self, tracked_http: tuple[HTTPClient, list[TrackedBody], list[httpx.Response]]
    ) -> None:
        http, bodies, queue = tracked_http
        queue.extend(
            [
                httpx.Response(503, json={"message": "busy"}),
                httpx.Response(400, json={"error": {"code": "1214", "message": "bad"}}),
            ]
        )

        with pytest.raises(ValidationError):
            http.post("/chat/completions", dict, json={})

        assert [body.closed for body in bodies] == [True, True]

    def test_undecodable_body_is_closed(
        self, tracked_http: tuple[HTTPClient, list[TrackedBody], list[httpx.Response]]
    ) -> None:
        http, bodies, queue = tracked_http
        queue.append(httpx.Response(200, text="not json"))

        with pytest.raises(SerializationError):
            http.get("/files", dict)

        assert bodies[0].closed

    @respx.mock
    def test_new_sink_receives_records(
        self, base_url: str, config: ClientConfig, token_cache: TokenCache
    ) -> None:
        respx.get(f"{base_url}/files").mock(return_value=httpx.Response(200, json=OK_BODY))
        sink = RecordingSink()
        http = HTTPClient(config, token_cache=token_cache, attempt_sink=sink)
        try:
            http.get("/files", dict)
        finally:
            http.close()

        assert len(sink) == 1
        assert sink.records[0].status == 200


# =============================================================================
# Retries and Deadlines
# =============================================================================


class TestRetries:
    """Tests for the retry loop."""

    @respx.mock
    def test_retries_server_error_then_succeeds(
        self,
        base_url: str,
        make_http: MakeHTTP,
        clock: FakeClock,
        sink: RecordingSink,
    ) -> None:
        route = respx.post(f"{base_url}/chat/completions").mock(
            side_effect=[
                httpx.Response(503, json={"message": "busy"}),
                httpx.Response(200, json=OK_BODY),
            ]
        )
        http = make_http()

        result = http.post("/chat/completions", dict, json={"model": "glm-4.6"})

        assert result == OK_BODY
        assert route.call_count == 2
        assert len(clock.sleeps) == 1
        assert 0.5 <= clock.sleeps[0] <= 0.625
        assert [r.status for r in sink.records] == [503, 200]
        assert sink.records[0].retry_reason == "server-error"
        assert sink.records[1].retry_reason is None
        assert [r.attempt for r in sink.records] == [1, 2]

    @respx.mock
    def test_retry_after_is_honored(
        self, base_url: str, make_http: MakeHTTP, clock: FakeClock
    ) -> None:
        respx.post(f"{base_url}/chat/completions").mock(
            side_effect=[
                httpx.Response(503, headers={"Retry-After": "1"}),
                httpx.Response(200, json=OK_BODY),
            ]
        )
        http = make_http()

        http.post("/chat/completions", dict, json={})

        assert clock.sleeps[0] >= 1.0

    @respx.mock
    def test_rate_limit_is_retried(
        self, base_url: str, make_http: MakeHTTP, clock: FakeClock
    ) -> None:
        route = respx.get(f"{base_url}/files").mock(
            side_effect=[
                httpx.Response(429, json={"message": "slow down"}),
                httpx.Response(200, json=OK_BODY),
            ]
        )
        http = make_http()

        assert http.get("/files", dict) == OK_BODY
        assert route.call_count == 2

    @respx.mock
    def test_gives_up_after_max_retries(
        self, base_url: str, make_http: MakeHTTP, clock: FakeClock
    ) -> None:
        route = respx.post(f"{base_url}/chat/completions").mock(
            return_value=httpx.Response(500, json={"message": "internal"})
        )
        http = make_http(max_retries=2)

        with pytest.raises(ServerError) as exc_info:
            http.post("/chat/completions", dict, json={})

        assert route.call_count == 3
        assert exc_info.value.attempts == 3
        assert len(clock.sleeps) == 2

    @respx.mock
    def test_call_option_overrides_retry_budget(
        self, base_url: str, make_http: MakeHTTP
    ) -> None:
        route = respx.post(f"{base_url}/chat/completions").mock(
            return_value=httpx.Response(500)
        )
        http = make_http(max_retries=3)

        with pytest.raises(ServerError):
            http.post("/chat/completions", dict, json={}, options=CallOptions(max_retries=0))

        assert route.call_count == 1

    @respx.mock
    def test_client_errors_are_not_retried(
        self, base_url: str, make_http: MakeHTTP, clock: FakeClock
    ) -> None:
        route = respx.post(f"{base_url}/chat/completions").mock(
            return_value=httpx.Response(400, json={"message": "bad"})
        )
        http = make_http()

        with pytest.raises(ValidationError):
            http.post("/chat/completions", dict, json={})

        assert route.call_count == 1
        assert clock.sleeps == []

    @respx.mock
    def test_network_error_is_retried(
        self, base_url: str, make_http: MakeHTTP, sink: RecordingSink
    ) -> None:
        route = respx.get(f"{base_url}/files").mock(
            side_effect=[
                httpx.ConnectError("connection refused"),
                httpx.Response(200, json=OK_BODY),
            ]
        )
        http = make_http()

        assert http.get("/files", dict) == OK_BODY
        assert route.call_count == 2
        assert sink.records[0].status is None
        assert sink.records[0].retry_reason == "network-error"

    @respx.mock
    def test_network_error_exhausted(self, base_url: str, make_http: MakeHTTP) -> None:
        respx.get(f"{base_url}/files").mock(side_effect=httpx.ConnectError("refused"))
        http = make_http(max_retries=1)

        with pytest.raises(NetworkError) as exc_info:
            http.get("/files", dict)

        assert exc_info.value.attempts == 2
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @respx.mock
    def test_read_timeout_maps_to_timeout_error(
        self, base_url: str, make_http: MakeHTTP
    ) -> None:
        respx.get(f"{base_url}/files").mock(side_effect=httpx.ReadTimeout("slow"))
        http = make_http(max_retries=0)

        with pytest.raises(APITimeoutError):
            http.get("/files", dict)

    @respx.mock
    def test_idempotency_key_reused_across_attempts(
        self, base_url: str, make_http: MakeHTTP
    ) -> None:
        route = respx.post(f"{base_url}/batches").mock(
            side_effect=[httpx.Response(502), httpx.Response(200, json=OK_BODY)]
        )
        http = make_http()

        http.post("/batches", dict, json={}, options=CallOptions(idempotency_key="idem-1"))

        ids = [call.request.headers["X-Request-Id"] for call in route.calls]
        assert ids == ["idem-1", "idem-1"]

    @respx.mock
    def test_fresh_request_id_per_attempt(self, base_url: str, make_http: MakeHTTP) -> None:
        route = respx.post(f"{base_url}/batches").mock(
            side_effect=[httpx.Response(502), httpx.Response(200, json=OK_BODY)]
        )
        http = make_http()

        http.post("/batches", dict, json={})

        first, second = (call.request.headers["X-Request-Id"] for call in route.calls)
        assert first != second

    @respx.mock
    def test_request_ids_unique_across_calls(self, base_url: str, make_http: MakeHTTP) -> None:
        route = respx.get(f"{base_url}/files").mock(
            return_value=httpx.Response(200, json=OK_BODY)
        )
        http = make_http()

        for _ in range(1000):
            http.get("/files", dict)

        ids = {call.request.headers["X-Request-Id"] for call in route.calls}
        assert len(ids) == 1000


class TestDeadline:
    """Tests for the total call deadline."""

    @respx.mock
    def test_backoff_past_deadline_raises_timeout(
        self, base_url: str, make_http: MakeHTTP, clock: FakeClock
    ) -> None:
        route = respx.post(f"{base_url}/chat/completions").mock(
            return_value=httpx.Response(503)
        )
        http = make_http(timeout=1.0, max_retries=5)

        with pytest.raises(APITimeoutError) as exc_info:
            http.post("/chat/completions", dict, json={})

        # First backoff (0.5-0.625s) fits; the second (>= 1s) would not.
        assert route.call_count == 2
        assert exc_info.value.attempts == 2
        assert isinstance(exc_info.value.__cause__, ServerError)
        assert clock.now < 1.0

    @respx.mock
    def test_retry_after_past_deadline_raises_timeout(
        self, base_url: str, make_http: MakeHTTP, clock: FakeClock
    ) -> None:
        route = respx.get(f"{base_url}/files").mock(
            return_value=httpx.Response(429, headers={"Retry-After": "60"})
        )
        http = make_http()

        with pytest.raises(APITimeoutError) as exc_info:
            http.get("/files", dict, options=CallOptions(timeout=10.0))

        assert route.call_count == 1
        assert isinstance(exc_info.value.__cause__, RateLimitError)
        assert clock.sleeps == []


# =============================================================================
# Credentials
# =============================================================================


class TestTokenInvalidation:
    """Tests for token handling on 401."""

    @respx.mock
    def test_unauthorized_invalidates_cached_token(
        self,
        base_url: str,
        make_http: MakeHTTP,
        token_cache: TokenCache,
    ) -> None:
        route = respx.get(f"{base_url}/files").mock(
            side_effect=[
                httpx.Response(200, json=OK_BODY),
                httpx.Response(401, json={"error": {"code": "1001", "message": "expired"}}),
            ]
        )
        http = make_http(disable_token_cache=False)

        http.get("/files", dict)
        assert "test-key-id" in token_cache

        with pytest.raises(AuthenticationError) as exc_info:
            http.get("/files", dict)

        assert exc_info.value.code == "1001"
        assert "test-key-id" not in token_cache
        assert route.call_count == 2

    @respx.mock
    def test_cached_token_reused(self, base_url: str, make_http: MakeHTTP) -> None:
        route = respx.get(f"{base_url}/files").mock(
            return_value=httpx.Response(200, json=OK_BODY)
        )
        http = make_http(disable_token_cache=False)

        http.get("/files", dict)
        http.get("/files", dict)

        first, second = (call.request.headers["Authorization"] for call in route.calls)
        assert first == second


# =============================================================================
# Cancellation
# =============================================================================


class TestCancellation:
    """Tests for cancelling calls."""

    @respx.mock
    def test_cancelled_before_send(self, base_url: str, make_http: MakeHTTP) -> None:
        route = respx.get(f"{base_url}/files").mock(
            return_value=httpx.Response(200, json=OK_BODY)
        )
        http = make_http()
        token = CancellationToken()
        token.cancel()

        with pytest.raises(CancellationError) as exc_info:
            http.get("/files", dict, options=CallOptions(cancellation=token))

        assert not route.called
        assert exc_info.value.attempts == 0

    @respx.mock
    def test_cancel_during_backoff(self, base_url: str, make_http: MakeHTTP) -> None:
        route = respx.get(f"{base_url}/files").mock(return_value=httpx.Response(503))
        http = make_http(max_retries=5)
        token = CancellationToken()
        timer = threading.Timer(0.05, token.cancel)
        timer.start()

        try:
            with pytest.raises(CancellationError):
                http.get("/files", dict, options=CallOptions(cancellation=token))
        finally:
            timer.cancel()

        assert route.call_count == 1

    @respx.mock
    def test_token_without_cancel_does_not_interfere(
        self, base_url: str, make_http: MakeHTTP
    ) -> None:
        respx.get(f"{base_url}/files").mock(return_value=httpx.Response(200, json=OK_BODY))
        http = make_http()
        token = CancellationToken()

        result: Any = http.get("/files", dict, options=CallOptions(cancellation=token))

        assert result == OK_BODY
        assert not token.cancelled
