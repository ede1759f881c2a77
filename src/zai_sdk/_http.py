"""Internal HTTP client for the Z.ai SDK.

:class:`HTTPClient` turns a :class:`RequestDescriptor` into authenticated
``httpx`` requests, retries transient failures within the call's deadline,
and either decodes the JSON body or hands the open body to a
:class:`~zai_sdk._streaming.Stream`.
"""

from __future__ import annotations

import logging
import mimetypes
import threading
import time
import uuid
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeVar

import httpx

from zai_sdk._constants import (
    CONTENT_TYPE_EVENT_STREAM,
    CONTENT_TYPE_JSON,
    CONTENT_TYPE_OCTET_STREAM,
    HEADER_REQUEST_ID,
    HEADER_SOURCE_CHANNEL,
    RESPONSE_REQUEST_ID_HEADERS,
    USER_AGENT,
)
from zai_sdk._decoding import decode_json, encode_json
from zai_sdk._retry import RetryPolicy, parse_retry_after
from zai_sdk._streaming import Stream
from zai_sdk.auth import TokenCache, TokenProvider
from zai_sdk.config import ClientConfig
from zai_sdk.exceptions import (
    APITimeoutError,
    AuthenticationError,
    CancellationError,
    NetworkError,
    ZaiError,
    decode_error,
)
from zai_sdk.observability import AttemptRecord, AttemptSink, null_sink
from zai_sdk.options import CallOptions, CancellationToken

logger = logging.getLogger(__name__)

T = TypeVar("T")

_DEFAULT_OPTIONS = CallOptions()


# =============================================================================
# Request Description
# =============================================================================


@dataclass(frozen=True)
class FilePart:
    """A file sent as one part of a multipart body.

    ``content`` is raw bytes or a binary file object. The content type is
    guessed from the filename when not given.
    """

    content: Any
    filename: str
    content_type: str | None = None

    def resolved_content_type(self) -> str:
        if self.content_type:
            return self.content_type
        guessed, _ = mimetypes.guess_type(self.filename)
        return guessed or CONTENT_TYPE_OCTET_STREAM


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything needed to issue one logical call.

    Exactly one body style applies: ``json`` for a JSON body, ``files`` (with
    optional scalar ``data`` fields) for multipart, or neither for no body.
    """

    method: str
    path: str
    params: Sequence[tuple[str, Any]] = ()
    headers: Mapping[str, str] = field(default_factory=dict)
    json: Any = None
    files: Mapping[str, FilePart] | None = None
    data: Mapping[str, Any] | None = None
    stream: bool = False


@dataclass(frozen=True)
class APIResponse:
    """A fully read, closed response."""

    status_code: int
    headers: httpx.Headers
    content: bytes
    elapsed: float
    request_id: str | None = None

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")


def join_url(base_url: str, path: str) -> str:
    """Join base URL and path with exactly one slash between them."""
    if not path:
        return base_url.rstrip("/")
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if hasattr(value, "value") and isinstance(value.value, str):
        return value.value
    return str(value)


def _response_request_id(response: httpx.Response) -> str | None:
    for name in RESPONSE_REQUEST_ID_HEADERS:
        value = response.headers.get(name)
        if value:
            return value
    return None


# =============================================================================
# HTTP Client
# =============================================================================


class HTTPClient:
    """HTTP client with token management, retries, and deadlines.

    One instance is shared by every resource of a client and is safe for
    concurrent use.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        http_client: httpx.Client | None = None,
        token_cache: TokenCache | None = None,
        attempt_sink: AttemptSink | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize HTTP client.

        Args:
            config: Validated client configuration
            http_client: Pre-built httpx client (connection pool) to use
            token_cache: Token cache; defaults to the process-wide cache
            attempt_sink: Receives one AttemptRecord per attempt
            sleep: Backoff sleep used when the call has no cancellation token
            clock: Monotonic clock used for deadlines
        """
        self.config = config
        self.base_url = config.base_url
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=config.timeout)
        self._tokens = TokenProvider(
            config.api_key,
            use_cache=not config.disable_token_cache,
            cache=token_cache,
        )
        self._sink = attempt_sink if attempt_sink is not None else null_sink
        self._sleep = sleep
        self._clock = clock

    def close(self) -> None:
        """Close the HTTP client."""
        if self._owns_client:
            self._client.close()

    @property
    def tokens(self) -> TokenProvider:
        return self._tokens

    # -------------------------------------------------------------------------
    # Public request API
    # -------------------------------------------------------------------------

    def request(
        self,
        descriptor: RequestDescriptor,
        cast_to: type[T],
        options: CallOptions | None = None,
    ) -> T:
        """Perform a call and decode its JSON body into ``cast_to``.

        Raises:
            ZaiError: On any failure; see the exceptions module for kinds
        """
        raw = self.request_raw(descriptor, options)
        return decode_json(raw.content, cast_to, request_id=raw.request_id)

    def request_raw(
        self,
        descriptor: RequestDescriptor,
        options: CallOptions | None = None,
    ) -> APIResponse:
        """Perform a call and return the fully read response."""
        options = options or _DEFAULT_OPTIONS
        response, request_id = self._send_with_retries(descriptor, options)
        started = self._clock()
        unregister = self._watch(options.cancellation, response.close)
        try:
            response.read()
        except httpx.TimeoutException as e:
            raise APITimeoutError(
                f"Timed out reading response body: {e}", request_id=request_id
            ) from e
        except (httpx.HTTPError, httpx.StreamError) as e:
            if options.cancellation is not None and options.cancellation.cancelled:
                raise CancellationError(
                    "Request cancelled while reading response", request_id=request_id
                ) from e
            raise NetworkError(
                f"Failed to read response body: {e}", request_id=request_id
            ) from e
        finally:
            unregister()
            response.close()

        return APIResponse(
            status_code=response.status_code,
            headers=response.headers,
            content=response.content,
            elapsed=self._clock() - started,
            request_id=request_id,
        )

    def stream(
        self,
        descriptor: RequestDescriptor,
        cast_to: type[T],
        options: CallOptions | None = None,
    ) -> Stream[T]:
        """Open an SSE stream whose events decode into ``cast_to``.

        The returned stream owns the response; close it when done.
        """
        options = options or _DEFAULT_OPTIONS
        if not descriptor.stream:
            descriptor = RequestDescriptor(
                method=descriptor.method,
                path=descriptor.path,
                params=descriptor.params,
                headers=descriptor.headers,
                json=descriptor.json,
                files=descriptor.files,
                data=descriptor.data,
                stream=True,
            )
        response, request_id = self._send_with_retries(descriptor, options)
        return Stream(
            response,
            cast_to,
            cancellation=options.cancellation,
            request_id=request_id,
        )

    def get(
        self,
        path: str,
        cast_to: type[T],
        *,
        params: Sequence[tuple[str, Any]] = (),
        options: CallOptions | None = None,
    ) -> T:
        """Make a GET request."""
        return self.request(RequestDescriptor("GET", path, params=params), cast_to, options)

    def post(
        self,
        path: str,
        cast_to: type[T],
        *,
        json: Any = None,
        files: Mapping[str, FilePart] | None = None,
        data: Mapping[str, Any] | None = None,
        options: CallOptions | None = None,
    ) -> T:
        """Make a POST request."""
        descriptor = RequestDescriptor("POST", path, json=json, files=files, data=data)
        return self.request(descriptor, cast_to, options)

    def delete(
        self,
        path: str,
        cast_to: type[T],
        *,
        options: CallOptions | None = None,
    ) -> T:
        """Make a DELETE request."""
        return self.request(RequestDescriptor("DELETE", path), cast_to, options)

    # -------------------------------------------------------------------------
    # Request building
    # -------------------------------------------------------------------------

    def _build_headers(
        self,
        descriptor: RequestDescriptor,
        options: CallOptions,
        request_id: str,
    ) -> dict[str, str]:
        headers = {
            "Accept": CONTENT_TYPE_EVENT_STREAM if descriptor.stream else CONTENT_TYPE_JSON,
            "User-Agent": USER_AGENT,
            HEADER_SOURCE_CHANNEL: self.config.source_channel,
            "Accept-Language": options.accept_language or self.config.accept_language,
        }
        headers.update(descriptor.headers)
        headers.update(options.extra_headers)
        headers[HEADER_REQUEST_ID] = request_id
        headers["Authorization"] = f"Bearer {self._tokens.get_token()}"
        return headers

    def _build_request(
        self,
        descriptor: RequestDescriptor,
        options: CallOptions,
        request_id: str,
        remaining: float,
    ) -> httpx.Request:
        headers = self._build_headers(descriptor, options, request_id)
        params = [(k, _form_value(v)) for k, v in descriptor.params if v is not None]

        content: bytes | None = None
        files: dict[str, tuple[str, Any, str]] | None = None
        data: dict[str, str] | None = None
        if descriptor.files:
            files = {
                name: (part.filename, part.content, part.resolved_content_type())
                for name, part in descriptor.files.items()
            }
            data = {
                k: _form_value(v) for k, v in (descriptor.data or {}).items() if v is not None
            }
        elif descriptor.json is not None:
            content = encode_json(descriptor.json)
            headers["Content-Type"] = CONTENT_TYPE_JSON

        if descriptor.stream:
            # Reads on an open stream are bounded by the configured timeout
            # per read; connecting and waiting for headers by the deadline.
            timeout = httpx.Timeout(self.config.timeout, connect=remaining, pool=remaining)
        else:
            timeout = httpx.Timeout(remaining)

        return self._client.build_request(
            descriptor.method,
            join_url(self.base_url, descriptor.path),
            params=params or None,
            headers=headers,
            content=content,
            files=files,
            data=data,
            timeout=timeout,
        )

    # -------------------------------------------------------------------------
    # Sending and retrying
    # -------------------------------------------------------------------------

    def _send_with_retries(
        self,
        descriptor: RequestDescriptor,
        options: CallOptions,
    ) -> tuple[httpx.Response, str]:
        """Send until a 2xx response arrives or the call fails.

        Returns the open 2xx response and the request id it was sent with.
        """
        max_retries = (
            options.max_retries if options.max_retries is not None else self.config.max_retries
        )
        policy = RetryPolicy(max_retries=max_retries)
        timeout = options.timeout if options.timeout is not None else self.config.timeout
        deadline = self._clock() + timeout
        cancellation = options.cancellation

        attempt = 0
        while True:
            attempt += 1
            self._check_cancelled(cancellation, attempt - 1)
            remaining = deadline - self._clock()
            if remaining <= 0:
                error: ZaiError = APITimeoutError(
                    f"Request deadline of {timeout}s exceeded"
                )
                error.attempts = attempt - 1
                raise error

            request_id = options.idempotency_key or uuid.uuid4().hex
            request = self._build_request(descriptor, options, request_id, remaining)
            started = self._clock()
            response: httpx.Response | None = None
            retry_after: float | None = None

            try:
                response = self._send(request, cancellation)
            except httpx.TimeoutException as e:
                error = APITimeoutError(f"Request timed out: {e}", request_id=request_id)
                error.__cause__ = e
            except httpx.TransportError as e:
                error = NetworkError(f"Connection failed: {e}", request_id=request_id)
                error.__cause__ = e
            else:
                server_request_id = _response_request_id(response) or request_id
                if response.is_success:
                    self._record(
                        descriptor, attempt, response.status_code, started, server_request_id
                    )
                    return response, server_request_id

                retry_after = parse_retry_after(response.headers.get("Retry-After"))
                error = self._read_error(response, server_request_id, retry_after)

            error.attempts = attempt
            retrying = policy.should_retry(error, attempt)
            self._record(
                descriptor,
                attempt,
                response.status_code if response is not None else None,
                started,
                error.request_id or request_id,
                error.kind.value if retrying else None,
            )
            if isinstance(error, AuthenticationError):
                self._tokens.invalidate()
            if not retrying:
                raise error

            delay = policy.compute_backoff(attempt, retry_after=retry_after)
            if self._clock() + delay >= deadline:
                timeout_error = APITimeoutError(
                    f"Request deadline of {timeout}s would be exceeded by retry backoff",
                    request_id=error.request_id,
                )
                timeout_error.attempts = attempt
                raise timeout_error from error

            logger.warning(
                "%s %s failed with %s (attempt %d/%d), retrying in %.2fs",
                descriptor.method,
                descriptor.path,
                error.kind.value,
                attempt,
                policy.max_attempts,
                delay,
            )
            self._backoff(delay, cancellation, attempt)

    def _send(
        self,
        request: httpx.Request,
        cancellation: CancellationToken | None,
    ) -> httpx.Response:
        """Send and wait for response headers, honoring cancellation.

        Without a cancellation token the send happens on the calling thread.
        With one, it runs on a helper thread so that cancelling returns
        immediately; a response arriving after cancellation is closed.
        """
        if cancellation is None:
            return self._client.send(request, stream=True)

        done = threading.Event()
        lock = threading.Lock()
        outcome: dict[str, Any] = {}

        def run() -> None:
            try:
                response = self._client.send(request, stream=True)
            except Exception as e:
                outcome["error"] = e
            else:
                with lock:
                    abandoned = outcome.get("abandoned", False)
                    if not abandoned:
                        outcome["response"] = response
                if abandoned:
                    response.close()
            finally:
                done.set()

        unregister = cancellation.register(done.set)
        worker = threading.Thread(target=run, name="zai-sdk-send", daemon=True)
        worker.start()
        try:
            done.wait()
        finally:
            unregister()

        with lock:
            if cancellation.cancelled:
                outcome["abandoned"] = True
                response = outcome.pop("response", None)
            else:
                response = outcome.get("response")

        if cancellation.cancelled:
            if response is not None:
                response.close()
            raise CancellationError("Request cancelled")
        if "error" in outcome:
            raise outcome["error"]
        return response

    def _read_error(
        self,
        response: httpx.Response,
        request_id: str,
        retry_after: float | None,
    ) -> ZaiError:
        try:
            response.read()
        except httpx.HTTPError as e:
            error: ZaiError = NetworkError(
                f"Failed to read error response: {e}", response.status_code, request_id=request_id
            )
            error.__cause__ = e
            return error
        finally:
            response.close()

        error = decode_error(
            response.status_code,
            response.content,
            request_id,
            retry_after=retry_after,
        ) or ZaiError(f"HTTP {response.status_code}", response.status_code)
        return error

    def _backoff(
        self,
        delay: float,
        cancellation: CancellationToken | None,
        attempt: int,
    ) -> None:
        if cancellation is None:
            self._sleep(delay)
            return
        if cancellation.wait(delay):
            error = CancellationError("Request cancelled during retry backoff")
            error.attempts = attempt
            raise error

    @staticmethod
    def _check_cancelled(cancellation: CancellationToken | None, attempts: int) -> None:
        if cancellation is not None and cancellation.cancelled:
            error = CancellationError("Request cancelled")
            error.attempts = attempts
            raise error

    @staticmethod
    def _watch(
        cancellation: CancellationToken | None,
        callback: Callable[[], None],
    ) -> Callable[[], None]:
        if cancellation is None:
            return lambda: None
        return cancellation.register(callback)

    def _record(
        self,
        descriptor: RequestDescriptor,
        attempt: int,
        status: int | None,
        started: float,
        request_id: str | None,
        retry_reason: str | None = None,
    ) -> None:
        record = AttemptRecord(
            method=descriptor.method,
            path=descriptor.path,
            attempt=attempt,
            status=status,
            elapsed=self._clock() - started,
            request_id=request_id,
            streaming=descriptor.stream,
            retry_reason=retry_reason,
        )
        logger.debug(
            "%s %s -> %s in %.3fs (attempt %d, request id %s)",
            record.method,
            record.path,
            record.status,
            record.elapsed,
            record.attempt,
            record.request_id,
        )
        self._sink(record)
