"""Custom exceptions for the Z.ai SDK.

Every public operation either returns a value or raises one subclass of
:class:`ZaiError`. Each subclass carries an :class:`ErrorKind` so callers can
branch on the category without importing every class:

    try:
        client.chat.create(request)
    except ZaiError as e:
        if e.kind is ErrorKind.RATE_LIMITED:
            ...
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from zai_sdk._constants import ERROR_BODY_EXCERPT


class ErrorKind(str, Enum):
    """Closed set of error categories."""

    CONFIGURATION = "configuration-error"
    AUTHENTICATION = "authentication-error"
    AUTHORIZATION = "authorization-error"
    NOT_FOUND = "not-found"
    VALIDATION = "validation-error"
    RATE_LIMITED = "rate-limited"
    SERVER = "server-error"
    NETWORK = "network-error"
    TIMEOUT = "timeout-error"
    CANCELLED = "cancelled"
    SERIALIZATION = "serialization-error"
    STREAMING = "streaming-error"
    UNKNOWN = "unknown-error"


class ZaiError(Exception):
    """Base exception for all Z.ai SDK errors.

    Attributes:
        message: Human readable message
        status_code: HTTP status, when the error came from a response
        request_id: Request id echoed by the server (or sent by the SDK)
        code: Server supplied error code
        server_message: Server supplied error message
        detail: Parsed error body, if any
        body: Raw body excerpt for unstructured error bodies
        attempts: Number of HTTP attempts performed before giving up
    """

    kind: ClassVar[ErrorKind] = ErrorKind.UNKNOWN
    default_message: ClassVar[str] = "Unknown error"

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        *,
        request_id: str | None = None,
        code: str | None = None,
        server_message: str | None = None,
        detail: Any = None,
        body: str | None = None,
    ) -> None:
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.request_id = request_id
        self.code = code
        self.server_message = server_message
        self.detail = detail
        self.body = body
        self.attempts = 0

    def __str__(self) -> str:
        text = self.message
        if self.code:
            text = f"{text} (code: {self.code})"
        if self.status_code:
            return f"[{self.status_code}] {text}"
        return text


class ConfigurationError(ZaiError):
    """Raised when SDK configuration is invalid."""

    kind = ErrorKind.CONFIGURATION
    default_message = "Invalid configuration"


class AuthenticationError(ZaiError):
    """Raised when the credential is malformed or rejected (401)."""

    kind = ErrorKind.AUTHENTICATION
    default_message = "Authentication failed"


class AuthorizationError(ZaiError):
    """Raised when access is denied (403)."""

    kind = ErrorKind.AUTHORIZATION
    default_message = "Access denied"


class NotFoundError(ZaiError):
    """Raised when a resource is not found (404)."""

    kind = ErrorKind.NOT_FOUND
    default_message = "Resource not found"


class ValidationError(ZaiError):
    """Raised when the server rejects the request (400 and other 4xx)."""

    kind = ErrorKind.VALIDATION
    default_message = "Validation error"


class RateLimitError(ZaiError):
    """Raised on 429 and 408 responses.

    ``retry_after`` holds the server's Retry-After hint in seconds, if any.
    """

    kind = ErrorKind.RATE_LIMITED
    default_message = "Rate limit exceeded"

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = 429,
        *,
        retry_after: float | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, status_code, **kwargs)
        self.retry_after = retry_after


class ServerError(ZaiError):
    """Raised on 5xx responses."""

    kind = ErrorKind.SERVER
    default_message = "Server error"


class NetworkError(ZaiError):
    """Raised when the request never produced a response."""

    kind = ErrorKind.NETWORK
    default_message = "Network error"


class APITimeoutError(ZaiError):
    """Raised when an attempt or the whole call runs out of time."""

    kind = ErrorKind.TIMEOUT
    default_message = "Request timed out"


class CancellationError(ZaiError):
    """Raised when the caller cancels an in-flight call or stream."""

    kind = ErrorKind.CANCELLED
    default_message = "Request cancelled"


class SerializationError(ZaiError):
    """Raised when a payload cannot be encoded or decoded.

    The raw payload that failed to decode is kept in ``body``.
    """

    kind = ErrorKind.SERIALIZATION
    default_message = "Failed to decode response"


class StreamingError(ZaiError):
    """Raised when an open SSE stream fails.

    ``events_delivered`` counts the events handed to the caller before the
    failure; those events remain valid.
    """

    kind = ErrorKind.STREAMING
    default_message = "Stream failed"

    def __init__(
        self,
        message: str | None = None,
        *,
        events_delivered: int = 0,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.events_delivered = events_delivered


class APIError(ZaiError):
    """Raised for responses that fit no other category."""

    kind = ErrorKind.UNKNOWN


# =============================================================================
# Error Body Decoding
# =============================================================================


class _ErrorDetail(BaseModel):
    message: str | None = None
    code: str | int | None = None
    type: str | None = None
    param: str | None = None


class ErrorBody(BaseModel):
    """Error body in either of the shapes the platform returns.

    ``{"message": ..., "code": ...}`` and
    ``{"error": {"message": ..., "code": ..., "type": ..., "param": ...}}``
    both decode into this model. Top-level fields take precedence.
    """

    message: str | None = None
    code: str | int | None = None
    error: _ErrorDetail | None = None

    model_config = {"frozen": True}

    @property
    def server_message(self) -> str | None:
        if self.message:
            return self.message
        if self.error and self.error.message:
            return self.error.message
        return None

    @property
    def server_code(self) -> str | None:
        if self.code not in (None, ""):
            return str(self.code)
        if self.error and self.error.code not in (None, ""):
            return str(self.error.code)
        return None

    @property
    def error_type(self) -> str | None:
        return self.error.type if self.error else None

    @property
    def param(self) -> str | None:
        return self.error.param if self.error else None


def _error_class_for_status(status: int) -> type[ZaiError]:
    if status == 400:
        return ValidationError
    if status == 401:
        return AuthenticationError
    if status == 403:
        return AuthorizationError
    if status == 404:
        return NotFoundError
    if status in (408, 429):
        return RateLimitError
    if 500 <= status <= 599:
        return ServerError
    if 400 <= status <= 499:
        return ValidationError
    return APIError


def decode_error(
    status: int,
    body: bytes | str | None,
    request_id: str | None = None,
    *,
    retry_after: float | None = None,
) -> ZaiError | None:
    """Convert an HTTP status and raw body into an SDK exception.

    Args:
        status: HTTP status code
        body: Raw response body
        request_id: Request id associated with the response
        retry_after: Parsed Retry-After header, attached to rate-limit errors

    Returns:
        The matching ZaiError, or None for 2xx statuses
    """
    if 200 <= status <= 299:
        return None

    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    text = text or ""

    parsed: ErrorBody | None = None
    detail: Any = None
    if text.strip():
        try:
            detail = json.loads(text)
        except ValueError:
            detail = None
        if isinstance(detail, dict):
            try:
                parsed = ErrorBody.model_validate(detail)
            except PydanticValidationError:
                parsed = None

    error_class = _error_class_for_status(status)
    server_code = parsed.server_code if parsed else None
    server_message = parsed.server_message if parsed else None

    kwargs: dict[str, Any] = {
        "request_id": request_id,
        "code": server_code,
        "server_message": server_message,
        "detail": detail if parsed else None,
        "body": None if parsed else text[:ERROR_BODY_EXCERPT] or None,
    }
    message = server_message or f"HTTP {status}"
    if error_class is RateLimitError:
        return RateLimitError(message, status, retry_after=retry_after, **kwargs)
    return error_class(message, status, **kwargs)
