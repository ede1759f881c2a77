"""Z.ai SDK - Python client for the Z.ai and Zhipu AI platforms.

Example usage:
    from zai_sdk import ZaiClient
    from zai_sdk.types import ChatCompletionRequest

    client = ZaiClient(api_key="your-id.your-secret")

    # Chat completion
    request = ChatCompletionRequest(model="glm-4.6").with_user_message("Hello!")
    completion = client.chat.create(request)
    print(completion.content)

    # Streaming chat
    with client.chat.create_stream(request) as stream:
        for chunk in stream:
            print(chunk.content, end="")

    # Per-call deadline and cancellation
    token = CancellationToken()
    options = CallOptions(timeout=30, cancellation=token)
    completion = client.chat.create(request, options=options)
"""

from zai_sdk._constants import (
    CHINESE_ACCEPT_LANGUAGE,
    DEFAULT_ACCEPT_LANGUAGE,
    VERSION,
    ZAI_BASE_URL,
    ZHIPU_BASE_URL,
)
from zai_sdk._streaming import ServerSentEvent, SSEDecoder, Stream, StreamState
from zai_sdk.auth import BearerToken, TokenCache, TokenProvider, default_token_cache
from zai_sdk.client import ZaiClient, ZhipuAiClient
from zai_sdk.config import ClientConfig
from zai_sdk.exceptions import (
    APIError,
    APITimeoutError,
    AuthenticationError,
    AuthorizationError,
    CancellationError,
    ConfigurationError,
    ErrorKind,
    NetworkError,
    NotFoundError,
    RateLimitError,
    SerializationError,
    ServerError,
    StreamingError,
    ValidationError,
    ZaiError,
    decode_error,
)
from zai_sdk.observability import AttemptRecord, AttemptSink, RecordingSink
from zai_sdk.options import CallOptions, CancellationToken

__version__ = VERSION

__all__ = [
    # Main clients
    "ZaiClient",
    "ZhipuAiClient",
    "ClientConfig",
    # Per-call options
    "CallOptions",
    "CancellationToken",
    # Streaming
    "Stream",
    "StreamState",
    "ServerSentEvent",
    "SSEDecoder",
    # Credentials
    "BearerToken",
    "TokenCache",
    "TokenProvider",
    "default_token_cache",
    # Observability
    "AttemptRecord",
    "AttemptSink",
    "RecordingSink",
    # Exceptions
    "ZaiError",
    "ErrorKind",
    "APIError",
    "APITimeoutError",
    "AuthenticationError",
    "AuthorizationError",
    "CancellationError",
    "ConfigurationError",
    "NetworkError",
    "NotFoundError",
    "RateLimitError",
    "SerializationError",
    "ServerError",
    "StreamingError",
    "ValidationError",
    "decode_error",
    # Constants
    "ZAI_BASE_URL",
    "ZHIPU_BASE_URL",
    "DEFAULT_ACCEPT_LANGUAGE",
    "CHINESE_ACCEPT_LANGUAGE",
    "__version__",
]
