"""Chat completions resource for the Z.ai SDK.

Example usage:
    request = ChatCompletionRequest(model="glm-4.6").with_user_message("Hello!")

    # Single response
    completion = client.chat.create(request)
    print(completion.content)

    # Streaming
    with client.chat.create_stream(request) as stream:
        for chunk in stream:
            print(chunk.content, end="")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from zai_sdk._http import RequestDescriptor
from zai_sdk.types.chat import ChatCompletion, ChatCompletionChunk, ChatCompletionRequest

if TYPE_CHECKING:
    from zai_sdk._http import HTTPClient
    from zai_sdk._streaming import Stream
    from zai_sdk.options import CallOptions

CHAT_COMPLETIONS_PATH = "/chat/completions"


class ChatResource:
    """Chat completion operations."""

    def __init__(self, http: HTTPClient) -> None:
        """Initialize chat resource.

        Args:
            http: HTTP client instance
        """
        self._http = http

    def create(
        self,
        request: ChatCompletionRequest,
        *,
        options: CallOptions | None = None,
    ) -> ChatCompletion:
        """Create a chat completion.

        The request is sent as given; a ``stream=True`` request is sent with
        ``stream`` cleared since this method reads a single JSON response.

        Args:
            request: Completion request
            options: Per-call overrides

        Returns:
            The completion

        Raises:
            ValidationError: If the server rejects the request
            ZaiError: On any other failure
        """
        if request.stream:
            request = request.replace(stream=None)
        descriptor = RequestDescriptor("POST", CHAT_COMPLETIONS_PATH, json=request)
        return self._http.request(descriptor, ChatCompletion, options)

    def create_stream(
        self,
        request: ChatCompletionRequest,
        *,
        options: CallOptions | None = None,
    ) -> Stream[ChatCompletionChunk]:
        """Create a streaming chat completion.

        Returns:
            An open stream of chunks; close it (or use it as a context
            manager) when done
        """
        descriptor = RequestDescriptor(
            "POST",
            CHAT_COMPLETIONS_PATH,
            json=request.replace(stream=True),
            stream=True,
        )
        return self._http.stream(descriptor, ChatCompletionChunk, options)

    def stream_content(
        self,
        request: ChatCompletionRequest,
        *,
        options: CallOptions | None = None,
    ) -> str:
        """Stream a completion and return the concatenated content deltas."""
        parts: list[str] = []
        with self.create_stream(request, options=options) as stream:
            for chunk in stream:
                parts.append(chunk.content)
        return "".join(parts)
