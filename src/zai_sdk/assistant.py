"""Assistant resource for the Z.ai SDK.

Assistants answer over a streamed conversation whose events carry either
text blocks or tool activity; see :data:`~zai_sdk.types.assistant.DeltaBlock`.

Example usage:
    request = ConversationRequest(assistant_id="659e54b1b8006379b4b2abd6")
    request = request.with_user_message("Summarize today's news")

    with client.assistant.conversation_stream(request) as stream:
        for event in stream:
            print(event.content, end="")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from zai_sdk._http import RequestDescriptor
from zai_sdk.types.assistant import (
    AssistantCompletion,
    AssistantSupportResponse,
    ConversationRequest,
    ConversationUsageResponse,
)

if TYPE_CHECKING:
    from zai_sdk._http import HTTPClient
    from zai_sdk._streaming import Stream
    from zai_sdk.options import CallOptions

ASSISTANT_PATH = "/assistant"
DEFAULT_PAGE_SIZE = 10


class AssistantResource:
    """Assistant conversations and metadata queries."""

    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    def conversation(
        self,
        request: ConversationRequest,
        *,
        options: CallOptions | None = None,
    ) -> AssistantCompletion:
        """Send a conversation turn and read the final completion."""
        if request.stream:
            request = request.replace(stream=False)
        descriptor = RequestDescriptor("POST", ASSISTANT_PATH, json=request)
        return self._http.request(descriptor, AssistantCompletion, options)

    def conversation_stream(
        self,
        request: ConversationRequest,
        *,
        options: CallOptions | None = None,
    ) -> Stream[AssistantCompletion]:
        """Send a conversation turn and stream the assistant's events."""
        descriptor = RequestDescriptor(
            "POST", ASSISTANT_PATH, json=request.replace(stream=True), stream=True
        )
        return self._http.stream(descriptor, AssistantCompletion, options)

    def query_support(
        self,
        assistant_ids: list[str] | None = None,
        *,
        options: CallOptions | None = None,
    ) -> AssistantSupportResponse:
        """List assistants; restricted to ``assistant_ids`` when given."""
        body: dict[str, Any] = {}
        if assistant_ids:
            body["assistant_id_list"] = list(assistant_ids)
        descriptor = RequestDescriptor("POST", f"{ASSISTANT_PATH}/list", json=body)
        return self._http.request(descriptor, AssistantSupportResponse, options)

    def query_conversation_usage(
        self,
        assistant_id: str,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        *,
        options: CallOptions | None = None,
    ) -> ConversationUsageResponse:
        """Page through an assistant's conversations and their token usage.

        ``page`` is clamped to at least 1; a ``page_size`` below 1 falls back
        to the default of 10.
        """
        body = {
            "assistant_id": assistant_id,
            "page": max(page, 1),
            "page_size": page_size if page_size >= 1 else DEFAULT_PAGE_SIZE,
        }
        descriptor = RequestDescriptor(
            "POST", f"{ASSISTANT_PATH}/conversation/list", json=body
        )
        return self._http.request(descriptor, ConversationUsageResponse, options)
