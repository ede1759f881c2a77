"""Agents resource for the Z.ai SDK."""

from __future__ import annotations

from typing import TYPE_CHECKING

from zai_sdk._http import RequestDescriptor
from zai_sdk.types.agents import (
    AgentAsyncResultRequest,
    AgentCompletion,
    AgentCompletionChunk,
    AgentInvokeRequest,
)

if TYPE_CHECKING:
    from zai_sdk._http import HTTPClient
    from zai_sdk._streaming import Stream
    from zai_sdk.options import CallOptions

AGENTS_PATH = "/v1/agents"


class AgentsResource:
    """Invoke platform agents.

    Example usage:
        request = AgentInvokeRequest(agent_id="general_translation")
        completion = client.agents.invoke(request.with_user_message("Bonjour"))
        print(completion.content)
    """

    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    def invoke(
        self,
        request: AgentInvokeRequest,
        *,
        options: CallOptions | None = None,
    ) -> AgentCompletion:
        if request.stream:
            request = request.replace(stream=None)
        descriptor = RequestDescriptor("POST", AGENTS_PATH, json=request)
        return self._http.request(descriptor, AgentCompletion, options)

    def invoke_stream(
        self,
        request: AgentInvokeRequest,
        *,
        options: CallOptions | None = None,
    ) -> Stream[AgentCompletionChunk]:
        descriptor = RequestDescriptor(
            "POST", AGENTS_PATH, json=request.replace(stream=True), stream=True
        )
        return self._http.stream(descriptor, AgentCompletionChunk, options)

    def async_result(
        self,
        request: AgentAsyncResultRequest,
        *,
        options: CallOptions | None = None,
    ) -> AgentCompletion:
        """Fetch the result of an asynchronous agent invocation."""
        descriptor = RequestDescriptor("POST", f"{AGENTS_PATH}/async-result", json=request)
        return self._http.request(descriptor, AgentCompletion, options)
