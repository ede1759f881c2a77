"""Tools resource for the Z.ai SDK: the web search tool and the tokenizer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from zai_sdk._http import RequestDescriptor
from zai_sdk.types.tools import (
    TokenizerRequest,
    TokenizerResponse,
    WebSearchToolChunk,
    WebSearchToolRequest,
    WebSearchToolResponse,
)

if TYPE_CHECKING:
    from zai_sdk._http import HTTPClient
    from zai_sdk._streaming import Stream
    from zai_sdk.options import CallOptions

TOOLS_PATH = "/tools"


class ToolsResource:
    """Web search tool and token counting.

    Example usage:
        request = WebSearchToolRequest().with_user_message("Latest GLM release")
        response = client.tools.web_search(request)
        for result in response.search_results:
            print(result.title, result.link)

        count = client.tools.tokenize(
            TokenizerRequest(model="glm-4.6").replace(messages=request.messages)
        )
        print(count.total_tokens)
    """

    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    def web_search(
        self,
        request: WebSearchToolRequest,
        *,
        options: CallOptions | None = None,
    ) -> WebSearchToolResponse:
        """Run the web search tool and return intents, results and recommendations."""
        if request.stream:
            request = request.replace(stream=None)
        descriptor = RequestDescriptor("POST", TOOLS_PATH, json=request)
        return self._http.request(descriptor, WebSearchToolResponse, options)

    def web_search_stream(
        self,
        request: WebSearchToolRequest,
        *,
        options: CallOptions | None = None,
    ) -> Stream[WebSearchToolChunk]:
        """Run the web search tool as an SSE stream."""
        descriptor = RequestDescriptor(
            "POST", TOOLS_PATH, json=request.replace(stream=True), stream=True
        )
        return self._http.stream(descriptor, WebSearchToolChunk, options)

    def tokenize(
        self,
        request: TokenizerRequest,
        *,
        options: CallOptions | None = None,
    ) -> TokenizerResponse:
        """Count the tokens a set of messages would use."""
        descriptor = RequestDescriptor("POST", "/tokenizer", json=request)
        return self._http.request(descriptor, TokenizerResponse, options)
