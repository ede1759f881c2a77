"""Web search resource for the Z.ai SDK."""

from __future__ import annotations

from typing import TYPE_CHECKING

from zai_sdk._http import RequestDescriptor
from zai_sdk.types.web_search import WebSearchRequest, WebSearchResponse

if TYPE_CHECKING:
    from zai_sdk._http import HTTPClient
    from zai_sdk.options import CallOptions


class WebSearchResource:
    """Standalone web search.

    Example usage:
        response = client.web_search.search(WebSearchRequest(search_query="GLM"))
        for item in response.search_result:
            print(item.title, item.link)
    """

    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    def search(
        self,
        request: WebSearchRequest,
        *,
        options: CallOptions | None = None,
    ) -> WebSearchResponse:
        """Run a web search."""
        descriptor = RequestDescriptor("POST", "/web_search", json=request)
        return self._http.request(descriptor, WebSearchResponse, options)
