"""Web page reader resource for the Z.ai SDK."""

from __future__ import annotations

from typing import TYPE_CHECKING

from zai_sdk._http import RequestDescriptor
from zai_sdk.types.web_reader import WebReaderRequest, WebReaderResponse

if TYPE_CHECKING:
    from zai_sdk._http import HTTPClient
    from zai_sdk.options import CallOptions


class WebReaderResource:
    """Fetch and extract the content of a web page."""

    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    def read(
        self,
        request: WebReaderRequest,
        *,
        options: CallOptions | None = None,
    ) -> WebReaderResponse:
        """Read a page."""
        descriptor = RequestDescriptor("POST", "/reader", json=request)
        return self._http.request(descriptor, WebReaderResponse, options)
