"""Document parsing resource for the Z.ai SDK.

Example usage:
    with open("report.pdf", "rb") as f:
        request = FileParserCreateRequest(file=f, filename="report.pdf", file_type="pdf")
        task = client.file_parser.create(request)

    result = client.file_parser.content(task.task_id, "text")
    print(result.text)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from zai_sdk._http import FilePart, RequestDescriptor
from zai_sdk.types.file_parser import (
    FileParserContent,
    FileParserCreateRequest,
    FileParserCreateResponse,
    FileParserSyncResponse,
    FormatType,
)

if TYPE_CHECKING:
    from zai_sdk._http import HTTPClient
    from zai_sdk.options import CallOptions


def _parser_descriptor(path: str, request: FileParserCreateRequest) -> RequestDescriptor:
    return RequestDescriptor(
        "POST",
        path,
        files={"file": FilePart(request.file, request.filename)},
        data={"file_type": request.file_type, "tool_type": request.tool_type},
    )


class FileParserResource:
    """Document parsing operations."""

    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    def create(
        self,
        request: FileParserCreateRequest,
        *,
        options: CallOptions | None = None,
    ) -> FileParserCreateResponse:
        """Submit a document for asynchronous parsing."""
        descriptor = _parser_descriptor("/files/parser/create", request)
        return self._http.request(descriptor, FileParserCreateResponse, options)

    def create_sync(
        self,
        request: FileParserCreateRequest,
        *,
        options: CallOptions | None = None,
    ) -> FileParserSyncResponse:
        """Parse a document and wait for the result in one call."""
        descriptor = _parser_descriptor("/files/parser/sync", request)
        return self._http.request(descriptor, FileParserSyncResponse, options)

    def content(
        self,
        task_id: str,
        format_type: FormatType = "text",
        *,
        options: CallOptions | None = None,
    ) -> FileParserContent:
        """Fetch the result of a parsing task.

        Args:
            task_id: Task id returned by :meth:`create`
            format_type: ``"text"`` for the extracted text, ``"download_link"``
                for a link to the full result
            options: Per-call overrides

        Returns:
            The raw result body
        """
        descriptor = RequestDescriptor("GET", f"/files/parser/result/{task_id}/{format_type}")
        response = self._http.request_raw(descriptor, options)
        return FileParserContent(
            format_type=format_type,
            data=response.content,
            content_type=response.content_type,
        )
