"""Files resource for the Z.ai SDK."""

from __future__ import annotations

from typing import TYPE_CHECKING

from zai_sdk._http import FilePart, RequestDescriptor
from zai_sdk.types.files import (
    FileContent,
    FileDeleted,
    FileList,
    FileObject,
    FileUploadRequest,
)

if TYPE_CHECKING:
    from zai_sdk._http import HTTPClient
    from zai_sdk.options import CallOptions


class FilesResource:
    """Upload, list, and download stored files.

    Example usage:
        with open("requests.jsonl", "rb") as f:
            uploaded = client.files.upload(
                FileUploadRequest(file=f, filename="requests.jsonl", purpose="batch")
            )

        for stored in client.files.list().data:
            print(stored.id, stored.filename)
    """

    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    def upload(
        self,
        request: FileUploadRequest,
        *,
        options: CallOptions | None = None,
    ) -> FileObject:
        """Upload a file (multipart)."""
        descriptor = RequestDescriptor(
            "POST",
            "/files",
            files={"file": FilePart(request.file, request.filename)},
            data={"purpose": request.purpose},
        )
        return self._http.request(descriptor, FileObject, options)

    def list(self, *, options: CallOptions | None = None) -> FileList:
        descriptor = RequestDescriptor("GET", "/files")
        return self._http.request(descriptor, FileList, options)

    def retrieve(self, file_id: str, *, options: CallOptions | None = None) -> FileObject:
        descriptor = RequestDescriptor("GET", f"/files/{file_id}")
        return self._http.request(descriptor, FileObject, options)

    def delete(self, file_id: str, *, options: CallOptions | None = None) -> FileDeleted:
        descriptor = RequestDescriptor("DELETE", f"/files/{file_id}")
        return self._http.request(descriptor, FileDeleted, options)

    def content(self, file_id: str, *, options: CallOptions | None = None) -> FileContent:
        """Download a file's raw bytes."""
        descriptor = RequestDescriptor("GET", f"/files/{file_id}/content")
        response = self._http.request_raw(descriptor, options)
        return FileContent(content=response.content, content_type=response.content_type)
