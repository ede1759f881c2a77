"""Handwriting OCR resource for the Z.ai SDK."""

from __future__ import annotations

from typing import TYPE_CHECKING

from zai_sdk._http import FilePart, RequestDescriptor
from zai_sdk.types.ocr import OCRRequest, OCRResponse

if TYPE_CHECKING:
    from zai_sdk._http import HTTPClient
    from zai_sdk.options import CallOptions


class OCRResource:
    """Handwriting recognition."""

    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    def handwriting(
        self,
        request: OCRRequest,
        *,
        options: CallOptions | None = None,
    ) -> OCRResponse:
        """Recognize handwritten text in an image (multipart upload)."""
        descriptor = RequestDescriptor(
            "POST",
            "/files/ocr",
            files={"file": FilePart(request.file, request.filename)},
            data={
                "tool_type": request.tool_type,
                "language_type": request.language_type,
                "probability": request.probability,
            },
        )
        return self._http.request(descriptor, OCRResponse, options)
