"""Document parsing models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import Field

from zai_sdk.types._base import RequestModel, ResponseModel

ToolType = Literal["lite", "expert", "prime", "prime-sync"]
FormatType = Literal["text", "download_link"]


class FileParserCreateRequest(RequestModel):
    """Multipart body of ``POST /files/parser/create`` and ``/files/parser/sync``.

    ``file_type`` is the document type, e.g. ``"pdf"`` or ``"docx"``.
    """

    file: Any = Field(repr=False)
    filename: str
    file_type: str
    tool_type: ToolType = "lite"


class FileParserCreateResponse(ResponseModel):
    task_id: str = ""
    message: str | None = None
    success: bool = False


class FileParserSyncResponse(ResponseModel):
    task_id: str | None = None
    message: str | None = None
    status: bool = False
    content: str = ""
    parsing_result_url: str | None = None


@dataclass(frozen=True)
class FileParserContent:
    """Result of ``GET /files/parser/result/{task_id}/{format_type}``.

    ``text`` is set for the ``text`` format; ``data`` holds the raw body.
    """

    format_type: str
    data: bytes
    content_type: str | None = None

    @property
    def text(self) -> str:
        return self.data.decode("utf-8", errors="replace")

    @property
    def has_content(self) -> bool:
        return bool(self.data)
