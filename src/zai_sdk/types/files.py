"""File management models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import Field

from zai_sdk.types._base import RequestModel, ResponseModel

PURPOSE_ASSISTANTS = "assistants"
PURPOSE_FINE_TUNE = "fine-tune"
PURPOSE_BATCH = "batch"
PURPOSE_FILE_EXTRACT = "file-extract"
PURPOSE_VOICE_CLONE = "voice-clone-input"


class FileUploadRequest(RequestModel):
    """Multipart body of ``POST /files``."""

    file: Any = Field(repr=False)
    filename: str
    purpose: str


class FileObject(ResponseModel):
    id: str
    object: str = "file"
    bytes: int = 0
    created_at: int | None = None
    filename: str = ""
    purpose: str | None = None
    status: str | None = None
    status_details: str | None = None

    @property
    def is_uploaded(self) -> bool:
        return self.status in ("uploaded", "processed")

    @property
    def has_error(self) -> bool:
        return self.status == "error"


class FileList(ResponseModel):
    object: str = "list"
    data: list[FileObject] = Field(default_factory=list)
    has_more: bool = False

    @property
    def ids(self) -> list[str]:
        return [f.id for f in self.data]

    def get(self, file_id: str) -> FileObject | None:
        for f in self.data:
            if f.id == file_id:
                return f
        return None

    def by_purpose(self, purpose: str) -> list[FileObject]:
        return [f for f in self.data if f.purpose == purpose]


class FileDeleted(ResponseModel):
    id: str
    object: str = "file"
    deleted: bool = False


@dataclass(frozen=True)
class FileContent:
    """Raw bytes of a stored file."""

    content: bytes
    content_type: str | None = None

    def __len__(self) -> int:
        return len(self.content)
