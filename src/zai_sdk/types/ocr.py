"""Handwriting OCR models."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from zai_sdk.types._base import RequestModel, ResponseModel

TOOL_TYPE_HAND_WRITE = "hand_write"


class OCRRequest(RequestModel):
    """Multipart body of ``POST /files/ocr``."""

    file: Any = Field(repr=False)
    filename: str
    tool_type: str = TOOL_TYPE_HAND_WRITE
    language_type: str | None = None
    probability: bool | None = None


class Location(ResponseModel):
    left: int = 0
    top: int = 0
    width: int = 0
    height: int = 0


class Probability(ResponseModel):
    average: float = 0.0
    variance: float = 0.0
    min: float = 0.0


class WordsResult(ResponseModel):
    location: Location = Field(default_factory=Location)
    words: str = ""
    probability: Probability | None = None


class OCRResponse(ResponseModel):
    task_id: str | None = None
    message: str | None = None
    status: str | None = None
    words_result_num: int = 0
    words_result: list[WordsResult] = Field(default_factory=list)

    @property
    def text(self) -> str:
        """All recognized lines joined with newlines."""
        return "\n".join(item.words for item in self.words_result)
