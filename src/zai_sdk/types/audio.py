"""Audio transcription models.

``TranscriptionFormat`` is the transcript output format. It is unrelated to
the chat :class:`~zai_sdk.types.chat.ResponseFormat`.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field

from zai_sdk.types._base import RequestModel, ResponseModel

MODEL_GLM_ASR = "glm-asr"


class TranscriptionFormat(str, Enum):
    JSON = "json"
    TEXT = "text"
    VERBOSE_JSON = "verbose_json"
    VTT = "vtt"
    SRT = "srt"


class TranscriptionRequest(RequestModel):
    """Multipart body of ``POST /audio/transcriptions``."""

    file: Any = Field(repr=False)
    filename: str
    model: str = MODEL_GLM_ASR
    language: str | None = None
    prompt: str | None = None
    response_format: TranscriptionFormat = TranscriptionFormat.JSON
    temperature: float | None = None


class TranscriptionSegment(ResponseModel):
    id: int = 0
    seek: int | None = None
    start: float = 0.0
    end: float = 0.0
    text: str = ""
    tokens: list[int] = Field(default_factory=list)
    temperature: float | None = None
    avg_logprob: float | None = None
    compression_ratio: float | None = None
    no_speech_prob: float | None = None


class TranscriptionResponse(ResponseModel):
    text: str = ""
    task: str | None = None
    language: str | None = None
    duration: float | None = None
    segments: list[TranscriptionSegment] = Field(default_factory=list)
