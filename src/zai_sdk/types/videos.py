"""Video generation models."""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from zai_sdk.types._base import RequestModel, ResponseModel

MODEL_COGVIDEOX = "cogvideox"


class TaskStatus(str, Enum):
    """Async task status values."""

    SUBMITTED = "submitted"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class VideoGenerationRequest(RequestModel):
    """Body of ``POST /videos/generations``.

    Provide ``prompt`` for text-to-video or ``image_url`` for image-to-video.
    """

    model: str = MODEL_COGVIDEOX
    prompt: str | None = None
    image_url: str | None = None
    user: str | None = None
    request_id: str | None = None


class VideoGenerationResponse(ResponseModel):
    id: str
    model: str | None = None
    request_id: str | None = None
    task_status: str | None = None


class VideoData(ResponseModel):
    url: str | None = None
    cover_image_url: str | None = None


class VideoResult(ResponseModel):
    """Status of ``GET /async-result/{task_id}``."""

    task_status: str
    task_id: str | None = None
    id: str | None = None
    model: str | None = None
    request_id: str | None = None
    video_result: list[VideoData] = Field(default_factory=list)
    error_message: str | None = None

    @property
    def is_completed(self) -> bool:
        return self.task_status == TaskStatus.COMPLETED

    @property
    def is_failed(self) -> bool:
        return self.task_status == TaskStatus.FAILED

    @property
    def is_terminal(self) -> bool:
        return self.is_completed or self.is_failed

    @property
    def video_url(self) -> str | None:
        for item in self.video_result:
            if item.url:
                return item.url
        return None
