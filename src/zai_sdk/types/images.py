"""Image generation models."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from zai_sdk.types._base import RequestModel, ResponseModel
from zai_sdk.types.shared import Usage

SIZE_1024x1024 = "1024x1024"
SIZE_768x1344 = "768x1344"
SIZE_864x1152 = "864x1152"
SIZE_1344x768 = "1344x768"
SIZE_1152x864 = "1152x864"
SIZE_1440x720 = "1440x720"
SIZE_720x1440 = "720x1440"


class ImageGenerationRequest(RequestModel):
    """Body of ``POST /images/generations``."""

    model: str
    prompt: str
    size: str | None = None
    quality: Literal["standard", "hd"] | None = None
    n: int | None = None
    response_format: Literal["url", "b64_json"] | None = None
    user_id: str | None = None


class ImageData(ResponseModel):
    url: str | None = None
    b64_json: str | None = None
    revised_prompt: str | None = None


class ContentFilterItem(ResponseModel):
    role: str = ""
    level: int = 0


class ImageGenerationResponse(ResponseModel):
    created: int | None = None
    data: list[ImageData] = Field(default_factory=list)
    content_filter: list[ContentFilterItem] = Field(default_factory=list)
    usage: Usage | None = None

    @property
    def urls(self) -> list[str]:
        return [item.url for item in self.data if item.url]
