"""Models for the ``/reader`` web page reader."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from zai_sdk.types._base import RequestModel, ResponseModel


class WebReaderRequest(RequestModel):
    """Body of ``POST /reader``."""

    url: str
    request_id: str | None = None
    user_id: str | None = None
    timeout: str | None = None
    no_cache: bool | None = None
    return_format: Literal["markdown", "text"] | None = None
    retain_images: bool | None = None
    no_gfm: bool | None = None
    keep_img_data_url: bool | None = None
    with_images_summary: bool | None = None
    with_links_summary: bool | None = None


class ReaderData(ResponseModel):
    images: dict[str, str] = Field(default_factory=dict)
    links: dict[str, str] = Field(default_factory=dict)
    title: str = ""
    description: str = ""
    url: str = ""
    content: str = ""
    published_time: str = Field(default="", alias="publishedTime")
    metadata: dict[str, Any] = Field(default_factory=dict)
    external: dict[str, Any] = Field(default_factory=dict)


class WebReaderResponse(ResponseModel):
    reader_result: ReaderData | None = None

    @property
    def content(self) -> str:
        return self.reader_result.content if self.reader_result else ""

    @property
    def title(self) -> str:
        return self.reader_result.title if self.reader_result else ""
