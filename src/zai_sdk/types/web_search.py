"""Models for the standalone ``/web_search`` endpoint."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from zai_sdk.types._base import RequestModel, ResponseModel

SEARCH_ENGINE_PRIME = "search-prime"

RecencyFilter = Literal["oneDay", "oneWeek", "oneMonth", "oneYear", "noLimit"]
ContentSize = Literal["small", "medium", "large"]


class SensitiveWordCheck(ResponseModel):
    type: str | None = "ALL"
    status: Literal["ENABLE", "DISABLE"] | None = "ENABLE"


class WebSearchRequest(RequestModel):
    """Body of ``POST /web_search``."""

    search_query: str
    search_engine: str = SEARCH_ENGINE_PRIME
    request_id: str | None = None
    user_id: str | None = None
    sensitive_word_check: SensitiveWordCheck | None = None
    count: int | None = None
    search_domain_filter: str | None = None
    search_recency_filter: RecencyFilter | None = None
    content_size: ContentSize | None = None
    search_intent: bool | None = None
    include_image: bool | None = None


class SearchIntentResult(ResponseModel):
    query: str = ""
    intent: str = ""
    keywords: str = ""


class SearchResultItem(ResponseModel):
    title: str = ""
    link: str = ""
    content: str = ""
    icon: str = ""
    media: str = ""
    refer: str = ""
    publish_date: str = ""
    images: list[str] = Field(default_factory=list)


class WebSearchResponse(ResponseModel):
    id: str | None = None
    created: int | None = None
    request_id: str | None = None
    search_intent: list[SearchIntentResult] | SearchIntentResult | None = None
    search_result: list[SearchResultItem] = Field(default_factory=list)

    @property
    def links(self) -> list[str]:
        return [item.link for item in self.search_result if item.link]
