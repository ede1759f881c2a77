"""Models for the ``/tools`` web search tool and the tokenizer."""

from __future__ import annotations

from typing import Annotated, ClassVar, Literal, Union

from pydantic import Discriminator, Field, Tag

from zai_sdk.types._base import RequestModel, ResponseModel
from zai_sdk.types._unions import search_tool_call_tag
from zai_sdk.types.chat import Message, Tool

# =============================================================================
# Web Search Tool
# =============================================================================


class WebSearchToolRequest(RequestModel):
    """Body of ``POST /tools``."""

    model: str = "web-search-pro"
    messages: list[Message] = Field(default_factory=list)
    stream: bool | None = None
    request_id: str | None = None
    scope: str | None = None
    location: str | None = None
    recent_days: int | None = None

    def with_user_message(self, content: str) -> WebSearchToolRequest:
        return self.replace(messages=[*self.messages, Message.user(content)])


class SearchIntent(ResponseModel):
    index: int = 0
    query: str = ""
    intent: str = ""
    keywords: str = ""


class SearchResult(ResponseModel):
    index: int = 0
    title: str = ""
    link: str = ""
    content: str = ""
    icon: str = ""
    media: str = ""
    refer: str = ""


class SearchRecommend(ResponseModel):
    index: int = 0
    query: str = ""


class SearchIntentToolCall(ResponseModel):
    variant: ClassVar[str] = "search-intent"

    id: str | None = None
    index: int | None = None
    type: Literal["web_search"] = "web_search"
    search_intent: SearchIntent


class SearchResultToolCall(ResponseModel):
    variant: ClassVar[str] = "search-result"

    id: str | None = None
    index: int | None = None
    type: Literal["web_search"] = "web_search"
    search_result: SearchResult


class SearchRecommendToolCall(ResponseModel):
    variant: ClassVar[str] = "search-recommend"

    id: str | None = None
    index: int | None = None
    type: Literal["web_search"] = "web_search"
    search_recommend: SearchRecommend


SearchToolCall = Annotated[
    Union[
        Annotated[SearchIntentToolCall, Tag("search_intent")],
        Annotated[SearchResultToolCall, Tag("search_result")],
        Annotated[SearchRecommendToolCall, Tag("search_recommend")],
    ],
    Discriminator(search_tool_call_tag),
]


class WebSearchMessage(ResponseModel):
    role: str | None = None
    tool_calls: list[SearchToolCall] = Field(default_factory=list)


class WebSearchChoice(ResponseModel):
    index: int = 0
    finish_reason: str | None = None
    message: WebSearchMessage = Field(default_factory=WebSearchMessage)


def _of_variant(calls: list[SearchToolCall], kind: type) -> list:
    return [call for call in calls if isinstance(call, kind)]


class WebSearchToolResponse(ResponseModel):
    id: str | None = None
    created: int | None = None
    request_id: str | None = None
    choices: list[WebSearchChoice] = Field(default_factory=list)

    @property
    def tool_calls(self) -> list[SearchToolCall]:
        return [call for choice in self.choices for call in choice.message.tool_calls]

    @property
    def search_intents(self) -> list[SearchIntent]:
        return [c.search_intent for c in _of_variant(self.tool_calls, SearchIntentToolCall)]

    @property
    def search_results(self) -> list[SearchResult]:
        return [c.search_result for c in _of_variant(self.tool_calls, SearchResultToolCall)]

    @property
    def search_recommendations(self) -> list[SearchRecommend]:
        return [
            c.search_recommend
            for c in _of_variant(self.tool_calls, SearchRecommendToolCall)
        ]


class WebSearchDelta(ResponseModel):
    role: str | None = None
    tool_calls: list[SearchToolCall] = Field(default_factory=list)


class WebSearchStreamChoice(ResponseModel):
    index: int = 0
    finish_reason: str | None = None
    delta: WebSearchDelta = Field(default_factory=WebSearchDelta)


class WebSearchToolChunk(ResponseModel):
    id: str | None = None
    created: int | None = None
    choices: list[WebSearchStreamChoice] = Field(default_factory=list)

    @property
    def tool_calls(self) -> list[SearchToolCall]:
        return [call for choice in self.choices for call in choice.delta.tool_calls]

    @property
    def is_finished(self) -> bool:
        return bool(self.choices and self.choices[0].finish_reason)


# =============================================================================
# Tokenizer
# =============================================================================


class TokenizerRequest(RequestModel):
    """Body of ``POST /tokenizer``."""

    model: str
    messages: list[Message] = Field(default_factory=list)
    tools: list[Tool] | None = None
    request_id: str | None = None
    user_id: str | None = None


class TokenizerUsage(ResponseModel):
    prompt_tokens: int = 0
    image_tokens: int = 0
    video_tokens: int = 0
    total_tokens: int = 0


class TokenizerResponse(ResponseModel):
    id: str | None = None
    usage: TokenizerUsage = Field(default_factory=TokenizerUsage)
    created: int | None = None
    request_id: str | None = None

    @property
    def total_tokens(self) -> int:
        return self.usage.total_tokens
