"""Models shared across endpoints."""

from __future__ import annotations

from zai_sdk.types._base import ResponseModel


class PromptTokensDetails(ResponseModel):
    cached_tokens: int = 0
    audio_tokens: int = 0
    text_tokens: int = 0
    image_tokens: int = 0


class CompletionTokensDetails(ResponseModel):
    reasoning_tokens: int = 0
    audio_tokens: int = 0
    text_tokens: int = 0


class Usage(ResponseModel):
    """Token usage reported by the platform."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    prompt_tokens_details: PromptTokensDetails | None = None
    completion_tokens_details: CompletionTokensDetails | None = None

    @property
    def cached_tokens(self) -> int:
        if self.prompt_tokens_details is None:
            return 0
        return self.prompt_tokens_details.cached_tokens

    @property
    def reasoning_tokens(self) -> int:
        if self.completion_tokens_details is None:
            return 0
        return self.completion_tokens_details.reasoning_tokens
