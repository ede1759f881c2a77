"""Agent invocation models."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from zai_sdk.types._base import RequestModel, ResponseModel
from zai_sdk.types.chat import Message
from zai_sdk.types.web_search import SensitiveWordCheck


class AgentInvokeRequest(RequestModel):
    """Body of ``POST /v1/agents``."""

    agent_id: str
    messages: list[Message] = Field(default_factory=list)
    stream: bool | None = None
    request_id: str | None = None
    user_id: str | None = None
    custom_variables: dict[str, Any] | None = None
    sensitive_word_check: SensitiveWordCheck | None = None

    def with_user_message(self, content: str) -> AgentInvokeRequest:
        return self.replace(messages=[*self.messages, Message.user(content)])


class AgentAsyncResultRequest(RequestModel):
    """Body of ``POST /v1/agents/async-result``."""

    agent_id: str
    async_id: str | None = None
    conversation_id: str | None = None
    custom_variables: dict[str, Any] | None = None


class AgentError(ResponseModel):
    code: str | int | None = None
    message: str | None = None


class AgentMessage(ResponseModel):
    role: str | None = None
    content: Any = None


class AgentChoice(ResponseModel):
    index: int = 0
    finish_reason: str | None = None
    message: AgentMessage = Field(default_factory=AgentMessage)


class AgentUsage(ResponseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


def _content_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(
            str(part.get("text", "")) for part in content if isinstance(part, dict)
        )
    return ""


class AgentCompletion(ResponseModel):
    id: str | None = None
    agent_id: str | None = None
    conversation_id: str | None = None
    async_id: str | None = None
    status: str | None = None
    request_id: str | None = None
    choices: list[AgentChoice] = Field(default_factory=list)
    usage: AgentUsage | None = None
    error: AgentError | None = None

    @property
    def content(self) -> str:
        if not self.choices:
            return ""
        return _content_text(self.choices[0].message.content)


class AgentDelta(ResponseModel):
    role: str | None = None
    content: Any = None


class AgentStreamChoice(ResponseModel):
    index: int = 0
    finish_reason: str | None = None
    delta: AgentDelta = Field(default_factory=AgentDelta)


class AgentCompletionChunk(ResponseModel):
    id: str | None = None
    agent_id: str | None = None
    conversation_id: str | None = None
    choices: list[AgentStreamChoice] = Field(default_factory=list)
    usage: AgentUsage | None = None
    error: AgentError | None = None

    @property
    def content(self) -> str:
        if not self.choices:
            return ""
        return _content_text(self.choices[0].delta.content)
