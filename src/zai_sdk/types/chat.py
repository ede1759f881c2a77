"""Chat completion models.

Requests are immutable; build them with keyword arguments and derive
variants with the ``with_*`` helpers:

    request = ChatCompletionRequest(
        model="glm-4.6",
        messages=[Message.system("Be brief."), Message.user("Hi!")],
        temperature=0.7,
    )
    follow_up = request.with_message(Message.assistant("Hello!")).with_user_message(
        "Tell me a joke."
    )
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar, Literal, Union

from pydantic import Discriminator, Field, Tag

from zai_sdk.types._base import RequestModel, ResponseModel
from zai_sdk.types._unions import content_part_tag
from zai_sdk.types.shared import Usage

ROLE_SYSTEM = "system"
ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"
ROLE_TOOL = "tool"

# tool_choice values accepted as plain strings
TOOL_CHOICE_AUTO = "auto"
TOOL_CHOICE_NONE = "none"
TOOL_CHOICE_REQUIRED = "required"


# =============================================================================
# Message Content
# =============================================================================


class ImageURL(ResponseModel):
    """Nested URL object of an image part."""

    url: str
    detail: str | None = None


class TextContentPart(ResponseModel):
    variant: ClassVar[str] = "text"

    type: Literal["text"] = "text"
    text: str


class ImageURLContentPart(ResponseModel):
    variant: ClassVar[str] = "image-url"

    type: Literal["image_url"] = "image_url"
    image_url: ImageURL

    @classmethod
    def from_url(cls, url: str, detail: str | None = None) -> ImageURLContentPart:
        return cls(image_url=ImageURL(url=url, detail=detail))


ContentPart = Annotated[
    Union[
        Annotated[TextContentPart, Tag("text")],
        Annotated[ImageURLContentPart, Tag("image_url")],
    ],
    Discriminator(content_part_tag),
]


class FunctionCall(ResponseModel):
    name: str = ""
    arguments: str = ""


class ToolCall(ResponseModel):
    """A tool invocation requested by the model."""

    id: str | None = None
    type: str = "function"
    index: int | None = None
    function: FunctionCall | None = None


class Message(ResponseModel):
    """A chat message.

    ``content`` is either plain text or a list of typed content parts.
    """

    role: str
    content: str | list[ContentPart] | None = None
    name: str | None = None
    tool_calls: list[ToolCall] | None = None
    tool_call_id: str | None = None
    reasoning_content: str | None = None

    @classmethod
    def system(cls, content: str) -> Message:
        return cls(role=ROLE_SYSTEM, content=content)

    @classmethod
    def user(cls, content: str | list[ContentPart]) -> Message:
        return cls(role=ROLE_USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> Message:
        return cls(role=ROLE_ASSISTANT, content=content)

    @classmethod
    def tool(cls, content: str, tool_call_id: str) -> Message:
        return cls(role=ROLE_TOOL, content=content, tool_call_id=tool_call_id)

    @property
    def text(self) -> str:
        """Text content, joining text parts for multi-part messages."""
        if self.content is None:
            return ""
        if isinstance(self.content, str):
            return self.content
        return "".join(
            part.text for part in self.content if isinstance(part, TextContentPart)
        )


# =============================================================================
# Tools and Formats
# =============================================================================


class FunctionDefinition(ResponseModel):
    name: str
    description: str | None = None
    parameters: dict[str, Any] | None = None


class Tool(ResponseModel):
    """A tool the model may call.

    ``function`` tools carry a definition; built-in tools such as
    ``web_search`` or ``retrieval`` carry their settings dict instead.
    """

    type: str = "function"
    function: FunctionDefinition | None = None
    web_search: dict[str, Any] | None = None
    retrieval: dict[str, Any] | None = None

    @classmethod
    def function_tool(
        cls,
        name: str,
        description: str | None = None,
        parameters: dict[str, Any] | None = None,
    ) -> Tool:
        return cls(
            type="function",
            function=FunctionDefinition(
                name=name, description=description, parameters=parameters
            ),
        )


class ResponseFormat(ResponseModel):
    """Chat output mode (plain text or JSON object)."""

    type: Literal["text", "json_object"] = "text"

    @classmethod
    def json_object(cls) -> ResponseFormat:
        return cls(type="json_object")


class ThinkingConfig(ResponseModel):
    """Deep-thinking switch for reasoning models."""

    type: Literal["enabled", "disabled"] = "enabled"


# =============================================================================
# Request
# =============================================================================


class ChatCompletionRequest(RequestModel):
    """Body of ``POST /chat/completions``.

    ``tool_choice`` accepts a string (``"auto"``, ``"none"``, ``"required"``)
    or a structured object that is sent as given.
    """

    model: str
    messages: list[Message] = Field(default_factory=list)
    temperature: float | None = None
    top_p: float | None = None
    stream: bool | None = None
    max_tokens: int | None = None
    stop: list[str] | None = None
    tools: list[Tool] | None = None
    tool_choice: str | dict[str, Any] | None = None
    response_format: ResponseFormat | None = None
    n: int | None = None
    presence_penalty: float | None = None
    frequency_penalty: float | None = None
    logit_bias: dict[str, float] | None = None
    user: str | None = None
    request_id: str | None = None
    do_sample: bool | None = None
    seed: int | None = None
    thinking: ThinkingConfig | None = None

    def with_message(self, message: Message) -> ChatCompletionRequest:
        return self.replace(messages=[*self.messages, message])

    def with_user_message(self, content: str) -> ChatCompletionRequest:
        return self.with_message(Message.user(content))

    def with_system_message(self, content: str) -> ChatCompletionRequest:
        return self.with_message(Message.system(content))

    def with_assistant_message(self, content: str) -> ChatCompletionRequest:
        return self.with_message(Message.assistant(content))

    def with_tool(self, tool: Tool) -> ChatCompletionRequest:
        return self.replace(tools=[*(self.tools or []), tool])


# =============================================================================
# Responses
# =============================================================================


class TopLogProb(ResponseModel):
    token: str
    logprob: float
    bytes: list[int] | None = None


class TokenLogProb(ResponseModel):
    token: str
    logprob: float
    bytes: list[int] | None = None
    top_logprobs: list[TopLogProb] | None = None


class LogProbs(ResponseModel):
    content: list[TokenLogProb] | None = None


class Choice(ResponseModel):
    index: int = 0
    message: Message
    finish_reason: str | None = None
    logprobs: LogProbs | None = None


class ChatCompletion(ResponseModel):
    """Response of a non-streaming chat completion."""

    id: str | None = None
    request_id: str | None = None
    object: str | None = None
    created: int | None = None
    model: str | None = None
    choices: list[Choice] = Field(default_factory=list)
    usage: Usage | None = None
    system_fingerprint: str | None = None

    @property
    def first_choice(self) -> Choice | None:
        return self.choices[0] if self.choices else None

    @property
    def content(self) -> str:
        """Text of the first choice, or an empty string."""
        choice = self.first_choice
        return choice.message.text if choice else ""

    @property
    def reasoning_content(self) -> str:
        choice = self.first_choice
        if choice is None:
            return ""
        return choice.message.reasoning_content or ""

    @property
    def tool_calls(self) -> list[ToolCall]:
        choice = self.first_choice
        if choice is None:
            return []
        return list(choice.message.tool_calls or [])

    @property
    def is_finished(self) -> bool:
        choice = self.first_choice
        return bool(choice and choice.finish_reason)


class Delta(ResponseModel):
    role: str | None = None
    content: str | None = None
    reasoning_content: str | None = None
    tool_calls: list[ToolCall] | None = None
    function_call: FunctionCall | None = None


class ChunkChoice(ResponseModel):
    index: int = 0
    delta: Delta = Field(default_factory=Delta)
    finish_reason: str | None = None
    logprobs: LogProbs | None = None


class ChatCompletionChunk(ResponseModel):
    """One event of a streaming chat completion."""

    id: str | None = None
    request_id: str | None = None
    object: str | None = None
    created: int | None = None
    model: str | None = None
    choices: list[ChunkChoice] = Field(default_factory=list)
    usage: Usage | None = None
    system_fingerprint: str | None = None

    @property
    def first_choice(self) -> ChunkChoice | None:
        return self.choices[0] if self.choices else None

    @property
    def content(self) -> str:
        choice = self.first_choice
        return (choice.delta.content or "") if choice else ""

    @property
    def reasoning_content(self) -> str:
        choice = self.first_choice
        return (choice.delta.reasoning_content or "") if choice else ""

    @property
    def is_finished(self) -> bool:
        choice = self.first_choice
        return bool(choice and choice.finish_reason)
