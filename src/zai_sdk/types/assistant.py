"""Assistant conversation models.

Choices in an assistant completion carry a polymorphic ``delta``: either a
text block (``type == "content"``) or a tool block (``type == "tools"``).
Match on the variant class, or on its ``variant`` tag:

    for choice in completion.choices:
        if isinstance(choice.delta, ToolsDeltaBlock):
            print(choice.delta.tool_name, choice.delta.tool_output)
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar, Literal, Union

from pydantic import Discriminator, Field, Tag

from zai_sdk.types._base import RequestModel, ResponseModel
from zai_sdk.types._unions import delta_block_tag

# =============================================================================
# Request
# =============================================================================


class MessageTextContent(ResponseModel):
    type: Literal["text"] = "text"
    text: str


class ConversationMessage(ResponseModel):
    role: str
    content: list[MessageTextContent] = Field(default_factory=list)

    @classmethod
    def user_text(cls, text: str) -> ConversationMessage:
        return cls(role="user", content=[MessageTextContent(text=text)])


class AssistantAttachment(ResponseModel):
    file_id: str


class TranslateParameters(ResponseModel):
    from_language: str | None = None
    to_language: str | None = None


class ExtraParameters(ResponseModel):
    translate: TranslateParameters | None = None


class ConversationRequest(RequestModel):
    """Body of ``POST /assistant``."""

    assistant_id: str
    messages: list[ConversationMessage] = Field(default_factory=list)
    model: str | None = None
    stream: bool = False
    conversation_id: str | None = None
    attachments: list[AssistantAttachment] | None = None
    metadata: dict[str, Any] | None = None
    request_id: str | None = None
    user_id: str | None = None
    extra_parameters: ExtraParameters | None = None

    def with_user_message(self, text: str) -> ConversationRequest:
        return self.replace(
            messages=[*self.messages, ConversationMessage.user_text(text)]
        )

    def with_attachment(self, file_id: str) -> ConversationRequest:
        return self.replace(
            attachments=[*(self.attachments or []), AssistantAttachment(file_id=file_id)]
        )

    def with_translation(
        self, from_language: str, to_language: str
    ) -> ConversationRequest:
        return self.replace(
            extra_parameters=ExtraParameters(
                translate=TranslateParameters(
                    from_language=from_language, to_language=to_language
                )
            )
        )


# =============================================================================
# Completion
# =============================================================================


class ErrorInfo(ResponseModel):
    code: str | int | None = None
    message: str | None = None


class TextContentBlock(ResponseModel):
    variant: ClassVar[str] = "text-block"

    type: Literal["content"] = "content"
    content: str = ""
    role: str | None = None


class ToolsDeltaBlock(ResponseModel):
    variant: ClassVar[str] = "tool-use"

    type: Literal["tools"] = "tools"
    tool_call_id: str | None = None
    tool_name: str | None = None
    tool_output: str | None = None


DeltaBlock = Annotated[
    Union[
        Annotated[TextContentBlock, Tag("content")],
        Annotated[ToolsDeltaBlock, Tag("tools")],
    ],
    Discriminator(delta_block_tag),
]


class CompletionUsage(ResponseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class AssistantChoice(ResponseModel):
    index: int = 0
    delta: DeltaBlock | None = None
    finish_reason: str | None = None
    metadata: dict[str, Any] | None = None


class AssistantCompletion(ResponseModel):
    """A full assistant response, or one event of a streamed one."""

    id: str | None = None
    conversation_id: str | None = None
    assistant_id: str | None = None
    created: int | None = None
    status: str | None = None
    last_error: ErrorInfo | None = None
    choices: list[AssistantChoice] = Field(default_factory=list)
    metadata: dict[str, Any] | None = None
    usage: CompletionUsage | None = None

    @property
    def first_choice(self) -> AssistantChoice | None:
        return self.choices[0] if self.choices else None

    @property
    def content(self) -> str:
        """Text of the first choice; empty when it is not a text block."""
        choice = self.first_choice
        if choice is not None and isinstance(choice.delta, TextContentBlock):
            return choice.delta.content
        return ""

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"

    @property
    def has_error(self) -> bool:
        return self.last_error is not None and bool(
            self.last_error.code or self.last_error.message
        )


# =============================================================================
# Support and Usage Queries
# =============================================================================


class AssistantSupport(ResponseModel):
    assistant_id: str
    created_at: int | None = None
    updated_at: int | None = None
    name: str | None = None
    avatar: str | None = None
    description: str | None = None
    status: str | None = None
    tools: list[str] = Field(default_factory=list)
    starter_prompts: list[str] = Field(default_factory=list)


class AssistantSupportResponse(ResponseModel):
    code: int = 0
    msg: str | None = None
    data: list[AssistantSupport] = Field(default_factory=list)


class ConversationUsage(ResponseModel):
    id: str
    assistant_id: str | None = None
    create_time: int | None = None
    update_time: int | None = None
    usage: CompletionUsage = Field(default_factory=CompletionUsage)


class ConversationUsageList(ResponseModel):
    assistant_id: str | None = None
    has_more: bool = False
    conversation_list: list[ConversationUsage] = Field(default_factory=list)


class ConversationUsageResponse(ResponseModel):
    code: int = 0
    msg: str | None = None
    data: ConversationUsageList = Field(default_factory=ConversationUsageList)
