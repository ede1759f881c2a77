"""Content moderation models."""

from __future__ import annotations

from pydantic import ConfigDict, Field

from zai_sdk.types._base import RequestModel, ResponseModel


class ModerationRequest(RequestModel):
    """Body of ``POST /moderations``."""

    model: str
    input: str | list[str]


class ModerationCategories(ResponseModel):
    model_config = ConfigDict(populate_by_name=True)

    harassment: bool = False
    harassment_threatening: bool = Field(False, alias="harassment/threatening")
    hate: bool = False
    hate_threatening: bool = Field(False, alias="hate/threatening")
    self_harm: bool = Field(False, alias="self-harm")
    self_harm_instructions: bool = Field(False, alias="self-harm/instructions")
    self_harm_intent: bool = Field(False, alias="self-harm/intent")
    sexual: bool = False
    sexual_minors: bool = Field(False, alias="sexual/minors")
    violence: bool = False
    violence_graphic: bool = Field(False, alias="violence/graphic")


class ModerationCategoryScores(ResponseModel):
    model_config = ConfigDict(populate_by_name=True)

    harassment: float = 0.0
    harassment_threatening: float = Field(0.0, alias="harassment/threatening")
    hate: float = 0.0
    hate_threatening: float = Field(0.0, alias="hate/threatening")
    self_harm: float = Field(0.0, alias="self-harm")
    self_harm_instructions: float = Field(0.0, alias="self-harm/instructions")
    self_harm_intent: float = Field(0.0, alias="self-harm/intent")
    sexual: float = 0.0
    sexual_minors: float = Field(0.0, alias="sexual/minors")
    violence: float = 0.0
    violence_graphic: float = Field(0.0, alias="violence/graphic")


class ModerationResult(ResponseModel):
    flagged: bool = False
    categories: ModerationCategories = Field(default_factory=ModerationCategories)
    category_scores: ModerationCategoryScores = Field(
        default_factory=ModerationCategoryScores
    )

    @property
    def flagged_categories(self) -> list[str]:
        """Wire names of the categories that were flagged."""
        data = self.categories.model_dump(by_alias=True)
        return [name for name, flagged in data.items() if flagged]


class ModerationResponse(ResponseModel):
    id: str | None = None
    model: str | None = None
    results: list[ModerationResult] = Field(default_factory=list)

    @property
    def flagged(self) -> bool:
        return any(result.flagged for result in self.results)
