"""Embedding models."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from zai_sdk.types._base import RequestModel, ResponseModel
from zai_sdk.types.shared import Usage


class EmbeddingRequest(RequestModel):
    """Body of ``POST /embeddings``. ``input`` is one text or a list of texts."""

    model: str
    input: str | list[str]
    dimensions: int | None = None
    encoding_format: Literal["float", "base64"] | None = None
    user: str | None = None
    request_id: str | None = None


class Embedding(ResponseModel):
    object: str = "embedding"
    index: int = 0
    embedding: list[float] | str

    @property
    def vector(self) -> list[float]:
        """The embedding as floats (empty for base64 encoded results)."""
        return list(self.embedding) if isinstance(self.embedding, list) else []


class EmbeddingResponse(ResponseModel):
    object: str = "list"
    model: str | None = None
    data: list[Embedding] = Field(default_factory=list)
    usage: Usage | None = None

    @property
    def vectors(self) -> list[list[float]]:
        return [item.vector for item in sorted(self.data, key=lambda e: e.index)]
