"""Embeddings resource for the Z.ai SDK."""

from __future__ import annotations

from typing import TYPE_CHECKING

from zai_sdk._http import RequestDescriptor
from zai_sdk.exceptions import APIError
from zai_sdk.types.embeddings import EmbeddingRequest, EmbeddingResponse

if TYPE_CHECKING:
    from zai_sdk._http import HTTPClient
    from zai_sdk.options import CallOptions


class EmbeddingsResource:
    """Text embedding operations.

    Example usage:
        vector = client.embeddings.create_single("embedding-3", "Hello")
        vectors = client.embeddings.create_batch("embedding-3", ["a", "b"])
    """

    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    def create(
        self,
        request: EmbeddingRequest,
        *,
        options: CallOptions | None = None,
    ) -> EmbeddingResponse:
        """Embed one or more texts."""
        descriptor = RequestDescriptor("POST", "/embeddings", json=request)
        return self._http.request(descriptor, EmbeddingResponse, options)

    def create_single(
        self,
        model: str,
        text: str,
        *,
        options: CallOptions | None = None,
    ) -> list[float]:
        """Embed one text and return its vector.

        Raises:
            APIError: If the response carries no embedding
        """
        response = self.create(EmbeddingRequest(model=model, input=text), options=options)
        vectors = response.vectors
        if not vectors:
            raise APIError("No embedding data returned")
        return vectors[0]

    def create_batch(
        self,
        model: str,
        texts: list[str],
        *,
        options: CallOptions | None = None,
    ) -> list[list[float]]:
        """Embed several texts; vectors are returned in input order."""
        response = self.create(EmbeddingRequest(model=model, input=texts), options=options)
        return response.vectors
