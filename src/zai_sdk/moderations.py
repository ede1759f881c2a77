"""Content moderation resource for the Z.ai SDK."""

from __future__ import annotations

from typing import TYPE_CHECKING

from zai_sdk._http import RequestDescriptor
from zai_sdk.exceptions import APIError
from zai_sdk.types.moderation import ModerationRequest, ModerationResponse, ModerationResult

if TYPE_CHECKING:
    from zai_sdk._http import HTTPClient
    from zai_sdk.options import CallOptions


class ModerationsResource:
    """Content moderation operations.

    Example usage:
        result = client.moderations.check_text("moderation", "some text")
        if result.flagged:
            print(result.flagged_categories)
    """

    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    def create(
        self,
        request: ModerationRequest,
        *,
        options: CallOptions | None = None,
    ) -> ModerationResponse:
        """Classify one or more inputs."""
        descriptor = RequestDescriptor("POST", "/moderations", json=request)
        return self._http.request(descriptor, ModerationResponse, options)

    def check_text(
        self,
        model: str,
        text: str,
        *,
        options: CallOptions | None = None,
    ) -> ModerationResult:
        """Classify a single text.

        Raises:
            APIError: If the response carries no result
        """
        response = self.create(ModerationRequest(model=model, input=text), options=options)
        if not response.results:
            raise APIError("No moderation result returned")
        return response.results[0]

    def check_batch(
        self,
        model: str,
        texts: list[str],
        *,
        options: CallOptions | None = None,
    ) -> list[ModerationResult]:
        """Classify several texts; one result per input."""
        response = self.create(ModerationRequest(model=model, input=texts), options=options)
        return response.results
