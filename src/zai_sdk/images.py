"""Image generation resource for the Z.ai SDK."""

from __future__ import annotations

from typing import TYPE_CHECKING

from zai_sdk._http import RequestDescriptor
from zai_sdk.exceptions import APIError
from zai_sdk.types.images import ImageGenerationRequest, ImageGenerationResponse

if TYPE_CHECKING:
    from zai_sdk._http import HTTPClient
    from zai_sdk.options import CallOptions


class ImagesResource:
    """Image generation operations.

    Example usage:
        url = client.images.generate("cogview-4", "A cat on a windowsill")
    """

    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    def create(
        self,
        request: ImageGenerationRequest,
        *,
        options: CallOptions | None = None,
    ) -> ImageGenerationResponse:
        """Generate images from a prompt."""
        descriptor = RequestDescriptor("POST", "/images/generations", json=request)
        return self._http.request(descriptor, ImageGenerationResponse, options)

    def generate(
        self,
        model: str,
        prompt: str,
        *,
        options: CallOptions | None = None,
    ) -> str:
        """Generate one image and return its URL.

        Raises:
            APIError: If the response carries no image URL
        """
        return self.generate_multiple(model, prompt, 1, options=options)[0]

    def generate_multiple(
        self,
        model: str,
        prompt: str,
        n: int,
        *,
        options: CallOptions | None = None,
    ) -> list[str]:
        """Generate ``n`` images and return their URLs.

        Raises:
            APIError: If the response carries no image URL
        """
        request = ImageGenerationRequest(model=model, prompt=prompt, n=n)
        urls = self.create(request, options=options).urls
        if not urls:
            raise APIError("No image data returned")
        return urls
