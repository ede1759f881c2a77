"""Voice cloning resource for the Z.ai SDK."""

from __future__ import annotations

from typing import TYPE_CHECKING

from zai_sdk._http import RequestDescriptor
from zai_sdk.types.voice import (
    VoiceCloneRequest,
    VoiceCloneResponse,
    VoiceDeleteRequest,
    VoiceDeleteResponse,
    VoiceListRequest,
    VoiceListResponse,
)

if TYPE_CHECKING:
    from zai_sdk._http import HTTPClient
    from zai_sdk.options import CallOptions


class VoiceResource:
    """Voice clone management."""

    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    def clone(
        self,
        request: VoiceCloneRequest,
        *,
        options: CallOptions | None = None,
    ) -> VoiceCloneResponse:
        """Create a cloned voice from an uploaded sample."""
        descriptor = RequestDescriptor("POST", "/voice/clone", json=request)
        return self._http.request(descriptor, VoiceCloneResponse, options)

    def delete(
        self,
        request: VoiceDeleteRequest,
        *,
        options: CallOptions | None = None,
    ) -> VoiceDeleteResponse:
        descriptor = RequestDescriptor("POST", "/voice/delete", json=request)
        return self._http.request(descriptor, VoiceDeleteResponse, options)

    def list(
        self,
        request: VoiceListRequest | None = None,
        *,
        options: CallOptions | None = None,
    ) -> VoiceListResponse:
        """List voices, optionally filtered by type or name."""
        params = request.to_params() if request is not None else []
        descriptor = RequestDescriptor("GET", "/voice/list", params=params)
        return self._http.request(descriptor, VoiceListResponse, options)
