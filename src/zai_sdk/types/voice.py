"""Voice cloning models."""

from __future__ import annotations

from pydantic import Field

from zai_sdk.types._base import RequestModel, ResponseModel


class VoiceCloneRequest(RequestModel):
    """Body of ``POST /voice/clone``.

    ``file_id`` refers to an uploaded sample with purpose ``voice-clone-input``.
    """

    voice_name: str
    text: str
    input: str
    file_id: str
    model: str
    request_id: str | None = None


class VoiceCloneResponse(ResponseModel):
    voice: str
    file_id: str | None = None
    file_purpose: str | None = None


class VoiceDeleteRequest(RequestModel):
    voice: str
    request_id: str | None = None


class VoiceDeleteResponse(ResponseModel):
    voice: str
    update_time: str | None = None


class VoiceListRequest(RequestModel):
    """Filters for ``GET /voice/list``; sent as query parameters."""

    voice_type: str | None = None
    voice_name: str | None = None
    request_id: str | None = None

    def to_params(self) -> list[tuple[str, str]]:
        params = []
        if self.voice_type:
            params.append(("voiceType", self.voice_type))
        if self.voice_name:
            params.append(("voiceName", self.voice_name))
        if self.request_id:
            params.append(("request_id", self.request_id))
        return params


class VoiceData(ResponseModel):
    voice: str
    voice_name: str | None = None
    voice_type: str | None = None
    download_url: str | None = None
    create_time: str | None = None


class VoiceListResponse(ResponseModel):
    voice_list: list[VoiceData] = Field(default_factory=list)
