"""Audio transcription resource for the Z.ai SDK."""

from __future__ import annotations

from typing import TYPE_CHECKING

from zai_sdk._http import FilePart, RequestDescriptor
from zai_sdk.types.audio import TranscriptionRequest, TranscriptionResponse

if TYPE_CHECKING:
    from zai_sdk._http import HTTPClient
    from zai_sdk.options import CallOptions


class AudioResource:
    """Speech-to-text operations.

    Example usage:
        with open("meeting.wav", "rb") as f:
            request = TranscriptionRequest(file=f, filename="meeting.wav")
            print(client.audio.transcribe(request).text)
    """

    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    def transcribe(
        self,
        request: TranscriptionRequest,
        *,
        options: CallOptions | None = None,
    ) -> TranscriptionResponse:
        """Transcribe an audio file (multipart upload)."""
        descriptor = RequestDescriptor(
            "POST",
            "/audio/transcriptions",
            files={"file": FilePart(request.file, request.filename)},
            data={
                "model": request.model,
                "language": request.language,
                "prompt": request.prompt,
                "response_format": request.response_format,
                "temperature": request.temperature,
            },
        )
        return self._http.request(descriptor, TranscriptionResponse, options)
