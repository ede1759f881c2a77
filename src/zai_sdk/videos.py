"""Video generation resource for the Z.ai SDK.

Video generation is asynchronous: :meth:`VideosResource.create` submits a
task, and :meth:`VideosResource.retrieve` reports its progress.

Example usage:
    task = client.videos.generate_text("A sunrise over the sea")
    result = client.videos.wait_for_completion(task.id)
    print(result.video_url)
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from zai_sdk._http import RequestDescriptor
from zai_sdk.exceptions import APITimeoutError, CancellationError
from zai_sdk.types.videos import (
    MODEL_COGVIDEOX,
    VideoGenerationRequest,
    VideoGenerationResponse,
    VideoResult,
)

if TYPE_CHECKING:
    from zai_sdk._http import HTTPClient
    from zai_sdk.options import CallOptions

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 5.0
DEFAULT_WAIT_TIMEOUT = 300.0


class VideosResource:
    """Video generation operations."""

    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    def create(
        self,
        request: VideoGenerationRequest,
        *,
        options: CallOptions | None = None,
    ) -> VideoGenerationResponse:
        """Submit a video generation task."""
        descriptor = RequestDescriptor("POST", "/videos/generations", json=request)
        return self._http.request(descriptor, VideoGenerationResponse, options)

    def generate_text(
        self,
        prompt: str,
        *,
        model: str = MODEL_COGVIDEOX,
        options: CallOptions | None = None,
    ) -> VideoGenerationResponse:
        """Submit a text-to-video task."""
        return self.create(VideoGenerationRequest(model=model, prompt=prompt), options=options)

    def generate_from_image(
        self,
        image_url: str,
        prompt: str | None = None,
        *,
        model: str = MODEL_COGVIDEOX,
        options: CallOptions | None = None,
    ) -> VideoGenerationResponse:
        """Submit an image-to-video task."""
        request = VideoGenerationRequest(model=model, image_url=image_url, prompt=prompt)
        return self.create(request, options=options)

    def retrieve(
        self,
        task_id: str,
        *,
        options: CallOptions | None = None,
    ) -> VideoResult:
        """Get the status (and result, once finished) of a task."""
        descriptor = RequestDescriptor("GET", f"/async-result/{task_id}")
        return self._http.request(descriptor, VideoResult, options)

    def wait_for_completion(
        self,
        task_id: str,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        timeout: float = DEFAULT_WAIT_TIMEOUT,
        *,
        options: CallOptions | None = None,
    ) -> VideoResult:
        """Poll a task until it completes or fails.

        A failed task is returned, not raised; check ``result.is_failed``.

        Args:
            task_id: Task id returned by :meth:`create`
            poll_interval: Seconds between status checks
            timeout: Seconds to wait before giving up
            options: Per-call overrides for each status check

        Raises:
            APITimeoutError: If the task is still running after ``timeout``
            CancellationError: If the options' cancellation token fires
        """
        cancellation = options.cancellation if options is not None else None
        deadline = time.monotonic() + timeout
        while True:
            result = self.retrieve(task_id, options=options)
            if result.is_terminal:
                return result

            logger.debug("Video task %s is %s", task_id, result.task_status)
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise APITimeoutError(
                    f"Video task {task_id} did not finish within {timeout}s"
                )
            delay = min(poll_interval, remaining)
            if cancellation is not None:
                if cancellation.wait(delay):
                    raise CancellationError(f"Waiting for video task {task_id} cancelled")
            else:
                time.sleep(delay)
