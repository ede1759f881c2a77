"""Batch jobs resource for the Z.ai SDK."""

from __future__ import annotations

from typing import TYPE_CHECKING

from zai_sdk._http import RequestDescriptor
from zai_sdk.types.batch import Batch, BatchCreateRequest, BatchList

if TYPE_CHECKING:
    from zai_sdk._http import HTTPClient
    from zai_sdk.options import CallOptions


class BatchesResource:
    """Batch job operations.

    Example usage:
        batch = client.batches.create(BatchCreateRequest(input_file_id="file-123"))
        batch = client.batches.retrieve(batch.id)
        if batch.is_completed:
            content = client.files.content(batch.output_file_id)
    """

    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    def create(
        self,
        request: BatchCreateRequest,
        *,
        options: CallOptions | None = None,
    ) -> Batch:
        """Create a batch from an uploaded JSONL file."""
        descriptor = RequestDescriptor("POST", "/batches", json=request)
        return self._http.request(descriptor, Batch, options)

    def retrieve(
        self,
        batch_id: str,
        *,
        options: CallOptions | None = None,
    ) -> Batch:
        descriptor = RequestDescriptor("GET", f"/batches/{batch_id}")
        return self._http.request(descriptor, Batch, options)

    def list(
        self,
        after: str | None = None,
        limit: int | None = None,
        *,
        options: CallOptions | None = None,
    ) -> BatchList:
        """List batches.

        Args:
            after: Cursor; return batches after this batch id
            limit: Maximum number of batches to return
            options: Per-call overrides
        """
        descriptor = RequestDescriptor(
            "GET", "/batches", params=(("after", after), ("limit", limit))
        )
        return self._http.request(descriptor, BatchList, options)

    def cancel(
        self,
        batch_id: str,
        *,
        options: CallOptions | None = None,
    ) -> Batch:
        descriptor = RequestDescriptor("POST", f"/batches/{batch_id}/cancel")
        return self._http.request(descriptor, Batch, options)
