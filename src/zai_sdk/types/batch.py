"""Batch job models."""

from __future__ import annotations

from pydantic import Field

from zai_sdk.types._base import RequestModel, ResponseModel

STATUS_VALIDATING = "validating"
STATUS_FAILED = "failed"
STATUS_IN_PROGRESS = "in_progress"
STATUS_FINALIZING = "finalizing"
STATUS_COMPLETED = "completed"
STATUS_EXPIRED = "expired"
STATUS_CANCELLING = "cancelling"
STATUS_CANCELLED = "cancelled"

ENDPOINT_CHAT_COMPLETIONS = "/v1/chat/completions"
ENDPOINT_EMBEDDINGS = "/v1/embeddings"


class BatchCreateRequest(RequestModel):
    """Body of ``POST /batches``."""

    input_file_id: str
    endpoint: str = ENDPOINT_CHAT_COMPLETIONS
    completion_window: str = "24h"
    metadata: dict[str, str] | None = None
    auto_delete_input_file: bool | None = None


class BatchError(ResponseModel):
    code: str | None = None
    line: int | None = None
    message: str | None = None
    param: str | None = None


class BatchErrors(ResponseModel):
    object: str | None = None
    data: list[BatchError] = Field(default_factory=list)


class BatchRequestCounts(ResponseModel):
    completed: int = 0
    failed: int = 0
    total: int = 0


class Batch(ResponseModel):
    id: str
    object: str = "batch"
    endpoint: str = ""
    input_file_id: str = ""
    completion_window: str = ""
    status: str = ""
    created_at: int | None = None
    in_progress_at: int | None = None
    finalizing_at: int | None = None
    completed_at: int | None = None
    failed_at: int | None = None
    expired_at: int | None = None
    expires_at: int | None = None
    cancelling_at: int | None = None
    cancelled_at: int | None = None
    output_file_id: str | None = None
    error_file_id: str | None = None
    errors: BatchErrors | None = None
    metadata: dict[str, str] | None = None
    request_counts: BatchRequestCounts | None = None

    @property
    def is_completed(self) -> bool:
        return self.status == STATUS_COMPLETED

    @property
    def is_failed(self) -> bool:
        return self.status == STATUS_FAILED

    @property
    def is_cancelled(self) -> bool:
        return self.status == STATUS_CANCELLED

    @property
    def is_active(self) -> bool:
        """Validating, in progress, or finalizing."""
        return self.status in (STATUS_VALIDATING, STATUS_IN_PROGRESS, STATUS_FINALIZING)

    @property
    def is_terminal(self) -> bool:
        """Completed, failed, expired, or cancelled."""
        return self.status in (
            STATUS_COMPLETED,
            STATUS_FAILED,
            STATUS_EXPIRED,
            STATUS_CANCELLED,
        )


class BatchList(ResponseModel):
    object: str = "list"
    data: list[Batch] = Field(default_factory=list)
    first_id: str | None = None
    last_id: str | None = None
    has_more: bool = False
