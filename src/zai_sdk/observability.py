"""Per-attempt records emitted by the HTTP transport."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class AttemptRecord:
    """One HTTP attempt as seen by the transport.

    ``status`` is None when no response was received. ``retry_reason`` is the
    error kind that triggered a retry after this attempt, if any.
    """

    method: str
    path: str
    attempt: int
    status: int | None
    elapsed: float
    request_id: str | None
    streaming: bool
    retry_reason: str | None = None


AttemptSink = Callable[[AttemptRecord], None]


def null_sink(record: AttemptRecord) -> None:
    """Default sink; discards records."""


class RecordingSink:
    """Sink that keeps every record in memory."""

    def __init__(self) -> None:
        self.records: list[AttemptRecord] = []

    def __call__(self, record: AttemptRecord) -> None:
        self.records.append(record)

    def __len__(self) -> int:
        return len(self.records)
