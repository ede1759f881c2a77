"""Per-call options and cancellation for the Z.ai SDK.

Example usage:
    token = CancellationToken()
    options = CallOptions(timeout=30, cancellation=token)

    stream = client.chat.create_stream(request, options=options)
    # From another thread:
    token.cancel()
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


class CancellationToken:
    """Thread-safe cancellation handle shared between a caller and a call.

    Callbacks registered with :meth:`register` run once, on the thread that
    calls :meth:`cancel`. Registering on an already cancelled token runs the
    callback immediately.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: list[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Cancel every call and stream that carries this token."""
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks = list(self._callbacks)
            self._callbacks.clear()

        for callback in callbacks:
            try:
                callback()
            except Exception:
                logger.exception("Cancellation callback failed")

    def wait(self, timeout: float | None = None) -> bool:
        """Block up to ``timeout`` seconds; return True if cancelled."""
        return self._event.wait(timeout)

    def register(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Run ``callback`` on cancellation. Returns an unregister function."""
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)

                def unregister() -> None:
                    with self._lock:
                        if callback in self._callbacks:
                            self._callbacks.remove(callback)

                return unregister

        callback()
        return lambda: None

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.cancelled})"


@dataclass(frozen=True)
class CallOptions:
    """Overrides for a single call.

    Attributes:
        timeout: Total deadline in seconds, retries included (defaults to the
            client's configured timeout)
        max_retries: Retry budget override
        idempotency_key: Sent as ``X-Request-Id`` on every attempt
        cancellation: Token that cancels the call and any resulting stream
        accept_language: ``Accept-Language`` override
        extra_headers: Additional headers merged into the request
    """

    timeout: float | None = None
    max_retries: int | None = None
    idempotency_key: str | None = None
    cancellation: CancellationToken | None = None
    accept_language: str | None = None
    extra_headers: Mapping[str, str] = field(default_factory=dict)
