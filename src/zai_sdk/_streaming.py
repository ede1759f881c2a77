"""Server-sent events decoding for streaming endpoints.

A :class:`Stream` owns an open HTTP response and turns its ``text/event-stream``
body into typed chunks, one per event:

    with client.chat.create_stream(request) as stream:
        for chunk in stream:
            print(chunk.content, end="")

The cursor style API is also available:

    while stream.advance():
        handle(stream.current)
    if stream.error is not None:
        raise stream.error
"""

from __future__ import annotations

import logging
import socket
import sys
import threading
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum
from types import TracebackType
from typing import Generic, TypeVar

import httpx

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from zai_sdk._constants import STREAM_DONE
from zai_sdk._decoding import decode_json
from zai_sdk.exceptions import (
    CancellationError,
    StreamingError,
    ZaiError,
)
from zai_sdk.options import CancellationToken

logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# Event Decoding
# =============================================================================


@dataclass(frozen=True)
class ServerSentEvent:
    """A single dispatched SSE event."""

    data: str
    event: str | None = None
    id: str | None = None
    retry: int | None = None

    @property
    def is_done(self) -> bool:
        return self.data.strip() == STREAM_DONE


class SSEDecoder:
    """Incremental line-oriented SSE parser.

    Feed lines without their terminators to :meth:`decode`. Multiple ``data``
    lines are joined with newlines; ``event``, ``id``, ``retry`` and comment
    lines are accepted. Events without data are dropped.

    A ``data: [DONE]`` line is dispatched immediately. If other data lines
    were pending at that point they are discarded and
    :attr:`discarded_partial` is set.
    """

    def __init__(self) -> None:
        self._data: list[str] = []
        self._event: str | None = None
        self._id: str | None = None
        self._retry: int | None = None
        self.discarded_partial = False

    @property
    def pending(self) -> bool:
        return bool(self._data)

    def decode(self, line: str) -> ServerSentEvent | None:
        line = line.rstrip("\r")
        if not line:
            return self._dispatch()

        if line.startswith(":"):
            return None

        name, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]

        if name == "data":
            if value.strip() == STREAM_DONE:
                if self._data:
                    self.discarded_partial = True
                self._reset()
                return ServerSentEvent(data=STREAM_DONE)
            self._data.append(value)
        elif name == "event":
            self._event = value
        elif name == "id":
            if "\0" not in value:
                self._id = value
        elif name == "retry":
            try:
                self._retry = int(value)
            except ValueError:
                pass
        return None

    def flush(self) -> ServerSentEvent | None:
        """Dispatch whatever is pending at end of body."""
        return self._dispatch()

    def _dispatch(self) -> ServerSentEvent | None:
        if not self._data:
            self._reset()
            return None
        sse = ServerSentEvent(
            data="\n".join(self._data),
            event=self._event,
            id=self._id,
            retry=self._retry,
        )
        self._reset()
        return sse

    def _reset(self) -> None:
        self._data = []
        self._event = None
        self._retry = None


# =============================================================================
# Stream Handle
# =============================================================================


class StreamState(str, Enum):
    OPEN = "open"
    ENDED = "ended"
    ERRORED = "errored"
    CLOSED = "closed"


class Stream(Generic[T]):
    """Pull-based iterator over typed SSE chunks.

    The stream owns the HTTP response body until it ends, fails, or is
    closed. :meth:`close` may be called from any thread and unblocks a
    pending :meth:`advance`.
    """

    def __init__(
        self,
        response: httpx.Response,
        cast_to: type[T],
        *,
        cancellation: CancellationToken | None = None,
        request_id: str | None = None,
        decoder: SSEDecoder | None = None,
    ) -> None:
        self.response = response
        self.request_id = request_id
        self._cast_to = cast_to
        self._decoder = decoder or SSEDecoder()
        self._lines = response.iter_lines()
        self._cancellation = cancellation
        self._state = StreamState.OPEN
        self._current: T | None = None
        self._error: ZaiError | None = None
        self._delivered = 0
        self._closed = False
        self._close_requested = False
        self._lock = threading.Lock()
        self._unregister: Callable[[], None] = lambda: None
        if cancellation is not None:
            self._unregister = cancellation.register(self._interrupt)

    # -------------------------------------------------------------------------
    # Cursor API
    # -------------------------------------------------------------------------

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def events_delivered(self) -> int:
        """Number of chunks handed out by :meth:`advance` so far."""
        return self._delivered

    @property
    def error(self) -> ZaiError | None:
        """Terminal error, or None if the stream is open or ended cleanly."""
        return self._error

    @property
    def current(self) -> T:
        """The chunk made available by the last successful :meth:`advance`.

        Raises:
            StreamingError: If no chunk is available
        """
        if self._current is None:
            raise StreamingError(
                "No chunk available; advance() must return True before reading current",
                events_delivered=self._delivered,
                request_id=self.request_id,
            )
        return self._current

    def advance(self) -> bool:
        """Block until the next chunk is ready.

        Returns:
            True if a chunk is available through :attr:`current`, False when
            the stream has ended, failed, or been closed
        """
        self._current = None
        if self._state is not StreamState.OPEN:
            return False
        if self._is_cancelled():
            self._fail(CancellationError("Stream cancelled", request_id=self.request_id))
            return False

        try:
            event = self._next_event()
        except (httpx.HTTPError, httpx.StreamError) as e:
            if not self._interrupted():
                error = StreamingError(
                    f"Stream interrupted after {self._delivered} events: {e}",
                    events_delivered=self._delivered,
                    request_id=self.request_id,
                )
                error.__cause__ = e
                self._fail(error)
            return False

        # A read cut short by close() or cancel() ends on EOF, not an exception
        if self._interrupted():
            return False

        if event is None:
            self._finish()
            return False

        if event.is_done:
            if self._decoder.discarded_partial:
                logger.warning("Discarded partial SSE event before [DONE]")
                self._fail(
                    StreamingError(
                        "Stream ended with a partial event pending",
                        events_delivered=self._delivered,
                        request_id=self.request_id,
                    )
                )
            else:
                self._finish()
            return False

        try:
            chunk = decode_json(event.data, self._cast_to, request_id=self.request_id)
        except ZaiError as e:
            self._fail(e)
            return False

        self._current = chunk
        self._delivered += 1
        return True

    def close(self) -> None:
        """Release the response body. Safe to call repeatedly."""
        self._close_requested = True
        self._interrupt()
        if self._state is StreamState.OPEN:
            self._state = StreamState.CLOSED

    def collect(self) -> list[T]:
        """Consume the remaining chunks into a list, raising on failure."""
        return list(self)

    # -------------------------------------------------------------------------
    # Python protocols
    # -------------------------------------------------------------------------

    def __iter__(self) -> Iterator[T]:
        try:
            while self.advance():
                yield self.current
        finally:
            self.close()
        if self._error is not None:
            raise self._error

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"Stream(state={self._state.value}, events_delivered={self._delivered})"
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _next_event(self) -> ServerSentEvent | None:
        for line in self._lines:
            sse = self._decoder.decode(line)
            if sse is not None:
                return sse
        return self._decoder.flush()

    def _is_cancelled(self) -> bool:
        return self._cancellation is not None and self._cancellation.cancelled

    def _interrupted(self) -> bool:
        """Settle the state if a cancel or a caller's close() cut the read short."""
        if self._is_cancelled():
            self._fail(CancellationError("Stream cancelled", request_id=self.request_id))
            return True
        if self._close_requested:
            self._state = StreamState.CLOSED
            return True
        return False

    def _fail(self, error: ZaiError) -> None:
        self._error = error
        self._state = StreamState.ERRORED
        self._release()

    def _finish(self) -> None:
        self._state = StreamState.ENDED
        self._release()

    def _release(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._unregister()
        self.response.close()

    def _interrupt(self) -> None:
        if self._state is StreamState.OPEN and not self._closed:
            self._shutdown_socket()
        self._release()

    def _shutdown_socket(self) -> None:
        """Wake a reader blocked in recv on the connection."""
        network_stream = self.response.extensions.get("network_stream")
        if network_stream is None:
            return
        sock = network_stream.get_extra_info("socket")
        if sock is None:
            return
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError as e:
            logger.debug("Socket shutdown on stream release failed: %s", e)
