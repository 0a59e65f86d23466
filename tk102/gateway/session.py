"""ConnectionSession: one accepted device socket.

A TK102 device opens a connection, writes one report and hangs up, so the
session does not frame messages. It buffers every byte until the peer
closes (or the watchdog aborts the connection) and parses the whole payload
once.

Lifecycle:

    OPEN   -- accepted; watchdog armed; chunks buffered as they arrive
    CLOSED -- end of stream, abort or socket error; payload parsed once

The watchdog is fixed: it starts with the connection and incoming data
does not push it back.
"""

import asyncio
import contextlib
import enum
import logging
from collections.abc import Sequence
from typing import Any

from tk102.gateway.events import (
    ConnectionEvent,
    DataEvent,
    ErrorEvent,
    ErrorKind,
    Event,
    FailEvent,
    Observer,
    ParseFailure,
    TimeoutEvent,
    TrackEvent,
)
from tk102.gateway.settings import Settings
from tk102.nmea.parser import DEFAULT_RECOGNIZERS, Recognizer, parse

__all__ = ["ConnectionSession", "SessionState"]

logger = logging.getLogger(__name__)

_READ_SIZE = 4096

PARSE_FAILURE_REASON = "Cannot parse GPS data from device"
SOCKET_ERROR_REASON = "Socket error"


class SessionState(enum.Enum):
    OPEN = "open"
    CLOSED = "closed"


class ConnectionSession:
    """Buffers one device connection and reports its parsed payload.

    Args:
        reader: Stream reader of the accepted connection.
        writer: Stream writer of the accepted connection. The session never
            writes to the device; the writer is used to abort and close.
        settings: Listener settings; ``settings.timeout`` arms the watchdog.
        observer: Callable receiving every event this session emits.
        recognizers: Sentence recognizers tried in order on close.
    """

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        settings: Settings,
        observer: Observer,
        recognizers: Sequence[Recognizer] = DEFAULT_RECOGNIZERS,
    ) -> None:
        self._reader = reader
        self._writer = writer
        self._settings = settings
        self._observer = observer
        self._recognizers = recognizers
        self._chunks: list[bytes] = []
        self._size = 0
        self._timer: asyncio.TimerHandle | None = None
        self._timed_out = False
        self.state = SessionState.OPEN
        self.peername: Any = writer.get_extra_info("peername")

    def __repr__(self) -> str:
        return f"<ConnectionSession peer={self.peername!r} state={self.state.value}>"

    @property
    def size(self) -> int:
        """Number of bytes buffered so far."""
        return self._size

    @property
    def timed_out(self) -> bool:
        return self._timed_out

    def abort(self) -> None:
        """Drop the connection immediately, without a graceful shutdown.

        Any pending read on this session observes end of stream.
        """
        self._writer.transport.abort()

    def _emit(self, event: Event) -> None:
        try:
            self._observer(event)
        except Exception:
            logger.exception("Observer failed on %s event from %s", event.kind, self.peername)

    def _arm_watchdog(self) -> None:
        if self._settings.timeout > 0:
            loop = asyncio.get_running_loop()
            self._timer = loop.call_later(self._settings.timeout, self._on_timeout)

    def _cancel_watchdog(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timeout(self) -> None:
        self._timer = None
        if self.state is SessionState.CLOSED:
            return
        self._timed_out = True
        logger.info("Session %s timed out after %ss", self.peername, self._settings.timeout)
        self._emit(TimeoutEvent(session=self))
        self.abort()

    def _on_data(self, chunk: bytes) -> None:
        self._chunks.append(chunk)
        self._size += len(chunk)
        self._emit(DataEvent(session=self, chunk=chunk))

    def _on_error(self, error: OSError) -> None:
        logger.warning("Socket error on %s: %s", self.peername, error)
        self._emit(
            ErrorEvent(
                error_kind=ErrorKind.SOCKET,
                reason=SOCKET_ERROR_REASON,
                detail=str(error),
                settings=self._settings,
                session=self,
            )
        )

    def _on_close(self) -> None:
        self._cancel_watchdog()
        self.state = SessionState.CLOSED
        payload = b"".join(self._chunks).decode("utf-8", errors="replace")
        logger.debug("Session %s closed with %d bytes", self.peername, self._size)

        if payload == "":
            return

        report = parse(payload, self._recognizers)
        if report is not None:
            self._emit(TrackEvent(report=report))
            return

        self._emit(
            FailEvent(
                error=ParseFailure(reason=PARSE_FAILURE_REASON, session=self, input=payload)
            )
        )

    async def _read_until_closed(self) -> None:
        try:
            while True:
                chunk = await self._reader.read(_READ_SIZE)
                if not chunk:
                    return
                self._on_data(chunk)
        except OSError as error:
            self._on_error(error)

    async def _close_writer(self) -> None:
        self._writer.close()
        with contextlib.suppress(OSError):
            await self._writer.wait_closed()

    async def run(self) -> None:
        """Drive the session from accept to close.

        Returns once the connection is closed and the payload, if any, has
        been reported.
        """
        logger.debug("Session opened from %s", self.peername)
        self._arm_watchdog()
        self._emit(ConnectionEvent(session=self))
        try:
            await self._read_until_closed()
        finally:
            self._cancel_watchdog()
            await self._close_writer()
            self._on_close()
