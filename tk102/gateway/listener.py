"""Listener: accepts TK102 device connections and runs a session per socket."""

import asyncio
import errno
import logging
from collections.abc import Sequence
from types import TracebackType

from tk102.gateway.events import (
    ErrorEvent,
    ErrorKind,
    Event,
    ListeningEvent,
    Observer,
)
from tk102.gateway.session import ConnectionSession
from tk102.gateway.settings import Settings
from tk102.nmea.parser import DEFAULT_RECOGNIZERS, Recognizer

__all__ = ["Listener"]

logger = logging.getLogger(__name__)

_ADDRESS_UNAVAILABLE_ERRNOS = (errno.EADDRNOTAVAIL, errno.EADDRINUSE)

ADDRESS_UNAVAILABLE_REASON = "IP or port not available"
SERVER_ERROR_REASON = "Server error"


class Listener:
    """TCP listener for TK102 devices.

    Each accepted connection is handed to a ``ConnectionSession`` running
    in its own task. Connections arriving while ``settings.connections``
    sessions are open are closed straight away.

    Usage::

        async with Listener(Settings(port=5000), observer) as listener:
            await listener.serve_forever()

    Args:
        settings: Bind address, port, connection cap and session timeout.
        observer: Callable receiving every event of the listener and of
            all its sessions.
        recognizers: Sentence recognizers handed to every session.
    """

    def __init__(
        self,
        settings: Settings,
        observer: Observer,
        recognizers: Sequence[Recognizer] = DEFAULT_RECOGNIZERS,
    ) -> None:
        self.settings = settings
        self._observer = observer
        self._recognizers = tuple(recognizers)
        self._server: asyncio.Server | None = None
        self._sessions: set[ConnectionSession] = set()

    async def __aenter__(self) -> "Listener":
        if not await self.start():
            raise OSError(f"Cannot listen on {self.settings.ip}:{self.settings.port}")
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    @property
    def address(self) -> tuple[str, int] | None:
        """Bound ``(host, port)``, or None before a successful start."""
        if self._server is None or not self._server.sockets:
            return None
        host, port = self._server.sockets[0].getsockname()[:2]
        return host, port

    @property
    def port(self) -> int | None:
        address = self.address
        return address[1] if address is not None else None

    @property
    def active_connections(self) -> int:
        return len(self._sessions)

    @property
    def is_serving(self) -> bool:
        return self._server is not None and self._server.is_serving()

    def _notify(self, event: Event) -> None:
        try:
            self._observer(event)
        except Exception:
            logger.exception("Observer failed on %s event", event.kind)

    def _emit_bind_error(self, error: OSError) -> None:
        if error.errno in _ADDRESS_UNAVAILABLE_ERRNOS:
            error_kind, reason = ErrorKind.ADDRESS_UNAVAILABLE, ADDRESS_UNAVAILABLE_REASON
        else:
            error_kind, reason = ErrorKind.SERVER, SERVER_ERROR_REASON
        logger.error("%s: %s", reason, error)
        self._notify(
            ErrorEvent(
                error_kind=error_kind,
                reason=reason,
                detail=str(error),
                settings=self.settings,
            )
        )

    async def start(self) -> bool:
        """Bind and start accepting connections.

        Returns:
            True once listening. False if binding failed, in which case an
            ``ErrorEvent`` was emitted; retrying is up to the caller.
        """
        try:
            self._server = await asyncio.start_server(
                self._handle_connection,
                self.settings.ip,
                self.settings.port,
                backlog=self.settings.connections,
            )
        except OSError as error:
            self._emit_bind_error(error)
            return False

        address = self.address
        logger.info("Listening on %s:%s", *address)
        self._notify(ListeningEvent(address=address))
        return True

    async def _handle_connection(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
    ) -> None:
        if len(self._sessions) >= self.settings.connections:
            logger.warning(
                "Rejecting %s: %d connections open",
                writer.get_extra_info("peername"),
                len(self._sessions),
            )
            writer.close()
            return

        session = ConnectionSession(
            reader, writer, self.settings, self._observer, self._recognizers
        )
        self._sessions.add(session)
        try:
            await session.run()
        finally:
            self._sessions.discard(session)

    async def serve_forever(self) -> None:
        """Accept connections until cancelled.

        Raises:
            RuntimeError: If called before a successful ``start()``.
        """
        if self._server is None:
            raise RuntimeError("Listener must be started before serving.")
        await self._server.serve_forever()

    async def close(self) -> None:
        """Stop accepting and abort every open session."""
        if self._server is None:
            return
        self._server.close()
        for session in list(self._sessions):
            session.abort()
        await self._server.wait_closed()
        self._server = None
