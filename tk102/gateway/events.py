"""Typed events emitted by the listener and its connection sessions.

Every event carries a ``kind`` string so consumers can dispatch on it
without isinstance checks (e.g. when serializing to JSON):

    listening   ListeningEvent   the listener is bound
    connection  ConnectionEvent  a device connected
    data        DataEvent        a raw chunk arrived on a session
    timeout     TimeoutEvent     a session hit its watchdog and was aborted
    track       TrackEvent       a closed session parsed into a report
    fail        FailEvent        a closed session could not be parsed
    error       ErrorEvent       a socket or bind error
"""

import asyncio
import enum
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from tk102.gateway.settings import Settings
from tk102.nmea.types import ParsedReport

if TYPE_CHECKING:
    from tk102.gateway.session import ConnectionSession

__all__ = [
    "ConnectionEvent",
    "DataEvent",
    "ErrorEvent",
    "ErrorKind",
    "Event",
    "FailEvent",
    "ListeningEvent",
    "Observer",
    "ParseFailure",
    "TimeoutEvent",
    "TrackEvent",
    "queue_observer",
]


class ErrorKind(enum.Enum):
    SOCKET = "socket"
    ADDRESS_UNAVAILABLE = "address_unavailable"
    SERVER = "server"


@dataclass(frozen=True)
class ListeningEvent:
    kind: ClassVar[str] = "listening"
    address: tuple[str, int]


@dataclass(frozen=True)
class ConnectionEvent:
    kind: ClassVar[str] = "connection"
    session: "ConnectionSession"


@dataclass(frozen=True)
class DataEvent:
    kind: ClassVar[str] = "data"
    session: "ConnectionSession"
    chunk: bytes


@dataclass(frozen=True)
class TimeoutEvent:
    kind: ClassVar[str] = "timeout"
    session: "ConnectionSession"


@dataclass(frozen=True)
class TrackEvent:
    kind: ClassVar[str] = "track"
    report: ParsedReport


@dataclass(frozen=True)
class ParseFailure:
    """Why a session's payload produced no report.

    Attributes:
        reason: Human-readable failure message.
        session: The session the payload arrived on.
        input: The full decoded payload.
    """

    reason: str
    session: "ConnectionSession"
    input: str


@dataclass(frozen=True)
class FailEvent:
    kind: ClassVar[str] = "fail"
    error: ParseFailure


@dataclass(frozen=True)
class ErrorEvent:
    """A socket or bind error.

    Attributes:
        error_kind: Which failure this is; ``ADDRESS_UNAVAILABLE`` marks a
            bind to an address or port that cannot be used.
        reason: Short description ("Socket error", "IP or port not
            available", "Server error").
        detail: The underlying OS error message.
        settings: Listener settings in effect.
        session: Affected session, or None for bind errors.
    """

    kind: ClassVar[str] = "error"
    error_kind: ErrorKind
    reason: str
    detail: str
    settings: Settings
    session: "ConnectionSession | None" = field(default=None)


Event = (
    ListeningEvent
    | ConnectionEvent
    | DataEvent
    | TimeoutEvent
    | TrackEvent
    | FailEvent
    | ErrorEvent
)

Observer = Callable[[Event], None]


def queue_observer(queue: "asyncio.Queue[Event]") -> Observer:
    """Return an observer that puts every event on *queue*.

    The observer must be called from the queue's event loop.
    """
    return queue.put_nowait
