"""TCP gateway accepting TK102 device connections."""

from tk102.gateway.events import (
    ConnectionEvent,
    DataEvent,
    ErrorEvent,
    ErrorKind,
    Event,
    FailEvent,
    ListeningEvent,
    Observer,
    ParseFailure,
    TimeoutEvent,
    TrackEvent,
    queue_observer,
)
from tk102.gateway.listener import Listener
from tk102.gateway.session import ConnectionSession, SessionState
from tk102.gateway.settings import Settings

__all__ = [
    "ConnectionEvent",
    "ConnectionSession",
    "DataEvent",
    "ErrorEvent",
    "ErrorKind",
    "Event",
    "FailEvent",
    "Listener",
    "ListeningEvent",
    "Observer",
    "ParseFailure",
    "SessionState",
    "Settings",
    "TimeoutEvent",
    "TrackEvent",
    "queue_observer",
]
