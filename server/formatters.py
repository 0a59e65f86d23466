"""JSON formatting utilities for gateway events."""

import json

from tk102.gateway.events import Event, FailEvent, TrackEvent
from tk102.nmea.types import ParsedReport

__all__ = ["format_event", "format_fail_message", "format_track_message"]


def format_track_message(report: ParsedReport) -> str:
    """Serialize a parsed report into a JSON string for WebSocket transmission."""
    return json.dumps({"type": "track", **report.as_dict()})


def format_fail_message(event: FailEvent) -> str:
    """Serialize a parse failure; the session itself is not serializable."""
    return json.dumps({
        "type": "fail",
        "reason": event.error.reason,
        "input": event.error.input,
    })


def format_event(event: Event) -> str | None:
    """Return the WebSocket message for *event*, or None if it is not streamed."""
    if isinstance(event, TrackEvent):
        return format_track_message(event.report)
    if isinstance(event, FailEvent):
        return format_fail_message(event)
    return None
