"""Tests for websocket payload routing logic."""

import json

from fastapi.testclient import TestClient

from server.formatters import format_event, format_track_message
from server.main import app
from tk102.gateway import ListeningEvent, TrackEvent
from tk102.nmea import parse_gprmc
from tests.sentences import SAMPLE, SOUTH_WEST
from tests.server.helpers import listener_port, send_from_device


def test_track_message_routing() -> None:
    with TestClient(app) as client, client.websocket_connect("/ws") as websocket:
        send_from_device(listener_port(app), (SAMPLE + "\n").encode())
        data = websocket.receive_json()
        assert data["type"] == "track"
        assert data["imei"] == "123456789012345"
        assert data["datetime"] == "2012-03-29 23:16"
        assert data["gps"]["fix"] == "active"
        assert data["geo"] == {"latitude": 52.217078, "longitude": 5.279595, "bearing": 273}
        assert data["speed"] == {"knots": 0.0, "kmh": 0.0, "mph": 0.0}
        assert data["checksum"] is True


def test_fail_message_routing() -> None:
    with TestClient(app) as client, client.websocket_connect("/ws") as websocket:
        send_from_device(listener_port(app), b"not a report")
        data = websocket.receive_json()
        assert data == {
            "type": "fail",
            "reason": "Cannot parse GPS data from device",
            "input": "not a report",
        }


def test_messages_follow_device_order() -> None:
    with TestClient(app) as client, client.websocket_connect("/ws") as websocket:
        send_from_device(listener_port(app), SAMPLE.encode())
        assert websocket.receive_json()["phone"] == "0031698765432"
        send_from_device(listener_port(app), SOUTH_WEST.encode())
        assert websocket.receive_json()["phone"] == "0031600000000"


def test_track_message_is_plain_json() -> None:
    report = parse_gprmc(SAMPLE)
    assert json.loads(format_track_message(report)) == {"type": "track", **report.as_dict()}
    assert format_event(TrackEvent(report=report)) == format_track_message(report)


def test_unstreamed_events_are_skipped() -> None:
    assert format_event(ListeningEvent(address=("127.0.0.1", 5000))) is None
