"""Tests for websocket concurrency and connection lifecycle."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import WebSocketDisconnect
from fastapi.testclient import TestClient

from server.broadcaster import _enqueue_message, subscriber_count
from server.main import _forward_queue_to_websocket, app
from tests.sentences import SAMPLE
from tests.server.helpers import listener_port, send_from_device


def test_multiple_clients() -> None:
    with (
        TestClient(app) as client,
        client.websocket_connect("/ws") as socket_one,
        client.websocket_connect("/ws") as socket_two,
    ):
        send_from_device(listener_port(app), SAMPLE.encode())
        assert socket_one.receive_json()["type"] == "track"
        assert socket_two.receive_json()["type"] == "track"


def test_subscriber_removed_on_disconnect() -> None:
    with TestClient(app) as client:
        with client.websocket_connect("/ws"):
            assert subscriber_count() == 1
        assert subscriber_count() == 0


def test_drop_oldest_overflow() -> None:
    message_queue: asyncio.Queue[str] = asyncio.Queue(maxsize=2)
    _enqueue_message(message_queue, "message_one")
    _enqueue_message(message_queue, "message_two")
    _enqueue_message(message_queue, "message_three")
    assert message_queue.qsize() == 2
    assert message_queue.get_nowait() == "message_two"
    assert message_queue.get_nowait() == "message_three"


def test_timeout_disconnect(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("server.main._IDLE_SECONDS", 0.05)
    with (
        TestClient(app) as client,
        pytest.raises(WebSocketDisconnect) as exc_info,
        client.websocket_connect("/ws") as websocket,
    ):
        websocket.receive_json()
    assert exc_info.value.code == 1001


def test_client_disconnect_silent() -> None:
    class MockWebSocket:
        async def send_text(self, _text: str) -> None:
            raise WebSocketDisconnect(code=1000)

    async def _run() -> None:
        message_queue = MagicMock(spec=asyncio.Queue)
        message_queue.get = AsyncMock(return_value="message")
        websocket = MockWebSocket()
        await _forward_queue_to_websocket(message_queue, websocket)  # type: ignore[arg-type]

    asyncio.run(_run())


def test_status_reports_listener() -> None:
    with TestClient(app) as client:
        status = client.get("/status").json()
        assert status == {
            "listening": True,
            "ip": "127.0.0.1",
            "port": listener_port(app),
            "connections": 0,
            "max_connections": 10,
        }
