"""FastAPI web server streaming TK102 tracks to WebSocket clients.

Start with::

    TK102_PORT=5000 uvicorn server.main:app --host 0.0.0.0 --port 8000

The application starts a TK102 ``Listener`` in its lifespan, configured from
the ``TK102_*`` environment variables (see ``Settings.from_env``). Devices
connect to the listener port; WebSocket clients connect to
``ws://<host>:8000/ws`` and receive one JSON message per closed device
connection: ``type="track"`` with the parsed report, or ``type="fail"``
with the reason and raw input.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, WebSocket, WebSocketDisconnect

from server.broadcaster import add_subscriber, broadcast_message, remove_subscriber
from server.formatters import format_event
from tk102.gateway import Event, Listener, Settings

_QUEUE_MAX_SIZE = 10
_IDLE_SECONDS = 60.0


def _on_event(event: Event) -> None:
    message = format_event(event)
    if message is not None:
        broadcast_message(message)


async def _forward_queue_to_websocket(
    queue: asyncio.Queue[str],
    websocket: WebSocket,
) -> None:
    try:
        while True:
            message = await asyncio.wait_for(queue.get(), timeout=_IDLE_SECONDS)
            await websocket.send_text(message)
    except TimeoutError:
        await websocket.close(code=1001)
    except WebSocketDisconnect:
        pass


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    settings = Settings.from_env()
    listener = Listener(settings, _on_event)
    if not await listener.start():
        raise RuntimeError(f"Cannot listen on {settings.ip}:{settings.port}")
    application.state.listener = listener
    try:
        yield
    finally:
        await listener.close()


app = FastAPI(lifespan=_lifespan)


@app.get("/status")
async def status() -> dict[str, Any]:
    """Report the bound listener address and the open device connections."""
    listener: Listener = app.state.listener
    address = listener.address
    return {
        "listening": listener.is_serving,
        "ip": address[0] if address else None,
        "port": address[1] if address else None,
        "connections": listener.active_connections,
        "max_connections": listener.settings.connections,
    }


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    """Stream track and fail JSON messages to a connected WebSocket client.

    Each client gets its own bounded queue (max ``_QUEUE_MAX_SIZE`` messages),
    registered before the handshake completes so no event is missed once
    the client is connected. The oldest message is dropped when the queue is
    full. The connection closes with code 1001 if no message arrives within
    ``_IDLE_SECONDS``.

    Args:
        websocket: The incoming WebSocket connection.
    """
    queue: asyncio.Queue[str] = asyncio.Queue(maxsize=_QUEUE_MAX_SIZE)
    add_subscriber(queue)
    try:
        await websocket.accept()
        await _forward_queue_to_websocket(queue, websocket)
    finally:
        remove_subscriber(queue)
