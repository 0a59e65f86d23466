"""Helpers for driving a live listener over loopback sockets."""

import asyncio
from collections.abc import Callable

from tk102.gateway import Event, Settings

LOCAL = Settings(ip="127.0.0.1", port=0, connections=10, timeout=5.0)

_WAIT_SECONDS = 3.0


class EventRecorder:
    """Observer collecting every event, with awaitable lookups."""

    def __init__(self) -> None:
        self.events: list[Event] = []
        self._changed = asyncio.Event()

    def __call__(self, event: Event) -> None:
        self.events.append(event)
        self._changed.set()

    def of(self, event_type: type) -> list:
        return [event for event in self.events if isinstance(event, event_type)]

    async def wait_for(self, event_type: type, count: int = 1) -> list:
        async def _wait() -> None:
            while len(self.of(event_type)) < count:
                self._changed.clear()
                await self._changed.wait()

        await asyncio.wait_for(_wait(), timeout=_WAIT_SECONDS)
        return self.of(event_type)


async def wait_until(predicate: Callable[[], bool]) -> None:
    async def _poll() -> None:
        while not predicate():
            await asyncio.sleep(0.01)

    await asyncio.wait_for(_poll(), timeout=_WAIT_SECONDS)


async def send_payload(port: int, *chunks: bytes, pause: float = 0.0) -> None:
    """Connect, write each chunk (pausing between them) and close."""
    _, writer = await asyncio.open_connection("127.0.0.1", port)
    for chunk in chunks:
        writer.write(chunk)
        await writer.drain()
        if pause:
            await asyncio.sleep(pause)
    writer.close()
    await writer.wait_closed()
