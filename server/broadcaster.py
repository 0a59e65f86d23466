"""Manages active WebSocket subscriber queues and message broadcasting."""

import asyncio

__all__ = ["add_subscriber", "broadcast_message", "remove_subscriber", "subscriber_count"]

_subscriber_queues: list[asyncio.Queue[str]] = []


def add_subscriber(queue: asyncio.Queue[str]) -> None:
    """Add a new subscriber queue to the global broadcast list."""
    _subscriber_queues.append(queue)


def remove_subscriber(queue: asyncio.Queue[str]) -> None:
    """Remove a subscriber queue from the global broadcast list."""
    _subscriber_queues.remove(queue)


def subscriber_count() -> int:
    """Return the number of active subscriber queues."""
    return len(_subscriber_queues)


def _enqueue_message(queue: asyncio.Queue[str], message: str) -> None:
    if queue.full():
        queue.get_nowait()
    queue.put_nowait(message)


def broadcast_message(message: str) -> None:
    """Hand a message to every subscriber queue, dropping each one's oldest
    message when it is full.

    Must be called from the event loop that owns the queues; the listener
    emits its events on that loop.
    """
    for queue in list(_subscriber_queues):
        _enqueue_message(queue, message)
