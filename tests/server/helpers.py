"""Helper functions for server tests."""

import socket

from fastapi import FastAPI


def listener_port(app: FastAPI) -> int:
    port = app.state.listener.port
    assert port is not None
    return port


def send_from_device(port: int, payload: bytes) -> None:
    """Write *payload* the way a TK102 does: connect, send, hang up."""
    with socket.create_connection(("127.0.0.1", port), timeout=3.0) as device:
        device.sendall(payload)
