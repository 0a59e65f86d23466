"""Pytest fixtures for server module testing."""

import pytest


@pytest.fixture(autouse=True)
def loopback_listener(monkeypatch: pytest.MonkeyPatch) -> None:
    """Bind the application's TK102 listener to a free loopback port."""
    monkeypatch.setenv("TK102_IP", "127.0.0.1")
    monkeypatch.setenv("TK102_PORT", "0")
    monkeypatch.setenv("TK102_TIMEOUT", "5")
