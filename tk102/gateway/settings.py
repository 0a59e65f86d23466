"""Listener settings."""

import dataclasses
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

__all__ = ["Settings"]

_ENV_PREFIX = "TK102_"

_ENV_CONVERTERS: dict[str, Callable[[str], Any]] = {
    "ip": str,
    "port": int,
    "connections": int,
    "timeout": float,
}


@dataclass(frozen=True)
class Settings:
    """Listener configuration, fixed once the listener starts.

    Attributes:
        ip: Address to bind. Defaults to all interfaces.
        port: TCP port to bind. ``0`` lets the OS pick a free port.
        connections: Maximum number of concurrently open device sessions.
        timeout: Seconds after which a session is aborted, counted from
            connection start regardless of activity. ``0`` disables it.
    """

    ip: str = "0.0.0.0"
    port: int = 0
    connections: int = 10
    timeout: float = 10.0

    @classmethod
    def from_mapping(cls, overrides: Mapping[str, Any] | None = None) -> "Settings":
        """Merge *overrides* over the defaults.

        Raises:
            TypeError: If *overrides* names an unknown setting.
        """
        return dataclasses.replace(cls(), **dict(overrides or {}))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Read ``TK102_IP``, ``TK102_PORT``, ``TK102_CONNECTIONS`` and
        ``TK102_TIMEOUT``; unset variables keep their defaults.

        Raises:
            ValueError: If a numeric variable cannot be parsed.
        """
        environ = os.environ if environ is None else environ
        overrides = {
            name: convert(environ[_ENV_PREFIX + name.upper()])
            for name, convert in _ENV_CONVERTERS.items()
            if _ENV_PREFIX + name.upper() in environ
        }
        return cls.from_mapping(overrides)
