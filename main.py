"""Run a TK102 listener and log every event.

Run:
    python main.py --ip 0.0.0.0 --port 5000 --connections 10 --timeout 10
"""

import argparse
import asyncio
import logging
import sys
from types import TracebackType
from typing import Any

from tk102.gateway import (
    ConnectionEvent,
    DataEvent,
    ErrorEvent,
    Event,
    FailEvent,
    Listener,
    ListeningEvent,
    Settings,
    TimeoutEvent,
    TrackEvent,
)

logger = logging.getLogger("tk102")


def log_event(event: Event) -> None:
    if isinstance(event, ListeningEvent):
        logger.info("Listening on %s:%s", *event.address)
    elif isinstance(event, ConnectionEvent):
        logger.info("Connection from %s", event.session.peername)
    elif isinstance(event, DataEvent):
        logger.debug("Data from %s: %r", event.session.peername, event.chunk)
    elif isinstance(event, TimeoutEvent):
        logger.info("Timeout on %s", event.session.peername)
    elif isinstance(event, TrackEvent):
        report = event.report
        logger.info(
            "Track imei=%s lat=%s lon=%s speed=%skm/h fix=%s checksum=%s",
            report.imei,
            report.geo.latitude,
            report.geo.longitude,
            report.speed.kmh,
            report.gps.fix,
            report.checksum,
        )
    elif isinstance(event, FailEvent):
        logger.warning("%s: %r", event.error.reason, event.error.input)
    elif isinstance(event, ErrorEvent):
        logger.error("%s (%s): %s", event.reason, event.error_kind.value, event.detail)


def _log_uncaught_exception(
    exc_type: type[BaseException],
    exc_value: BaseException,
    exc_tb: TracebackType | None,
) -> None:
    logger.critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_tb))


def _log_loop_exception(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
    exception = context.get("exception")
    logger.error("Unhandled error in event loop: %s", context["message"], exc_info=exception)


def parse_args() -> argparse.Namespace:
    defaults = Settings()
    parser = argparse.ArgumentParser(description="TK102 GPS tracker listener")
    parser.add_argument("--ip", default=defaults.ip, help="Bind address (default 0.0.0.0).")
    parser.add_argument(
        "--port", type=int, default=defaults.port, help="TCP port (default: OS-assigned)."
    )
    parser.add_argument(
        "--connections",
        type=int,
        default=defaults.connections,
        help="Maximum concurrent device connections (default 10).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=defaults.timeout,
        help="Seconds before a connection is aborted, 0 disables (default 10).",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level (default INFO).")
    return parser.parse_args()


async def amain(settings: Settings) -> int:
    asyncio.get_running_loop().set_exception_handler(_log_loop_exception)
    listener = Listener(settings, log_event)
    if not await listener.start():
        return 1
    try:
        await listener.serve_forever()
    finally:
        await listener.close()
    return 0


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    sys.excepthook = _log_uncaught_exception
    settings = Settings(
        ip=args.ip, port=args.port, connections=args.connections, timeout=args.timeout
    )
    try:
        sys.exit(asyncio.run(amain(settings)))
    except KeyboardInterrupt:
        logger.info("Stopped.")


if __name__ == "__main__":
    main()
