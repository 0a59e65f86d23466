"""Ordered sentence recognizers.

A recognizer is any function ``(str) -> ParsedReport | None``. ``parse``
tries them in order and returns the first report. Support for a new device
format is added by passing an extended tuple, e.g.::

    recognizers = (*DEFAULT_RECOGNIZERS, parse_my_format)
    report = parse(line, recognizers)
"""

from collections.abc import Callable, Sequence

from tk102.nmea.gprmc import parse_gprmc
from tk102.nmea.types import ParsedReport

__all__ = ["DEFAULT_RECOGNIZERS", "Recognizer", "parse"]

Recognizer = Callable[[str], ParsedReport | None]

DEFAULT_RECOGNIZERS: tuple[Recognizer, ...] = (parse_gprmc,)


def parse(
    sentence: str,
    recognizers: Sequence[Recognizer] = DEFAULT_RECOGNIZERS,
) -> ParsedReport | None:
    """Return the first report any recognizer produces for *sentence*."""
    for recognizer in recognizers:
        report = recognizer(sentence)
        if report is not None:
            return report
    return None
