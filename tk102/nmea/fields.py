"""TK102 field parsing utilities.

Unlike the lenient NMEA helpers that map empty fields to None, a TK102
positional report is all-or-nothing: every helper here raises ValueError on
a field it cannot read, and the sentence parser turns that into a no-match.
"""

import math
import re
from decimal import ROUND_HALF_UP, Decimal

# Minutes are always the trailing MM.MMMM part of a DDMM.MMMM/DDDMM.MMMM field
_MINUTES_WIDTH = 7

_NEGATIVE_HEMISPHERES = ("S", "W")

_COORDINATE_PLACES = 6

_HEADER_TIMESTAMP = re.compile(r"([0-9]{2})([0-9]{2})([0-9]{2})([0-9]{2})([0-9]{2})")
_GPS_DATE = re.compile(r"([0-9]{2})([0-9]{2})([0-9]{2})")
_GPS_TIME = re.compile(r"([0-9]{2})([0-9]{2})([0-9]{2})\.([0-9]{3})")

# Devices report two-digit years; everything they send is 20xx.
_CENTURY = "20"


def parse_finite_float(value: str) -> float:
    """Parse an ASCII decimal field, rejecting inf, nan and overflow to inf."""
    if not value.isascii():
        raise ValueError(f"Non-ASCII numeric field: {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"Non-finite numeric field: {value!r}")
    return number


def round_half_away(value: float, places: int) -> float:
    """Round *value* to *places* decimals, halves away from zero.

    Python's round() rounds halves to even, which differs from what device
    consumers expect for values such as 2.0005 -> 2.001.

    Example:
        >>> round_half_away(2.0005, 3)
        2.001
        >>> round_half_away(-2.0005, 3)
        -2.001
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def convert_to_decimal_degrees(value: str, hemisphere: str) -> float:
    """Convert a DDMM.MMMM / DDDMM.MMMM coordinate to signed decimal degrees.

    The last seven characters are the minutes (MM.MMMM); whatever precedes
    them is the integer degree count. The result is negative for the
    southern and western hemispheres and rounded to 6 decimals.

    Args:
        value: Coordinate field, e.g. "5213.0247" or "00516.7757".
        hemisphere: "N", "S", "E" or "W".

    Returns:
        Decimal degrees rounded to 6 places.

    Raises:
        ValueError: If the degrees or minutes part is not a finite ASCII
            number, or the field is too short to carry a degrees part.

    Example:
        >>> convert_to_decimal_degrees("5213.0247", "N")
        52.217078
        >>> convert_to_decimal_degrees("00516.7757", "W")
        -5.279595
    """
    minutes = parse_finite_float(value[-_MINUTES_WIDTH:])
    degrees_field = value[:-_MINUTES_WIDTH]
    if not degrees_field.isascii():
        raise ValueError(f"Non-ASCII degrees field: {degrees_field!r}")
    degrees = int(degrees_field)
    decimal_degrees = degrees + minutes / 60.0

    if hemisphere in _NEGATIVE_HEMISPHERES:
        decimal_degrees = -decimal_degrees

    return round_half_away(decimal_degrees, _COORDINATE_PLACES)


def _match_prefix(pattern: re.Pattern[str], value: str, name: str) -> re.Match[str]:
    match = pattern.match(value)
    if match is None:
        raise ValueError(f"Malformed {name} field: {value!r}")
    return match


def format_header_timestamp(value: str) -> str:
    """Convert a YYMMDDHHmm header field to "YYYY-MM-DD HH:MM".

    Example:
        >>> format_header_timestamp("1203292316")
        '2012-03-29 23:16'
    """
    year, month, day, hour, minute = _match_prefix(
        _HEADER_TIMESTAMP, value, "timestamp"
    ).groups()
    return f"{_CENTURY}{year}-{month}-{day} {hour}:{minute}"


def format_gps_date(value: str) -> str:
    """Convert a DDMMYY GPS date field to "YYYY-MM-DD".

    Example:
        >>> format_gps_date("290312")
        '2012-03-29'
    """
    day, month, year = _match_prefix(_GPS_DATE, value, "date").groups()
    return f"{_CENTURY}{year}-{month}-{day}"


def format_gps_time(value: str) -> str:
    """Convert a HHMMSS.mmm GPS time field to "HH:MM:SS.mmm".

    Example:
        >>> format_gps_time("211657.000")
        '21:16:57.000'
    """
    hour, minute, second, millis = _match_prefix(_GPS_TIME, value, "time").groups()
    return f"{hour}:{minute}:{second}.{millis}"


def parse_bearing(value: str) -> int:
    """Parse a decimal bearing field, truncating to whole degrees.

    Example:
        >>> parse_bearing("273.30")
        273
    """
    return int(parse_finite_float(value))
