"""TK102 package for GPS tracker ingestion and sentence parsing."""

from tk102.gateway import Listener, Settings
from tk102.nmea import (
    ParsedReport,
    convert_to_decimal_degrees,
    parse,
    parse_gprmc,
    validate_checksum,
)

__all__ = [
    "Listener",
    "ParsedReport",
    "Settings",
    "convert_to_decimal_degrees",
    "parse",
    "parse_gprmc",
    "validate_checksum",
]
