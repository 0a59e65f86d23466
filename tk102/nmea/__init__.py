"""Parser for TK102 GPRMC positional reports."""

from tk102.nmea.checksum import validate_checksum
from tk102.nmea.fields import convert_to_decimal_degrees
from tk102.nmea.gprmc import parse_gprmc
from tk102.nmea.parser import DEFAULT_RECOGNIZERS, Recognizer, parse
from tk102.nmea.types import GeoPosition, GPSInfo, ParsedReport, Speed

__all__ = [
    "DEFAULT_RECOGNIZERS",
    "GPSInfo",
    "GeoPosition",
    "ParsedReport",
    "Recognizer",
    "Speed",
    "convert_to_decimal_degrees",
    "parse",
    "parse_gprmc",
    "validate_checksum",
]
