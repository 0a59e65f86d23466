"""TK102 GPRMC positional report parser.

TK102 trackers wrap a GPRMC sentence between a device header and a device
trailer, all joined with commas into one 18-field line:

    1203292316,0031698765432,GPRMC,211657.000,A,5213.0247,N,00516.7757,E,0.00,273.30,290312,,,A*62,F,imei:123456789012345,123
    |          |             |     |          | |         | |          | |    |      |      | | |    | |                    |
    |          |             |     |          | |         | |          | |    |      |      | | |    | |                    +-- [17] trailer
    |          |             |     |          | |         | |          | |    |      |      | | |    | +-- [16] imei:<IMEI>
    |          |             |     |          | |         | |          | |    |      |      | | |    +-- [15] GSM signal (F=full)
    |          |             |     |          | |         | |          | |    |      |      | | +-- [14] mode*checksum
    |          |             |     |          | |         | |          | |    |      |      +-+-- [12..13] unused
    |          |             |     |          | |         | |          | |    |      +-- [11] GPS date (DDMMYY)
    |          |             |     |          | |         | |          | |    +-- [10] bearing
    |          |             |     |          | |         | |          | +-- [9] speed (knots)
    |          |             |     |          | |         | +----------+-- [7..8] longitude + E/W
    |          |             |     |          | +---------+-- [5..6] latitude + N/S
    |          |             |     |          +-- [4] fix (A=active)
    |          |             |     +-- [3] GPS UTC time (HHMMSS.mmm)
    |          |             +-- [2] sentence type tag
    |          +-- [1] phone number
    +-- [0] device timestamp (YYMMDDHHmm)
"""

from tk102.nmea.checksum import validate_checksum
from tk102.nmea.fields import (
    convert_to_decimal_degrees,
    format_gps_date,
    format_gps_time,
    format_header_timestamp,
    parse_bearing,
    parse_finite_float,
    round_half_away,
)
from tk102.nmea.types import GeoPosition, GPSInfo, ParsedReport, Speed

SENTENCE_TYPE = "GPRMC"

_FIELD_COUNT = 18

_KNOTS_TO_KMH = 1.852
_KNOTS_TO_MPH = 1.151
_SPEED_PLACES = 3

_IMEI_PREFIX = "imei:"


def _build_speed(knots_field: str) -> Speed:
    knots = parse_finite_float(knots_field)
    return Speed(
        knots=round_half_away(knots, _SPEED_PLACES),
        kmh=round_half_away(knots * _KNOTS_TO_KMH, _SPEED_PLACES),
        mph=round_half_away(knots * _KNOTS_TO_MPH, _SPEED_PLACES),
    )


def _build_report(raw: str, fields: list[str]) -> ParsedReport:
    """Construct a ParsedReport from the 18 split fields.

    Raises:
        ValueError: If any date, time, coordinate, speed or bearing field
            cannot be read.
    """
    return ParsedReport(
        raw=raw,
        datetime=format_header_timestamp(fields[0]),
        phone=fields[1],
        gps=GPSInfo(
            date=format_gps_date(fields[11]),
            time=format_gps_time(fields[3]),
            signal="full" if fields[15] == "F" else "low",
            fix="active" if fields[4] == "A" else "invalid",
        ),
        geo=GeoPosition(
            latitude=convert_to_decimal_degrees(fields[5], fields[6]),
            longitude=convert_to_decimal_degrees(fields[7], fields[8]),
            bearing=parse_bearing(fields[10]),
        ),
        speed=_build_speed(fields[9]),
        imei=fields[16].replace(_IMEI_PREFIX, "", 1),
        checksum=validate_checksum(raw),
    )


def parse_gprmc(sentence: str) -> ParsedReport | None:
    """Parse a TK102 GPRMC positional report.

    Args:
        sentence: Raw sentence as received from the device; surrounding
            whitespace and line endings are stripped.

    Returns:
        ParsedReport if the sentence has exactly 18 fields, a GPRMC tag and
        readable fields, or None otherwise. A checksum mismatch does not
        reject the sentence; it is reported in ``ParsedReport.checksum``.
    """
    raw = sentence.strip()
    fields = raw.split(",")

    if len(fields) != _FIELD_COUNT or fields[2] != SENTENCE_TYPE:
        return None

    try:
        return _build_report(raw, fields)
    except (ValueError, IndexError, ArithmeticError):
        return None
