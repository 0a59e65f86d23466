"""TK102 data types for parsed positional reports.

Design Decisions:
    1. Frozen dataclasses: a report is built once per sentence and handed
       to consumers that may fan it out to several subscribers, so nothing
       downstream may mutate it.

    2. No Optional fields: the parser only builds a report when every field
       could be read. A malformed sentence yields None from the parser,
       never a partially filled report.

    3. checksum is a plain flag: a checksum mismatch does not reject the
       report. Consumers decide whether to trust it.
"""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class GPSInfo:
    """Receiver status carried in the GPRMC part of the sentence.

    Attributes:
        date: GPS date as "YYYY-MM-DD".
        time: GPS UTC time as "HH:MM:SS.mmm".
        signal: "full" when the device reports a full GSM signal ("F"),
            "low" otherwise.
        fix: "active" for a valid fix ("A"), "invalid" otherwise.
    """

    date: str
    time: str
    signal: str
    fix: str


@dataclass(frozen=True)
class GeoPosition:
    """Position and heading.

    Attributes:
        latitude: Decimal degrees, positive=North, 6 decimals.
        longitude: Decimal degrees, positive=East, 6 decimals.
        bearing: Course over ground in whole degrees (0 = North).
    """

    latitude: float
    longitude: float
    bearing: int


@dataclass(frozen=True)
class Speed:
    """Ground speed derived from the single knots field.

    Attributes:
        knots: Speed in knots, 3 decimals.
        kmh: Speed in km/h (knots * 1.852), 3 decimals.
        mph: Speed in mph (knots * 1.151), 3 decimals.
    """

    knots: float
    kmh: float
    mph: float


@dataclass(frozen=True)
class ParsedReport:
    """A fully parsed TK102 positional report.

    Attributes:
        raw: The trimmed sentence text the report was parsed from.
        datetime: Device header timestamp as "YYYY-MM-DD HH:MM".
        phone: Device phone number / identifier as transmitted.
        gps: Receiver date, time, signal and fix status.
        geo: Latitude, longitude and bearing.
        speed: Ground speed in knots, km/h and mph.
        imei: Device IMEI with the "imei:" prefix removed.
        checksum: True if the embedded checksum matches.

    Example:
        >>> report = parse("1203292316,0031698765432,GPRMC,211657.000,A,...")
        >>> report.gps.fix
        'active'
        >>> report.geo.latitude
        52.217078
    """

    raw: str
    datetime: str
    phone: str
    gps: GPSInfo
    geo: GeoPosition
    speed: Speed
    imei: str
    checksum: bool

    def as_dict(self) -> dict[str, Any]:
        """Return the report as nested plain dicts, ready for JSON."""
        return asdict(self)
