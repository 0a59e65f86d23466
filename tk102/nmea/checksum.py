"""TK102 checksum validation.

TK102 devices embed an NMEA-style checksum inside their positional report,
but the value is neither the usual two hex digits nor computed over the
usual span. The payload runs from the sentence type tag up to the mode
indicator, and the embedded value is compared as a *decimal* number against
the hex text of the XOR result.

Example sentence structure:
    1203292316,0031698765432,GPRMC,211657.000,A,...,290312,,,A*62,F,imei:...,123
                             ^          checksum content      ^ ^^
                             fields[2]                fields[14] fields[15]

The XOR over the content above is 0x62. Its hex text "62" is read back as
the decimal integer 62, which equals the embedded field "62". Hex text
starting with a letter (e.g. "a3") has no decimal value and never matches.
"""

import re

# Split points: the device mixes ',' separators with '*' before the checksum
# and '#' as an optional terminator.
_SEPARATORS = re.compile(r"[,*#]")
_LEADING_INTEGER = re.compile(r"\s*([+-]?[0-9]+)")

_CONTENT_START = 2
_CONTENT_END = 15  # exclusive
_CHECKSUM_INDEX = 15


def _parse_leading_integer(text: str) -> int | None:
    """Read a base-10 integer from the leading digits of *text*.

    Trailing garbage is ignored, so "5b" reads as 5. Returns None when
    *text* does not start with a digit.

    Example:
        >>> _parse_leading_integer("62")
        62
        >>> _parse_leading_integer("ab") is None
        True
    """
    match = _LEADING_INTEGER.match(text)
    if match is None:
        return None
    return int(match.group(1))


def _calculate_xor_checksum(content: str) -> int:
    result = 0
    for character in content:
        result ^= ord(character)
    return result


def validate_checksum(sentence: str) -> bool:
    """Validate the checksum embedded in a raw TK102 sentence.

    Args:
        sentence: Raw sentence as received from the device. Surrounding
            whitespace is stripped.

    Returns:
        True if the recomputed checksum equals the embedded one, False if
        it differs, if either side has no decimal value, or if the sentence
        is too short to carry a checksum.
    """
    fields = _SEPARATORS.split(sentence.strip())
    if len(fields) <= _CHECKSUM_INDEX:
        return False

    provided = _parse_leading_integer(fields[_CHECKSUM_INDEX])
    content = ",".join(fields[_CONTENT_START:_CONTENT_END])
    calculated = _parse_leading_integer(format(_calculate_xor_checksum(content), "x"))

    if provided is None or calculated is None:
        return False
    return calculated == provided
