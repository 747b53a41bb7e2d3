# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Text parsers for user-entered coordinates, altitudes and dates.

Accepted forms:

    latitude / longitude   [+-NSEW]DDD.DDDD
                           [+-NSEW]DD MM SS.SSS
                           [+-NSEW]DD,MM,SS.SSS
    altitude (km)          [E]HHH.HHH     E prefix: above the ellipsoid
    date                   YYYY.yyy | MM DD YYYY | MM/DD/YYYY

Every parser raises ValueError naming the offending text.
"""
import math
from datetime import date

from magfield.domain.conversions import datetime_to_decimal_year
from magfield.domain.units import dms_to_degrees

_SIGN_PREFIXES = "+-NSEW"
_NEGATIVE_PREFIXES = "-SW"


def _parse_float(text: str, original: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise ValueError(f"{original!r} is not a number") from None
    if not math.isfinite(value):
        raise ValueError(f"{original!r} is not a finite number")
    return value


def _parse_int(text: str, what: str, original: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise ValueError(f"{what} {text!r} in {original!r} is not an integer") from None


def parse_lat_lng(text: str) -> float:
    """
    Parse a latitude or longitude into signed decimal degrees.

    A single sign or hemisphere prefix is allowed; S, W and - give a
    negative result. Sexagesimal input needs integer degrees and minutes,
    minutes and seconds in [0, 60).

    Raises:
        ValueError: malformed text.
    """
    original = text
    text = text.strip()

    sign = 1.0
    last_prefix = max(text.rfind(c) for c in _SIGN_PREFIXES)
    if last_prefix > 0:
        raise ValueError(f"{text[:last_prefix]!r} prefix is invalid in {original!r}")
    if last_prefix == 0:
        if text[0] in _NEGATIVE_PREFIXES:
            sign = -1.0
        text = text[1:]

    commas = text.count(",")
    if commas not in (0, 2):
        raise ValueError(f"{original!r} is not in the format D,M,S")
    fields = text.replace(",", " ").split()

    if len(fields) == 1:
        return sign * _parse_float(fields[0], original)
    if len(fields) != 3:
        raise ValueError(f"{original!r} is not in the format D M S")

    d = _parse_int(fields[0], "degrees", original)
    m = _parse_int(fields[1], "minutes", original)
    if not 0 <= m < 60:
        raise ValueError(f"minutes entry {fields[1]!r} must be in the range [0, 60)")
    s = _parse_float(fields[2], original)
    if not 0.0 <= s < 60.0:
        raise ValueError(f"seconds entry {fields[2]!r} must be in the range [0, 60)")
    return sign * dms_to_degrees(float(d), float(m), s)


def parse_altitude(text: str) -> tuple[float, bool]:
    """
    Parse an altitude in kilometers.

    Returns:
        (altitude_km, above_ellipsoid). above_ellipsoid is True when the
        text carries the E prefix, otherwise the altitude is above mean
        sea level.

    Raises:
        ValueError: malformed text.
    """
    original = text
    text = text.strip()
    above_ellipsoid = False

    last_e = text.rfind("E")
    if last_e > 0:
        raise ValueError(f"{text[:last_e]!r} prefix is invalid in {original!r}")
    if last_e == 0:
        above_ellipsoid = True
        text = text[1:]
    return _parse_float(text, original), above_ellipsoid


def parse_date(text: str) -> float:
    """
    Parse a decimal year or a calendar date into a decimal year.

    Raises:
        ValueError: malformed text or an impossible calendar date.
    """
    original = text
    fields = text.replace("/", " ").split()

    if len(fields) == 1:
        return _parse_float(fields[0], original)
    if len(fields) != 3:
        raise ValueError(
            f"{original!r} is not a date; use YYYY.yyy, MM DD YYYY or MM/DD/YYYY"
        )

    month = _parse_int(fields[0], "month", original)
    day = _parse_int(fields[1], "day", original)
    year = _parse_int(fields[2], "year", original)
    if not 1 <= month <= 12:
        raise ValueError(f"invalid month {fields[0]!r} in {original!r}")
    try:
        calendar_date = date(year, month, day)
    except ValueError as e:
        raise ValueError(f"invalid date {original!r}: {e}") from None
    return datetime_to_decimal_year(calendar_date)
