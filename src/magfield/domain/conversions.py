# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Location frames and decimal-year time.

Frames:
    Geodetic:  latitude, longitude, height above the WGS84 ellipsoid
    Spherical: geocentric latitude, longitude, radius from Earth's centre

Geodetic → spherical is closed-form. Spherical → geodetic uses the
Bowring fixed-point iteration on the WGS84 ellipsoid.

Decimal years follow MIL-PRF-89500B §3.2: the day-of-year of 1 January
is zero and the year fraction is divided by that calendar year's length
(365 or 366 days), e.g. 15 May 2019 is 2019.367.

No external dependencies: only stdlib math/datetime/calendar.
"""
import calendar
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

from magfield.domain.constants import WMMConstants


@dataclass(frozen=True)
class SphericalLocation:
    """Geocentric-spherical location."""
    latitude_deg: float
    longitude_deg: float
    radius_m: float

    def to_geodetic(self) -> "GeodeticLocation":
        return GeodeticLocation(
            *spherical_to_geodetic(self.latitude_deg, self.longitude_deg, self.radius_m)
        )


@dataclass(frozen=True)
class GeodeticLocation:
    """Location relative to the WGS84 ellipsoid.

    latitude_deg: geodetic latitude in [-90, 90]
    longitude_deg: any range; east positive
    height_m: height above the ellipsoid
    """
    latitude_deg: float
    longitude_deg: float
    height_m: float = 0.0

    def __post_init__(self) -> None:
        for name in ("latitude_deg", "longitude_deg", "height_m"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"{name} must be finite, got {getattr(self, name)}")
        if not -90.0 <= self.latitude_deg <= 90.0:
            raise ValueError(
                f"latitude_deg must be in [-90, 90], got {self.latitude_deg}"
            )

    def to_spherical(self) -> SphericalLocation:
        return SphericalLocation(
            *geodetic_to_spherical(self.latitude_deg, self.longitude_deg, self.height_m)
        )


def geodetic_to_spherical(
    lat_deg: float,
    lon_deg: float,
    height_m: float,
) -> tuple[float, float, float]:
    """
    Convert geodetic coordinates to geocentric-spherical coordinates.

        rc = a / sqrt(1 - e² sin²φ)
        p  = (rc + h) cos φ
        z  = (rc (1 - e²) + h) sin φ
        r  = sqrt(p² + z²),  φ' = atan2(z, p)

    Args:
        lat_deg: Geodetic latitude in degrees.
        lon_deg: Longitude in degrees (passed through unchanged).
        height_m: Height above the WGS84 ellipsoid in meters.

    Returns:
        (geocentric_latitude_deg, longitude_deg, radius_m)
    """
    a = WMMConstants.WGS84_A
    e2 = WMMConstants.WGS84_E2

    phi = math.radians(lat_deg)
    sin_phi = math.sin(phi)
    cos_phi = math.cos(phi)

    rc = a / math.sqrt(1.0 - e2 * sin_phi * sin_phi)
    p = (rc + height_m) * cos_phi
    z = (rc * (1.0 - e2) + height_m) * sin_phi
    r = math.sqrt(p * p + z * z)

    return math.degrees(math.atan2(z, p)), lon_deg, r


def spherical_to_geodetic(
    lat_deg: float,
    lon_deg: float,
    radius_m: float,
) -> tuple[float, float, float]:
    """
    Convert geocentric-spherical coordinates back to geodetic coordinates.

    Inverse of geodetic_to_spherical. Latitude by Bowring iteration
    (converges by a factor of ~e² per step); height by the form
    h = p cos φ + z sin φ - a sqrt(1 - e² sin²φ), which stays well
    conditioned at the poles.

    Returns:
        (geodetic_latitude_deg, longitude_deg, height_m)
    """
    a = WMMConstants.WGS84_A
    e2 = WMMConstants.WGS84_E2

    phi_c = math.radians(lat_deg)
    p = radius_m * math.cos(phi_c)
    z = radius_m * math.sin(phi_c)

    lat_rad = math.atan2(z, p * (1.0 - e2))
    for _ in range(20):
        sin_lat = math.sin(lat_rad)
        n = a / math.sqrt(1.0 - e2 * sin_lat * sin_lat)
        updated = math.atan2(z + e2 * n * sin_lat, p)
        if abs(updated - lat_rad) < 1e-15:
            lat_rad = updated
            break
        lat_rad = updated

    sin_lat = math.sin(lat_rad)
    cos_lat = math.cos(lat_rad)
    height = p * cos_lat + z * sin_lat - a * math.sqrt(1.0 - e2 * sin_lat * sin_lat)

    return math.degrees(lat_rad), lon_deg, height


def normalize_longitude(lon_deg: float, signed: bool = False) -> float:
    """Wrap longitude into [0, 360), or (-180, 180] when signed."""
    lon = lon_deg % 360.0
    if signed and lon > 180.0:
        lon -= 360.0
    return lon


# --------------------------------------------------------------------------- #
# Decimal years
# --------------------------------------------------------------------------- #

def days_in_year(year: int) -> int:
    """365, or 366 for a leap year."""
    return 366 if calendar.isleap(year) else 365


def datetime_to_decimal_year(dt: datetime | date) -> float:
    """Calendar time to decimal year; naive datetimes are taken as UTC."""
    if not isinstance(dt, datetime):
        dt = datetime(dt.year, dt.month, dt.day, tzinfo=timezone.utc)
    elif dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)

    start = datetime(dt.year, 1, 1, tzinfo=timezone.utc)
    elapsed_days = (dt - start).total_seconds() / WMMConstants.SECONDS_PER_DAY
    return dt.year + elapsed_days / days_in_year(dt.year)


def decimal_year_to_datetime(year: float) -> datetime:
    """Decimal year to a UTC datetime."""
    whole = math.floor(year)
    days = (year - whole) * days_in_year(whole)
    return datetime(whole, 1, 1, tzinfo=timezone.utc) + timedelta(days=days)


def decimal_years_since(t: datetime, epoch: datetime) -> float:
    """Elapsed time from epoch to t in mean Gregorian years."""
    if t.tzinfo is None:
        t = t.replace(tzinfo=timezone.utc)
    if epoch.tzinfo is None:
        epoch = epoch.replace(tzinfo=timezone.utc)
    seconds_per_year = WMMConstants.DAYS_PER_YEAR * WMMConstants.SECONDS_PER_DAY
    return (t - epoch).total_seconds() / seconds_per_year


def to_decimal_year(t: float | date | datetime) -> float:
    """Accept a decimal year, a date or a datetime."""
    if isinstance(t, (date, datetime)):
        return datetime_to_decimal_year(t)
    return float(t)
