# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Physical constants and model limits for the World Magnetic Model.

No external dependencies: only stdlib dataclasses.
"""
from dataclasses import dataclass

_FLATTENING = 1.0 / 298.257223563


@dataclass(frozen=True)
class _WMMConstants:
    """WGS84 ellipsoid, geomagnetic reference and WMM validity limits."""
    # WGS84 ellipsoid
    WGS84_A: float = 6_378_137.0                       # m, semi-major axis
    WGS84_F: float = _FLATTENING                       # flattening
    WGS84_E2: float = _FLATTENING * (2.0 - _FLATTENING)  # first eccentricity squared
    # Geomagnetic reference radius (not the WGS84 semi-major axis)
    GEOMAGNETIC_RADIUS: float = 6_371_200.0            # m
    MAX_DEGREE: int = 12
    VALIDITY_YEARS: float = 5.0
    # Altitude range the model is fitted for
    MIN_HEIGHT_M: float = -1_000.0
    MAX_HEIGHT_M: float = 850_000.0
    # Grid variation applies beyond this |latitude|
    GRID_LATITUDE_DEG: float = 55.0
    # Declination is unreliable for compass use below this horizontal intensity
    LOW_HORIZONTAL_FIELD_NT: float = 1_000.0
    DAYS_PER_YEAR: float = 365.2425
    SECONDS_PER_DAY: float = 86_400.0


WMMConstants: _WMMConstants = _WMMConstants()
