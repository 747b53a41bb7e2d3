# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for geoid undulation.

The field model works with heights above the WGS84 ellipsoid. User input
is usually height above mean sea level, which differs by the geoid
undulation N:

    h_ellipsoid = h_msl + N(lat, lon)
"""
from typing import Protocol, runtime_checkable


@runtime_checkable
class GeoidHeightSource(Protocol):
    """Port for converting mean-sea-level heights to ellipsoidal heights."""

    def height_above_ellipsoid(
        self,
        latitude_deg: float,
        longitude_deg: float,
        height_msl_m: float,
    ) -> float:
        """
        Height above the WGS84 ellipsoid for a height above mean sea level.

        Args:
            latitude_deg: Geodetic latitude in degrees.
            longitude_deg: Longitude in degrees, any range.
            height_msl_m: Height above mean sea level in meters.

        Returns:
            Height above the ellipsoid in meters.
        """
        ...
