# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Geoid adapter with one undulation for every location."""
import math

from magfield.ports.geoid import GeoidHeightSource


class FixedGeoidHeight(GeoidHeightSource):
    """
    Constant geoid undulation.

    Useful where a local value of N is known, or as N = 0 to treat mean
    sea level as the ellipsoid. Global undulation ranges about -107 m
    to +86 m.

    Args:
        undulation_m: Geoid height above the ellipsoid in meters.
    """

    def __init__(self, undulation_m: float = 0.0):
        if not math.isfinite(undulation_m):
            raise ValueError(f"undulation_m must be finite, got {undulation_m}")
        self._undulation_m = undulation_m

    @property
    def undulation_m(self) -> float:
        return self._undulation_m

    def height_above_ellipsoid(
        self,
        latitude_deg: float,
        longitude_deg: float,
        height_msl_m: float,
    ) -> float:
        return height_msl_m + self._undulation_m
