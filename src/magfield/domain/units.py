# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Degrees / minutes / seconds conversions."""
import math


def dms_to_degrees(d: float, m: float, s: float) -> float:
    """Degrees from sexagesimal parts.

    The sign is carried by d (including -0.0); m and s are magnitudes.
    """
    sign = -1.0 if math.copysign(1.0, d) < 0 else 1.0
    return d + sign * (m + s / 60.0) / 60.0


def degrees_to_dms(degrees: float) -> tuple[float, float, float]:
    """Split decimal degrees into (d, m, s).

    d is truncated toward zero and keeps the sign; m and s are returned
    as non-negative magnitudes.
    """
    frac, whole = math.modf(degrees)
    minutes = abs(frac) * 60.0
    m = math.floor(minutes)
    s = (minutes - m) * 60.0
    return whole, float(m), s
