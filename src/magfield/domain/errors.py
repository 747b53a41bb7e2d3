# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Error taxonomy and non-fatal advisories.

Hard errors are exceptions. Advisories travel alongside a valid result
and never block a computation.
"""
from dataclasses import dataclass
from enum import Enum


class MagfieldError(Exception):
    """Base class for all magfield errors."""


class DegreeOutOfRange(MagfieldError, ValueError):
    """Spherical-harmonic degree/order outside the model's triangle."""

    def __init__(self, n: int, m: int, max_degree: int):
        self.n = n
        self.m = m
        self.max_degree = max_degree
        super().__init__(
            f"degree/order (n, m) = ({n}, {m}) outside 0 <= m <= n <= {max_degree}"
        )


class MalformedCoefficientFile(MagfieldError, ValueError):
    """Coefficient source could not be parsed."""

    def __init__(self, message: str, source: str = "<string>", line_number: int | None = None):
        self.source = source
        self.line_number = line_number
        where = source if line_number is None else f"{source}:{line_number}"
        super().__init__(f"{where}: {message}")


class HeaderFieldInvalid(MalformedCoefficientFile):
    """Epoch or valid-date field of the coefficient header did not parse."""


class AdvisoryKind(Enum):
    """Non-fatal conditions reported with a computed field."""
    STALE_MODEL = "stale_model"                      # time outside validity window
    LOW_HORIZONTAL_FIELD = "low_horizontal_field"    # declination ill-conditioned
    HEIGHT_OUT_OF_RANGE = "height_out_of_range"      # outside -1 km .. 850 km


@dataclass(frozen=True)
class Advisory:
    """Informational warning attached to a result."""
    kind: AdvisoryKind
    message: str

    def __str__(self) -> str:
        return self.message
