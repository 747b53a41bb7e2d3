# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
magfield

Estimate Earth's main magnetic field (strength, direction and secular
change) at any point and time from a degree/order 12 World Magnetic Model
coefficient set, with WGS84 ellipsoid corrections. Includes coefficient
loading, associated Legendre functions with memoization, geodetic and
geocentric-spherical transforms, decimal-year time, the WMM uncertainty
model and a point-report command line tool.
"""

from magfield.domain.constants import WMMConstants
from magfield.domain.errors import (
    MagfieldError,
    DegreeOutOfRange,
    MalformedCoefficientFile,
    HeaderFieldInvalid,
    AdvisoryKind,
    Advisory,
)
from magfield.domain.polynomial import (
    Polynomial,
    factorial_ratio,
    legendre_polynomial,
)
from magfield.domain.legendre import (
    LegendreCache,
    legendre_function,
    schmidt_factor,
)
from magfield.domain.coefficients import (
    CoefficientSet,
    CoefficientLookup,
    parse_coefficients,
    load_coefficients,
)
from magfield.domain.conversions import (
    GeodeticLocation,
    SphericalLocation,
    geodetic_to_spherical,
    spherical_to_geodetic,
    normalize_longitude,
    datetime_to_decimal_year,
    decimal_year_to_datetime,
    decimal_years_since,
)
from magfield.domain.units import (
    dms_to_degrees,
    degrees_to_dms,
)
from magfield.domain.magnetic_field import (
    FieldUncertainty,
    WMM2015_UNCERTAINTY,
    MagneticField,
    FieldEvaluator,
    compute_field,
)

__all__ = [
    "WMMConstants",
    "MagfieldError",
    "DegreeOutOfRange",
    "MalformedCoefficientFile",
    "HeaderFieldInvalid",
    "AdvisoryKind",
    "Advisory",
    "Polynomial",
    "factorial_ratio",
    "legendre_polynomial",
    "LegendreCache",
    "legendre_function",
    "schmidt_factor",
    "CoefficientSet",
    "CoefficientLookup",
    "parse_coefficients",
    "load_coefficients",
    "GeodeticLocation",
    "SphericalLocation",
    "geodetic_to_spherical",
    "spherical_to_geodetic",
    "normalize_longitude",
    "datetime_to_decimal_year",
    "decimal_year_to_datetime",
    "decimal_years_since",
    "dms_to_degrees",
    "degrees_to_dms",
    "FieldUncertainty",
    "WMM2015_UNCERTAINTY",
    "MagneticField",
    "FieldEvaluator",
    "compute_field",
]
