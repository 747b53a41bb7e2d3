# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
World Magnetic Model field evaluation.

Spherical-harmonic synthesis of the main field and its secular
variation in geocentric-spherical axes, rotation into ellipsoidal
(local-level) axes, and the derived elements:

    X, Y, Z   north, east, down components (nT)
    H, F      horizontal and total intensity (nT)
    D, I      declination and inclination (deg)
    GV        grid variation (deg)

each with its rate of change per year and the WMM uncertainty model.

Synthesis (WMM2015 Technical Report, eqs. 10-12), for n = 1..N, m = 0..n:

    f   = (Re / r)^(n+2)
    dP  = (n+1) tan φ' P(n,m) - (n+1-m) / cos φ' · P(n+1,m)
    X' += -f (g cos mλ + h sin mλ) dP
    Y' +=  f / cos φ' · m (g sin mλ - h cos mλ) P(n,m)
    Z' += -(n+1) f (g cos mλ + h sin mλ) P(n,m)

with P Schmidt quasi-normalized; P(n+1,m) carries the degree-n factor.
The sum is linear in g, h, so the field at time t is the epoch sum plus
(t - epoch) times the rate sum.

Reference: Chulliat et al., "The US/UK World Magnetic Model for 2015-2020",
           NOAA Technical Report, 2015.
"""
import logging
import math
import threading
from dataclasses import dataclass
from datetime import date, datetime

from magfield.domain.coefficients import CoefficientSet
from magfield.domain.constants import WMMConstants
from magfield.domain.conversions import (
    GeodeticLocation,
    SphericalLocation,
    normalize_longitude,
    to_decimal_year,
)
from magfield.domain.errors import Advisory, AdvisoryKind, DegreeOutOfRange
from magfield.domain.legendre import LegendreCache, schmidt_factor

_log = logging.getLogger(__name__)

# Floor for H and F in denominators (nT)
_MIN_DIVISOR_NT = 1e-9

# Latitudes closer than this to a geographic pole are evaluated at this offset
_POLE_OFFSET_DEG = 1e-7


@dataclass(frozen=True)
class FieldUncertainty:
    """WMM one-sigma uncertainties, global averages.

    Declination uncertainty depends on location:
        err_D = sqrt(a² + (b / H)²)
    with a = d_offset_deg and b = d_h_scale_nt.
    """
    x_nt: float = 131.0
    y_nt: float = 94.0
    z_nt: float = 157.0
    h_nt: float = 128.0
    f_nt: float = 145.0
    i_deg: float = 0.22
    d_offset_deg: float = 0.27
    d_h_scale_nt: float = 5430.0

    def declination(self, h_nt: float) -> float:
        """Declination uncertainty (deg); finite for H = 0."""
        h = max(h_nt, _MIN_DIVISOR_NT)
        return math.sqrt(self.d_offset_deg**2 + (self.d_h_scale_nt / h) ** 2)


WMM2015_UNCERTAINTY = FieldUncertainty()


@dataclass(frozen=True)
class MagneticField:
    """Main field and secular variation at one location and time.

    Stored in geocentric-spherical axes (primed); ellipsoidal components
    and derived elements are computed on access.
    """
    location: GeodeticLocation
    spherical: SphericalLocation
    decimal_year: float
    x_prime: float
    y_prime: float
    z_prime: float
    dx_prime: float
    dy_prime: float
    dz_prime: float
    uncertainty: FieldUncertainty = WMM2015_UNCERTAINTY

    def spherical_components(self) -> tuple[float, float, float, float, float, float]:
        """(X', Y', Z', dX', dY', dZ') in geocentric-spherical axes."""
        return (
            self.x_prime, self.y_prime, self.z_prime,
            self.dx_prime, self.dy_prime, self.dz_prime,
        )

    def ellipsoidal_components(self) -> tuple[float, float, float, float, float, float]:
        """
        (X, Y, Z, dX, dY, dZ) in ellipsoidal axes.

        Rotation about the east axis by Δφ = φ' - φ:
            X = X' cos Δφ - Z' sin Δφ
            Y = Y'
            Z = X' sin Δφ + Z' cos Δφ
        """
        dphi = math.radians(self.spherical.latitude_deg - self.location.latitude_deg)
        cos_d = math.cos(dphi)
        sin_d = math.sin(dphi)
        return (
            self.x_prime * cos_d - self.z_prime * sin_d,
            self.y_prime,
            self.x_prime * sin_d + self.z_prime * cos_d,
            self.dx_prime * cos_d - self.dz_prime * sin_d,
            self.dy_prime,
            self.dx_prime * sin_d + self.dz_prime * cos_d,
        )

    @property
    def x(self) -> float:
        return self.ellipsoidal_components()[0]

    @property
    def y(self) -> float:
        return self.y_prime

    @property
    def z(self) -> float:
        return self.ellipsoidal_components()[2]

    @property
    def dx(self) -> float:
        return self.ellipsoidal_components()[3]

    @property
    def dy(self) -> float:
        return self.dy_prime

    @property
    def dz(self) -> float:
        return self.ellipsoidal_components()[5]

    # -- intensities and angles ------------------------------------------

    @property
    def h(self) -> float:
        """Horizontal intensity (nT)."""
        x, y, *_ = self.ellipsoidal_components()
        return math.hypot(x, y)

    @property
    def f(self) -> float:
        """Total intensity (nT)."""
        x, y, z, *_ = self.ellipsoidal_components()
        return math.sqrt(x * x + y * y + z * z)

    @property
    def d(self) -> float:
        """Declination (deg), positive east of true north."""
        x, y, *_ = self.ellipsoidal_components()
        return math.degrees(math.atan2(y, x))

    @property
    def i(self) -> float:
        """Inclination (deg), positive down."""
        z = self.ellipsoidal_components()[2]
        return math.degrees(math.atan2(z, self.h))

    @property
    def gv(self) -> float:
        """Grid variation (deg): declination referred to grid north.

        Beyond ±55° latitude the polar-stereographic grid convergence
        equals the longitude; elsewhere GV = D.
        """
        gv = self.d
        lat = self.location.latitude_deg
        lon = normalize_longitude(self.location.longitude_deg, signed=True)
        if lat > WMMConstants.GRID_LATITUDE_DEG:
            gv -= lon
        elif lat < -WMMConstants.GRID_LATITUDE_DEG:
            gv += lon
        return normalize_longitude(gv, signed=True)

    # -- secular change ---------------------------------------------------

    @property
    def dh(self) -> float:
        """Rate of H (nT/yr)."""
        x, y, _, dx, dy, _ = self.ellipsoidal_components()
        return (x * dx + y * dy) / max(self.h, _MIN_DIVISOR_NT)

    @property
    def df(self) -> float:
        """Rate of F (nT/yr)."""
        x, y, z, dx, dy, dz = self.ellipsoidal_components()
        return (x * dx + y * dy + z * dz) / max(self.f, _MIN_DIVISOR_NT)

    @property
    def dd(self) -> float:
        """Rate of D (deg/yr)."""
        x, y, _, dx, dy, _ = self.ellipsoidal_components()
        h = max(self.h, _MIN_DIVISOR_NT)
        return math.degrees((x * dy - dx * y) / (h * h))

    @property
    def di(self) -> float:
        """Rate of I (deg/yr)."""
        _, _, z, _, _, dz = self.ellipsoidal_components()
        f = max(self.f, _MIN_DIVISOR_NT)
        return math.degrees((self.h * dz - self.dh * z) / (f * f))

    @property
    def dgv(self) -> float:
        """Rate of GV (deg/yr); grid convergence is fixed in time."""
        return self.dd

    # -- uncertainties ----------------------------------------------------

    @property
    def err_x(self) -> float:
        return self.uncertainty.x_nt

    @property
    def err_y(self) -> float:
        return self.uncertainty.y_nt

    @property
    def err_z(self) -> float:
        return self.uncertainty.z_nt

    @property
    def err_h(self) -> float:
        return self.uncertainty.h_nt

    @property
    def err_f(self) -> float:
        return self.uncertainty.f_nt

    @property
    def err_i(self) -> float:
        return self.uncertainty.i_deg

    @property
    def err_d(self) -> float:
        """Declination uncertainty at this location (deg).

        Grows without bound as H → 0 near the magnetic poles, so it is
        reported per location rather than as a global average.
        """
        return self.uncertainty.declination(self.h)


@dataclass(frozen=True)
class _SphericalSum:
    """Epoch field and secular variation at one location, spherical axes."""
    x: float
    y: float
    z: float
    dx: float
    dy: float
    dz: float


class FieldEvaluator:
    """
    Evaluates the magnetic field from one coefficient set.

    Holds the Legendre memo and the most recent location's spherical sum,
    so a time series at a fixed point only re-extrapolates in time. Both
    are guarded by locks; one evaluator can be shared between threads.

    Args:
        coefficients: Loaded coefficient set (see load_coefficients).
        max_degree: Truncation degree, 1..coefficients.max_degree.
            Defaults to the full model.
        legendre_cache: Shared Legendre memo; a private one when None.
        uncertainty: Uncertainty model attached to every result.
        memoize: Reuse the last location's sum when the same location
            is evaluated again.

    Raises:
        DegreeOutOfRange: max_degree outside 1..coefficients.max_degree.
    """

    def __init__(
        self,
        coefficients: CoefficientSet,
        max_degree: int | None = None,
        legendre_cache: LegendreCache | None = None,
        uncertainty: FieldUncertainty = WMM2015_UNCERTAINTY,
        memoize: bool = True,
    ):
        if max_degree is None:
            max_degree = coefficients.max_degree
        if not 1 <= max_degree <= coefficients.max_degree:
            raise DegreeOutOfRange(max_degree, 0, coefficients.max_degree)
        self._coefficients = coefficients
        self._max_degree = max_degree
        self._legendre = legendre_cache if legendre_cache is not None else LegendreCache()
        self._uncertainty = uncertainty
        self._memoize = memoize
        self._memo: tuple[GeodeticLocation, _SphericalSum] | None = None
        self._memo_lock = threading.Lock()

    @property
    def coefficients(self) -> CoefficientSet:
        return self._coefficients

    @property
    def max_degree(self) -> int:
        return self._max_degree

    @property
    def legendre_cache(self) -> LegendreCache:
        return self._legendre

    def evaluate(
        self,
        location: GeodeticLocation,
        t: float | date | datetime,
    ) -> tuple[MagneticField, list[Advisory]]:
        """
        Magnetic field at a geodetic location and time.

        Args:
            location: Point relative to the WGS84 ellipsoid.
            t: Decimal year, date or datetime (naive = UTC).

        Returns:
            (field, advisories). Advisories never prevent a result.
        """
        year = to_decimal_year(t)
        spherical = location.to_spherical()
        base = self._spherical_sum(location, spherical)

        dt = year - self._coefficients.epoch
        field = MagneticField(
            location=location,
            spherical=spherical,
            decimal_year=year,
            x_prime=base.x + dt * base.dx,
            y_prime=base.y + dt * base.dy,
            z_prime=base.z + dt * base.dz,
            dx_prime=base.dx,
            dy_prime=base.dy,
            dz_prime=base.dz,
            uncertainty=self._uncertainty,
        )

        advisories = self._advisories(field)
        for advisory in advisories:
            _log.warning("%s", advisory.message)
        return field, advisories

    def _advisories(self, field: MagneticField) -> list[Advisory]:
        advisories: list[Advisory] = []

        stale = self._coefficients.validity_advisory(field.decimal_year)
        if stale is not None:
            advisories.append(stale)

        height = field.location.height_m
        if not WMMConstants.MIN_HEIGHT_M <= height <= WMMConstants.MAX_HEIGHT_M:
            advisories.append(Advisory(
                AdvisoryKind.HEIGHT_OUT_OF_RANGE,
                f"height {height / 1000.0:.3f} km is outside the model range "
                f"{WMMConstants.MIN_HEIGHT_M / 1000.0:.0f} to "
                f"{WMMConstants.MAX_HEIGHT_M / 1000.0:.0f} km",
            ))

        h = field.h
        if h < WMMConstants.LOW_HORIZONTAL_FIELD_NT:
            advisories.append(Advisory(
                AdvisoryKind.LOW_HORIZONTAL_FIELD,
                f"horizontal field strength at this location is only {h:.1f} nT; "
                f"compass readings have very large uncertainties where H is below "
                f"{WMMConstants.LOW_HORIZONTAL_FIELD_NT:.0f} nT",
            ))
        return advisories

    def _spherical_sum(
        self,
        location: GeodeticLocation,
        spherical: SphericalLocation,
    ) -> _SphericalSum:
        if self._memoize:
            with self._memo_lock:
                memo = self._memo
            if memo is not None and memo[0] == location:
                _log.debug("Reusing spherical sum for %s", location)
                return memo[1]

        result = self._synthesize(spherical)

        if self._memoize:
            with self._memo_lock:
                self._memo = (location, result)
        return result

    def _synthesize(self, spherical: SphericalLocation) -> _SphericalSum:
        """Spherical-harmonic sums of the epoch field and its rates."""
        coefficients = self._coefficients
        g_table, h_table = coefficients.g, coefficients.h
        dg_table, dh_table = coefficients.dg, coefficients.dh

        lat = spherical.latitude_deg
        limit = 90.0 - _POLE_OFFSET_DEG
        if abs(lat) > limit:
            lat = math.copysign(limit, lat)
        phi = math.radians(lat)
        lam = math.radians(spherical.longitude_deg)
        sin_phi = math.sin(phi)
        cos_phi = math.cos(phi)
        tan_phi = math.tan(phi)
        ratio = WMMConstants.GEOMAGNETIC_RADIUS / spherical.radius_m

        x = y = z = dx = dy = dz = 0.0
        for n in range(1, self._max_degree + 1):
            nn = n + 1.0
            f = ratio ** (n + 2)
            for m in range(n + 1):
                g = float(g_table[n, m])
                h = float(h_table[n, m])
                dg = float(dg_table[n, m])
                dh = float(dh_table[n, m])

                norm = schmidt_factor(n, m)
                p = norm * self._legendre.evaluate(n, m, sin_phi)
                q = norm * self._legendre.evaluate(n + 1, m, sin_phi)
                dp = nn * tan_phi * p - (nn - m) / cos_phi * q

                cos_ml = math.cos(m * lam)
                sin_ml = math.sin(m * lam)

                x += -f * (g * cos_ml + h * sin_ml) * dp
                y += f / cos_phi * m * (g * sin_ml - h * cos_ml) * p
                z += -nn * f * (g * cos_ml + h * sin_ml) * p
                dx += -f * (dg * cos_ml + dh * sin_ml) * dp
                dy += f / cos_phi * m * (dg * sin_ml - dh * cos_ml) * p
                dz += -nn * f * (dg * cos_ml + dh * sin_ml) * p

        return _SphericalSum(x=x, y=y, z=z, dx=dx, dy=dy, dz=dz)


def compute_field(
    location: GeodeticLocation,
    t: float | date | datetime,
    coefficients: CoefficientSet,
) -> tuple[MagneticField, list[Advisory]]:
    """One-shot evaluation with a fresh FieldEvaluator.

    For repeated queries build a FieldEvaluator once and reuse it.
    """
    return FieldEvaluator(coefficients).evaluate(location, t)
