# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for polynomials, Legendre polynomials and associated Legendre functions."""
import math

import pytest

from magfield.domain.polynomial import Polynomial, factorial_ratio, legendre_polynomial
from magfield.domain.legendre import (
    LegendreCache,
    legendre_function,
    schmidt_factor,
)


# ── Polynomial ──────────────────────────────────────────────────────


class TestPolynomial:

    @pytest.mark.parametrize("x, expected", [(2.0, 7.0), (0.5, -0.5), (-1.5, 3.5)])
    def test_evaluate_quadratic(self, x, expected):
        """2x² - 1."""
        assert Polynomial((-1, 0, 2)).evaluate(x) == pytest.approx(expected, abs=1e-12)

    @pytest.mark.parametrize("x, expected", [(2.0, 18.5), (0.5, 0.5), (-1.5, -2.5)])
    def test_evaluate_cubic(self, x, expected):
        """2x³ + x² - x + 0.5."""
        assert Polynomial((0.5, -1, 1, 2)).evaluate(x) == pytest.approx(expected, abs=1e-12)

    def test_first_derivative(self):
        assert Polynomial((-1, 0, 2)).derivative(1).coefficients == (0.0, 4.0)
        assert Polynomial((0.5, -1, 1, 2)).derivative(1).coefficients == (-1.0, 2.0, 6.0)

    def test_second_derivative(self):
        assert Polynomial((-1, 0, 2)).derivative(2).coefficients == (4.0,)
        assert Polynomial((0.5, -1, 1, 2)).derivative(2).coefficients == (2.0, 12.0)

    def test_zeroth_derivative_is_identity(self):
        p = Polynomial((1, 2, 3))
        assert p.derivative(0) == p

    def test_derivative_past_degree_is_zero(self):
        p = Polynomial((1, 2, 3))
        assert p.derivative(5).coefficients == ()
        assert p.derivative(5).evaluate(3.7) == 0.0

    def test_negative_derivative_order_raises(self):
        with pytest.raises(ValueError):
            Polynomial((1, 2)).derivative(-1)

    def test_coefficients_become_floats(self):
        p = Polynomial((1, 2))
        assert all(isinstance(c, float) for c in p.coefficients)

    def test_degree(self):
        assert Polynomial((1, 2, 3)).degree == 2
        assert Polynomial((5,)).degree == 0
        assert Polynomial(()).degree == 0

    def test_frozen(self):
        p = Polynomial((1, 2))
        with pytest.raises(AttributeError):
            p.coefficients = (3,)


class TestFactorialRatio:

    def test_values(self):
        assert factorial_ratio(5, 0) == 120.0
        assert factorial_ratio(5, 3) == 20.0
        assert factorial_ratio(24, 0) == pytest.approx(float(math.factorial(24)))

    def test_n_not_above_m_is_one(self):
        assert factorial_ratio(3, 3) == 1.0
        assert factorial_ratio(2, 5) == 1.0


# ── Legendre polynomials ────────────────────────────────────────────


LEGENDRE_COEFFICIENTS = [
    [1],
    [0, 1],
    [-1 / 2, 0, 3 / 2],
    [0, -3 / 2, 0, 5 / 2],
    [3 / 8, 0, -30 / 8, 0, 35 / 8],
    [0, 15 / 8, 0, -70 / 8, 0, 63 / 8],
    [-5 / 16, 0, 105 / 16, 0, -315 / 16, 0, 231 / 16],
    [0, -35 / 16, 0, 315 / 16, 0, -693 / 16, 0, 429 / 16],
    [35 / 128, 0, -1260 / 128, 0, 6930 / 128, 0, -12012 / 128, 0, 6435 / 128],
]


class TestLegendrePolynomial:

    @pytest.mark.parametrize("n", range(len(LEGENDRE_COEFFICIENTS)))
    def test_closed_form_coefficients(self, n):
        calculated = legendre_polynomial(n).coefficients
        assert len(calculated) == n + 1
        for c, expected in zip(calculated, LEGENDRE_COEFFICIENTS[n]):
            assert c == pytest.approx(expected, abs=1e-9)

    @pytest.mark.parametrize("n", range(17))
    def test_unit_value_at_one(self, n):
        """P_n(1) = 1, P_n(-1) = (-1)^n."""
        p = legendre_polynomial(n)
        assert p.evaluate(1.0) == pytest.approx(1.0, abs=1e-9)
        assert p.evaluate(-1.0) == pytest.approx((-1.0) ** n, abs=1e-9)

    @pytest.mark.parametrize("n", range(13))
    def test_derivative_composition(self, n):
        """d^a/dx^a (d^b/dx^b P_n) = d^(a+b)/dx^(a+b) P_n."""
        p = legendre_polynomial(n)
        for a in range(n + 2):
            for b in range(n + 2 - a):
                composed = p.derivative(a).derivative(b).coefficients
                direct = p.derivative(a + b).coefficients
                assert len(composed) == len(direct)
                for c1, c2 in zip(composed, direct):
                    assert c1 == pytest.approx(c2, rel=1e-12, abs=1e-12)

    def test_negative_degree_raises(self):
        with pytest.raises(ValueError):
            legendre_polynomial(-1)


# ── Associated Legendre functions ───────────────────────────────────


class TestLegendreFunction:

    @pytest.mark.parametrize("n, m, x, expected", [
        (2, 0, -0.9, 0.715),
        (3, 1, 0.9, 1.994196267),
        (4, 2, 0.15, -6.176578125),
        (3, 3, -0.45, 10.68285409),
        (6, 2, 0.65, -5.414123408),
        (5, 4, 0.85, 61.85527031),
        (7, 3, 0.45, -126.2222359),
    ])
    def test_reference_values(self, n, m, x, expected):
        assert legendre_function(n, m, x) == pytest.approx(expected, rel=1e-6)

    def test_cached_matches_uncached(self):
        cache = LegendreCache()
        for n in range(1, 13):
            for m in range(n + 1):
                assert legendre_function(n, m, 0.37, cache) == pytest.approx(
                    legendre_function(n, m, 0.37), rel=1e-14, abs=1e-14,
                )

    def test_order_above_degree_is_zero(self):
        assert legendre_function(3, 4, 0.5) == 0.0

    def test_no_condon_shortley_phase(self):
        """P(1, 1, x) = +sqrt(1 - x²)."""
        assert legendre_function(1, 1, 0.6) == pytest.approx(0.8)

    def test_endpoint_safe(self):
        """Argument slightly beyond ±1 from rounding does not go complex."""
        value = legendre_function(3, 1, 1.0 + 1e-16)
        assert isinstance(value, float)
        assert math.isfinite(value)


class TestSchmidtFactor:

    def test_zonal_is_one(self):
        for n in range(13):
            assert schmidt_factor(n, 0) == 1.0

    def test_values(self):
        assert schmidt_factor(1, 1) == pytest.approx(1.0)
        assert schmidt_factor(2, 1) == pytest.approx(math.sqrt(1.0 / 3.0))
        assert schmidt_factor(2, 2) == pytest.approx(math.sqrt(1.0 / 12.0))


class TestLegendreCache:

    def test_grows_on_miss_only(self):
        cache = LegendreCache()
        cache.evaluate(4, 2, 0.3)
        assert len(cache) == 1
        assert (4, 2) in cache
        cache.evaluate(4, 2, -0.7)
        assert len(cache) == 1

    def test_same_polynomial_returned(self):
        cache = LegendreCache()
        assert cache.derivative(5, 3) is cache.derivative(5, 3)

    def test_miss_logged_at_debug(self, caplog):
        import logging
        caplog.set_level(logging.DEBUG, logger="magfield.domain.legendre")
        cache = LegendreCache()
        cache.derivative(6, 1)
        assert any("(6, 1)" in r.getMessage() for r in caplog.records)
