# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Associated Legendre functions for geomagnetic spherical harmonics.

    P(n, m, x) = (1 - x²)^(m/2) · d^m/dx^m P_n(x)

No Condon-Shortley phase. Schmidt quasi-normalization is a separate
factor (schmidt_factor) applied by the field summation.

The m-th derivative of P_n is a polynomial that depends only on (n, m).
LegendreCache keeps it so repeated evaluations at new arguments only
re-evaluate the polynomial.
"""
import logging
import math
import threading

from magfield.domain.polynomial import Polynomial, factorial_ratio, legendre_polynomial

_log = logging.getLogger(__name__)


def schmidt_factor(n: int, m: int) -> float:
    """Schmidt quasi-normalization sqrt(2 (n-m)! / (n+m)!), 1 for m = 0."""
    if m == 0:
        return 1.0
    return math.sqrt(2.0 / factorial_ratio(n + m, n - m))


def _associated(derivative: Polynomial, m: int, x: float) -> float:
    return max(0.0, 1.0 - x * x) ** (m / 2.0) * derivative.evaluate(x)


class LegendreCache:
    """Memo of d^m/dx^m P_n keyed by (n, m).

    Grows monotonically and is never evicted; the key space is bounded by
    the model degree. Safe to share between threads.
    """

    def __init__(self) -> None:
        self._derivatives: dict[tuple[int, int], Polynomial] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._derivatives)

    def __contains__(self, key: tuple[int, int]) -> bool:
        return key in self._derivatives

    def derivative(self, n: int, m: int) -> Polynomial:
        """m-th derivative of the degree-n Legendre polynomial."""
        key = (n, m)
        with self._lock:
            poly = self._derivatives.get(key)
            if poly is None:
                _log.debug("Legendre cache miss for (n, m) = (%d, %d)", n, m)
                poly = legendre_polynomial(n).derivative(m)
                self._derivatives[key] = poly
        return poly

    def evaluate(self, n: int, m: int, x: float) -> float:
        """Unnormalized associated Legendre function P(n, m, x)."""
        return _associated(self.derivative(n, m), m, x)


def legendre_function(
    n: int,
    m: int,
    x: float,
    cache: LegendreCache | None = None,
) -> float:
    """Associated Legendre function P(n, m, x) for x in [-1, 1].

    Args:
        n: Degree (>= 0).
        m: Order, 0 <= m <= n. Not validated here.
        x: Argument, usually sin of geocentric latitude.
        cache: Optional memo; without one the derivative polynomial is
            rebuilt on every call.
    """
    if cache is not None:
        return cache.evaluate(n, m, x)
    return _associated(legendre_polynomial(n).derivative(m), m, x)
