# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Real polynomials and Legendre polynomials.

Pure mathematics. No external dependencies: only stdlib dataclasses.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class Polynomial:
    """Polynomial with real coefficients; index = power of x.

    Polynomial((-1, 0, 2)) is 2x² - 1. The empty tuple is the zero polynomial.
    """
    coefficients: tuple[float, ...]

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "coefficients", tuple(float(c) for c in self.coefficients)
        )

    @property
    def degree(self) -> int:
        """Highest stored power (0 for constants and the zero polynomial)."""
        return max(len(self.coefficients) - 1, 0)

    def evaluate(self, x: float) -> float:
        """Value at x (Horner's scheme)."""
        y = 0.0
        for c in reversed(self.coefficients):
            y = y * x + c
        return y

    def derivative(self, k: int = 1) -> "Polynomial":
        """k-th derivative as a new polynomial.

        Each step maps coefficient i to (i+1)·c[i+1]. Differentiating a
        constant gives the zero polynomial.
        """
        if k < 0:
            raise ValueError(f"derivative order must be >= 0, got {k}")
        coeffs = self.coefficients
        for _ in range(k):
            if len(coeffs) <= 1:
                return Polynomial(())
            coeffs = tuple(i * coeffs[i] for i in range(1, len(coeffs)))
        return Polynomial(coeffs)


def factorial_ratio(n: int, m: int) -> float:
    """n! / m! as a running product; 1.0 when n <= m."""
    z = 1.0
    for k in range(m + 1, n + 1):
        z *= k
    return z


def legendre_polynomial(n: int) -> Polynomial:
    """Ordinary Legendre polynomial P_n.

    Closed form:
        c[n-2k] = (-1)^k / 2^n · (2n-2k)! / (k! (n-k)! (n-2k)!),  k = 0..n//2

    Every factorial term is taken as a float running product, so no
    large integer factorial is ever formed.
    """
    if n < 0:
        raise ValueError(f"Legendre degree must be >= 0, got {n}")
    coeffs = [0.0] * (n + 1)
    for k in range(n // 2 + 1):
        sign = -1.0 if k % 2 else 1.0
        coeffs[n - 2 * k] = (
            sign / 2.0**n
            * factorial_ratio(2 * n - 2 * k, n - k)
            / factorial_ratio(k, 0)
            / factorial_ratio(n - 2 * k, 0)
        )
    return Polynomial(tuple(coeffs))
