"""
Standard normal distribution functions.

This module provides the probability density function (PDF) and three
interchangeable cumulative distribution functions (CDF):

- "abramowitz_stegun": the A&S 7.1.26 rational approximation of erf,
  absolute error below 1.5e-7. Default.
- "reference": the polynomial exactly as evaluated by the original web
  calculators. It is kept for parity with their published numbers only;
  it is not a proper CDF (≈0.601 at x = 0, above 1 for x < 0).
- "exact": scipy's normal CDF.
"""

import math
from typing import Callable, Literal

from scipy.stats import norm

from tradetools.utils.constants import AS_A1, AS_A2, AS_A3, AS_A4, AS_A5, AS_P

CdfMethod = Literal["abramowitz_stegun", "reference", "exact"]

_INV_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)


def normal_pdf(x: float) -> float:
    """
    Standard normal probability density function.

    Formula:
        φ(x) = (1/√(2π)) * exp(-x²/2)

    Examples:
        >>> abs(normal_pdf(0.0) - 0.3989) < 0.001
        True
    """
    return _INV_SQRT_2PI * math.exp(-0.5 * x * x)


def _as_polynomial(t: float) -> float:
    # Horner form of a1·t + a2·t² + a3·t³ + a4·t⁴ + a5·t⁵
    return t * (AS_A1 + t * (AS_A2 + t * (AS_A3 + t * (AS_A4 + t * AS_A5))))


def abramowitz_stegun_cdf(x: float) -> float:
    """
    Normal CDF through the A&S 7.1.26 approximation of the error function.

    Formula:
        N(x) = ½·(1 + sign(x)·erf(|x|/√2))
        erf(z) ≈ 1 - (a1·t + ... + a5·t⁵)·exp(-z²),  t = 1/(1 + p·z)

    Examples:
        >>> abs(abramowitz_stegun_cdf(0.0) - 0.5) < 1e-9
        True
        >>> abs(abramowitz_stegun_cdf(1.96) - 0.975) < 1e-4
        True
    """
    sign = 1.0 if x >= 0 else -1.0
    z = abs(x) / math.sqrt(2.0)
    t = 1.0 / (1.0 + AS_P * z)
    erf = 1.0 - _as_polynomial(t) * math.exp(-z * z)
    return 0.5 * (1.0 + sign * erf)


def reference_cdf(x: float) -> float:
    """
    The CDF polynomial used by the original web calculators.

    Formula:
        1 - sign(x)·(a1·t + ... + a5·t⁵)·exp(-x²/2)/√(2π),  t = 1/(1 + p·|x|)
    """
    sign = 1.0 if x >= 0 else -1.0
    t = 1.0 / (1.0 + AS_P * abs(x))
    return 1.0 - sign * _as_polynomial(t) * math.exp(-x * x / 2.0) * _INV_SQRT_2PI


def exact_cdf(x: float) -> float:
    return float(norm.cdf(x))


_CDF_METHODS = {
    "abramowitz_stegun": abramowitz_stegun_cdf,
    "reference": reference_cdf,
    "exact": exact_cdf,
}


def get_cdf(method: CdfMethod = "abramowitz_stegun") -> Callable[[float], float]:
    """
    Look up a CDF implementation by name.

    Raises:
        ValueError: If method is not one of the known names
    """
    try:
        return _CDF_METHODS[method]
    except KeyError:
        raise ValueError(
            f"cdf method must be one of {sorted(_CDF_METHODS)}, got '{method}'"
        ) from None


def normal_cdf(x: float, method: CdfMethod = "abramowitz_stegun") -> float:
    """
    Standard normal cumulative distribution function.

    Args:
        x: Value at which to evaluate the CDF
        method: Which implementation to use (see module docstring)

    Returns:
        Probability that a standard normal random variable is at most x
    """
    return get_cdf(method)(x)
