"""
Input checks applied at the calculator boundary.

Each check returns a human-readable reason when an input is outside
its domain, or None when it is acceptable. Callers turn a reason into
an undefined result instead of letting NaN flow through arithmetic.
"""

import math
from typing import Optional

from tradetools.utils.types import ImpliedVolatilityQuery, OptionParameters


def is_finite_number(value) -> bool:
    """True for int/float values that are neither NaN nor infinite."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def require_positive(**values: float) -> Optional[str]:
    for name, value in values.items():
        if not is_finite_number(value):
            return f"{name} must be a finite number, got {value!r}"
        if value <= 0:
            return f"{name} must be positive, got {value}"
    return None


def require_non_negative(**values: float) -> Optional[str]:
    for name, value in values.items():
        if not is_finite_number(value):
            return f"{name} must be a finite number, got {value!r}"
        if value < 0:
            return f"{name} cannot be negative, got {value}"
    return None


def require_finite(**values: float) -> Optional[str]:
    for name, value in values.items():
        if not is_finite_number(value):
            return f"{name} must be a finite number, got {value!r}"
    return None


def check_option_parameters(params: OptionParameters) -> Optional[str]:
    """
    Validate the inputs of the pricing formulas.

    Spot, strike, days to expiration and volatility must be strictly
    positive; the rate may take any finite value.
    """
    return require_positive(
        underlying_price=params.underlying_price,
        strike_price=params.strike_price,
        days_to_expiration=params.days_to_expiration,
        volatility=params.volatility,
    ) or require_finite(risk_free_rate=params.risk_free_rate)


def check_implied_volatility_query(query: ImpliedVolatilityQuery) -> Optional[str]:
    return require_positive(
        underlying_price=query.underlying_price,
        strike_price=query.strike_price,
        days_to_expiration=query.days_to_expiration,
        observed_price=query.observed_price,
    ) or require_finite(risk_free_rate=query.risk_free_rate)
