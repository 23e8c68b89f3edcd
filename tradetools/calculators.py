"""
Function surface consumed by the presentation layers.

Every calculator takes plain numbers or the immutable records from
tradetools.utils.types and returns a number, a small record, or None
when the result is undefined (invalid input) or not found (the implied
volatility solver did not converge). None of them raise on bad numeric
input; an unknown option type or method name is still a ValueError.
"""

from tradetools.analytics.margin import compute_margin_scenario, margin_projection
from tradetools.analytics.max_pain import compute_max_pain, pain_profile
from tradetools.analytics.returns import (
    compute_breakeven,
    compute_roi_metrics,
    compute_sharpe_ratio,
    compute_sortino_ratio,
    sortino_rating,
)
from tradetools.core.black_scholes import compute_greeks, option_price
from tradetools.solvers.implied_vol import compute_implied_volatility

__all__ = [
    "compute_breakeven",
    "compute_greeks",
    "compute_implied_volatility",
    "compute_margin_scenario",
    "compute_max_pain",
    "compute_roi_metrics",
    "compute_sharpe_ratio",
    "compute_sortino_ratio",
    "margin_projection",
    "option_price",
    "pain_profile",
    "sortino_rating",
]
