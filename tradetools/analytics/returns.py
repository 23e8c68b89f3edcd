"""
Closed-form return figures: breakeven, premium ROI and risk-adjusted ratios.

Every function returns None instead of a number when an input is not
finite or a denominator would be zero.
"""

import logging
from typing import Optional

from tradetools.utils.constants import DAYS_PER_YEAR, SORTINO_BANDS, SORTINO_FLOOR_RATING
from tradetools.utils.types import OptionType, RoiMetrics
from tradetools.utils.validation import is_finite_number, require_finite

logger = logging.getLogger(__name__)


def compute_breakeven(
    strike: float, premium: float, option_type: OptionType = "call"
) -> Optional[float]:
    """
    Underlying price at expiration where a long option neither gains nor loses.

    Formulas:
        Call: K + premium
        Put:  K - premium

    Raises:
        ValueError: If option_type is not "call" or "put"
    """
    if option_type not in ("call", "put"):
        raise ValueError(f"option_type must be 'call' or 'put', got '{option_type}'")

    reason = require_finite(strike=strike, premium=premium)
    if reason:
        logger.debug("Breakeven undefined: %s", reason)
        return None

    if option_type == "call":
        return strike + premium
    return strike - premium


def compute_roi_metrics(
    initial: float, premium: float, duration_days: float
) -> Optional[RoiMetrics]:
    """
    Return on capital for a premium-collecting trade.

    Formulas:
        ROI            = premium / initial × 100
        Premium/day    = premium / duration
        Annualized ROI = (premium / duration × 365 / initial) × 100

    Example:
        >>> m = compute_roi_metrics(1000, 250, 30)
        >>> round(m.roi, 2), round(m.premium_per_day, 2), round(m.annualized_roi, 2)
        (25.0, 8.33, 304.17)
    """
    reason = require_finite(initial=initial, premium=premium, duration_days=duration_days)
    if reason is None and (initial == 0 or duration_days == 0):
        reason = f"initial and duration_days must be non-zero, got {initial}, {duration_days}"
    if reason:
        logger.debug("ROI undefined: %s", reason)
        return None

    premium_per_day = premium / duration_days
    return RoiMetrics(
        roi=premium / initial * 100.0,
        annualized_roi=premium_per_day * DAYS_PER_YEAR / initial * 100.0,
        premium_per_day=premium_per_day,
    )


def _excess_return_ratio(
    name: str, portfolio_return: float, risk_free_rate: float, deviation: float
) -> Optional[float]:
    reason = require_finite(
        portfolio_return=portfolio_return, risk_free_rate=risk_free_rate, deviation=deviation
    )
    if reason is None and deviation <= 0:
        reason = f"deviation must be positive, got {deviation}"
    if reason:
        logger.debug("%s ratio undefined: %s", name, reason)
        return None
    return (portfolio_return - risk_free_rate) / deviation


def compute_sharpe_ratio(
    portfolio_return: float, risk_free_rate: float, standard_deviation: float
) -> Optional[float]:
    """
    Sharpe ratio (Rp - Rf) / σp.

    Inputs share one unit, typically percent per year.
    """
    return _excess_return_ratio("Sharpe", portfolio_return, risk_free_rate, standard_deviation)


def compute_sortino_ratio(
    portfolio_return: float, risk_free_rate: float, downside_deviation: float
) -> Optional[float]:
    """Sortino ratio (Rp - Rf) / σd, penalizing only downside volatility."""
    return _excess_return_ratio("Sortino", portfolio_return, risk_free_rate, downside_deviation)


def sortino_rating(ratio: Optional[float]) -> Optional[str]:
    """
    Qualitative band for a Sortino ratio.

    Excellent ≥ 2, Good ≥ 1, Fair ≥ 0.5, Poor ≥ 0, otherwise Very Poor.
    """
    if not is_finite_number(ratio):
        return None
    for threshold, label in SORTINO_BANDS:
        if ratio >= threshold:
            return label
    return SORTINO_FLOOR_RATING
