"""
Margin (leveraged position) scenario arithmetic.

Given own capital, a broker loan, the loan rate and an assumed price
move, compares the outcome with and without leverage and locates the
portfolio value at which a maintenance-margin call is triggered.
"""

import logging
from typing import Optional, Sequence

from tradetools.utils.constants import DAYS_PER_YEAR, MAINTENANCE_MARGIN, PROJECTION_CHANGES
from tradetools.utils.types import MarginResult, MarginScenario, ProjectionPoint
from tradetools.utils.validation import require_finite, require_non_negative, require_positive

logger = logging.getLogger(__name__)


def check_margin_scenario(scenario: MarginScenario) -> Optional[str]:
    return (
        require_positive(initial_capital=scenario.initial_capital)
        or require_non_negative(
            margin_loan=scenario.margin_loan,
            annual_interest_rate_pct=scenario.annual_interest_rate_pct,
            duration_days=scenario.duration_days,
        )
        or require_finite(price_change_pct=scenario.price_change_pct)
    )


def interest_cost(margin_loan: float, annual_interest_rate_pct: float, duration_days: float) -> float:
    """Simple interest on the loan: loan × rate/100 × days/365."""
    return margin_loan * (annual_interest_rate_pct / 100.0) * duration_days / DAYS_PER_YEAR


def margin_call_value(margin_loan: float, maintenance_margin: float = MAINTENANCE_MARGIN) -> float:
    """
    Portfolio value at which equity falls to the maintenance requirement.

    Equity = Value - Loan, and the call comes when Equity / Value drops
    below the maintenance margin, i.e. at Value = Loan / (1 - maintenance).
    """
    return margin_loan / (1.0 - maintenance_margin)


def compute_margin_scenario(
    scenario: MarginScenario, maintenance_margin: float = MAINTENANCE_MARGIN
) -> Optional[MarginResult]:
    """
    Evaluate a margin scenario, or None when an input is out of domain.

    Example:
        >>> result = compute_margin_scenario(MarginScenario(10000, 10000, 8.0, 365, 10.0))
        >>> round(result.interest_cost, 2), round(result.net_profit_with_margin, 2)
        (800.0, 1200.0)
    """
    reason = check_margin_scenario(scenario)
    if reason:
        logger.debug("Margin scenario undefined: %s", reason)
        return None

    capital = scenario.initial_capital
    change = scenario.price_change_pct / 100.0

    buying_power = capital + scenario.margin_loan
    cost = interest_cost(
        scenario.margin_loan, scenario.annual_interest_rate_pct, scenario.duration_days
    )

    profit_without = capital * change
    roi_without = profit_without / capital * 100.0

    gross_with = buying_power * change
    net_with = gross_with - cost
    roi_with = net_with / capital * 100.0

    call_value = margin_call_value(scenario.margin_loan, maintenance_margin)

    return MarginResult(
        total_buying_power=buying_power,
        interest_cost=cost,
        profit_without_margin=profit_without,
        total_value_without_margin=capital + profit_without,
        roi_without_margin=roi_without,
        gross_profit_with_margin=gross_with,
        net_profit_with_margin=net_with,
        total_value_with_margin=capital + net_with,
        roi_with_margin=roi_with,
        margin_call_value=call_value,
        margin_call_percentage_drop=(buying_power - call_value) / buying_power * 100.0,
        leverage_amplification=abs(roi_with / roi_without) if roi_without != 0 else None,
    )


def margin_projection(
    scenario: MarginScenario, changes: Sequence[float] = PROJECTION_CHANGES
) -> Optional[list[ProjectionPoint]]:
    """
    Account value across a range of price moves, with and without leverage.

    The leveraged value is equity after repaying the loan and the
    interest for the scenario's holding period. Both values are floored
    at zero. The scenario's own price_change_pct is ignored.
    """
    reason = check_margin_scenario(scenario)
    if reason:
        logger.debug("Margin projection undefined: %s", reason)
        return None

    capital = scenario.initial_capital
    loan = scenario.margin_loan
    cost = interest_cost(loan, scenario.annual_interest_rate_pct, scenario.duration_days)

    points = []
    for change_pct in changes:
        growth = 1.0 + change_pct / 100.0
        cash_value = capital * growth
        margin_value = (capital + loan) * growth - loan - cost
        points.append(
            ProjectionPoint(
                price_change_pct=change_pct,
                cash_only_value=max(0.0, cash_value),
                with_margin_value=max(0.0, margin_value),
            )
        )
    return points
