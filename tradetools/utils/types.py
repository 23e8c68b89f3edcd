"""
Data types and structures for the options calculators.

This module defines the immutable value types passed between the
presentation layer and the numerical core. None of them outlive a
single calculation.
"""

from dataclasses import dataclass
from typing import Literal, Optional

from tradetools.utils.constants import DAYS_PER_YEAR

OptionType = Literal["call", "put"]
SolverMethod = Literal["newton-raphson", "brent", "auto"]


def check_option_type(option_type: str) -> None:
    if option_type not in ("call", "put"):
        raise ValueError(f"Option type must be 'call' or 'put', got {option_type}")


@dataclass(frozen=True)
class OptionParameters:
    """
    Immutable container for option contract and market parameters.

    Numeric fields are not validated on construction: out-of-domain
    values are reported as an undefined result by the calculators
    rather than raised here.

    Attributes:
        underlying_price: Current price of the underlying asset
        strike_price: Strike price
        days_to_expiration: Calendar days until expiry
        volatility: Annualized volatility, decimal (0.25 for 25%)
        risk_free_rate: Annualized risk-free rate, decimal
        option_type: Either "call" or "put"
    """
    underlying_price: float
    strike_price: float
    days_to_expiration: float
    volatility: float
    risk_free_rate: float
    option_type: OptionType = "call"

    def __post_init__(self) -> None:
        check_option_type(self.option_type)

    @property
    def time_to_expiry(self) -> float:
        """Time to expiration in years."""
        return self.days_to_expiration / DAYS_PER_YEAR


@dataclass(frozen=True)
class ImpliedVolatilityQuery:
    """
    Option parameters without volatility, plus the observed market price.

    Attributes:
        underlying_price: Current price of the underlying asset
        strike_price: Strike price
        days_to_expiration: Calendar days until expiry
        risk_free_rate: Annualized risk-free rate, decimal
        observed_price: Market price of the option
        option_type: Either "call" or "put"
    """
    underlying_price: float
    strike_price: float
    days_to_expiration: float
    risk_free_rate: float
    observed_price: float
    option_type: OptionType = "call"

    def __post_init__(self) -> None:
        check_option_type(self.option_type)

    @property
    def time_to_expiry(self) -> float:
        """Time to expiration in years."""
        return self.days_to_expiration / DAYS_PER_YEAR

    def with_volatility(self, volatility: float) -> OptionParameters:
        """Build the full parameter set for a trial volatility."""
        return OptionParameters(
            underlying_price=self.underlying_price,
            strike_price=self.strike_price,
            days_to_expiration=self.days_to_expiration,
            volatility=volatility,
            risk_free_rate=self.risk_free_rate,
            option_type=self.option_type,
        )


@dataclass(frozen=True)
class Greeks:
    """
    Container for option Greeks in trading convention.

    Attributes:
        delta: ∂V/∂S as a percentage (0.55 is reported as 55.0)
        gamma: ∂²V/∂S², same for calls and puts
        theta: ∂V/∂t per calendar day
        vega: ∂V/∂σ per one volatility point
    """
    delta: float
    gamma: float
    theta: float
    vega: float


@dataclass(frozen=True)
class ImpliedVolResult:
    """
    Result from an implied volatility solver.

    Attributes:
        volatility: Solved implied volatility (annualized), None if not found
        iterations: Number of iterations used
        method: Method that produced the result; "auto" only when the
            hardened path rejected the query before any solver ran
        success: Whether the solver converged
        message: Additional information about convergence
    """
    volatility: Optional[float]
    iterations: int
    method: SolverMethod
    success: bool
    message: str = ""


@dataclass(frozen=True)
class OpenInterestRow:
    """One strike of an option chain with its call and put open interest."""
    strike: float
    call_open_interest: float
    put_open_interest: float


@dataclass(frozen=True)
class MarginScenario:
    """
    Inputs of a leveraged position projection.

    Attributes:
        initial_capital: Own cash put into the position
        margin_loan: Amount borrowed from the broker
        annual_interest_rate_pct: Margin loan rate, in percent (8.0 for 8%)
        duration_days: Holding period in calendar days
        price_change_pct: Assumed move of the position, in percent
    """
    initial_capital: float
    margin_loan: float
    annual_interest_rate_pct: float
    duration_days: float
    price_change_pct: float


@dataclass(frozen=True)
class MarginResult:
    """
    Derived figures of a margin scenario.

    Attributes:
        total_buying_power: Capital plus loan
        interest_cost: Simple interest on the loan over the holding period
        profit_without_margin: Profit on own capital only
        total_value_without_margin: Capital plus unleveraged profit
        roi_without_margin: Unleveraged return on capital, in percent
        gross_profit_with_margin: Profit on full buying power before interest
        net_profit_with_margin: Gross leveraged profit minus interest
        total_value_with_margin: Equity after the leveraged trade
        roi_with_margin: Leveraged return on capital, in percent
        margin_call_value: Portfolio value at which equity hits maintenance
        margin_call_percentage_drop: Drop from buying power to that value, in percent
        leverage_amplification: |roi_with / roi_without|, None when roi_without is 0
    """
    total_buying_power: float
    interest_cost: float
    profit_without_margin: float
    total_value_without_margin: float
    roi_without_margin: float
    gross_profit_with_margin: float
    net_profit_with_margin: float
    total_value_with_margin: float
    roi_with_margin: float
    margin_call_value: float
    margin_call_percentage_drop: float
    leverage_amplification: Optional[float]


@dataclass(frozen=True)
class ProjectionPoint:
    """Account value after a given price change, with and without leverage."""
    price_change_pct: float
    cash_only_value: float
    with_margin_value: float


@dataclass(frozen=True)
class RoiMetrics:
    """
    Return figures for a premium-collecting trade.

    Attributes:
        roi: Premium over capital, in percent
        annualized_roi: ROI projected over 365 days, in percent
        premium_per_day: Premium earned per calendar day
    """
    roi: float
    annualized_roi: float
    premium_per_day: float
