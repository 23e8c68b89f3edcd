"""
Implied volatility solver entry points.

Two paths are offered:

- method="newton" (default) reproduces the reference calculator: a
  plain Newton-Raphson loop from a 20% guess, no bounds, no fallback.
- method="auto" is a hardened path. It rejects prices outside the
  no-arbitrage bounds, runs the same Newton-Raphson loop, discards a
  non-positive result, and falls back to Brent's method.

method="brent" runs the bracketed solver alone.
"""

import logging
import math
from typing import Literal, Optional, Sequence

from tradetools.core.distributions import CdfMethod
from tradetools.solvers.brent import brent_iv
from tradetools.solvers.newton_raphson import newton_raphson_iv
from tradetools.utils.constants import (
    ARBITRAGE_TOLERANCE,
    IV_INITIAL_GUESS,
    IV_MAX_ITERATIONS,
    IV_PRICE_TOLERANCE,
)
from tradetools.utils.types import ImpliedVolatilityQuery, ImpliedVolResult, OptionType
from tradetools.utils.validation import check_implied_volatility_query

logger = logging.getLogger(__name__)

IVMethod = Literal["newton", "auto", "brent"]

_SOLVER_NAMES = {"newton": "newton-raphson", "auto": "auto", "brent": "brent"}


def validate_arbitrage_bounds(
    market_price: float,
    S: float,
    K: float,
    T: float,
    r: float,
    option_type: OptionType,
) -> Optional[str]:
    """
    Check if market price violates no-arbitrage bounds.

    Returns:
        None if valid, error message string if arbitrage violation detected
    """
    discount_strike = K * math.exp(-r * T)

    if option_type == "call":
        # max(S - K·e^(-rT), 0) <= C <= S
        lower_bound = max(S - discount_strike, 0.0)
        upper_bound = S
        label = "Call"
    else:
        # max(K·e^(-rT) - S, 0) <= P <= K·e^(-rT)
        lower_bound = max(discount_strike - S, 0.0)
        upper_bound = discount_strike
        label = "Put"

    if market_price < lower_bound - ARBITRAGE_TOLERANCE:
        return f"{label} price {market_price:.4f} below lower bound {lower_bound:.4f}"
    if market_price > upper_bound + ARBITRAGE_TOLERANCE:
        return f"{label} price {market_price:.4f} above upper bound {upper_bound:.4f}"
    return None


def _rejected(message: str, method: IVMethod) -> ImpliedVolResult:
    logger.debug("Implied volatility not found: %s", message)
    return ImpliedVolResult(
        volatility=None,
        iterations=0,
        method=_SOLVER_NAMES[method],
        success=False,
        message=message,
    )


def implied_volatility(
    query: ImpliedVolatilityQuery,
    method: IVMethod = "newton",
    initial_guess: float = IV_INITIAL_GUESS,
    max_iterations: int = IV_MAX_ITERATIONS,
    price_tolerance: float = IV_PRICE_TOLERANCE,
    cdf_method: CdfMethod = "abramowitz_stegun",
) -> ImpliedVolResult:
    """
    Solve for the volatility implied by an observed option price.

    Args:
        query: Contract, market parameters and observed price
        method: "newton" (reference), "auto" (hardened) or "brent"
        initial_guess: Newton-Raphson starting volatility
        max_iterations: Newton-Raphson iteration cap
        price_tolerance: Newton-Raphson price tolerance
        cdf_method: Normal CDF implementation used for pricing

    Returns:
        ImpliedVolResult; volatility is None when not found

    Raises:
        ValueError: If method is unknown

    Examples:
        >>> query = ImpliedVolatilityQuery(100, 100, 365, 0.05, 10.45)
        >>> result = implied_volatility(query)
        >>> print(f"IV: {result.volatility:.2%}")
        IV: 20.00%
    """
    if method not in ("newton", "auto", "brent"):
        raise ValueError(f"method must be 'newton', 'auto' or 'brent', got '{method}'")

    reason = check_implied_volatility_query(query)
    if reason:
        return _rejected(reason, method)

    S = query.underlying_price
    K = query.strike_price
    T = query.time_to_expiry
    r = query.risk_free_rate
    price = query.observed_price

    if method != "newton":
        try:
            violation = validate_arbitrage_bounds(price, S, K, T, r, query.option_type)
        except OverflowError as exc:
            return _rejected(f"Arbitrage bounds undefined: {exc}", method)
        if violation:
            return _rejected(f"Arbitrage violation detected: {violation}", method)

    if method in ("newton", "auto"):
        nr_result = newton_raphson_iv(
            price,
            S,
            K,
            T,
            r,
            query.option_type,
            initial_guess=initial_guess,
            max_iterations=max_iterations,
            price_tolerance=price_tolerance,
            cdf_method=cdf_method,
        )
        if method == "newton":
            return nr_result
        if nr_result.success and nr_result.volatility > 0:
            return nr_result
        logger.info(
            "Newton-Raphson failed for %s (%s), falling back to Brent",
            query,
            nr_result.message,
        )

    return brent_iv(price, S, K, T, r, query.option_type, cdf_method=cdf_method)


def compute_implied_volatility(
    query: ImpliedVolatilityQuery,
    method: IVMethod = "newton",
    cdf_method: CdfMethod = "abramowitz_stegun",
) -> Optional[float]:
    """Implied volatility as a decimal, or None when not found."""
    result = implied_volatility(query, method=method, cdf_method=cdf_method)
    if not result.success or result.volatility is None or math.isnan(result.volatility):
        return None
    return result.volatility


def implied_volatility_smile(
    observed_prices: Sequence[float],
    strikes: Sequence[float],
    underlying_price: float,
    days_to_expiration: float,
    risk_free_rate: float,
    option_type: OptionType = "call",
    method: IVMethod = "newton",
) -> list[ImpliedVolResult]:
    """
    Solve implied volatilities for several strikes of one expiry.

    Raises:
        ValueError: If observed_prices and strikes have different lengths

    Example:
        >>> results = implied_volatility_smile(
        ...     [7.5, 4.5, 2.3], [95, 100, 105], 100, 365, 0.05
        ... )
        >>> ivs = [r.volatility for r in results if r.success]
    """
    if len(observed_prices) != len(strikes):
        raise ValueError(
            f"observed_prices ({len(observed_prices)}) and strikes ({len(strikes)}) "
            f"must have same length"
        )

    results = []
    for price, strike in zip(observed_prices, strikes):
        query = ImpliedVolatilityQuery(
            underlying_price=underlying_price,
            strike_price=strike,
            days_to_expiration=days_to_expiration,
            risk_free_rate=risk_free_rate,
            observed_price=price,
            option_type=option_type,
        )
        results.append(implied_volatility(query, method=method))

    return results
