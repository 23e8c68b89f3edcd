"""
Newton-Raphson method for implied volatility calculation.

This module inverts the Black-Scholes price for volatility, using vega
(∂V/∂σ) as the derivative. It reproduces the reference calculator
step for step: fixed starting guess, fixed iteration cap, a price
tolerance as the only stopping rule, and no clamping of the iterate.
"""

import logging
import math

from tradetools.core.black_scholes import price_and_vega
from tradetools.core.distributions import CdfMethod
from tradetools.utils.constants import (
    IV_INITIAL_GUESS,
    IV_MAX_ITERATIONS,
    IV_MIN_VEGA,
    IV_PRICE_TOLERANCE,
)
from tradetools.utils.types import ImpliedVolResult, OptionType

logger = logging.getLogger(__name__)


def _not_found(iterations: int, message: str) -> ImpliedVolResult:
    logger.debug("Newton-Raphson: %s", message)
    return ImpliedVolResult(
        volatility=None,
        iterations=iterations,
        method="newton-raphson",
        success=False,
        message=message,
    )


def newton_raphson_iv(
    market_price: float,
    S: float,
    K: float,
    T: float,
    r: float,
    option_type: OptionType,
    initial_guess: float = IV_INITIAL_GUESS,
    max_iterations: int = IV_MAX_ITERATIONS,
    price_tolerance: float = IV_PRICE_TOLERANCE,
    cdf_method: CdfMethod = "abramowitz_stegun",
) -> ImpliedVolResult:
    """
    Solve for implied volatility using Newton-Raphson method.

    The Newton-Raphson update is:
        σ_{n+1} = σ_n - (BS(σ_n) - market_price) / vega(σ_n)

    Args:
        market_price: Observed market price of the option
        S, K, T, r: Spot, strike, time in years and risk-free rate
        option_type: "call" or "put"
        initial_guess: Starting volatility estimate
        max_iterations: Maximum number of iterations
        price_tolerance: Convergence tolerance for the price difference
        cdf_method: Normal CDF implementation used for the price

    Returns:
        ImpliedVolResult; volatility is None unless success is True

    Notes:
        - Converged when |BS(σ) - market_price| < price_tolerance
        - Not found when vega is (near) zero, when price, vega or the
          update stop being finite, or when the iteration cap is hit
    """
    sigma = initial_guess

    for iteration in range(1, max_iterations + 1):
        try:
            bs_price, vega_value = price_and_vega(S, K, T, r, sigma, option_type, cdf_method)
        except (ZeroDivisionError, OverflowError) as exc:
            return _not_found(iteration, f"Pricing failed at σ={sigma!r}: {exc}")

        if not (math.isfinite(bs_price) and math.isfinite(vega_value)):
            return _not_found(iteration, f"Non-finite price or vega at σ={sigma!r}")

        difference = bs_price - market_price
        if abs(difference) < price_tolerance:
            return ImpliedVolResult(
                volatility=sigma,
                iterations=iteration,
                method="newton-raphson",
                success=True,
                message=f"Converged in {iteration} iterations",
            )

        if abs(vega_value) < IV_MIN_VEGA:
            return _not_found(
                iteration, f"Vega too small ({vega_value:.2e}) at iteration {iteration}"
            )

        sigma = sigma - difference / vega_value
        if not math.isfinite(sigma):
            return _not_found(iteration, f"Update diverged at iteration {iteration}")

    return _not_found(
        max_iterations, f"Max iterations ({max_iterations}) reached without convergence"
    )
