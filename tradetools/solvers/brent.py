"""
Brent's method for implied volatility calculation.

Bracketed fallback used by the hardened solver path when Newton-Raphson
fails. Brent's method is guaranteed to converge if the price crosses
the market price between the volatility bounds, though it's slower.
"""

import logging

from scipy.optimize import brentq

from tradetools.core.black_scholes import black_scholes_price
from tradetools.core.distributions import CdfMethod
from tradetools.utils.constants import IV_BRENT_XTOL, IV_MAX_ITERATIONS, IV_MAX_VOL, IV_MIN_VOL
from tradetools.utils.types import ImpliedVolResult, OptionType

logger = logging.getLogger(__name__)


def brent_iv(
    market_price: float,
    S: float,
    K: float,
    T: float,
    r: float,
    option_type: OptionType,
    vol_lower: float = IV_MIN_VOL,
    vol_upper: float = IV_MAX_VOL,
    xtol: float = IV_BRENT_XTOL,
    cdf_method: CdfMethod = "abramowitz_stegun",
) -> ImpliedVolResult:
    """
    Solve for implied volatility using Brent's method.

    Args:
        market_price: Observed market price of the option
        S, K, T, r: Spot, strike, time in years and risk-free rate
        option_type: "call" or "put"
        vol_lower: Lower bound for volatility search
        vol_upper: Upper bound for volatility search
        xtol: Tolerance on sigma
        cdf_method: Normal CDF implementation used for the price

    Returns:
        ImpliedVolResult; success is False if the bounds don't bracket a root
    """

    def objective(sigma: float) -> float:
        return black_scholes_price(S, K, T, r, sigma, option_type, cdf_method) - market_price

    try:
        implied_vol, info = brentq(
            objective,
            vol_lower,
            vol_upper,
            xtol=xtol,
            maxiter=IV_MAX_ITERATIONS,
            full_output=True,
        )
    except (ValueError, RuntimeError, OverflowError) as e:
        message = (
            f"Brent method failed on [{vol_lower:.4f}, {vol_upper:.4f}]: {e}. "
            f"Market price {market_price} may violate arbitrage bounds."
        )
        logger.debug(message)
        return ImpliedVolResult(
            volatility=None,
            iterations=0,
            method="brent",
            success=False,
            message=message,
        )

    price_error = abs(objective(implied_vol))
    return ImpliedVolResult(
        volatility=float(implied_vol),
        iterations=info.iterations,
        method="brent",
        success=True,
        message=f"Converged with price error {price_error:.2e}",
    )
