"""
Black-Scholes option pricing model and Greeks for European options.

The low-level functions take raw scalars (S, K, T in years, r, sigma)
and raise ValueError on inputs outside the domain of the formulas. The
compute_* functions at the bottom take an OptionParameters record and
report such inputs as an undefined result (None) instead.

No dividend yield is modelled: the underlying is assumed not to pay
out during the life of the option.

References:
    Black, F., & Scholes, M. (1973). The Pricing of Options and Corporate Liabilities.
    Journal of Political Economy, 81(3), 637-654.
"""

import logging
import math
from typing import Optional

from tradetools.core.distributions import CdfMethod, get_cdf, normal_pdf
from tradetools.utils.constants import DAYS_PER_YEAR, DELTA_SCALE, VEGA_SCALE
from tradetools.utils.types import Greeks, OptionParameters, OptionType, check_option_type
from tradetools.utils.validation import check_option_parameters

logger = logging.getLogger(__name__)


def _validate_inputs(S: float, K: float, T: float, r: float, sigma: float) -> None:
    """
    Validate option pricing inputs.

    Raises:
        ValueError: If any input is invalid
    """
    if not all(math.isfinite(v) for v in (S, K, T, r, sigma)):
        raise ValueError(f"Inputs must be finite, got S={S}, K={K}, T={T}, r={r}, sigma={sigma}")
    if S <= 0:
        raise ValueError(f"Spot price must be positive, got S={S}")
    if K <= 0:
        raise ValueError(f"Strike price must be positive, got K={K}")
    if T <= 0:
        raise ValueError(f"Time to expiration must be positive, got T={T}")
    if sigma <= 0:
        raise ValueError(f"Volatility must be positive, got sigma={sigma}")


def d1(S: float, K: float, T: float, r: float, sigma: float) -> float:
    """
    Calculate d1 parameter in Black-Scholes formula.

    Formula:
        d1 = [ln(S) - ln(K) + (r + σ²/2)T] / (σ√T)

    ln(S/K) is taken as a difference of logs: S/K may underflow to zero.
    """
    _validate_inputs(S, K, T, r, sigma)
    return (math.log(S) - math.log(K) + (r + sigma * sigma / 2.0) * T) / (sigma * math.sqrt(T))


def d2(S: float, K: float, T: float, r: float, sigma: float) -> float:
    """
    Calculate d2 parameter in Black-Scholes formula.

    Formula:
        d2 = d1 - σ√T
    """
    return d1(S, K, T, r, sigma) - sigma * math.sqrt(T)


def black_scholes_call(
    S: float, K: float, T: float, r: float, sigma: float, cdf_method: CdfMethod = "abramowitz_stegun"
) -> float:
    """
    Calculate European call option price.

    Formula:
        C = S·N(d1) - K·e^(-rT)·N(d2)

    Examples:
        >>> price = black_scholes_call(100, 100, 1.0, 0.05, 0.20)
        >>> abs(price - 10.4506) < 0.01
        True
    """
    cdf = get_cdf(cdf_method)
    d1_value = d1(S, K, T, r, sigma)
    d2_value = d1_value - sigma * math.sqrt(T)
    return S * cdf(d1_value) - K * math.exp(-r * T) * cdf(d2_value)


def black_scholes_put(
    S: float, K: float, T: float, r: float, sigma: float, cdf_method: CdfMethod = "abramowitz_stegun"
) -> float:
    """
    Calculate European put option price.

    Formula:
        P = K·e^(-rT)·(1 - N(d2)) - S·(1 - N(d1))

    Examples:
        >>> price = black_scholes_put(100, 100, 1.0, 0.05, 0.20)
        >>> abs(price - 5.5735) < 0.01
        True
    """
    cdf = get_cdf(cdf_method)
    d1_value = d1(S, K, T, r, sigma)
    d2_value = d1_value - sigma * math.sqrt(T)
    return K * math.exp(-r * T) * (1.0 - cdf(d2_value)) - S * (1.0 - cdf(d1_value))


def black_scholes_price(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    option_type: OptionType = "call",
    cdf_method: CdfMethod = "abramowitz_stegun",
) -> float:
    """
    Calculate European option price (call or put).

    Raises:
        ValueError: If option_type is not "call" or "put", or inputs are invalid
    """
    check_option_type(option_type)
    if option_type == "call":
        return black_scholes_call(S, K, T, r, sigma, cdf_method)
    return black_scholes_put(S, K, T, r, sigma, cdf_method)


def price_and_vega(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    option_type: OptionType = "call",
    cdf_method: CdfMethod = "abramowitz_stegun",
) -> tuple[float, float]:
    """
    Price and vega at a trial volatility, for root finders.

    Unlike the functions above, sigma is not checked: an unclamped
    Newton-Raphson iterate may be zero or negative, and the formulas are
    evaluated as they stand. A zero sigma raises ZeroDivisionError.
    """
    cdf = get_cdf(cdf_method)
    sqrt_T = math.sqrt(T)
    d1_value = (math.log(S) - math.log(K) + (r + sigma * sigma / 2.0) * T) / (sigma * sqrt_T)
    d2_value = d1_value - sigma * sqrt_T
    discount_strike = K * math.exp(-r * T)

    if option_type == "call":
        price = S * cdf(d1_value) - discount_strike * cdf(d2_value)
    else:
        price = discount_strike * (1.0 - cdf(d2_value)) - S * (1.0 - cdf(d1_value))

    return price, S * normal_pdf(d1_value) * sqrt_T


# ===========================
# Greeks Calculations
# ===========================


def delta(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    option_type: OptionType = "call",
    cdf_method: CdfMethod = "abramowitz_stegun",
) -> float:
    """
    Calculate option delta (∂V/∂S) as a fraction.

    Formulas:
        Call delta: Δ_c = N(d1)
        Put delta:  Δ_p = N(d1) - 1

    Call delta minus put delta is exactly 1 for the same inputs.
    """
    check_option_type(option_type)
    cdf_d1 = get_cdf(cdf_method)(d1(S, K, T, r, sigma))
    if option_type == "call":
        return cdf_d1
    return cdf_d1 - 1.0


def gamma(S: float, K: float, T: float, r: float, sigma: float) -> float:
    """
    Calculate option gamma (∂²V/∂S²), same for calls and puts.

    Formula:
        Γ = φ(d1) / (S · σ · √T)
    """
    pdf_d1 = normal_pdf(d1(S, K, T, r, sigma))
    return pdf_d1 / (S * sigma * math.sqrt(T))


def vega(S: float, K: float, T: float, r: float, sigma: float) -> float:
    """
    Calculate option vega (∂V/∂σ) per unit of volatility.

    Same for calls and puts. This is the derivative the implied
    volatility solver divides by; divide by 100 for the per-point figure.

    Formula:
        ν = S · φ(d1) · √T
    """
    pdf_d1 = normal_pdf(d1(S, K, T, r, sigma))
    return S * pdf_d1 * math.sqrt(T)


def theta(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    option_type: OptionType = "call",
    cdf_method: CdfMethod = "abramowitz_stegun",
) -> float:
    """
    Calculate option theta, reported per calendar day.

    Formulas:
        Call: Θ_c = -S·φ(d1)·σ/(2√T) - r·K·e^(-rT)·N(d2)
        Put:  Θ_p = -S·φ(d1)·σ/(2√T) + r·K·e^(-rT)·(1 - N(d2))

    Interpretation:
        Theta of -0.05 means the option loses $0.05 per calendar day,
        all else equal.
    """
    check_option_type(option_type)
    cdf = get_cdf(cdf_method)

    d1_value = d1(S, K, T, r, sigma)
    d2_value = d1_value - sigma * math.sqrt(T)
    sqrt_T = math.sqrt(T)
    discount_strike = r * K * math.exp(-r * T)

    # Diffusion contribution, same for call and put
    term1 = -(S * normal_pdf(d1_value) * sigma) / (2.0 * sqrt_T)

    if option_type == "call":
        term2 = -discount_strike * cdf(d2_value)
    else:
        term2 = discount_strike * (1.0 - cdf(d2_value))

    return (term1 + term2) / DAYS_PER_YEAR


def calculate_greeks(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    option_type: OptionType = "call",
    cdf_method: CdfMethod = "abramowitz_stegun",
) -> Greeks:
    """
    Calculate all Greeks in trading convention.

    Returns:
        Greeks with delta in percent, theta per day and vega per vol point

    Example:
        >>> greeks = calculate_greeks(100, 100, 1.0, 0.05, 0.20)
        >>> print(f"Delta: {greeks.delta:.2f}")
        Delta: 63.68
    """
    return Greeks(
        delta=delta(S, K, T, r, sigma, option_type, cdf_method) * DELTA_SCALE,
        gamma=gamma(S, K, T, r, sigma),
        theta=theta(S, K, T, r, sigma, option_type, cdf_method),
        vega=vega(S, K, T, r, sigma) * VEGA_SCALE,
    )


# ===========================
# Record-based entry points
# ===========================


def _unpack(params: OptionParameters) -> tuple:
    return (
        params.underlying_price,
        params.strike_price,
        params.time_to_expiry,
        params.risk_free_rate,
        params.volatility,
    )


def option_price(
    params: OptionParameters, cdf_method: CdfMethod = "abramowitz_stegun"
) -> Optional[float]:
    """Theoretical price for a parameter set, or None when undefined."""
    reason = check_option_parameters(params)
    if reason:
        logger.debug("Price undefined: %s", reason)
        return None

    try:
        price = black_scholes_price(*_unpack(params), params.option_type, cdf_method)
    except (OverflowError, ZeroDivisionError) as exc:
        logger.debug("Price undefined: %s for %s", exc, params)
        return None

    if not math.isfinite(price):
        logger.debug("Price undefined: formula produced %s for %s", price, params)
        return None
    return price


def compute_greeks(
    params: OptionParameters, cdf_method: CdfMethod = "abramowitz_stegun"
) -> Optional[Greeks]:
    """
    Greeks for a parameter set, or None when any of them is undefined.

    Undefined covers non-positive or non-finite spot, strike, days to
    expiration or volatility, and a non-finite rate. A formula that
    still yields NaN or infinity (extreme inputs) is reported the same way.
    """
    reason = check_option_parameters(params)
    if reason:
        logger.debug("Greeks undefined: %s", reason)
        return None

    try:
        greeks = calculate_greeks(*_unpack(params), params.option_type, cdf_method)
    except (OverflowError, ZeroDivisionError) as exc:
        logger.debug("Greeks undefined: %s for %s", exc, params)
        return None

    values = (greeks.delta, greeks.gamma, greeks.theta, greeks.vega)
    if not all(math.isfinite(v) for v in values):
        logger.debug("Greeks undefined: non-finite result %s for %s", greeks, params)
        return None
    return greeks
