"""
Unit tests for Black-Scholes pricing and Greeks calculations.

This module validates:
1. Known analytical solutions from textbooks
2. Put-call parity on price and delta
3. Call/put symmetry of gamma and vega
4. Greeks accuracy via finite-difference comparison
5. Undefined results for out-of-domain inputs
"""

import math

import pytest

from tradetools.core.black_scholes import (
    black_scholes_call,
    black_scholes_price,
    black_scholes_put,
    calculate_greeks,
    compute_greeks,
    d1,
    d2,
    delta,
    gamma,
    option_price,
    price_and_vega,
    theta,
    vega,
)
from tradetools.utils.types import OptionParameters


def _params(S=100.0, K=100.0, days=365.0, sigma=0.20, r=0.05, option_type="call"):
    return OptionParameters(S, K, days, sigma, r, option_type)


# ===========================
# Known Solutions Tests
# ===========================


def test_atm_call_known_solution(standard_params):
    """
    Hull's "Options, Futures, and Other Derivatives":
    S=100, K=100, T=1, r=5%, σ=20% → Call ≈ 10.4506
    """
    price = black_scholes_call(**standard_params)
    assert abs(price - 10.4506) < 0.001, f"Expected ~10.4506, got {price}"


def test_atm_put_known_solution(standard_params):
    """Same parameters → Put ≈ 5.5735"""
    price = black_scholes_put(**standard_params)
    assert abs(price - 5.5735) < 0.001, f"Expected ~5.5735, got {price}"


def test_atm_call_greeks_known_values(atm_call):
    greeks = compute_greeks(atm_call)

    assert greeks.delta == pytest.approx(63.683, abs=0.01)  # N(0.35), in percent
    assert greeks.gamma == pytest.approx(0.018762, abs=1e-5)
    assert greeks.vega == pytest.approx(0.37524, abs=1e-4)  # per vol point
    assert greeks.theta == pytest.approx(-6.4140 / 365.0, abs=1e-4)  # per day


def test_atm_put_greeks_known_values(atm_put):
    greeks = compute_greeks(atm_put)

    assert greeks.delta == pytest.approx(63.683 - 100.0, abs=0.01)
    assert greeks.theta == pytest.approx(-1.6579 / 365.0, abs=1e-4)


# ===========================
# Parity and Symmetry Tests
# ===========================


@pytest.mark.parametrize(
    "S,K,days,sigma,r",
    [
        (100, 100, 365, 0.20, 0.05),  # ATM
        (110, 100, 365, 0.20, 0.05),  # ITM call
        (90, 100, 365, 0.20, 0.05),  # OTM call
        (100, 100, 30, 0.45, 0.03),  # High vol, short expiry
        (500, 480, 730, 0.15, 0.0),  # Long expiry, zero rate
        (50, 55, 7, 0.80, -0.01),  # Negative rate
    ],
)
def test_put_call_parity(S, K, days, sigma, r):
    """C - P = S - K·e^(-rT) for any valid parameter set."""
    call = option_price(_params(S, K, days, sigma, r, "call"))
    put = option_price(_params(S, K, days, sigma, r, "put"))
    T = days / 365.0

    assert abs((call - put) - (S - K * math.exp(-r * T))) < 1e-6


@pytest.mark.parametrize("cdf_method", ["abramowitz_stegun", "reference", "exact"])
@pytest.mark.parametrize(
    "S,K,days,sigma,r",
    [
        (100, 100, 365, 0.20, 0.05),
        (120, 100, 60, 0.35, 0.02),
        (80, 100, 10, 0.60, 0.08),
    ],
)
def test_delta_parity(S, K, days, sigma, r, cdf_method):
    """Call delta minus put delta is 100 percentage points."""
    call = compute_greeks(_params(S, K, days, sigma, r, "call"), cdf_method)
    put = compute_greeks(_params(S, K, days, sigma, r, "put"), cdf_method)

    assert call.delta - put.delta == pytest.approx(100.0, abs=1e-9)


@pytest.mark.parametrize("S,K", [(100, 100), (120, 100), (80, 100)])
def test_gamma_and_vega_identical_for_call_and_put(S, K):
    call = compute_greeks(_params(S, K, option_type="call"))
    put = compute_greeks(_params(S, K, option_type="put"))

    assert call.gamma == put.gamma
    assert call.vega == put.vega


def test_reference_cdf_keeps_price_parity():
    """Parity survives the reference CDF, whatever its other flaws."""
    call = option_price(_params(option_type="call"), cdf_method="reference")
    put = option_price(_params(option_type="put"), cdf_method="reference")

    assert abs((call - put) - (100.0 - 100.0 * math.exp(-0.05))) < 1e-6


# ===========================
# d1 and d2 Tests
# ===========================


def test_d1_d2_relationship(standard_params):
    """Verify d2 = d1 - σ√T."""
    d1_val = d1(**standard_params)
    d2_val = d2(**standard_params)

    expected_d2 = d1_val - standard_params["sigma"] * math.sqrt(standard_params["T"])
    assert abs(d2_val - expected_d2) < 1e-12


def test_d1_atm_value(standard_params):
    """ln(1) = 0, so d1 = (r + σ²/2) / σ = 0.35."""
    assert d1(**standard_params) == pytest.approx(0.35)


def test_d1_sign_follows_moneyness():
    assert d1(S=120, K=100, T=1.0, r=0.05, sigma=0.20) > 0
    assert d1(S=80, K=100, T=1.0, r=0.05, sigma=0.20) < 0


# ===========================
# Finite-Difference Tests
# ===========================


def test_delta_matches_finite_difference(standard_params):
    p = dict(standard_params)
    h = 0.01
    up = black_scholes_call(**{**p, "S": p["S"] + h}, cdf_method="exact")
    down = black_scholes_call(**{**p, "S": p["S"] - h}, cdf_method="exact")

    assert delta(**p, cdf_method="exact") == pytest.approx((up - down) / (2 * h), abs=1e-5)


def test_gamma_matches_finite_difference(standard_params):
    p = dict(standard_params)
    h = 0.01
    up = delta(**{**p, "S": p["S"] + h}, cdf_method="exact")
    down = delta(**{**p, "S": p["S"] - h}, cdf_method="exact")

    assert gamma(**p) == pytest.approx((up - down) / (2 * h), abs=1e-5)


def test_vega_matches_finite_difference(standard_params):
    p = dict(standard_params)
    h = 1e-4
    up = black_scholes_call(**{**p, "sigma": p["sigma"] + h}, cdf_method="exact")
    down = black_scholes_call(**{**p, "sigma": p["sigma"] - h}, cdf_method="exact")

    assert vega(**p) == pytest.approx((up - down) / (2 * h), rel=1e-5)


@pytest.mark.parametrize("option_type", ["call", "put"])
def test_theta_matches_finite_difference(standard_params, option_type):
    """Theta per day is minus the change in value as expiry gets one day closer."""
    p = dict(standard_params)
    h = 1e-4
    later = black_scholes_price(**{**p, "T": p["T"] + h}, option_type=option_type, cdf_method="exact")
    sooner = black_scholes_price(**{**p, "T": p["T"] - h}, option_type=option_type, cdf_method="exact")
    expected_per_day = -(later - sooner) / (2 * h) / 365.0

    assert theta(**p, option_type=option_type, cdf_method="exact") == pytest.approx(
        expected_per_day, abs=1e-7
    )


# ===========================
# Greeks Convention Tests
# ===========================


def test_calculate_greeks_scaling(standard_params):
    greeks = calculate_greeks(**standard_params)

    assert greeks.delta == pytest.approx(delta(**standard_params) * 100.0)
    assert greeks.vega == pytest.approx(vega(**standard_params) / 100.0)
    assert greeks.theta == theta(**standard_params)


def test_call_delta_range():
    for S in (60, 90, 100, 110, 150):
        greeks = compute_greeks(_params(S=S))
        assert 0.0 <= greeks.delta <= 100.0


def test_put_delta_range():
    for S in (60, 90, 100, 110, 150):
        greeks = compute_greeks(_params(S=S, option_type="put"))
        assert -100.0 <= greeks.delta <= 0.0


def test_gamma_and_vega_positive(atm_call):
    greeks = compute_greeks(atm_call)
    assert greeks.gamma > 0
    assert greeks.vega > 0


def test_price_and_vega_agrees_with_engine(standard_params):
    price, vega_value = price_and_vega(**standard_params, option_type="put")

    assert price == pytest.approx(black_scholes_put(**standard_params))
    assert vega_value == pytest.approx(vega(**standard_params))


def test_price_and_vega_zero_sigma_raises():
    with pytest.raises(ZeroDivisionError):
        price_and_vega(100.0, 100.0, 1.0, 0.05, 0.0)


# ===========================
# Input Validation Tests
# ===========================


@pytest.mark.parametrize(
    "overrides",
    [
        {"S": 0.0},
        {"S": -100.0},
        {"K": 0.0},
        {"days": 0.0},
        {"days": -5.0},
        {"sigma": 0.0},
        {"sigma": -0.2},
        {"sigma": float("nan")},
        {"S": float("inf")},
        {"r": float("nan")},
    ],
)
def test_invalid_inputs_are_undefined(overrides):
    params = _params(**overrides)

    assert compute_greeks(params) is None
    assert option_price(params) is None


def test_extreme_moneyness_does_not_raise():
    """Spot/strike ratio underflows to zero; the log term must not."""
    params = _params(S=1e-200, K=1e200, days=30.0)

    greeks = compute_greeks(params)

    assert greeks is not None
    assert greeks.delta == 0.0
    assert greeks.gamma == 0.0
    assert option_price(params) == 0.0


def test_d1_finite_for_underflowing_ratio():
    assert math.isfinite(d1(1e-200, 1e200, 1.0, 0.05, 0.20))


def test_low_level_functions_raise_on_invalid_input():
    with pytest.raises(ValueError):
        black_scholes_call(S=-100, K=100, T=1.0, r=0.05, sigma=0.20)
    with pytest.raises(ValueError):
        gamma(S=100, K=100, T=0.0, r=0.05, sigma=0.20)
    with pytest.raises(ValueError):
        vega(S=100, K=100, T=1.0, r=0.05, sigma=0.0)


def test_black_scholes_price_invalid_type(standard_params):
    with pytest.raises(ValueError, match="Option type must be .call. or .put."):
        black_scholes_price(**standard_params, option_type="straddle")


def test_option_parameters_reject_unknown_type():
    with pytest.raises(ValueError):
        OptionParameters(100.0, 100.0, 30.0, 0.2, 0.05, "straddle")


def test_time_to_expiry_uses_calendar_year():
    assert _params(days=73.0).time_to_expiry == pytest.approx(0.2)
