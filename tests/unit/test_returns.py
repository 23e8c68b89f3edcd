"""
Unit tests for breakeven, ROI and risk-adjusted ratio calculators.
"""

import pytest

from tradetools.analytics.returns import (
    compute_breakeven,
    compute_roi_metrics,
    compute_sharpe_ratio,
    compute_sortino_ratio,
    sortino_rating,
)

NAN = float("nan")


# ===========================
# Breakeven Tests
# ===========================


def test_call_breakeven():
    assert compute_breakeven(500.0, 5.50, "call") == pytest.approx(505.50)


def test_put_breakeven():
    assert compute_breakeven(500.0, 5.50, "put") == pytest.approx(494.50)


@pytest.mark.parametrize("strike,premium", [(NAN, 1.0), (100.0, NAN), (float("inf"), 1.0)])
def test_breakeven_undefined(strike, premium):
    assert compute_breakeven(strike, premium) is None


def test_breakeven_unknown_type_raises():
    with pytest.raises(ValueError):
        compute_breakeven(100.0, 1.0, "straddle")


# ===========================
# ROI Tests
# ===========================


def test_roi_metrics():
    metrics = compute_roi_metrics(1000.0, 250.0, 30.0)

    assert metrics.roi == pytest.approx(25.00, abs=0.01)
    assert metrics.premium_per_day == pytest.approx(8.33, abs=0.01)
    assert metrics.annualized_roi == pytest.approx(304.17, abs=0.01)


def test_roi_one_year_equals_annualized():
    metrics = compute_roi_metrics(2000.0, 100.0, 365.0)
    assert metrics.annualized_roi == pytest.approx(metrics.roi)


@pytest.mark.parametrize(
    "initial,premium,duration",
    [
        (0.0, 250.0, 30.0),
        (1000.0, 250.0, 0.0),
        (NAN, 250.0, 30.0),
        (1000.0, NAN, 30.0),
        (1000.0, 250.0, NAN),
        ("1000", 250.0, 30.0),
    ],
)
def test_roi_undefined(initial, premium, duration):
    assert compute_roi_metrics(initial, premium, duration) is None


# ===========================
# Ratio Tests
# ===========================


def test_sharpe_ratio():
    assert compute_sharpe_ratio(12.0, 4.0, 16.0) == pytest.approx(0.5)


def test_sortino_ratio():
    assert compute_sortino_ratio(12.0, 4.0, 4.0) == pytest.approx(2.0)


def test_negative_excess_return():
    assert compute_sharpe_ratio(2.0, 4.0, 10.0) == pytest.approx(-0.2)


@pytest.mark.parametrize("deviation", [0.0, -5.0, NAN])
def test_ratios_undefined_for_bad_deviation(deviation):
    assert compute_sharpe_ratio(12.0, 4.0, deviation) is None
    assert compute_sortino_ratio(12.0, 4.0, deviation) is None


def test_ratios_undefined_for_nan_returns():
    assert compute_sharpe_ratio(NAN, 4.0, 10.0) is None
    assert compute_sortino_ratio(12.0, NAN, 10.0) is None


@pytest.mark.parametrize(
    "ratio,rating",
    [
        (3.1, "Excellent"),
        (2.0, "Excellent"),
        (1.5, "Good"),
        (0.5, "Fair"),
        (0.0, "Poor"),
        (-0.1, "Very Poor"),
        (None, None),
        (NAN, None),
    ],
)
def test_sortino_rating(ratio, rating):
    assert sortino_rating(ratio) == rating
