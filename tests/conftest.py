"""
Pytest configuration and shared fixtures.
"""

import pytest

from tradetools.utils.types import MarginScenario, OpenInterestRow, OptionParameters


@pytest.fixture
def standard_params():
    """Standard at-the-money option parameters (T in years)."""
    return {
        "S": 100.0,
        "K": 100.0,
        "T": 1.0,
        "r": 0.05,
        "sigma": 0.20,
    }


@pytest.fixture
def atm_call():
    """One-year at-the-money call, 20% vol, 5% rate."""
    return OptionParameters(
        underlying_price=100.0,
        strike_price=100.0,
        days_to_expiration=365.0,
        volatility=0.20,
        risk_free_rate=0.05,
        option_type="call",
    )


@pytest.fixture
def atm_put(atm_call):
    return OptionParameters(
        underlying_price=atm_call.underlying_price,
        strike_price=atm_call.strike_price,
        days_to_expiration=atm_call.days_to_expiration,
        volatility=atm_call.volatility,
        risk_free_rate=atm_call.risk_free_rate,
        option_type="put",
    )


@pytest.fixture
def open_interest_table():
    """Sample option chain used by the max pain calculator."""
    return [
        OpenInterestRow(100.0, 5000.0, 7000.0),
        OpenInterestRow(105.0, 6500.0, 5500.0),
        OpenInterestRow(110.0, 8000.0, 3000.0),
        OpenInterestRow(115.0, 3500.0, 4500.0),
        OpenInterestRow(120.0, 2000.0, 9000.0),
    ]


@pytest.fixture
def margin_scenario():
    """Equal capital and loan, 8% rate, one year, +10% move."""
    return MarginScenario(
        initial_capital=10000.0,
        margin_loan=10000.0,
        annual_interest_rate_pct=8.0,
        duration_days=365.0,
        price_change_pct=10.0,
    )
