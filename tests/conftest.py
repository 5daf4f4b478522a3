"""
conftest.py - Shared pytest fixtures for pricer tests

Provides common option parameter sets:
- At-the-money, zero-rate (d1 = σ√T/2)
- Textbook 100/100/20%/5%/1y case with well-known prices and Greeks
- In- and out-of-the-money variants

And comparison helpers for fixed-point Decimals.
"""

import pytest
from decimal import Decimal

from pricer import OptionParameters


@pytest.fixture
def atm_params():
    """ATM, zero rate: d1 = 0.2, d2 = -0.2."""
    return OptionParameters(
        spot=Decimal("3000"),
        strike=Decimal("3000"),
        volatility=Decimal("0.8"),
        risk_free_rate=Decimal("0"),
        time_to_expiry=Decimal("0.25"),
    )


@pytest.fixture
def textbook_params():
    """S=100, K=100, σ=20%, r=5%, T=1: call ≈ 10.4506, put ≈ 5.5735."""
    return OptionParameters(
        spot=Decimal("100"),
        strike=Decimal("100"),
        volatility=Decimal("0.2"),
        risk_free_rate=Decimal("0.05"),
        time_to_expiry=Decimal("1"),
    )


@pytest.fixture
def itm_params():
    return OptionParameters(
        spot=Decimal("120"),
        strike=Decimal("100"),
        volatility=Decimal("0.2"),
        risk_free_rate=Decimal("0.05"),
        time_to_expiry=Decimal("1"),
    )


@pytest.fixture
def otm_params():
    return OptionParameters(
        spot=Decimal("80"),
        strike=Decimal("100"),
        volatility=Decimal("0.2"),
        risk_free_rate=Decimal("0.05"),
        time_to_expiry=Decimal("1"),
    )


def make_params(spot="100", strike="100", volatility="0.2", risk_free_rate="0.05", time_to_expiry="1"):
    """Build OptionParameters overriding only the fields a test cares about."""
    return OptionParameters(
        spot=spot,
        strike=strike,
        volatility=volatility,
        risk_free_rate=risk_free_rate,
        time_to_expiry=time_to_expiry,
    )


def assert_fixed_close(actual: Decimal, expected, tolerance: str = "1e-12") -> None:
    """Assert |actual - expected| <= tolerance in exact Decimal arithmetic."""
    gap = abs(Decimal(actual) - Decimal(str(expected)))
    assert gap <= Decimal(tolerance), f"{actual} != {expected} (gap {gap})"
