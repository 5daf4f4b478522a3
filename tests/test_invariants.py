"""
test_invariants.py - Tests for the invariant checker and parity assertion
"""

import logging
from decimal import Decimal

import pytest

from pricer import (
    check_invariants, assert_put_call_parity, check_expiry_payoff_parity,
    InvariantReport, PutCallParityViolation, InvalidSpotPrice, InvalidStrikePrice,
    InvalidRiskFreeRate,
)

from conftest import make_params


class TestCheckInvariants:

    def test_all_hold_atm(self, atm_params):
        report = check_invariants(atm_params, Decimal("1e-12"))
        assert report == InvariantReport(
            premiums_non_negative=True,
            put_call_parity_holds=True,
            cdf_in_unit_interval=True,
        )

    def test_all_hold_textbook(self, textbook_params, itm_params, otm_params):
        for params in (textbook_params, itm_params, otm_params):
            assert check_invariants(params).all_hold

    def test_default_tolerance(self, textbook_params):
        assert check_invariants(textbook_params) == check_invariants(textbook_params, "1e-12")

    def test_negative_tolerance_fails_parity(self, textbook_params):
        report = check_invariants(textbook_params, "-1")
        assert not report.put_call_parity_holds
        assert report.premiums_non_negative
        assert report.cdf_in_unit_interval

    def test_recomputed_each_call(self, textbook_params):
        assert check_invariants(textbook_params) is not check_invariants(textbook_params)

    def test_validates(self):
        with pytest.raises(InvalidRiskFreeRate):
            check_invariants(make_params(risk_free_rate="-0.01"))


class TestAssertPutCallParity:

    def test_passes(self, textbook_params, atm_params):
        assert assert_put_call_parity(textbook_params, Decimal("1e-12")) is None
        assert assert_put_call_parity(atm_params) is None

    def test_violation(self, textbook_params):
        with pytest.raises(PutCallParityViolation) as exc_info:
            assert_put_call_parity(textbook_params, "-1")
        assert exc_info.value.tolerance == Decimal("-1")
        assert exc_info.value.gap >= 0

    def test_violation_is_logged(self, textbook_params, caplog):
        with caplog.at_level(logging.WARNING, logger="pricer.invariants"):
            with pytest.raises(PutCallParityViolation):
                assert_put_call_parity(textbook_params, "-1")
        assert "put-call parity violated" in caplog.text

    def test_validates(self):
        with pytest.raises(InvalidSpotPrice):
            assert_put_call_parity(make_params(spot="-3"))


class TestExpiryPayoffParity:

    @pytest.mark.parametrize("spot, strike", [
        ("3000", "3000"),
        ("3500", "3000"),
        ("2500", "3000"),
        ("0.000000000000000001", "1000000"),
        ("1000000", "0.000000000000000001"),
    ])
    def test_holds(self, spot, strike):
        assert check_expiry_payoff_parity(spot, strike)

    def test_validates(self):
        with pytest.raises(InvalidSpotPrice):
            check_expiry_payoff_parity(0, 100)
        with pytest.raises(InvalidStrikePrice):
            check_expiry_payoff_parity(100, -1)
