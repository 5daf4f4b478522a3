"""
invariants.py - Self-diagnostics for the pricing engine

check_invariants recomputes a price and reports whether the structural
properties of the formula hold for it. assert_put_call_parity is the raising
form of the parity check, meant for correctness gates in calling code.

check_expiry_payoff_parity covers the expiry limit (T = 0), where
call_payoff - put_payoff == S - K must hold exactly.
"""

import logging
from decimal import Decimal

from . import fixed_point as fp
from .black_scholes import call_payoff, discounted_strike, price_bsm, put_payoff
from .core import DEFAULT_PARITY_TOLERANCE, InvariantReport, OptionParameters, PricingResult
from .errors import PutCallParityViolation
from .fixed_point import FixedInput, ONE, ZERO
from .normal import normal_cdf

logger = logging.getLogger(__name__)


def _parity_gap(params: OptionParameters, result: PricingResult) -> Decimal:
    """|C - P - (S - K*e^(-rT))|"""
    forward_value = fp.sub(
        params.spot,
        discounted_strike(params.strike, params.risk_free_rate, params.time_to_expiry),
    )
    return fp.absolute(fp.sub(fp.sub(result.call_price, result.put_price), forward_value))


def _in_unit_interval(value: Decimal) -> bool:
    return ZERO <= value <= ONE


def check_invariants(
    params: OptionParameters,
    tolerance: FixedInput = DEFAULT_PARITY_TOLERANCE,
) -> InvariantReport:
    """
    Price params and report which invariants hold. Never cached.

    Raises:
        InvalidParameter: If params fail validation
    """
    tolerance = fp.to_fixed(tolerance)
    result = price_bsm(params)
    report = InvariantReport(
        premiums_non_negative=result.call_price >= ZERO and result.put_price >= ZERO,
        put_call_parity_holds=_parity_gap(params, result) <= tolerance,
        cdf_in_unit_interval=(
            _in_unit_interval(normal_cdf(result.d1)) and _in_unit_interval(normal_cdf(result.d2))
        ),
    )
    logger.debug("invariants for %s: %s", params, report)
    return report


def assert_put_call_parity(
    params: OptionParameters,
    tolerance: FixedInput = DEFAULT_PARITY_TOLERANCE,
) -> None:
    """
    Raises:
        InvalidParameter: If params fail validation
        PutCallParityViolation: If |C - P - (S - K*e^(-rT))| > tolerance
    """
    tolerance = fp.to_fixed(tolerance)
    gap = _parity_gap(params, price_bsm(params))
    if gap > tolerance:
        logger.warning("put-call parity violated for %s: gap=%s tolerance=%s", params, gap, tolerance)
        raise PutCallParityViolation(gap, tolerance)


def check_expiry_payoff_parity(spot: FixedInput, strike: FixedInput) -> bool:
    """
    Verify the payoff identities at expiry for one (spot, strike) pair.

    - call_payoff - put_payoff == spot - strike
    - both payoffs are non-negative
    - call_payoff <= spot and put_payoff <= strike
    - call and put are never both in the money

    Raises:
        InvalidSpotPrice: If spot <= 0
        InvalidStrikePrice: If strike <= 0
    """
    spot, strike = fp.to_fixed(spot), fp.to_fixed(strike)
    call_pay = call_payoff(spot, strike)
    put_pay = put_payoff(spot, strike)
    return (
        fp.sub(call_pay, put_pay) == fp.sub(spot, strike)
        and call_pay >= ZERO
        and put_pay >= ZERO
        and call_pay <= spot
        and put_pay <= strike
        and not (call_pay > ZERO and put_pay > ZERO)
    )
