"""
Core types and validation for the pricer library.

This module provides the value types shared by every engine:
1. Inputs: OptionParameters
2. Results: PricingResult, Greeks, InvariantReport, PrecisionReport,
   VolatilitySurfacePoint, ProtocolComparison
3. Configuration: BenchmarkConfig and module-level constants
4. Validation: validate_option_parameters

All types are frozen dataclasses with value semantics. Nothing here holds
state between calls.
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from decimal import Decimal

from .errors import (
    InvalidSpotPrice,
    InvalidStrikePrice,
    InvalidVolatility,
    InvalidTimeToExpiry,
    InvalidRiskFreeRate,
)
from .fixed_point import ZERO, to_fixed


# ============================================================================
# CONSTANTS
# ============================================================================

TRADING_DAYS_PER_YEAR = 252

# Put-call parity is an identity of the formula; only truncation noise remains.
DEFAULT_PARITY_TOLERANCE = to_fixed("1e-12")

# Reported when computed == reference. The signed mantissa spans ~59 integer bits.
EXACT_MATCH_BITS = to_fixed(59)

BASIS_POINTS_PER_UNIT = to_fixed(10000)


# ============================================================================
# INPUTS
# ============================================================================

@dataclass(frozen=True, slots=True)
class OptionParameters:
    """
    Inputs to a European option valuation.

    Fields are coerced to 18-decimal fixed point on construction. They are
    NOT validated here: every entry point validates independently so that
    the error raised names the offending input.

    Attributes:
        spot: Current price of the underlying
        strike: Strike price
        volatility: Annualized volatility (0.8 = 80%)
        risk_free_rate: Continuously compounded annual rate
        time_to_expiry: Time to expiry in years
    """
    spot: Decimal
    strike: Decimal
    volatility: Decimal
    risk_free_rate: Decimal
    time_to_expiry: Decimal

    def __post_init__(self):
        for f in fields(self):
            object.__setattr__(self, f.name, to_fixed(getattr(self, f.name)))


def validate_option_parameters(params: OptionParameters) -> None:
    """
    Validate option inputs in a fixed order, failing on the first violation.

    Raises:
        InvalidSpotPrice: If spot <= 0
        InvalidStrikePrice: If strike <= 0
        InvalidVolatility: If volatility <= 0
        InvalidTimeToExpiry: If time_to_expiry <= 0
        InvalidRiskFreeRate: If risk_free_rate < 0
    """
    if params.spot <= ZERO:
        raise InvalidSpotPrice(params.spot)
    if params.strike <= ZERO:
        raise InvalidStrikePrice(params.strike)
    if params.volatility <= ZERO:
        raise InvalidVolatility(params.volatility)
    if params.time_to_expiry <= ZERO:
        raise InvalidTimeToExpiry(params.time_to_expiry)
    if params.risk_free_rate < ZERO:
        raise InvalidRiskFreeRate(params.risk_free_rate)


# ============================================================================
# RESULTS
# ============================================================================

@dataclass(frozen=True, slots=True)
class PricingResult:
    """Call and put premiums together with the d1/d2 they were priced from."""
    call_price: Decimal
    put_price: Decimal
    d1: Decimal
    d2: Decimal


@dataclass(frozen=True, slots=True)
class Greeks:
    """
    First-order sensitivities plus gamma, all from a single evaluation.

    Theta is per year and negative for a long call (time decay).
    """
    call_delta: Decimal
    put_delta: Decimal
    gamma: Decimal
    vega: Decimal
    call_theta: Decimal
    put_theta: Decimal


@dataclass(frozen=True, slots=True)
class InvariantReport:
    """Snapshot diagnostic of one pricing evaluation."""
    premiums_non_negative: bool
    put_call_parity_holds: bool
    cdf_in_unit_interval: bool

    @property
    def all_hold(self) -> bool:
        return self.premiums_non_negative and self.put_call_parity_holds and self.cdf_in_unit_interval


@dataclass(frozen=True, slots=True)
class PrecisionReport:
    """
    Error of a computed value against a reference.

    bits_of_precision is -log2(relative_error), with EXACT_MATCH_BITS (59)
    reported for an exact match.
    """
    absolute_error: Decimal
    relative_error: Decimal
    bits_of_precision: Decimal


@dataclass(frozen=True, slots=True)
class VolatilitySurfacePoint:
    base_iv: Decimal
    skew: Decimal
    utilization_premium: Decimal
    total_iv: Decimal


@dataclass(frozen=True, slots=True)
class ProtocolComparison:
    """Absolute error of this library next to the assumed error bounds of two other protocols."""
    this_library_error: Decimal
    protocol_a_error: Decimal
    protocol_b_error: Decimal


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass(frozen=True, slots=True)
class BenchmarkConfig:
    """
    Assumed relative error bounds of the comparison protocols.

    These are published/assumed figures used for benchmarking tables only,
    not derived from any computation.
    """
    protocol_a_error_fraction: Decimal = to_fixed("1e-7")
    protocol_b_error_fraction: Decimal = to_fixed("5e-7")

    def __post_init__(self):
        for f in fields(self):
            object.__setattr__(self, f.name, to_fixed(getattr(self, f.name)))


DEFAULT_BENCHMARK_CONFIG = BenchmarkConfig()
