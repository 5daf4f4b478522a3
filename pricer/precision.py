"""
precision.py - Precision metrics and cross-protocol comparison

Audit helpers for benchmarking the fixed-point engine:
- measure_precision: absolute/relative error and bits of precision
- compare_protocol_errors: this library's error next to the assumed error
  bounds of two comparison protocols (BenchmarkConfig)
- agrees_within_bps: relative agreement test in basis points
- reference_bsm_prices: float64 BSM with the exact normal CDF (scipy), the
  reference the fixed-point engine is measured against
"""

import logging
from typing import Optional, Sequence, Tuple, Union

import numpy as np
from scipy.special import erf as scipy_erf

from . import fixed_point as fp
from .black_scholes import price_bsm
from .core import (
    BASIS_POINTS_PER_UNIT,
    DEFAULT_BENCHMARK_CONFIG,
    EXACT_MATCH_BITS,
    BenchmarkConfig,
    OptionParameters,
    PrecisionReport,
    ProtocolComparison,
    validate_option_parameters,
)
from .errors import InvalidStrikePrice, ZeroReferenceValue
from .fixed_point import FixedInput, ZERO

logger = logging.getLogger(__name__)

SQRT_2 = np.sqrt(2.0)


# ============================================================================
# PRECISION METRICS
# ============================================================================

def measure_precision(computed: FixedInput, reference: FixedInput) -> PrecisionReport:
    """
    Error of computed against reference.

    bits_of_precision = -log2(relative_error), capped at EXACT_MATCH_BITS.
    An exact match, or a relative error below one mantissa unit, reports
    EXACT_MATCH_BITS.

    Raises:
        ZeroReferenceValue: If reference is zero
    """
    computed, reference = fp.to_fixed(computed), fp.to_fixed(reference)
    if reference == ZERO:
        raise ZeroReferenceValue()

    absolute_error = fp.absolute(fp.sub(computed, reference))
    relative_error = fp.div(absolute_error, fp.absolute(reference))
    if relative_error == ZERO:
        bits = EXACT_MATCH_BITS
    else:
        bits = min(fp.neg(fp.log2(relative_error)), EXACT_MATCH_BITS)

    report = PrecisionReport(
        absolute_error=absolute_error,
        relative_error=relative_error,
        bits_of_precision=bits,
    )
    logger.debug("precision of %s vs %s: %s", computed, reference, report)
    return report


def compare_protocol_errors(
    computed_price: FixedInput,
    reference_price: FixedInput,
    config: Optional[BenchmarkConfig] = None,
) -> ProtocolComparison:
    """
    This library's absolute error next to the assumed errors of two protocols.

    The protocol figures are fixed fractions of |reference_price| (1e-7 and
    5e-7 by default), for benchmarking tables only.

    Raises:
        ZeroReferenceValue: If reference_price is zero
    """
    config = config or DEFAULT_BENCHMARK_CONFIG
    computed_price, reference_price = fp.to_fixed(computed_price), fp.to_fixed(reference_price)
    if reference_price == ZERO:
        raise ZeroReferenceValue()

    magnitude = fp.absolute(reference_price)
    return ProtocolComparison(
        this_library_error=fp.absolute(fp.sub(computed_price, reference_price)),
        protocol_a_error=fp.mul(config.protocol_a_error_fraction, magnitude),
        protocol_b_error=fp.mul(config.protocol_b_error_fraction, magnitude),
    )


def agrees_within_bps(a: FixedInput, b: FixedInput, basis_points: FixedInput) -> bool:
    """
    True if |a - b| / |b| <= basis_points / 10000.

    Against b == 0 only an exact zero agrees.
    """
    a, b = fp.to_fixed(a), fp.to_fixed(b)
    if b == ZERO:
        return a == ZERO
    relative = fp.div(fp.absolute(fp.sub(a, b)), fp.absolute(b))
    return relative <= fp.div(fp.to_fixed(basis_points), BASIS_POINTS_PER_UNIT)


# ============================================================================
# FLOAT64 REFERENCE
# ============================================================================

def _normal_cdf_float(x: np.ndarray) -> np.ndarray:
    return 0.5 * (1.0 + scipy_erf(x / SQRT_2))


def reference_bsm_prices(
    spot: FixedInput,
    strikes: Union[FixedInput, Sequence[FixedInput], np.ndarray],
    volatility: FixedInput,
    risk_free_rate: FixedInput,
    time_to_expiry: FixedInput,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Float64 BSM call and put prices for one or more strikes.

    Uses the exact normal CDF (via erf), so the difference from price_bsm
    is dominated by the rational CDF approximation.

    Returns:
        (calls, puts) as float arrays with one entry per strike

    Raises:
        InvalidParameter: If any input fails validation
    """
    k = np.atleast_1d(np.asarray(strikes, dtype=float))
    if k.size == 0:
        raise ValueError("strikes must not be empty")
    # Same validation order as the fixed-point engine, then the rest of the ladder
    validate_option_parameters(OptionParameters(spot, float(k[0]), volatility, risk_free_rate, time_to_expiry))
    if np.any(k <= 0):
        raise InvalidStrikePrice(float(k[k <= 0][0]))

    s, v = float(spot), float(volatility)
    r, t = float(risk_free_rate), float(time_to_expiry)
    vol_sqrt_t = v * np.sqrt(t)
    d1 = (np.log(s / k) + (r + 0.5 * v * v) * t) / vol_sqrt_t
    d2 = d1 - vol_sqrt_t
    discounted = k * np.exp(-r * t)

    calls = s * _normal_cdf_float(d1) - discounted * _normal_cdf_float(d2)
    puts = discounted * _normal_cdf_float(-d2) - s * _normal_cdf_float(-d1)
    return calls, puts


def measure_pricing_precision(params: OptionParameters) -> Tuple[PrecisionReport, PrecisionReport]:
    """
    Precision of price_bsm against the float64 reference, as (call, put) reports.

    Raises:
        InvalidParameter: If params fail validation
        ZeroReferenceValue: If a reference premium is exactly zero
    """
    result = price_bsm(params)
    calls, puts = reference_bsm_prices(
        params.spot, params.strike, params.volatility, params.risk_free_rate, params.time_to_expiry
    )
    return (
        measure_precision(result.call_price, fp.to_fixed(float(calls[0]))),
        measure_precision(result.put_price, fp.to_fixed(float(puts[0]))),
    )
