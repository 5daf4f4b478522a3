"""
pricer - Deterministic fixed-point option pricing

European option pricing under Black-Scholes-Merton with 18-decimal
fixed-point arithmetic, Greeks, EWMA realized volatility, a volatility
surface model and self-diagnostic / precision utilities.

Usage:
    from pricer import OptionParameters, price_bsm, compute_greeks

    params = OptionParameters(
        spot=3000, strike=3000, volatility="0.8",
        risk_free_rate=0, time_to_expiry="0.25",
    )
    result = price_bsm(params)      # call_price, put_price, d1, d2
    greeks = compute_greeks(params)

Every function is pure: no shared state, no I/O. Invalid inputs raise a
PricerError subclass carrying the offending value.
"""

# Errors
from .errors import (
    PricerError,
    InvalidParameter,
    InvalidSpotPrice,
    InvalidStrikePrice,
    InvalidVolatility,
    InvalidTimeToExpiry,
    InvalidRiskFreeRate,
    InvalidDecayFactor,
    UtilizationTooHigh,
    EmptyReturnsArray,
    ZeroReferenceValue,
    PutCallParityViolation,
    ArithmeticDomainError,
    ArithmeticOverflow,
)

# Core types
from .core import (
    OptionParameters,
    PricingResult,
    Greeks,
    InvariantReport,
    PrecisionReport,
    VolatilitySurfacePoint,
    ProtocolComparison,
    BenchmarkConfig,
    DEFAULT_BENCHMARK_CONFIG,
    DEFAULT_PARITY_TOLERANCE,
    EXACT_MATCH_BITS,
    TRADING_DAYS_PER_YEAR,
    validate_option_parameters,
)

# Fixed point
from .fixed_point import to_fixed

# Normal distribution
from .normal import normal_cdf, normal_pdf

# Black-Scholes pricing and Greeks
from .black_scholes import (
    d1_d2,
    call_price,
    put_price,
    price_bsm,
    discounted_strike,
    compute_greeks,
    call_delta,
    put_delta,
    gamma,
    vega,
    call_theta,
    put_theta,
    call_payoff,
    put_payoff,
)

# Volatility
from .volatility import ewma_variance, ewma_volatility
from .vol_surface import (
    volatility_skew,
    utilization_premium,
    compute_vol_surface_point,
    build_vol_surface,
)

# Diagnostics
from .invariants import (
    check_invariants,
    assert_put_call_parity,
    check_expiry_payoff_parity,
)
from .precision import (
    measure_precision,
    compare_protocol_errors,
    agrees_within_bps,
    reference_bsm_prices,
    measure_pricing_precision,
)

__all__ = [
    # Errors
    'PricerError', 'InvalidParameter',
    'InvalidSpotPrice', 'InvalidStrikePrice', 'InvalidVolatility',
    'InvalidTimeToExpiry', 'InvalidRiskFreeRate', 'InvalidDecayFactor',
    'UtilizationTooHigh', 'EmptyReturnsArray', 'ZeroReferenceValue',
    'PutCallParityViolation', 'ArithmeticDomainError', 'ArithmeticOverflow',
    # Core
    'OptionParameters', 'PricingResult', 'Greeks', 'InvariantReport',
    'PrecisionReport', 'VolatilitySurfacePoint', 'ProtocolComparison',
    'BenchmarkConfig', 'DEFAULT_BENCHMARK_CONFIG', 'DEFAULT_PARITY_TOLERANCE',
    'EXACT_MATCH_BITS', 'TRADING_DAYS_PER_YEAR', 'validate_option_parameters',
    'to_fixed',
    # Normal distribution
    'normal_cdf', 'normal_pdf',
    # Black-Scholes
    'd1_d2', 'call_price', 'put_price', 'price_bsm', 'discounted_strike',
    'compute_greeks', 'call_delta', 'put_delta', 'gamma', 'vega',
    'call_theta', 'put_theta', 'call_payoff', 'put_payoff',
    # Volatility
    'ewma_variance', 'ewma_volatility',
    'volatility_skew', 'utilization_premium', 'compute_vol_surface_point',
    'build_vol_surface',
    # Diagnostics
    'check_invariants', 'assert_put_call_parity', 'check_expiry_payoff_parity',
    'measure_precision', 'compare_protocol_errors', 'agrees_within_bps',
    'reference_bsm_prices', 'measure_pricing_precision',
]

__version__ = '1.0.0'
