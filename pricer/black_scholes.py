"""
black_scholes.py - Black-Scholes-Merton Pricing and Greeks in Fixed Point

European option prices and sensitivities under BSM with a continuously
compounded risk-free rate. Time is in years. Every intermediate is an
18-decimal fixed-point value, so results are bit-for-bit reproducible.

Provides:
- d1, d2
- Option pricing (call, put, both at once)
- Greeks (delta, gamma, vega, theta)
- Payoffs at expiry

Prices and Greeks for the same parameters are derived from one shared
evaluation (_evaluate), so a price and its Greeks never disagree on d1, d2,
N(d1), N(d2), n(d1) or the discount factor.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple

from . import fixed_point as fp
from .core import Greeks, OptionParameters, PricingResult, validate_option_parameters
from .errors import InvalidSpotPrice, InvalidStrikePrice, InvalidVolatility
from .fixed_point import FixedInput, ONE, TWO, ZERO
from .normal import normal_cdf, normal_pdf


# ============================================================================
# SHARED EVALUATION
# ============================================================================

@dataclass(frozen=True, slots=True)
class _Evaluation:
    params: OptionParameters
    sqrt_t: Decimal
    vol_sqrt_t: Decimal
    d1: Decimal
    d2: Decimal
    cdf_d1: Decimal
    cdf_d2: Decimal
    cdf_neg_d1: Decimal
    cdf_neg_d2: Decimal
    pdf_d1: Decimal
    discounted_strike: Decimal


def _evaluate(params: OptionParameters) -> _Evaluation:
    """
    Validate params and compute every intermediate used by prices and Greeks.

    d1 = (ln(S/K) + (r + σ²/2)*T) / (σ*√T)
    d2 = d1 - σ*√T

    Raises:
        InvalidParameter: If params fail validation, or σ*√T truncates to zero
    """
    validate_option_parameters(params)
    s, k = params.spot, params.strike
    v, r, t = params.volatility, params.risk_free_rate, params.time_to_expiry

    sqrt_t = fp.sqrt(t)
    vol_sqrt_t = fp.mul(v, sqrt_t)
    if vol_sqrt_t == ZERO:
        # σ and T positive but too small to resolve at 18 decimals
        raise InvalidVolatility(v)
    drift = fp.mul(fp.add(r, fp.div(fp.mul(v, v), TWO)), t)
    d1 = fp.div(fp.add(fp.ln(fp.div(s, k)), drift), vol_sqrt_t)
    d2 = fp.sub(d1, vol_sqrt_t)

    return _Evaluation(
        params=params,
        sqrt_t=sqrt_t,
        vol_sqrt_t=vol_sqrt_t,
        d1=d1,
        d2=d2,
        cdf_d1=normal_cdf(d1),
        cdf_d2=normal_cdf(d2),
        cdf_neg_d1=normal_cdf(fp.neg(d1)),
        cdf_neg_d2=normal_cdf(fp.neg(d2)),
        pdf_d1=normal_pdf(d1),
        discounted_strike=discounted_strike(k, r, t),
    )


def discounted_strike(strike: Decimal, risk_free_rate: Decimal, time_to_expiry: Decimal) -> Decimal:
    """K * e^(-rT), the present value of the strike."""
    return fp.mul(strike, fp.exp(fp.neg(fp.mul(risk_free_rate, time_to_expiry))))


# ============================================================================
# D1 AND D2
# ============================================================================

def d1_d2(params: OptionParameters) -> Tuple[Decimal, Decimal]:
    """
    Standardized BSM arguments (d1, d2). d1 > d2 always since σ*√T > 0.

    Raises:
        InvalidParameter: If params fail validation
    """
    ev = _evaluate(params)
    return ev.d1, ev.d2


# ============================================================================
# OPTION PRICES
# ============================================================================

def _call_from(ev: _Evaluation) -> Decimal:
    return fp.sub(fp.mul(ev.params.spot, ev.cdf_d1), fp.mul(ev.discounted_strike, ev.cdf_d2))


def _put_from(ev: _Evaluation) -> Decimal:
    return fp.sub(fp.mul(ev.discounted_strike, ev.cdf_neg_d2), fp.mul(ev.params.spot, ev.cdf_neg_d1))


def call_price(params: OptionParameters) -> Decimal:
    """
    European call premium.

    C = S*N(d1) - K*e^(-rT)*N(d2)
    """
    return _call_from(_evaluate(params))


def put_price(params: OptionParameters) -> Decimal:
    """
    European put premium.

    P = K*e^(-rT)*N(-d2) - S*N(-d1)
    """
    return _put_from(_evaluate(params))


def price_bsm(params: OptionParameters) -> PricingResult:
    """
    Call and put premiums plus d1/d2 from a single evaluation.

    Put-call parity C - P = S - K*e^(-rT) holds as an identity of the
    formula (N(x) + N(-x) == 1 exactly), up to a few units of truncation.

    Raises:
        InvalidParameter: If params fail validation
    """
    ev = _evaluate(params)
    return PricingResult(
        call_price=_call_from(ev),
        put_price=_put_from(ev),
        d1=ev.d1,
        d2=ev.d2,
    )


# ============================================================================
# GREEKS
# ============================================================================

def _time_decay(ev: _Evaluation) -> Decimal:
    """S*n(d1)*σ / (2*√T), the volatility part of theta shared by calls and puts."""
    p = ev.params
    return fp.div(fp.mul(fp.mul(p.spot, ev.pdf_d1), p.volatility), fp.mul(TWO, ev.sqrt_t))


def _greeks_from(ev: _Evaluation) -> Greeks:
    p = ev.params
    rate_carry = fp.mul(p.risk_free_rate, ev.discounted_strike)
    decay = _time_decay(ev)
    return Greeks(
        call_delta=ev.cdf_d1,
        put_delta=fp.sub(ev.cdf_d1, ONE),
        gamma=fp.div(ev.pdf_d1, fp.mul(fp.mul(p.spot, p.volatility), ev.sqrt_t)),
        vega=fp.mul(fp.mul(p.spot, ev.pdf_d1), ev.sqrt_t),
        call_theta=fp.sub(fp.neg(decay), fp.mul(rate_carry, ev.cdf_d2)),
        put_theta=fp.add(fp.neg(decay), fp.mul(rate_carry, ev.cdf_neg_d2)),
    )


def compute_greeks(params: OptionParameters) -> Greeks:
    """
    All Greeks from one evaluation.

    Raises:
        InvalidParameter: If params fail validation
    """
    return _greeks_from(_evaluate(params))


def call_delta(params: OptionParameters) -> Decimal:
    """Call delta: ∂C/∂S = N(d1)."""
    return _evaluate(params).cdf_d1


def put_delta(params: OptionParameters) -> Decimal:
    """Put delta: ∂P/∂S = N(d1) - 1."""
    return fp.sub(_evaluate(params).cdf_d1, ONE)


def gamma(params: OptionParameters) -> Decimal:
    """
    Gamma: ∂²C/∂S², identical for calls and puts. Always > 0.

    Γ = n(d1) / (S*σ*√T)
    """
    return _greeks_from(_evaluate(params)).gamma


def vega(params: OptionParameters) -> Decimal:
    """
    Vega: ∂C/∂σ, identical for calls and puts. Always > 0.

    ν = S*n(d1)*√T
    """
    return _greeks_from(_evaluate(params)).vega


def call_theta(params: OptionParameters) -> Decimal:
    """
    Call theta per year. Negative: a long call loses value as time passes.

    θ = -S*n(d1)*σ / (2*√T) - r*K*e^(-rT)*N(d2)
    """
    return _greeks_from(_evaluate(params)).call_theta


def put_theta(params: OptionParameters) -> Decimal:
    """
    Put theta per year.

    θ = -S*n(d1)*σ / (2*√T) + r*K*e^(-rT)*N(-d2)
    """
    return _greeks_from(_evaluate(params)).put_theta


# ============================================================================
# PAYOFFS AT EXPIRY
# ============================================================================

def _validate_payoff_inputs(spot: Decimal, strike: Decimal) -> None:
    if spot <= ZERO:
        raise InvalidSpotPrice(spot)
    if strike <= ZERO:
        raise InvalidStrikePrice(strike)


def call_payoff(spot: FixedInput, strike: FixedInput) -> Decimal:
    """Call payoff at expiry: max(S - K, 0)."""
    spot, strike = fp.to_fixed(spot), fp.to_fixed(strike)
    _validate_payoff_inputs(spot, strike)
    return fp.sub(spot, strike) if spot > strike else ZERO


def put_payoff(spot: FixedInput, strike: FixedInput) -> Decimal:
    """Put payoff at expiry: max(K - S, 0)."""
    spot, strike = fp.to_fixed(spot), fp.to_fixed(strike)
    _validate_payoff_inputs(spot, strike)
    return fp.sub(strike, spot) if strike > spot else ZERO


if __name__ == "__main__":
    params = OptionParameters(
        spot=Decimal("3000"),
        strike=Decimal("3000"),
        volatility=Decimal("0.8"),
        risk_free_rate=Decimal("0.05"),
        time_to_expiry=Decimal("0.25"),
    )

    result = price_bsm(params)
    greeks = compute_greeks(params)

    print(f"d1: {result.d1}  d2: {result.d2}")
    print(f"Call Price: {result.call_price}")
    print(f"Put Price: {result.put_price}")
    print(f"Delta: {greeks.call_delta}  Gamma: {greeks.gamma}")
    print(f"Vega: {greeks.vega}  Theta: {greeks.call_theta}")
