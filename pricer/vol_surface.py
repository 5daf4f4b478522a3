"""
vol_surface.py - Implied volatility surface: base IV + skew + utilization premium

    moneyness = S / K
    skew = a*(m - 1)² + b*(m - 1)
    premium = base_iv * k * u / (1 - u)
    total_iv = base_iv + skew + premium

Skew is exactly zero at the money. The utilization premium is zero for an
idle pool and grows without bound as utilization approaches 100%.
"""

from decimal import Decimal
from typing import Iterable, List

from . import fixed_point as fp
from .core import VolatilitySurfacePoint
from .errors import InvalidStrikePrice, UtilizationTooHigh
from .fixed_point import FixedInput, ONE, ZERO


def volatility_skew(spot: FixedInput, strike: FixedInput, a: FixedInput, b: FixedInput) -> Decimal:
    """
    Quadratic skew in moneyness deviation.

    Args:
        spot: Current price of the underlying
        strike: Strike price
        a: Curvature (smile) coefficient
        b: Slope (skew) coefficient

    Raises:
        InvalidStrikePrice: If strike <= 0
    """
    strike = fp.to_fixed(strike)
    if strike <= ZERO:
        raise InvalidStrikePrice(strike)
    deviation = fp.sub(fp.div(fp.to_fixed(spot), strike), ONE)
    curvature = fp.mul(fp.to_fixed(a), fp.mul(deviation, deviation))
    return fp.add(curvature, fp.mul(fp.to_fixed(b), deviation))


def utilization_premium(base_iv: FixedInput, utilization: FixedInput, k: FixedInput) -> Decimal:
    """
    Extra volatility charged as the collateral pool fills up.

    Raises:
        UtilizationTooHigh: If utilization >= 1
    """
    utilization = fp.to_fixed(utilization)
    if utilization >= ONE:
        raise UtilizationTooHigh(utilization)
    pressure = fp.div(utilization, fp.sub(ONE, utilization))
    return fp.mul(fp.mul(fp.to_fixed(base_iv), fp.to_fixed(k)), pressure)


def compute_vol_surface_point(
    base_iv: FixedInput,
    spot: FixedInput,
    strike: FixedInput,
    a: FixedInput,
    b: FixedInput,
    utilization: FixedInput,
    k: FixedInput,
) -> VolatilitySurfacePoint:
    """
    One point of the surface. base_iv is passed through unchanged.

    Raises:
        InvalidStrikePrice: If strike <= 0
        UtilizationTooHigh: If utilization >= 1
    """
    base_iv = fp.to_fixed(base_iv)
    skew = volatility_skew(spot, strike, a, b)
    premium = utilization_premium(base_iv, utilization, k)
    return VolatilitySurfacePoint(
        base_iv=base_iv,
        skew=skew,
        utilization_premium=premium,
        total_iv=fp.add(fp.add(base_iv, skew), premium),
    )


def build_vol_surface(
    base_iv: FixedInput,
    spot: FixedInput,
    strikes: Iterable[FixedInput],
    a: FixedInput,
    b: FixedInput,
    utilization: FixedInput,
    k: FixedInput,
) -> List[VolatilitySurfacePoint]:
    """Surface points for a strike ladder, in the order given."""
    return [compute_vol_surface_point(base_iv, spot, strike, a, b, utilization, k) for strike in strikes]
