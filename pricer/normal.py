"""
normal.py - Standard normal distribution in fixed point

normal_cdf uses the Abramowitz-Stegun 26.2.17 rational approximation
(Hart's form), absolute error < 7.5e-8:

    t = 1 / (1 + p*x)
    N(x) = 1 - n(x) * (a1*t + a2*t^2 + a3*t^3 + a4*t^4 + a5*t^5),   x >= 0
    N(x) = 1 - N(-x),                                             x < 0

normal_pdf is the exact density n(x) = e^(-x^2/2) / sqrt(2*pi).
"""

from decimal import Decimal

from . import fixed_point as fp
from .fixed_point import FixedInput, ONE, HALF, TWO, ZERO


# 1 / sqrt(2*pi)
INV_SQRT_2PI = fp.to_fixed("0.398942280401432677")

CDF_P = fp.to_fixed("0.2316419")
CDF_A1 = fp.to_fixed("0.319381530")
CDF_A2 = fp.to_fixed("-0.356563782")
CDF_A3 = fp.to_fixed("1.781477937")
CDF_A4 = fp.to_fixed("-1.821255978")
CDF_A5 = fp.to_fixed("1.330274429")

# Highest power first, for Horner evaluation
_CDF_COEFFICIENTS = (CDF_A5, CDF_A4, CDF_A3, CDF_A2, CDF_A1)

# Beyond this |x|, n(x) is below one mantissa unit: n(x) == 0 and N(x) is 0 or 1
TAIL_CUTOFF = fp.to_fixed(10)


def normal_pdf(x: FixedInput) -> Decimal:
    """Standard normal probability density function. Symmetric: n(x) == n(-x) exactly."""
    x = fp.to_fixed(x)
    # x*x overflows the mantissa long before x does
    if fp.absolute(x) >= TAIL_CUTOFF:
        return ZERO
    exponent = fp.neg(fp.div(fp.mul(x, x), TWO))
    return fp.mul(INV_SQRT_2PI, fp.exp(exponent))


def _upper_cdf(x: Decimal) -> Decimal:
    """N(x) for x > 0."""
    t = fp.div(ONE, fp.add(ONE, fp.mul(CDF_P, x)))
    poly = ZERO
    for coefficient in _CDF_COEFFICIENTS:
        poly = fp.mul(fp.add(poly, coefficient), t)
    return fp.sub(ONE, fp.mul(normal_pdf(x), poly))


def normal_cdf(x: FixedInput) -> Decimal:
    """
    Standard normal cumulative distribution function.

    N(0) is exactly 0.5 so that N(x) + N(-x) == 1 holds everywhere; the
    raw polynomial is ~5e-10 off at the origin. Saturates to exactly 1 for
    x >= TAIL_CUTOFF and 0 for x <= -TAIL_CUTOFF, for any finite x.
    """
    x = fp.to_fixed(x)
    if x == ZERO:
        return HALF
    if x >= TAIL_CUTOFF:
        return ONE
    if x <= fp.neg(TAIL_CUTOFF):
        return ZERO
    if x < ZERO:
        return fp.sub(ONE, _upper_cdf(fp.neg(x)))
    return _upper_cdf(x)
