"""
fixed_point.py - Signed 18-decimal fixed-point arithmetic

Every value handled by the library is a Decimal quantized to exactly 18
fractional digits (value = integer mantissa / 10^18). The mantissa must fit a
signed 256-bit integer, so the representable range is roughly ±5.79e58.

Rounding: every operation truncates toward zero, as a scaled-integer
implementation would. mul/div/add/sub work on the integer mantissas and are
exact before truncation; exp/ln/log2/sqrt are evaluated in a private
100-digit context and then truncated.

All Decimal arithmetic happens either on Python ints or inside
decimal.localcontext(_CONTEXT), so results never depend on the calling
thread's decimal context.

Provides:
- to_fixed: coerce int / str / float / Decimal / numpy scalars
- add, sub, neg, absolute
- mul, div
- exp, ln, log2, sqrt
"""

import numbers
from decimal import Context, Decimal, InvalidOperation, ROUND_DOWN, ROUND_HALF_EVEN, localcontext
from typing import Union

from .errors import ArithmeticDomainError, ArithmeticOverflow


FixedInput = Union[Decimal, int, float, str]

# ============================================================================
# CONSTANTS
# ============================================================================

DECIMALS = 18
SCALE = 10 ** DECIMALS
MAX_MANTISSA = 2 ** 255 - 1
ZERO = Decimal(0).scaleb(-DECIMALS)

_CONTEXT = Context(prec=100, rounding=ROUND_HALF_EVEN, Emax=999999, Emin=-999999)
_QUANTUM = Decimal(1).scaleb(-DECIMALS)
_MAX_VALUE = Decimal(MAX_MANTISSA).scaleb(-DECIMALS, _CONTEXT)
# Rounding applied to log2 before truncation so exact powers of two stay exact
_LOG2_GUARD = Decimal(1).scaleb(-40)

# Below this exp(x) is smaller than one unit of the mantissa
EXP_MIN_INPUT = Decimal("-41.446531673892822322")
# Above this exp(x) overflows the mantissa
EXP_MAX_INPUT = Decimal("133.084258667509499440")


# ============================================================================
# CONVERSION
# ============================================================================

def _from_mantissa(mantissa: int) -> Decimal:
    if abs(mantissa) > MAX_MANTISSA:
        raise ArithmeticOverflow(Decimal(mantissa).scaleb(-DECIMALS, _CONTEXT))
    return Decimal(mantissa).scaleb(-DECIMALS, _CONTEXT)


def _mantissa(value: Decimal) -> int:
    """Integer mantissa of a fixed-point value (extra digits truncate toward zero)."""
    return int(value.scaleb(DECIMALS, _CONTEXT))


def _truncate(value: Decimal) -> Decimal:
    with localcontext(_CONTEXT):
        if abs(value) > _MAX_VALUE:
            raise ArithmeticOverflow(value)
        result = value.quantize(_QUANTUM, rounding=ROUND_DOWN)
    # -0E-18 after truncating a tiny negative
    return result if result else ZERO


def to_fixed(value: FixedInput) -> Decimal:
    """
    Convert a number to an 18-decimal fixed-point Decimal, truncating toward zero.

    Floats are converted through str() so that 0.8 becomes exactly 0.8.

    Raises:
        TypeError: If value is not a number or numeric string
        ValueError: If value is NaN, infinite or an unparsable string
        ArithmeticOverflow: If value is outside the mantissa range
    """
    if isinstance(value, bool):
        raise TypeError("booleans are not fixed-point values")
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, numbers.Integral):
        number = Decimal(int(value))
    elif isinstance(value, numbers.Rational) and not isinstance(value, float):
        with localcontext(_CONTEXT):
            number = Decimal(value.numerator) / Decimal(value.denominator)
    elif isinstance(value, (numbers.Real, str)):
        try:
            number = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"cannot convert {value!r} to fixed point") from exc
    else:
        raise TypeError(f"cannot convert {type(value).__name__} to fixed point")

    if not number.is_finite():
        raise ValueError(f"fixed-point value must be finite, got {value!r}")
    return _truncate(number)


ONE = to_fixed(1)
TWO = to_fixed(2)
HALF = to_fixed("0.5")


# ============================================================================
# BASIC ARITHMETIC
# ============================================================================

def add(a: Decimal, b: Decimal) -> Decimal:
    return _from_mantissa(_mantissa(a) + _mantissa(b))


def sub(a: Decimal, b: Decimal) -> Decimal:
    return _from_mantissa(_mantissa(a) - _mantissa(b))


def neg(a: Decimal) -> Decimal:
    return _from_mantissa(-_mantissa(a))


def absolute(a: Decimal) -> Decimal:
    return _from_mantissa(abs(_mantissa(a)))


def mul(a: Decimal, b: Decimal) -> Decimal:
    """a * b truncated toward zero."""
    product = _mantissa(a) * _mantissa(b)
    magnitude = abs(product) // SCALE
    return _from_mantissa(-magnitude if product < 0 else magnitude)


def div(a: Decimal, b: Decimal) -> Decimal:
    """
    a / b truncated toward zero.

    Raises:
        ArithmeticDomainError: If b is zero
    """
    numerator = _mantissa(a)
    denominator = _mantissa(b)
    if denominator == 0:
        raise ArithmeticDomainError(b)
    magnitude = abs(numerator) * SCALE // abs(denominator)
    negative = (numerator < 0) != (denominator < 0)
    return _from_mantissa(-magnitude if negative else magnitude)


# ============================================================================
# TRANSCENDENTAL FUNCTIONS
# ============================================================================

def exp(x: Decimal) -> Decimal:
    """
    e^x truncated toward zero.

    Returns zero when the result is below one mantissa unit.

    Raises:
        ArithmeticOverflow: If x > EXP_MAX_INPUT
    """
    if x < EXP_MIN_INPUT:
        return ZERO
    if x > EXP_MAX_INPUT:
        raise ArithmeticOverflow(x)
    with localcontext(_CONTEXT):
        return _truncate(x.exp())


def ln(x: Decimal) -> Decimal:
    """
    Natural logarithm truncated toward zero.

    Raises:
        ArithmeticDomainError: If x <= 0
    """
    if x <= 0:
        raise ArithmeticDomainError(x)
    with localcontext(_CONTEXT):
        return _truncate(x.ln())


def log2(x: Decimal) -> Decimal:
    """
    Binary logarithm truncated toward zero.

    Raises:
        ArithmeticDomainError: If x <= 0
    """
    if x <= 0:
        raise ArithmeticDomainError(x)
    with localcontext(_CONTEXT):
        result = (x.ln() / Decimal(2).ln()).quantize(_LOG2_GUARD)
        return _truncate(result)


def sqrt(x: Decimal) -> Decimal:
    """
    Square root truncated toward zero.

    Raises:
        ArithmeticDomainError: If x < 0
    """
    if x < 0:
        raise ArithmeticDomainError(x)
    with localcontext(_CONTEXT):
        return _truncate(x.sqrt())
