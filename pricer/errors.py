"""
errors.py - Exception taxonomy for the pricer library.

Every error is a caller-input problem: the library is stateless and
deterministic, so retrying the same call with the same inputs raises the
same error. Errors that concern a specific input carry it in ``.value``.
"""

from decimal import Decimal
from typing import Any


class PricerError(Exception):
    """Base exception for all pricer errors."""
    pass


class InvalidParameter(PricerError):
    """Base class for errors raised on an out-of-domain input value."""

    label = "parameter"

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"invalid {self.label}: {value}")


class InvalidSpotPrice(InvalidParameter):
    """Raised when spot is zero or negative."""
    label = "spot price"


class InvalidStrikePrice(InvalidParameter):
    """Raised when strike is zero or negative."""
    label = "strike price"


class InvalidVolatility(InvalidParameter):
    """Raised when volatility is zero or negative."""
    label = "volatility"


class InvalidTimeToExpiry(InvalidParameter):
    """Raised when time to expiry is zero or negative."""
    label = "time to expiry"


class InvalidRiskFreeRate(InvalidParameter):
    """Raised when the risk-free rate is negative."""
    label = "risk-free rate"


class InvalidDecayFactor(InvalidParameter):
    """Raised when an EWMA decay factor is outside the open interval (0, 1)."""
    label = "decay factor"


class UtilizationTooHigh(InvalidParameter):
    """Raised when pool utilization is at or above 100%."""
    label = "utilization"


class EmptyReturnsArray(PricerError):
    """Raised when a volatility estimate is requested from no returns."""

    def __init__(self):
        super().__init__("returns sequence must not be empty")


class ZeroReferenceValue(PricerError):
    """Raised when a relative error is requested against a zero reference."""

    def __init__(self):
        super().__init__("reference value must be non-zero")


class PutCallParityViolation(PricerError):
    """Raised when |C - P - (S - K*e^(-rT))| exceeds the allowed tolerance."""

    def __init__(self, gap: Decimal, tolerance: Decimal):
        self.value = gap
        self.gap = gap
        self.tolerance = tolerance
        super().__init__(f"put-call parity gap {gap} exceeds tolerance {tolerance}")


class ArithmeticDomainError(InvalidParameter):
    """Raised when a fixed-point operation is undefined for its input (ln(0), x/0, sqrt(-1))."""
    label = "fixed-point operand"


class ArithmeticOverflow(InvalidParameter):
    """Raised when a fixed-point result does not fit the signed 256-bit mantissa."""
    label = "fixed-point magnitude"
