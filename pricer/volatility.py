"""
volatility.py - Realized volatility from log-returns (EWMA)

RiskMetrics-style exponentially weighted variance:

    var_0 = r_0²
    var_i = λ*var_(i-1) + (1-λ)*r_i²

annualized as √var_(n-1) * √periods_per_year (252 trading days by default).
Returns are consumed once, in order; index 0 is the oldest observation.
"""

import logging
from decimal import Decimal
from typing import Sequence

from . import fixed_point as fp
from .core import TRADING_DAYS_PER_YEAR
from .errors import EmptyReturnsArray, InvalidDecayFactor
from .fixed_point import FixedInput, ONE, ZERO

logger = logging.getLogger(__name__)

SQRT_TRADING_DAYS = fp.sqrt(fp.to_fixed(TRADING_DAYS_PER_YEAR))


def _validate(returns: Sequence[FixedInput], decay: Decimal) -> None:
    if len(returns) == 0:
        raise EmptyReturnsArray()
    if decay <= ZERO or decay >= ONE:
        raise InvalidDecayFactor(decay)


def ewma_variance(returns: Sequence[FixedInput], decay: FixedInput) -> Decimal:
    """
    Per-period EWMA variance after consuming every return.

    Args:
        returns: Log-returns, oldest first. Lists, tuples and numpy arrays all work.
        decay: λ, strictly between 0 and 1

    Raises:
        EmptyReturnsArray: If returns is empty
        InvalidDecayFactor: If decay is not in (0, 1)
    """
    decay = fp.to_fixed(decay)
    _validate(returns, decay)
    weight = fp.sub(ONE, decay)

    variance = None
    for value in returns:
        r = fp.to_fixed(value)
        squared = fp.mul(r, r)
        if variance is None:
            variance = squared
        else:
            variance = fp.add(fp.mul(decay, variance), fp.mul(weight, squared))

    logger.debug("EWMA over %d returns (decay=%s): variance=%s", len(returns), decay, variance)
    return variance


def ewma_volatility(
    returns: Sequence[FixedInput],
    decay: FixedInput,
    periods_per_year: int = TRADING_DAYS_PER_YEAR,
) -> Decimal:
    """
    Annualized EWMA volatility.

    A single return r gives |r| * √252.

    Raises:
        EmptyReturnsArray: If returns is empty
        InvalidDecayFactor: If decay is not in (0, 1)
    """
    variance = ewma_variance(returns, decay)
    if periods_per_year == TRADING_DAYS_PER_YEAR:
        annualizer = SQRT_TRADING_DAYS
    else:
        annualizer = fp.sqrt(fp.to_fixed(periods_per_year))
    return fp.mul(fp.sqrt(variance), annualizer)
