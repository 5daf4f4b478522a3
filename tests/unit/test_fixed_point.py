"""
Unit tests for fixed_point.py

Tests:
- Conversion into 18-decimal fixed point
- Truncation toward zero in mul/div
- Transcendental functions and their domains
- Independence from the caller's decimal context
"""

from decimal import Context, Decimal, ROUND_UP, localcontext
from fractions import Fraction

import numpy as np
import pytest

from pricer import fixed_point as fp
from pricer.errors import ArithmeticDomainError, ArithmeticOverflow


class TestToFixed:
    """Conversion into fixed point."""

    def test_decimal_quantized_to_18_places(self):
        result = fp.to_fixed(Decimal("1.5"))
        assert result == Decimal("1.5")
        assert result.as_tuple().exponent == -18

    def test_float_goes_through_str(self):
        assert fp.to_fixed(0.8) == Decimal("0.8")
        assert fp.to_fixed(0.1) == Decimal("0.1")

    def test_int_and_str(self):
        assert fp.to_fixed(3000) == Decimal("3000")
        assert fp.to_fixed(" 0.25 ") == Decimal("0.25")

    def test_numpy_scalars(self):
        assert fp.to_fixed(np.float64(0.25)) == Decimal("0.25")
        assert fp.to_fixed(np.int64(7)) == Decimal("7")

    def test_fraction(self):
        assert fp.to_fixed(Fraction(1, 3)) == Decimal("0.333333333333333333")

    def test_truncates_toward_zero(self):
        assert fp.to_fixed(Decimal("1.9999999999999999999")) == Decimal("1.999999999999999999")
        assert fp.to_fixed(Decimal("-1.9999999999999999999")) == Decimal("-1.999999999999999999")

    def test_tiny_negative_becomes_plain_zero(self):
        result = fp.to_fixed(Decimal("-1e-20"))
        assert result == 0
        assert not result.is_signed()

    def test_rejects_non_finite(self):
        with pytest.raises(ValueError):
            fp.to_fixed(float("nan"))
        with pytest.raises(ValueError):
            fp.to_fixed(Decimal("Infinity"))

    def test_rejects_garbage(self):
        with pytest.raises(ValueError):
            fp.to_fixed("abc")
        with pytest.raises(TypeError):
            fp.to_fixed(None)
        with pytest.raises(TypeError):
            fp.to_fixed(True)

    def test_overflow(self):
        with pytest.raises(ArithmeticOverflow):
            fp.to_fixed(Decimal("1e60"))

    def test_mantissa_bounds(self):
        largest = Decimal(fp.MAX_MANTISSA).scaleb(-fp.DECIMALS, Context(prec=100))
        assert fp.to_fixed(largest) == largest
        assert fp.to_fixed(largest.copy_negate()) == largest.copy_negate()
        with pytest.raises(ArithmeticOverflow):
            fp.to_fixed(Context(prec=100).add(largest, Decimal("1e-18")))

    def test_zero_is_unsigned_18_places(self):
        assert fp.ZERO == 0
        assert fp.ZERO.as_tuple() == (0, (0,), -18)
        assert fp.to_fixed(0).as_tuple() == fp.ZERO.as_tuple()

    def test_trillions_fit(self):
        assert fp.to_fixed("5000000000000.123456789012345678") == Decimal("5000000000000.123456789012345678")


class TestBasicArithmetic:
    """add/sub/mul/div on mantissas."""

    def test_add_sub_exact(self):
        a = fp.to_fixed("123456789012.000000000000000001")
        b = fp.to_fixed("0.000000000000000002")
        assert fp.add(a, b) == Decimal("123456789012.000000000000000003")
        assert fp.sub(a, b) == Decimal("123456789011.999999999999999999")

    def test_neg_and_absolute(self):
        x = fp.to_fixed("-2.5")
        assert fp.neg(x) == Decimal("2.5")
        assert fp.absolute(x) == Decimal("2.5")
        assert fp.absolute(fp.neg(x)) == Decimal("2.5")

    def test_mul_truncates_toward_zero(self):
        unit = fp.to_fixed("0.000000000000000001")
        assert fp.mul(unit, fp.HALF) == 0
        assert fp.mul(fp.neg(unit), fp.HALF) == 0

    def test_mul(self):
        assert fp.mul(fp.to_fixed("1.5"), fp.to_fixed("-2")) == Decimal("-3")

    def test_div_truncates_toward_zero(self):
        assert fp.div(fp.ONE, fp.to_fixed(3)) == Decimal("0.333333333333333333")
        assert fp.div(fp.TWO, fp.to_fixed(3)) == Decimal("0.666666666666666666")
        assert fp.div(fp.neg(fp.TWO), fp.to_fixed(3)) == Decimal("-0.666666666666666666")

    def test_div_by_zero(self):
        with pytest.raises(ArithmeticDomainError):
            fp.div(fp.ONE, fp.ZERO)

    def test_mul_overflow(self):
        big = fp.to_fixed("1e40")
        with pytest.raises(ArithmeticOverflow):
            fp.mul(big, big)

    def test_independent_of_caller_context(self):
        a = fp.to_fixed("123456.789")
        unit = fp.to_fixed("0.000000000000000001")
        with localcontext(Context(prec=5, rounding=ROUND_UP)):
            total = fp.add(a, unit)
            root = fp.sqrt(fp.TWO)
        assert total == Decimal("123456.789000000000000001")
        assert root == Decimal("1.414213562373095048")


class TestTranscendental:
    """exp, ln, log2, sqrt."""

    def test_exp_zero(self):
        assert fp.exp(fp.ZERO) == fp.ONE

    def test_exp_one(self):
        assert fp.exp(fp.ONE) == Decimal("2.718281828459045235")

    def test_exp_underflow_is_zero(self):
        assert fp.exp(fp.to_fixed(-50)) == 0
        assert fp.exp(fp.to_fixed(-41)) > 0

    def test_exp_overflow(self):
        with pytest.raises(ArithmeticOverflow):
            fp.exp(fp.to_fixed(200))

    def test_ln(self):
        assert fp.ln(fp.ONE) == 0
        assert fp.ln(fp.to_fixed(2)) == Decimal("0.693147180559945309")

    def test_ln_domain(self):
        with pytest.raises(ArithmeticDomainError):
            fp.ln(fp.ZERO)
        with pytest.raises(ArithmeticDomainError):
            fp.ln(fp.to_fixed(-1))

    def test_log2_exact_powers(self):
        assert fp.log2(fp.to_fixed(8)) == Decimal("3")
        assert fp.log2(fp.to_fixed("0.5")) == Decimal("-1")
        assert fp.log2(fp.to_fixed("0.0001")) == Decimal("-13.287712379549449391")

    def test_log2_domain(self):
        with pytest.raises(ArithmeticDomainError):
            fp.log2(fp.ZERO)

    def test_sqrt(self):
        assert fp.sqrt(fp.to_fixed(4)) == Decimal("2")
        assert fp.sqrt(fp.to_fixed("0.25")) == Decimal("0.5")
        assert fp.sqrt(fp.TWO) == Decimal("1.414213562373095048")

    def test_sqrt_domain(self):
        with pytest.raises(ArithmeticDomainError):
            fp.sqrt(fp.to_fixed("-0.01"))
