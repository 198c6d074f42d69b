"""
Property-based tests using Hypothesis.

The bitwise unit is checked against native Python integer arithmetic
across the full 32-bit range, restricted to results that fit in the
word.  Out-of-range results must be reported as overflow.
"""

import math

import pytest
from hypothesis import assume, given, settings
from hypothesis import strategies as st
from hypothesis.strategies import floats, integers

import decimal_engine
from bitwise import INT32, BitwiseALU, OverflowMode, Word, bitwise_add, negate, subtract
from contracts import truncdiv
from errors import ErrorKind
from modes import AngleUnit, TrigMode
from ops import BinaryOp, TrigFunction


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def word_ints(word: Word):
    """Hypothesis strategy that generates ints within a word."""
    return integers(min_value=word.lo, max_value=word.hi)


CHECKED = BitwiseALU(INT32)
WRAPPING = BitwiseALU(INT32, overflow=OverflowMode.WRAP)


# ---------------------------------------------------------------------------
# Addition / subtraction
# ---------------------------------------------------------------------------

class TestAdditionProperties:
    @given(a=word_ints(INT32), b=word_ints(INT32))
    def test_matches_native_when_in_range(self, a, b):
        result = CHECKED.add(a, b)
        if INT32.contains(a + b):
            assert result.value == a + b
        else:
            assert result.error == ErrorKind.OVERFLOW

    @given(a=word_ints(INT32), b=word_ints(INT32))
    def test_primitive_wraps_like_hardware(self, a, b):
        assert bitwise_add(a, b) == INT32.to_signed(a + b)

    @given(a=word_ints(INT32), b=word_ints(INT32))
    def test_commutativity(self, a, b):
        assert CHECKED.add(a, b) == CHECKED.add(b, a)

    @given(a=word_ints(INT32))
    def test_negate_is_additive_inverse(self, a):
        assert bitwise_add(a, negate(a)) == 0


class TestSubtractionProperties:
    @given(a=word_ints(INT32), b=word_ints(INT32))
    def test_matches_native_when_in_range(self, a, b):
        result = CHECKED.subtract(a, b)
        if INT32.contains(a - b):
            assert result.value == a - b
        else:
            assert result.error == ErrorKind.OVERFLOW

    @given(a=word_ints(INT32), b=word_ints(INT32))
    def test_primitive_wraps_like_hardware(self, a, b):
        assert subtract(a, b) == INT32.to_signed(a - b)

    @given(a=word_ints(INT32), b=word_ints(INT32))
    def test_add_sub_inverse(self, a, b):
        assume(INT32.contains(a + b))
        assert CHECKED.subtract(CHECKED.add(a, b).value, b).value == a


# ---------------------------------------------------------------------------
# Multiplication / division
# ---------------------------------------------------------------------------

class TestMultiplicationProperties:
    @given(a=integers(0, 46_340), b=integers(0, 46_340))
    def test_non_negative_matches_native(self, a, b):
        assert CHECKED.multiply(a, b).value == a * b

    @given(a=word_ints(INT32), b=word_ints(INT32))
    @settings(max_examples=300)
    def test_signed_matches_native_or_overflows(self, a, b):
        result = CHECKED.multiply(a, b)
        if INT32.contains(a * b):
            assert result.value == a * b
        else:
            assert result.error == ErrorKind.OVERFLOW

    @given(a=word_ints(INT32), b=word_ints(INT32))
    @settings(max_examples=300)
    def test_wrapping_matches_low_bits(self, a, b):
        assert WRAPPING.multiply(a, b).value == INT32.to_signed(a * b)


class TestDivisionProperties:
    @given(a=integers(0, INT32.hi), b=integers(1, INT32.hi))
    @settings(max_examples=300)
    def test_non_negative_is_floor_division(self, a, b):
        assert CHECKED.divide(a, b).value == a // b

    @given(a=word_ints(INT32), b=word_ints(INT32))
    @settings(max_examples=300)
    def test_signed_truncates_toward_zero(self, a, b):
        assume(b != 0)
        assume(not (a == INT32.lo and b == -1))
        assert CHECKED.divide(a, b).value == truncdiv(a, b)

    @given(a=word_ints(INT32))
    def test_divide_by_zero_always_reported(self, a):
        assert CHECKED.divide(a, 0).error == ErrorKind.DIVIDE_BY_ZERO


# ---------------------------------------------------------------------------
# Decimal engine
# ---------------------------------------------------------------------------

finite = floats(min_value=-1e150, max_value=1e150, allow_nan=False)


class TestDecimalProperties:
    @given(a=finite, b=finite)
    def test_add_is_native(self, a, b):
        assert decimal_engine.apply(a, b, BinaryOp.ADD).value == a + b

    @given(a=finite)
    def test_divide_by_zero(self, a):
        assert decimal_engine.apply(a, 0.0, BinaryOp.DIVIDE).error == ErrorKind.DIVIDE_BY_ZERO

    @given(x=floats(min_value=-90, max_value=90))
    def test_arcsine_undoes_sine_in_degrees(self, x):
        forward = decimal_engine.apply_trig(
            x, TrigFunction.SIN, TrigMode.STANDARD, AngleUnit.DEGREES
        )
        back = decimal_engine.apply_trig(
            forward.value, TrigFunction.SIN, TrigMode.ARC, AngleUnit.DEGREES
        )
        assert back.value == pytest.approx(x, abs=1e-4)

    @given(x=floats(min_value=-100, max_value=100))
    def test_arctangent_undoes_tangent_in_gradians(self, x):
        assume(abs(x) < 99.9)
        forward = decimal_engine.apply_trig(
            x, TrigFunction.TAN, TrigMode.STANDARD, AngleUnit.GRADIANS
        )
        back = decimal_engine.apply_trig(
            forward.value, TrigFunction.TAN, TrigMode.ARC, AngleUnit.GRADIANS
        )
        assert back.value == pytest.approx(x, abs=1e-4)

    @given(n=st.integers(0, 170))
    def test_factorial_is_finite_up_to_limit(self, n):
        result = decimal_engine.factorial(float(n))
        assert result.ok
        assert math.isfinite(result.value)
        assert result.value == pytest.approx(float(math.factorial(n)), rel=1e-12)
