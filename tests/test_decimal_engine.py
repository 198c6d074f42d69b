"""Tests for standard-mode (floating point) arithmetic."""
from __future__ import annotations

import math

import pytest

import decimal_engine
from errors import ErrorKind
from modes import AngleUnit, TrigMode
from ops import BinaryOp, Constant, TrigFunction, UnaryFunction


class TestBinary:
    @pytest.mark.parametrize("op, expected", [
        (BinaryOp.ADD, 8.0),
        (BinaryOp.SUBTRACT, 4.0),
        (BinaryOp.MULTIPLY, 12.0),
        (BinaryOp.DIVIDE, 3.0),
        (BinaryOp.POWER, 36.0),
    ])
    def test_operators(self, op, expected):
        assert decimal_engine.apply(6.0, 2.0, op).value == expected

    def test_divide_by_zero(self):
        assert decimal_engine.apply(5.0, 0.0, BinaryOp.DIVIDE).error == ErrorKind.DIVIDE_BY_ZERO
        assert decimal_engine.apply(0.0, -0.0, BinaryOp.DIVIDE).error == ErrorKind.DIVIDE_BY_ZERO

    def test_multiply_overflow(self):
        assert decimal_engine.apply(1e308, 10.0, BinaryOp.MULTIPLY).error == ErrorKind.OVERFLOW

    def test_power_overflow(self):
        assert decimal_engine.apply(10.0, 400.0, BinaryOp.POWER).error == ErrorKind.OVERFLOW

    def test_power_without_real_result_is_overflow(self):
        result = decimal_engine.apply(-8.0, 1 / 3, BinaryOp.POWER)
        assert result.error == ErrorKind.OVERFLOW

    def test_zero_to_negative_power(self):
        assert decimal_engine.apply(0.0, -1.0, BinaryOp.POWER).error == ErrorKind.OVERFLOW


class TestFactorial:
    @pytest.mark.parametrize("n, expected", [(0, 1.0), (1, 1.0), (5, 120.0), (10, 3628800.0)])
    def test_values(self, n, expected):
        assert decimal_engine.factorial(float(n)).value == expected

    def test_near_integral_accepted(self):
        assert decimal_engine.factorial(3.00000000001).value == 6.0

    def test_negative_is_invalid(self):
        assert decimal_engine.factorial(-1.0).error == ErrorKind.INVALID_INPUT

    def test_fractional_is_invalid(self):
        assert decimal_engine.factorial(2.5).error == ErrorKind.INVALID_INPUT

    def test_limit(self):
        assert decimal_engine.factorial(170.0).ok
        assert decimal_engine.factorial(171.0).error == ErrorKind.OVERFLOW

    def test_custom_limit(self):
        assert decimal_engine.factorial(5.0, limit=4).error == ErrorKind.OVERFLOW


class TestUnary:
    def test_sqrt(self):
        assert decimal_engine.apply_unary(16.0, UnaryFunction.SQRT).value == 4.0
        assert decimal_engine.apply_unary(0.0, UnaryFunction.SQRT).value == 0.0

    def test_sqrt_negative(self):
        assert decimal_engine.apply_unary(-1.0, UnaryFunction.SQRT).error == ErrorKind.INVALID_INPUT

    def test_logarithms(self):
        assert decimal_engine.apply_unary(math.e, UnaryFunction.LN).value == pytest.approx(1.0)
        assert decimal_engine.apply_unary(1000.0, UnaryFunction.LOG10).value == pytest.approx(3.0)

    @pytest.mark.parametrize("fn", [UnaryFunction.LN, UnaryFunction.LOG10])
    @pytest.mark.parametrize("value", [0.0, -2.0])
    def test_logarithm_domain(self, fn, value):
        assert decimal_engine.apply_unary(value, fn).error == ErrorKind.INVALID_INPUT

    def test_exp(self):
        assert decimal_engine.apply_unary(0.0, UnaryFunction.EXP).value == 1.0
        assert decimal_engine.apply_unary(1.0, UnaryFunction.EXP).value == pytest.approx(math.e)

    def test_exp_overflow(self):
        assert decimal_engine.apply_unary(1000.0, UnaryFunction.EXP).error == ErrorKind.OVERFLOW

    def test_factorial_dispatch_uses_limit(self):
        result = decimal_engine.apply_unary(6.0, UnaryFunction.FACTORIAL, factorial_limit=5)
        assert result.error == ErrorKind.OVERFLOW


class TestAngles:
    def test_to_radians(self):
        assert decimal_engine.to_radians(180.0, AngleUnit.DEGREES) == pytest.approx(math.pi)
        assert decimal_engine.to_radians(200.0, AngleUnit.GRADIANS) == pytest.approx(math.pi)
        assert decimal_engine.to_radians(1.5, AngleUnit.RADIANS) == 1.5

    def test_from_radians(self):
        assert decimal_engine.from_radians(math.pi, AngleUnit.DEGREES) == pytest.approx(180.0)
        assert decimal_engine.from_radians(math.pi, AngleUnit.GRADIANS) == pytest.approx(200.0)


class TestTrig:
    def test_sine_in_each_unit(self):
        sin = TrigFunction.SIN
        std = TrigMode.STANDARD
        assert decimal_engine.apply_trig(90.0, sin, std, AngleUnit.DEGREES).value == pytest.approx(1.0)
        assert decimal_engine.apply_trig(100.0, sin, std, AngleUnit.GRADIANS).value == pytest.approx(1.0)
        assert decimal_engine.apply_trig(math.pi / 2, sin, std, AngleUnit.RADIANS).value == pytest.approx(1.0)

    def test_hyperbolic_ignores_unit(self):
        result = decimal_engine.apply_trig(
            1.0, TrigFunction.COS, TrigMode.HYPERBOLIC, AngleUnit.DEGREES
        )
        assert result.value == pytest.approx(math.cosh(1.0))

    def test_arc_converts_result(self):
        result = decimal_engine.apply_trig(
            0.0, TrigFunction.COS, TrigMode.ARC, AngleUnit.GRADIANS
        )
        assert result.value == pytest.approx(100.0)

    def test_arc_domain(self):
        result = decimal_engine.apply_trig(
            2.0, TrigFunction.SIN, TrigMode.ARC, AngleUnit.RADIANS
        )
        assert result.error == ErrorKind.NOT_A_NUMBER

    def test_hyperbolic_overflow_is_not_a_number(self):
        result = decimal_engine.apply_trig(
            1000.0, TrigFunction.SIN, TrigMode.HYPERBOLIC, AngleUnit.RADIANS
        )
        assert result.error == ErrorKind.NOT_A_NUMBER


class TestConstants:
    def test_pi(self):
        assert decimal_engine.constant(Constant.PI).value == math.pi
