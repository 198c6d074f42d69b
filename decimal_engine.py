"""Standard-mode arithmetic on floats with checked results.

Binary operators report non-finite results as overflow (NaN included,
for example a negative base raised to a fractional power).  Unary and
trig functions check their domain first; a non-finite result that is
not a magnitude overflow is reported as not-a-number.
"""
from __future__ import annotations

import math

from errors import ErrorKind, Result
from modes import AngleUnit, TrigMode
from ops import BinaryOp, Constant, TrigFunction, UnaryFunction

FACTORIAL_LIMIT = 170
INTEGRAL_TOLERANCE = 1e-10

_FORWARD = {
    TrigFunction.SIN: math.sin,
    TrigFunction.COS: math.cos,
    TrigFunction.TAN: math.tan,
}

_HYPERBOLIC = {
    TrigFunction.SIN: math.sinh,
    TrigFunction.COS: math.cosh,
    TrigFunction.TAN: math.tanh,
}

_INVERSE = {
    TrigFunction.SIN: math.asin,
    TrigFunction.COS: math.acos,
    TrigFunction.TAN: math.atan,
}

CONSTANTS: dict[Constant, float] = {
    Constant.PI: math.pi,
}


# ---------------------------------------------------------------------------
# Angle conversion
# ---------------------------------------------------------------------------

def to_radians(value: float, unit: AngleUnit) -> float:
    if unit == AngleUnit.DEGREES:
        return math.radians(value)
    if unit == AngleUnit.GRADIANS:
        return value * math.pi / 200.0
    return value


def from_radians(value: float, unit: AngleUnit) -> float:
    if unit == AngleUnit.DEGREES:
        return math.degrees(value)
    if unit == AngleUnit.GRADIANS:
        return value * 200.0 / math.pi
    return value


# ---------------------------------------------------------------------------
# Binary operators
# ---------------------------------------------------------------------------

def apply(left: float, right: float, op: BinaryOp) -> Result:
    """Apply a binary operator with divide-by-zero and overflow checks."""
    if op == BinaryOp.DIVIDE and right == 0:
        return Result.failure(ErrorKind.DIVIDE_BY_ZERO)

    try:
        if op == BinaryOp.ADD:
            value = left + right
        elif op == BinaryOp.SUBTRACT:
            value = left - right
        elif op == BinaryOp.MULTIPLY:
            value = left * right
        elif op == BinaryOp.DIVIDE:
            value = left / right
        else:
            value = math.pow(left, right)
    except (OverflowError, ValueError, ZeroDivisionError):
        # math.pow raises where IEEE arithmetic would give inf or NaN
        return Result.failure(ErrorKind.OVERFLOW)

    if not math.isfinite(value):
        return Result.failure(ErrorKind.OVERFLOW)
    return Result.success(value)


# ---------------------------------------------------------------------------
# Unary functions
# ---------------------------------------------------------------------------

def factorial(value: float, limit: int = FACTORIAL_LIMIT) -> Result:
    """Cumulative product 2..n for a non-negative integral ``value``."""
    if value < 0 or abs(value - round(value)) > INTEGRAL_TOLERANCE:
        return Result.failure(ErrorKind.INVALID_INPUT)
    n = int(round(value))
    if n > limit:
        return Result.failure(ErrorKind.OVERFLOW)
    result = 1.0
    for i in range(2, n + 1):
        result *= i
    if not math.isfinite(result):
        return Result.failure(ErrorKind.OVERFLOW)
    return Result.success(result)


def apply_unary(
    value: float, fn: UnaryFunction, factorial_limit: int = FACTORIAL_LIMIT
) -> Result:
    if fn == UnaryFunction.FACTORIAL:
        return factorial(value, factorial_limit)

    if fn == UnaryFunction.SQRT:
        if value < 0:
            return Result.failure(ErrorKind.INVALID_INPUT)
        result = math.sqrt(value)
    elif fn in (UnaryFunction.LN, UnaryFunction.LOG10):
        if value <= 0:
            return Result.failure(ErrorKind.INVALID_INPUT)
        result = math.log(value) if fn == UnaryFunction.LN else math.log10(value)
    else:
        try:
            result = math.exp(value)
        except OverflowError:
            return Result.failure(ErrorKind.OVERFLOW)
        if math.isinf(result):
            return Result.failure(ErrorKind.OVERFLOW)

    if not math.isfinite(result):
        return Result.failure(ErrorKind.NOT_A_NUMBER)
    return Result.success(result)


# ---------------------------------------------------------------------------
# Trig functions
# ---------------------------------------------------------------------------

def apply_trig(
    value: float, fn: TrigFunction, mode: TrigMode, unit: AngleUnit
) -> Result:
    """Evaluate a trig function under the active trig mode and angle unit.

    Standard converts the input to radians first, hyperbolic functions
    are unit-less, and arc functions convert their radian result back
    into the active unit.
    """
    try:
        if mode == TrigMode.STANDARD:
            result = _FORWARD[fn](to_radians(value, unit))
        elif mode == TrigMode.HYPERBOLIC:
            result = _HYPERBOLIC[fn](value)
        else:
            result = from_radians(_INVERSE[fn](value), unit)
    except (ValueError, OverflowError):
        return Result.failure(ErrorKind.NOT_A_NUMBER)

    if not math.isfinite(result):
        return Result.failure(ErrorKind.NOT_A_NUMBER)
    return Result.success(result)


def constant(name: Constant) -> Result:
    return Result.success(CONSTANTS[name])
