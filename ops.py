"""Command vocabulary: the operators and functions a user can invoke."""
from __future__ import annotations

from enum import Enum


class BinaryOp(str, Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    POWER = "power"


class UnaryFunction(str, Enum):
    SQRT = "sqrt"
    FACTORIAL = "factorial"
    LN = "ln"
    LOG10 = "log10"
    EXP = "exp"


class TrigFunction(str, Enum):
    SIN = "sin"
    COS = "cos"
    TAN = "tan"


class MemoryOp(str, Enum):
    CLEAR = "clear"
    RECALL = "recall"
    ADD = "add"
    SUBTRACT = "subtract"


class Constant(str, Enum):
    PI = "pi"


OP_SYMBOLS: dict[BinaryOp, str] = {
    BinaryOp.ADD: "+",
    BinaryOp.SUBTRACT: "-",
    BinaryOp.MULTIPLY: "×",
    BinaryOp.DIVIDE: "÷",
    BinaryOp.POWER: "^",
}

UNARY_NOTATION: dict[UnaryFunction, str] = {
    UnaryFunction.SQRT: "√",
    UnaryFunction.FACTORIAL: "fact",
    UnaryFunction.LN: "ln",
    UnaryFunction.LOG10: "log",
    UnaryFunction.EXP: "exp",
}
