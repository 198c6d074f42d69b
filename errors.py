"""Error taxonomy and result values shared by every calculator layer.

Arithmetic, parsing and formatting never raise for bad *data*.  They
return a ``Result`` carrying either a value or an ``ErrorKind`` and the
engine inspects the kind to pick the display text and state transition.

Exceptions are reserved for programming mistakes (asking an operand
for the wrong representation, building a word of unsupported width).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    OVERFLOW = "overflow"
    DIVIDE_BY_ZERO = "divide_by_zero"
    NOT_A_NUMBER = "not_a_number"


ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.INVALID_INPUT: "Invalid input",
    ErrorKind.OVERFLOW: "Overflow",
    ErrorKind.DIVIDE_BY_ZERO: "Cannot divide by zero",
    ErrorKind.NOT_A_NUMBER: "Not a number",
}


@dataclass(frozen=True)
class Result:
    """Outcome of a fallible computation: a value or an error kind."""

    value: Any = None
    error: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any) -> Result:
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind) -> Result:
        return cls(error=error)

    def __repr__(self) -> str:
        if self.ok:
            return f"Result.success({self.value!r})"
        return f"Result.failure({self.error.name})"


class CalculatorError(Exception):
    """Base class for misuse of the engine API."""


class OperandKindError(CalculatorError, TypeError):
    """Raised when an operand is read through the wrong representation."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Operand holds a {actual} value, not {expected}")
