"""The authoritative calculator state, owned and mutated by the engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from equation import EquationTracker
from errors import ErrorKind, OperandKindError
from memory import MemoryRegister
from modes import AngleUnit, CalculatorMode, ModeController, TrigMode
from ops import BinaryOp


class OperandKind(str, Enum):
    DECIMAL = "decimal"
    BINARY = "binary"


@dataclass(frozen=True)
class Operand:
    """A captured left-hand value: a float in standard mode, an int in programmer mode."""

    kind: OperandKind
    raw: float | int

    @classmethod
    def decimal(cls, value: float) -> Operand:
        return cls(OperandKind.DECIMAL, float(value))

    @classmethod
    def binary(cls, value: int) -> Operand:
        return cls(OperandKind.BINARY, int(value))

    def as_decimal(self) -> float:
        if self.kind != OperandKind.DECIMAL:
            raise OperandKindError(OperandKind.DECIMAL.value, self.kind.value)
        return self.raw

    def as_binary(self) -> int:
        if self.kind != OperandKind.BINARY:
            raise OperandKindError(OperandKind.BINARY.value, self.kind.value)
        return self.raw


@dataclass
class CalculatorState:
    modes: ModeController
    memory_register: MemoryRegister
    equation: EquationTracker = field(default_factory=EquationTracker)

    display_text: str = "0"
    operand: Operand | None = None
    pending_operation: BinaryOp | None = None
    error: ErrorKind | None = None

    clear_on_next_digit: bool = False
    just_evaluated: bool = False
    is_typing_number: bool = False
    # something was entered (typed, computed, pasted) since the operator press
    has_right_operand: bool = False
    # display holds octal or hex text from a base conversion, not bits
    display_is_converted: bool = False

    @property
    def equation_text(self) -> str:
        return self.equation.text

    @property
    def pending_equation_prefix(self) -> str:
        return self.equation.pending_prefix

    @property
    def mode(self) -> CalculatorMode:
        return self.modes.mode

    @property
    def trig_mode(self) -> TrigMode:
        return self.modes.trig_mode

    @property
    def angle_unit(self) -> AngleUnit:
        return self.modes.angle_unit

    @property
    def memory(self) -> float:
        return self.memory_register.value

    def reset_pending(self) -> None:
        """Drop the captured operand/operator and the input flags."""
        self.clear_on_next_digit = False
        self.just_evaluated = False
        self.is_typing_number = False
        self.has_right_operand = False
        self.operand = None
        self.pending_operation = None
        self.equation.pending_prefix = ""

    def mark_result(self) -> None:
        """The display now holds a produced value; the next digit starts fresh."""
        self.clear_on_next_digit = True
        self.just_evaluated = True
        self.is_typing_number = False
