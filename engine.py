"""The calculator state machine.

Every command runs to completion, mutates the single ``CalculatorState``
and returns a ``Snapshot``.  Arithmetic is delegated to the decimal
engine (standard mode) or the bitwise unit (programmer mode); both
return ``Result`` values, and any failure ends in ``_show_error``,
which drops the pending operator and puts the message on the display.

States
------
Idle             no operator pending
PendingOperator  operator captured, waiting for the right operand
Result           display holds a produced value (evaluation, function,
                 constant, paste, recall, base conversion)
Error            display holds an error message; only digit entry,
                 decimal point, clear, clear-entry, backspace, paste and
                 the mode toggle are accepted
"""
from __future__ import annotations

import logging
from functools import lru_cache

import decimal_engine
from bitwise import BitwiseALU, OverflowMode, Word
from clipboard import Clipboard, ClipboardError, MemoryClipboard, SystemClipboard
from errors import ERROR_MESSAGES, ErrorKind, Result
from factory import AluFactory
from memory import MemoryRegister
from models import (
    BackspaceCommand,
    BinaryOperatorCommand,
    ClearAllCommand,
    ClearEntryCommand,
    Command,
    ConstantCommand,
    CopyDisplayCommand,
    CycleAngleUnitCommand,
    CycleTrigModeCommand,
    DecimalPointCommand,
    DigitCommand,
    EqualsCommand,
    MemoryCommand,
    PasteClipboardCommand,
    PasteTextCommand,
    Snapshot,
    ToggleModeCommand,
    ToggleSignCommand,
    TrigFunctionCommand,
    UnaryFunctionCommand,
)
from modes import HEX_CONVERSION_LABEL, OCTAL_CONVERSION_LABEL, ModeController
from ops import UNARY_NOTATION, BinaryOp, Constant, MemoryOp, TrigFunction, UnaryFunction
from settings import EngineSettings
from state import CalculatorState, Operand

logger = logging.getLogger(__name__)

POWER_UNAVAILABLE = "Power is not available in programmer mode"
COPY_FAILED = "Could not copy text"
PASTE_FAILED = "Could not paste text"

CONSTANT_NOTATION = {Constant.PI: "π"}


@lru_cache(maxsize=None)
def build_alu(bits: int, overflow: OverflowMode, legacy_sign: bool) -> BitwiseALU:
    """Verified arithmetic unit, built once per configuration."""
    return AluFactory.create(Word(bits), overflow=overflow, legacy_sign=legacy_sign)


class CalculatorEngine:
    """Interprets abstract calculator commands."""

    def __init__(
        self,
        settings: EngineSettings | None = None,
        clipboard: Clipboard | None = None,
    ) -> None:
        self.settings = settings or EngineSettings()
        if clipboard is None:
            if self.settings.clipboard == "system":
                clipboard = SystemClipboard()
            else:
                clipboard = MemoryClipboard()
        self.clipboard = clipboard
        self.formatter = self.settings.formatter()
        self.alu = build_alu(
            self.settings.word_bits, self.settings.overflow_mode, self.settings.legacy_sign
        )
        self.state = CalculatorState(
            modes=ModeController(),
            memory_register=MemoryRegister(self.formatter),
        )

    # -- helpers ------------------------------------------------------------

    @property
    def _programmer(self) -> bool:
        return self.state.modes.is_programmer

    @property
    def _in_error(self) -> bool:
        return self.state.error is not None

    def snapshot(self, notification: str | None = None) -> Snapshot:
        return Snapshot(
            display_text=self.state.display_text,
            equation_text=self.state.equation_text,
            memory_label_text=self.state.memory_register.label(),
            mode_labels=self.state.modes.labels(),
            error=self.state.error,
            notification=notification,
        )

    def _set_display(self, text: str) -> None:
        self.state.display_text = text or "0"
        self.state.error = None
        self.state.display_is_converted = False

    def _show_error(self, kind: ErrorKind) -> Snapshot:
        logger.info("error: %s (display was %r)", kind.value, self.state.display_text)
        self.state.reset_pending()
        self._set_display(ERROR_MESSAGES[kind])
        self.state.equation.reset()
        self.state.error = kind
        self.state.clear_on_next_digit = True
        return self.snapshot()

    def _show_decimal_result(self, value: float) -> None:
        self._set_display(self.formatter.format_decimal(value))
        self.state.mark_result()

    def _show_binary_result(self, value: int) -> None:
        self._set_display(self.formatter.format_binary(value))
        self.state.mark_result()

    def _display_value(self) -> Result:
        if self.state.display_is_converted:
            return Result.failure(ErrorKind.INVALID_INPUT)
        if self._programmer:
            return self.formatter.parse_binary(self.state.display_text)
        return self.formatter.parse_decimal(self.state.display_text)

    def _format(self, value: float | int) -> str:
        if self._programmer:
            return self.formatter.format_binary(value)
        return self.formatter.format_decimal(value)

    def _evaluate(self, left: Operand, right: float | int, op: BinaryOp) -> Result:
        if self._programmer:
            return self.alu.apply(left.as_binary(), right, op)
        return decimal_engine.apply(left.as_decimal(), right, op)

    def _operand(self, value: float | int) -> Operand:
        if self._programmer:
            return Operand.binary(value)
        return Operand.decimal(value)

    # -- digit entry --------------------------------------------------------

    def digit(self, d: int) -> Snapshot:
        if not 0 <= d <= 9:
            raise ValueError(f"digit must be 0-9, got {d}")
        digit = str(d)
        if not self.state.modes.accepts_digit(digit):
            return self.snapshot()

        s = self.state
        current = s.display_text
        if s.clear_on_next_digit or s.just_evaluated:
            current = ""
            s.clear_on_next_digit = False
            s.just_evaluated = False
        elif current == "0":
            current = ""
        elif current == "-0":
            current = "-"

        text = current + digit
        if self._programmer and len(text) > self.settings.word_bits:
            return self.snapshot()

        self._set_display(text)
        s.is_typing_number = True
        s.has_right_operand = True
        return self.snapshot()

    def decimal_point(self) -> Snapshot:
        if self._programmer:
            return self.snapshot()

        s = self.state
        sep = self.settings.decimal_separator
        current = s.display_text
        if s.clear_on_next_digit or s.just_evaluated:
            current = "0"
            s.clear_on_next_digit = False
            s.just_evaluated = False

        if sep in current or "e" in current:
            return self.snapshot()

        self._set_display((current or "0") + sep)
        s.is_typing_number = True
        s.has_right_operand = True
        return self.snapshot()

    def toggle_sign(self) -> Snapshot:
        if self._programmer or self._in_error:
            return self.snapshot()

        text = self.state.display_text
        if text.startswith("-"):
            text = text[1:]
        elif text != "0":
            text = "-" + text
        else:
            text = "-0"

        self._set_display(text)
        self.state.clear_on_next_digit = False
        self.state.just_evaluated = False
        self.state.has_right_operand = True
        return self.snapshot()

    # -- operators ----------------------------------------------------------

    def binary_operator(self, op: BinaryOp) -> Snapshot:
        if self._in_error:
            return self.snapshot()
        if self._programmer and op == BinaryOp.POWER:
            return self.snapshot(notification=POWER_UNAVAILABLE)

        current = self._display_value()
        if not current.ok:
            return self._show_error(current.error)

        s = self.state
        if s.pending_operation is not None and s.operand is not None and s.has_right_operand:
            # chaining: 2 + 3 + evaluates 2 + 3 before taking the new operator
            intermediate = self._evaluate(s.operand, current.value, s.pending_operation)
            if not intermediate.ok:
                return self._show_error(intermediate.error)
            left = intermediate.value
            self._set_display(self._format(left))
        else:
            left = current.value

        s.operand = self._operand(left)
        s.pending_operation = op
        s.equation.begin_operation(self._format(left), op)

        s.clear_on_next_digit = True
        s.just_evaluated = False
        s.is_typing_number = False
        s.has_right_operand = False
        return self.snapshot()

    def equals(self) -> Snapshot:
        s = self.state
        if self._in_error or s.pending_operation is None or s.operand is None:
            return self.snapshot()

        right = self._display_value()
        if not right.ok:
            return self._show_error(right.error)

        result = self._evaluate(s.operand, right.value, s.pending_operation)
        if not result.ok:
            return self._show_error(result.error)

        logger.debug(
            "evaluated %r %s %r = %r",
            s.operand.raw, s.pending_operation.value, right.value, result.value,
        )
        s.equation.complete(self._format(right.value))
        if self._programmer:
            self._show_binary_result(result.value)
        else:
            self._show_decimal_result(result.value)

        s.operand = None
        s.pending_operation = None
        s.has_right_operand = False
        return self.snapshot()

    # -- functions ----------------------------------------------------------

    def _function_result(self, notation: str, argument: float | None, result: Result) -> Snapshot:
        if not result.ok:
            return self._show_error(result.error)

        s = self.state
        pending = s.pending_operation is not None
        argument_text = None if argument is None else self.formatter.format_decimal(argument)
        s.equation.function(notation, argument_text, pending=pending)
        self._show_decimal_result(result.value)
        s.has_right_operand = pending
        return self.snapshot()

    def unary_function(self, fn: UnaryFunction) -> Snapshot:
        if self._programmer or self._in_error:
            return self.snapshot()

        value = self.formatter.parse_decimal(self.state.display_text)
        if not value.ok:
            return self._show_error(value.error)

        result = decimal_engine.apply_unary(value.value, fn, self.settings.factorial_limit)
        return self._function_result(UNARY_NOTATION[fn], value.value, result)

    def trig_function(self, fn: TrigFunction) -> Snapshot:
        if self._programmer or self._in_error:
            return self.snapshot()

        value = self.formatter.parse_decimal(self.state.display_text)
        if not value.ok:
            return self._show_error(value.error)

        modes = self.state.modes
        result = decimal_engine.apply_trig(value.value, fn, modes.trig_mode, modes.angle_unit)
        return self._function_result(modes.caption(fn), value.value, result)

    def constant(self, name: Constant) -> Snapshot:
        if self._programmer or self._in_error:
            return self.snapshot()
        return self._function_result(CONSTANT_NOTATION[name], None, decimal_engine.constant(name))

    # -- memory -------------------------------------------------------------

    def memory_op(self, op: MemoryOp) -> Snapshot:
        if self._programmer or self._in_error:
            return self.snapshot()

        register = self.state.memory_register
        if op == MemoryOp.CLEAR:
            register.clear()
        elif op == MemoryOp.RECALL:
            self._show_decimal_result(register.recall())
            self.state.has_right_operand = True
        else:
            value = self.formatter.parse_decimal(self.state.display_text)
            if not value.ok:
                return self.snapshot()
            if op == MemoryOp.ADD:
                stored = register.add(value.value)
            else:
                stored = register.subtract(value.value)
            if not stored.ok:
                return self._show_error(stored.error)
        return self.snapshot()

    # -- editing ------------------------------------------------------------

    def clear_all(self) -> Snapshot:
        self.state.reset_pending()
        self._set_display("0")
        self.state.equation.reset()
        return self.snapshot()

    def clear_entry(self) -> Snapshot:
        s = self.state
        self._set_display("0")
        s.clear_on_next_digit = False
        s.just_evaluated = False
        s.is_typing_number = False
        s.has_right_operand = s.pending_operation is not None
        return self.snapshot()

    def backspace(self) -> Snapshot:
        s = self.state
        if s.clear_on_next_digit or s.just_evaluated:
            self._set_display("0")
            s.clear_on_next_digit = False
            s.just_evaluated = False
            s.has_right_operand = s.pending_operation is not None
            return self.snapshot()

        text = s.display_text
        if len(text) <= 1 or (len(text) == 2 and text.startswith("-")):
            self._set_display("0")
            return self.snapshot()

        text = text[:-1]
        if text == "-":
            text = "-0"
        self._set_display(text)
        return self.snapshot()

    # -- clipboard ----------------------------------------------------------

    def paste_text(self, raw: str) -> Snapshot:
        if not raw or not raw.strip():
            return self.snapshot()

        if self._programmer:
            parsed = self.formatter.sanitize_binary(raw)
        else:
            parsed = self.formatter.sanitize_decimal(raw)
        if not parsed.ok:
            return self._show_error(parsed.error)

        self._set_display(self._format(parsed.value))
        self.state.mark_result()
        self.state.has_right_operand = True
        return self.snapshot()

    def copy_display(self) -> Snapshot:
        try:
            self.clipboard.copy(self.state.display_text)
        except ClipboardError:
            return self.snapshot(notification=COPY_FAILED)
        return self.snapshot()

    def paste_from_clipboard(self) -> Snapshot:
        try:
            raw = self.clipboard.paste()
        except ClipboardError:
            return self.snapshot(notification=PASTE_FAILED)
        return self.paste_text(raw)

    # -- modes --------------------------------------------------------------

    def toggle_mode(self) -> Snapshot:
        mode = self.state.modes.toggle_mode()
        logger.debug("mode switched to %s", mode.value)
        return self.clear_all()

    def cycle_angle_unit(self) -> Snapshot:
        if self.state.modes.cycle_angle_unit():
            return self.snapshot()
        return self._convert_base(OCTAL_CONVERSION_LABEL, self.formatter.format_octal)

    def cycle_trig_mode(self) -> Snapshot:
        if self.state.modes.cycle_trig_mode():
            return self.snapshot()
        return self._convert_base(HEX_CONVERSION_LABEL, self.formatter.format_hex)

    def _convert_base(self, label: str, render) -> Snapshot:
        if self._in_error:
            return self.snapshot()

        value = self._display_value()
        if not value.ok:
            return self._show_error(value.error)

        self.state.equation.conversion(label, self.formatter.format_binary(value.value))
        self._set_display(render(value.value))
        self.state.display_is_converted = True
        self.state.mark_result()
        return self.snapshot()

    # -- dispatch -----------------------------------------------------------

    def execute(self, command: Command) -> Snapshot:
        """Run one abstract command."""
        logger.debug("command %s", command.kind)
        if isinstance(command, DigitCommand):
            return self.digit(command.digit)
        if isinstance(command, DecimalPointCommand):
            return self.decimal_point()
        if isinstance(command, BinaryOperatorCommand):
            return self.binary_operator(command.op)
        if isinstance(command, EqualsCommand):
            return self.equals()
        if isinstance(command, UnaryFunctionCommand):
            return self.unary_function(command.fn)
        if isinstance(command, TrigFunctionCommand):
            return self.trig_function(command.fn)
        if isinstance(command, ConstantCommand):
            return self.constant(command.name)
        if isinstance(command, ToggleSignCommand):
            return self.toggle_sign()
        if isinstance(command, MemoryCommand):
            return self.memory_op(command.op)
        if isinstance(command, ClearAllCommand):
            return self.clear_all()
        if isinstance(command, ClearEntryCommand):
            return self.clear_entry()
        if isinstance(command, BackspaceCommand):
            return self.backspace()
        if isinstance(command, PasteTextCommand):
            return self.paste_text(command.text)
        if isinstance(command, CopyDisplayCommand):
            return self.copy_display()
        if isinstance(command, PasteClipboardCommand):
            return self.paste_from_clipboard()
        if isinstance(command, ToggleModeCommand):
            return self.toggle_mode()
        if isinstance(command, CycleAngleUnitCommand):
            return self.cycle_angle_unit()
        if isinstance(command, CycleTrigModeCommand):
            return self.cycle_trig_mode()
        raise TypeError(f"unknown command {command!r}")
