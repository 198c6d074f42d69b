"""The human-readable trace of the expression being built."""
from __future__ import annotations

from ops import OP_SYMBOLS, BinaryOp

TERMINATOR = " ="


class EquationTracker:
    """Owns the equation text and the pending "left operator " prefix.

    The prefix doubles as a marker: while the visible equation still
    equals it, the user has not produced a right-hand value through a
    function call, so evaluation appends the display value itself.
    """

    def __init__(self) -> None:
        self.text = ""
        self.pending_prefix = ""

    def reset(self) -> None:
        self.text = ""
        self.pending_prefix = ""

    def begin_operation(self, left_text: str, op: BinaryOp) -> str:
        self.pending_prefix = f"{left_text} {OP_SYMBOLS[op]} "
        self.text = self.pending_prefix
        return self.text

    def complete(self, right_text: str) -> str:
        """Close the pending expression with the terminal marker."""
        equation = self.text
        if not equation.strip() or equation == self.pending_prefix:
            equation = self.pending_prefix + right_text
        self.text = equation + TERMINATOR
        self.pending_prefix = ""
        return self.text

    def function(self, notation: str, argument_text: str | None, pending: bool) -> str:
        """Record ``notation(argument)``, after the prefix when an operator is pending.

        Constants pass no argument and are recorded as the bare notation.
        """
        fragment = notation if argument_text is None else f"{notation}({argument_text})"
        self.text = self.pending_prefix + fragment if pending else fragment
        return self.text

    def conversion(self, label: str, bits: str) -> str:
        self.text = f"{label}({bits})"
        return self.text
