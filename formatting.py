"""Canonical text for decimal and binary values, and the reverse parse."""
from __future__ import annotations

import locale
import math
import re
from dataclasses import dataclass

from bitwise import INT32, Word
from errors import ErrorKind, Result

SIGNIFICANT_DIGITS = 15
INVARIANT_SEPARATOR = "."
ELLIPSIS = "…"

_DECIMAL_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_BINARY_RE = re.compile(r"^[01]+$")


def default_decimal_separator() -> str:
    """The decimal point of the process locale, or '.' when it has none."""
    return locale.localeconv().get("decimal_point") or INVARIANT_SEPARATOR


def _parse_with(text: str, separator: str) -> float | None:
    if separator != INVARIANT_SEPARATOR:
        if INVARIANT_SEPARATOR in text:
            return None
        text = text.replace(separator, INVARIANT_SEPARATOR)
    if not _DECIMAL_RE.match(text):
        return None
    value = float(text)
    return value if math.isfinite(value) else None


@dataclass(frozen=True)
class NumberFormatter:
    decimal_separator: str = INVARIANT_SEPARATOR
    word: Word = INT32
    memory_label_width: int = 12

    # -- decimal --------------------------------------------------------------

    def format_decimal(self, value: float) -> str:
        if value == 0:
            value = 0.0  # no "-0" for computed results
        text = f"{value:.{SIGNIFICANT_DIGITS}g}"
        mantissa, e, exponent = text.partition("e")
        if INVARIANT_SEPARATOR in mantissa:
            mantissa = mantissa.rstrip("0").rstrip(INVARIANT_SEPARATOR)
        text = mantissa + e + exponent
        return text.replace(INVARIANT_SEPARATOR, self.decimal_separator) or "0"

    def parse_decimal(self, text: str) -> Result:
        """Parse display text written with the active separator."""
        value = _parse_with(text.strip(), self.decimal_separator)
        if value is None:
            return Result.failure(ErrorKind.INVALID_INPUT)
        return Result.success(value)

    def sanitize_decimal(self, raw: str) -> Result:
        """Parse pasted text: drop foreign characters, try locale then invariant."""
        allowed = set("0123456789+-eE") | {self.decimal_separator, INVARIANT_SEPARATOR}
        cleaned = "".join(ch for ch in raw.strip() if ch in allowed)
        if not cleaned:
            return Result.failure(ErrorKind.INVALID_INPUT)

        value = _parse_with(cleaned, self.decimal_separator)
        if value is None:
            value = _parse_with(cleaned, INVARIANT_SEPARATOR)
        if value is None:
            return Result.failure(ErrorKind.INVALID_INPUT)
        return Result.success(value)

    # -- binary ---------------------------------------------------------------

    def format_binary(self, value: int) -> str:
        return format(self.word.to_unsigned(value), "b")

    def format_octal(self, value: int) -> str:
        return format(self.word.to_unsigned(value), "o")

    def format_hex(self, value: int) -> str:
        return format(self.word.to_unsigned(value), "X")

    def parse_binary(self, text: str) -> Result:
        """Bits longer than the word are rejected; a full-width leading 1 is negative."""
        text = text.strip()
        if not _BINARY_RE.match(text) or len(text) > self.word.bits:
            return Result.failure(ErrorKind.INVALID_INPUT)
        return Result.success(self.word.to_signed(int(text, 2)))

    def sanitize_binary(self, raw: str) -> Result:
        cleaned = "".join(ch for ch in raw if ch in "01")
        if not cleaned:
            return Result.failure(ErrorKind.INVALID_INPUT)
        return self.parse_binary(cleaned)

    # -- labels ---------------------------------------------------------------

    def memory_text(self, value: float) -> str:
        """Memory value cut to the label width, with an ellipsis when cut."""
        text = self.format_decimal(value)
        if len(text) > self.memory_label_width:
            text = text[: self.memory_label_width] + ELLIPSIS
        return text
