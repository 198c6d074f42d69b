"""Single-value memory register (MC / MR / M+ / M-)."""
from __future__ import annotations

import math

from errors import ErrorKind, Result
from formatting import NumberFormatter

LABEL_PREFIX = "M: "


class MemoryRegister:
    """Holds one finite float.  Updates that would leave it non-finite are refused."""

    def __init__(self, formatter: NumberFormatter) -> None:
        self._formatter = formatter
        self._value = 0.0

    @property
    def value(self) -> float:
        return self._value

    def clear(self) -> None:
        self._value = 0.0

    def recall(self) -> float:
        return self._value

    def add(self, x: float) -> Result:
        return self._store(self._value + x)

    def subtract(self, x: float) -> Result:
        return self._store(self._value - x)

    def _store(self, candidate: float) -> Result:
        if not math.isfinite(candidate):
            return Result.failure(ErrorKind.OVERFLOW)
        self._value = candidate
        return Result.success(candidate)

    def label(self) -> str:
        return LABEL_PREFIX + self._formatter.memory_text(self._value)
