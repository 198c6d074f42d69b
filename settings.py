"""Engine configuration and logging setup.

Settings are a frozen pydantic model injected into the engine, the
same way the app factory injects its store.  ``from_env`` builds them
from ``CALC_*`` environment variables for the server entry point.
"""
from __future__ import annotations

import logging
import os
from typing import Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bitwise import SUPPORTED_WIDTHS, OverflowMode, Word
from decimal_engine import FACTORIAL_LIMIT
from formatting import NumberFormatter, default_decimal_separator

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_ENV_FIELDS = {
    "CALC_WORD_BITS": "word_bits",
    "CALC_OVERFLOW_MODE": "overflow_mode",
    "CALC_LEGACY_SIGN": "legacy_sign",
    "CALC_DECIMAL_SEPARATOR": "decimal_separator",
    "CALC_MEMORY_LABEL_WIDTH": "memory_label_width",
    "CALC_LOG_LEVEL": "log_level",
    "CALC_CLIPBOARD": "clipboard",
}


class EngineSettings(BaseModel):
    """Tunable behaviour of one calculator engine."""

    model_config = ConfigDict(frozen=True)

    word_bits: int = Field(default=32, description="Programmer-mode word width")
    overflow_mode: OverflowMode = OverflowMode.CHECKED
    legacy_sign: bool = Field(
        default=False,
        description="Multiply/divide on absolute values without restoring the sign",
    )
    decimal_separator: str = Field(
        default_factory=default_decimal_separator, min_length=1, max_length=1
    )
    memory_label_width: int = Field(default=12, ge=1, le=64)
    factorial_limit: int = Field(default=FACTORIAL_LIMIT, ge=0, le=FACTORIAL_LIMIT)
    log_level: str = "INFO"
    clipboard: Literal["memory", "system"] = Field(
        default="memory",
        description="Clipboard backing copy and paste: in-process or the desktop one",
    )

    @field_validator("word_bits")
    @classmethod
    def supported_width(cls, v: int) -> int:
        if v not in SUPPORTED_WIDTHS:
            raise ValueError(f"word_bits must be one of {SUPPORTED_WIDTHS}, got {v}")
        return v

    @field_validator("decimal_separator")
    @classmethod
    def separator_not_numeric(cls, v: str) -> str:
        if v.isdigit() or v in "+-eE" or v.isspace():
            raise ValueError(f"decimal separator cannot be {v!r}")
        return v

    @field_validator("log_level")
    @classmethod
    def known_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {v!r}")
        return level

    @property
    def word(self) -> Word:
        return Word(self.word_bits)

    def formatter(self) -> NumberFormatter:
        return NumberFormatter(
            decimal_separator=self.decimal_separator,
            word=self.word,
            memory_label_width=self.memory_label_width,
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EngineSettings:
        """Build settings from CALC_* variables; unset ones keep their defaults."""
        if environ is None:
            environ = os.environ
        values = {
            field: environ[name]
            for name, field in _ENV_FIELDS.items()
            if environ.get(name, "").strip()
        }
        return cls.model_validate(values)


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach one stream handler to the root logger (idempotent)."""
    root = logging.getLogger()
    root.setLevel(level)

    if root.handlers:
        return root

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    return root
