"""Shared fixtures for calculator tests."""
from __future__ import annotations

import pytest

from bitwise import BitwiseALU, INT8, INT32, OverflowMode
from clipboard import MemoryClipboard
from engine import CalculatorEngine
from formatting import NumberFormatter
from ops import BinaryOp
from settings import EngineSettings


@pytest.fixture
def settings() -> EngineSettings:
    return EngineSettings(decimal_separator=".")


@pytest.fixture
def engine(settings) -> CalculatorEngine:
    return CalculatorEngine(settings, clipboard=MemoryClipboard())


@pytest.fixture
def programmer(engine) -> CalculatorEngine:
    """An engine already switched to programmer mode."""
    engine.toggle_mode()
    return engine


@pytest.fixture
def formatter() -> NumberFormatter:
    return NumberFormatter(decimal_separator=".", word=INT32)


@pytest.fixture
def alu() -> BitwiseALU:
    return BitwiseALU(INT32)


@pytest.fixture
def alu8() -> BitwiseALU:
    return BitwiseALU(INT8)


@pytest.fixture
def legacy_alu8() -> BitwiseALU:
    return BitwiseALU(INT8, overflow=OverflowMode.WRAP, legacy_sign=True)


def press(engine: CalculatorEngine, keys: str):
    """Drive an engine with a compact key string, e.g. ``"2+3="``.

    Digits, ``.``, ``+ - * / ^`` and ``=`` are supported; returns the
    last snapshot.
    """
    operators = {
        "+": BinaryOp.ADD,
        "-": BinaryOp.SUBTRACT,
        "*": BinaryOp.MULTIPLY,
        "/": BinaryOp.DIVIDE,
        "^": BinaryOp.POWER,
    }
    snapshot = engine.snapshot()
    for key in keys:
        if key.isdigit():
            snapshot = engine.digit(int(key))
        elif key == ".":
            snapshot = engine.decimal_point()
        elif key == "=":
            snapshot = engine.equals()
        else:
            snapshot = engine.binary_operator(operators[key])
    return snapshot
