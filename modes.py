"""Calculator mode, trig mode and angle unit, plus their display labels.

The label tables are plain lookups from enum member to caption.  They
are presentation metadata exposed through the snapshot; nothing in the
state machine branches on caption text.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ops import TrigFunction


class CalculatorMode(str, Enum):
    STANDARD = "standard"
    PROGRAMMER = "programmer"


class TrigMode(str, Enum):
    STANDARD = "standard"
    HYPERBOLIC = "hyperbolic"
    ARC = "arc"


class AngleUnit(str, Enum):
    RADIANS = "radians"
    DEGREES = "degrees"
    GRADIANS = "gradians"


# ---------------------------------------------------------------------------
# Cycles and captions
# ---------------------------------------------------------------------------

ANGLE_UNIT_CYCLE: dict[AngleUnit, AngleUnit] = {
    AngleUnit.RADIANS: AngleUnit.DEGREES,
    AngleUnit.DEGREES: AngleUnit.GRADIANS,
    AngleUnit.GRADIANS: AngleUnit.RADIANS,
}

TRIG_MODE_CYCLE: dict[TrigMode, TrigMode] = {
    TrigMode.STANDARD: TrigMode.ARC,
    TrigMode.ARC: TrigMode.HYPERBOLIC,
    TrigMode.HYPERBOLIC: TrigMode.STANDARD,
}

ANGLE_UNIT_LABELS: dict[AngleUnit, str] = {
    AngleUnit.RADIANS: "RAD",
    AngleUnit.DEGREES: "DEG",
    AngleUnit.GRADIANS: "GRAD",
}

TRIG_MODE_LABELS: dict[TrigMode, str] = {
    TrigMode.STANDARD: "STD",
    TrigMode.ARC: "ARC",
    TrigMode.HYPERBOLIC: "HYP",
}

TRIG_CAPTIONS: dict[TrigMode, dict[TrigFunction, str]] = {
    TrigMode.STANDARD: {
        TrigFunction.SIN: "sin",
        TrigFunction.COS: "cos",
        TrigFunction.TAN: "tan",
    },
    TrigMode.HYPERBOLIC: {
        TrigFunction.SIN: "sinh",
        TrigFunction.COS: "cosh",
        TrigFunction.TAN: "tanh",
    },
    TrigMode.ARC: {
        TrigFunction.SIN: "asin",
        TrigFunction.COS: "acos",
        TrigFunction.TAN: "atan",
    },
}

MODE_TOGGLE_LABELS: dict[CalculatorMode, str] = {
    CalculatorMode.STANDARD: "Programmer",
    CalculatorMode.PROGRAMMER: "Standard",
}

OCTAL_CONVERSION_LABEL = "BIN→OCT"
HEX_CONVERSION_LABEL = "BIN→HEX"

STANDARD_DIGITS = frozenset("0123456789")
BINARY_DIGITS = frozenset("01")


@dataclass(frozen=True)
class ModeLabels:
    """Captions and enablement hints for the current mode combination."""

    mode: str
    angle_unit: str
    trig_mode: str
    sin: str
    cos: str
    tan: str
    toggle_mode: str
    enabled_digits: str
    standard_controls_enabled: bool


class ModeController:
    """State machine over mode x trig mode x angle unit.

    In programmer mode the angle-unit and trig-mode controls are
    repurposed as base conversions by the engine; the controller only
    reports that, it never changes the stored trig mode or unit then.
    """

    def __init__(self) -> None:
        self.mode = CalculatorMode.STANDARD
        self.trig_mode = TrigMode.STANDARD
        self.angle_unit = AngleUnit.RADIANS

    @property
    def is_programmer(self) -> bool:
        return self.mode == CalculatorMode.PROGRAMMER

    def toggle_mode(self) -> CalculatorMode:
        if self.is_programmer:
            self.mode = CalculatorMode.STANDARD
        else:
            self.mode = CalculatorMode.PROGRAMMER
        return self.mode

    def cycle_angle_unit(self) -> bool:
        """Advance the angle unit; False means the control is a conversion now."""
        if self.is_programmer:
            return False
        self.angle_unit = ANGLE_UNIT_CYCLE[self.angle_unit]
        return True

    def cycle_trig_mode(self) -> bool:
        """Advance the trig mode; False means the control is a conversion now."""
        if self.is_programmer:
            return False
        self.trig_mode = TRIG_MODE_CYCLE[self.trig_mode]
        return True

    def accepts_digit(self, digit: str) -> bool:
        allowed = BINARY_DIGITS if self.is_programmer else STANDARD_DIGITS
        return digit in allowed

    def caption(self, fn: TrigFunction) -> str:
        return TRIG_CAPTIONS[self.trig_mode][fn]

    def labels(self) -> ModeLabels:
        if self.is_programmer:
            captions = TRIG_CAPTIONS[TrigMode.STANDARD]
            return ModeLabels(
                mode=self.mode.value,
                angle_unit=OCTAL_CONVERSION_LABEL,
                trig_mode=HEX_CONVERSION_LABEL,
                sin=captions[TrigFunction.SIN],
                cos=captions[TrigFunction.COS],
                tan=captions[TrigFunction.TAN],
                toggle_mode=MODE_TOGGLE_LABELS[self.mode],
                enabled_digits="".join(sorted(BINARY_DIGITS)),
                standard_controls_enabled=False,
            )

        captions = TRIG_CAPTIONS[self.trig_mode]
        return ModeLabels(
            mode=self.mode.value,
            angle_unit=ANGLE_UNIT_LABELS[self.angle_unit],
            trig_mode=TRIG_MODE_LABELS[self.trig_mode],
            sin=captions[TrigFunction.SIN],
            cos=captions[TrigFunction.COS],
            tan=captions[TrigFunction.TAN],
            toggle_mode=MODE_TOGGLE_LABELS[self.mode],
            enabled_digits="".join(sorted(STANDARD_DIGITS)),
            standard_controls_enabled=True,
        )
