"""Data models exchanged with the presentation layer.

``Snapshot`` is what every engine command returns.  ``Command`` is a
discriminated union of the abstract commands, so a remote client can
drive an engine with plain JSON such as ``{"kind": "digit", "digit": 7}``.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, RootModel

from errors import ErrorKind
from modes import ModeLabels
from ops import BinaryOp, Constant, MemoryOp, TrigFunction, UnaryFunction
from settings import EngineSettings

MAX_PASTE_LENGTH = 4096


# ---------------------------------------------------------------------------
# Snapshot: rendered state after a command
# ---------------------------------------------------------------------------

class Snapshot(BaseModel):
    """Text for the presentation layer to render."""

    display_text: str
    equation_text: str
    memory_label_text: str
    mode_labels: ModeLabels
    error: ErrorKind | None = None
    notification: str | None = Field(
        default=None,
        description="Transient message (clipboard failure, unavailable operator)",
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

class DigitCommand(BaseModel):
    kind: Literal["digit"] = "digit"
    digit: int = Field(..., ge=0, le=9)


class DecimalPointCommand(BaseModel):
    kind: Literal["decimal_point"] = "decimal_point"


class BinaryOperatorCommand(BaseModel):
    kind: Literal["binary_operator"] = "binary_operator"
    op: BinaryOp


class EqualsCommand(BaseModel):
    kind: Literal["equals"] = "equals"


class UnaryFunctionCommand(BaseModel):
    kind: Literal["unary_function"] = "unary_function"
    fn: UnaryFunction


class TrigFunctionCommand(BaseModel):
    kind: Literal["trig_function"] = "trig_function"
    fn: TrigFunction


class ConstantCommand(BaseModel):
    kind: Literal["constant"] = "constant"
    name: Constant


class ToggleSignCommand(BaseModel):
    kind: Literal["toggle_sign"] = "toggle_sign"


class MemoryCommand(BaseModel):
    kind: Literal["memory"] = "memory"
    op: MemoryOp


class ClearAllCommand(BaseModel):
    kind: Literal["clear_all"] = "clear_all"


class ClearEntryCommand(BaseModel):
    kind: Literal["clear_entry"] = "clear_entry"


class BackspaceCommand(BaseModel):
    kind: Literal["backspace"] = "backspace"


class PasteTextCommand(BaseModel):
    kind: Literal["paste_text"] = "paste_text"
    text: str = Field(..., max_length=MAX_PASTE_LENGTH)


class CopyDisplayCommand(BaseModel):
    kind: Literal["copy_display"] = "copy_display"


class PasteClipboardCommand(BaseModel):
    kind: Literal["paste_clipboard"] = "paste_clipboard"


class ToggleModeCommand(BaseModel):
    kind: Literal["toggle_mode"] = "toggle_mode"


class CycleAngleUnitCommand(BaseModel):
    kind: Literal["cycle_angle_unit"] = "cycle_angle_unit"


class CycleTrigModeCommand(BaseModel):
    kind: Literal["cycle_trig_mode"] = "cycle_trig_mode"


Command = Annotated[
    Union[
        DigitCommand,
        DecimalPointCommand,
        BinaryOperatorCommand,
        EqualsCommand,
        UnaryFunctionCommand,
        TrigFunctionCommand,
        ConstantCommand,
        ToggleSignCommand,
        MemoryCommand,
        ClearAllCommand,
        ClearEntryCommand,
        BackspaceCommand,
        PasteTextCommand,
        CopyDisplayCommand,
        PasteClipboardCommand,
        ToggleModeCommand,
        CycleAngleUnitCommand,
        CycleTrigModeCommand,
    ],
    Field(discriminator="kind"),
]


class CommandRequest(RootModel[Command]):
    """Request body holding exactly one command."""


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------

class SessionCreate(BaseModel):
    """Payload for opening a session; omitted settings use the server defaults."""

    settings: EngineSettings | None = None


class Session(BaseModel):
    id: str
    snapshot: Snapshot
