"""Tests for the snapshot, command and session models."""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from errors import ErrorKind, OperandKindError
from models import (
    MAX_PASTE_LENGTH,
    BinaryOperatorCommand,
    Command,
    CommandRequest,
    CopyDisplayCommand,
    DigitCommand,
    MemoryCommand,
    PasteClipboardCommand,
    PasteTextCommand,
    SessionCreate,
    Snapshot,
    ToggleModeCommand,
)
from modes import ModeController
from ops import BinaryOp, MemoryOp
from state import Operand, OperandKind

COMMAND = TypeAdapter(Command)


class TestCommands:

    def test_discriminated_by_kind(self):
        command = COMMAND.validate_python({"kind": "digit", "digit": 3})
        assert isinstance(command, DigitCommand)
        assert command.digit == 3

    def test_enum_fields(self):
        command = COMMAND.validate_python({"kind": "binary_operator", "op": "multiply"})
        assert isinstance(command, BinaryOperatorCommand)
        assert command.op == BinaryOp.MULTIPLY

    def test_memory_command(self):
        command = COMMAND.validate_python({"kind": "memory", "op": "recall"})
        assert isinstance(command, MemoryCommand)
        assert command.op == MemoryOp.RECALL

    def test_no_payload_commands(self):
        assert isinstance(COMMAND.validate_python({"kind": "toggle_mode"}), ToggleModeCommand)

    @pytest.mark.parametrize("kind, cls", [
        ("copy_display", CopyDisplayCommand),
        ("paste_clipboard", PasteClipboardCommand),
    ])
    def test_clipboard_commands(self, kind, cls):
        assert isinstance(COMMAND.validate_python({"kind": kind}), cls)

    def test_request_root(self):
        request = CommandRequest.model_validate({"kind": "digit", "digit": 0})
        assert isinstance(request.root, DigitCommand)

    @pytest.mark.parametrize("payload", [
        {"kind": "digit", "digit": -1},
        {"kind": "digit"},
        {"kind": "unary_function", "fn": "cube"},
        {"kind": "constant", "name": "tau"},
        {"kind": "nothing"},
    ])
    def test_invalid(self, payload):
        with pytest.raises(ValidationError):
            COMMAND.validate_python(payload)

    def test_paste_length_limit(self):
        PasteTextCommand(text="1" * MAX_PASTE_LENGTH)
        with pytest.raises(ValidationError):
            PasteTextCommand(text="1" * (MAX_PASTE_LENGTH + 1))


class TestSnapshot:

    def test_dump(self):
        snapshot = Snapshot(
            display_text="Overflow",
            equation_text="",
            memory_label_text="M: 0",
            mode_labels=ModeController().labels(),
            error=ErrorKind.OVERFLOW,
        )
        data = snapshot.model_dump(mode="json")
        assert data["error"] == "overflow"
        assert data["notification"] is None
        assert data["mode_labels"]["enabled_digits"] == "0123456789"


class TestSessionCreate:

    def test_settings_optional(self):
        assert SessionCreate().settings is None

    def test_nested_settings(self):
        payload = SessionCreate.model_validate({"settings": {"word_bits": 64}})
        assert payload.settings.word_bits == 64


class TestOperand:

    def test_decimal(self):
        operand = Operand.decimal(2)
        assert operand.kind == OperandKind.DECIMAL
        assert operand.as_decimal() == 2.0

    def test_binary(self):
        assert Operand.binary(5).as_binary() == 5

    def test_wrong_representation(self):
        with pytest.raises(OperandKindError, match="decimal value, not binary"):
            Operand.decimal(1.5).as_binary()
        with pytest.raises(TypeError):
            Operand.binary(1).as_decimal()
