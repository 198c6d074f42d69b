"""System clipboard access for copy/paste.

The clipboard is an external collaborator that can fail at any time
(no display server, no copy mechanism installed).  Adapters translate
those failures into ``ClipboardError`` so the engine can turn them
into a transient notification without touching calculator state.
"""
from __future__ import annotations

import logging
from typing import Protocol

import pyperclip

logger = logging.getLogger(__name__)


class ClipboardError(Exception):
    """Raised when the clipboard cannot be read or written."""


class Clipboard(Protocol):
    def copy(self, text: str) -> None: ...

    def paste(self) -> str: ...


class SystemClipboard:
    """Clipboard backed by pyperclip."""

    def copy(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            logger.warning("clipboard copy failed: %s", e)
            raise ClipboardError(str(e)) from e

    def paste(self) -> str:
        try:
            return pyperclip.paste() or ""
        except pyperclip.PyperclipException as e:
            logger.warning("clipboard paste failed: %s", e)
            raise ClipboardError(str(e)) from e


class MemoryClipboard:
    """In-process clipboard, used when no system clipboard is wanted."""

    def __init__(self, text: str = "") -> None:
        self.text = text

    def copy(self, text: str) -> None:
        self.text = text

    def paste(self) -> str:
        return self.text
