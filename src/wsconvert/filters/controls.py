"""Replace or drop any control character left after the other filters."""
from __future__ import annotations

from enum import Enum
from typing import Final

from ..control_codes import PLACEHOLDER, Category, needs_conversion, single_byte_replacements


class ControlMode(Enum):
    """Treatment for control characters without a table replacement."""

    PLACEHOLDER = "placeholder"
    DROP = "drop"
    CARET = "caret"


_SUBSTITUTES: Final[dict[str, str]] = single_byte_replacements(Category.CONTROLS)


def caret_notation(char: str) -> str:
    """Return ``^@``..``^_`` for C0 controls and ``^#`` for DEL."""

    code = ord(char)
    if code < 0x20:
        return "^" + chr(code + ord("@"))
    if code == 0x7F:
        return "^#"
    return "^?"


def process(text: str, mode: ControlMode = ControlMode.PLACEHOLDER) -> str:
    if not any(needs_conversion(char) for char in text):
        return text
    pieces: list[str] = []
    for char in text:
        if not needs_conversion(char):
            pieces.append(char)
        elif char in _SUBSTITUTES:
            pieces.append(_SUBSTITUTES[char])
        elif mode is ControlMode.PLACEHOLDER:
            pieces.append(PLACEHOLDER)
        elif mode is ControlMode.CARET:
            pieces.append(caret_notation(char))
    return "".join(pieces)


__all__ = ["ControlMode", "caret_notation", "process"]
