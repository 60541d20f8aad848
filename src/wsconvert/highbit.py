"""Clear the WordStar word-end flag and recover 7-bit ASCII text."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .chunker import RawLine


WORD_END_FLAG: Final = 0x80
ASCII_MASK: Final = 0x7F
EOF_MARKER: Final = 0x1A
SOFT_RETURN: Final = 0x8D

_CLEAR_TABLE: Final[bytes] = bytes(value & ASCII_MASK for value in range(256))


def normalize(byte: int) -> tuple[int, bool]:
    """Return ``byte`` with bit 7 cleared and whether the flag was set."""

    raw = int(byte) & 0xFF
    return raw & ASCII_MASK, bool(raw & WORD_END_FLAG)


def normalize_bytes(data: bytes) -> bytes:
    """Clear bit 7 on every byte of ``data``."""

    return data.translate(_CLEAR_TABLE)


def split_at_eof(data: bytes) -> tuple[bytes, bool]:
    """Return the bytes ahead of the end-of-file marker and whether it was seen.

    The marker is matched on the raw value, so ``0x9A`` is ordinary text.
    """

    index = data.find(EOF_MARKER)
    if index < 0:
        return data, False
    return data[:index], True


def is_soft_break(terminator: bytes) -> bool:
    """Return ``True`` when ``terminator`` is a WordStar soft return."""

    return len(terminator) == 2 and terminator[0] == SOFT_RETURN


@dataclass(frozen=True)
class NormalizedLine:
    """One physical line after the high-bit pass."""

    text: str
    terminator: str = ""
    soft_break: bool = False
    continuation: bool = False


def normalize_line(raw: RawLine) -> NormalizedLine:
    """Normalize ``raw`` into text, keeping its line terminator."""

    return NormalizedLine(
        text=normalize_bytes(raw.body).decode("ascii"),
        terminator=normalize_bytes(raw.terminator).decode("ascii"),
        soft_break=is_soft_break(raw.terminator),
        continuation=raw.continuation,
    )


__all__ = [
    "ASCII_MASK",
    "EOF_MARKER",
    "NormalizedLine",
    "SOFT_RETURN",
    "WORD_END_FLAG",
    "is_soft_break",
    "normalize",
    "normalize_bytes",
    "normalize_line",
    "split_at_eof",
]
