"""Track WordStar wrapper toggles across lines and render or strip them."""
from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Final

from .. import unicode_maps
from ..control_codes import (
    BOLD,
    DOUBLE,
    ITALIC,
    OVERLINE,
    STRIKETHROUGH,
    SUBSCRIPT,
    SUPERSCRIPT,
    UNDERLINE,
    needs_conversion,
)


class EmphasisMode(Enum):
    """How text inside wrapper toggles is rendered."""

    STRIP = "strip"
    UNICODE = "unicode"


_TOGGLE_FIELDS: Final[dict[str, str]] = {
    OVERLINE: "overline",
    BOLD: "bold",
    DOUBLE: "double",
    UNDERLINE: "underline",
    SUBSCRIPT: "subscript",
    SUPERSCRIPT: "superscript",
    STRIKETHROUGH: "strikethrough",
    ITALIC: "italic",
}


@dataclass
class Wrappers:
    """Toggle state for one conversion run; it persists from line to line."""

    mode: EmphasisMode = EmphasisMode.STRIP
    overline: bool = False
    bold: bool = False
    double: bool = False
    underline: bool = False
    subscript: bool = False
    superscript: bool = False
    strikethrough: bool = False
    italic: bool = False

    def toggle(self, char: str) -> bool:
        """Flip the state for ``char`` and return ``True`` if it is a toggle."""

        name = _TOGGLE_FIELDS.get(char)
        if name is None:
            return False
        setattr(self, name, not getattr(self, name))
        return True

    def active(self) -> list[str]:
        """Return the names of toggles currently switched on."""

        return [
            field.name
            for field in fields(self)
            if field.name != "mode" and getattr(self, field.name)
        ]

    def reset(self) -> None:
        for name in _TOGGLE_FIELDS.values():
            setattr(self, name, False)

    def _mapped(self, char: str) -> str | None:
        if self.superscript:
            return unicode_maps.get_superscript(char)
        if self.subscript:
            return unicode_maps.get_subscript(char)
        if self.bold ^ self.double:
            if self.italic:
                return unicode_maps.get_bold_italic(char)
            return unicode_maps.get_bold(char)
        if self.italic:
            return unicode_maps.get_italic(char)
        return None

    def _render(self, char: str) -> str:
        if not (self.underline or self.overline or self.strikethrough):
            return self._mapped(char) or char
        rendered = char
        if self.underline:
            rendered += unicode_maps.COMB_UNDERLINE
        if self.overline:
            rendered += unicode_maps.COMB_OVERLINE
        if self.strikethrough:
            rendered += unicode_maps.COMB_STRIKETHROUGH
        return rendered

    def process(self, text: str) -> str:
        """Consume toggles in ``text``; other control characters are kept."""

        pieces: list[str] = []
        for char in text:
            if needs_conversion(char):
                if not self.toggle(char):
                    pieces.append(char)
            elif self.mode is EmphasisMode.UNICODE:
                pieces.append(self._render(char))
            else:
                pieces.append(char)
        return "".join(pieces)


__all__ = ["EmphasisMode", "Wrappers"]
