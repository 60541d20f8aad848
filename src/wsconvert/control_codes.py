"""WordStar control byte table shared across the conversion filters."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Iterable


class Category(Enum):
    """Transformation classes reported by the statistics aggregator."""

    TO_ASCII = "to-ascii"
    DOT_CMDS = "dot-cmds"
    RE_ALIGN = "re-align"
    SPECIALS = "specials"
    OVERLINE = "overline"
    WRAPPERS = "wrappers"
    CONTROLS = "controls"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def filterable(self) -> bool:
        return self is not Category.TO_ASCII


_LABELS: Final[dict[Category, str]] = {
    Category.TO_ASCII: "To ASCII",
    Category.DOT_CMDS: "Dot-cmds",
    Category.RE_ALIGN: "Re-align",
    Category.SPECIALS: "Specials",
    Category.OVERLINE: "Overline",
    Category.WRAPPERS: "Wrappers",
    Category.CONTROLS: "Controls",
}

# Evaluation and report order.
CATEGORY_ORDER: Final[tuple[Category, ...]] = tuple(Category)
FILTERABLE_CATEGORIES: Final[tuple[Category, ...]] = tuple(
    category for category in CATEGORY_ORDER if category.filterable
)


# Wrapper toggles
OVERLINE: Final = "\x01"
BOLD: Final = "\x02"
DOUBLE: Final = "\x04"
UNDERLINE: Final = "\x13"
SUPERSCRIPT: Final = "\x14"
SUBSCRIPT: Final = "\x16"
STRIKETHROUGH: Final = "\x18"
ITALIC: Final = "\x19"

OVERPRINT: Final = "\x08"
UNDERSCORE: Final = "_"

PHANTOM_SPACE: Final = "\x06"
PHANTOM_RUBOUT: Final = "\x07"
FORM_FEED: Final = "\x0c"
NON_BREAKING_SPACE: Final = "\x0f"
INACTIVE_SOFT_HYPHEN: Final = "\x1e"
ACTIVE_SOFT_HYPHEN: Final = "\x1f"
DELETE: Final = "\x7f"

PLACEHOLDER: Final = "\ufffd"

# Control characters that are ordinary text once the document is converted.
TEXT_CONTROLS: Final[frozenset[str]] = frozenset({"\t", "\n"})


@dataclass(frozen=True)
class ControlCode:
    """Static description of a control byte that carries WordStar meaning."""

    value: int
    name: str
    category: Category
    replacement: str | None = None

    @property
    def char(self) -> str:
        return chr(self.value)


def _build_table(entries: Iterable[ControlCode]) -> dict[int, ControlCode]:
    table: dict[int, ControlCode] = {}
    for entry in entries:
        if entry.value in table:
            raise ValueError(f"duplicate control code {entry.value:#04x}")
        table[entry.value] = entry
    return table


CONTROL_CODES: Final[dict[int, ControlCode]] = _build_table(
    [
        ControlCode(0x01, "overline", Category.WRAPPERS),
        ControlCode(0x02, "bold", Category.WRAPPERS),
        ControlCode(0x04, "double", Category.WRAPPERS),
        ControlCode(0x06, "phantom space", Category.CONTROLS),
        ControlCode(0x07, "phantom rubout", Category.CONTROLS),
        ControlCode(0x08, "overprint", Category.OVERLINE),
        ControlCode(0x0C, "form feed", Category.CONTROLS, "\n"),
        ControlCode(0x0F, "non-breaking space", Category.SPECIALS, "\u00a0"),
        ControlCode(0x13, "underline", Category.WRAPPERS),
        ControlCode(0x14, "superscript", Category.WRAPPERS),
        ControlCode(0x16, "subscript", Category.WRAPPERS),
        ControlCode(0x18, "strikethrough", Category.WRAPPERS),
        ControlCode(0x19, "italic", Category.WRAPPERS),
        ControlCode(0x1E, "inactive soft hyphen", Category.SPECIALS, ""),
        ControlCode(0x1F, "active soft hyphen", Category.SPECIALS, "\u2010"),
        ControlCode(0x7F, "delete", Category.CONTROLS),
    ]
)

WRAPPER_TOGGLES: Final[tuple[str, ...]] = (
    OVERLINE,
    BOLD,
    DOUBLE,
    UNDERLINE,
    SUPERSCRIPT,
    SUBSCRIPT,
    STRIKETHROUGH,
    ITALIC,
)


def is_control(char: str) -> bool:
    """Return ``True`` for ASCII control characters, DEL included."""

    code = ord(char)
    return code < 0x20 or code == 0x7F


def needs_conversion(char: str) -> bool:
    """Return ``True`` for control characters that still need converting."""

    return is_control(char) and char not in TEXT_CONTROLS


def classify(value: int | str) -> ControlCode | None:
    """Return the table entry for ``value`` or ``None`` when it has none."""

    code = ord(value) if isinstance(value, str) else int(value)
    return CONTROL_CODES.get(code)


def codes_in(category: Category) -> tuple[ControlCode, ...]:
    """Return the table entries tagged with ``category`` in value order."""

    return tuple(
        entry for _, entry in sorted(CONTROL_CODES.items()) if entry.category is category
    )


def single_byte_replacements(category: Category) -> dict[str, str]:
    """Return ``char -> replacement`` for entries of ``category`` with a literal."""

    return {
        entry.char: entry.replacement
        for entry in codes_in(category)
        if entry.replacement is not None
    }


__all__ = [
    "ACTIVE_SOFT_HYPHEN",
    "BOLD",
    "CATEGORY_ORDER",
    "CONTROL_CODES",
    "Category",
    "ControlCode",
    "DELETE",
    "DOUBLE",
    "FILTERABLE_CATEGORIES",
    "FORM_FEED",
    "INACTIVE_SOFT_HYPHEN",
    "ITALIC",
    "NON_BREAKING_SPACE",
    "OVERLINE",
    "OVERPRINT",
    "PHANTOM_RUBOUT",
    "PHANTOM_SPACE",
    "PLACEHOLDER",
    "STRIKETHROUGH",
    "SUBSCRIPT",
    "SUPERSCRIPT",
    "TEXT_CONTROLS",
    "UNDERLINE",
    "UNDERSCORE",
    "WRAPPER_TOGGLES",
    "classify",
    "codes_in",
    "is_control",
    "needs_conversion",
    "single_byte_replacements",
]
