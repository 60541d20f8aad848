"""Convert special WordStar sequences such as fractions and degree signs."""
from __future__ import annotations

import re
from typing import Callable, Final

from .. import unicode_maps
from ..control_codes import (
    OVERPRINT,
    SUBSCRIPT,
    SUPERSCRIPT,
    UNDERLINE,
    UNDERSCORE,
    Category,
    single_byte_replacements,
)

_SUP = re.escape(SUPERSCRIPT)
_SUB = re.escape(SUBSCRIPT)
_BS = re.escape(OVERPRINT)
_UL = re.escape(UNDERLINE)

_DEGREE_PATTERN: Final = re.compile(f"{_SUP}o{_SUP}")
# The underlined numerator is overprinted on the subscripted denominator.
_FRACTION_PATTERN: Final = re.compile(
    f"{_SUP}{_UL}?(?P<num>[13])(?:{_UL}|{unicode_maps.COMB_UNDERLINE})?{_SUP}{_BS}"
    f"{_SUB}(?P<den>[24]){_SUB}"
)
_SUBSCRIPT_PATTERN: Final = re.compile(f"{_SUB}([^{_SUB}]*){_SUB}")

_FRACTIONS: Final[dict[tuple[str, str], str]] = {
    ("1", "2"): unicode_maps.HALF,
    ("1", "4"): unicode_maps.ONE_QUARTER,
    ("3", "4"): unicode_maps.THREE_QUARTERS,
}

_SINGLE_BYTE: Final[dict[str, str]] = single_byte_replacements(Category.SPECIALS)


def transform_degrees(text: str) -> str:
    return _DEGREE_PATTERN.sub(unicode_maps.DEGREE, text)


def _fraction(match: re.Match[str]) -> str:
    return _FRACTIONS.get((match["num"], match["den"]), match.group(0))


def transform_fractions(text: str) -> str:
    return _FRACTION_PATTERN.sub(_fraction, text)


def _mapped(run: str, lookup: Callable[[str], str | None]) -> str:
    return "".join(lookup(char) or char for char in run)


def transform_subscript(text: str) -> str:
    return _SUBSCRIPT_PATTERN.sub(
        lambda match: _mapped(match.group(1), unicode_maps.get_subscript), text
    )


def _is_overline_run(left: str, inner: str) -> bool:
    return left.endswith(OVERPRINT) and bool(inner) and inner.strip(UNDERSCORE) == ""


def transform_superscript(text: str) -> str:
    """Map superscript runs, leaving overprinted underscore runs for the overline rule."""

    if text.count(SUPERSCRIPT) < 2:
        return text
    pieces: list[str] = []
    rest = text
    while True:
        parts = rest.split(SUPERSCRIPT, 2)
        if len(parts) < 3:
            break
        left, inner, rest = parts
        pieces.append(left)
        if _is_overline_run(left, inner):
            pieces.append(f"{SUPERSCRIPT}{inner}{SUPERSCRIPT}")
        else:
            pieces.append(_mapped(inner, unicode_maps.get_superscript))
    pieces.append(rest)
    return "".join(pieces)


def replace_single_bytes(text: str) -> str:
    """Apply the table's literal replacements for Special control bytes."""

    if not any(char in text for char in _SINGLE_BYTE):
        return text
    return "".join(_SINGLE_BYTE.get(char, char) for char in text)


def process(text: str) -> str:
    """Apply every special-sequence rewrite in order."""

    text = transform_degrees(text)
    text = transform_fractions(text)
    text = transform_subscript(text)
    text = transform_superscript(text)
    return replace_single_bytes(text)


__all__ = [
    "process",
    "replace_single_bytes",
    "transform_degrees",
    "transform_fractions",
    "transform_subscript",
    "transform_superscript",
]
