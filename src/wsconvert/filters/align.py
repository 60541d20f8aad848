"""Move whitespace outside pairs of wrapper toggles and join soft-wrapped lines."""
from __future__ import annotations

from enum import Enum, auto

from ..control_codes import ACTIVE_SOFT_HYPHEN, WRAPPER_TOGGLES, needs_conversion


class _State(Enum):
    OUTSIDE = auto()
    PREAMBLE = auto()
    TEXT = auto()


def align_reverse(text: str, wrapper: str) -> tuple[str, bool] | None:
    """Scan ``text`` right to left pushing leading whitespace out of ``wrapper`` pairs.

    Returns the *reversed* result and whether anything moved, or ``None`` when
    ``text`` holds an odd number of ``wrapper`` characters.  Whitespace is
    only moved past other control characters, so it ends up ahead of any
    stacked toggles.  Running it twice realigns both ends of every pair.
    """

    changed = False
    state = _State.OUTSIDE
    result: list[str] = []
    held: list[str] = []

    for char in reversed(text):
        if state is _State.OUTSIDE:
            if char == wrapper:
                held.append(char)
                state = _State.PREAMBLE
            else:
                result.append(char)
        elif state is _State.PREAMBLE:
            if char == wrapper:
                result.extend(held)
                held.clear()
                result.append(char)
                state = _State.OUTSIDE
            elif needs_conversion(char):
                held.append(char)
            elif char.isspace():
                changed = True
                result.append(char)
            else:
                result.extend(held)
                held.clear()
                result.append(char)
                state = _State.TEXT
        else:
            result.append(char)
            if char == wrapper:
                state = _State.OUTSIDE

    if state is not _State.OUTSIDE:
        return None
    return "".join(result), changed


def align_bothways(text: str, wrapper: str) -> str | None:
    """Return ``text`` realigned around ``wrapper`` pairs, or ``None`` if unchanged."""

    first = align_reverse(text, wrapper)
    if first is None:
        return None
    reversed_text, changed_rev = first
    second = align_reverse(reversed_text, wrapper)
    if second is None:  # pragma: no cover - the wrapper count is unchanged
        return None
    result, changed_fwd = second
    return result if (changed_rev or changed_fwd) else None


def realign(text: str) -> str:
    """Realign whitespace around every wrapper toggle in turn."""

    for wrapper in WRAPPER_TOGGLES:
        if wrapper not in text:
            continue
        aligned = align_bothways(text, wrapper)
        if aligned is not None:
            text = aligned
    return text


def join_soft_break(text: str) -> tuple[str, str]:
    """Return ``(text, joiner)`` for a line that ended in a soft return.

    Trailing blanks collapse into the single joining space.  A word broken
    at an active soft hyphen is rejoined with no space and no hyphen.
    """

    text = text.rstrip(" ")
    if text.endswith(ACTIVE_SOFT_HYPHEN):
        return text[: -len(ACTIVE_SOFT_HYPHEN)], ""
    return text, " "


__all__ = ["align_bothways", "align_reverse", "join_soft_break", "realign"]
