"""Rewrite WordStar overline sequences as a pair of overline toggles."""
from __future__ import annotations

from ..control_codes import OVERLINE, OVERPRINT, SUPERSCRIPT, UNDERSCORE, is_control


def _split_last_three(text: str, length: int) -> tuple[str, str, str] | None:
    if length <= 0 or len(text) < 2 * length:
        return None
    cut = len(text) - length
    return text[: cut - length], text[cut - length : cut], text[cut:]


def process(text: str) -> str:
    """Return ``text`` with every exact overline sequence rewritten.

    WordStar marks an overline as N printable characters, N overprints and a
    superscripted run of N underscores.  The matched characters are wrapped
    in :data:`~wsconvert.control_codes.OVERLINE` toggles for the wrapper
    rule to render; anything that does not match exactly is left alone.
    """

    if SUPERSCRIPT not in text or OVERPRINT not in text:
        return text

    pieces: list[str] = []
    rest = text
    while True:
        parts = rest.split(SUPERSCRIPT, 2)
        if len(parts) < 3:
            break
        left, bars, rest = parts
        if bars and bars.strip(UNDERSCORE) == "":
            split = _split_last_three(left, len(bars))
            if split is not None:
                prefix, body, over = split
                if over == OVERPRINT * len(over) and not any(
                    is_control(char) for char in body
                ):
                    pieces.append(f"{prefix}{OVERLINE}{body}{OVERLINE}")
                    continue
        pieces.append(f"{left}{SUPERSCRIPT}{bars}{SUPERSCRIPT}")
    pieces.append(rest)
    return "".join(pieces)


__all__ = ["process"]
