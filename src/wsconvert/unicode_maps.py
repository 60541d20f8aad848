"""Unicode lookup tables used when rendering WordStar emphasis."""
from __future__ import annotations

from typing import Final


DEGREE: Final = "\u00b0"
ONE_QUARTER: Final = "\u00bc"
HALF: Final = "\u00bd"
THREE_QUARTERS: Final = "\u00be"

COMB_OVERLINE: Final = "\u0305"
COMB_UNDERLINE: Final = "\u0332"
COMB_STRIKETHROUGH: Final = "\u0336"

_SUBSCRIPTS: Final[dict[str, str]] = {
    "0": "\u2080",
    "1": "\u2081",
    "2": "\u2082",
    "3": "\u2083",
    "4": "\u2084",
    "5": "\u2085",
    "6": "\u2086",
    "7": "\u2087",
    "8": "\u2088",
    "9": "\u2089",
    "+": "\u208a",
    "-": "\u208b",
    "=": "\u208c",
    "(": "\u208d",
    ")": "\u208e",
    "a": "\u2090",
    "e": "\u2091",
    "h": "\u2095",
    "i": "\u1d62",
    "j": "\u2c7c",
    "k": "\u2096",
    "l": "\u2097",
    "m": "\u2098",
    "n": "\u2099",
    "o": "\u2092",
    "p": "\u209a",
    "r": "\u1d63",
    "s": "\u209b",
    "t": "\u209c",
    "u": "\u1d64",
    "v": "\u1d65",
    "x": "\u2093",
}

_SUPERSCRIPTS: Final[dict[str, str]] = {
    "0": "\u2070",
    "1": "\u00b9",
    "2": "\u00b2",
    "3": "\u00b3",
    "4": "\u2074",
    "5": "\u2075",
    "6": "\u2076",
    "7": "\u2077",
    "8": "\u2078",
    "9": "\u2079",
    "+": "\u207a",
    "-": "\u207b",
    "=": "\u207c",
    "(": "\u207d",
    ")": "\u207e",
    "a": "\u1d43",
    "b": "\u1d47",
    "c": "\u1d9c",
    "d": "\u1d48",
    "e": "\u1d49",
    "f": "\u1da0",
    "g": "\u1d4d",
    "h": "\u02b0",
    "i": "\u2071",
    "j": "\u02b2",
    "k": "\u1d4f",
    "l": "\u02e1",
    "m": "\u1d50",
    "n": "\u207f",
    "o": "\u1d52",
    "p": "\u1d56",
    "r": "\u02b3",
    "s": "\u02e2",
    "t": "\u1d57",
    "u": "\u1d58",
    "v": "\u1d5b",
    "w": "\u02b7",
    "x": "\u02e3",
    "y": "\u02b8",
    "z": "\u1dbb",
}

# First code points of the Mathematical Alphanumeric Symbols block.
_BOLD_UPPER: Final = 0x1D400
_BOLD_LOWER: Final = 0x1D41A
_ITALIC_UPPER: Final = 0x1D434
_ITALIC_LOWER: Final = 0x1D44E
_BOLD_ITALIC_UPPER: Final = 0x1D468
_BOLD_ITALIC_LOWER: Final = 0x1D482
_BOLD_DIGITS: Final = 0x1D7CE

# Reserved holes in the italic alphabet live in the Letterlike Symbols block.
_ITALIC_EXCEPTIONS: Final[dict[str, str]] = {"h": "\u210e"}


def get_subscript(char: str) -> str | None:
    """Return the Unicode subscript form of ``char`` if one exists."""

    return _SUBSCRIPTS.get(char.lower())


def get_superscript(char: str) -> str | None:
    """Return the Unicode superscript form of ``char`` if one exists."""

    return _SUPERSCRIPTS.get(char.lower())


def _math_letter(char: str, upper: int, lower: int) -> str | None:
    if "A" <= char <= "Z":
        return chr(upper + ord(char) - ord("A"))
    if "a" <= char <= "z":
        return chr(lower + ord(char) - ord("a"))
    return None


def get_bold(char: str) -> str | None:
    if "0" <= char <= "9":
        return chr(_BOLD_DIGITS + ord(char) - ord("0"))
    return _math_letter(char, _BOLD_UPPER, _BOLD_LOWER)


def get_italic(char: str) -> str | None:
    if char in _ITALIC_EXCEPTIONS:
        return _ITALIC_EXCEPTIONS[char]
    return _math_letter(char, _ITALIC_UPPER, _ITALIC_LOWER)


def get_bold_italic(char: str) -> str | None:
    return _math_letter(char, _BOLD_ITALIC_UPPER, _BOLD_ITALIC_LOWER)


__all__ = [
    "COMB_OVERLINE",
    "COMB_STRIKETHROUGH",
    "COMB_UNDERLINE",
    "DEGREE",
    "HALF",
    "ONE_QUARTER",
    "THREE_QUARTERS",
    "get_bold",
    "get_bold_italic",
    "get_italic",
    "get_subscript",
    "get_superscript",
]
