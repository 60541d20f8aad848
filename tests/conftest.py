"""Pytest configuration shared by the wsconvert test-suite."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

_SRC = Path(__file__).resolve().parents[1] / "src"
_src_str = str(_SRC)
if _src_str not in sys.path:
    sys.path.insert(0, _src_str)


def _encode_wordstar(text: str) -> bytes:
    out = bytearray()
    for char in text:
        if char == "|" and out:
            out[-1] |= 0x80
        else:
            out.append(ord(char))
    return bytes(out)


@pytest.fixture
def encode_wordstar() -> Callable[[str], bytes]:
    """Return an encoder that sets the word-end flag on the byte before each ``|``."""

    return _encode_wordstar


SAMPLE_LINES = [
    ".op\r\n",
    ".he \x02Quarterly\x02 Report\r\n",
    "The| \x13quick\x13| brown| fox|\r\n",
    "weighs| 3\x14o\x14C| and| H\x162\x16O|\x8d\n",
    "continues| here.|\r\n",
    "Overlined| ABC\x08\x08\x08\x14___\x14| text.|\r\n",
    ".pa\r\n",
    "Soft\x1ehyphen| and\x0fspace|\r\n",
    ".xyz| stays|\r\n",
]

SAMPLE_TEXT = (
    "## Quarterly Report\r\n"
    "The quick brown fox\r\n"
    "weighs 3\u00b0C and H\u2082O continues here.\r\n"
    "Overlined ABC text.\r\n"
    "---\r\n"
    "Softhyphen and\u00a0space\r\n"
    ".xyz stays\r\n"
)


@pytest.fixture
def sample_text() -> str:
    """Default conversion of :func:`sample_document`."""

    return SAMPLE_TEXT


@pytest.fixture
def sample_document() -> bytes:
    """A small WordStar document followed by end-of-file padding."""

    body = b"".join(_encode_wordstar(line) for line in SAMPLE_LINES)
    return body + b"\x1a\x1a\x1a\x1a"
