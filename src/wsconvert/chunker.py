"""Bounded reads and line assembly for WordStar byte streams."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import BinaryIO, Final, Iterator, Protocol

from .highbit import split_at_eof

LOGGER = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE: Final = 16384
LINE_FEED: Final = 0x0A
_TERMINATOR_PREFIXES: Final[frozenset[int]] = frozenset({0x0D, 0x8D})


class ByteSource(Protocol):
    def read(self, size: int = ..., /) -> bytes: ...


@dataclass(frozen=True)
class RawLine:
    """A physical line split from the input before normalization."""

    body: bytes
    terminator: bytes = b""
    continuation: bool = False


def read_chunk(source: ByteSource | BinaryIO, max_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
    """Read at most ``max_size`` bytes; an empty result means end of input."""

    if max_size <= 0:
        raise ValueError("chunk size must be positive")
    return source.read(max_size)


def _split_terminator(line: bytes) -> RawLine:
    if len(line) >= 2 and line[-2] in _TERMINATOR_PREFIXES:
        return RawLine(body=line[:-2], terminator=line[-2:])
    return RawLine(body=line[:-1], terminator=line[-1:])


class LineChunker:
    """Split chunks into lines, carrying the partial trailing line forward."""

    def __init__(self, max_line_length: int = 4 * DEFAULT_CHUNK_SIZE) -> None:
        if max_line_length <= 0:
            raise ValueError("max_line_length must be positive")
        self.max_line_length = max_line_length
        self.bytes_in = 0
        self.eof_marker_seen = False
        self.truncated = False
        self._carry = bytearray()
        self._carry_is_continuation = False

    @property
    def pending(self) -> int:
        return len(self._carry)

    def feed(self, chunk: bytes) -> list[RawLine]:
        """Return the complete lines made available by ``chunk``."""

        if self.eof_marker_seen or not chunk:
            return []
        data, self.eof_marker_seen = split_at_eof(chunk)
        self.bytes_in += len(data)
        if self.eof_marker_seen:
            LOGGER.debug("end-of-file marker found after %d bytes", self.bytes_in)

        lines: list[RawLine] = []
        start = 0
        while True:
            index = data.find(LINE_FEED, start)
            if index < 0:
                break
            self._carry += data[start : index + 1]
            line = _split_terminator(bytes(self._carry))
            if self._carry_is_continuation:
                line = RawLine(line.body, line.terminator, continuation=True)
            lines.append(line)
            self._carry.clear()
            self._carry_is_continuation = False
            start = index + 1
        self._carry += data[start:]

        # A CR/soft-return waiting for its line feed stays in the carry so the
        # terminator is not split across pieces.
        while len(self._carry) > self.max_line_length:
            cut = self.max_line_length
            if cut > 1 and self._carry[cut - 1] in _TERMINATOR_PREFIXES:
                cut -= 1
            piece = bytes(self._carry[:cut])
            del self._carry[:cut]
            LOGGER.debug("flushing %d bytes of an over-long line", len(piece))
            lines.append(RawLine(piece, b"", continuation=self._carry_is_continuation))
            self._carry_is_continuation = True
        return lines

    def finish(self) -> list[RawLine]:
        """Flush the carry-over buffer at end of input."""

        if not self._carry:
            return []
        tail = RawLine(bytes(self._carry), b"", continuation=self._carry_is_continuation)
        self._carry.clear()
        self._carry_is_continuation = False
        self.truncated = True
        LOGGER.warning(
            "input ended mid-line; flushing %d trailing bytes as-is", len(tail.body)
        )
        return [tail]


def iter_lines(
    source: ByteSource | BinaryIO,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    chunker: LineChunker | None = None,
) -> Iterator[RawLine]:
    """Yield raw lines from ``source`` reading ``chunk_size`` bytes at a time."""

    splitter = chunker if chunker is not None else LineChunker()
    while not splitter.eof_marker_seen:
        chunk = read_chunk(source, chunk_size)
        if not chunk:
            break
        yield from splitter.feed(chunk)
    yield from splitter.finish()


__all__ = [
    "ByteSource",
    "DEFAULT_CHUNK_SIZE",
    "LineChunker",
    "RawLine",
    "iter_lines",
    "read_chunk",
]
