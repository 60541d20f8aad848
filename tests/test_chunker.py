from __future__ import annotations

import io
import logging

import pytest

from wsconvert.chunker import LineChunker, RawLine, iter_lines, read_chunk


def test_read_chunk_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError, match="chunk size"):
        read_chunk(io.BytesIO(b"abc"), 0)


def test_read_chunk_is_bounded() -> None:
    source = io.BytesIO(b"abcdef")
    assert read_chunk(source, 4) == b"abcd"
    assert read_chunk(source, 4) == b"ef"
    assert read_chunk(source, 4) == b""


def test_feed_carries_partial_line_between_chunks() -> None:
    chunker = LineChunker()
    assert chunker.feed(b"first li") == []
    assert chunker.pending == 8
    assert chunker.feed(b"ne\r\nsec") == [RawLine(b"first line", b"\r\n")]
    assert chunker.feed(b"ond\n") == [RawLine(b"second", b"\n")]
    assert chunker.finish() == []
    assert not chunker.truncated


def test_soft_return_split_across_chunks() -> None:
    chunker = LineChunker()
    assert chunker.feed(b"soft\x8d") == []
    assert chunker.feed(b"\nnext\r\n") == [
        RawLine(b"soft", b"\x8d\n"),
        RawLine(b"next", b"\r\n"),
    ]


@pytest.mark.parametrize("chunk_size", [1, 2, 3, 7, 64])
def test_iter_lines_is_independent_of_chunk_size(chunk_size: int) -> None:
    data = b"one\r\ntwo\x8d\nthree\nfour\r\n"
    lines = list(iter_lines(io.BytesIO(data), chunk_size=chunk_size))
    assert lines == [
        RawLine(b"one", b"\r\n"),
        RawLine(b"two", b"\x8d\n"),
        RawLine(b"three", b"\n"),
        RawLine(b"four", b"\r\n"),
    ]


def test_iter_lines_stops_at_eof_marker() -> None:
    source = io.BytesIO(b"kept\r\n\x1a\x1agarbage\r\n")
    chunker = LineChunker()
    lines = list(iter_lines(source, chunk_size=4, chunker=chunker))
    assert lines == [RawLine(b"kept", b"\r\n")]
    assert chunker.eof_marker_seen
    assert not chunker.truncated


def test_finish_flushes_truncated_tail(caplog: pytest.LogCaptureFixture) -> None:
    chunker = LineChunker()
    chunker.feed(b"done\r\n.he unfinished")
    with caplog.at_level(logging.WARNING, logger="wsconvert.chunker"):
        tail = chunker.finish()
    assert tail == [RawLine(b".he unfinished", b"")]
    assert chunker.truncated
    assert "input ended mid-line" in caplog.text


def test_over_long_line_is_flushed_as_continuations() -> None:
    chunker = LineChunker(max_line_length=4)
    lines = chunker.feed(b"abcdefghij\r\n")
    assert lines == [RawLine(b"abcdefghij", b"\r\n")]

    lines = chunker.feed(b"abcdefghij")
    assert lines == [
        RawLine(b"abcd", b""),
        RawLine(b"efgh", b"", continuation=True),
    ]
    assert chunker.feed(b"\r\n") == [RawLine(b"ij", b"\r\n", continuation=True)]


def test_over_long_flush_keeps_carriage_return_with_line_feed() -> None:
    chunker = LineChunker(max_line_length=4)
    lines = chunker.feed(b"abc\r")
    assert lines == []
    lines = chunker.feed(b"xy")
    assert lines == [RawLine(b"abc", b"")]
    assert chunker.pending == 3


def test_bytes_in_stops_at_eof_marker() -> None:
    chunker = LineChunker()
    list(iter_lines(io.BytesIO(b"ab\r\n\x1azz"), chunk_size=2, chunker=chunker))
    assert chunker.bytes_in == 4
