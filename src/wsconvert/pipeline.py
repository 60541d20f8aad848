"""Wire the chunker, normalizer and filter bank into one conversion run."""
from __future__ import annotations

import io
import logging
from typing import BinaryIO, Iterable, Protocol

from .chunker import ByteSource, LineChunker, iter_lines
from .config import ConverterConfig, coerce_filter_set
from .control_codes import Category
from .dot_commands import DotCommandFilter
from .filters.bank import FilterBank
from .highbit import normalize_line
from .stats import ConversionReport

LOGGER = logging.getLogger(__name__)

OUTPUT_ENCODING = "utf-8"


class ByteSink(Protocol):
    def write(self, data: bytes, /) -> object: ...


class Converter:
    """Convert WordStar documents according to a :class:`ConverterConfig`."""

    def __init__(self, config: ConverterConfig | None = None) -> None:
        self.config = config if config is not None else ConverterConfig()

    def _new_bank(self) -> FilterBank:
        config = self.config
        return FilterBank(
            excludes=config.excludes,
            dot_filter=DotCommandFilter(
                page_break=config.page_break,
                extra_removals=config.extra_dot_removals,
            ),
            control_mode=config.control_mode,
            emphasis=config.emphasis,
        )

    def convert_stream(
        self, source: ByteSource | BinaryIO, sink: ByteSink | BinaryIO
    ) -> ConversionReport:
        """Convert ``source`` into ``sink`` line by line and return the report.

        Errors raised by ``source`` or ``sink`` propagate unchanged; whatever
        was already written stays written.
        """

        bank = self._new_bank()
        chunker = LineChunker(max_line_length=self.config.max_line_length)
        bytes_out = 0
        chars_out = 0
        for raw in iter_lines(source, chunk_size=self.config.chunk_size, chunker=chunker):
            converted = bank.apply(normalize_line(raw))
            if not converted:
                continue
            payload = converted.encode(OUTPUT_ENCODING)
            sink.write(payload)
            bytes_out += len(payload)
            chars_out += len(converted)

        open_wrappers = bank.open_wrappers()
        if open_wrappers:
            LOGGER.warning(
                "input ended with wrapper toggles still on: %s", ", ".join(open_wrappers)
            )
        LOGGER.debug("converted %d bytes into %d bytes", chunker.bytes_in, bytes_out)
        return bank.stats.finalize(
            bytes_in=chunker.bytes_in,
            bytes_out=bytes_out,
            chars_out=chars_out,
            truncated=chunker.truncated,
            open_wrappers=open_wrappers,
        )

    def convert(self, data: bytes) -> tuple[str, ConversionReport]:
        """Convert an in-memory document and return ``(text, report)``."""

        sink = io.BytesIO()
        report = self.convert_stream(io.BytesIO(data), sink)
        return sink.getvalue().decode(OUTPUT_ENCODING), report


def convert(
    data: bytes,
    excluded_categories: Iterable[Category | str] = (),
    *,
    config: ConverterConfig | None = None,
) -> tuple[str, ConversionReport]:
    """Convert ``data`` with the named categories excluded.

    Unknown category names raise
    :class:`~wsconvert.config.UnknownCategoryError` and a bare string raises
    :class:`~wsconvert.config.ConfigError`, both before any byte is read.
    """

    base = config if config is not None else ConverterConfig()
    excludes = coerce_filter_set(excluded_categories)
    if excludes:
        base = base.excluding(excludes)
    return Converter(base).convert(data)


__all__ = ["ByteSink", "Converter", "OUTPUT_ENCODING", "convert"]
