"""Convert WordStar documents to plain Unicode text."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from contextlib import ExitStack
from dataclasses import replace
from pathlib import Path
from typing import BinaryIO, List

from .config import CATEGORY_NAMES, ConfigError, ConverterConfig, load_config
from .filters.controls import ControlMode
from .filters.wrappers import EmphasisMode
from .pipeline import Converter
from .reporting import format_report
from .stats import ConversionReport

LOGGER = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wsconvert", description=__doc__)
    parser.add_argument(
        "-i",
        "--infile",
        type=Path,
        help="Read from a file instead of stdin",
    )
    parser.add_argument(
        "-o",
        "--outfile",
        type=Path,
        help="Write to a new file instead of stdout (existing files are not replaced)",
    )
    parser.add_argument(
        "-x",
        "--exclude",
        action="append",
        default=[],
        metavar="CATEGORY",
        help=(
            "Skip a filter category; repeat or comma-separate. "
            f"Choices: {', '.join(CATEGORY_NAMES)}"
        ),
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="TOML file with a [wsconvert] table of conversion settings",
    )
    parser.add_argument(
        "--controls",
        choices=[mode.value for mode in ControlMode],
        help="Treatment of leftover control characters (default: placeholder)",
    )
    parser.add_argument(
        "--emphasis",
        choices=[mode.value for mode in EmphasisMode],
        help="Strip wrapper toggles or render them as Unicode (default: strip)",
    )
    parser.add_argument(
        "--page-break",
        help="Text substituted for page break dot commands (default: ---)",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        help="Bytes read from the input per chunk",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the conversion report as JSON",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not print the conversion report",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging verbosity (default: WARNING)",
    )
    return parser


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    """Return parsed command-line arguments for the converter."""

    return build_parser().parse_args(argv)


def resolve_config(args: argparse.Namespace) -> ConverterConfig:
    """Merge the optional TOML file with command-line overrides."""

    config = load_config(args.config) if args.config else ConverterConfig()
    overrides: dict[str, object] = {}
    if args.controls:
        overrides["control_mode"] = ControlMode(args.controls)
    if args.emphasis:
        overrides["emphasis"] = EmphasisMode(args.emphasis)
    if args.page_break is not None:
        overrides["page_break"] = args.page_break
    if args.chunk_size is not None:
        overrides["chunk_size"] = args.chunk_size
    if overrides:
        config = replace(config, **overrides)
    return config.excluding(args.exclude)


def render_report(report: ConversionReport, *, as_json: bool) -> str:
    if as_json:
        return json.dumps(report.to_dict(), indent=2)
    return format_report(report)


def main(argv: List[str] | None = None) -> int:
    """Entry point for the ``wsconvert`` command."""

    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level), format="%(levelname)s: %(message)s"
    )

    try:
        config = resolve_config(args)
    except ConfigError as exc:
        parser.error(str(exc))

    if args.infile is not None and not args.infile.exists():
        raise SystemExit(f"input file not found: {args.infile}")

    LOGGER.info(
        "converting %s -> %s", args.infile or "<stdin>", args.outfile or "<stdout>"
    )
    converter = Converter(config)
    with ExitStack() as stack:
        source: BinaryIO
        sink: BinaryIO
        if args.infile is not None:
            source = stack.enter_context(args.infile.open("rb"))
        else:
            source = sys.stdin.buffer
        if args.outfile is not None:
            try:
                sink = stack.enter_context(args.outfile.open("xb"))
            except FileExistsError:
                raise SystemExit(f"output file already exists: {args.outfile}") from None
        else:
            sink = sys.stdout.buffer
        report = converter.convert_stream(source, sink)
        sink.flush()

    if not args.quiet:
        print(render_report(report, as_json=args.json), file=sys.stderr)
    return 0


if __name__ == "__main__":  # pragma: no cover - exercised via python -m
    raise SystemExit(main())
