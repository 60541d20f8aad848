from __future__ import annotations

import io
import json
import sys
import textwrap
from pathlib import Path

import pytest

from wsconvert import cli
from wsconvert.control_codes import Category
from wsconvert.filters import ControlMode


def write_input(tmp_path: Path, data: bytes) -> Path:
    path = tmp_path / "letter.ws"
    path.write_bytes(data)
    return path


def test_main_converts_file_and_prints_report(
    tmp_path: Path,
    sample_document: bytes,
    sample_text: str,
    capsys: pytest.CaptureFixture[str],
) -> None:
    infile = write_input(tmp_path, sample_document)
    outfile = tmp_path / "letter.txt"

    assert cli.main(["-i", str(infile), "-o", str(outfile)]) == 0

    assert outfile.read_bytes() == sample_text.encode("utf-8")
    err = capsys.readouterr().err
    assert "Dot commands after processing:" in err
    assert "  Replaced: 2" in err
    assert "  Wrappers: None" in err


def test_main_refuses_to_replace_existing_output(tmp_path: Path) -> None:
    infile = write_input(tmp_path, b"text\r\n")
    outfile = tmp_path / "out.txt"
    outfile.write_text("keep me", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["-i", str(infile), "-o", str(outfile), "-q"])

    assert "output file already exists" in str(excinfo.value.code)
    assert outfile.read_text(encoding="utf-8") == "keep me"


def test_main_reports_missing_input(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["-i", str(tmp_path / "missing.ws")])
    assert "input file not found" in str(excinfo.value.code)


def test_unknown_exclude_is_a_usage_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    infile = write_input(tmp_path, b"text\r\n")
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["-i", str(infile), "-x", "sparkles"])
    assert excinfo.value.code == 2
    assert "unknown category 'sparkles'" in capsys.readouterr().err


def test_json_report(
    tmp_path: Path, sample_document: bytes, capsys: pytest.CaptureFixture[str]
) -> None:
    infile = write_input(tmp_path, sample_document)
    outfile = tmp_path / "out.txt"

    cli.main(["-i", str(infile), "-o", str(outfile), "--json", "-x", "re-align,specials"])

    payload = json.loads(capsys.readouterr().err)
    assert payload["dot_commands"] == {"replaced": 2, "removed": 1, "skipped": False}
    statuses = {entry["category"]: entry["status"] for entry in payload["categories"]}
    assert statuses["re-align"] == "skipped"
    assert statuses["specials"] == "skipped"
    assert statuses["to-ascii"] == "counted"


def test_stdin_to_stdout(monkeypatch: pytest.MonkeyPatch) -> None:
    stdin = io.TextIOWrapper(io.BytesIO(b"one\r\n.pa\r\ntwo\r\n"))
    stdout = io.TextIOWrapper(io.BytesIO())
    monkeypatch.setattr(sys, "stdin", stdin)
    monkeypatch.setattr(sys, "stdout", stdout)

    assert cli.main(["-q", "--page-break", "* * *"]) == 0

    assert stdout.buffer.getvalue() == b"one\r\n* * *\r\ntwo\r\n"


def test_resolve_config_merges_file_and_flags(tmp_path: Path) -> None:
    config_path = tmp_path / "wsconvert.toml"
    config_path.write_text(
        textwrap.dedent(
            """
            [wsconvert]
            exclude = "overline"
            controls = "drop"
            chunk_size = 128
            """
        ),
        encoding="utf-8",
    )
    args = cli.parse_args(
        ["--config", str(config_path), "--controls", "caret", "-x", "wrappers"]
    )

    config = cli.resolve_config(args)

    assert config.excludes == frozenset({Category.OVERLINE, Category.WRAPPERS})
    assert config.control_mode is ControlMode.CARET
    assert config.chunk_size == 128


def test_bad_chunk_size_is_a_usage_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    infile = write_input(tmp_path, b"text\r\n")
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["-i", str(infile), "--chunk-size", "0"])
    assert excinfo.value.code == 2
    assert "chunk_size must be a positive integer" in capsys.readouterr().err
