from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from wsconvert.config import (
    ConfigError,
    ConverterConfig,
    UnknownCategoryError,
    coerce_filter_set,
    config_from_mapping,
    load_config,
    parse_filter_set,
)
from wsconvert.control_codes import Category
from wsconvert.filters import ControlMode, EmphasisMode


def write_config(tmp_path: Path, body: str) -> Path:
    config_path = tmp_path / "wsconvert.toml"
    config_path.write_text(textwrap.dedent(body), encoding="utf-8")
    return config_path


def test_parse_filter_set_accepts_mixed_forms() -> None:
    assert parse_filter_set(["Re_Align, specials", "WRAPPERS", ""]) == frozenset(
        {Category.RE_ALIGN, Category.SPECIALS, Category.WRAPPERS}
    )
    assert parse_filter_set(None) == frozenset()


@pytest.mark.parametrize("name", ["bogus", "to-ascii", "dot commands"])
def test_parse_filter_set_rejects_unknown_names(name: str) -> None:
    with pytest.raises(UnknownCategoryError, match="unknown category") as excinfo:
        parse_filter_set([name])
    assert excinfo.value.name == name


def test_unknown_category_is_a_config_error() -> None:
    with pytest.raises(ConfigError):
        parse_filter_set(["nope"])


def test_load_config_reads_wsconvert_table(tmp_path: Path) -> None:
    config_path = write_config(
        tmp_path,
        """
        [wsconvert]
        exclude = ["re-align", "overline"]
        chunk_size = 512
        controls = "caret"
        emphasis = "Unicode"
        page_break = "<hr>"
        remove_dot_commands = ["ZZ"]
        """,
    )

    config = load_config(config_path)

    assert config.excludes == frozenset({Category.RE_ALIGN, Category.OVERLINE})
    assert config.chunk_size == 512
    assert config.control_mode is ControlMode.CARET
    assert config.emphasis is EmphasisMode.UNICODE
    assert config.page_break == "<hr>"
    assert config.extra_dot_removals == ("zz",)


def test_load_config_without_table_uses_defaults(tmp_path: Path) -> None:
    config_path = write_config(tmp_path, "[other]\nvalue = 1\n")
    assert load_config(config_path) == ConverterConfig()


@pytest.mark.parametrize(
    "section, message",
    [
        ({"colour": "red"}, "unknown \\[wsconvert\\] keys: colour"),
        ({"chunk_size": 0}, "chunk_size must be a positive integer"),
        ({"chunk_size": "big"}, "chunk_size must be an integer"),
        ({"max_line_length": True}, "max_line_length must be an integer"),
        ({"controls": "shout"}, "controls must be one of"),
        ({"emphasis": 3}, "emphasis must be one of"),
        ({"page_break": 5}, "page_break must be a string"),
        ({"exclude": [1, 2]}, "exclude must be a string or an array"),
        ({"remove_dot_commands": ["long"]}, "invalid dot command token"),
    ],
)
def test_config_from_mapping_rejects_bad_values(
    section: dict[str, object], message: str
) -> None:
    with pytest.raises(ConfigError, match=message):
        config_from_mapping(section)


def test_to_ascii_cannot_be_excluded() -> None:
    with pytest.raises(ConfigError, match="to-ascii"):
        ConverterConfig(excludes=frozenset({Category.TO_ASCII}))


def test_excluding_adds_to_existing_set() -> None:
    config = ConverterConfig(excludes=frozenset({Category.SPECIALS}))
    updated = config.excluding(["controls"])
    assert updated.excludes == frozenset({Category.SPECIALS, Category.CONTROLS})
    assert config.excludes == frozenset({Category.SPECIALS})


def test_excludes_accept_category_names() -> None:
    config = ConverterConfig(excludes={"re-align", Category.SPECIALS})  # type: ignore[arg-type]
    assert config.excludes == frozenset({Category.RE_ALIGN, Category.SPECIALS})


@pytest.mark.parametrize("excludes", ["re-align", ["bogus"]])
def test_excludes_reject_bad_values(excludes: object) -> None:
    with pytest.raises(ConfigError):
        ConverterConfig(excludes=excludes)  # type: ignore[arg-type]


def test_coerce_filter_set_rejects_bare_string() -> None:
    with pytest.raises(ConfigError, match="not a string"):
        coerce_filter_set("controls")
