"""Conversion settings and validation of excluded filter categories."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Final, Iterable, Mapping

import tomllib

from .chunker import DEFAULT_CHUNK_SIZE
from .control_codes import FILTERABLE_CATEGORIES, Category
from .dot_commands import DEFAULT_PAGE_BREAK, parse_dot_command
from .filters.controls import ControlMode
from .filters.wrappers import EmphasisMode

FilterSet = frozenset[Category]

CATEGORY_NAMES: Final[tuple[str, ...]] = tuple(
    category.value for category in FILTERABLE_CATEGORIES
)


class ConfigError(ValueError):
    """Raised when conversion settings fail validation."""


class UnknownCategoryError(ConfigError):
    """Raised for an excluded category outside the supported set."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"unknown category {name!r}; expected one of: {', '.join(CATEGORY_NAMES)}"
        )


def parse_filter_set(names: Iterable[str] | None) -> FilterSet:
    """Return the categories named in ``names``.

    Items may themselves hold comma-separated names, as typed on a command line.
    """

    selected: set[Category] = set()
    for raw in names or ():
        for item in str(raw).split(","):
            name = item.strip().lower().replace("_", "-")
            if not name:
                continue
            if name not in CATEGORY_NAMES:
                raise UnknownCategoryError(item.strip())
            selected.add(Category(name))
    return frozenset(selected)


def coerce_filter_set(values: Iterable[Category | str]) -> FilterSet:
    """Return ``values`` as a :data:`FilterSet`, parsing any category names."""

    if isinstance(values, str):
        raise ConfigError("excluded categories must be a collection, not a string")
    items = list(values)
    categories = {item for item in items if isinstance(item, Category)}
    names = [item for item in items if not isinstance(item, Category)]
    return frozenset(categories) | parse_filter_set(names)


@dataclass(frozen=True)
class ConverterConfig:
    """Settings for one conversion run."""

    excludes: FilterSet = frozenset()
    chunk_size: int = DEFAULT_CHUNK_SIZE
    max_line_length: int = 4 * DEFAULT_CHUNK_SIZE
    control_mode: ControlMode = ControlMode.PLACEHOLDER
    emphasis: EmphasisMode = EmphasisMode.STRIP
    page_break: str = DEFAULT_PAGE_BREAK
    extra_dot_removals: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "excludes", coerce_filter_set(self.excludes))
        if Category.TO_ASCII in self.excludes:
            raise ConfigError("the to-ascii tally cannot be excluded")
        if self.chunk_size <= 0:
            raise ConfigError("chunk_size must be a positive integer")
        if self.max_line_length <= 0:
            raise ConfigError("max_line_length must be a positive integer")
        for token in self.extra_dot_removals:
            if len(token) != 2 or parse_dot_command(f".{token}") is None:
                raise ConfigError(f"invalid dot command token: {token!r}")

    def excluding(self, names: Iterable[Category | str]) -> ConverterConfig:
        """Return a copy with ``names`` added to the excluded categories."""

        return replace(self, excludes=self.excludes | coerce_filter_set(names))


def load_config(config_path: Path) -> ConverterConfig:
    """Parse and validate the ``[wsconvert]`` table of ``config_path``."""

    with config_path.open("rb") as stream:
        raw_data = tomllib.load(stream)

    section = raw_data.get("wsconvert", {})
    if not isinstance(section, Mapping):
        raise ConfigError("[wsconvert] section must be a mapping")
    return config_from_mapping(section)


def config_from_mapping(section: Mapping[str, Any]) -> ConverterConfig:
    known = {
        "exclude",
        "chunk_size",
        "max_line_length",
        "controls",
        "emphasis",
        "page_break",
        "remove_dot_commands",
    }
    unknown = sorted(set(section) - known)
    if unknown:
        raise ConfigError(f"unknown [wsconvert] keys: {', '.join(unknown)}")

    settings: dict[str, Any] = {}
    if "exclude" in section:
        settings["excludes"] = parse_filter_set(_coerce_str_list(section["exclude"], "exclude"))
    for key in ("chunk_size", "max_line_length"):
        if key in section:
            settings[key] = _coerce_positive_int(section[key], key)
    if "controls" in section:
        settings["control_mode"] = _coerce_enum(ControlMode, section["controls"], "controls")
    if "emphasis" in section:
        settings["emphasis"] = _coerce_enum(EmphasisMode, section["emphasis"], "emphasis")
    if "page_break" in section:
        page_break = section["page_break"]
        if not isinstance(page_break, str):
            raise ConfigError("page_break must be a string")
        settings["page_break"] = page_break
    if "remove_dot_commands" in section:
        tokens = _coerce_str_list(section["remove_dot_commands"], "remove_dot_commands")
        settings["extra_dot_removals"] = tuple(token.lower() for token in tokens)
    return ConverterConfig(**settings)


def _coerce_str_list(raw: Any, key: str) -> list[str]:
    if isinstance(raw, str):
        return [raw]
    if isinstance(raw, list) and all(isinstance(item, str) for item in raw):
        return list(raw)
    raise ConfigError(f"{key} must be a string or an array of strings")


def _coerce_positive_int(raw: Any, key: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ConfigError(f"{key} must be an integer")
    if raw <= 0:
        raise ConfigError(f"{key} must be a positive integer")
    return raw


def _coerce_enum(enum_type: type, raw: Any, key: str) -> Any:
    choices = ", ".join(member.value for member in enum_type)
    if not isinstance(raw, str):
        raise ConfigError(f"{key} must be one of: {choices}")
    try:
        return enum_type(raw.strip().lower())
    except ValueError as exc:
        raise ConfigError(f"{key} must be one of: {choices}") from exc


__all__ = [
    "CATEGORY_NAMES",
    "ConfigError",
    "ConverterConfig",
    "FilterSet",
    "UnknownCategoryError",
    "coerce_filter_set",
    "config_from_mapping",
    "load_config",
    "parse_filter_set",
]
