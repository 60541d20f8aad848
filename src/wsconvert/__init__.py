"""Recover readable text from WordStar document files."""
from __future__ import annotations

from .config import (
    ConfigError,
    ConverterConfig,
    FilterSet,
    UnknownCategoryError,
    load_config,
    parse_filter_set,
)
from .control_codes import CONTROL_CODES, Category, ControlCode, classify
from .filters import ControlMode, EmphasisMode
from .pipeline import Converter, convert
from .reporting import format_report
from .stats import CategoryReport, CategoryStatus, ConversionReport

__all__ = [
    "CONTROL_CODES",
    "Category",
    "CategoryReport",
    "CategoryStatus",
    "ConfigError",
    "ControlCode",
    "ControlMode",
    "ConversionReport",
    "Converter",
    "ConverterConfig",
    "EmphasisMode",
    "FilterSet",
    "UnknownCategoryError",
    "classify",
    "convert",
    "format_report",
    "load_config",
    "parse_filter_set",
]
