"""Per-run counters for control characters and dot commands."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from .control_codes import CATEGORY_ORDER, Category, needs_conversion


class CategoryStatus(Enum):
    COUNTED = "counted"
    NONE = "none"
    SKIPPED = "skipped"


class ByteStats:
    """Occurrence counts keyed by control byte value for one category."""

    def __init__(self, category: Category) -> None:
        self.category = category
        self._counts: Counter[int] = Counter()

    def up(self, value: int | str) -> None:
        """Count ``value`` once if it is a control character needing conversion."""

        char = value if isinstance(value, str) else chr(value)
        if needs_conversion(char):
            self._counts[ord(char)] += 1

    def scan(self, text: str) -> None:
        for char in text:
            self.up(char)

    def get(self, value: int) -> int | None:
        count = self._counts.get(value)
        return count if count else None

    def items(self) -> list[tuple[int, int]]:
        """Return ``(value, count)`` pairs in ascending value order."""

        return sorted(self._counts.items())

    @property
    def total(self) -> int:
        return sum(self._counts.values())

    @property
    def distinct(self) -> int:
        return len(self._counts)

    def __bool__(self) -> bool:
        return bool(self._counts)


@dataclass
class DotCommandStats:
    replaced: int = 0
    removed: int = 0

    @property
    def total(self) -> int:
        return self.replaced + self.removed


@dataclass(frozen=True)
class CategoryReport:
    """Final tally for one category line of the report."""

    category: Category
    status: CategoryStatus
    counts: tuple[tuple[int, int], ...] = ()

    @property
    def total(self) -> int:
        return sum(count for _, count in self.counts)

    @property
    def distinct(self) -> int:
        return len(self.counts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category.value,
            "label": self.category.label,
            "status": self.status.value,
            "counts": {f"{value:02X}": count for value, count in self.counts},
            "total": self.total,
            "distinct": self.distinct,
        }


@dataclass(frozen=True)
class ConversionReport:
    """Read-only summary produced once at the end of a conversion."""

    dot_commands_replaced: int
    dot_commands_removed: int
    dot_commands_skipped: bool
    categories: tuple[CategoryReport, ...]
    bytes_in: int = 0
    bytes_out: int = 0
    chars_out: int = 0
    truncated: bool = False
    open_wrappers: tuple[str, ...] = ()

    def category(self, category: Category) -> CategoryReport:
        for entry in self.categories:
            if entry.category is category:
                return entry
        raise KeyError(category)

    def to_dict(self) -> dict[str, Any]:
        return {
            "dot_commands": {
                "replaced": self.dot_commands_replaced,
                "removed": self.dot_commands_removed,
                "skipped": self.dot_commands_skipped,
            },
            "categories": [entry.to_dict() for entry in self.categories],
            "bytes_in": self.bytes_in,
            "bytes_out": self.bytes_out,
            "chars_out": self.chars_out,
            "truncated": self.truncated,
            "open_wrappers": list(self.open_wrappers),
        }


@dataclass
class StatisticsAggregator:
    """Accumulate counts across every line of one run."""

    excluded: frozenset[Category] = frozenset()
    dot_commands: DotCommandStats = field(default_factory=DotCommandStats)
    _stats: dict[Category, ByteStats] = field(init=False)

    def __post_init__(self) -> None:
        self._stats = {
            category: ByteStats(category)
            for category in CATEGORY_ORDER
            if category not in self.excluded
        }

    def is_active(self, category: Category) -> bool:
        return category in self._stats

    def record(self, category: Category, text: str) -> None:
        """Tally the control characters left in ``text`` after ``category`` ran."""

        stats = self._stats.get(category)
        if stats is not None:
            stats.scan(text)

    def stats_for(self, category: Category) -> ByteStats | None:
        return self._stats.get(category)

    def finalize(
        self,
        *,
        bytes_in: int = 0,
        bytes_out: int = 0,
        chars_out: int = 0,
        truncated: bool = False,
        open_wrappers: Iterable[str] = (),
    ) -> ConversionReport:
        entries: list[CategoryReport] = []
        for category in CATEGORY_ORDER:
            stats = self._stats.get(category)
            if stats is None:
                entries.append(CategoryReport(category, CategoryStatus.SKIPPED))
            elif not stats:
                entries.append(CategoryReport(category, CategoryStatus.NONE))
            else:
                entries.append(
                    CategoryReport(category, CategoryStatus.COUNTED, tuple(stats.items()))
                )
        return ConversionReport(
            dot_commands_replaced=self.dot_commands.replaced,
            dot_commands_removed=self.dot_commands.removed,
            dot_commands_skipped=Category.DOT_CMDS in self.excluded,
            categories=tuple(entries),
            bytes_in=bytes_in,
            bytes_out=bytes_out,
            chars_out=chars_out,
            truncated=truncated,
            open_wrappers=tuple(open_wrappers),
        )


__all__ = [
    "ByteStats",
    "CategoryReport",
    "CategoryStatus",
    "ConversionReport",
    "DotCommandStats",
    "StatisticsAggregator",
]
