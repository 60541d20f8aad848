"""Run the category filters over each line in their fixed order."""
from __future__ import annotations

from dataclasses import dataclass, field

from ..control_codes import Category
from ..dot_commands import DotCommandFilter, DotResult
from ..highbit import NormalizedLine
from ..stats import StatisticsAggregator
from . import align, controls, overline, specials
from .controls import ControlMode
from .wrappers import EmphasisMode, Wrappers


@dataclass
class FilterBank:
    """Per-run filter state: the excluded set, wrapper toggles and statistics."""

    excludes: frozenset[Category] = frozenset()
    dot_filter: DotCommandFilter = field(default_factory=DotCommandFilter)
    control_mode: ControlMode = ControlMode.PLACEHOLDER
    emphasis: EmphasisMode = EmphasisMode.STRIP
    stats: StatisticsAggregator = field(init=False)
    wrappers: Wrappers = field(init=False)
    _dot_head: DotResult | None = field(init=False, default=None, repr=False)

    def __post_init__(self) -> None:
        self.excludes = frozenset(self.excludes)
        self.stats = StatisticsAggregator(excluded=self.excludes)
        self.wrappers = Wrappers(mode=self.emphasis)

    def active(self, category: Category) -> bool:
        return category not in self.excludes

    def apply(self, line: NormalizedLine) -> str | None:
        """Return the converted line with its terminator, or ``None`` if removed."""

        text = line.text
        self.stats.record(Category.TO_ASCII, text)

        if self.active(Category.DOT_CMDS):
            if line.continuation:
                if self._dot_head is not None:
                    return self._dot_tail(self._dot_head, line)
            else:
                result = self._dot_head = self.dot_filter.process(text)
                if result is not None:
                    if result.removed:
                        self.stats.dot_commands.removed += 1
                        return None
                    self.stats.dot_commands.replaced += 1
                    text = result.text or ""
            self.stats.record(Category.DOT_CMDS, text)

        terminator = line.terminator
        if self.active(Category.RE_ALIGN):
            text = align.realign(text)
            if line.soft_break:
                text, terminator = align.join_soft_break(text)
            self.stats.record(Category.RE_ALIGN, text)

        if self.active(Category.SPECIALS):
            text = specials.process(text)
            self.stats.record(Category.SPECIALS, text)

        if self.active(Category.OVERLINE):
            text = overline.process(text)
            self.stats.record(Category.OVERLINE, text)

        if self.active(Category.WRAPPERS):
            text = self.wrappers.process(text)
            self.stats.record(Category.WRAPPERS, text)

        if self.active(Category.CONTROLS):
            text = controls.process(text, self.control_mode)
            self.stats.record(Category.CONTROLS, text)

        return text + terminator

    @staticmethod
    def _dot_tail(head: DotResult, line: NormalizedLine) -> str | None:
        """Finish the remaining pieces of a split dot command line.

        The head piece already produced the command's whole output, so only
        the final line terminator survives, and not even that for removals.
        """

        if head.removed:
            return None
        return line.terminator or None

    def open_wrappers(self) -> list[str]:
        if not self.active(Category.WRAPPERS):
            return []
        return self.wrappers.active()


__all__ = ["FilterBank"]
