"""Recognise WordStar dot command lines and rewrite or remove them."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Final, Iterable, Mapping

from .control_codes import is_control

LOGGER = logging.getLogger(__name__)

DEFAULT_PAGE_BREAK: Final = "---"


class DotAction(Enum):
    REPLACE = "replace"
    REMOVE = "remove"


@dataclass(frozen=True)
class DotCommand:
    """A command token and how lines carrying it are rewritten."""

    token: str
    action: DotAction
    header_prefix: str | None = None
    page_break: bool = False


@dataclass(frozen=True)
class DotResult:
    """Outcome for a recognised dot command line."""

    command: DotCommand
    text: str | None

    @property
    def removed(self) -> bool:
        return self.text is None


def _headers(tokens: Iterable[str], prefix: str) -> list[DotCommand]:
    return [DotCommand(token, DotAction.REPLACE, header_prefix=prefix) for token in tokens]


def _removals(tokens: Iterable[str]) -> list[DotCommand]:
    return [DotCommand(token, DotAction.REMOVE) for token in tokens]


_LAYOUT_COMMANDS: Final[tuple[str, ...]] = (
    "av", "bp", "cp", "cs", "cw", "df", "dm", "e1", "e2", "fi", "fm", "hm",
    "ig", "lh", "lm", "lq", "ls", "ma", "mb", "mt", "oc", "oj", "op", "pc",
    "pf", "pg", "pl", "pm", "pn", "po", "pr", "ps", "rm", "rr", "rv", "sr",
    "sv", "tb", "uj", "ul", "xe", "xq", "xr", "xw",
)

DEFAULT_COMMANDS: Final[Mapping[str, DotCommand]] = {
    command.token: command
    for command in [
        *_headers(("he", "fo"), "## "),
        *_headers(
            ("h1", "h2", "h3", "h4", "h5", "f1", "f2", "f3", "f4", "f5"), "### "
        ),
        DotCommand("pa", DotAction.REPLACE, page_break=True),
        DotCommand("xl", DotAction.REPLACE, page_break=True),
        *_removals(_LAYOUT_COMMANDS),
    ]
}


def parse_dot_command(line: str) -> tuple[str, str | None] | None:
    """Split ``line`` into ``(token, argument)`` when it starts a dot command.

    A command is a dot, an ASCII letter and an ASCII letter or digit.  The
    argument is whatever follows the token, or ``None`` at end of line.
    """

    if len(line) < 3 or line[0] != ".":
        return None
    first, second = line[1], line[2]
    if not (first.isascii() and first.isalpha()):
        return None
    if not (second.isascii() and second.isalnum()):
        return None
    argument = line[3:]
    return line[1:3], (argument if argument else None)


def strip_control_chars(text: str) -> str:
    return "".join(char for char in text if not is_control(char))


def make_header(prefix: str, argument: str | None) -> str | None:
    """Return a Markdown style header for ``argument`` or ``None`` if it is blank.

    The separator after ``prefix`` is only kept when the argument itself
    starts with whitespace, so the header never outgrows the command line.
    """

    if argument is None:
        return None
    text = strip_control_chars(argument).strip()
    if not text:
        return None
    if not argument[0].isspace():
        prefix = prefix.rstrip()
    return f"{prefix}{text}"


class DotCommandFilter:
    """Table driven rewriter for dot command lines."""

    def __init__(
        self,
        *,
        page_break: str = DEFAULT_PAGE_BREAK,
        extra_removals: Iterable[str] = (),
        commands: Mapping[str, DotCommand] = DEFAULT_COMMANDS,
    ) -> None:
        table = dict(commands)
        for token in extra_removals:
            key = token.lower()
            if parse_dot_command(f".{key}") is None or len(key) != 2:
                raise ValueError(f"invalid dot command token: {token!r}")
            table[key] = DotCommand(key, DotAction.REMOVE)
        self.page_break = page_break
        self.commands: Mapping[str, DotCommand] = table

    def lookup(self, token: str) -> DotCommand | None:
        return self.commands.get(token.lower())

    def process(self, line: str) -> DotResult | None:
        """Return the rewrite for ``line`` or ``None`` to pass it through."""

        parsed = parse_dot_command(line)
        if parsed is None:
            return None
        token, argument = parsed
        command = self.lookup(token)
        if command is None:
            return None

        text: str | None = None
        if command.action is DotAction.REPLACE:
            if command.page_break:
                text = self.page_break
            elif command.header_prefix is not None:
                text = make_header(command.header_prefix, argument)
        LOGGER.debug(
            "dot command .%s %s", token, "removed" if text is None else "replaced"
        )
        return DotResult(command=command, text=text)


__all__ = [
    "DEFAULT_COMMANDS",
    "DEFAULT_PAGE_BREAK",
    "DotAction",
    "DotCommand",
    "DotCommandFilter",
    "DotResult",
    "make_header",
    "parse_dot_command",
    "strip_control_chars",
]
