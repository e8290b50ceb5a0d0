"""Inline hints completing the current line from history."""

from __future__ import annotations

import abc
from collections.abc import Callable

from reedkit.history import History, SearchQuery

_RESET = "\x1b[0m"


def _foreground(code: int) -> Callable[[str], str]:
    def paint(text: str) -> str:
        return f"\x1b[{code}m{text}{_RESET}"

    return paint


class Hinter(abc.ABC):
    """Produces the hint shown after the current line."""

    @abc.abstractmethod
    def handle(self, line: str, pos: int, history: History, use_ansi_coloring: bool) -> str:
        """Compute the hint for ``line`` and return it formatted for display."""

    @abc.abstractmethod
    def complete_hint(self) -> str:
        """The current hint, unformatted, for completing it in full."""

    @abc.abstractmethod
    def next_hint_token(self) -> str:
        """The first token of the current hint, for completing word by word."""


class DefaultHinter(Hinter):
    """Suggests the rest of the most recent history entry starting with the line.

    The style is a function that decorates the hint text; by default it
    colours it light grey.
    """

    def __init__(self) -> None:
        self.style: Callable[[str], str] = _foreground(37)
        self.current_hint = ""
        self.min_chars = 1

    def with_style(self, style: Callable[[str], str]) -> DefaultHinter:
        """Set the function that styles the displayed hint."""
        self.style = style
        return self

    def with_min_chars(self, min_chars: int) -> DefaultHinter:
        """Set how many characters the line needs before hints appear."""
        self.min_chars = min_chars
        return self

    def handle(self, line: str, pos: int, history: History, use_ansi_coloring: bool) -> str:
        self.current_hint = ""
        if len(line) >= self.min_chars:
            found = history.search(SearchQuery.last_with_prefix(line))
            if found:
                self.current_hint = found[0].command_line[len(line):]
        if use_ansi_coloring and self.current_hint:
            return self.style(self.current_hint)
        return self.current_hint

    def complete_hint(self) -> str:
        return self.current_hint

    def next_hint_token(self) -> str:
        hint = self.current_hint
        stripped = hint.lstrip()
        leading = hint[: len(hint) - len(stripped)]
        word = []
        for char in stripped:
            if char.isspace():
                break
            word.append(char)
        return leading + "".join(word)