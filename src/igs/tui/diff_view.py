"""Diff text shown above the status list."""

from __future__ import annotations

from typing import List

from rich.text import Text


class DiffView:
    """Wraps the diff text of one entry."""

    def __init__(self, text: str) -> None:
        self.text = text

    @property
    def lines(self) -> List[str]:
        return self.text.rstrip("\n").split("\n") if self.text else []

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def render(self) -> List[Text]:
        """One styled line per diff line; git's ANSI colors are kept."""
        return [Text.from_ansi(line) for line in self.lines]

    def __repr__(self) -> str:
        return f"DiffView(line_count={self.line_count})"
