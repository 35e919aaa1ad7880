"""Ordered status entries with a cursor, refreshed from git on every cycle."""

from __future__ import annotations

import logging
from typing import List, Optional

from rich.console import Console
from rich.text import Text

from igs.config.schema import ColorsConfig
from igs.git.adapter import Git
from igs.git.models import StatusEntry
from igs.git.status_parser import parse_status
from igs.tui.diff_view import DiffView

logger = logging.getLogger(__name__)

CURSOR_MARK = ">"


class EntryList:
    """Owns the entries, the cursor, and which entry's diff is shown.

    The diffed entry is remembered by value: entries are rebuilt on every
    refresh, and an entry from an older refresh still equals its replacement
    when git reports the same status line.
    """

    def __init__(self, git: Git, colors: Optional[ColorsConfig] = None) -> None:
        self.git = git
        self.colors = colors or ColorsConfig()
        self.entries: List[StatusEntry] = []
        self.cursor = 0
        self.diffed: Optional[StatusEntry] = None
        self.diff_view: Optional[DiffView] = None

    def refresh(self) -> "EntryList":
        self.entries = parse_status(self.git.status(), self.git)
        if self.cursor >= self.count:
            self.bottom()
        logger.debug("refreshed: %d entries, cursor=%d", self.count, self.cursor)
        return self

    @property
    def count(self) -> int:
        return len(self.entries)

    def __len__(self) -> int:
        return self.count

    @property
    def current(self) -> Optional[StatusEntry]:
        if not self.entries:
            return None
        return self.entries[self.cursor]

    @property
    def current_diff(self) -> Optional[DiffView]:
        """The stored diff, only while it still belongs to the current entry."""
        if self.diff_view is not None and self.diffed == self.current:
            return self.diff_view
        return None

    # ---- rendering ----

    def render_lines(self) -> List[Text]:
        lines: List[Text] = []
        for idx, entry in enumerate(self.entries):
            if idx == self.cursor:
                mark = Text(CURSOR_MARK, style=self.colors.cursor)
            else:
                mark = Text(" ")
            lines.append(
                Text.assemble(
                    mark,
                    " ",
                    entry.render(self.colors.staged, self.colors.unstaged),
                )
            )
        return lines

    def render(self, console: Console) -> None:
        """Print every entry; the last line gets no trailing newline."""
        lines = self.render_lines()
        for idx, line in enumerate(lines):
            end = "" if idx == len(lines) - 1 else "\n"
            console.print(line, end=end, soft_wrap=True, highlight=False)

    # ---- actions on the current entry ----

    def toggle(self) -> None:
        if self.current is not None:
            self.current.toggle()

    def open(self) -> bool:
        if self.current is None:
            return False
        return self.current.open()

    def toggle_diff(self) -> Optional[DiffView]:
        current = self.current
        if current is None:
            return None
        if self.diff_view is not None and self.diffed == current:
            self.diffed = None
            self.diff_view = None
            return None
        self.diffed = current
        self.diff_view = current.diff()
        return self.diff_view

    # ---- navigation ----

    def down(self) -> None:
        if self.cursor < self.count - 1:
            self.cursor += 1

    def up(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def top(self) -> None:
        self.cursor = 0

    def bottom(self) -> None:
        self.cursor = max(0, self.count - 1)

    def middle(self) -> None:
        self.cursor = self.count // 2 if self.count else 0
