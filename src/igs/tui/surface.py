"""In-place frame rendering with relative cursor movement.

Each frame is drawn starting at the cursor's current row and the cursor is
moved back to that row afterwards, so the next frame overwrites the previous
one without clearing the screen. This only works while ``height`` matches the
number of rows actually printed.
"""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.control import Control

from igs.tui.diff_view import DiffView
from igs.tui.entry_list import EntryList

# Erase from the cursor to the end of the screen (ED 0).
ERASE_BELOW = "\x1b[J"


class TerminalSurface:
    """Draws an :class:`EntryList` (and optional diff) into the terminal."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console(highlight=False)
        self.height = 0

    def _erase_below(self) -> None:
        if self.console.is_terminal:
            self.console.file.write(ERASE_BELOW)

    @staticmethod
    def frame_height(entries: EntryList, diff_view: Optional[DiffView] = None) -> int:
        height = entries.count
        if diff_view is not None:
            height += diff_view.line_count + 1
        return height

    def render(self, entries: EntryList, diff_view: Optional[DiffView] = None) -> None:
        self.height = self.frame_height(entries, diff_view)
        self._erase_below()

        if diff_view is not None:
            for line in diff_view.render():
                self.console.print(line, soft_wrap=True, highlight=False)
            self.console.line()

        entries.render(self.console)

        self.console.control(
            Control.move_to_column(0),
            Control.move(y=-(self.height - 1)) if self.height > 1 else Control(),
        )
        self.console.file.flush()

    def to_below_last_row(self) -> None:
        """Leave the cursor on a fresh line under the last frame."""
        if self.height <= 0:
            return
        if self.height > 1:
            self.console.control(Control.move(y=self.height - 1))
        # A newline rather than a cursor move, so the terminal scrolls when
        # the frame ends on the bottom row.
        self.console.line()
        self.console.file.flush()
