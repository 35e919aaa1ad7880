"""Status entry model: status codes, classification, staging operations."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from rich.text import Text

from igs.errors import StageError, UnsupportedEntryError
from igs.git.adapter import Git, GitError
from igs.tui.diff_view import DiffView

logger = logging.getLogger(__name__)

RENAME_SEPARATOR = " -> "

# git C-quotes unusual paths: "a b.txt", "\303\251.txt"
_QUOTED_PATH_RE = re.compile(r'"(?:[^"\\]|\\.)*"')
_ESCAPE_RE = re.compile(r"\\([0-7]{3}|.)")
_C_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "t": "\t",
    "n": "\n",
    "v": "\v",
    "f": "\f",
    "r": "\r",
    '"': '"',
    "\\": "\\",
}


class StatusCode(str, Enum):
    """One column of ``git status --porcelain`` output."""

    UNMODIFIED = " "
    MODIFIED = "M"
    TYPE_CHANGED = "T"
    ADDED = "A"
    DELETED = "D"
    RENAMED = "R"
    COPIED = "C"
    UNMERGED = "U"
    UNTRACKED = "?"
    IGNORED = "!"
    UNKNOWN = ""

    @classmethod
    def parse(cls, char: str) -> "StatusCode":
        try:
            return cls(char)
        except ValueError:
            return cls.UNKNOWN


STAGED_CODES = frozenset(
    {
        StatusCode.MODIFIED,
        StatusCode.ADDED,
        StatusCode.DELETED,
        StatusCode.RENAMED,
        StatusCode.COPIED,
    }
)

# (index, worktree) pairs that mean "both sides changed" without a U.
_BOTH_SIDES_CONFLICTS = frozenset(
    {
        (StatusCode.ADDED, StatusCode.ADDED),
        (StatusCode.DELETED, StatusCode.DELETED),
    }
)


def is_staged(index: StatusCode) -> bool:
    return index in STAGED_CODES


def is_merge_conflict(index: StatusCode, worktree: StatusCode) -> bool:
    if StatusCode.UNMERGED in (index, worktree):
        return True
    return (index, worktree) in _BOTH_SIDES_CONFLICTS


def classify(index: StatusCode, worktree: StatusCode) -> Tuple[bool, bool]:
    """Return ``(staged, merge_conflict)`` for a pair of status codes."""
    return is_staged(index), is_merge_conflict(index, worktree)


def unquote_path(text: str) -> str:
    """Undo git's C-style quoting of one path. Bare paths pass through."""
    if len(text) < 2 or text[0] != '"' or text[-1] != '"':
        return text
    body = text[1:-1]
    raw = bytearray()
    pos = 0
    for match in _ESCAPE_RE.finditer(body):
        raw += body[pos : match.start()].encode("utf-8")
        escape = match.group(1)
        if len(escape) == 3:
            raw.append(int(escape, 8) & 0xFF)
        else:
            raw += _C_ESCAPES.get(escape, escape).encode("utf-8")
        pos = match.end()
    raw += body[pos:].encode("utf-8")
    return raw.decode("utf-8", errors="surrogateescape")


def split_path_field(text: str) -> Tuple[str, ...]:
    """Split the path part of a status line into ``(old, new)`` or ``(path,)``."""
    quoted = _QUOTED_PATH_RE.match(text)
    if quoted:
        head, rest = quoted.group(0), text[quoted.end() :]
    else:
        head, sep, tail = text.partition(RENAME_SEPARATOR)
        rest = sep + tail
    if rest.startswith(RENAME_SEPARATOR):
        return unquote_path(head), unquote_path(rest[len(RENAME_SEPARATOR) :])
    return (unquote_path(text),)


@dataclass(frozen=True)
class StatusEntry:
    """A single line of porcelain status output.

    Entries are rebuilt from fresh status text on every refresh and compared
    by their raw line, so an entry from an older refresh equals the one that
    replaced it as long as git still reports the same line.
    """

    line: str
    git: Git = field(compare=False, repr=False)

    @property
    def index_status(self) -> StatusCode:
        return StatusCode.parse(self.line[0:1])

    @property
    def worktree_status(self) -> StatusCode:
        return StatusCode.parse(self.line[1:2])

    @property
    def path(self) -> str:
        """The path as shown to the user, unquoted; ``old -> new`` for renames."""
        return RENAME_SEPARATOR.join(self.paths)

    @property
    def staged(self) -> bool:
        return is_staged(self.index_status)

    @property
    def merge_conflict(self) -> bool:
        return is_merge_conflict(self.index_status, self.worktree_status)

    @property
    def is_rename(self) -> bool:
        return len(self.paths) == 2

    @property
    def paths(self) -> Tuple[str, ...]:
        """``(old, new)`` for a rename, ``(path,)`` otherwise."""
        return split_path_field(self.line[3:])

    def _relative(self, path: str) -> str:
        return self.git.root_offset() + path

    # ---- rendering ----

    def render(self, staged_style: str = "green", unstaged_style: str = "red") -> Text:
        if self.merge_conflict:
            raise UnsupportedEntryError(self.line)
        index_style = staged_style if self.staged else unstaged_style
        return Text.assemble(
            (self.line[0:1], index_style),
            (self.line[1:2], unstaged_style),
            " ",
            self.path,
        )

    # ---- mutations (external git state only) ----

    def toggle(self) -> None:
        if self.merge_conflict:
            return
        if self.staged:
            self.unstage()
        else:
            self.stage()

    def stage(self) -> None:
        paths = [self._relative(p) for p in self.paths]
        try:
            self.git.add(paths)
        except GitError as exc:
            raise StageError("git add", " ".join(paths), str(exc)) from exc
        except KeyboardInterrupt as exc:
            raise StageError("git add", " ".join(paths), "interrupted") from exc

    def unstage(self) -> None:
        # Renames: new path, then old path, one reset each.
        done: List[str] = []
        for path in reversed(self.paths):
            relative = self._relative(path)
            try:
                self.git.reset([relative])
            except GitError as exc:
                raise StageError("git reset", relative, str(exc)) from exc
            except KeyboardInterrupt as exc:
                detail = "interrupted"
                if done:
                    detail += f" after unstaging {', '.join(done)}"
                logger.warning("git reset of %s %s", relative, detail)
                raise StageError("git reset", relative, detail) from exc
            done.append(relative)

    def open(self) -> bool:
        return self.git.open(self._relative(self.paths[-1]))

    def diff(self) -> DiffView:
        paths = [self._relative(p) for p in self.paths]
        try:
            text = self.git.diff(paths, staged=self.staged)
        except GitError as exc:
            logger.warning("diff failed for %s: %s", paths, exc)
            text = ""
        return DiffView(text)
