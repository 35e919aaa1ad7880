"""Porcelain status parser."""

from __future__ import annotations

from typing import List

from igs.git.adapter import Git
from igs.git.models import StatusEntry


def parse_status(status_text: str, git: Git) -> List[StatusEntry]:
    """One entry per non-empty line, in the order git printed them.

    Trailing carriage returns are dropped so CRLF output parses the same as LF.
    """
    entries: List[StatusEntry] = []
    for line in status_text.split("\n"):
        line = line.rstrip("\r")
        if not line:
            continue
        entries.append(StatusEntry(line, git))
    return entries
