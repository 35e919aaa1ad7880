"""Shared test fixtures: fake git collaborator, consoles, temp git repos."""

from __future__ import annotations

import io
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

import pytest
from rich.console import Console

from igs.git.adapter import GitError


class FakeGit:
    """Stands in for :class:`igs.git.adapter.Git` and records every call."""

    def __init__(self, status_text: str = "", offset: str = "") -> None:
        self.status_text = status_text
        self.offset = offset
        self.diff_text = "diff --git a/f b/f\n+added\n"
        self.open_result = True
        self.fail_paths: set[str] = set()
        self.interrupt_paths: set[str] = set()
        self.calls: List[tuple] = []

    def status(self) -> str:
        self.calls.append(("status",))
        return self.status_text

    def root_offset(self) -> str:
        return self.offset

    def _maybe_fail(self, op: str, paths: Sequence[str]) -> None:
        for p in paths:
            if p in self.interrupt_paths:
                raise KeyboardInterrupt
            if p in self.fail_paths:
                raise GitError(f"git {op}: pathspec '{p}' did not match any files")

    def add(self, paths: Sequence[str]) -> None:
        self.calls.append(("add", list(paths)))
        self._maybe_fail("add", paths)

    def reset(self, paths: Sequence[str]) -> None:
        self.calls.append(("reset", list(paths)))
        self._maybe_fail("reset", paths)

    def diff(self, paths: Sequence[str], *, staged: bool = False) -> str:
        self.calls.append(("diff", list(paths), staged))
        return self.diff_text

    def open(self, path: str) -> bool:
        self.calls.append(("open", path))
        return self.open_result

    def mutations(self) -> List[tuple]:
        return [c for c in self.calls if c[0] in ("add", "reset")]


class ScriptedKeys:
    """Key source that replays a fixed list of key tokens."""

    def __init__(self, keys: Sequence[str], on_read=None) -> None:
        self.keys = list(keys)
        self.on_read = on_read
        self.reads = 0

    def read_key(self) -> str:
        self.reads += 1
        if self.on_read is not None:
            self.on_read(self.reads)
        if not self.keys:
            return ""
        key = self.keys.pop(0)
        if isinstance(key, BaseException):
            raise key
        return key


def make_console(buffer: Optional[io.StringIO] = None) -> Console:
    """A terminal console without colors, writing into *buffer*."""
    return Console(
        file=buffer if buffer is not None else io.StringIO(),
        force_terminal=True,
        color_system=None,
        highlight=False,
        width=120,
    )


@pytest.fixture(autouse=True)
def _terminal_env(monkeypatch):
    # rich skips cursor control codes on TERM=dumb.
    monkeypatch.setenv("TERM", "xterm-256color")


@pytest.fixture
def fake_git() -> FakeGit:
    return FakeGit()


@pytest.fixture
def console_output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(console_output: io.StringIO) -> Console:
    return make_console(console_output)


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository for integration tests."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    subprocess.run(
        ["git", "config", "user.email", "test@test.com"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    subprocess.run(
        ["git", "config", "user.name", "Test"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    # Initial commit
    readme = tmp_path / "README.md"
    readme.write_text("# Test\n")
    subprocess.run(["git", "add", "."], cwd=tmp_path, capture_output=True, check=True)
    subprocess.run(
        ["git", "commit", "-m", "init"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    return tmp_path
