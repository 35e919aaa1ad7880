"""Git subprocess wrapper: status, add, reset, diff, open."""

from __future__ import annotations

import logging
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Optional, Sequence

from igs.config.schema import IgsConfig

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error."""


def _run_git(
    args: Sequence[str],
    cwd: Path,
    *,
    executable: str = "git",
    timeout: int = 30,
    check: bool = True,
) -> str:
    """Run a git command and return stdout.

    With *check* set, any non-zero exit raises GitError; otherwise stdout is
    returned regardless of the exit status.
    """
    cmd = [executable, *args]
    logger.debug("running %s in %s", cmd, cwd)
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise GitError(f"{executable} is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}")

    if result.returncode != 0 and check:
        stderr = result.stderr.strip() or f"exit status {result.returncode}"
        raise GitError(f"git {' '.join(args)}: {stderr}")
    return result.stdout


def get_repo_root(cwd: Optional[Path] = None, executable: str = "git") -> Path:
    """Return the root of the current git repository."""
    cwd = cwd or Path.cwd()
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd, executable=executable)
    return Path(out.strip())


def default_open_command() -> list[str]:
    """Platform file opener used when no command is configured."""
    if sys.platform == "darwin":
        return ["open"]
    if sys.platform.startswith("win"):
        return ["cmd", "/c", "start", ""]
    return ["xdg-open"]


class Git:
    """The git operations the status list needs, bound to one working directory.

    Paths handed to :meth:`add`, :meth:`reset`, :meth:`diff` and :meth:`open`
    are relative to *cwd*; status paths are relative to the repository root,
    so callers prefix them with :meth:`root_offset`.
    """

    def __init__(self, cwd: Optional[Path] = None, config: Optional[IgsConfig] = None) -> None:
        self.cwd = cwd or Path.cwd()
        self.config = config or IgsConfig()
        self._root_offset: Optional[str] = None

    def _run(self, args: Sequence[str], *, check: bool = True) -> str:
        return _run_git(
            args,
            cwd=self.cwd,
            executable=self.config.git.executable,
            timeout=self.config.git.timeout,
            check=check,
        )

    def status(self) -> str:
        """Porcelain v1 status text."""
        return self._run(
            ["status", "--porcelain", f"--untracked-files={self.config.git.untracked}"]
        )

    def root_offset(self) -> str:
        """Prefix leading from *cwd* to the repository root, e.g. ``../../``."""
        if self._root_offset is None:
            self._root_offset = self._run(["rev-parse", "--show-cdup"]).strip()
        return self._root_offset

    def add(self, paths: Sequence[str]) -> None:
        self._run(["add", "--", *paths])

    def reset(self, paths: Sequence[str]) -> None:
        self._run(["reset", "--quiet", "--", *paths])

    def diff(self, paths: Sequence[str], *, staged: bool = False) -> str:
        """Diff of one entry; failures come back as whatever git printed."""
        args = ["diff"]
        if staged:
            args.append("--cached")
        args.append("--color=always" if self.config.diff.color else "--no-color")
        args.extend(["--", *paths])
        return self._run(args, check=False)

    def open(self, path: str) -> bool:
        """Open *path* with the configured opener. Returns True on success."""
        command = self.config.open.command
        cmd = shlex.split(command) if command else default_open_command()
        try:
            result = subprocess.run(
                [*cmd, path],
                cwd=self.cwd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            logger.warning("could not open %s with %s: %s", path, cmd, exc)
            return False
        if result.returncode != 0:
            logger.warning("%s %s exited with %d", cmd, path, result.returncode)
            return False
        return True
