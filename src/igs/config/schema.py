"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

Untracked = Literal["no", "normal", "all"]

UNTRACKED_MODES: tuple[str, ...] = ("no", "normal", "all")


@dataclass
class GitConfig:
    executable: str = "git"
    untracked: Untracked = "normal"  # passed to --untracked-files
    timeout: int = 30  # seconds per invocation


@dataclass
class DiffConfig:
    color: bool = True


@dataclass
class OpenConfig:
    command: str = ""  # empty = platform default opener


@dataclass
class ColorsConfig:
    staged: str = "green"
    unstaged: str = "red"
    cursor: str = "bold"


@dataclass
class KeysConfig:
    file: str = ".igs-keys.yml"  # relative to the repo root


@dataclass
class IgsConfig:
    version: str = "1.0"
    git: GitConfig = field(default_factory=GitConfig)
    diff: DiffConfig = field(default_factory=DiffConfig)
    open: OpenConfig = field(default_factory=OpenConfig)
    colors: ColorsConfig = field(default_factory=ColorsConfig)
    keys: KeysConfig = field(default_factory=KeysConfig)
