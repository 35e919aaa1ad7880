"""Load and merge configuration from .igs.toml, CLI flags, and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from igs.config.schema import (
    UNTRACKED_MODES,
    ColorsConfig,
    DiffConfig,
    GitConfig,
    IgsConfig,
    KeysConfig,
    OpenConfig,
)

CONFIG_FILENAME = ".igs.toml"


class ConfigError(Exception):
    """Raised when config or key bindings are malformed or unreadable."""


def find_config_file(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = repo_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _merge_env_overrides(cfg: IgsConfig) -> None:
    """Apply IGS_* environment variable overrides."""
    if val := os.environ.get("IGS_GIT"):
        cfg.git.executable = val
    if val := os.environ.get("IGS_OPEN_COMMAND"):
        cfg.open.command = val
    if val := os.environ.get("IGS_UNTRACKED"):
        if val in UNTRACKED_MODES:
            cfg.git.untracked = val  # type: ignore[assignment]
    if val := os.environ.get("IGS_DIFF_COLOR"):
        if val in ("0", "1"):
            cfg.diff.color = val == "1"


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
) -> IgsConfig:
    """Load, validate, and return an IgsConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = IgsConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = IgsConfig(
            version=raw.get("version", "1.0"),
            git=_build_section(raw, GitConfig, "git"),
            diff=_build_section(raw, DiffConfig, "diff"),
            open=_build_section(raw, OpenConfig, "open"),
            colors=_build_section(raw, ColorsConfig, "colors"),
            keys=_build_section(raw, KeysConfig, "keys"),
        )
        if cfg.git.untracked not in UNTRACKED_MODES:
            raise ConfigError(
                f"[git] untracked must be one of {', '.join(UNTRACKED_MODES)}, "
                f"got {cfg.git.untracked!r}"
            )

    _merge_env_overrides(cfg)
    return cfg
