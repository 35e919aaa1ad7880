"""Key bindings: commands, defaults, and YAML overrides."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Dict, Mapping, Optional

import yaml

from igs.config.loader import ConfigError
from igs.tui import terminal


class Command(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"
    MIDDLE = "middle"
    DOWN = "down"
    UP = "up"
    OPEN = "open"
    DIFF = "diff"
    TOGGLE = "toggle"
    QUIT = "quit"


DEFAULT_BINDINGS: Dict[str, Command] = {
    "g": Command.TOP,
    "H": Command.TOP,
    "G": Command.BOTTOM,
    "L": Command.BOTTOM,
    "M": Command.MIDDLE,
    "j": Command.DOWN,
    terminal.DOWN: Command.DOWN,
    "k": Command.UP,
    terminal.UP: Command.UP,
    "o": Command.OPEN,
    "d": Command.DIFF,
    " ": Command.TOGGLE,
    terminal.ENTER: Command.TOGGLE,
    "q": Command.QUIT,
    terminal.ESC: Command.QUIT,
    terminal.CTRL_C: Command.QUIT,
}

# Names accepted in a bindings file besides single characters.
_KEY_NAMES = {
    "SPACE": " ",
    "ENTER": terminal.ENTER,
    "RETURN": terminal.ENTER,
    "ESC": terminal.ESC,
    "ESCAPE": terminal.ESC,
    "UP": terminal.UP,
    "DOWN": terminal.DOWN,
    "LEFT": terminal.LEFT,
    "RIGHT": terminal.RIGHT,
    "CTRL_C": terminal.CTRL_C,
}


class Keymap:
    """Maps key tokens from :class:`~igs.tui.terminal.KeyReader` to commands."""

    def __init__(self, bindings: Optional[Mapping[str, Command]] = None) -> None:
        self._bindings: Dict[str, Command] = dict(
            DEFAULT_BINDINGS if bindings is None else bindings
        )

    def bind(self, key: str, command: Command) -> None:
        self._bindings[key] = command

    def lookup(self, key: str) -> Optional[Command]:
        return self._bindings.get(key)

    def keys_for(self, command: Command) -> list[str]:
        return [k for k, c in self._bindings.items() if c is command]

    def load_yaml(self, path: Path) -> int:
        """Add bindings from a YAML mapping of command -> key(s). Returns count."""
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Failed to read key bindings {path}: {exc}") from exc
        if data is None:
            return 0
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: expected a mapping of command to keys")
        count = 0
        for name, keys in data.items():
            try:
                command = Command(str(name).lower())
            except ValueError:
                raise ConfigError(f"{path}: unknown command {name!r}") from None
            if isinstance(keys, (str, int)):
                keys = [keys]
            if not isinstance(keys, list):
                raise ConfigError(f"{path}: keys for {name!r} must be a string or list")
            for key in keys:
                self.bind(parse_key_name(str(key)), command)
                count += 1
        return count


def parse_key_name(name: str) -> str:
    """Normalise a key as written in a bindings file to a reader token."""
    if len(name) == 1:
        return name
    token = _KEY_NAMES.get(name.upper())
    if token is None:
        raise ConfigError(f"unknown key name {name!r}")
    return token


def build_keymap(repo_root: Path, bindings_file: str) -> Keymap:
    """Default bindings plus the optional YAML file under *repo_root*."""
    keymap = Keymap()
    if bindings_file:
        path = repo_root / bindings_file
        if path.is_file():
            keymap.load_yaml(path)
    return keymap
