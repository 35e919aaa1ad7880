"""The interactive loop: refresh, render, read one key, dispatch."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional, Protocol

from igs.tui.entry_list import EntryList
from igs.tui.keymap import Command, Keymap
from igs.tui.surface import TerminalSurface
from igs.tui.terminal import hidden_cursor

logger = logging.getLogger(__name__)


class LoopState(str, Enum):
    RUNNING = "running"
    DONE = "done"


class KeySource(Protocol):
    def read_key(self) -> str: ...


@dataclass
class LoopSession:
    """Everything one run of the loop owns."""

    entries: EntryList
    surface: TerminalSurface
    keys: KeySource
    keymap: Keymap = field(default_factory=Keymap)
    state: LoopState = LoopState.RUNNING


def _open(session: LoopSession) -> None:
    session.entries.open()
    session.state = LoopState.DONE


def _quit(session: LoopSession) -> None:
    session.state = LoopState.DONE


HANDLERS: Dict[Command, Callable[[LoopSession], object]] = {
    Command.TOP: lambda s: s.entries.top(),
    Command.BOTTOM: lambda s: s.entries.bottom(),
    Command.MIDDLE: lambda s: s.entries.middle(),
    Command.DOWN: lambda s: s.entries.down(),
    Command.UP: lambda s: s.entries.up(),
    Command.OPEN: _open,
    Command.DIFF: lambda s: s.entries.toggle_diff(),
    Command.TOGGLE: lambda s: s.entries.toggle(),
    Command.QUIT: _quit,
}


def dispatch(session: LoopSession, key: str) -> Optional[Command]:
    """Run the command bound to *key*. Unbound keys are ignored."""
    if not key:
        # End of input behaves like quitting.
        session.state = LoopState.DONE
        return Command.QUIT
    command = session.keymap.lookup(key)
    if command is None:
        logger.debug("ignoring unbound key %r", key)
        return None
    logger.debug("key %r -> %s", key, command.value)
    HANDLERS[command](session)
    return command


def step(session: LoopSession) -> LoopState:
    """One refresh/render/read/dispatch cycle."""
    entries = session.entries.refresh()
    session.surface.render(entries, entries.current_diff)
    if entries.count == 0:
        session.state = LoopState.DONE
        return session.state
    try:
        key = session.keys.read_key()
    except KeyboardInterrupt:
        logger.debug("interrupted while waiting for a key")
        session.state = LoopState.DONE
        return session.state
    dispatch(session, key)
    return session.state


def run(session: LoopSession) -> LoopState:
    """Drive *session* until it is done.

    The cursor is hidden for the whole run and shown again however the loop
    ends. An interrupt counts as quitting unless it lands inside git add or
    git reset, where it surfaces as a StageError; fatal errors propagate
    after the surface has moved below its frame.
    """
    with hidden_cursor(session.surface.console):
        try:
            while session.state is LoopState.RUNNING:
                step(session)
        except KeyboardInterrupt:
            session.state = LoopState.DONE
        finally:
            session.surface.to_below_last_row()
    return session.state
