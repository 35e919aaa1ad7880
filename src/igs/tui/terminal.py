"""Terminal input and cursor visibility.

Keys are read one at a time with the terminal in raw mode for the duration
of the read only, so everything printed between reads goes through the
normal (cooked) output path and ``\\n`` keeps returning to column one.
"""

from __future__ import annotations

import contextlib
import os
import select
import sys
import termios
import tty
from typing import Iterator, List, Optional

from rich.console import Console

ESC_SEQUENCE_TIMEOUT_MS = 25
CSI_MAX_LENGTH = 32

ESC = "ESC"
ENTER = "ENTER"
UP = "UP"
DOWN = "DOWN"
RIGHT = "RIGHT"
LEFT = "LEFT"
CTRL_C = "CTRL_C"
UNKNOWN = "UNKNOWN"

_ARROWS = {b"A": UP, b"B": DOWN, b"C": RIGHT, b"D": LEFT}


class KeyReader:
    """Blocking single-key reader over a tty file descriptor."""

    def __init__(self, fd: Optional[int] = None) -> None:
        self.fd = sys.stdin.fileno() if fd is None else fd
        self._pending: List[bytes] = []

    def _read_ready_byte(self, timeout_ms: int) -> Optional[bytes]:
        ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return None
        ch = os.read(self.fd, 1)
        if not ch:
            return None
        return ch

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[None]:
        saved = termios.tcgetattr(self.fd)
        try:
            tty.setraw(self.fd, termios.TCSANOW)
            yield
        finally:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, saved)

    def read_key(self) -> str:
        """Block for one key and return its token.

        Printable keys come back as themselves; ``ENTER``, ``ESC``, ``UP``,
        ``DOWN``, ``LEFT``, ``RIGHT`` and ``CTRL_C`` name the rest. Any other
        escape sequence (Home, Delete, F-keys, ...) is read to its end and
        reported as ``UNKNOWN``. An empty string means end of input.
        """
        if self._pending:
            return decode_key(self._pending.pop(0))
        with self.raw_mode():
            ch = os.read(self.fd, 1)
            if ch != b"\x1b":
                return decode_key(ch)
            seq = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if seq is None:
                return ESC
            if seq == b"O":
                final = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
                if final is None:
                    return UNKNOWN
                return _ARROWS.get(final, UNKNOWN)
            if seq != b"[":
                self._pending.append(seq)
                return ESC
            return self._read_csi()

    def _read_csi(self) -> str:
        # ESC [ <parameter and intermediate bytes> <final byte 0x40-0x7E>
        for _ in range(CSI_MAX_LENGTH):
            part = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if part is None:
                return UNKNOWN
            if 0x40 <= part[0] <= 0x7E:
                return _ARROWS.get(part, UNKNOWN)
        return UNKNOWN


def decode_key(ch: bytes) -> str:
    """Token for a single byte read outside an escape sequence."""
    if not ch:
        return ""
    if ch in (b"\r", b"\n"):
        return ENTER
    if ch == b"\x03":
        return CTRL_C
    if ch == b"\x1b":
        return ESC
    return ch.decode("utf-8", errors="replace")


@contextlib.contextmanager
def hidden_cursor(console: Console) -> Iterator[Console]:
    """Hide the cursor for the body of the block; always show it again."""
    console.show_cursor(False)
    try:
        yield console
    finally:
        console.show_cursor(True)
        console.file.flush()
