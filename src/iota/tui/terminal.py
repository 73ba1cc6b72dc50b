"""Terminal abstraction for raw-mode stdin/stdout interaction.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal``
implementation that manages raw mode, the alternate screen and cursor
visibility via ANSI escape sequences, and reads one key at a time.
"""

from __future__ import annotations

import collections
import logging
import os
import sys
import termios
import tty
from typing import Protocol

from iota.tui.keys import split_keys

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_ALT_SCREEN_ENABLE = "\x1b[?1049h"
_ALT_SCREEN_DISABLE = "\x1b[?1049l"
_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_SCREEN = "\x1b[2J\x1b[H"
_RESET_ATTRS = "\x1b[0m"
_CURSOR_POS_FMT = "\x1b[{};{}H"


def cursor_to(x: int, y: int) -> str:
    """Escape sequence moving the cursor to zero-based column *x*, row *y*."""
    return _CURSOR_POS_FMT.format(y + 1, x + 1)


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations."""

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def write(self, data: str) -> None: ...

    def flush(self) -> None: ...

    def set_cursor(self, x: int, y: int) -> None: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...

    def read_key(self) -> str: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal implementation backed by ``sys.stdin``/``sys.stdout``.

    Output is buffered until :meth:`flush` so a frame goes out in one write.
    """

    def __init__(self) -> None:
        self._original_termios: list | None = None
        self._out: list[str] = []
        self._pending: collections.deque[str] = collections.deque()

    # -- properties ---------------------------------------------------------

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).columns
        except (ValueError, OSError):
            return 80

    @property
    def rows(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).lines
        except (ValueError, OSError):
            return 24

    # -- start / stop -------------------------------------------------------

    def start(self) -> None:
        """Enable raw mode and switch to the alternate screen."""
        fd = sys.stdin.fileno()
        self._original_termios = termios.tcgetattr(fd)
        tty.setraw(fd)
        self._raw_write(_ALT_SCREEN_ENABLE + _CLEAR_SCREEN)
        logger.debug("Terminal started (%dx%d)", self.columns, self.rows)

    def stop(self) -> None:
        """Leave the alternate screen and restore terminal attributes."""
        self._out.clear()
        self._raw_write(_RESET_ATTRS + _SHOW_CURSOR + _ALT_SCREEN_DISABLE)

        fd = sys.stdin.fileno()
        if self._original_termios is not None:
            termios.tcsetattr(fd, termios.TCSADRAIN, self._original_termios)
            self._original_termios = None
        logger.debug("Terminal stopped")

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        self._out.append(data)

    def flush(self) -> None:
        if not self._out:
            return
        data = "".join(self._out)
        self._out.clear()
        self._raw_write(data)

    def set_cursor(self, x: int, y: int) -> None:
        self.write(_SHOW_CURSOR + cursor_to(x, y))

    def hide_cursor(self) -> None:
        self.write(_HIDE_CURSOR)

    def show_cursor(self) -> None:
        self.write(_SHOW_CURSOR)

    # -- input --------------------------------------------------------------

    def read_key(self) -> str:
        """Block until a key is available and return its raw chunk.

        A single read may carry several keys (typing fast, pasting); the
        extra keys are queued and returned by later calls.
        """
        while not self._pending:
            raw = os.read(sys.stdin.fileno(), 4096)
            if not raw:
                return ""
            self._pending.extend(split_keys(raw.decode("utf-8", errors="replace")))
        return self._pending.popleft()

    # -- private: raw write ------------------------------------------------

    def _raw_write(self, data: str) -> None:
        """Write directly to stdout, bypassing buffering."""
        try:
            sys.stdout.write(data)
            sys.stdout.flush()
        except OSError:
            logger.exception("Failed writing to terminal")
