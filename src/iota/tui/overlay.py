"""Overlay - single-row modal text input.

An overlay collects a short piece of text from the user (a command, a
file name to save to, a file to open). All purposes edit text the same
way; the purpose tag only tells the host what to do with the result.

The host holds ``Overlay | None``. ``None`` is the inactive state: it draws
nothing, has no cursor and ignores keys. The module-level helpers accept
either so the host does not have to branch.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Union

from iota.tui.keys import Key, KeyKind
from iota.tui.screen_buffer import ScreenBuffer
from iota.tui.utils import char_width

logger = logging.getLogger(__name__)


class OverlayType(enum.Enum):
    PROMPT = "prompt"
    SAVE_PROMPT = "savePrompt"
    SELECT_FILE = "selectFile"


DEFAULT_PREFIXES: dict[OverlayType, str] = {
    OverlayType.PROMPT: "> ",
    OverlayType.SAVE_PROMPT: "Save as: ",
    OverlayType.SELECT_FILE: "Open: ",
}


@dataclass(frozen=True)
class Ok:
    """Input is still being edited."""


@dataclass(frozen=True)
class Finished:
    """Input is over. ``value`` is ``None`` when it was cancelled."""

    value: str | None


OverlayEvent = Union[Ok, Finished]

OK = Ok()


class Overlay:
    """Text input pinned to one row of the screen."""

    def __init__(self, kind: OverlayType, prefix: str | None = None) -> None:
        self.kind = kind
        self.prefix = DEFAULT_PREFIXES[kind] if prefix is None else prefix
        self._chars: list[str] = []
        # Display columns taken by the value, kept in step with _chars
        self._cursor_x: int = 0

    @property
    def value(self) -> str:
        return "".join(self._chars)

    @property
    def cursor_x(self) -> int:
        return self._cursor_x

    def draw(self, buffer: ScreenBuffer, row: int) -> int:
        """Write the prefix and the value into *row* of *buffer*.

        Columns are character indices, not display widths, so a value
        containing wide characters will not line up with the cursor.
        Returns the column just past the last character written.
        """
        offset = len(self.prefix)

        for index, ch in enumerate(self.prefix):
            buffer.update_cell_content(index, row, ch)

        for index, ch in enumerate(self._chars):
            buffer.update_cell_content(index + offset, row, ch)

        return offset + len(self._chars)

    def get_cursor_pos(self, row: int) -> tuple[int, int]:
        """Cursor position as ``(column, row)``, relative to the value."""
        return (self._cursor_x, row)

    def handle_key_event(self, key: Key) -> OverlayEvent:
        """Apply one key to the value.

        The cursor advances by the width of each code point, so an emoji
        ZWJ or skin-tone sequence moves it further than the cluster is
        displayed. Character keys whose payload is not a single character
        are ignored.
        """
        if key.kind is KeyKind.ESCAPE:
            self._chars.clear()
            self._cursor_x = 0
            return Finished(None)

        if key.kind is KeyKind.ENTER:
            return Finished(self.value)

        if key.kind is KeyKind.BACKSPACE:
            self._pop_char()
        elif key.kind is KeyKind.CHAR and len(key.char) == 1:
            self._push_char(key.char)
        elif key.kind is KeyKind.CHAR:
            logger.debug("Ignoring character key with payload %r", key.char)

        return OK

    def _push_char(self, ch: str) -> None:
        width = char_width(ch)
        self._chars.append(ch)
        if width is None:
            logger.debug("No display width for %r; cursor not moved", ch)
            return
        self._cursor_x += width

    def _pop_char(self) -> None:
        if not self._chars:
            return
        width = char_width(self._chars.pop())
        if width:
            self._cursor_x = max(self._cursor_x - width, 0)


# ---------------------------------------------------------------------------
# Helpers over the optional overlay
# ---------------------------------------------------------------------------


def draw_overlay(overlay: Overlay | None, buffer: ScreenBuffer, row: int) -> int:
    """Draw *overlay* if there is one. Returns the drawn extent (0 if none)."""
    if overlay is None:
        return 0
    return overlay.draw(buffer, row)


def overlay_cursor_pos(overlay: Overlay | None, row: int) -> tuple[int, int] | None:
    if overlay is None:
        return None
    return overlay.get_cursor_pos(row)


def handle_overlay_key(overlay: Overlay | None, key: Key) -> OverlayEvent:
    if overlay is None:
        return OK
    return overlay.handle_key_event(key)
