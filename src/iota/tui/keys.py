"""Logical key events and decoding of raw terminal input into them.

The overlay only understands the five kinds in :class:`KeyKind`. Keys that
are neither printable nor one of the editing keys arrive as ``OTHER`` and
carry a key id (``"ctrl+s"``, ``"up"``) that the host can bind to actions.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------

KeyId = str


class KeyKind(enum.Enum):
    CHAR = "char"
    BACKSPACE = "backspace"
    ENTER = "enter"
    ESCAPE = "escape"
    OTHER = "other"


@dataclass(frozen=True)
class Key:
    """A decoded keystroke."""

    kind: KeyKind
    char: str = ""
    name: KeyId = ""

    @classmethod
    def from_char(cls, ch: str) -> Key:
        return cls(KeyKind.CHAR, char=ch, name=ch)

    @classmethod
    def other(cls, name: KeyId = "") -> Key:
        return cls(KeyKind.OTHER, name=name)


BACKSPACE = Key(KeyKind.BACKSPACE, name="backspace")
ENTER = Key(KeyKind.ENTER, name="enter")
ESCAPE = Key(KeyKind.ESCAPE, name="escape")

# ---------------------------------------------------------------------------
# Legacy escape sequences
# ---------------------------------------------------------------------------

LEGACY_KEY_SEQUENCES: dict[str, KeyId] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[2~": "insert",
    "\x1b[3~": "delete",
    "\x1b[4~": "end",
    "\x1b[5~": "pageUp",
    "\x1b[6~": "pageDown",
    "\x1b[Z": "shift+tab",
}


def parse_key(data: str) -> Key:  # noqa: C901
    """Decode one raw terminal chunk into a :class:`Key`.

    Anything that cannot be classified comes back as an unnamed ``OTHER``
    key, which the overlay ignores.
    """
    if not data:
        return Key.other()

    # --- Simple single-byte keys ---
    if data == "\x1b":
        return ESCAPE
    if data == "\r" or data == "\n":
        return ENTER
    if data == "\x7f" or data == "\x08":
        return BACKSPACE
    if data == "\t":
        return Key.other("tab")
    if data == "\x00":
        return Key.other("ctrl+space")

    # --- Escape sequences ---
    name = LEGACY_KEY_SEQUENCES.get(data)
    if name is not None:
        return Key.other(name)

    # --- Ctrl + letter (0x01 - 0x1a) ---
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return Key.other("ctrl+" + chr(ord(data) + ord("a") - 1))

    # --- Alt + key (ESC prefix) ---
    if len(data) == 2 and data[0] == "\x1b":
        ch = data[1]
        if ch == "\x7f" or ch == "\x08":
            return Key.other("alt+backspace")
        if ch.isprintable():
            return Key.other("alt+" + ch.lower())

    if data[0] == "\x1b":
        return Key.other()

    # --- Plain character ---
    # Combining marks and other zero-width characters are printable for
    # our purposes; only control characters are rejected.
    if len(data) == 1 and not _is_control(data):
        return Key.from_char(data)

    return Key.other()


def split_keys(data: str) -> list[str]:
    """Split a raw read into chunks that each decode to one key.

    An escape sequence is kept whole: a lone ``ESC`` followed by more
    bytes in the same read is treated as the start of a sequence, which
    runs until its final byte.
    """
    chunks: list[str] = []
    i = 0
    n = len(data)
    while i < n:
        ch = data[i]
        if ch != "\x1b" or i + 1 >= n:
            chunks.append(ch)
            i += 1
            continue

        nxt = data[i + 1]
        if nxt == "[":
            # CSI: parameters and intermediates, then a final byte 0x40-0x7E
            j = i + 2
            while j < n and not (0x40 <= ord(data[j]) <= 0x7E):
                j += 1
            chunks.append(data[i : j + 1])
            i = j + 1
        elif nxt == "O" and i + 2 < n:
            # SS3: exactly one final byte
            chunks.append(data[i : i + 3])
            i += 3
        elif nxt == "\x1b":
            chunks.append(ch)
            i += 1
        else:
            chunks.append(data[i : i + 2])
            i += 2
    return chunks


def _is_control(ch: str) -> bool:
    code = ord(ch)
    return code < 32 or code == 0x7F or 0x80 <= code <= 0x9F
