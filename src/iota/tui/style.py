"""Cell colors and styles, and their translation to ANSI SGR codes."""

from __future__ import annotations

import enum


class CharColor(enum.Enum):
    DEFAULT = "default"
    BLUE = "blue"
    BLACK = "black"


class CharStyle(enum.Enum):
    NORMAL = "normal"


# Foreground SGR parameters; background is foreground + 10.
_COLOR_CODES: dict[CharColor, int] = {
    CharColor.DEFAULT: 39,
    CharColor.BLUE: 34,
    CharColor.BLACK: 30,
}

_STYLE_CODES: dict[CharStyle, str] = {
    CharStyle.NORMAL: "0",
}


def get_color(color: CharColor, background: bool = False) -> str:
    """Translate a :class:`CharColor` to an SGR parameter."""
    code = _COLOR_CODES[color]
    return str(code + 10 if background else code)


def get_style(style: CharStyle) -> str:
    """Translate a :class:`CharStyle` to an SGR parameter."""
    return _STYLE_CODES[style]


def sgr(
    fg: CharColor,
    bg: CharColor,
    style: CharStyle = CharStyle.NORMAL,
) -> str:
    """Return the escape sequence selecting *style*, *fg* and *bg*."""
    return f"\x1b[{get_style(style)};{get_color(fg)};{get_color(bg, background=True)}m"
