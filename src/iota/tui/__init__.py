"""iota-tui: input overlay and dirty-cell screen buffer for a terminal editor."""

from iota.tui.config import Config, load_config, save_config
from iota.tui.editor import Editor
from iota.tui.keys import BACKSPACE, ENTER, ESCAPE, Key, KeyKind, parse_key
from iota.tui.overlay import (
    OK,
    Finished,
    Ok,
    Overlay,
    OverlayEvent,
    OverlayType,
)
from iota.tui.render import draw_everything, present
from iota.tui.screen_buffer import Cell, ScreenBuffer
from iota.tui.style import CharColor, CharStyle
from iota.tui.terminal import ProcessTerminal, Terminal
from iota.tui.utils import char_width, display_width, visible_width

__all__ = [
    # Config
    "Config",
    "load_config",
    "save_config",
    # Editor
    "Editor",
    # Keys
    "BACKSPACE",
    "ENTER",
    "ESCAPE",
    "Key",
    "KeyKind",
    "parse_key",
    # Overlay
    "OK",
    "Finished",
    "Ok",
    "Overlay",
    "OverlayEvent",
    "OverlayType",
    # Rendering
    "draw_everything",
    "present",
    "Cell",
    "ScreenBuffer",
    "CharColor",
    "CharStyle",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    # Utils
    "char_width",
    "display_width",
    "visible_width",
]
