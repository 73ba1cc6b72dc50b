"""Editor host: owns the screen buffer and the input overlay.

Drives the synchronous loop: draw into the buffer, paint dirty cells,
place the cursor, wait for one key, handle it, repeat until stopped.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from iota.tui.config import Config
from iota.tui.keys import Key, parse_key
from iota.tui.overlay import (
    Finished,
    Overlay,
    OverlayEvent,
    OverlayType,
    draw_overlay,
    handle_overlay_key,
    overlay_cursor_pos,
)
from iota.tui.render import draw_everything, present
from iota.tui.screen_buffer import ScreenBuffer

if TYPE_CHECKING:
    from iota.tui.terminal import Terminal

logger = logging.getLogger(__name__)

QUIT_COMMANDS = ("q", "quit")


class Editor:
    """Top-level editor state for one terminal session.

    ``on_save`` and ``on_open`` receive the path typed into a save or open
    overlay; reading and writing files is up to the caller.
    """

    def __init__(
        self,
        width: int,
        height: int,
        config: Config | None = None,
        on_save: Callable[[str], None] | None = None,
        on_open: Callable[[str], None] | None = None,
    ) -> None:
        self.config = config or Config()
        self.buffer = ScreenBuffer(width, height)
        self.overlay: Overlay | None = None
        self.running: bool = True
        self.on_save = on_save
        self.on_open = on_open

        self.document_cursor: tuple[int, int] = (0, 0)
        self.status: str = ""
        self._status_drawn: str | None = None
        self._overlay_extent: int = 0

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    @property
    def overlay_row(self) -> int:
        """The overlay always sits on the last row."""
        return max(self.buffer.get_height() - 1, 0)

    @property
    def status_row(self) -> int | None:
        height = self.buffer.get_height()
        return height - 2 if height >= 2 else None

    # ------------------------------------------------------------------
    # Overlay lifecycle
    # ------------------------------------------------------------------

    def open_overlay(self, kind: OverlayType) -> Overlay:
        """Start collecting input for *kind*, replacing any active overlay."""
        self.close_overlay()
        self.overlay = Overlay(kind, self.config.prefixes.get(kind))
        row = self.overlay_row
        for x in range(self.buffer.get_width()):
            self.buffer.update_cell(
                x, row, " ", self.config.overlay_fg, self.config.overlay_bg
            )
        logger.debug("Opened %s overlay", kind.value)
        return self.overlay

    def close_overlay(self) -> None:
        if self.overlay is None:
            return
        logger.debug("Closed %s overlay", self.overlay.kind.value)
        self.overlay = None
        self._overlay_extent = 0
        self.buffer.fill_row(self.overlay_row)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def set_status(self, message: str) -> None:
        self.status = message

    def draw(self) -> None:
        self._draw_status()

        row = self.overlay_row
        extent = draw_overlay(self.overlay, self.buffer, row)
        # Blank text left over from a longer value
        for x in range(extent, self._overlay_extent):
            self.buffer.update_cell_content(x, row, " ")
        self._overlay_extent = extent

    def _draw_status(self) -> None:
        row = self.status_row
        if row is None or self.status == self._status_drawn:
            return
        fg, bg = self.config.status_fg, self.config.status_bg
        for x in range(self.buffer.get_width()):
            ch = self.status[x] if x < len(self.status) else " "
            self.buffer.update_cell(x, row, ch, fg, bg)
        self._status_drawn = self.status

    def get_cursor_pos(self) -> tuple[int, int]:
        overlay = self.overlay
        pos = overlay_cursor_pos(overlay, self.overlay_row)
        if overlay is None or pos is None:
            return self.document_cursor
        return (pos[0] + len(overlay.prefix), pos[1])

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def handle_key_event(self, key: Key) -> None:
        overlay = self.overlay
        event: OverlayEvent = handle_overlay_key(overlay, key)
        if overlay is None:
            self._handle_editor_key(key)
        elif isinstance(event, Finished):
            self.close_overlay()
            self._handle_overlay_result(overlay.kind, event.value)

    def _handle_editor_key(self, key: Key) -> None:
        action = self.config.action_for(key.name) if key.name else None
        if action is None:
            return
        if action == "quit":
            self.running = False
        elif action == "prompt":
            self.open_overlay(OverlayType.PROMPT)
        elif action == "save":
            self.open_overlay(OverlayType.SAVE_PROMPT)
        elif action == "open":
            self.open_overlay(OverlayType.SELECT_FILE)

    def _handle_overlay_result(self, kind: OverlayType, value: str | None) -> None:
        if value is None:
            logger.info("%s cancelled", kind.value)
            self.set_status("Cancelled")
            return

        if kind is OverlayType.PROMPT:
            self._run_command(value)
        elif kind is OverlayType.SAVE_PROMPT:
            logger.info("Save requested: %s", value)
            if self.on_save is not None:
                self.on_save(value)
            self.set_status(f"Saved {value}")
        elif kind is OverlayType.SELECT_FILE:
            logger.info("Open requested: %s", value)
            if self.on_open is not None:
                self.on_open(value)
            self.set_status(f"Opened {value}")

    def _run_command(self, command: str) -> None:
        command = command.strip()
        if command in QUIT_COMMANDS:
            self.running = False
        elif command:
            logger.warning("Unknown command: %s", command)
            self.set_status(f"Unknown command: {command}")

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def render(self, terminal: Terminal) -> int:
        """Draw one frame and send it to *terminal*. Returns cells painted."""
        self.draw()
        painted = draw_everything(self.buffer, terminal)
        present(terminal, self.get_cursor_pos())
        return painted

    def run(self, terminal: Terminal) -> None:
        while self.running:
            self.render(terminal)
            data = terminal.read_key()
            if not data:
                logger.info("Input closed, stopping")
                self.running = False
                break
            self.handle_key_event(parse_key(data))
