"""Entry point for the iota editor."""

from __future__ import annotations

import logging


def _setup_logging(level: str, log_file: str | None) -> None:
    # The screen is in raw mode while the editor runs; never log to it.
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=getattr(logging, level.upper(), logging.INFO),
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
    else:
        logging.basicConfig(handlers=[logging.NullHandler()])


def main() -> None:
    from iota.tui.config import load_config

    config = load_config()
    _setup_logging(config.log_level, config.log_file)

    from iota.tui.editor import Editor
    from iota.tui.terminal import ProcessTerminal

    terminal = ProcessTerminal()
    editor = Editor(terminal.columns, terminal.rows, config)

    terminal.start()
    try:
        editor.run(terminal)
    finally:
        terminal.stop()


if __name__ == "__main__":
    main()
