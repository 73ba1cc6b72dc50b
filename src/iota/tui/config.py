"""Configuration for the editor. Stored at ~/.iota/config.json."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from iota.tui.keys import KeyId
from iota.tui.overlay import DEFAULT_PREFIXES, OverlayType
from iota.tui.style import CharColor

logger = logging.getLogger(__name__)

EditorAction = Literal["prompt", "save", "open", "quit"]

DEFAULT_KEYBINDINGS: dict[EditorAction, list[KeyId]] = {
    "prompt": ["ctrl+p", ":"],
    "save": ["ctrl+s"],
    "open": ["ctrl+o"],
    "quit": ["ctrl+q"],
}


@dataclass
class Config:
    prefixes: dict[OverlayType, str] = field(
        default_factory=lambda: dict(DEFAULT_PREFIXES)
    )
    keybindings: dict[EditorAction, list[KeyId]] = field(
        default_factory=lambda: {a: list(k) for a, k in DEFAULT_KEYBINDINGS.items()}
    )
    overlay_fg: CharColor = CharColor.DEFAULT
    overlay_bg: CharColor = CharColor.DEFAULT
    status_fg: CharColor = CharColor.DEFAULT
    status_bg: CharColor = CharColor.BLUE
    log_level: str = "info"
    log_file: str | None = None

    def action_for(self, key_id: KeyId) -> EditorAction | None:
        for action, keys in self.keybindings.items():
            if key_id in keys:
                return action
        return None


def config_from_dict(data: dict) -> Config:
    """Deserialize a Config from a JSON-compatible dict.

    Unknown overlay types, actions and colors, and values of the wrong
    type, raise ``ValueError``.
    """
    config = Config()
    for name, prefix in data.get("prefixes", {}).items():
        config.prefixes[OverlayType(name)] = _expect_str(prefix, f"prefixes.{name}")
    for action, keys in data.get("keybindings", {}).items():
        if action not in DEFAULT_KEYBINDINGS:
            raise ValueError(f"Unknown editor action: {action}")
        key_array = keys if isinstance(keys, list) else [keys]
        config.keybindings[action] = [
            _expect_str(key, f"keybindings.{action}") for key in key_array
        ]
    for attr, key in (
        ("overlay_fg", "overlayFg"),
        ("overlay_bg", "overlayBg"),
        ("status_fg", "statusFg"),
        ("status_bg", "statusBg"),
    ):
        if key in data:
            setattr(config, attr, CharColor(data[key]))
    config.log_level = _expect_str(data.get("logLevel", config.log_level), "logLevel")
    log_file = data.get("logFile", config.log_file)
    config.log_file = None if log_file is None else _expect_str(log_file, "logFile")
    return config


def _expect_str(value: object, name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"Expected a string for {name}, got {value!r}")
    return value


def config_to_dict(config: Config) -> dict:
    """Serialize a Config to a JSON-compatible dict."""
    return {
        "prefixes": {kind.value: prefix for kind, prefix in config.prefixes.items()},
        "keybindings": {action: list(keys) for action, keys in config.keybindings.items()},
        "overlayFg": config.overlay_fg.value,
        "overlayBg": config.overlay_bg.value,
        "statusFg": config.status_fg.value,
        "statusBg": config.status_bg.value,
        "logLevel": config.log_level,
        "logFile": config.log_file,
    }


def _get_config_dir() -> Path:
    return Path(os.environ.get("IOTA_CONFIG_DIR", Path.home() / ".iota"))


def _get_config_path() -> Path:
    return _get_config_dir() / "config.json"


def load_config(path: Path | None = None) -> Config:
    config_path = path or _get_config_path()
    if not config_path.exists():
        return Config()
    try:
        data = json.loads(config_path.read_text())
        return config_from_dict(data)
    except (OSError, ValueError, AttributeError) as e:
        logger.warning("Error reading config %s: %s", config_path, e)
        return Config()


def save_config(config: Config, path: Path | None = None) -> None:
    config_path = path or _get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(config_to_dict(config), indent=2))
