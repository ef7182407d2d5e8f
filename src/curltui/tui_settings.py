"""Persistent TUI settings: user options kept in a JSON config file.

The file lives at ``$XDG_CONFIG_HOME/curltui/tui_settings.json`` (falling back
to ``~/.config``). TUISettingsSchema lists every setting; adding one means one
new schema entry plus whatever code reads the value.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable

from curltui.settings import CLIENT_SETTINGS
from curltui.util.logging import get_logger

log = get_logger(__name__)


def _config_dir() -> Path:
    """Return the curltui config directory, creating it if needed."""
    base = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
    path = base / "curltui"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_tui_settings_path() -> Path:
    return _config_dir() / "tui_settings.json"


# Schema: one dict per setting.
# Keys: key (file/API), label (display), type, default, help.
TUISettingsSchema: list[dict[str, Any]] = [
    {
        "key": "client_binary",
        "label": "CLIENT",
        "type": "str",
        "default": CLIENT_SETTINGS.binary,
        "help": "HTTP client executable, looked up on PATH.",
    },
    {
        "key": "show_debug",
        "label": "SHOW_DEBUG",
        "type": "bool",
        "default": False,
        "help": "Show the debug panel on startup.",
    },
]


def _coerce_str(key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{key}: expected string, got {type(value).__name__}")
    if not value.strip():
        raise ValueError(f"{key}: must not be empty")
    return value.strip()


def _coerce_bool(key: str, value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


_COERCERS: dict[str, Callable[[str, Any], Any]] = {
    "str": _coerce_str,
    "bool": _coerce_bool,
}


def _defaults_from_schema() -> dict[str, Any]:
    return {entry["key"]: entry["default"] for entry in TUISettingsSchema}


def coerce_setting(key: str, value: Any) -> Any:
    """Return ``value`` converted to the setting's type.

    Raises:
        ValueError: for unknown keys and values that cannot be used.
    """
    entry = next((e for e in TUISettingsSchema if e["key"] == key), None)
    if entry is None:
        raise ValueError(f"Unknown setting: {key}")
    return _COERCERS[entry["type"]](key, value)


def validate_tui_settings(settings: dict[str, Any]) -> list[str]:
    """Return one message per invalid entry (empty when everything is usable)."""
    errors = []
    for key, value in settings.items():
        try:
            coerce_setting(key, value)
        except ValueError as e:
            errors.append(str(e))
    return errors


def _read_raw(path: Path) -> dict[str, Any]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, json.JSONDecodeError):
        log.warning(f"unreadable settings file {path}")
        return {}
    return raw if isinstance(raw, dict) else {}


def load_tui_settings() -> dict[str, Any]:
    """Load settings; missing or invalid entries keep their schema defaults."""
    settings = _defaults_from_schema()
    for key, value in _read_raw(get_tui_settings_path()).items():
        if key not in settings:
            continue
        try:
            settings[key] = coerce_setting(key, value)
        except ValueError as e:
            log.warning(f"ignoring setting: {e}")
    return settings


def save_tui_settings(settings: dict[str, Any]) -> None:
    """Write every schema key, taking defaults for the ones not given."""
    to_write = _defaults_from_schema()
    to_write.update({k: v for k, v in settings.items() if k in to_write})
    get_tui_settings_path().write_text(json.dumps(to_write, indent=2), encoding="utf-8")
