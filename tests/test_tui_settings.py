import json

from curltui.settings import AttrDict, CLIENT_SETTINGS, SETTINGS
from curltui.tui_settings import (
    get_tui_settings_path,
    load_tui_settings,
    save_tui_settings,
    validate_tui_settings,
)


# ---------------------------------------------------------------------------
# Built-in settings
# ---------------------------------------------------------------------------

def test_attrdict_dot_access_is_recursive():
    d = AttrDict({"a": {"b": {"c": 1}}, "rows": [{"x": 2}]})

    assert d.a.b.c == 1
    assert d.rows[0].x == 2


def test_client_defaults():
    assert CLIENT_SETTINGS.binary == "curl"
    assert SETTINGS.client.silent_flag == "--silent"
    assert "PATCH" in CLIENT_SETTINGS.payload_methods
    assert "GET" not in CLIENT_SETTINGS.payload_methods


# ---------------------------------------------------------------------------
# Persistent settings
# ---------------------------------------------------------------------------

def test_settings_path_follows_xdg(tmp_path):
    assert get_tui_settings_path() == tmp_path / "config" / "curltui" / "tui_settings.json"


def test_load_without_file_gives_defaults():
    assert load_tui_settings() == {"client_binary": "curl", "show_debug": False}


def test_save_then_load():
    save_tui_settings({"client_binary": "/usr/local/bin/curl", "show_debug": True})

    assert load_tui_settings() == {"client_binary": "/usr/local/bin/curl", "show_debug": True}


def test_save_drops_unknown_keys_and_fills_defaults():
    save_tui_settings({"show_debug": True, "colour": "red"})

    written = json.loads(get_tui_settings_path().read_text())
    assert written == {"client_binary": "curl", "show_debug": True}


def test_invalid_entries_fall_back_to_defaults():
    get_tui_settings_path().write_text(json.dumps({"client_binary": "  ", "show_debug": "yes"}))

    assert load_tui_settings() == {"client_binary": "curl", "show_debug": True}


def test_corrupt_file_gives_defaults():
    get_tui_settings_path().write_text("{not json")

    assert load_tui_settings()["client_binary"] == "curl"


def test_validate_reports_errors():
    errors = validate_tui_settings({"client_binary": "", "nope": 1})

    assert len(errors) == 2
    assert any("client_binary" in e for e in errors)
    assert any("Unknown setting" in e for e in errors)
    assert validate_tui_settings({"client_binary": "curl", "show_debug": False}) == []
