import pytest

from curltui.core.models import KeyInput
from curltui.core.navigator import Navigator


class FakeField:
    """
    In-memory stand-in for a text input widget.

    Printable characters and inserted text are appended, backspace drops the
    last character, and every key it receives is recorded.
    """
    def __init__(self, placeholder=""):
        self.placeholder = placeholder
        self._value = ""
        self.focused = False
        self.keys = []

    @property
    def value(self):
        return self._value

    def set_value(self, value):
        self._value = value

    def focus(self):
        self.focused = True

    def blur(self):
        self.focused = False

    def update(self, key, character=None):
        self.keys.append(key)
        if key == "backspace":
            self._value = self._value[:-1]
        elif character and character.isprintable():
            self._value += character

    def insert(self, text):
        self._value += text


@pytest.fixture(autouse=True)
def _isolate_config(tmp_path, monkeypatch):
    """Persistent settings must never touch the real home directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))


@pytest.fixture
def field_factory():
    return FakeField


@pytest.fixture
def navigator(field_factory):
    return Navigator(field_factory)


@pytest.fixture
def press(navigator):
    """Feed key names to the navigator; single characters carry themselves as text."""
    def _press(*keys):
        effect = None
        for key in keys:
            character = key if len(key) == 1 else None
            effect = navigator.update(KeyInput(key, character))
        return effect
    return _press


@pytest.fixture
def type_text(press):
    def _type(text):
        return press(*text)
    return _type
