"""
Settings for curltui.

These settings are global and can be accessed from any module in the curltui package.

The SETTINGS dict structure follows the structure of curltui submodules:
``client`` is read by the request builder, ``keymap`` by the navigator.

Expected usage behavior:

```python
from curltui.settings import SETTINGS

CLIENT_SETTINGS = SETTINGS.client
```

Once initialized, the settings are expected to be immutable (not enforced).
User-editable values live in ``curltui.tui_settings`` and override these at runtime.
"""

SETTINGS = {
    'client': {
        'binary': "curl",
        'silent_flag': "--silent",
        'method_flag': "-X",
        'header_flag': "-H",
        'data_flag': "--data",
        # PATCH is not selectable from the UI but still carries a payload
        'payload_methods': ("POST", "PUT", "PATCH", "DELETE"),
    },
    'keymap': {
        'send': "ctrl+r",
        'add_header': "ctrl+n",
        'quit': ("ctrl+c", "ctrl+q"),
        'next_region': "tab",
        'prev_region': "shift+tab",
        'prev_method': "left",
        'next_method': "right",
        'header_up': "up",
        'header_down': "down",
        # tab jumps, only while the tab panel has focus
        'tabs': {
            'h': 0,
            'b': 1,
            'r': 2,
        },
    },
    'ui': {
        'url_placeholder': "https://api.example.com",
        'key_placeholder': "key",
        'value_placeholder': "value",
        'body_placeholder': "Raw request body",
    },
}


class AttrDict(dict):
    """
    A dictionary subclass that allows dot-notation access while
    recursively converting nested dictionaries.
    """
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Point the instance __dict__ to itself to allow attribute access
        self.__dict__ = self
        for key, value in self.items():
            self[key] = self._convert(value)

    @classmethod
    def _convert(cls, value):
        """Recursively converts dicts to AttrDicts, leaving other types alone."""
        if isinstance(value, dict):
            return cls(value)
        elif isinstance(value, list):
            return [cls._convert(item) for item in value]
        return value

    def __setitem__(self, key, value):
        super().__setitem__(key, self._convert(value))

    def __getattr__(self, key):
        try:
            return self[key]
        except KeyError as exc:
            raise AttributeError(f"AttrDict object has no attribute '{key}'") from exc


SETTINGS = AttrDict(SETTINGS)
CLIENT_SETTINGS = SETTINGS.client
KEY_SETTINGS = SETTINGS.keymap
UI_SETTINGS = SETTINGS.ui
