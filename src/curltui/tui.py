"""TUI for composing HTTP requests and reading the responses.

A single-screen terminal interface:
- Top row: method selector and URL field
- Middle: tabbed panel (Headers / Body / Response)
- Bottom: optional debug panel

Every key press is fed to a ``Navigator``, which owns the UI state; the
widgets here only mirror it. Requests run through an external HTTP client in
a background worker and come back as a message on the same event loop.

Example:
    Launch the TUI from command line::

        $ curltui

    Or run as a module::

        $ python -m curltui

"""
from __future__ import annotations

import os
import sys
from collections import deque
from datetime import datetime
from typing import Any

from textual import events, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.screen import ModalScreen, Screen
from textual.widgets import Button, Footer, Header, Input, Static, Switch

from curltui.core.builder import build_args, format_command, send_request
from curltui.core.errors import ValidationError
from curltui.core.models import (
    Dispatch,
    HeaderRow,
    KeyInput,
    Quit,
    Region,
    RequestState,
    ResponseReceived,
    ResponseState,
    Tab,
    TextInput,
)
from curltui.core.navigator import Navigator
from curltui.tui_settings import (
    TUISettingsSchema,
    coerce_setting,
    load_tui_settings,
    save_tui_settings,
    validate_tui_settings,
)
from curltui.util.logging import configure_logging, get_logger
from curltui.view import hint_line, method_label, response_view, tab_bar

log = get_logger(__name__)

# key -> Input action name
_EDIT_ACTIONS = {
    "backspace": "delete_left",
    "delete": "delete_right",
    "left": "cursor_left",
    "right": "cursor_right",
    "home": "home",
    "end": "end",
}


class FieldInput(Input, can_focus=False):
    """Input that never takes Textual focus; edits arrive through ``InputField``."""


class InputField:
    """Adapts a Textual ``Input`` to the navigator's ``TextField`` protocol.

    Focus is shown with the ``-active`` class rather than Textual focus, so
    key presses always reach the screen first.
    """

    def __init__(self, placeholder: str = ""):
        self.widget = FieldInput(placeholder=placeholder)

    @property
    def value(self) -> str:
        return self.widget.value

    def set_value(self, value: str) -> None:
        self.widget.value = value

    def focus(self) -> None:
        self.widget.add_class("-active")

    def blur(self) -> None:
        self.widget.remove_class("-active")

    def update(self, key: str, character: str | None = None) -> None:
        action = _EDIT_ACTIONS.get(key)
        if action is not None:
            getattr(self.widget, f"action_{action}")()
        elif character and character.isprintable():
            self.widget.insert_text_at_cursor(character)

    def insert(self, text: str) -> None:
        self.widget.insert_text_at_cursor(text)


class HeaderRowView(Horizontal):
    """One key/value row on the Headers tab."""

    def __init__(self, row: HeaderRow, **kwargs):
        super().__init__(classes="header-row", **kwargs)
        self.row = row

    def compose(self) -> ComposeResult:
        self.row.key.widget.add_class("header-key")
        yield self.row.key.widget
        yield Static(":", classes="header-sep")
        yield self.row.value.widget


class HeadersPane(VerticalScroll, can_focus=False):
    """Stack of header rows; grows when a row is added."""


class ResponsePanel(VerticalScroll, can_focus=False):
    """Scrollable view of the last response or error."""

    def compose(self) -> ComposeResult:
        yield Static(id="response-text")

    def show(self, response: ResponseState) -> None:
        self.query_one("#response-text", Static).update(response_view(response))
        self.scroll_home(animate=False)


class DebugPanel(VerticalScroll, can_focus=False):
    """Scrollable panel for debug messages.

    Collects timestamped lines about dispatches and settings changes.
    """

    # oldest lines are dropped past this
    MAX_LINES = 200

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.lines: deque[str] = deque(maxlen=self.MAX_LINES)

    def compose(self) -> ComposeResult:
        yield Static(id="debug-text")

    def append(self, message: str) -> None:
        """Append a new debug message and scroll to bottom."""
        self.lines.append(message)
        self.query_one("#debug-text", Static).update("\n".join(self.lines))
        self.scroll_end(animate=False)


class SettingsScreen(ModalScreen):
    """Modal screen for editing persistent settings (client binary, debug panel).

    Settings are saved to ~/.config/curltui/tui_settings.json and applied to
    the next dispatch.
    """

    CSS = """
    SettingsScreen {
        align: center middle;
    }

    #settings-dialog {
        width: 60;
        height: auto;
        border: thick $primary;
        background: $surface;
        padding: 1 2;
    }

    #settings-title {
        background: $primary;
        color: $text;
        text-style: bold;
        padding: 0 2;
        dock: top;
    }

    .settings-row {
        height: auto;
        padding: 1 0;
    }

    .settings-label {
        width: 18;
        text-style: bold;
    }

    .settings-input {
        width: 1fr;
    }

    #settings-help {
        color: $text-muted;
        margin: 1 0;
    }

    #settings-buttons {
        height: auto;
        align: center middle;
        padding: 1 0;
    }

    #settings-buttons Button {
        margin: 0 1;
    }
    """

    def __init__(self, current: dict[str, Any]):
        super().__init__()
        self.current = dict(current)

    def compose(self) -> ComposeResult:
        with Vertical(id="settings-dialog"):
            yield Static("Settings (persistent)", id="settings-title")
            yield Static("Ctrl+S save, Esc cancel.", id="settings-help")
            for entry in TUISettingsSchema:
                key = entry["key"]
                value = self.current.get(key, entry["default"])
                with Horizontal(classes="settings-row"):
                    yield Static(entry["label"], classes="settings-label")
                    if entry["type"] == "bool":
                        yield Switch(value=bool(value), id=f"setting-{key}")
                    else:
                        yield Input(str(value), id=f"setting-{key}", classes="settings-input")
            with Container(id="settings-buttons"):
                yield Button("Save (Ctrl+S)", variant="primary", id="settings-save-btn")
                yield Button("Cancel (Esc)", variant="default", id="settings-cancel-btn")

    def on_mount(self) -> None:
        self.query_one(f"#setting-{TUISettingsSchema[0]['key']}").focus()

    def _gather(self) -> dict[str, Any]:
        result = {}
        for entry in TUISettingsSchema:
            node = self.query_one(f"#setting-{entry['key']}")
            result[entry["key"]] = node.value
        return result

    def _save(self) -> None:
        data = self._gather()
        errors = validate_tui_settings(data)
        if errors:
            self.notify(errors[0], severity="error")
            return
        data = {k: coerce_setting(k, v) for k, v in data.items()}
        save_tui_settings(data)
        self.dismiss(data)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "settings-save-btn":
            self._save()
        elif event.button.id == "settings-cancel-btn":
            self.dismiss(None)

    def on_key(self, event) -> None:
        if event.key == "ctrl+s":
            self._save()
            event.prevent_default()
        elif event.key == "escape":
            self.dismiss(None)
            event.prevent_default()


class RequestScreen(Screen):
    """The request editor.

    Top row: method and URL
    Middle: Headers / Body / Response tabs
    """

    AUTO_FOCUS = None

    CSS = """
    #top-row {
        height: 3;
    }

    #method {
        width: auto;
        min-width: 10;
        height: 3;
        content-align: center middle;
        border: round $surface-darken-1;
    }

    #method.-active {
        border: round $accent;
    }

    FieldInput {
        border: round $surface-darken-1;
    }

    FieldInput.-active {
        border: round $accent;
    }

    #url-field {
        width: 1fr;
    }

    #tab-bar {
        padding: 1 2 0 2;
        height: 2;
    }

    #tab-content {
        height: 1fr;
        padding: 1 2;
    }

    .header-row {
        height: 3;
    }

    .header-row FieldInput {
        width: 1fr;
    }

    .header-row .header-key {
        width: 24;
    }

    .header-sep {
        width: 2;
        height: 3;
        content-align: center middle;
    }

    #response-pane {
        height: 1fr;
    }

    #hints {
        height: 1;
        padding: 0 2;
    }

    #debug-container {
        height: 8;
        border-top: tall $accent-darken-1;
        background: $surface-darken-1;
        display: none;
    }

    #debug-panel {
        height: 1fr;
        padding: 0 2;
    }
    """

    BINDINGS = [
        Binding("tab", "press('tab')", "Next", priority=True),
        Binding("shift+tab", "press('shift+tab')", "Previous", show=False, priority=True),
        Binding("ctrl+r", "press('ctrl+r')", "Send", priority=True),
        Binding("ctrl+n", "press('ctrl+n')", "Add header", priority=True),
        Binding("ctrl+c", "press('ctrl+c')", "Quit", priority=True),
        Binding("ctrl+d", "toggle_debug", "Debug", priority=True),
        Binding("ctrl+s", "edit_settings", "Settings", priority=True),
    ]

    class ResponseReady(Message):
        """Posted by the dispatch worker when the client has finished."""

        def __init__(self, request: RequestState, response: ResponseState) -> None:
            super().__init__()
            self.request = request
            self.response = response

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.navigator = Navigator(InputField)
        self._mounted_rows = 0
        self._shown_response: ResponseState | None = None

    def compose(self) -> ComposeResult:
        nav = self.navigator
        yield Header()
        with Horizontal(id="top-row"):
            yield Static(id="method")
            nav.url.widget.id = "url-field"
            yield nav.url.widget
        yield Static(id="tab-bar")
        with Container(id="tab-content"):
            with HeadersPane(id="headers-pane"):
                for row in nav.headers:
                    yield HeaderRowView(row)
            with Container(id="body-pane"):
                nav.body.widget.id = "body-field"
                yield nav.body.widget
            yield ResponsePanel(id="response-pane")
        yield Static(id="hints")
        with Container(id="debug-container"):
            yield DebugPanel(id="debug-panel")
        yield Footer()

    def on_mount(self) -> None:
        self._mounted_rows = len(self.navigator.headers)
        debug = self.query_one("#debug-container", Container)
        debug.display = bool(self.app.tui_settings.get("show_debug", False))
        self._render_state()

    def on_key(self, event) -> None:
        """Route every key that no binding claimed into the navigator."""
        event.stop()
        event.prevent_default()
        self._apply(KeyInput(event.key, event.character))

    def on_paste(self, event: events.Paste) -> None:
        event.stop()
        self._apply(TextInput(event.text))

    def action_press(self, key: str) -> None:
        self._apply(KeyInput(key))

    def _apply(self, message: KeyInput | TextInput | ResponseReceived) -> None:
        effect = self.navigator.update(message)
        self._render_state()
        if isinstance(effect, Dispatch):
            self._start_dispatch(effect.request)
        elif isinstance(effect, Quit):
            self.app.exit(return_code=0)

    def _start_dispatch(self, request: RequestState) -> None:
        binary = self.app.tui_settings.get("client_binary")
        try:
            self._debug(f"Dispatching: {format_command(build_args(request), binary)}")
        except ValidationError as e:
            self._debug(f"Rejected: {e}")
        self.dispatch_request(request, binary)

    @work(exclusive=False, group="dispatch")
    async def dispatch_request(self, request: RequestState, binary: str | None) -> None:
        """Run the client off the input path; the result comes back as a message."""
        response = await send_request(request, binary=binary)
        self.post_message(self.ResponseReady(request, response))

    def on_request_screen_response_ready(self, message: ResponseReady) -> None:
        response = message.response
        if response.error is not None:
            self._debug(f"{message.request.method.value} failed: {response.error}")
        else:
            self._debug(f"{message.request.method.value} done ({len(response.body)} chars)")
        self._apply(ResponseReceived(response))

    def action_toggle_debug(self) -> None:
        container = self.query_one("#debug-container", Container)
        container.display = not container.display

    def action_edit_settings(self) -> None:
        """Open the persistent settings screen."""
        def handle_settings_result(result: dict[str, Any] | None) -> None:
            if result is not None:
                self.app.tui_settings = result
                self.app.update_subtitle()
                self._debug(f"Settings saved: {result}")

        self.app.push_screen(SettingsScreen(dict(self.app.tui_settings)), handle_settings_result)

    def _sync_header_rows(self) -> None:
        rows = self.navigator.headers
        if self._mounted_rows >= len(rows):
            return
        pane = self.query_one("#headers-pane", HeadersPane)
        for index in range(self._mounted_rows, len(rows)):
            pane.mount(HeaderRowView(rows[index]))
        self._mounted_rows = len(rows)
        pane.scroll_end(animate=False)

    def _render_state(self) -> None:
        nav = self.navigator
        focus = nav.focus

        method = self.query_one("#method", Static)
        method.update(method_label(nav.method, focus))
        method.set_class(focus.region is Region.METHOD, "-active")

        self.query_one("#tab-bar", Static).update(tab_bar(focus))
        self.query_one("#hints", Static).update(hint_line(focus))

        self._sync_header_rows()
        self.query_one("#headers-pane").display = focus.tab is Tab.HEADERS
        self.query_one("#body-pane").display = focus.tab is Tab.BODY
        response_pane = self.query_one("#response-pane", ResponsePanel)
        response_pane.display = focus.tab is Tab.RESPONSE
        if nav.response is not self._shown_response:
            response_pane.show(nav.response)
            self._shown_response = nav.response

    def _escape_rich_markup(self, s: str) -> str:
        """Escape [ and ] so Rich does not interpret them as markup."""
        return s.replace("[", "\\[").replace("]", "\\]")

    def _debug(self, message: str) -> None:
        """Append a timestamped message to the debug panel."""
        log.debug(message)
        panel = self.query_one("#debug-panel", DebugPanel)
        timestamp = datetime.now().strftime("%H:%M:%S")
        panel.append(f"[dim]{timestamp}[/dim] {self._escape_rich_markup(message)}")


class CurlTUI(App):
    """Interactive TUI for composing and sending HTTP requests."""

    TITLE = "curltui"

    def __init__(self):
        super().__init__()
        self.tui_settings = load_tui_settings()
        self.fatal_error: Exception | None = None

    def get_default_screen(self) -> Screen:
        return RequestScreen()

    def on_mount(self) -> None:
        self.update_subtitle()

    def update_subtitle(self) -> None:
        client = self.tui_settings.get("client_binary", "curl")
        self.sub_title = f"Client: {client} | Ctrl+R: Send | Ctrl+S: Settings | Ctrl+C: Quit"

    def _handle_exception(self, error: Exception) -> None:
        # Textual renders the traceback and exits with 1; main() reports it
        if self.fatal_error is None:
            self.fatal_error = error
        super()._handle_exception(error)


def main():
    """Launch the curltui application.

    Exits with 0 on a normal quit and 1 when the UI fails. Set
    ``CURLTUI_LOG_LEVEL`` to send logs to the Textual devtools console.
    """
    level = os.environ.get("CURLTUI_LOG_LEVEL")
    if level:
        configure_logging(level.upper())

    app = CurlTUI()
    try:
        app.run()
    except Exception as err:
        app.fatal_error = err
    if app.fatal_error is not None:
        print(f"Uh oh, there was an error: {app.fatal_error}")
        sys.exit(1)
    sys.exit(app.return_code or 0)


if __name__ == "__main__":
    main()
