"""Focus/navigation state machine.

The navigator owns every piece of mutable UI state: the selected method, the
focus position, the text fields and the last response. It consumes messages
(key presses, pastes and dispatch completions) and returns effects for the shell to
carry out. It knows nothing about widgets beyond the ``TextField`` protocol.

Focus regions cycle ``METHOD -> URL -> TABS``. Inside ``TABS`` the active tab
is chosen with absolute jump keys, and on the Headers tab a cell index walks
the key/value fields row by row.
"""
from __future__ import annotations

from curltui.core.headers import FieldFactory, HeaderList
from curltui.core.models import (
    Dispatch,
    Effect,
    FocusState,
    HttpMethod,
    KeyInput,
    Message,
    Quit,
    Region,
    RequestState,
    ResponseReceived,
    ResponseState,
    Tab,
    TextField,
    TextInput,
)
from curltui.settings import KEY_SETTINGS, UI_SETTINGS
from curltui.util.logging import get_logger

log = get_logger(__name__)


class Navigator:

    def __init__(self, field_factory: FieldFactory, *, header_rows: int = 1):
        self.method = HttpMethod.GET
        self.focus = FocusState()
        self.url = field_factory(UI_SETTINGS.url_placeholder)
        self.body = field_factory(UI_SETTINGS.body_placeholder)
        self.headers = HeaderList(field_factory, rows=header_rows)
        self.response = ResponseState()

        self._focused: TextField | None = None
        self._sync_focus()

    def snapshot(self) -> RequestState:
        """Freeze the current form into a ``RequestState``."""
        return RequestState(
            url=self.url.value,
            method=self.method,
            headers=self.headers.pairs(),
            body=self.body.value,
        )

    @property
    def active_field(self) -> TextField | None:
        """The field that receives unhandled key presses, if any."""
        if self.focus.region is Region.URL:
            return self.url
        if self.focus.on_headers:
            return self.headers.field_at(self.focus.header_focus_index)
        if self.focus.on_body:
            return self.body
        return None

    def update(self, message: Message) -> Effect | None:
        """Apply one message and return the effect it asks for, if any."""
        if isinstance(message, KeyInput):
            effect = self._handle_key(message)
        elif isinstance(message, TextInput):
            self.insert_text(message.text)
            effect = None
        elif isinstance(message, ResponseReceived):
            self.response = message.response
            self.focus.tab = Tab.RESPONSE
            effect = None
        else:
            raise TypeError(f"Unsupported message: {type(message).__name__}")
        self._sync_focus()
        return effect

    # -- transitions -------------------------------------------------------

    def cycle_region(self, delta: int) -> None:
        self.focus.region = self.focus.region.step(delta)

    def cycle_method(self, delta: int) -> None:
        self.method = self.method.step(delta)

    def select_tab(self, tab: Tab) -> None:
        self.focus.tab = tab

    def move_header_focus(self, delta: int) -> None:
        self.focus.header_focus_index = self.headers.clamp(
            self.focus.header_focus_index + delta
        )

    def add_header(self) -> None:
        """Append an empty row and put the cursor on its key field."""
        self.headers.append()
        self.focus.header_focus_index = 2 * len(self.headers) - 2

    def insert_text(self, text: str) -> None:
        """Insert text into the active field; fields are single-line."""
        field = self.active_field
        if field is not None and text:
            field.insert(" ".join(text.splitlines()))

    def _handle_key(self, message: KeyInput) -> Effect | None:
        key = message.key
        focus = self.focus

        if key in KEY_SETTINGS.quit:
            return Quit()

        if key == KEY_SETTINGS.send:
            focus.tab = Tab.RESPONSE
            request = self.snapshot()
            log.debug("send requested", extra={"method": request.method.value,
                                               "url": request.url})
            return Dispatch(request)

        if key == KEY_SETTINGS.next_region:
            self.cycle_region(1)
            return None
        if key == KEY_SETTINGS.prev_region:
            self.cycle_region(-1)
            return None

        if focus.region is Region.METHOD:
            if key == KEY_SETTINGS.prev_method:
                self.cycle_method(-1)
                return None
            if key == KEY_SETTINGS.next_method:
                self.cycle_method(1)
                return None

        if focus.region is Region.TABS:
            if key in KEY_SETTINGS.tabs:
                self.select_tab(Tab(KEY_SETTINGS.tabs[key]))
                return None
            if focus.tab is Tab.HEADERS:
                if key == KEY_SETTINGS.header_up:
                    self.move_header_focus(-1)
                    return None
                if key == KEY_SETTINGS.header_down:
                    self.move_header_focus(1)
                    return None
                if key == KEY_SETTINGS.add_header:
                    self.add_header()
                    return None

        field = self.active_field
        if field is not None:
            field.update(key, message.character)
        return None

    def _sync_focus(self) -> None:
        target = self.active_field
        if target is self._focused:
            return
        if self._focused is not None:
            self._focused.blur()
        if target is not None:
            target.focus()
        self._focused = target
