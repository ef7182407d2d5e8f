from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Protocol

from curltui.core.errors import RequestError


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    def step(self, delta: int) -> "HttpMethod":
        """Return the method ``delta`` places away, wrapping around."""
        members = list(HttpMethod)
        return members[(members.index(self) + delta) % len(members)]


class Region(IntEnum):
    METHOD = 0
    URL = 1
    TABS = 2

    def step(self, delta: int) -> "Region":
        return Region((self + delta) % len(Region))


class Tab(IntEnum):
    HEADERS = 0
    BODY = 1
    RESPONSE = 2


class Column(IntEnum):
    KEY = 0
    VALUE = 1


class TextField(Protocol):
    """An editable single-line string with a notion of focus.

    Implemented by the terminal UI on top of its input widgets, and by
    in-memory fakes in tests.
    """

    @property
    def value(self) -> str: ...

    def set_value(self, value: str) -> None: ...

    def focus(self) -> None: ...

    def blur(self) -> None: ...

    def update(self, key: str, character: str | None = None) -> None:
        """Apply one key press to the field."""
        ...

    def insert(self, text: str) -> None:
        """Insert pasted text at the cursor."""
        ...


@dataclass(frozen=True)
class HeaderPair:
    key: str
    value: str


@dataclass(frozen=True)
class RequestState:
    """Snapshot of the composed request, handed to the builder."""
    url: str
    method: HttpMethod = HttpMethod.GET
    headers: tuple[HeaderPair, ...] = ()
    body: str = ""


@dataclass(frozen=True)
class ResponseState:
    body: str = ""
    error: RequestError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class FocusState:
    region: Region = Region.URL
    tab: Tab = Tab.HEADERS
    header_focus_index: int = 0

    @property
    def header_row(self) -> int:
        return self.header_focus_index // 2

    @property
    def header_column(self) -> Column:
        return Column(self.header_focus_index % 2)

    @property
    def on_headers(self) -> bool:
        return self.region is Region.TABS and self.tab is Tab.HEADERS

    @property
    def on_body(self) -> bool:
        return self.region is Region.TABS and self.tab is Tab.BODY


# Messages consumed by the navigator

@dataclass(frozen=True)
class KeyInput:
    key: str
    character: str | None = None


@dataclass(frozen=True)
class TextInput:
    """A block of text arriving at once, such as a terminal paste."""
    text: str


@dataclass(frozen=True)
class ResponseReceived:
    response: ResponseState


Message = KeyInput | TextInput | ResponseReceived


# Effects returned by the navigator for the shell to carry out

@dataclass(frozen=True)
class Dispatch:
    request: RequestState


@dataclass(frozen=True)
class Quit:
    pass


Effect = Dispatch | Quit


@dataclass
class HeaderRow:
    """One editable key/value row."""
    key: TextField
    value: TextField

    def cell(self, column: Column) -> TextField:
        return self.key if column is Column.KEY else self.value

    def pair(self) -> HeaderPair:
        return HeaderPair(self.key.value, self.value.value)
