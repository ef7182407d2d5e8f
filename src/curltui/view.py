"""Pure rendering helpers: state in, Rich renderables out.

The label and style tables here are fixed; nothing mutates them.
"""
from __future__ import annotations

from types import MappingProxyType

from rich.style import Style
from rich.text import Text

from curltui.core.models import FocusState, HttpMethod, Region, ResponseState, Tab

METHODS: tuple[str, ...] = tuple(m.value for m in HttpMethod)

TAB_LABELS = MappingProxyType({
    Tab.HEADERS: "Headers",
    Tab.BODY: "Body",
    Tab.RESPONSE: "Response",
})

TAB_SEPARATOR = "    "

STYLES = MappingProxyType({
    "method_selected": Style(color="color(15)", bgcolor="color(5)", bold=True),
    "method_blurred": Style(color="color(240)"),
    "tab_selected": Style(color="color(10)", bold=True, underline=True),
    "tab_blurred": Style(color="color(240)"),
    "response": Style(color="color(245)"),
    "error": Style(color="color(205)"),
    "hint": Style(color="color(240)", italic=True),
})

_HINTS = MappingProxyType({
    Region.METHOD: "←/→ change method",
    Region.URL: "type the URL",
    Region.TABS: "h headers · b body · r response",
})


def method_label(method: HttpMethod, focus: FocusState) -> Text:
    selected = focus.region is Region.METHOD
    style = STYLES["method_selected" if selected else "method_blurred"]
    return Text(f" {method.value} ", style=style)


def tab_bar(focus: FocusState) -> Text:
    """Render the tab strip; only the active tab of a focused panel is highlighted."""
    bar = Text()
    for i, tab in enumerate(Tab):
        if i:
            bar.append(TAB_SEPARATOR)
        selected = focus.region is Region.TABS and tab is focus.tab
        bar.append(TAB_LABELS[tab], style=STYLES["tab_selected" if selected else "tab_blurred"])
    return bar


def response_view(response: ResponseState) -> Text:
    """Show the error when there is one, otherwise the response body."""
    if response.error is not None and str(response.error):
        return Text(f"Error: {response.error}", style=STYLES["error"])
    return Text(response.body, style=STYLES["response"])


def hint_line(focus: FocusState) -> Text:
    hint = _HINTS[focus.region]
    if focus.on_headers:
        hint = f"{hint} · ↑/↓ move · ctrl+n add header"
    return Text(f"{hint} · tab next · ctrl+r send · ctrl+c quit", style=STYLES["hint"])
