from curltui.core.errors import DiagnosticError, ValidationError
from curltui.core.models import FocusState, HttpMethod, Region, ResponseState, Tab
from curltui.view import (
    METHODS,
    STYLES,
    hint_line,
    method_label,
    response_view,
    tab_bar,
)


def test_method_table_matches_enum():
    assert METHODS == ("GET", "POST", "PUT", "DELETE")


def test_method_label_highlight_follows_focus():
    focused = method_label(HttpMethod.PUT, FocusState(region=Region.METHOD))
    blurred = method_label(HttpMethod.PUT, FocusState(region=Region.URL))

    assert focused.plain.strip() == "PUT"
    assert focused.style == STYLES["method_selected"]
    assert blurred.style == STYLES["method_blurred"]


def test_tab_bar_labels():
    assert tab_bar(FocusState()).plain == "Headers    Body    Response"


def test_tab_bar_highlights_only_when_panel_focused():
    def styles(bar):
        return [span.style for span in bar.spans]

    inactive = tab_bar(FocusState(region=Region.URL, tab=Tab.BODY))
    active = tab_bar(FocusState(region=Region.TABS, tab=Tab.BODY))

    assert STYLES["tab_selected"] not in styles(inactive)
    assert styles(active)[1] == STYLES["tab_selected"]


def test_response_view_prefers_error():
    view = response_view(ResponseState(body="stale body", error=ValidationError("URL cannot be empty")))

    assert view.plain == "Error: URL cannot be empty"


def test_response_view_shows_body_without_error():
    assert response_view(ResponseState(body='{"a": 1}')).plain == '{"a": 1}'


def test_response_view_ignores_empty_error_message():
    assert response_view(ResponseState(body="b", error=DiagnosticError(""))).plain == "b"


def test_hint_line_mentions_add_header_on_headers_tab():
    assert "ctrl+n" in hint_line(FocusState(region=Region.TABS, tab=Tab.HEADERS)).plain
    assert "ctrl+n" not in hint_line(FocusState(region=Region.TABS, tab=Tab.BODY)).plain
