import pytest

from curltui.core.headers import HeaderList
from curltui.core.models import Column, FocusState, HeaderPair, Region, Tab


def test_starts_with_requested_rows(field_factory):
    assert len(HeaderList(field_factory)) == 1
    assert len(HeaderList(field_factory, rows=3)) == 3
    assert len(HeaderList(field_factory, rows=0)) == 0


def test_append_adds_empty_row_at_end(field_factory):
    headers = HeaderList(field_factory)
    headers[0].key.set_value("Accept")

    row = headers.append()

    assert len(headers) == 2
    assert headers[1] is row
    assert headers.pairs() == (HeaderPair("Accept", ""), HeaderPair("", ""))


def test_new_fields_get_placeholders(field_factory):
    row = HeaderList(field_factory)[0]

    assert row.key.placeholder == "key"
    assert row.value.placeholder == "value"


@pytest.mark.parametrize("index, cell", [
    (0, (0, Column.KEY)),
    (1, (0, Column.VALUE)),
    (2, (1, Column.KEY)),
    (5, (2, Column.VALUE)),
])
def test_focused_cell(index, cell):
    assert HeaderList.focused_cell(index) == cell


def test_field_at_addresses_key_then_value(field_factory):
    headers = HeaderList(field_factory, rows=2)

    assert headers.field_at(0) is headers[0].key
    assert headers.field_at(1) is headers[0].value
    assert headers.field_at(3) is headers[1].value


def test_field_at_out_of_range_is_none(field_factory):
    headers = HeaderList(field_factory, rows=1)

    assert headers.field_at(2) is None
    assert headers.field_at(-1) is None
    assert HeaderList(field_factory, rows=0).field_at(0) is None


def test_clamp(field_factory):
    headers = HeaderList(field_factory, rows=2)

    assert headers.clamp(-3) == 0
    assert headers.clamp(2) == 2
    assert headers.clamp(10) == 3


def test_pairs_keep_insertion_order_and_duplicates(field_factory):
    headers = HeaderList(field_factory, rows=3)
    for row, (key, value) in zip(headers, [("X-A", "1"), ("X-B", "2"), ("X-A", "3")]):
        row.key.set_value(key)
        row.value.set_value(value)

    assert [p.key for p in headers.pairs()] == ["X-A", "X-B", "X-A"]


def test_focus_state_accessors():
    focus = FocusState(region=Region.TABS, tab=Tab.HEADERS, header_focus_index=5)

    assert focus.header_row == 2
    assert focus.header_column is Column.VALUE
    assert focus.on_headers
    assert not focus.on_body
