from __future__ import annotations

from typing import Callable, Iterator

from curltui.core.models import Column, HeaderPair, HeaderRow, TextField
from curltui.settings import UI_SETTINGS

# Builds a fresh field; the argument is the placeholder text
FieldFactory = Callable[[str], TextField]


class HeaderList:
    """Ordered, append-only list of editable header rows.

    Focus indices address cells, two per row: ``2*row`` is the key field and
    ``2*row + 1`` the value field.
    """

    def __init__(self, factory: FieldFactory, rows: int = 1):
        self._factory = factory
        self._rows: list[HeaderRow] = []
        for _ in range(rows):
            self.append()

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[HeaderRow]:
        return iter(self._rows)

    def __getitem__(self, index: int) -> HeaderRow:
        return self._rows[index]

    @property
    def max_focus_index(self) -> int:
        return max(2 * len(self._rows) - 1, 0)

    def append(self) -> HeaderRow:
        """Add an empty row at the end and return it."""
        row = HeaderRow(key=self._factory(UI_SETTINGS.key_placeholder),
                        value=self._factory(UI_SETTINGS.value_placeholder))
        self._rows.append(row)
        return row

    @staticmethod
    def focused_cell(index: int) -> tuple[int, Column]:
        return index // 2, Column(index % 2)

    def clamp(self, index: int) -> int:
        return min(max(index, 0), self.max_focus_index)

    def field_at(self, index: int) -> TextField | None:
        """Return the field addressed by ``index``, or None when out of range."""
        row, column = self.focused_cell(index)
        if not 0 <= row < len(self._rows):
            return None
        return self._rows[row].cell(column)

    def fields(self) -> Iterator[TextField]:
        for row in self._rows:
            yield row.key
            yield row.value

    def pairs(self) -> tuple[HeaderPair, ...]:
        return tuple(row.pair() for row in self._rows)
