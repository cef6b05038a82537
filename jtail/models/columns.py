"""Column definitions discovered from record payloads"""

import dataclasses
from typing import Any, Iterator

from jtail.helpers.list_utils import clamp

RESERVED_KEYS = frozenset({"timestamp", "level", "message", "instant", "data"})


@dataclasses.dataclass
class ColumnDef:
    """Represents a column in the list pane"""

    name: str
    path: tuple[str, ...]
    enabled: bool = False


def default_columns() -> list[ColumnDef]:
    """The columns present at startup"""
    return [
        ColumnDef(name, (name,), enabled=True)
        for name in ("timestamp", "level", "message")
    ]


class ColumnRegistry:
    """Ordered, path-unique column definitions with a selection cursor"""

    def __init__(self) -> None:
        self._columns: list[ColumnDef] = default_columns()
        self._paths: set[tuple[str, ...]] = {col.path for col in self._columns}
        self.cursor: int = 0

    def __len__(self) -> int:
        return len(self._columns)

    def __iter__(self) -> Iterator[ColumnDef]:
        return iter(self._columns)

    def __getitem__(self, index: int) -> ColumnDef:
        return self._columns[index]

    @property
    def columns(self) -> list[ColumnDef]:
        """Get a copy of the column list"""
        return self._columns.copy()

    def enabled_columns(self) -> list[ColumnDef]:
        """Get the enabled columns in display order"""
        return [col for col in self._columns if col.enabled]

    def discover(self, payload: Any) -> list[ColumnDef]:
        """Register top-level and data.* keys not seen before"""
        added: list[ColumnDef] = []
        if not isinstance(payload, dict):
            return added

        for key in payload:
            added += self._add_if_new(key, (key,))

        data = payload.get("data")
        if isinstance(data, dict):
            for key in data:
                added += self._add_if_new(f"data.{key}", ("data", key))

        return added

    def _add_if_new(self, name: str, path: tuple[str, ...]) -> list[ColumnDef]:
        if path[-1] in RESERVED_KEYS or path in self._paths:
            return []
        column = ColumnDef(name, path)
        self._columns.append(column)
        self._paths.add(path)
        return [column]

    def move(self, index: int, delta: int) -> int:
        """Swap the column at index with the one delta away, returning its new index"""
        if not 0 <= index < len(self._columns):
            return index
        new_index = clamp(index + delta, 0, len(self._columns) - 1)
        if new_index != index:
            self._columns[index], self._columns[new_index] = (
                self._columns[new_index],
                self._columns[index],
            )
        return new_index

    def toggle(self, index: int) -> None:
        """Flip the enabled flag of a column"""
        column = self._columns[index]
        column.enabled = not column.enabled

    def move_cursor(self, delta: int) -> None:
        """Move the selection cursor"""
        self.cursor = clamp(self.cursor + delta, 0, len(self._columns) - 1)

    def cursor_first(self) -> None:
        """Put the cursor on the first column"""
        self.cursor = 0

    def cursor_last(self) -> None:
        """Put the cursor on the last column"""
        self.cursor = len(self._columns) - 1

    def toggle_selected(self) -> None:
        """Toggle the column under the cursor"""
        self.toggle(self.cursor)

    def move_selected(self, delta: int) -> None:
        """Move the column under the cursor, keeping the cursor on it"""
        self.cursor = self.move(self.cursor, delta)
