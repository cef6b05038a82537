"""Filtered indirection over an ordered collection, with a selection into it"""

import enum
from typing import Callable, Generic, Iterator, Sequence, TypeVar

from jtail.helpers.list_utils import clamp, find_first_index

T = TypeVar("T")


class SelectStrategy(enum.Enum):
    """How to choose the selection after a rebuild"""

    PRESERVE_OR_FIRST = "preserve_or_first"
    LAST = "last"


class FilteredView(Generic[T]):
    """Strictly increasing source indices whose items pass a predicate.

    The selection is a position in this view, never a source index, so that
    it can be carried across rebuilds by looking up the selected source index.
    """

    def __init__(self) -> None:
        self._indices: list[int] = []
        self._selected: int | None = None

    def __len__(self) -> int:
        return len(self._indices)

    def __iter__(self) -> Iterator[int]:
        return iter(self._indices)

    def __getitem__(self, position: int) -> int:
        return self._indices[position]

    @property
    def indices(self) -> list[int]:
        """Get a copy of the source indices"""
        return self._indices.copy()

    @property
    def selected(self) -> int | None:
        """The selected position in the view"""
        return self._selected

    @property
    def selected_source_index(self) -> int | None:
        """The source index of the selected item"""
        if self._selected is None or self._selected >= len(self._indices):
            return None
        return self._indices[self._selected]

    def position_of(self, source_index: int) -> int | None:
        """Find the view position of a source index"""
        return find_first_index(self._indices, lambda i: i == source_index)

    def rebuild(
        self,
        items: Sequence[T],
        predicate: Callable[[T], bool],
        strategy: SelectStrategy,
    ) -> bool:
        """Re-scan items and reselect; returns True if the selected item changed"""
        previous = self.selected_source_index
        self._indices = [i for i, item in enumerate(items) if predicate(item)]

        if strategy is SelectStrategy.LAST:
            self.select_last()
        else:
            position = None if previous is None else self.position_of(previous)
            self.select(0 if position is None else position)

        return self.selected_source_index != previous

    def append(self, source_index: int) -> None:
        """Add a new trailing source index"""
        if self._indices and source_index <= self._indices[-1]:
            raise ValueError("filtered indices must stay strictly increasing")
        self._indices.append(source_index)

    def drop_front(self) -> bool:
        """Renumber after the source dropped its first item.

        Returns True if a view row was removed.
        """
        dropped = bool(self._indices) and self._indices[0] == 0
        if dropped:
            self._indices.pop(0)
            if self._selected is not None and self._selected > 0:
                self._selected -= 1
        self._indices = [i - 1 for i in self._indices]

        if not self._indices:
            self._selected = None
        elif self._selected is not None:
            self._selected = min(self._selected, len(self._indices) - 1)
        return dropped

    def select(self, position: int | None) -> None:
        """Select a view position, clamped to the view"""
        if position is None or not self._indices:
            self._selected = None
        else:
            self._selected = clamp(position, 0, len(self._indices) - 1)

    def select_first(self) -> None:
        """Select the first row"""
        self.select(0)

    def select_last(self) -> None:
        """Select the last row"""
        self.select(len(self._indices) - 1)

    def move(self, delta: int) -> None:
        """Move the selection by delta rows"""
        if not self._indices:
            return
        self.select((self._selected or 0) + delta)
