"""Capacity-limited, insertion-ordered record storage"""

import collections
from typing import Iterator

from jtail.models.log_record import Record

DEFAULT_MAX_ENTRIES = 5000


class BoundedLogStore:
    """Keeps the most recent records, dropping the oldest first.

    Indices are positions in arrival order and shift down by one on every
    eviction; holders of indices must renumber when ``push`` reports one.
    """

    def __init__(self, capacity: int = DEFAULT_MAX_ENTRIES) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._records: collections.deque[Record] = collections.deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        """Maximum number of records kept"""
        return self._capacity

    def push(self, record: Record) -> Record | None:
        """Append a record, returning the evicted oldest record if any"""
        evicted = self._records[0] if len(self._records) == self._capacity else None
        self._records.append(record)
        return evicted

    def get(self, index: int) -> Record:
        """Get the record at a store index"""
        if not 0 <= index < len(self._records):
            raise IndexError(f"store index {index} out of range")
        return self._records[index]

    def last_index(self) -> int | None:
        """Index of the newest record"""
        return len(self._records) - 1 if self._records else None

    @property
    def records(self) -> list[Record]:
        """Get a copy of the stored records"""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)
