"""Index helpers for ordered sequences"""

from typing import Callable, Sequence, TypeVar

T = TypeVar("T")


def find_first_index(
    iterable: Sequence[T], predicate: Callable[[T], bool]
) -> int | None:
    """Find the index of the first item in the iterable that matches the predicate"""
    for i, item in enumerate(iterable):
        if predicate(item):
            return i
    return None


def clamp(value: int, lower: int, upper: int) -> int:
    """Clamp value into [lower, upper]"""
    return max(lower, min(upper, value))
