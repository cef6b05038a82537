"""Observable state objects.

Assigning a public attribute of a State subclass to a different value records
the attribute name and calls every watcher registered for it. The app view uses
the recorded names to decide what to redraw, and watchers keep derived layout
in sync.
"""

import collections
from typing import Any, Callable

_UNSET = object()

Watcher = Callable[[], None]


class State:
    """Base class for objects whose public attributes are observed"""

    def __init__(self) -> None:
        self._changes: set[str] = set()
        self._watchers: collections.defaultdict[str, list[Watcher]] = (
            collections.defaultdict(list)
        )

    def __setattr__(self, name: str, value: Any) -> None:
        previous = getattr(self, name, _UNSET)
        super().__setattr__(name, value)
        if name.startswith("_"):
            return
        if previous is _UNSET or previous != value:
            self._changed(name)

    def _changed(self, name: str) -> None:
        """Record a change made without an assignment, e.g. an in-place update"""
        self._changes.add(name)
        for watcher in self._watchers.get(name, ()):
            watcher()

    @property
    def changes(self) -> set[str]:
        """Names changed since the last clear_changes, as a copy"""
        return set(self._changes)

    def clear_changes(self) -> None:
        """Forget the recorded changes"""
        self._changes.clear()

    def register_watcher(self, name: str, callback: Watcher) -> None:
        """Call callback whenever the named attribute changes"""
        self._watchers[name].append(callback)
