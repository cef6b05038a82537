"""Interaction modes of the viewer; exactly one is active at a time"""

import dataclasses
import enum

from jtail.models.field_explorer import FieldExplorer


class Focus(enum.Enum):
    """Which pane receives navigation keys"""

    LIST = "list"
    DETAIL = "detail"


@dataclasses.dataclass(frozen=True)
class NormalMode:
    """Browsing the record list and detail pane"""


@dataclasses.dataclass
class FilterInputMode:
    """Editing the main filter pattern"""

    buffer: str = ""
    cursor_pos: int = 0

    def insert(self, text: str) -> None:
        """Insert text at the cursor"""
        self.buffer = (
            self.buffer[: self.cursor_pos] + text + self.buffer[self.cursor_pos :]
        )
        self.cursor_pos += len(text)

    def backspace(self) -> None:
        """Delete the character before the cursor"""
        if self.cursor_pos > 0:
            self.buffer = (
                self.buffer[: self.cursor_pos - 1] + self.buffer[self.cursor_pos :]
            )
            self.cursor_pos -= 1

    def delete(self) -> None:
        """Delete the character under the cursor"""
        if self.cursor_pos < len(self.buffer):
            self.buffer = (
                self.buffer[: self.cursor_pos] + self.buffer[self.cursor_pos + 1 :]
            )

    def clear(self) -> None:
        """Empty the buffer"""
        self.buffer = ""
        self.cursor_pos = 0

    def move_cursor(self, delta: int) -> None:
        """Move the cursor within the buffer"""
        self.cursor_pos = max(0, min(len(self.buffer), self.cursor_pos + delta))

    def cursor_home(self) -> None:
        """Move the cursor to the start"""
        self.cursor_pos = 0

    def cursor_end(self) -> None:
        """Move the cursor to the end"""
        self.cursor_pos = len(self.buffer)


@dataclasses.dataclass(frozen=True)
class ColumnSelectMode:
    """Choosing and ordering the list columns"""


@dataclasses.dataclass(eq=False)
class FieldViewMode:
    """Exploring the fields of one record"""

    explorer: FieldExplorer


@dataclasses.dataclass(frozen=True)
class HelpMode:
    """Showing the keyboard shortcuts"""


Mode = NormalMode | FilterInputMode | ColumnSelectMode | FieldViewMode | HelpMode
