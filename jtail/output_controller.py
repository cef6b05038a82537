"""Thin wrappers around curses so the views can be driven by fakes in tests"""

import contextlib
import curses
from abc import ABC, abstractmethod
from typing import Iterator

from jtail.helpers.curses_utils import Color, Position, Size, TextAttribute, Viewport


class Window(ABC):
    """A drawable area of the terminal"""

    @abstractmethod
    def derwin(self, viewport: Viewport) -> "Window":
        """Create a child window sharing this window's cells"""

    @abstractmethod
    def getmaxyx(self) -> Size:
        """Get the window size in cells"""

    @abstractmethod
    def clear(self) -> None:
        """Clear the window and repaint it completely on the next refresh"""

    @abstractmethod
    def erase(self) -> None:
        """Blank the window"""

    @abstractmethod
    def noutrefresh(self) -> None:
        """Stage the window for the next doupdate"""

    @abstractmethod
    def addstr(
        self,
        position: Position,
        text: str,
        *,
        color: Color | None = None,
        attributes: list[TextAttribute] | None = None,
    ) -> None:
        """Add a string to the window, clipped to its bounds"""

    @abstractmethod
    def move(self, position: Position) -> None:
        """Place the terminal cursor inside the window"""


class OutputController(ABC):
    """Terminal-wide operations: colors, cursor, size and screen updates"""

    @abstractmethod
    def create_main_window(self) -> Window:
        """Get the window covering the whole terminal"""

    @abstractmethod
    def curs_set(self, visibility: int) -> None:
        """Show (1) or hide (0) the cursor"""

    @abstractmethod
    def update_lines_cols(self) -> None:
        """Re-read the terminal size after a resize"""

    @abstractmethod
    def get_terminal_size(self) -> Size:
        """Get the current terminal size"""

    @abstractmethod
    def doupdate(self) -> None:
        """Push all pending window updates to the terminal"""

    @abstractmethod
    def suspended(self) -> contextlib.AbstractContextManager[None]:
        """Hand the terminal to another program for the duration of the block"""


class CursesWindow(Window):
    """Window backed by a real curses window"""

    def __init__(self, curses_window, color_to_pair: dict[Color, int]) -> None:
        self._window = curses_window
        self._color_to_pair = color_to_pair

    def derwin(self, viewport: Viewport) -> Window:
        return CursesWindow(
            self._window.derwin(
                max(1, viewport.height), max(1, viewport.width), viewport.y, viewport.x
            ),
            self._color_to_pair,
        )

    def getmaxyx(self) -> Size:
        return Size(*self._window.getmaxyx())

    def clear(self) -> None:
        self._window.clear()

    def erase(self) -> None:
        self._window.erase()

    def noutrefresh(self) -> None:
        self._window.noutrefresh()

    def addstr(
        self,
        position: Position,
        text: str,
        *,
        color: Color | None = None,
        attributes: list[TextAttribute] | None = None,
    ) -> None:
        height, width = self._window.getmaxyx()
        if not 0 <= position.y < height or not 0 <= position.x < width:
            return
        text = text[: width - position.x]
        if not text:
            return

        attr = 0
        if color is not None:
            attr = self._color_to_pair.get(color, 0)
        if attributes:
            for text_attr in attributes:
                attr |= text_attr.value

        # Writing the bottom-right cell with addstr moves the cursor off the window
        if position.y == height - 1 and position.x + len(text) == width:
            self._window.insstr(position.y, width - 1, text[-1], attr)
            text = text[:-1]
        if text:
            self._window.addstr(position.y, position.x, text, attr)

    def move(self, position: Position) -> None:
        self._window.move(position.y, position.x)


class CursesOutputController(OutputController):
    """Output controller backed by the curses module"""

    def __init__(self, stdscr: curses.window) -> None:
        self._stdscr = stdscr
        self._color_to_pair = self._init_color_pairs()

    @staticmethod
    def _init_color_pairs() -> dict[Color, int]:
        """Register one pair per Color on the terminal's default background"""
        curses.start_color()
        curses.use_default_colors()
        pairs = {}
        for pair_num, color in enumerate(Color, start=1):
            curses.init_pair(pair_num, color.value, -1)
            pairs[color] = curses.color_pair(pair_num)
        return pairs

    def create_main_window(self) -> Window:
        return CursesWindow(self._stdscr, self._color_to_pair)

    def curs_set(self, visibility: int) -> None:
        try:
            curses.curs_set(visibility)
        except curses.error:
            # Some terminals cannot hide the cursor
            pass

    def update_lines_cols(self) -> None:
        curses.update_lines_cols()

    def get_terminal_size(self) -> Size:
        return Size(curses.LINES, curses.COLS)  # pylint: disable=no-member

    def doupdate(self) -> None:
        curses.doupdate()

    @contextlib.contextmanager
    def suspended(self) -> Iterator[None]:
        curses.def_prog_mode()
        curses.endwin()
        try:
            yield
        finally:
            curses.reset_prog_mode()
            self._stdscr.clear()
            self._stdscr.refresh()
