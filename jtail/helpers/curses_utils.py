"""Key codes, geometry tuples and colors shared by the views"""

import curses
import enum
from typing import NamedTuple

DEL = 127

ESC = 27

ENTER = ord("\n")

TAB = ord("\t")

NO_KEY = -1


def ctrl(char: str) -> int:
    """Get the key code produced by Ctrl+<char>"""
    return ord(char.lower()) & 0x1F


class Position(NamedTuple):
    """Row and column of a cell, zero based"""

    y: int
    x: int


class Size(NamedTuple):
    """Rows and columns of an area"""

    height: int
    width: int


class Viewport(NamedTuple):
    """A rectangle: top-left position plus size"""

    pos: Position
    size: Size

    @property
    def x(self):
        """Left column"""
        return self.pos.x

    @property
    def y(self):
        """Top row"""
        return self.pos.y

    @property
    def width(self):
        """Number of columns"""
        return self.size.width

    @property
    def height(self):
        """Number of rows"""
        return self.size.height


class Color(enum.IntEnum):
    """Foreground colors, one curses pair each"""

    DEFAULT = curses.COLOR_WHITE
    INFO = curses.COLOR_GREEN
    WARNING = curses.COLOR_YELLOW
    ERROR = curses.COLOR_RED
    DEBUG = curses.COLOR_BLUE
    HEADER = curses.COLOR_CYAN
    SELECTED = curses.COLOR_MAGENTA


class TextAttribute(enum.IntEnum):
    """Curses attributes that can be combined with a color"""

    BOLD = curses.A_BOLD
    REVERSE = curses.A_REVERSE
    UNDERLINE = curses.A_UNDERLINE
    DIM = curses.A_DIM


def color_for_level(level: str) -> Color:
    """Get the display color for a record level"""
    level = level.upper()
    if level in ["ERROR", "CRITICAL", "FATAL"]:
        return Color.ERROR
    if level in ["WARN", "WARNING"]:
        return Color.WARNING
    if level in ["INFO"]:
        return Color.INFO
    if level in ["DEBUG", "TRACE"]:
        return Color.DEBUG
    if level in ["PARSE"]:
        return Color.SELECTED
    return Color.DEFAULT
