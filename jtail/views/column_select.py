"""Handles drawing of the column selector overlay"""

from jtail.helpers.curses_utils import Size, Viewport
from jtail.models.columns import ColumnRegistry
from jtail.output_controller import Window
from jtail.views.widgets import centered, draw_box, draw_row

TITLE = "Columns (space to toggle, Esc to close)"
MIN_WIDTH = 40
MAX_WIDTH = 90
MIN_HEIGHT = 6


def overlay_size(columns: ColumnRegistry, terminal: Size) -> Size:
    """Get the size of the overlay for the terminal"""
    width = max(MIN_WIDTH, min(MAX_WIDTH, terminal.width - 10))
    height = max(MIN_HEIGHT, min(len(columns) + 4, terminal.height - 2))
    return Size(height, width)


class ColumnSelectOverlay:
    """Draws every known column with its enabled mark"""

    def __init__(self, columns: ColumnRegistry) -> None:
        self._columns = columns
        self._offset = 0

    def viewport(self, terminal: Size) -> Viewport:
        """Get where the overlay goes on the terminal"""
        return centered(terminal, overlay_size(self._columns, terminal))

    def draw(self, window: Window) -> None:
        """Draw the overlay"""
        window.erase()
        inner = draw_box(window, TITLE)
        visible = max(1, inner.height)

        cursor = self._columns.cursor
        if cursor >= self._offset + visible:
            self._offset = cursor + 1 - visible
        elif cursor < self._offset:
            self._offset = cursor

        for y in range(min(visible, inner.height)):
            index = self._offset + y
            if index >= len(self._columns):
                break
            column = self._columns[index]
            mark = "[x]" if column.enabled else "[ ]"
            draw_row(window, y, f"{mark} {column.name}", selected=index == cursor)
        window.noutrefresh()
