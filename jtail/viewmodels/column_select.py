"""Column selector viewmodel - enables, disables and reorders columns"""

import curses

from jtail.helpers.curses_utils import ENTER, ESC
from jtail.models.viewer_state import LogViewState


class ColumnSelectViewModel:
    """Handles keys while the column selector is open"""

    def __init__(self, state: LogViewState) -> None:
        self._state = state

    @property
    def cursor(self) -> int:
        """The highlighted column"""
        return self._state.columns.cursor

    def handle_input(self, key: int) -> None:
        """Handle input for the column selector"""
        columns = self._state.columns
        if key in (ESC, ord("c")):
            self._state.close_overlay()
        elif key in (ord(" "), ENTER, curses.KEY_ENTER):
            columns.toggle_selected()
        elif key == ord("J"):
            columns.move_selected(1)
        elif key == ord("K"):
            columns.move_selected(-1)
        elif key in (ord("j"), curses.KEY_DOWN):
            columns.move_cursor(1)
        elif key in (ord("k"), curses.KEY_UP):
            columns.move_cursor(-1)
        elif key in (ord("g"), curses.KEY_HOME):
            columns.cursor_first()
        elif key in (ord("G"), curses.KEY_END):
            columns.cursor_last()
