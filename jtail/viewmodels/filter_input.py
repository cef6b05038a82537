"""Filter editor viewmodel - edits the main filter pattern"""

import curses

from jtail.helpers.curses_utils import DEL, ENTER, ESC, ctrl
from jtail.models.modes import FilterInputMode
from jtail.models.viewer_state import LogViewState


class FilterInputViewModel:
    """Handles keys while the main filter pattern is being edited"""

    def __init__(self, state: LogViewState) -> None:
        self._state = state

    def handle_input(self, key: int) -> None:
        """Handle input for the filter editor"""
        mode = self._state.mode
        if not isinstance(mode, FilterInputMode):
            return

        if key == ESC:
            self._state.cancel_filter_input()
        elif key in (ENTER, curses.KEY_ENTER):
            self._state.confirm_filter_input()
        elif key in (curses.KEY_BACKSPACE, DEL, ctrl("h")):
            mode.backspace()
        elif key == curses.KEY_DC:
            mode.delete()
        elif key == ctrl("u"):
            mode.clear()
        elif key == curses.KEY_LEFT:
            mode.move_cursor(-1)
        elif key == curses.KEY_RIGHT:
            mode.move_cursor(1)
        elif key in (curses.KEY_HOME, ctrl("a")):
            mode.cursor_home()
        elif key in (curses.KEY_END, ctrl("e")):
            mode.cursor_end()
        elif 32 <= key <= 126:  # Printable ASCII characters
            mode.insert(chr(key))
