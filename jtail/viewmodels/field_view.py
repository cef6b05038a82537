"""Field view viewmodel - navigates and filters the fields of one record"""

import curses

from jtail.helpers.curses_utils import DEL, ESC, ctrl
from jtail.models.viewer_state import LogViewState


class FieldViewViewModel:
    """Handles keys while the field view is open.

    Printable keys always edit the label filter; commands use control keys.
    """

    def __init__(self, state: LogViewState) -> None:
        self._state = state

    def handle_input(  # pylint: disable=too-many-branches
        self, key: int
    ) -> None:
        """Handle input for the field view"""
        explorer = self._state.field_explorer
        if explorer is None:
            return

        detail = explorer.detail_viewport
        if key in (ESC, ctrl("t")):
            self._state.exit_field_view()
        elif key == ord("/"):
            self._state.promote_selected_field()
        elif key in (curses.KEY_DOWN, ctrl("j"), ctrl("n")):
            explorer.move_selection(1)
        elif key in (curses.KEY_UP, ctrl("k"), ctrl("p")):
            explorer.move_selection(-1)
        elif key in (ctrl("d"), curses.KEY_NPAGE):
            explorer.half_page_down()
        elif key in (ctrl("u"), curses.KEY_PPAGE):
            explorer.half_page_up()
        elif key in (curses.KEY_BACKSPACE, DEL, ctrl("h")):
            explorer.pop_filter()
        elif key == ctrl("x"):
            explorer.clear_filter()
        elif key == ctrl("z"):
            explorer.toggle_zoom()
        elif key == ctrl("w"):
            detail.toggle_wrap()
        elif key == curses.KEY_LEFT:
            detail.scroll_left()
        elif key == curses.KEY_RIGHT:
            detail.scroll_right()
        elif key == curses.KEY_HOME:
            detail.scroll_home()
        elif key == curses.KEY_END:
            detail.scroll_end()
        elif 32 <= key <= 126:  # Printable ASCII characters
            explorer.append_filter(chr(key))
