"""Browse viewmodel - navigation of the record list and the detail pane"""

import curses

from jtail.helpers.curses_utils import ENTER, ESC, TAB, ctrl
from jtail.models.modes import Focus
from jtail.models.viewer_state import LogViewState


class BrowseViewModel:
    """Handles keys while browsing, according to the focused pane"""

    def __init__(self, state: LogViewState) -> None:
        self._state = state

    def handle_input(self, key: int) -> None:
        """Handle input for browse mode"""
        if key == ord("/"):
            self._state.start_filter_input()
        elif key == ord("c"):
            self._state.open_column_select()
        elif key == ord("a"):
            self._state.toggle_autoscroll()
        elif key == ord("P"):
            self._state.toggle_input_pause()
        elif key in (ord("z"), ctrl("z")):
            self._state.toggle_zoom()
        elif key == ord("w"):
            self._state.toggle_detail_wrap()
        elif self._state.focus is Focus.LIST:
            self._handle_list_input(key)
        else:
            self._handle_detail_input(key)

    def _handle_list_input(self, key: int) -> None:
        state = self._state
        viewport = state.list_viewport
        if key in (ord("j"), curses.KEY_DOWN):
            state.select_next()
        elif key in (ord("k"), curses.KEY_UP):
            state.select_previous()
        elif key in (ord("g"), curses.KEY_HOME):
            state.select_first()
        elif key in (ord("G"), curses.KEY_END):
            state.select_last()
        elif key in (ctrl("d"), curses.KEY_NPAGE):
            state.page_down()
        elif key in (ctrl("u"), curses.KEY_PPAGE):
            state.page_up()
        elif key == ord("h"):
            viewport.scroll_left()
        elif key == ord("l"):
            viewport.scroll_right()
        elif key == ord("0"):
            viewport.scroll_home()
        elif key == ord("$"):
            viewport.scroll_end()
        elif key in (ENTER, curses.KEY_ENTER, TAB, curses.KEY_RIGHT):
            state.focus_detail()

    def _handle_detail_input(self, key: int) -> None:
        state = self._state
        viewport = state.detail_viewport
        if key in (ord("j"), curses.KEY_DOWN):
            viewport.scroll_down()
        elif key in (ord("k"), curses.KEY_UP):
            viewport.scroll_up()
        elif key in (ord("g"), curses.KEY_HOME):
            viewport.scroll_top()
        elif key in (ord("G"), curses.KEY_END):
            viewport.scroll_bottom()
        elif key in (ctrl("d"), curses.KEY_NPAGE):
            viewport.scroll_down(viewport.half_page)
        elif key in (ctrl("u"), curses.KEY_PPAGE):
            viewport.scroll_up(viewport.half_page)
        elif key == ord("h"):
            viewport.scroll_left()
        elif key == ord("l"):
            viewport.scroll_right()
        elif key == ord("0"):
            viewport.scroll_home()
        elif key == ord("$"):
            viewport.scroll_end()
        elif key in (ESC, TAB, curses.KEY_LEFT):
            state.focus_list()
