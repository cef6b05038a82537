"""App viewmodel - ingestion, global keys and dispatch to the active mode"""

import enum
import logging
from typing import Callable

from jtail.editor import EditorRequest, request_for_field, request_for_record
from jtail.helpers.curses_utils import ESC, NO_KEY, Size, ctrl
from jtail.input_controller import InputController
from jtail.models.modes import (
    ColumnSelectMode,
    FieldViewMode,
    FilterInputMode,
    HelpMode,
    NormalMode,
)
from jtail.models.viewer_state import LogViewState
from jtail.viewmodels.browse import BrowseViewModel
from jtail.viewmodels.column_select import ColumnSelectViewModel
from jtail.viewmodels.field_view import FieldViewViewModel
from jtail.viewmodels.filter_input import FilterInputViewModel

logger = logging.getLogger(__name__)

LAYOUT_FIELDS = (
    "mode",
    "focus",
    "zoom",
    "terminal_size",
    "detail_viewport",
)


class AppAction(enum.Enum):
    """What the event loop must do after a key"""

    QUIT = "quit"
    OPEN_EDITOR = "open_editor"
    REDRAW = "redraw"


class AppModel:
    """ViewModel for the main application"""

    def __init__(
        self,
        state: LogViewState,
        input_controller: InputController,
        on_layout_change: Callable[[], None],
    ) -> None:
        self._state = state
        self._input_controller = input_controller
        self._browse = BrowseViewModel(state)
        self._filter_input = FilterInputViewModel(state)
        self._column_select = ColumnSelectViewModel(state)
        self._field_view = FieldViewViewModel(state)
        for field in LAYOUT_FIELDS:
            self._state.register_watcher(field, on_layout_change)

    def load_records(self) -> int:
        """Move every record read so far into the state"""
        records = self._input_controller.drain()
        for record in records:
            self._state.ingest(record)
        if records:
            logger.debug("Ingested %d records", len(records))
        return len(records)

    def update_terminal_size(self, size: Size) -> None:
        """Record the terminal size"""
        self._state.terminal_size = size

    def handle_input(self, key: int) -> AppAction | None:
        """Handle one key and tell the caller what to do next"""
        if key == NO_KEY:
            return None
        if key == ctrl("c"):
            return AppAction.QUIT

        self._state.status_message = ""
        mode = self._state.mode

        if isinstance(mode, FilterInputMode):
            self._filter_input.handle_input(key)
            return None

        if key == ctrl("l"):
            return AppAction.REDRAW

        if isinstance(mode, FieldViewMode):
            if key == ctrl("e"):
                if self._state.selected_field() is None:
                    return None
                return AppAction.OPEN_EDITOR
            self._field_view.handle_input(key)
            return None

        if key == ord("q"):
            return AppAction.QUIT

        if isinstance(mode, ColumnSelectMode):
            self._column_select.handle_input(key)
        elif isinstance(mode, HelpMode):
            if key in (ESC, ord("?")):
                self._state.close_overlay()
        elif isinstance(mode, NormalMode):
            return self._handle_normal_input(key)
        return None

    def _handle_normal_input(self, key: int) -> AppAction | None:
        if key == ord("?"):
            self._state.toggle_help()
        elif key == ctrl("e"):
            if self._state.current_record is not None:
                return AppAction.OPEN_EDITOR
        elif key == ctrl("t"):
            self._state.enter_field_view()
        elif key == ctrl("n"):
            self._state.select_next()
        elif key == ctrl("p"):
            self._state.select_previous()
        else:
            self._browse.handle_input(key)
        return None

    def editor_request(self) -> EditorRequest | None:
        """Get what to open in the editor for the current mode"""
        if isinstance(self._state.mode, FieldViewMode):
            node = self._state.selected_field()
            return None if node is None else request_for_field(node)
        record = self._state.current_record
        if record is not None:
            return request_for_record(record)
        return None

    def report_editor_result(self, error: str | None) -> None:
        """Show the outcome of an editor session in the status bar"""
        self._state.status_message = error or ""
