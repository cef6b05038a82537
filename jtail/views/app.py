"""Main application view: event loop, layout, header and footer"""

import curses
import logging

from jtail.editor import open_in_editor
from jtail.helpers.curses_utils import Color, Position, Size, TextAttribute, Viewport
from jtail.input_controller import InputController
from jtail.models.modes import (
    ColumnSelectMode,
    FilterInputMode,
    Focus,
    HelpMode,
)
from jtail.models.viewer_state import LogViewState
from jtail.output_controller import OutputController, Window
from jtail.viewmodels.app import AppAction, AppModel
from jtail.views.column_select import ColumnSelectOverlay
from jtail.views.detail_pane import DetailPane
from jtail.views.field_view import FieldView
from jtail.views.help import HelpOverlay
from jtail.views.list_pane import ListPane
from jtail.views.widgets import split_horizontal

logger = logging.getLogger(__name__)

HEADER_HEIGHT = 1
FOOTER_HEIGHT = 2
LIST_PERCENT = 45
MIN_SIZE = Size(HEADER_HEIGHT + FOOTER_HEIGHT + 3, 20)
FILTER_PROMPT = "Filter (regex): "
KEY_HINTS = (
    "/ filter  c columns  a autoscroll  Ctrl+T fields  Ctrl+E editor  ? help  q quit"
)
COLUMNS_HINT = "Columns: j/k to move cursor, space/enter to toggle, J/K to move column"


class App:  # pylint: disable=too-many-instance-attributes
    """Main application class"""

    def __init__(
        self,
        output_controller: OutputController,
        input_controller: InputController,
        state: LogViewState,
    ) -> None:
        self._output_controller = output_controller
        self._input_controller = input_controller
        self._state = state
        self._model = AppModel(state, input_controller, self._on_layout_change)

        self._main_window = output_controller.create_main_window()
        self._windows: dict[Viewport, Window] = {}
        self._needs_clear = True

        self._list_pane = ListPane(state)
        self._detail_pane = DetailPane(state)
        self._field_view = FieldView()
        self._column_select = ColumnSelectOverlay(state.columns)

    @property
    def model(self) -> AppModel:
        """Get the application viewmodel"""
        return self._model

    def _on_layout_change(self) -> None:
        self._needs_clear = True

    def run(self) -> None:
        """Run the event loop until the operator quits"""
        self._output_controller.curs_set(0)
        self._resize()
        while True:
            self._model.load_records()
            self.draw()

            key = self._input_controller.get_input()
            if key == curses.KEY_RESIZE:
                self._resize()
                continue

            action = self._model.handle_input(key)
            if action is AppAction.QUIT:
                break
            if action is AppAction.REDRAW:
                self._needs_clear = True
            elif action is AppAction.OPEN_EDITOR:
                self._open_editor()

    def _resize(self) -> None:
        self._output_controller.update_lines_cols()
        self._windows.clear()
        self._model.update_terminal_size(self._output_controller.get_terminal_size())
        self._needs_clear = True

    def _open_editor(self) -> None:
        request = self._model.editor_request()
        if request is None:
            return
        logger.info("Opening %s in the editor", request.filename)
        with self._output_controller.suspended():
            error = open_in_editor(request)
        self._model.report_editor_result(error)
        self._needs_clear = True

    def _window(self, viewport: Viewport) -> Window:
        if viewport not in self._windows:
            self._windows[viewport] = self._main_window.derwin(viewport)
        return self._windows[viewport]

    def draw(self) -> None:
        """Draw the whole screen"""
        if self._needs_clear:
            self._main_window.clear()
            self._main_window.noutrefresh()
            self._state.clear_changes()
            self._needs_clear = False

        size = self._state.terminal_size
        if size.height < MIN_SIZE.height or size.width < MIN_SIZE.width:
            self._main_window.erase()
            self._main_window.addstr(Position(0, 0), "Terminal too small")
            self._main_window.noutrefresh()
            self._output_controller.doupdate()
            return

        body = Viewport(
            Position(HEADER_HEIGHT, 0),
            Size(size.height - HEADER_HEIGHT - FOOTER_HEIGHT, size.width),
        )
        self._draw_header(size.width)
        self._draw_body(body)
        self._draw_footer(size)
        self._draw_overlays(size)
        self._place_cursor(size)
        self._output_controller.doupdate()

    def _draw_body(self, body: Viewport) -> None:
        explorer = self._state.field_explorer
        if explorer is not None:
            list_area, value_area = FieldView.layout(explorer, body.size)
            list_win = None
            if list_area.width > 0:
                list_win = self._window(_offset(list_area, body.pos))
            value_win = self._window(_offset(value_area, body.pos))
            self._field_view.draw(explorer, list_win, value_win)
            return

        zoom = self._state.zoom
        if zoom is Focus.LIST:
            self._list_pane.draw(self._window(body))
        elif zoom is Focus.DETAIL:
            self._detail_pane.draw(self._window(body))
        else:
            list_area, detail_area = split_horizontal(body, LIST_PERCENT)
            self._list_pane.draw(self._window(list_area))
            self._detail_pane.draw(self._window(detail_area))

    def _draw_header(self, width: int) -> None:
        state = self._state
        window = self._window(Viewport(Position(0, 0), Size(HEADER_HEIGHT, width)))
        window.erase()

        flags = ["FOLLOW" if state.autoscroll else "SCROLL"]
        if state.input_paused:
            flags.append("INPUT PAUSED")
        right = f"[{' '.join(flags)}] {len(state.view)}/{len(state.store)} "
        left = f" jtail - {self._input_controller.get_input_name()}"
        text = left[: max(0, width - len(right))].ljust(width - len(right)) + right
        window.addstr(
            Position(0, 0),
            text[:width],
            color=Color.HEADER,
            attributes=[TextAttribute.REVERSE],
        )
        window.noutrefresh()

    def _draw_footer(self, size: Size) -> None:
        state = self._state
        window = self._window(
            Viewport(
                Position(size.height - FOOTER_HEIGHT, 0),
                Size(FOOTER_HEIGHT, size.width),
            )
        )
        window.erase()

        if isinstance(state.mode, ColumnSelectMode):
            status = COLUMNS_HINT
        elif state.filter_engine.is_active:
            status = f"Filter: /{state.filter_engine.query}/ ({len(state.view)})"
        else:
            status = "Filter: (none)"
        window.addstr(Position(0, 0), status, color=Color.HEADER)

        mode = state.mode
        if isinstance(mode, FilterInputMode):
            window.addstr(Position(1, 0), FILTER_PROMPT + mode.buffer)
        elif state.filter_error is not None:
            window.addstr(
                Position(1, 0), f"Filter error: {state.filter_error}", color=Color.ERROR
            )
        elif state.status_message:
            window.addstr(Position(1, 0), state.status_message, color=Color.WARNING)
        else:
            window.addstr(Position(1, 0), KEY_HINTS, attributes=[TextAttribute.DIM])
        window.noutrefresh()

    def _draw_overlays(self, size: Size) -> None:
        mode = self._state.mode
        if isinstance(mode, ColumnSelectMode):
            self._column_select.draw(self._window(self._column_select.viewport(size)))
        elif isinstance(mode, HelpMode):
            HelpOverlay.draw(self._window(HelpOverlay.viewport(size)))

    def _place_cursor(self, size: Size) -> None:
        mode = self._state.mode
        if not isinstance(mode, FilterInputMode):
            self._output_controller.curs_set(0)
            return
        x = min(size.width - 1, len(FILTER_PROMPT) + mode.cursor_pos)
        self._output_controller.curs_set(1)
        self._main_window.move(Position(size.height - 1, x))
        self._main_window.noutrefresh()


def _offset(viewport: Viewport, origin: Position) -> Viewport:
    return Viewport(
        Position(origin.y + viewport.y, origin.x + viewport.x), viewport.size
    )
