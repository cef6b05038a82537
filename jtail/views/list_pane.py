"""Handles the record list pane"""

from jtail.helpers.curses_utils import Color, color_for_level
from jtail.helpers.text_utils import single_line, slice_line
from jtail.models.columns import ColumnDef
from jtail.models.log_record import Record
from jtail.models.modes import Focus
from jtail.models.viewer_state import LogViewState
from jtail.output_controller import Window
from jtail.views.widgets import SELECTED_MARKER, draw_box, draw_row

COLUMN_SEPARATOR = " | "
NO_COLUMNS = "[no columns selected]"


def format_row(record: Record, columns: list[ColumnDef]) -> str:
    """Get the list text of a record for the enabled columns"""
    if not columns:
        return NO_COLUMNS
    return single_line(
        COLUMN_SEPARATOR.join(record.column_value(col.path) for col in columns)
    )


class ListPane:
    """Draws the filtered records, one row per record"""

    def __init__(self, state: LogViewState) -> None:
        self._state = state

    def _title(self) -> str:
        query = self._state.filter_engine.query
        return f"Logs [/{query}]" if query else "Logs"

    def draw(self, window: Window) -> None:
        """Draw the pane and report its geometry to the state"""
        state = self._state
        window.erase()
        border = Color.HEADER if state.focus is Focus.LIST else None
        inner = draw_box(window, self._title(), border)

        columns = state.columns.enabled_columns()
        records = state.visible_records
        rows = [format_row(record, columns) for record in records]
        content_width = max((len(row) for row in rows), default=0)
        row_width = inner.width - len(SELECTED_MARKER)
        state.set_list_geometry(inner.height, row_width, content_width)

        viewport = state.list_viewport
        for y, position in enumerate(viewport.visible_rows(len(rows))):
            if y >= inner.height:
                break
            draw_row(
                window,
                y,
                slice_line(rows[position], viewport.horiz_offset, row_width),
                selected=position == state.selected,
                color=color_for_level(records[position].level),
            )
        window.noutrefresh()
