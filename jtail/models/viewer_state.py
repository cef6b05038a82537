"""The viewer core: store, filtered view, selection, viewports and mode"""

import logging
import re

from jtail.helpers.curses_utils import Size
from jtail.helpers.state import State
from jtail.models.columns import ColumnRegistry
from jtail.models.field_explorer import FieldExplorer, FieldNode
from jtail.models.filter_engine import FilterEngine, InvalidFilterError
from jtail.models.filtered_view import FilteredView, SelectStrategy
from jtail.models.log_record import Record
from jtail.models.log_store import DEFAULT_MAX_ENTRIES, BoundedLogStore
from jtail.models.modes import (
    ColumnSelectMode,
    FieldViewMode,
    FilterInputMode,
    Focus,
    HelpMode,
    Mode,
    NormalMode,
)
from jtail.models.viewport import DetailViewport, ListViewport

logger = logging.getLogger(__name__)


class LogViewState(State):  # pylint: disable=too-many-instance-attributes,too-many-public-methods
    """State of the log viewer.

    The selection is a position in the filtered view, so every structural
    change to the store (eviction) or to the filter (rebuild) renumbers it
    explicitly here.
    """

    def __init__(
        self, max_entries: int = DEFAULT_MAX_ENTRIES, autoscroll: bool = True
    ) -> None:
        super().__init__()
        self.store = BoundedLogStore(max_entries)
        self.columns = ColumnRegistry()
        self.filter_engine = FilterEngine()
        self.view: FilteredView[Record] = FilteredView()
        self.list_viewport = ListViewport()
        self.detail_viewport = DetailViewport()
        self.mode: Mode = NormalMode()
        self.focus: Focus = Focus.LIST
        self.zoom: Focus | None = None
        self.autoscroll: bool = autoscroll
        self.input_paused: bool = False
        self.status_message: str = ""
        self.filter_error: str | None = None
        self.terminal_size: Size = Size(0, 0)
        self.clear_changes()

    @property
    def selected(self) -> int | None:
        """The selected position in the filtered view"""
        return self.view.selected

    @property
    def current_record(self) -> Record | None:
        """The selected record"""
        index = self.view.selected_source_index
        return None if index is None else self.store.get(index)

    @property
    def visible_records(self) -> list[Record]:
        """The records in the filtered view, in order"""
        return [self.store.get(i) for i in self.view]

    @property
    def field_explorer(self) -> FieldExplorer | None:
        """The explorer of the field view, when active"""
        if isinstance(self.mode, FieldViewMode):
            return self.mode.explorer
        return None

    # Ingestion

    def ingest(self, record: Record) -> None:
        """Push a record unless input is paused"""
        if self.input_paused:
            return
        self.push(record)

    def push(self, record: Record) -> None:
        """Store a record and update the filtered view and selection"""
        self.columns.discover(record.payload)

        if self.store.push(record) is not None:
            self._on_evicted()

        if self.autoscroll:
            self.rebuild(SelectStrategy.LAST)
            self.list_viewport.scroll_home()
            self.list_viewport.pin_to_tail(len(self.view), self.view.selected)
            return

        if self.filter_engine.matches(record):
            self.view.append(self.store.last_index())
            if self.view.selected is None:
                self.view.select_last()
                self.detail_viewport.reset()
                self.list_viewport.scroll_home()
                self.list_viewport.follow(self.view.selected)

    def _on_evicted(self) -> None:
        previous = self.view.selected_source_index
        dropped_row = self.view.drop_front()
        if dropped_row and self.list_viewport.offset > 0:
            self.list_viewport.offset -= 1
        if previous == 0:
            self.detail_viewport.reset()
        self._sync_list_window()

    # Filtering

    def apply_filter(self, pattern: str) -> None:
        """Make pattern the active filter; an invalid pattern only sets filter_error"""
        try:
            self.filter_engine.compile(pattern)
        except InvalidFilterError as e:
            self.filter_error = str(e)
            return

        self.filter_error = None
        self.rebuild(SelectStrategy.PRESERVE_OR_FIRST)
        self.detail_viewport.reset()
        self.list_viewport.scroll_home()
        self._sync_list_window()

    def rebuild(self, strategy: SelectStrategy) -> None:
        """Re-scan the store with the active filter"""
        if self.view.rebuild(self.store.records, self.filter_engine.matches, strategy):
            self.detail_viewport.reset()

    # Navigation

    def _navigate(self, delta: int | None = None, last: bool = False) -> None:
        if not len(self.view):
            return
        if delta is not None:
            self.view.move(delta)
        elif last:
            self.view.select_last()
        else:
            self.view.select_first()
        self.detail_viewport.reset()
        self._sync_list_window()

    def select_next(self) -> None:
        """Select the next record"""
        self._navigate(1)

    def select_previous(self) -> None:
        """Select the previous record"""
        self._navigate(-1)

    def page_down(self) -> None:
        """Move the selection down by half the list height"""
        self._navigate(self.list_viewport.half_page)

    def page_up(self) -> None:
        """Move the selection up by half the list height"""
        self._navigate(-self.list_viewport.half_page)

    def select_first(self) -> None:
        """Select the first record"""
        self._navigate()

    def select_last(self) -> None:
        """Select the last record"""
        self._navigate(last=True)

    def _sync_list_window(self) -> None:
        if self.autoscroll:
            self.list_viewport.pin_to_tail(len(self.view), self.view.selected)
        else:
            self.list_viewport.follow(self.view.selected)

    def toggle_autoscroll(self) -> None:
        """Switch between following the newest record and manual scrolling"""
        self.autoscroll = not self.autoscroll
        if self.autoscroll:
            self.view.select_last()
            self.detail_viewport.reset()
            self.list_viewport.pin_to_tail(len(self.view), self.view.selected)

    def toggle_input_pause(self) -> None:
        """Start or stop discarding incoming records"""
        self.input_paused = not self.input_paused

    # Geometry written back by the renderer

    def set_list_geometry(self, height: int, width: int, content_width: int) -> None:
        """Record the measured size and content width of the list pane"""
        self.list_viewport.height = height
        self.list_viewport.width = width
        self.list_viewport.content_width = content_width
        self.list_viewport.clamp_horizontal()
        self._sync_list_window()

    def set_detail_geometry(
        self, height: int, width: int, total_lines: int, max_line_width: int
    ) -> None:
        """Record the measured size and content of the detail pane"""
        self.detail_viewport.height = height
        self.detail_viewport.width = width
        self.detail_viewport.total_lines = total_lines
        self.detail_viewport.max_line_width = max_line_width
        self.detail_viewport.clamp()

    # Focus and zoom

    def focus_detail(self) -> None:
        """Send navigation keys to the detail pane"""
        self.focus = Focus.DETAIL

    def focus_list(self) -> None:
        """Send navigation keys to the list pane"""
        self.focus = Focus.LIST

    def toggle_focus(self) -> None:
        """Switch focus between the panes"""
        self.focus = Focus.DETAIL if self.focus is Focus.LIST else Focus.LIST

    def toggle_zoom(self) -> None:
        """Show the focused pane alone, or both panes again"""
        self.zoom = None if self.zoom is self.focus else self.focus

    def toggle_detail_wrap(self) -> None:
        """Switch the detail pane between wrapping and horizontal scrolling"""
        self.detail_viewport.toggle_wrap()
        self._changed("detail_viewport")

    # Modes

    def start_filter_input(self) -> None:
        """Start editing the main filter, prefilled with the active pattern"""
        query = self.filter_engine.query
        self.filter_error = None
        self.mode = FilterInputMode(query, len(query))

    def confirm_filter_input(self) -> None:
        """Leave the filter editor and apply the edited pattern"""
        if not isinstance(self.mode, FilterInputMode):
            return
        pattern = self.mode.buffer
        self.mode = NormalMode()
        self.apply_filter(pattern)

    def cancel_filter_input(self) -> None:
        """Leave the filter editor without applying it"""
        self.filter_error = None
        self.mode = NormalMode()

    def open_column_select(self) -> None:
        """Show the column selector"""
        self.mode = ColumnSelectMode()

    def close_overlay(self) -> None:
        """Go back to browsing"""
        self.mode = NormalMode()

    def toggle_help(self) -> None:
        """Show or hide the help overlay"""
        self.mode = NormalMode() if isinstance(self.mode, HelpMode) else HelpMode()

    def enter_field_view(self) -> None:
        """Explore the fields of the selected record"""
        record = self.current_record
        if record is None:
            return
        self.mode = FieldViewMode(FieldExplorer(record.payload))

    def exit_field_view(self) -> None:
        """Leave the field view, discarding its state"""
        if isinstance(self.mode, FieldViewMode):
            self.mode = NormalMode()

    def promote_selected_field(self) -> None:
        """Prefill the main filter editor with the selected field's literal value"""
        explorer = self.field_explorer
        node = None if explorer is None else explorer.selected_node
        if node is None:
            return
        pattern = re.escape(node.text)
        logger.debug("Promoting field %s to filter %r", node.path, pattern)
        self.focus = Focus.LIST
        self.filter_error = None
        self.mode = FilterInputMode(pattern, len(pattern))

    def selected_field(self) -> FieldNode | None:
        """The selected node of the field view"""
        explorer = self.field_explorer
        return None if explorer is None else explorer.selected_node
