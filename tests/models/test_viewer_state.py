"""Tests for the LogViewState class"""

import pytest

from jtail.models.log_record import Record, parse_line
from jtail.models.modes import (
    ColumnSelectMode,
    FieldViewMode,
    FilterInputMode,
    Focus,
    HelpMode,
    NormalMode,
)
from jtail.models.viewer_state import LogViewState


def make_record(text: str) -> Record:
    """Parse a line that is known to produce a record"""
    record = parse_line(text)
    assert record is not None
    return record


def push_all(state: LogViewState, lines: list[str]) -> None:
    """Push every line as a record"""
    for line in lines:
        state.push(make_record(line))


def selected_message(state: LogViewState) -> str | None:
    """Get the message of the selected record"""
    record = state.current_record
    return None if record is None else record.message


@pytest.fixture(name="state")
def state_fixture() -> LogViewState:
    """Create a state with capacity 2, following the tail"""
    return LogViewState(max_entries=2)


def test_default_initialization() -> None:
    """Test the initial state"""
    # Act
    state = LogViewState()

    # Assert
    assert state.mode == NormalMode()
    assert state.focus is Focus.LIST
    assert state.zoom is None
    assert state.autoscroll
    assert not state.input_paused
    assert state.selected is None
    assert state.current_record is None
    assert state.filter_error is None
    assert state.changes == set()


def test_eviction_keeps_newest(state: LogViewState) -> None:
    """Test that pushing past capacity keeps the newest records selected"""
    # Act
    push_all(state, ["one", "two", "three"])

    # Assert
    assert [r.message for r in state.store] == ["two", "three"]
    assert state.view.indices == [0, 1]
    assert selected_message(state) == "three"


def test_filter_preserves_matching_selection() -> None:
    """Test that a selection that still matches stays selected"""
    # Arrange
    state = LogViewState(max_entries=10)
    push_all(state, ["one", "two", "three"])
    state.select_previous()

    # Act
    state.apply_filter("two|three")

    # Assert
    assert state.view.indices == [1, 2]
    assert state.selected == 0
    assert selected_message(state) == "two"


def test_filter_moves_excluded_selection_to_first() -> None:
    """Test that a filtered-out selection moves to the first match"""
    # Arrange
    state = LogViewState(max_entries=10)
    push_all(state, ["one", "two", "three"])
    state.select_first()

    # Act
    state.apply_filter("two")

    # Assert
    assert state.view.indices == [1]
    assert state.selected == 0
    assert selected_message(state) == "two"


def test_invalid_filter_keeps_previous_view() -> None:
    """Test that an invalid pattern only sets the error"""
    # Arrange
    state = LogViewState(max_entries=10)
    push_all(state, ["one", "two", "three"])
    state.apply_filter("t")
    before = state.view.indices

    # Act
    state.apply_filter("[")

    # Assert
    assert state.filter_error
    assert state.filter_engine.query == "t"
    assert state.view.indices == before


def test_valid_filter_clears_error() -> None:
    """Test that applying a good pattern removes a previous error"""
    # Arrange
    state = LogViewState()
    state.apply_filter("(")

    # Act
    state.apply_filter("x")

    # Assert
    assert state.filter_error is None


def test_filter_set_before_data(state: LogViewState) -> None:
    """Test that records arriving under a filter are renumbered on eviction"""
    # Arrange
    state.apply_filter("two|three")

    # Act
    push_all(state, ["one", "two", "three"])

    # Assert
    assert [r.message for r in state.store] == ["two", "three"]
    assert state.view.indices == [0, 1]
    assert selected_message(state) == "three"


def test_eviction_without_autoscroll_keeps_selected_record() -> None:
    """Test that eviction under a filter keeps the same record selected"""
    # Arrange
    state = LogViewState(max_entries=3, autoscroll=False)
    state.apply_filter("keep")
    push_all(state, ["drop 1", "keep a", "keep b"])
    state.select_last()

    # Act
    push_all(state, ["drop 2", "keep c"])

    # Assert
    assert [r.message for r in state.store] == ["keep b", "drop 2", "keep c"]
    assert state.view.indices == [0, 2]
    assert selected_message(state) == "keep b"


def test_eviction_of_selected_record_without_autoscroll() -> None:
    """Test that evicting the selected record selects its successor"""
    # Arrange
    state = LogViewState(max_entries=2, autoscroll=False)
    push_all(state, ["one", "two"])

    # Act
    push_all(state, ["three"])

    # Assert
    assert state.selected == 0
    assert selected_message(state) == "two"


def test_paused_autoscroll_appends_without_moving_selection() -> None:
    """Test that new records do not steal the selection when not following"""
    # Arrange
    state = LogViewState(max_entries=10, autoscroll=False)
    push_all(state, ["one"])

    # Act
    push_all(state, ["two", "three"])

    # Assert
    assert selected_message(state) == "one"
    assert len(state.view) == 3


def test_paused_autoscroll_skips_filtered_records() -> None:
    """Test that excluded records are not appended to the view"""
    # Arrange
    state = LogViewState(max_entries=10, autoscroll=False)
    state.apply_filter("keep")

    # Act
    push_all(state, ["keep 1", "drop", "keep 2"])

    # Assert
    assert state.view.indices == [0, 2]
    assert selected_message(state) == "keep 1"


def test_toggle_autoscroll_jumps_to_tail() -> None:
    """Test that turning autoscroll on selects the newest record"""
    # Arrange
    state = LogViewState(max_entries=10, autoscroll=False)
    push_all(state, ["one", "two", "three"])

    # Act
    state.toggle_autoscroll()

    # Assert
    assert state.autoscroll
    assert selected_message(state) == "three"


def test_toggle_autoscroll_off_freezes_offset() -> None:
    """Test that turning autoscroll off keeps the list window where it was"""
    # Arrange
    state = LogViewState(max_entries=20)
    push_all(state, [f"line {i}" for i in range(10)])
    state.set_list_geometry(3, 40, 10)
    pinned = state.list_viewport.offset

    # Act
    state.toggle_autoscroll()
    state.push(make_record("line 10"))

    # Assert
    assert pinned == 7
    assert not state.autoscroll
    assert state.list_viewport.offset == 7
    assert selected_message(state) == "line 9"


def test_paused_push_keeps_list_offset() -> None:
    """Test that a push without autoscroll does not move the list window"""
    # Arrange
    state = LogViewState(max_entries=20, autoscroll=False)
    push_all(state, [f"line {i}" for i in range(10)])
    state.set_list_geometry(3, 40, 10)
    state.select_last()

    # Act
    state.push(make_record("line 10"))

    # Assert
    assert state.list_viewport.offset == 7
    assert state.selected == 9
    assert len(state.view) == 11


def test_eviction_shifts_list_window_without_autoscroll() -> None:
    """Test that the window moves up with the renumbered selection on eviction"""
    # Arrange
    state = LogViewState(max_entries=10, autoscroll=False)
    push_all(state, [f"line {i}" for i in range(10)])
    state.set_list_geometry(3, 40, 10)
    for _ in range(5):
        state.select_next()
    before = (state.selected, state.list_viewport.offset)

    # Act
    state.push(make_record("line 10"))

    # Assert
    assert before == (5, 3)
    assert state.selected == 4
    assert state.list_viewport.offset == 2
    assert selected_message(state) == "line 5"


def test_follow_push_pins_window_to_tail() -> None:
    """Test that pushes under autoscroll keep the last rows on screen"""
    # Arrange
    state = LogViewState(max_entries=20)
    state.set_list_geometry(4, 40, 10)

    # Act
    push_all(state, [f"line {i}" for i in range(10)])

    # Assert
    assert state.list_viewport.offset == len(state.view) - 4
    assert state.selected == 9


def test_filter_apply_resets_horizontal_and_detail_scroll() -> None:
    """Test that applying a filter scrolls the list left and the detail to the top"""
    # Arrange
    state = LogViewState(max_entries=20)
    push_all(state, [f"line {i}" for i in range(10)])
    state.set_list_geometry(3, 10, 40)
    state.list_viewport.scroll_right()
    state.set_detail_geometry(2, 10, 10, 40)
    state.detail_viewport.scroll_down(3)
    state.detail_viewport.horiz_offset = 6
    scrolled = (
        state.list_viewport.horiz_offset,
        state.detail_viewport.scroll,
    )

    # Act
    state.apply_filter("line")

    # Assert
    assert scrolled == (4, 3)
    assert state.list_viewport.horiz_offset == 0
    assert state.detail_viewport.scroll == 0
    assert state.detail_viewport.horiz_offset == 0


def test_input_pause_discards_records() -> None:
    """Test that records are dropped while input is paused"""
    # Arrange
    state = LogViewState()
    state.toggle_input_pause()

    # Act
    state.ingest(make_record("lost"))
    state.toggle_input_pause()
    state.ingest(make_record("kept"))

    # Assert
    assert [r.message for r in state.store] == ["kept"]


def test_push_discovers_columns() -> None:
    """Test that new payload keys become columns"""
    # Act
    state = LogViewState()
    state.push(make_record('{"level": "info", "service": "api"}'))

    # Assert
    assert [col.name for col in state.columns][-1] == "service"


def test_navigation_on_empty_view_is_noop() -> None:
    """Test that navigation keys do nothing without records"""
    # Arrange
    state = LogViewState()

    # Act
    state.select_next()
    state.page_down()
    state.select_last()

    # Assert
    assert state.selected is None


def test_navigation_resets_detail_scroll() -> None:
    """Test that selecting another record scrolls the detail to the top"""
    # Arrange
    state = LogViewState(max_entries=10)
    push_all(state, ["one", "two"])
    state.set_detail_geometry(2, 20, 10, 20)
    state.detail_viewport.scroll_down(4)

    # Act
    state.select_previous()

    # Assert
    assert state.detail_viewport.scroll == 0


def test_page_moves_by_half_height() -> None:
    """Test half-page navigation"""
    # Arrange
    state = LogViewState(max_entries=20, autoscroll=False)
    push_all(state, [f"line {i}" for i in range(10)])
    state.set_list_geometry(4, 40, 10)

    # Act
    state.page_down()
    down = state.selected
    state.page_up()

    # Assert
    assert down == 2
    assert state.selected == 0


def test_list_window_follows_selection_without_autoscroll() -> None:
    """Test that moving below the pane scrolls it"""
    # Arrange
    state = LogViewState(max_entries=20, autoscroll=False)
    push_all(state, [f"line {i}" for i in range(10)])
    state.set_list_geometry(3, 40, 10)

    # Act
    state.select_last()

    # Assert
    assert state.list_viewport.offset == 7


def test_focus_and_zoom() -> None:
    """Test moving focus and zooming the focused pane"""
    # Arrange
    state = LogViewState()

    # Act
    state.focus_detail()
    state.toggle_zoom()

    # Assert
    assert state.focus is Focus.DETAIL
    assert state.zoom is Focus.DETAIL
    state.toggle_zoom()
    assert state.zoom is None
    state.toggle_focus()
    assert state.focus is Focus.LIST


def test_toggle_detail_wrap_records_change() -> None:
    """Test that wrap changes are visible to watchers"""
    # Arrange
    state = LogViewState()

    # Act
    state.toggle_detail_wrap()

    # Assert
    assert not state.detail_viewport.wrap
    assert "detail_viewport" in state.changes


def test_filter_input_prefills_active_query() -> None:
    """Test that the editor starts with the current pattern"""
    # Arrange
    state = LogViewState()
    state.apply_filter("error")

    # Act
    state.start_filter_input()

    # Assert
    assert state.mode == FilterInputMode("error", 5)


def test_confirm_filter_input_applies_pattern() -> None:
    """Test that confirming applies the buffer and returns to browsing"""
    # Arrange
    state = LogViewState(max_entries=10)
    push_all(state, ["one", "two"])
    state.start_filter_input()
    assert isinstance(state.mode, FilterInputMode)
    state.mode.insert("one")

    # Act
    state.confirm_filter_input()

    # Assert
    assert state.mode == NormalMode()
    assert state.filter_engine.query == "one"
    assert len(state.view) == 1


def test_confirm_invalid_filter_reports_error() -> None:
    """Test that an invalid pattern returns to browsing with an error"""
    # Arrange
    state = LogViewState()
    state.mode = FilterInputMode("(", 1)

    # Act
    state.confirm_filter_input()

    # Assert
    assert state.mode == NormalMode()
    assert state.filter_error
    assert not state.filter_engine.is_active


def test_cancel_filter_input() -> None:
    """Test that cancelling leaves the active filter untouched"""
    # Arrange
    state = LogViewState()
    state.apply_filter("a")
    state.mode = FilterInputMode("b", 1)

    # Act
    state.cancel_filter_input()

    # Assert
    assert state.mode == NormalMode()
    assert state.filter_engine.query == "a"


def test_overlays() -> None:
    """Test opening and closing the column selector and help"""
    # Arrange
    state = LogViewState()

    # Act
    state.open_column_select()
    columns_mode = state.mode
    state.close_overlay()
    state.toggle_help()
    help_mode = state.mode
    state.toggle_help()

    # Assert
    assert columns_mode == ColumnSelectMode()
    assert help_mode == HelpMode()
    assert state.mode == NormalMode()


def test_field_view_needs_a_record() -> None:
    """Test that the field view does not open without a selection"""
    # Arrange
    state = LogViewState()

    # Act
    state.enter_field_view()

    # Assert
    assert state.mode == NormalMode()
    assert state.field_explorer is None


def test_field_view_filter_by_label() -> None:
    """Test filtering the fields of the selected record"""
    # Arrange
    state = LogViewState()
    state.push(make_record('{"a": 1, "nested": {"c": 3}}'))
    state.enter_field_view()
    explorer = state.field_explorer
    assert explorer is not None

    # Act
    explorer.set_filter("nested")

    # Assert
    assert [node.path for node in explorer.visible_nodes] == ["nested", "nested.c"]


def test_field_view_is_discarded_on_exit() -> None:
    """Test that leaving the field view drops its state"""
    # Arrange
    state = LogViewState()
    state.push(make_record('{"a": 1}'))
    state.enter_field_view()
    assert state.field_explorer is not None
    state.field_explorer.set_filter("a")

    # Act
    state.exit_field_view()
    state.enter_field_view()

    # Assert
    assert isinstance(state.mode, FieldViewMode)
    assert state.mode.explorer.filter_text == ""


def test_promote_selected_field() -> None:
    """Test that the selected value becomes an escaped filter pattern"""
    # Arrange
    state = LogViewState()
    state.push(make_record('{"path": "/api/v1?x=1"}'))
    state.enter_field_view()
    assert state.field_explorer is not None
    state.field_explorer.set_filter("path")
    state.focus_detail()

    # Act
    state.promote_selected_field()

    # Assert
    assert isinstance(state.mode, FilterInputMode)
    assert state.mode.buffer == r"/api/v1\?x=1"
    assert state.mode.cursor_pos == len(state.mode.buffer)
    assert state.focus is Focus.LIST


def test_promoted_pattern_matches_the_record() -> None:
    """Test that confirming a promoted value keeps the source record"""
    # Arrange
    state = LogViewState(max_entries=10)
    push_all(state, ['{"user": "a.b"}', '{"user": "axb"}'])
    state.select_first()
    state.enter_field_view()
    assert state.field_explorer is not None
    state.field_explorer.set_filter("user")
    state.promote_selected_field()

    # Act
    state.confirm_filter_input()

    # Assert
    assert state.view.indices == [0]
    assert state.current_record is not None
    assert state.current_record.payload == {"user": "a.b"}


def test_promote_without_selection_is_noop() -> None:
    """Test that promoting with no visible field keeps the field view"""
    # Arrange
    state = LogViewState()
    state.push(make_record('{"a": 1}'))
    state.enter_field_view()
    assert state.field_explorer is not None
    state.field_explorer.set_filter("zzz")

    # Act
    state.promote_selected_field()

    # Assert
    assert isinstance(state.mode, FieldViewMode)
    assert state.selected_field() is None
