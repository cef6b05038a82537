"""Handles the detail pane of the selected record"""

from jtail.helpers.curses_utils import Color, Position, color_for_level
from jtail.helpers.text_utils import pretty_json_lines, slice_line, wrap_lines
from jtail.models.log_record import Record
from jtail.models.modes import Focus
from jtail.models.viewer_state import LogViewState
from jtail.models.viewport import DetailViewport
from jtail.output_controller import Window
from jtail.views.widgets import draw_box

WAITING_TEXT = "Waiting for logs..."
LEVEL_LINE = 1


def detail_lines(record: Record | None) -> list[str]:
    """Get the unwrapped text of the detail pane"""
    if record is None:
        return [WAITING_TEXT]
    return [
        f"timestamp: {record.timestamp}",
        f"level: {record.level.upper()}",
        f"message: {record.message}",
        "",
        *pretty_json_lines(record.payload),
    ]


class TextBlock:
    """Lines laid out for a scrollable pane, wrapped or not"""

    def __init__(self, lines: list[str], wrap: bool, width: int) -> None:
        self.max_line_width = max((len(line) for line in lines), default=0)
        self.lines: list[str] = []
        self.sources: list[int] = []
        for source, line in enumerate(lines):
            shown = wrap_lines([line], width) if wrap else [line]
            self.lines.extend(shown)
            self.sources.extend([source] * len(shown))

    def draw(
        self,
        window: Window,
        viewport: DetailViewport,
        colors: dict[int, Color] | None = None,
    ) -> None:
        """Draw the scrolled part inside a box; colors are keyed by source line"""
        colors = colors or {}
        for y in range(max(0, viewport.height)):
            index = viewport.scroll + y
            if index >= len(self.lines):
                break
            text = slice_line(self.lines[index], viewport.horiz_offset, viewport.width)
            window.addstr(
                Position(y + 1, 1), text, color=colors.get(self.sources[index])
            )


class DetailPane:
    """Draws the selected record as labelled fields followed by its JSON"""

    def __init__(self, state: LogViewState) -> None:
        self._state = state

    def draw(self, window: Window) -> None:
        """Draw the pane and report its geometry to the state"""
        state = self._state
        window.erase()
        border = Color.HEADER if state.focus is Focus.DETAIL else None
        inner = draw_box(window, "Details", border)

        record = state.current_record
        viewport = state.detail_viewport
        block = TextBlock(detail_lines(record), viewport.wrap, inner.width)
        state.set_detail_geometry(
            inner.height, inner.width, len(block.lines), block.max_line_width
        )

        colors = {}
        if record is not None:
            colors[LEVEL_LINE] = color_for_level(record.level)
        block.draw(window, viewport, colors)
        window.noutrefresh()
