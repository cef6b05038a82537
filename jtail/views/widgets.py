"""Drawing helpers shared by the views"""

from jtail.helpers.curses_utils import Color, Position, Size, TextAttribute, Viewport
from jtail.output_controller import Window

SELECTED_MARKER = "▸ "
UNSELECTED_MARKER = "  "


def draw_box(window: Window, title: str, color: Color | None = None) -> Size:
    """Draw a border with a title around the window; returns the inner size"""
    height, width = window.getmaxyx()
    if height < 2 or width < 2:
        return Size(0, 0)

    horizontal = "─" * (width - 2)
    window.addstr(Position(0, 0), f"┌{horizontal}┐", color=color)
    for y in range(1, height - 1):
        window.addstr(Position(y, 0), "│", color=color)
        window.addstr(Position(y, width - 1), "│", color=color)
    window.addstr(Position(height - 1, 0), f"└{horizontal}┘", color=color)
    if title and width > 4:
        window.addstr(
            Position(0, 1),
            f" {title} "[: width - 2],
            color=color,
            attributes=[TextAttribute.BOLD],
        )
    return Size(height - 2, width - 2)


def split_horizontal(area: Viewport, left_percent: int) -> tuple[Viewport, Viewport]:
    """Split an area into a left and a right part"""
    left_width = area.width * left_percent // 100
    left = Viewport(area.pos, Size(area.height, left_width))
    right = Viewport(
        Position(area.y, area.x + left_width),
        Size(area.height, area.width - left_width),
    )
    return left, right


def centered(area: Size, size: Size) -> Viewport:
    """Get a viewport of the given size centered in the area"""
    height = min(size.height, area.height)
    width = min(size.width, area.width)
    return Viewport(
        Position((area.height - height) // 2, (area.width - width) // 2),
        Size(height, width),
    )


def draw_row(
    window: Window,
    y: int,
    text: str,
    *,
    selected: bool,
    color: Color | None = None,
) -> None:
    """Draw a list row inside a box, with the selection marker"""
    _, width = window.getmaxyx()
    inner_width = width - 2
    marker = SELECTED_MARKER if selected else UNSELECTED_MARKER
    line = (marker + text)[:inner_width].ljust(inner_width)
    window.addstr(
        Position(y + 1, 1),
        line,
        color=color,
        attributes=[TextAttribute.REVERSE] if selected else None,
    )
