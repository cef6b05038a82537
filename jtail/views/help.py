"""Handles drawing of the help overlay"""

from jtail.helpers.curses_utils import Color, Position, Size, TextAttribute, Viewport
from jtail.output_controller import Window
from jtail.views.widgets import centered, draw_box

KEY_WIDTH = 20

SHORTCUTS: list[tuple[str, list[tuple[str, str]]]] = [
    (
        "Global",
        [
            ("q / Ctrl+C", "Quit"),
            ("?", "Toggle help"),
            ("/", "Filter logs (regex)"),
            ("c", "Choose columns"),
            ("a", "Toggle autoscroll"),
            ("P", "Pause or resume input"),
            ("Ctrl+L", "Force redraw"),
            ("Ctrl+T", "Open field viewer"),
            ("Ctrl+E", "Open record in $EDITOR"),
            ("Ctrl+N / Ctrl+P", "Next / previous log (any pane)"),
            ("z", "Toggle zoom of the focused pane"),
            ("w", "Toggle detail wrap"),
        ],
    ),
    (
        "List",
        [
            ("j/k, Up/Down", "Move selection"),
            ("Ctrl+D / Ctrl+U", "Half-page down/up"),
            ("g / G", "Jump to top/bottom"),
            ("h / l", "Scroll left/right"),
            ("0 / $", "Scroll to start/end"),
            ("Enter, Tab, Right", "Focus details"),
        ],
    ),
    (
        "Detail",
        [
            ("j/k, Up/Down", "Scroll"),
            ("Ctrl+D / Ctrl+U", "Half-page down/up"),
            ("g / G", "Jump to top/bottom"),
            ("h / l, 0 / $", "Scroll horizontally (wrap off)"),
            ("Tab, Esc, Left", "Focus list"),
        ],
    ),
    (
        "Filter",
        [
            ("Enter", "Apply"),
            ("Esc", "Cancel"),
            ("Ctrl+U", "Clear"),
        ],
    ),
    (
        "Columns",
        [
            ("j/k", "Move cursor"),
            ("Space / Enter", "Toggle column"),
            ("J / K", "Move column down/up"),
            ("Esc / c", "Close"),
        ],
    ),
    (
        "Fields",
        [
            ("typing", "Filter field names"),
            ("Backspace / Ctrl+X", "Delete a character / clear filter"),
            ("Up/Down, Ctrl+J/K", "Move selection"),
            ("Ctrl+D / Ctrl+U", "Half-page (value when zoomed)"),
            ("Ctrl+Z", "Toggle value zoom"),
            ("Ctrl+W", "Toggle value wrap"),
            ("Left/Right, Home/End", "Scroll value (wrap off)"),
            ("/", "Filter logs by the field value"),
            ("Ctrl+E", "Open value in $EDITOR"),
            ("Esc / Ctrl+T", "Close"),
        ],
    ),
]


def help_lines() -> list[tuple[str, str | None]]:
    """Get the help text as (line, section title or None) pairs"""
    lines: list[tuple[str, str | None]] = []
    for section, shortcuts in SHORTCUTS:
        if lines:
            lines.append(("", None))
        lines.append((section, section))
        for keys, description in shortcuts:
            lines.append((f"{keys:<{KEY_WIDTH}}{description}", None))
    return lines


class HelpOverlay:
    """Draws the shortcut list in a centered box"""

    @staticmethod
    def viewport(terminal: Size) -> Viewport:
        """Get where the overlay goes on the terminal"""
        width = max(50, min(90, terminal.width - 10))
        height = max(8, min(len(help_lines()) + 2, terminal.height - 2))
        return centered(terminal, Size(height, width))

    @staticmethod
    def draw(window: Window) -> None:
        """Draw help screen"""
        window.erase()
        inner = draw_box(window, "Shortcuts")
        for y, (line, section) in enumerate(help_lines()[: inner.height]):
            if section is not None:
                window.addstr(
                    Position(y + 1, 1),
                    line[: inner.width],
                    attributes=[TextAttribute.BOLD],
                )
            else:
                window.addstr(
                    Position(y + 1, 1), line[: inner.width], color=Color.DEFAULT
                )
        window.noutrefresh()
