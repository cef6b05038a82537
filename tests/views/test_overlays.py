"""Test the column selector and help overlays"""

from jtail.helpers.curses_utils import Position, Size, Viewport
from jtail.models.columns import ColumnRegistry
from jtail.views.column_select import TITLE, ColumnSelectOverlay
from jtail.views.help import SHORTCUTS, HelpOverlay, help_lines
from tests.infra.mock_output_controller import MockOutputController, MockWindow


def _window(output: MockOutputController, viewport: Viewport) -> MockWindow:
    window = output.create_main_window().derwin(viewport)
    assert isinstance(window, MockWindow)
    return window


def test_column_overlay_is_centered() -> None:
    """Test the overlay size and position"""
    # Arrange
    overlay = ColumnSelectOverlay(ColumnRegistry())

    # Act
    viewport = overlay.viewport(Size(24, 80))

    # Assert
    assert viewport == Viewport(Position(8, 5), Size(7, 70))


def test_column_overlay_lists_columns() -> None:
    """Test that every column is listed with its enabled mark"""
    # Arrange
    columns = ColumnRegistry()
    columns.discover({"service": "api"})
    columns.move_cursor(3)
    output = MockOutputController(Size(24, 80))
    overlay = ColumnSelectOverlay(columns)
    window = _window(output, overlay.viewport(Size(24, 80)))

    # Act
    overlay.draw(window)

    # Assert
    lines = window.get_all_lines()
    assert lines[0].startswith(f"┌ {TITLE} ")
    assert lines[1].startswith("│  [x] timestamp")
    assert lines[4].startswith("│▸ [ ] service")


def test_column_overlay_scrolls_to_cursor() -> None:
    """Test that the cursor stays visible in a short overlay"""
    # Arrange
    columns = ColumnRegistry()
    columns.discover({f"key{i}": i for i in range(10)})
    columns.cursor_last()
    output = MockOutputController(Size(10, 60))
    overlay = ColumnSelectOverlay(columns)
    window = _window(output, overlay.viewport(Size(10, 60)))

    # Act
    overlay.draw(window)

    # Assert
    lines = window.get_all_lines()
    assert lines[-2].startswith("│▸ [ ] key9")


def test_help_lines_cover_every_section() -> None:
    """Test that section titles and shortcuts are all listed"""
    # Act
    lines = help_lines()

    # Assert
    titles = [section for _, section in lines if section is not None]
    assert titles == [section for section, _ in SHORTCUTS]
    assert any(line.startswith("Ctrl+T") for line, _ in lines)


def test_help_overlay_draws_sections() -> None:
    """Test drawing the help box"""
    # Arrange
    output = MockOutputController(Size(60, 100))
    window = _window(output, HelpOverlay.viewport(Size(60, 100)))

    # Act
    HelpOverlay.draw(window)

    # Assert
    screen = output.get_screen()
    assert "Shortcuts" in screen
    assert "Toggle autoscroll" in screen
    assert "Filter field names" in screen
