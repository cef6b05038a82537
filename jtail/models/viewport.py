"""Scroll windows for the list and detail panes.

Heights and widths are whatever the renderer last measured; zero is treated
as one wherever it is used as a window size or divisor.
"""

import dataclasses

MIN_HORIZONTAL_STEP = 4


def _horizontal_step(width: int) -> int:
    return max(MIN_HORIZONTAL_STEP, width // 4)


@dataclasses.dataclass
class ListViewport:
    """Vertical row window plus a horizontal character offset"""

    offset: int = 0
    horiz_offset: int = 0
    height: int = 0
    width: int = 0
    content_width: int = 0

    @property
    def half_page(self) -> int:
        """Rows moved by a half-page jump"""
        return max(1, max(1, self.height) // 2)

    def follow(self, selected: int | None) -> None:
        """Keep the selected row inside the window with minimal movement"""
        if selected is None:
            return
        height = max(1, self.height)
        if selected >= self.offset + height:
            self.offset = selected + 1 - height
        elif selected < self.offset:
            self.offset = selected

    def pin_to_tail(self, row_count: int, selected: int | None) -> None:
        """Show the last rows, unless that would hide the selection"""
        self.offset = max(0, row_count - max(1, self.height))
        if selected is not None and selected < self.offset:
            self.offset = selected

    def visible_rows(self, row_count: int) -> range:
        """The row positions inside the window"""
        return range(self.offset, min(row_count, self.offset + max(1, self.height)))

    def scroll_left(self) -> None:
        """Scroll a quarter pane to the left"""
        self.horiz_offset = max(0, self.horiz_offset - _horizontal_step(self.width))
        self.clamp_horizontal()

    def scroll_right(self) -> None:
        """Scroll a quarter pane to the right"""
        self.horiz_offset += _horizontal_step(self.width)
        self.clamp_horizontal()

    def scroll_home(self) -> None:
        """Scroll to the first column"""
        self.horiz_offset = 0

    def scroll_end(self) -> None:
        """Scroll so the widest row ends at the pane edge"""
        self.horiz_offset = max(0, self.content_width - self.width)
        self.clamp_horizontal()

    def clamp_horizontal(self) -> None:
        """Keep the horizontal offset within the content"""
        max_offset = max(0, self.content_width - self.width)
        self.horiz_offset = max(0, min(self.horiz_offset, max_offset))


@dataclasses.dataclass
class DetailViewport:  # pylint: disable=too-many-instance-attributes
    """Wrapped-line scroll offset, horizontal offset and wrap toggle"""

    scroll: int = 0
    horiz_offset: int = 0
    wrap: bool = True
    height: int = 0
    width: int = 0
    total_lines: int = 0
    max_line_width: int = 0

    @property
    def half_page(self) -> int:
        """Lines moved by a half-page scroll"""
        return max(1, max(1, self.height) // 2)

    @property
    def max_scroll(self) -> int:
        """Largest scroll offset that still fills the pane"""
        return max(0, self.total_lines - max(1, self.height))

    def reset(self) -> None:
        """Go back to the top-left corner"""
        self.scroll = 0
        self.horiz_offset = 0

    def scroll_down(self, lines: int = 1) -> None:
        """Scroll towards the end"""
        if self.total_lines == 0:
            return
        self.scroll = min(self.scroll + lines, self.max_scroll)

    def scroll_up(self, lines: int = 1) -> None:
        """Scroll towards the top"""
        self.scroll = max(0, self.scroll - lines)

    def scroll_top(self) -> None:
        """Jump to the top"""
        self.reset()

    def scroll_bottom(self) -> None:
        """Jump to the last page"""
        self.scroll = self.max_scroll

    def scroll_left(self) -> None:
        """Scroll a quarter pane to the left"""
        if self.wrap:
            return
        self.horiz_offset = max(0, self.horiz_offset - _horizontal_step(self.width))
        self.clamp_horizontal()

    def scroll_right(self) -> None:
        """Scroll a quarter pane to the right"""
        if self.wrap:
            return
        self.horiz_offset += _horizontal_step(self.width)
        self.clamp_horizontal()

    def scroll_home(self) -> None:
        """Scroll to the first column"""
        self.horiz_offset = 0

    def scroll_end(self) -> None:
        """Scroll so the widest line ends at the pane edge"""
        if self.wrap:
            return
        self.horiz_offset = max(0, self.max_line_width - self.width)
        self.clamp_horizontal()

    def toggle_wrap(self) -> None:
        """Switch between wrapping and horizontal scrolling"""
        self.wrap = not self.wrap
        self.reset()

    def clamp(self) -> None:
        """Keep both offsets within the content"""
        self.scroll = max(0, min(self.scroll, self.max_scroll))
        self.clamp_horizontal()

    def clamp_horizontal(self) -> None:
        """Keep the horizontal offset within the content"""
        if self.wrap:
            self.horiz_offset = 0
            return
        max_offset = max(0, self.max_line_width - max(1, self.width))
        self.horiz_offset = max(0, min(self.horiz_offset, max_offset))
