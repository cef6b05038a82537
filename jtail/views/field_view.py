"""Handles the field view: node list and selected value"""

from jtail.helpers.curses_utils import Color, Position, Size, Viewport
from jtail.helpers.text_utils import pretty_json_lines, single_line
from jtail.models.field_explorer import FieldExplorer, FieldNode
from jtail.output_controller import Window
from jtail.views.detail_pane import TextBlock
from jtail.views.widgets import SELECTED_MARKER, draw_box, draw_row, split_horizontal

FIELD_LIST_PERCENT = 40


def node_label(node: FieldNode) -> str:
    """Get the list text of a node"""
    if node.is_leaf:
        return single_line(f"{node.path} = {node.text}")
    kind = "{...}" if isinstance(node.value, dict) else f"[{len(node.value)}]"
    return f"{node.path} {kind}"


def value_lines(node: FieldNode | None) -> list[str]:
    """Get the unwrapped text of the value pane"""
    if node is None:
        return ["No matching fields"]
    if isinstance(node.value, str):
        return node.value.splitlines() or [""]
    if node.is_leaf:
        return [node.text]
    return pretty_json_lines(node.value)


def list_title(explorer: FieldExplorer) -> str:
    """Get the title of the node list"""
    if explorer.filter_text:
        return f"Fields (filter: {explorer.filter_text})"
    return "Fields (Ctrl+T or Esc to close)"


class FieldView:
    """Draws the field explorer, splitting the window between list and value"""

    @staticmethod
    def layout(explorer: FieldExplorer, size: Size) -> tuple[Viewport, Viewport]:
        """Get the list and value areas for the window size"""
        area = Viewport(Position(0, 0), size)
        if explorer.zoom:
            return Viewport(Position(0, 0), Size(0, 0)), area
        return split_horizontal(area, FIELD_LIST_PERCENT)

    def draw(
        self, explorer: FieldExplorer, list_win: Window | None, value_win: Window
    ) -> None:
        """Draw both panes and report their geometry to the explorer"""
        if list_win is not None:
            self._draw_list(explorer, list_win)
        self._draw_value(explorer, value_win)

    @staticmethod
    def _draw_list(explorer: FieldExplorer, window: Window) -> None:
        window.erase()
        inner = draw_box(window, list_title(explorer), Color.HEADER)
        explorer.set_list_geometry(inner.height, inner.width - len(SELECTED_MARKER))

        nodes = explorer.visible_nodes
        for y, position in enumerate(explorer.list_viewport.visible_rows(len(nodes))):
            if y >= inner.height:
                break
            draw_row(
                window,
                y,
                node_label(nodes[position]),
                selected=position == explorer.selected,
            )
        window.noutrefresh()

    @staticmethod
    def _draw_value(explorer: FieldExplorer, window: Window) -> None:
        window.erase()
        node = explorer.selected_node
        title = f"Field: {node.path}" if node is not None else "Field"
        inner = draw_box(window, title)

        viewport = explorer.detail_viewport
        block = TextBlock(value_lines(node), viewport.wrap, inner.width)
        explorer.set_detail_geometry(
            inner.height, inner.width, len(block.lines), block.max_line_width
        )
        block.draw(window, viewport)
        window.noutrefresh()
