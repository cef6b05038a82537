"""Browsable, filterable flattening of one record's payload"""

import dataclasses
from typing import Any, Iterator

from jtail.models.filtered_view import FilteredView, SelectStrategy
from jtail.models.log_record import format_value
from jtail.models.viewport import DetailViewport, ListViewport

ROOT_LABEL = "(root)"


@dataclasses.dataclass(frozen=True)
class FieldNode:
    """One node of a payload tree, addressed by its path label"""

    path: str
    value: Any

    @property
    def is_leaf(self) -> bool:
        """Whether the node holds a scalar"""
        return not isinstance(self.value, (dict, list))

    @property
    def text(self) -> str:
        """The node value as literal text"""
        return format_value(self.value)


def flatten_payload(payload: Any) -> list[FieldNode]:
    """List every node of the payload in pre-order"""
    return list(_walk(payload, ""))


def _walk(value: Any, path: str) -> Iterator[FieldNode]:
    yield FieldNode(path or ROOT_LABEL, value)
    if isinstance(value, dict):
        for key, child in value.items():
            yield from _walk(child, f"{path}.{key}" if path else str(key))
    elif isinstance(value, list):
        for index, child in enumerate(value):
            yield from _walk(child, f"{path}[{index}]")


class FieldExplorer:
    """Field view state: nodes, label filter, selection and both viewports"""

    def __init__(self, payload: Any) -> None:
        self._nodes = flatten_payload(payload)
        self._view = FilteredView[FieldNode]()
        self._view.rebuild(
            self._nodes, lambda _: True, SelectStrategy.PRESERVE_OR_FIRST
        )
        self.filter_text: str = ""
        self.list_viewport = ListViewport()
        self.detail_viewport = DetailViewport()
        self.zoom: bool = False

    @property
    def nodes(self) -> list[FieldNode]:
        """All nodes, unfiltered"""
        return self._nodes.copy()

    @property
    def view(self) -> FilteredView[FieldNode]:
        """Positions of the nodes matching the label filter"""
        return self._view

    @property
    def visible_nodes(self) -> list[FieldNode]:
        """The nodes matching the label filter, in order"""
        return [self._nodes[i] for i in self._view]

    @property
    def selected(self) -> int | None:
        """The selected position among the visible nodes"""
        return self._view.selected

    @property
    def selected_node(self) -> FieldNode | None:
        """The selected node"""
        index = self._view.selected_source_index
        return None if index is None else self._nodes[index]

    def set_filter(self, text: str) -> bool:
        """Filter nodes by case-insensitive label substring"""
        self.filter_text = text
        needle = text.lower()
        changed = self._view.rebuild(
            self._nodes,
            lambda node: needle in node.path.lower(),
            SelectStrategy.PRESERVE_OR_FIRST,
        )
        if changed:
            self.detail_viewport.reset()
        self.list_viewport.follow(self._view.selected)
        return changed

    def append_filter(self, char: str) -> bool:
        """Add a character to the label filter"""
        return self.set_filter(self.filter_text + char)

    def pop_filter(self) -> bool:
        """Remove the last character of the label filter"""
        if not self.filter_text:
            return False
        return self.set_filter(self.filter_text[:-1])

    def clear_filter(self) -> bool:
        """Remove the label filter"""
        if not self.filter_text:
            return False
        return self.set_filter("")

    def move_selection(self, delta: int) -> None:
        """Move the selection by delta rows"""
        if not len(self._view):
            return
        previous = self._view.selected
        self._view.move(delta)
        if self._view.selected != previous:
            self.detail_viewport.reset()
        self.list_viewport.follow(self._view.selected)

    def half_page_down(self) -> None:
        """Move the selection, or scroll the value when zoomed, by half a page"""
        if self.zoom:
            self.detail_viewport.scroll_down(self.detail_viewport.half_page)
        else:
            self.move_selection(self.list_viewport.half_page)

    def half_page_up(self) -> None:
        """Move the selection, or scroll the value when zoomed, back half a page"""
        if self.zoom:
            self.detail_viewport.scroll_up(self.detail_viewport.half_page)
        else:
            self.move_selection(-self.list_viewport.half_page)

    def toggle_zoom(self) -> None:
        """Show the value pane alone or next to the node list"""
        self.zoom = not self.zoom

    def set_list_geometry(self, height: int, width: int) -> None:
        """Record the measured size of the node list pane"""
        self.list_viewport.height = height
        self.list_viewport.width = width
        self.list_viewport.follow(self._view.selected)

    def set_detail_geometry(
        self, height: int, width: int, total_lines: int, max_line_width: int
    ) -> None:
        """Record the measured size and content of the value pane"""
        self.detail_viewport.height = height
        self.detail_viewport.width = width
        self.detail_viewport.total_lines = total_lines
        self.detail_viewport.max_line_width = max_line_width
        self.detail_viewport.clamp()
