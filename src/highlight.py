"""Node and edge emphasis for the current selection."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from graph import PedigreeGraph
from models import Animal


class NodeHighlightState(str, Enum):
    SELECTED = "selected"
    COMMON_ANCESTOR = "common_ancestor"
    DIRECT_RELATION = "direct_relation"  # parent or child of a selected animal
    VISIBLE = "visible"
    HIDDEN = "hidden"  # outside the visible scope


@dataclass(frozen=True)
class HighlightStyle:
    opacity: float
    stroke_width: float
    fill_opacity: float
    stroke_dasharray: str | None = None
    highlight: str | None = None


HIGHLIGHT_STYLES = {
    NodeHighlightState.SELECTED: HighlightStyle(opacity=1.0, stroke_width=3, fill_opacity=1.0),
    NodeHighlightState.COMMON_ANCESTOR: HighlightStyle(
        opacity=1.0,
        stroke_width=2,
        fill_opacity=0.95,
        stroke_dasharray="4,2",
        highlight="yellow",
    ),
    NodeHighlightState.DIRECT_RELATION: HighlightStyle(
        opacity=0.9, stroke_width=2, fill_opacity=0.9
    ),
    NodeHighlightState.VISIBLE: HighlightStyle(opacity=0.6, stroke_width=1, fill_opacity=0.7),
    NodeHighlightState.HIDDEN: HighlightStyle(opacity=0.3, stroke_width=1, fill_opacity=0.5),
}


def get_node_highlight_state(
    node_id: str,
    selection: set[str],
    common_ancestors: set[str],
    visible_nodes: set[str],
    graph: PedigreeGraph,
) -> NodeHighlightState:
    """Determine how strongly a node is emphasised, strongest state first."""
    if node_id in selection:
        return NodeHighlightState.SELECTED

    if node_id in common_ancestors:
        return NodeHighlightState.COMMON_ANCESTOR

    for selected_id in selection:
        if node_id in graph.parents_of(selected_id) or node_id in graph.children_of(selected_id):
            return NodeHighlightState.DIRECT_RELATION

    if node_id in visible_nodes:
        return NodeHighlightState.VISIBLE

    return NodeHighlightState.HIDDEN


def get_node_opacity(
    node_id: str,
    selection: set[str],
    common_ancestors: set[str],
    visible_nodes: set[str],
) -> float:
    if node_id in selection or node_id in common_ancestors:
        return 1.0
    if not selection:
        return 0.8
    if node_id in visible_nodes:
        return 0.6
    return 0.3


def get_highlighted_edges(
    selection: set[str], visible_nodes: set[str], graph: PedigreeGraph
) -> set[tuple[str, str]]:
    """(parent, child) pairs linking a selected animal to a visible parent or child."""
    highlighted: set[tuple[str, str]] = set()

    for selected_id in selection:
        for parent_id in graph.parents_of(selected_id):
            if parent_id in visible_nodes:
                highlighted.add((parent_id, selected_id))
        for child_id in graph.children_of(selected_id):
            if child_id in visible_nodes:
                highlighted.add((selected_id, child_id))

    return highlighted


def get_edge_opacity(
    from_id: str,
    to_id: str,
    selection: set[str],
    highlighted_edges: set[tuple[str, str]],
    visible_nodes: set[str],
) -> float:
    if (from_id, to_id) in highlighted_edges:
        return 1.0
    if not selection:
        return 0.6
    if from_id in visible_nodes and to_id in visible_nodes:
        return 0.4
    return 0.2


def get_top_relevant_nodes(
    selection: set[str], animals: Iterable[Animal], max_count: int = 3
) -> list[Animal]:
    """Selected animals in name order, for summaries like "5 animals selected"."""
    selected = sorted((a for a in animals if a.id in selection), key=lambda a: a.name.casefold())
    return selected[:max_count]
