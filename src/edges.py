"""Elbow connectors between positioned parents and children."""

from collections.abc import Iterable

from models import LayoutConfig, LayoutEdge, LayoutNode

Point = tuple[float, float]


def elbow_points(
    parent: LayoutNode, child: LayoutNode, config: LayoutConfig
) -> list[Point]:
    """
    Corner points of the connector from parent to child.

    Down from the bottom-center of the parent, across at the midpoint between
    the parent's bottom edge and the child's top edge, then down into the
    top-center of the child.
    """
    start_x = parent.x + config.node_width / 2
    start_y = parent.y + config.node_height
    end_x = child.x + config.node_width / 2
    end_y = child.y
    mid_y = (start_y + end_y) / 2

    return [(start_x, start_y), (start_x, mid_y), (end_x, mid_y), (end_x, end_y)]


def _fmt(value: float) -> str:
    # 100.0 -> "100", 12.5 -> "12.5"
    value = round(float(value), 3)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def elbow_path(parent: LayoutNode, child: LayoutNode, config: LayoutConfig) -> str:
    """SVG path definition for the elbow connector."""
    (x0, y0), *rest = elbow_points(parent, child, config)
    segments = [f"M{_fmt(x0)},{_fmt(y0)}"]
    segments.extend(f"L{_fmt(x)},{_fmt(y)}" for x, y in rest)
    return " ".join(segments)


def build_edges(nodes: Iterable[LayoutNode], config: LayoutConfig) -> list[LayoutEdge]:
    """One edge per positioned parent -> child pair, father before mother."""
    nodes = list(nodes)
    node_map = {n.id: n for n in nodes}
    edges: list[LayoutEdge] = []

    for child in nodes:
        for parent_id in (child.father_id, child.mother_id):
            parent = node_map.get(parent_id) if parent_id else None
            if parent is None:
                continue
            edges.append(
                LayoutEdge(
                    from_id=parent.id,
                    to_id=child.id,
                    path=elbow_path(parent, child, config),
                )
            )

    return edges
