"""Layered layout of an arbitrary selection using Graphviz dot via pydot."""

import asyncio
from collections.abc import Callable, Iterable
import logging
import shlex

import pydot

from config import settings
from edges import build_edges
from graph import build_graph, get_visible_nodes
from models import Animal, LayoutConfig, LayoutNode, LayoutResult, compute_bounds
from pedigree import to_subject

logger = logging.getLogger(__name__)

POINTS_PER_INCH = 72.0

DotRunner = Callable[[pydot.Dot], str]


class LayoutEngineError(RuntimeError):
    """Graphviz failed or produced output that could not be read."""


def build_dot_graph(
    animals: list[Animal], config: LayoutConfig
) -> tuple[pydot.Dot, dict[str, str]]:
    """
    Build the pydot graph submitted to dot.

    Node names are synthetic (n0, n1, ...) so animal ids never need quoting.

    Returns:
        The graph and a mapping of node name -> animal id
    """
    P = pydot.Dot(graph_type="digraph")
    P.set("rankdir", "TB")  # Top-to-bottom (ancestors at top)
    P.set("splines", "false")  # Edges are drawn as elbows afterwards
    P.set("nodesep", f"{settings.dot_node_gap / POINTS_PER_INCH:.4f}")
    P.set("ranksep", f"{settings.dot_rank_gap / POINTS_PER_INCH:.4f}")

    width_in = f"{config.node_width / POINTS_PER_INCH:.4f}"
    height_in = f"{config.node_height / POINTS_PER_INCH:.4f}"

    names: dict[str, str] = {}
    name_for_id: dict[str, str] = {}
    for i, animal in enumerate(animals):
        name = f"n{i}"
        names[name] = animal.id
        name_for_id[animal.id] = name
        P.add_node(
            pydot.Node(
                name,
                label="",
                shape="box",
                fixedsize="true",
                width=width_in,
                height=height_in,
                margin="0",
            )
        )

    # One edge per parent -> child pair inside the scope
    for animal in animals:
        for parent_id in (animal.sire_id, animal.dam_id):
            if parent_id and parent_id in name_for_id:
                P.add_edge(pydot.Edge(name_for_id[parent_id], name_for_id[animal.id]))

    return P, names


def run_dot(graph: pydot.Dot) -> str:
    """Run Graphviz and return its plain-text layout."""
    try:
        output = graph.create(prog=settings.dot_program, format="plain")
    except Exception as exc:
        # pydot reports a missing binary and a failing dot differently across versions
        raise LayoutEngineError(f"Graphviz {settings.dot_program} failed: {exc}") from exc
    return output.decode("utf-8")


def parse_plain_layout(plain_text: str, names: dict[str, str]) -> dict[str, tuple[float, float]]:
    """
    Read node positions from Graphviz plain output.

    Plain output gives node centers in inches with y pointing up; the result is
    the top-left corner of each node box in points with y pointing down.

    Returns:
        Mapping of animal id -> (x, y)
    """
    lines = [ln.strip() for ln in plain_text.splitlines() if ln.strip()]
    if not lines or not lines[0].startswith("graph "):
        raise LayoutEngineError("unexpected Graphviz plain output: missing graph header")

    header = lines[0].split()
    try:
        graph_height = float(header[3])
    except (IndexError, ValueError) as exc:
        raise LayoutEngineError("unexpected Graphviz plain output: malformed graph header") from exc

    positions: dict[str, tuple[float, float]] = {}
    for line in lines[1:]:
        if line == "stop":
            break
        parts = shlex.split(line)
        if not parts or parts[0] != "node":
            continue
        if len(parts) < 6:
            raise LayoutEngineError("unexpected Graphviz plain output: malformed node line")

        animal_id = names.get(parts[1])
        if animal_id is None:
            continue
        try:
            cx, cy, w, h = (float(v) for v in parts[2:6])
        except ValueError as exc:
            raise LayoutEngineError(
                f"unexpected Graphviz plain output: invalid numeric data for {parts[1]}"
            ) from exc

        x = (cx - w / 2) * POINTS_PER_INCH
        y = (graph_height - cy - h / 2) * POINTS_PER_INCH
        positions[animal_id] = (x, y)

    missing = set(names.values()) - positions.keys()
    if missing:
        raise LayoutEngineError(f"Graphviz output missing {len(missing)} node(s)")

    return positions


def compute_dot_layout(
    animals: Iterable[Animal],
    config: LayoutConfig | None = None,
    runner: DotRunner | None = None,
) -> LayoutResult:
    """
    Lay out animals as a layered DAG with dot.

    Unrelated animals (several disconnected families) are laid out together.
    Generation numbers are left at 0: the rank is implicit in y.

    Raises:
        LayoutEngineError: if Graphviz fails or its output cannot be read
    """
    animals = list(animals)
    if not animals:
        return LayoutResult.empty()

    config = config or settings.layout_config()
    runner = runner or run_dot

    P, names = build_dot_graph(animals, config)
    logger.debug("dot input: %d nodes, %d edges", len(names), len(P.get_edges()))

    positions = parse_plain_layout(runner(P), names)

    nodes = [
        LayoutNode.from_subject(to_subject(animal, 0), *positions[animal.id])
        for animal in animals
    ]
    return LayoutResult(
        nodes=nodes,
        edges=build_edges(nodes, config),
        bounds=compute_bounds(nodes, config),
    )


def compute_multi_root_layout(
    selection: Iterable[str],
    animals: Iterable[Animal],
    max_generations: int | None = None,
    include_descendants: bool | None = None,
    config: LayoutConfig | None = None,
    runner: DotRunner | None = None,
) -> LayoutResult:
    """Lay out only the animals visible for the current selection."""
    animals = list(animals)
    if max_generations is None:
        max_generations = settings.max_generations
    if include_descendants is None:
        include_descendants = settings.include_descendants

    graph = build_graph(animals)
    visible = get_visible_nodes(selection, graph, max_generations, include_descendants)
    scoped = [a for a in animals if a.id in visible]
    return compute_dot_layout(scoped, config, runner)


class LayoutScheduler:
    """
    Runs multi-root layouts in a worker thread.

    Each submission gets a monotonically increasing request id. A result is
    only handed back if its request is still the most recently issued one when
    it resolves; older results come back as None.
    """

    def __init__(self, runner: DotRunner | None = None):
        self._runner = runner
        self._latest_request_id = 0

    @property
    def latest_request_id(self) -> int:
        return self._latest_request_id

    def is_current(self, request_id: int) -> bool:
        return request_id == self._latest_request_id

    async def submit(
        self,
        selection: Iterable[str],
        animals: Iterable[Animal],
        max_generations: int | None = None,
        include_descendants: bool | None = None,
        config: LayoutConfig | None = None,
    ) -> LayoutResult | None:
        """
        Lay out a selection, discarding the result if a newer request was issued.

        Raises:
            LayoutEngineError: if the newest request fails
        """
        self._latest_request_id += 1
        request_id = self._latest_request_id

        try:
            result = await asyncio.to_thread(
                compute_multi_root_layout,
                list(selection),
                list(animals),
                max_generations,
                include_descendants,
                config,
                self._runner,
            )
        except LayoutEngineError:
            if not self.is_current(request_id):
                logger.debug("Layout request %d failed after being superseded", request_id)
                return None
            raise

        if not self.is_current(request_id):
            logger.debug(
                "Discarding layout request %d (latest is %d)",
                request_id,
                self._latest_request_id,
            )
            return None
        return result
