"""
Pedigree viewer orchestration.

Ties selection, graph queries, layout and coloring together the way the
canvas consumes them. Three view modes follow from the selection size:
global (nothing selected), individual (one) and grouped (several).
"""

from collections.abc import Iterable
from dataclasses import replace
import logging

from coloring import color_edges, color_mode_for, sire_index
from config import settings
from dot_layout import LayoutEngineError, LayoutScheduler
from graph import PedigreeGraph, build_graph, find_common_ancestors, get_visible_nodes
from layout import layout_for_root
from models import Animal, LayoutConfig, LayoutResult
from selection import Selection

logger = logging.getLogger(__name__)


class PedigreeViewer:
    def __init__(
        self,
        animals: Iterable[Animal],
        config: LayoutConfig | None = None,
        scheduler: LayoutScheduler | None = None,
        max_generations: int | None = None,
        include_descendants: bool | None = None,
    ):
        self.config = config or settings.layout_config()
        self.scheduler = scheduler or LayoutScheduler()
        self.max_generations = (
            settings.max_generations if max_generations is None else max_generations
        )
        self.include_descendants = (
            settings.include_descendants if include_descendants is None else include_descendants
        )
        self.selection = Selection()
        self.set_animals(animals)

    def set_animals(self, animals: Iterable[Animal]):
        """Replace the herd snapshot; the graph is rebuilt from scratch."""
        self.animals: list[Animal] = list(animals)
        self.graph: PedigreeGraph = build_graph(self.animals)
        self._sires = sire_index(self.animals)

    def handle_node_click(self, node_id: str, ctrl_key: bool = False):
        if ctrl_key:
            # Ctrl+click: toggle in/out of selection
            self.selection.toggle_selection(node_id)
        else:
            self.selection.select_one(node_id)

    def common_ancestors(self) -> set[str]:
        if len(self.selection) <= 1:
            return set()
        return find_common_ancestors(
            self.selection.ids, self.graph, settings.common_ancestor_generations
        )

    def visible_nodes(self) -> set[str]:
        return get_visible_nodes(
            self.selection.ids, self.graph, self.max_generations, self.include_descendants
        )

    def _colorize(self, result: LayoutResult, selected_ids: tuple[str, ...]) -> LayoutResult:
        mode = color_mode_for(selected_ids)
        return replace(result, edges=color_edges(result.edges, mode, self.graph, self._sires))

    def root_layout(self, root_id: str) -> LayoutResult:
        """Full reachable pedigree of one animal, generation-banded."""
        return self._colorize(
            layout_for_root(root_id, self.animals, self.config), self.selection.ids
        )

    async def refresh_layout(self) -> LayoutResult | None:
        """
        Lay out the current selection scope with dot.

        Returns None when a newer refresh superseded this one, and an empty
        result when the layout engine failed.
        """
        selected_ids = self.selection.ids
        try:
            result = await self.scheduler.submit(
                selected_ids,
                self.animals,
                max_generations=self.max_generations,
                include_descendants=self.include_descendants,
                config=self.config,
            )
        except LayoutEngineError:
            logger.exception("Layout failed, no subjects to display")
            return LayoutResult.empty()

        if result is None:
            return None
        return self._colorize(result, selected_ids)
