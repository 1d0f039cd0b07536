"""Pedigree graph building, traversal and visibility queries."""

from collections import deque
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import networkx as nx

from models import Animal


@dataclass
class PedigreeGraph:
    """
    Bidirectional parent/child adjacency keyed by animal id.

    Attributes:
        descendants: parent id -> ids of its children
        ancestors: child id -> ids of its parents (sire, dam)
        all_ids: ids of every animal record the graph was built from
    """

    descendants: dict[str, set[str]]
    ancestors: dict[str, set[str]]
    all_ids: set[str]

    def parents_of(self, animal_id: str) -> set[str]:
        return self.ancestors.get(animal_id, set())

    def children_of(self, animal_id: str) -> set[str]:
        return self.descendants.get(animal_id, set())

    def to_digraph(self) -> nx.DiGraph:
        """Export parent -> child edges as a NetworkX DiGraph."""
        G = nx.DiGraph()
        G.add_nodes_from(self.all_ids)
        for parent, children in self.descendants.items():
            if parent not in self.all_ids:
                continue
            for child in children:
                G.add_edge(parent, child, relationship_type="PARENT_OF")
        return G


def build_graph(animals: Iterable[Animal]) -> PedigreeGraph:
    """Build the pedigree graph from the herd's flat animal list."""
    animals = list(animals)
    descendants: dict[str, set[str]] = {}
    ancestors: dict[str, set[str]] = {}
    all_ids: set[str] = set()

    for animal in animals:
        all_ids.add(animal.id)
        descendants.setdefault(animal.id, set())
        ancestors.setdefault(animal.id, set())

    for animal in animals:
        for parent_id in (animal.sire_id, animal.dam_id):
            if not parent_id:
                continue
            # Parents that are not herd records still get an entry
            ancestors[animal.id].add(parent_id)
            descendants.setdefault(parent_id, set()).add(animal.id)

    return PedigreeGraph(descendants=descendants, ancestors=ancestors, all_ids=all_ids)


def _walk(
    seed: str,
    adjacency: dict[str, set[str]],
    known: set[str],
    max_generations: int | None,
) -> set[str]:
    result: set[str] = set()
    visited = {seed}
    queue = deque([(seed, 0)])

    while queue:
        current, depth = queue.popleft()
        if max_generations is not None and depth >= max_generations:
            continue

        # Sorted so the walk order does not depend on set hashing
        for neighbour in sorted(adjacency.get(current, ())):
            # Ids without a herd record are unknown parents, not ancestors
            if neighbour in visited or neighbour not in known:
                continue
            visited.add(neighbour)
            result.add(neighbour)
            queue.append((neighbour, depth + 1))

    return result


def get_ancestors(
    animal_id: str, graph: PedigreeGraph, max_generations: int | None = 10
) -> set[str]:
    """
    Find the ancestors of an animal up to `max_generations` parent hops.

    Args:
        animal_id: The animal to start from (never part of the result)
        graph: The pedigree graph
        max_generations: Maximum number of hops; None walks the whole graph

    Returns:
        Set of ancestor ids
    """
    return _walk(animal_id, graph.ancestors, graph.all_ids, max_generations)


def get_descendants(
    animal_id: str, graph: PedigreeGraph, max_generations: int | None = 10
) -> set[str]:
    """Find the descendants of an animal up to `max_generations` child hops."""
    return _walk(animal_id, graph.descendants, graph.all_ids, max_generations)


def get_lineage(
    animal_id: str, graph: PedigreeGraph, max_generations: int | None = None
) -> set[str]:
    """Ancestors, descendants and the animal itself."""
    lineage = {animal_id}
    lineage |= get_ancestors(animal_id, graph, max_generations)
    lineage |= get_descendants(animal_id, graph, max_generations)
    return lineage


def find_common_ancestors(
    animal_ids: Sequence[str], graph: PedigreeGraph, max_generations: int | None = 10
) -> set[str]:
    """
    Find the ancestors shared by every animal in `animal_ids`.

    Fewer than two animals have no common ancestors by definition.
    """
    if len(animal_ids) < 2:
        return set()

    common = get_ancestors(animal_ids[0], graph, max_generations)
    for animal_id in animal_ids[1:]:
        if not common:
            break
        common &= get_ancestors(animal_id, graph, max_generations)

    return common


def get_visible_nodes(
    selection: Iterable[str],
    graph: PedigreeGraph,
    max_generations: int | None = 5,
    include_descendants: bool = True,
) -> set[str]:
    """
    Compute the ids to render for the current selection.

    With nothing selected every animal is visible (global view). Otherwise the
    selected animals, their ancestors and, optionally, their descendants.
    Only ids with a herd record are returned.
    """
    selected = list(selection)
    if not selected:
        return set(graph.all_ids)

    visible = set(selected) & graph.all_ids
    for animal_id in selected:
        visible |= get_ancestors(animal_id, graph, max_generations)
        if include_descendants:
            visible |= get_descendants(animal_id, graph, max_generations)

    return visible


def calculate_generation_depth(animal_id: str, graph: PedigreeGraph) -> int:
    """Number of known ancestral generations above an animal (0 when no parents)."""
    max_depth = 0
    visited: set[str] = set()
    queue = deque([(animal_id, 0)])

    while queue:
        current, depth = queue.popleft()
        if current in visited:
            continue
        visited.add(current)
        max_depth = max(max_depth, depth)

        for parent_id in graph.parents_of(current) & graph.all_ids:
            queue.append((parent_id, depth + 1))

    return max_depth
