"""
Lineage colors for pedigree edges and nodes.

Two modes:
- GlobalView (nothing selected): everything is colored by patriline, the chain
  of sires up to the founder, so sire-line clusters stand out.
- SelectedView (one or more animals selected): each selected animal gets its
  own color, and what lies in several selected lineages gets the shared color.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, replace
import zlib

from graph import PedigreeGraph, get_lineage
from models import Animal, LayoutEdge, LayoutNode

PALETTE = (
    "#2563eb",  # blue
    "#dc2626",  # red
    "#16a34a",  # green
    "#d97706",  # amber
    "#9333ea",  # purple
    "#0891b2",  # cyan
    "#db2777",  # pink
    "#65a30d",  # lime
)

SHARED_COLOR = "#facc15"  # common-lineage marker (yellow)


@dataclass(frozen=True)
class GlobalView:
    pass


@dataclass(frozen=True)
class SelectedView:
    ids: tuple[str, ...]


ColorMode = GlobalView | SelectedView


def color_mode_for(selected_ids: Iterable[str]) -> ColorMode:
    ids = tuple(dict.fromkeys(selected_ids))
    return SelectedView(ids) if ids else GlobalView()


def sire_index(animals: Iterable[Animal]) -> dict[str, str | None]:
    """animal id -> sire id, for patriline lookups."""
    return {a.id: a.sire_id for a in animals}


def patriline_founder(animal_id: str, sires: Mapping[str, str | None]) -> str:
    """Follow sires until the next one is unknown to the herd."""
    current = animal_id
    seen = {current}
    while True:
        sire_id = sires.get(current)
        if not sire_id or sire_id not in sires or sire_id in seen:
            return current
        seen.add(sire_id)
        current = sire_id


def palette_color(key: str) -> str:
    # crc32 is stable across runs, unlike hash()
    return PALETTE[zlib.crc32(key.encode("utf-8")) % len(PALETTE)]


def selection_colors(ids: Sequence[str]) -> dict[str, str]:
    """Palette colors in selection order, cycling past the palette size."""
    return {animal_id: PALETTE[i % len(PALETTE)] for i, animal_id in enumerate(ids)}


def _lineages(ids: Sequence[str], graph: PedigreeGraph) -> dict[str, set[str]]:
    return {animal_id: get_lineage(animal_id, graph) for animal_id in ids}


def _owners(node_id: str, lineages: Mapping[str, set[str]]) -> list[str]:
    return [animal_id for animal_id, lineage in lineages.items() if node_id in lineage]


def color_edges(
    edges: Iterable[LayoutEdge],
    mode: ColorMode,
    graph: PedigreeGraph,
    sires: Mapping[str, str | None],
) -> list[LayoutEdge]:
    """
    Return copies of `edges` with their color set for the given mode.

    Args:
        edges: Positioned parent -> child edges
        mode: GlobalView or SelectedView
        graph: Pedigree graph for lineage lookups
        sires: animal id -> sire id, for patrilines
    """
    match mode:
        case GlobalView():
            return [
                replace(e, color=palette_color(patriline_founder(e.from_id, sires)))
                for e in edges
            ]
        case SelectedView(ids=ids):
            colors = selection_colors(ids)
            lineages = _lineages(ids, graph)
            colored: list[LayoutEdge] = []
            for e in edges:
                holders = [
                    animal_id
                    for animal_id, lineage in lineages.items()
                    if e.from_id in lineage and e.to_id in lineage
                ]
                if not holders:
                    colored.append(replace(e, color=None))
                    continue
                touching = set(_owners(e.from_id, lineages)) | set(_owners(e.to_id, lineages))
                color = SHARED_COLOR if len(touching) > 1 else colors[holders[0]]
                colored.append(replace(e, color=color))
            return colored
        case _:
            raise TypeError(f"Unknown color mode: {mode!r}")


def color_nodes(
    nodes: Iterable[LayoutNode],
    mode: ColorMode,
    graph: PedigreeGraph,
    sires: Mapping[str, str | None],
) -> dict[str, str | None]:
    """Node id -> accent color (None means default rendering)."""
    match mode:
        case GlobalView():
            return {n.id: palette_color(patriline_founder(n.id, sires)) for n in nodes}
        case SelectedView(ids=ids):
            colors = selection_colors(ids)
            lineages = _lineages(ids, graph)
            result: dict[str, str | None] = {}
            for n in nodes:
                owners = _owners(n.id, lineages)
                if not owners:
                    result[n.id] = None
                elif len(owners) > 1:
                    result[n.id] = SHARED_COLOR
                else:
                    result[n.id] = colors[owners[0]]
            return result
        case _:
            raise TypeError(f"Unknown color mode: {mode!r}")
