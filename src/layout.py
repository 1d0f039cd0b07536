"""
Generation-banded layout of a single-root pedigree.

A simplified layered (Sugiyama-style) drawing: the leaf band is laid out with
full siblings kept together, every band above is ordered by the barycenter of
its already placed children, and overlaps are resolved greedily.
"""

from collections.abc import Iterable
import logging

from config import settings
from edges import build_edges
from models import (
    Animal,
    LayoutConfig,
    LayoutNode,
    LayoutResult,
    PedigreeData,
    Subject,
    compute_bounds,
)
from pedigree import convert_animals_to_pedigree, group_by_generation
from validation import validate_pedigree

logger = logging.getLogger(__name__)


def _place_leaf_band(band: list[Subject], pitch: float) -> dict[str, float]:
    # Full siblings share a (father, mother) key and stay adjacent
    families: dict[tuple[str, str], list[Subject]] = {}
    for subject in band:
        key = (subject.father_id or "", subject.mother_id or "")
        families.setdefault(key, []).append(subject)

    ordered_families = [
        sorted(members, key=lambda s: (s.name, s.id)) for members in families.values()
    ]
    ordered_families.sort(key=lambda members: (members[0].name, members[0].id))

    positions: dict[str, float] = {}
    x = 0.0
    for members in ordered_families:
        for subject in members:
            positions[subject.id] = x
            x += pitch
    return positions


def _place_band(
    band: list[Subject],
    children_of: dict[str, list[str]],
    positions: dict[str, float],
    pitch: float,
) -> dict[str, float]:
    ideal: dict[str, float] = {}
    unanchored: list[Subject] = []

    for subject in sorted(band, key=lambda s: (s.name, s.id)):
        placed = [positions[c] for c in children_of.get(subject.id, []) if c in positions]
        if placed:
            ideal[subject.id] = sum(placed) / len(placed)
        else:
            unanchored.append(subject)

    # Subjects without placed children go after the band's right edge
    right_edge = max(ideal.values()) + pitch if ideal else 0.0
    for subject in unanchored:
        ideal[subject.id] = right_edge
        right_edge += pitch

    ordered = sorted(
        band,
        key=lambda s: (ideal[s.id], 0 if s.sex == "M" else 1, s.name, s.id),
    )

    band_positions: dict[str, float] = {}
    previous: float | None = None
    for subject in ordered:
        x = ideal[subject.id]
        if previous is not None and x < previous + pitch:
            x = previous + pitch
        band_positions[subject.id] = x
        previous = x
    return band_positions


def _resolve_overlaps(band: list[Subject], positions: dict[str, float], pitch: float):
    ordered = sorted(band, key=lambda s: (positions[s.id], s.id))
    for previous, current in zip(ordered, ordered[1:]):
        minimum = positions[previous.id] + pitch
        if positions[current.id] < minimum:
            positions[current.id] = minimum


def compute_layout(data: PedigreeData, config: LayoutConfig | None = None) -> LayoutResult:
    """
    Compute the vertical layout of a bidirectional pedigree.

    Ancestors (positive generations) sit above the root, descendants below:
    y = -generation * generation_gap. Within a band no two nodes are closer
    than node_width + sibling_gap, and the drawing is centered on x = 0.

    Args:
        data: Generation-numbered subjects
        config: Node size and spacing (defaults from settings)

    Returns:
        Positioned nodes, elbow edges and bounds; empty for no subjects
    """
    config = config or settings.layout_config()
    if not data.subjects:
        return LayoutResult.empty()

    pitch = config.pitch
    groups = group_by_generation(data.subjects)
    generations = sorted(groups)  # leaf (most negative) band first

    children_of: dict[str, list[str]] = {}
    for subject in data.subjects:
        for parent_id in (subject.father_id, subject.mother_id):
            if parent_id:
                children_of.setdefault(parent_id, []).append(subject.id)

    positions = _place_leaf_band(groups[generations[0]], pitch)
    for generation in generations[1:]:
        positions.update(_place_band(groups[generation], children_of, positions, pitch))

    for generation in generations:
        _resolve_overlaps(groups[generation], positions, pitch)

    min_x = min(positions.values())
    max_x = max(positions.values()) + config.node_width
    shift = -(min_x + max_x) / 2

    nodes: list[LayoutNode] = []
    for generation in reversed(generations):  # ancestors first
        band = sorted(groups[generation], key=lambda s: (positions[s.id], s.id))
        y = -generation * config.generation_gap
        for subject in band:
            nodes.append(LayoutNode.from_subject(subject, x=positions[subject.id] + shift, y=y))

    return LayoutResult(
        nodes=nodes,
        edges=build_edges(nodes, config),
        bounds=compute_bounds(nodes, config),
    )


def layout_for_root(
    root_id: str, animals: Iterable[Animal], config: LayoutConfig | None = None
) -> LayoutResult:
    """Number, validate and lay out the pedigree of one animal."""
    animals = list(animals)
    root = next((a for a in animals if a.id == root_id), None)
    if root is None:
        logger.warning("Root animal %s not found, nothing to lay out", root_id)
        return LayoutResult.empty()

    data = convert_animals_to_pedigree(root, animals)
    for warning in validate_pedigree(data):
        logger.warning(warning)

    logger.debug("Laying out %d subjects around %s", len(data.subjects), root_id)
    return compute_layout(data, config)
