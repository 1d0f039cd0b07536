"""Pedigree validation against biological filiation rules."""

import networkx as nx

from models import PedigreeData, Subject


def _check_parent(
    subject: Subject, parent: Subject, role: str, expected_sex: str
) -> list[str]:
    warnings: list[str] = []
    label = "male" if expected_sex == "M" else "female"

    if parent.sex != expected_sex:
        warnings.append(f"Subject {subject.name}: {role} {parent.name} must be {label}")

    expected_generation = subject.generation + 1
    if parent.generation != expected_generation:
        warnings.append(
            f"Subject {subject.name}: {role} {parent.name} must be at generation "
            f"{expected_generation}, found {parent.generation}"
        )

    # birth_date is ISO format (YYYY-MM-DD) which can be compared as strings
    if parent.birth_date and subject.birth_date and subject.birth_date < parent.birth_date:
        warnings.append(f"Impossible: {subject.name} born before {role} {parent.name}")

    return warnings


def validate_pedigree(data: PedigreeData) -> list[str]:
    """
    Validate a generation-numbered pedigree for:
    - Fathers that are not male, mothers that are not female
    - Parents not exactly one generation above their child
    - Children born before a parent
    - Cycles in parent-child relationships

    Parent ids that do not resolve to a subject are treated as unknown parents.
    Returns a list of warning messages; nothing here raises.
    """
    warnings: list[str] = []
    subject_map = {s.id: s for s in data.subjects}

    if data.root_subject_id not in subject_map:
        warnings.append(f"Root subject {data.root_subject_id} not found in subjects")
        return warnings

    for subject in data.subjects:
        father = subject_map.get(subject.father_id) if subject.father_id else None
        if father is not None:
            warnings.extend(_check_parent(subject, father, "father", "M"))

        mother = subject_map.get(subject.mother_id) if subject.mother_id else None
        if mother is not None:
            warnings.extend(_check_parent(subject, mother, "mother", "F"))

    # Child -> parent edges between known subjects for cycle detection
    lineage_graph = nx.DiGraph()
    lineage_graph.add_nodes_from(subject_map)
    for subject in data.subjects:
        for parent_id in (subject.father_id, subject.mother_id):
            if parent_id and parent_id in subject_map:
                lineage_graph.add_edge(subject.id, parent_id)

    try:
        cycle = nx.find_cycle(lineage_graph, orientation="original")
        cycle_nodes = [edge[0] for edge in cycle]
        warnings.append(f"Cyclic relationship detected in pedigree: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass  # No cycle found, which is good

    return warnings
