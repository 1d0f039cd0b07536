"""Conversion of herd animals into a generation-numbered pedigree."""

from collections.abc import Iterable

from models import Animal, PedigreeData, Subject


def to_subject(animal: Animal, generation: int) -> Subject:
    return Subject(
        id=animal.id,
        name=animal.name,
        sex=animal.sex,
        generation=generation,
        father_id=animal.sire_id,
        mother_id=animal.dam_id,
        photo_url=animal.photo_url,
        tag_id=animal.tag_id,
        birth_date=animal.birth_date,
        breed=animal.breed,
    )


def convert_animals_to_pedigree(root: Animal, all_animals: Iterable[Animal]) -> PedigreeData:
    """
    Number the pedigree of `root` by generation.

    The root is generation 0. A depth-first walk up through sire then dam gives
    +1 per step (ancestors); a depth-first walk down through the children gives
    -1 per step (descendants).

    An animal keeps the generation of the first walk that reaches it. When a
    pedigree closes on itself (the same ancestor reachable along paths of
    different lengths) later paths do not renumber it.
    """
    animals = list(all_animals)
    animal_map = {a.id: a for a in animals}
    animal_map.setdefault(root.id, root)

    # Reverse lookup: parent id -> child ids, in herd order
    children_map: dict[str, list[str]] = {}
    for animal in animals:
        for parent_id in (animal.sire_id, animal.dam_id):
            if parent_id:
                children_map.setdefault(parent_id, []).append(animal.id)

    visited: set[str] = set()
    subjects: list[Subject] = []

    def add_subject(animal: Animal, generation: int) -> bool:
        if animal.id in visited:
            return False
        visited.add(animal.id)
        subjects.append(to_subject(animal, generation))
        return True

    def traverse_ancestors(animal: Animal, generation: int):
        if not add_subject(animal, generation):
            return
        for parent_id in (animal.sire_id, animal.dam_id):
            parent = animal_map.get(parent_id) if parent_id else None
            if parent is not None:
                traverse_ancestors(parent, generation + 1)

    def traverse_descendants(animal_id: str, generation: int):
        for child_id in children_map.get(animal_id, []):
            child = animal_map.get(child_id)
            if child is not None and add_subject(child, generation):
                traverse_descendants(child_id, generation - 1)

    traverse_ancestors(root, 0)
    traverse_descendants(root.id, -1)

    return PedigreeData(subjects=subjects, root_subject_id=root.id)


def group_by_generation(subjects: Iterable[Subject]) -> dict[int, list[Subject]]:
    """Group subjects into generation bands, keeping their order within a band."""
    groups: dict[int, list[Subject]] = {}
    for subject in subjects:
        groups.setdefault(subject.generation, []).append(subject)
    return groups
