"""Selection state for the pedigree viewer."""

from collections.abc import Iterable, Iterator
from enum import Enum


class SelectionMode(str, Enum):
    NONE = "none"  # global view
    SINGLE = "single"
    MULTI = "multi"


class Selection:
    """
    Ordered set of selected animal ids.

    Selection order is kept (colors are assigned in that order). The mode is
    always derived from the size, never stored.
    """

    def __init__(self, ids: Iterable[str] = ()):
        self._ids: dict[str, None] = dict.fromkeys(ids)

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(self._ids)

    @property
    def mode(self) -> SelectionMode:
        if not self._ids:
            return SelectionMode.NONE
        if len(self._ids) == 1:
            return SelectionMode.SINGLE
        return SelectionMode.MULTI

    def as_set(self) -> set[str]:
        return set(self._ids)

    def select_one(self, animal_id: str):
        """Replace the selection with a single animal."""
        self._ids = {animal_id: None}

    def select_multiple(self, animal_ids: Iterable[str]):
        self._ids = dict.fromkeys(animal_ids)

    def toggle_selection(self, animal_id: str):
        """Add the animal if absent, remove it if present."""
        if animal_id in self._ids:
            del self._ids[animal_id]
        else:
            self._ids[animal_id] = None

    def clear_selection(self):
        self._ids = {}

    def is_selected(self, animal_id: str) -> bool:
        return animal_id in self._ids

    def __contains__(self, animal_id: object) -> bool:
        return animal_id in self._ids

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._ids))

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        return f"Selection({list(self._ids)!r})"
