"""Tests for generation numbering."""

from conftest import make_animal
from pedigree import convert_animals_to_pedigree, group_by_generation


def generations(data) -> dict[str, int]:
    return {s.id: s.generation for s in data.subjects}


class TestConvertAnimalsToPedigree:
    def test_root_and_sire(self):
        animals = [make_animal("A", gender="Male"), make_animal("B", sire_id="A")]
        data = convert_animals_to_pedigree(animals[1], animals)
        assert data.root_subject_id == "B"
        assert generations(data) == {"B": 0, "A": 1}

    def test_bidirectional(self, herd):
        root = next(a for a in herd if a.id == "K1")
        data = convert_animals_to_pedigree(root, herd)
        assert generations(data) == {
            "K1": 0,
            "S1": 1,
            "D1": 1,
            "G1": -1,
            "G2": -1,
        }

    def test_each_subject_once(self, herd):
        root = next(a for a in herd if a.id == "G1")
        data = convert_animals_to_pedigree(root, herd)
        ids = [s.id for s in data.subjects]
        assert len(ids) == len(set(ids))
        assert set(ids) == {"G1", "K1", "K3", "S1", "D1", "S2", "D2"}

    def test_sex_and_parent_fields(self, herd):
        root = next(a for a in herd if a.id == "G1")
        subjects = {s.id: s for s in convert_animals_to_pedigree(root, herd).subjects}
        assert subjects["G1"].sex == "M"
        assert subjects["G1"].father_id == "K1"
        assert subjects["G1"].mother_id == "K3"
        assert subjects["K3"].sex == "F"

    def test_unknown_parent_is_skipped(self, herd):
        root = next(a for a in herd if a.id == "G3")
        data = convert_animals_to_pedigree(root, herd)
        assert "EXT" not in generations(data)
        assert generations(data)["K2"] == 1

    def test_first_traversal_wins(self):
        """
        X is both the sire and the grandsire of R (through M). The ancestor walk
        reaches X first as R's sire, so it stays at generation 1.
        """
        animals = [
            make_animal("X", gender="Male"),
            make_animal("M", sire_id="X"),
            make_animal("R", sire_id="X", dam_id="M"),
        ]
        data = convert_animals_to_pedigree(animals[2], animals)
        assert generations(data) == {"R": 0, "X": 1, "M": 1}

    def test_cycle_terminates(self):
        animals = [
            make_animal("A", gender="Male", sire_id="B"),
            make_animal("B", gender="Male", sire_id="A"),
        ]
        data = convert_animals_to_pedigree(animals[0], animals)
        assert generations(data) == {"A": 0, "B": 1}

    def test_root_without_relatives(self):
        lonely = make_animal("L")
        data = convert_animals_to_pedigree(lonely, [])
        assert generations(data) == {"L": 0}


class TestGroupByGeneration:
    def test_groups_keep_order(self, herd):
        root = next(a for a in herd if a.id == "K1")
        groups = group_by_generation(convert_animals_to_pedigree(root, herd).subjects)
        assert sorted(groups) == [-1, 0, 1]
        assert [s.id for s in groups[1]] == ["S1", "D1"]
        assert [s.id for s in groups[-1]] == ["G1", "G2"]
