"""Shared test fixtures."""

import pytest

from models import Animal


def make_animal(
    animal_id: str,
    gender: str = "Female",
    sire_id: str | None = None,
    dam_id: str | None = None,
    name: str | None = None,
    birth_date: str | None = None,
) -> Animal:
    """Create a herd animal with its id as name unless given."""
    return Animal(
        id=animal_id,
        name=name or animal_id,
        gender=gender,
        sire_id=sire_id,
        dam_id=dam_id,
        birth_date=birth_date,
    )


def fake_plain(graph) -> str:
    """Graphviz plain output placing every node on one row, in node order."""
    names = [
        n.get_name() for n in graph.get_nodes() if n.get_name() not in ("node", "edge", "graph")
    ]
    lines = [f"graph 1 {3.0 * max(len(names), 1)} 4"]
    for i, name in enumerate(names):
        lines.append(f'node {name} {1.5 + 3.0 * i} 2 2.7778 1.9444 "" solid box black lightgrey')
    lines.append("stop")
    return "\n".join(lines)


@pytest.fixture
def trio():
    """A (male) with B by sire link and C by (wrong) dam link."""
    return [
        make_animal("A", gender="Male"),
        make_animal("B", gender="Male", sire_id="A"),
        make_animal("C", dam_id="A"),
    ]


@pytest.fixture
def herd():
    """
    Three generations of a small herd.

        S1 x D1 -> K1 (M), K2 (F)
        S2 x D2 -> K3 (F)
        K1 x K3 -> G1 (M), G2 (F)
        EXT x K2 -> G3 (EXT is not a herd record)
    """
    return [
        make_animal("S1", gender="Male", name="Samson", birth_date="2015-04-01"),
        make_animal("D1", name="Daisy", birth_date="2015-05-01"),
        make_animal("S2", gender="Male", name="Baron", birth_date="2014-03-01"),
        make_animal("D2", name="Bella", birth_date="2014-06-01"),
        make_animal("K1", gender="Male", sire_id="S1", dam_id="D1", name="Kilian", birth_date="2018-02-01"),
        make_animal("K2", sire_id="S1", dam_id="D1", name="Kara", birth_date="2018-02-01"),
        make_animal("K3", sire_id="S2", dam_id="D2", name="Kenza", birth_date="2018-09-01"),
        make_animal("G1", gender="Male", sire_id="K1", dam_id="K3", name="Gaston", birth_date="2021-01-01"),
        make_animal("G2", sire_id="K1", dam_id="K3", name="Gaia", birth_date="2021-01-01"),
        make_animal("G3", sire_id="EXT", dam_id="K2", name="Gala", birth_date="2021-03-01"),
    ]


@pytest.fixture
def dot_runner():
    return fake_plain
