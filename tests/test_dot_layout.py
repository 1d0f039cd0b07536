"""Tests for the multi-root layout through Graphviz dot."""

import asyncio
import shutil
import threading

import pytest

from conftest import fake_plain, make_animal
from dot_layout import (
    LayoutEngineError,
    LayoutScheduler,
    build_dot_graph,
    compute_dot_layout,
    compute_multi_root_layout,
    parse_plain_layout,
)
from models import LayoutConfig

CONFIG = LayoutConfig()


def node_names(graph) -> list[str]:
    return [n.get_name() for n in graph.get_nodes() if n.get_name() not in ("node", "edge", "graph")]


class TestBuildDotGraph:
    def test_nodes_and_edges(self, herd):
        P, names = build_dot_graph(herd, CONFIG)
        assert sorted(names.values()) == sorted(a.id for a in herd)
        assert len(node_names(P)) == len(herd)
        # EXT is not in scope, so G3 only has its dam edge
        assert len(P.get_edges()) == 11

    def test_top_down(self, herd):
        P, _ = build_dot_graph(herd, CONFIG)
        assert P.get("rankdir") == "TB"

    def test_parent_outside_scope_has_no_edge(self):
        animals = [make_animal("K", sire_id="S")]
        P, _ = build_dot_graph(animals, CONFIG)
        assert P.get_edges() == []


class TestParsePlainLayout:
    def test_flips_y_and_uses_top_left(self):
        text = "graph 1 6 4\nnode n0 1.5 3 1 2 \"\" solid box black lightgrey\nstop\n"
        pos = parse_plain_layout(text, {"n0": "A"})
        assert pos["A"] == (pytest.approx(72.0), pytest.approx(0.0))

    def test_ignores_edges_and_unknown_nodes(self):
        text = "\n".join(
            [
                "graph 1 6 4",
                "node n0 1.5 2 1 1 \"\" solid box black lightgrey",
                "node n9 3 2 1 1 \"\" solid box black lightgrey",
                "edge n0 n9 4 1.5 1.5 1.5 1 3 1 3 0.5 solid black",
                "stop",
            ]
        )
        assert set(parse_plain_layout(text, {"n0": "A"})) == {"A"}

    def test_missing_header(self):
        with pytest.raises(LayoutEngineError):
            parse_plain_layout("node n0 1 1 1 1\nstop", {"n0": "A"})

    def test_missing_node(self):
        with pytest.raises(LayoutEngineError):
            parse_plain_layout("graph 1 6 4\nstop", {"n0": "A"})

    def test_bad_numbers(self):
        with pytest.raises(LayoutEngineError):
            parse_plain_layout("graph 1 6 4\nnode n0 x 1 1 1\nstop", {"n0": "A"})


class TestComputeDotLayout:
    def test_empty(self, dot_runner):
        result = compute_dot_layout([], CONFIG, dot_runner)
        assert result.nodes == []
        assert result.edges == []

    def test_positions_and_edges(self, herd, dot_runner):
        result = compute_dot_layout(herd, CONFIG, dot_runner)
        assert [n.id for n in result.nodes] == [a.id for a in herd]
        assert len(result.edges) == 11
        assert all(n.generation == 0 for n in result.nodes)
        assert result.bounds.max_x > result.bounds.min_x

    def test_runner_failure(self, herd):
        with pytest.raises(LayoutEngineError):
            compute_dot_layout(herd, CONFIG, lambda graph: "garbage")

    def test_disconnected_components(self, dot_runner):
        animals = [make_animal("A"), make_animal("B"), make_animal("C", dam_id="A")]
        result = compute_dot_layout(animals, CONFIG, dot_runner)
        assert {n.id for n in result.nodes} == {"A", "B", "C"}
        assert [(e.from_id, e.to_id) for e in result.edges] == [("A", "C")]

    @pytest.mark.skipif(shutil.which("dot") is None, reason="Graphviz not installed")
    def test_real_dot_puts_parents_above(self, herd):
        result = compute_dot_layout(herd, CONFIG)
        pos = {n.id: n for n in result.nodes}
        assert pos["S1"].y < pos["K1"].y < pos["G1"].y


class TestComputeMultiRootLayout:
    def test_restricted_to_visible_scope(self, herd, dot_runner):
        result = compute_multi_root_layout(["K2"], herd, max_generations=5, runner=dot_runner)
        assert {n.id for n in result.nodes} == {"K2", "S1", "D1", "G3"}

    def test_without_descendants(self, herd, dot_runner):
        result = compute_multi_root_layout(
            ["K2"], herd, max_generations=5, include_descendants=False, runner=dot_runner
        )
        assert {n.id for n in result.nodes} == {"K2", "S1", "D1"}

    def test_empty_selection_shows_everyone(self, herd, dot_runner):
        result = compute_multi_root_layout([], herd, runner=dot_runner)
        assert len(result.nodes) == len(herd)

    def test_several_unrelated_roots(self, herd, dot_runner):
        result = compute_multi_root_layout(
            ["S2", "K2"], herd, max_generations=1, include_descendants=False, runner=dot_runner
        )
        assert {n.id for n in result.nodes} == {"S2", "K2", "S1", "D1"}


class TestLayoutScheduler:
    @pytest.mark.asyncio
    async def test_single_request(self, herd, dot_runner):
        scheduler = LayoutScheduler(runner=dot_runner)
        result = await scheduler.submit(["K1"], herd)
        assert result is not None
        assert "K1" in {n.id for n in result.nodes}
        assert scheduler.latest_request_id == 1

    @pytest.mark.asyncio
    async def test_last_issued_wins(self, herd):
        started = threading.Event()
        release = threading.Event()
        calls = []

        def runner(graph):
            calls.append(graph)
            if len(calls) == 1:
                started.set()
                release.wait(timeout=5)
            return fake_plain(graph)

        scheduler = LayoutScheduler(runner=runner)
        first = asyncio.create_task(scheduler.submit(["K1"], herd))
        await asyncio.to_thread(started.wait, 5)

        second = await scheduler.submit(["K3"], herd)
        release.set()

        assert await first is None
        assert second is not None
        assert "K3" in {n.id for n in second.nodes}

    @pytest.mark.asyncio
    async def test_newest_failure_raises(self, herd):
        scheduler = LayoutScheduler(runner=lambda graph: "not plain output")
        with pytest.raises(LayoutEngineError):
            await scheduler.submit(["K1"], herd)

    @pytest.mark.asyncio
    async def test_superseded_failure_is_dropped(self, herd):
        started = threading.Event()
        release = threading.Event()
        calls = []

        def runner(graph):
            calls.append(graph)
            if len(calls) == 1:
                started.set()
                release.wait(timeout=5)
                return "broken"
            return fake_plain(graph)

        scheduler = LayoutScheduler(runner=runner)
        first = asyncio.create_task(scheduler.submit(["K1"], herd))
        await asyncio.to_thread(started.wait, 5)
        second = await scheduler.submit(["K1"], herd)
        release.set()

        assert await first is None
        assert second is not None
