from __future__ import annotations

import math

import pytest

from sketchroute.errors import InvalidIndex, InvalidWeight
from sketchroute.graph import CPPGraph
from sketchroute.motion import euclid
from sketchroute.synth import grid_instance

from conftest import make_graph


def test_build_rejects_out_of_range_edge_before_weighing() -> None:
    calls = []

    def dist(a, b):
        calls.append((a, b))
        return 1.0

    with pytest.raises(InvalidIndex):
        CPPGraph(["a", "b", "c"], [(0, 1), (0, 5)], dist)
    assert calls == []


def test_build_rejects_negative_index() -> None:
    with pytest.raises(InvalidIndex):
        make_graph(3, [(-1, 2)])


@pytest.mark.parametrize("w", [-1.0, math.inf, math.nan])
def test_build_rejects_bad_weight(w: float) -> None:
    with pytest.raises(InvalidWeight):
        CPPGraph([0, 1], [(0, 1)], lambda a, b: w)


def test_weights_and_adjacency() -> None:
    g = CPPGraph([(0.0, 0.0), (3.0, 4.0), (3.0, 0.0)], [(0, 1), (1, 2)], euclid)
    assert g.n_vertices == 3
    assert g.n_edges == 2
    assert g.edges[0].weight == pytest.approx(5.0)
    assert g.edges[1].weight == pytest.approx(4.0)
    assert g.vertices[1].adjacent == [0, 1]
    assert g.other(0, 0) == 1
    assert g.total_weight() == pytest.approx(9.0)
    assert all(e.mult == 1 for e in g.edges)


def test_payload_untouched() -> None:
    payload = [{"id": "p"}, {"id": "q"}]
    g = CPPGraph(payload, [(0, 1)], lambda a, b: 2.0)
    assert g.data(0) is payload[0]
    assert g.data(1) is payload[1]


def test_find_edge(path4) -> None:
    e = path4.find_edge(2, 1)
    assert e is not None and {e.u, e.v} == {1, 2}
    assert path4.find_edge(0, 3) is None


def test_degrees_and_odd_vertices(path4, triangle) -> None:
    assert [path4.degree(v) for v in range(4)] == [1, 2, 2, 1]
    assert path4.odd_vertices() == [0, 3]
    assert triangle.odd_vertices() == []


def test_self_loop_counts_twice() -> None:
    g = make_graph(2, [(0, 1), (1, 1)])
    assert g.degree(1) == 3
    assert g.find_edge(1, 1) is g.edges[1]


def test_connected_components() -> None:
    g = make_graph(6, [(0, 1), (1, 2), (2, 0), (3, 4), (4, 5), (5, 3)])
    comps = g.connected_components()
    assert sorted(sorted(c) for c in comps) == [[0, 1, 2], [3, 4, 5]]
    assert not g.is_connected()


def test_reset_restores_multiplicity(path4) -> None:
    path4.edges[1].mult = 2
    assert path4.is_augmented()
    assert path4.mult_degree(1) == 3
    path4.reset()
    assert not path4.is_augmented()
    assert path4.total_weight(with_mult=True) == path4.total_weight()


@pytest.mark.parametrize("seed", range(10))
def test_odd_vertex_count_is_even(seed: int) -> None:
    inst = grid_instance(5, 6, jitter=1.5, drop=0.4, seed=seed)
    g = CPPGraph(inst.points, inst.edges, euclid)
    assert g.is_connected()
    assert len(g.odd_vertices()) % 2 == 0
