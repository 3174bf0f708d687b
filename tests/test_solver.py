import pytest

from conftest import isclose, make_graph, random_multigraph, tour_length, weighted_graph
from sketchroute import (
    DisconnectedGraph,
    InvalidIndex,
    TrivialGraph,
    build,
    solve,
    solve_route,
)
from sketchroute.cfg import CFG
from sketchroute.graph import CPPGraph
from sketchroute.motion import chebyshev
from sketchroute.synth import grid_instance
from sketchroute.motion import euclid
from sketchroute.validate import check_even_degrees, validate_tour


def test_triangle_is_walked_once(triangle):
    assert solve(triangle) == [0, 1, 2, 0]
    assert all(e.mult == 1 for e in triangle.edges)


def test_path_is_doubled_back(path4):
    res = solve_route(path4)
    assert res.path == [0, 1, 2, 3, 2, 1, 0]
    assert isclose(res.length, 6.0)
    assert isclose(res.base_length, 3.0)
    assert isclose(res.extra_length, 3.0)
    assert res.doubled_edges == 3
    assert res.n_odd == 2
    assert res.tjoin == [[0, 1, 2, 3]]


def test_out_of_range_edge_fails_build():
    with pytest.raises(InvalidIndex):
        build(["a", "b"], [(0, 2)], lambda a, b: 1.0)


def test_two_triangles_are_disconnected():
    g = make_graph(6, [(0, 1), (1, 2), (2, 0), (3, 4), (4, 5), (5, 3)])
    with pytest.raises(DisconnectedGraph):
        solve(g)


def test_disconnected_odd_vertices():
    g = make_graph(4, [(0, 1), (2, 3)])
    with pytest.raises(DisconnectedGraph):
        solve(g)


def test_no_edges_gives_single_vertex():
    g = CPPGraph(["only"], [], lambda a, b: 1.0)
    assert solve(g) == ["only"]


def test_no_vertices_is_trivial():
    g = CPPGraph([], [], lambda a, b: 1.0)
    with pytest.raises(TrivialGraph):
        solve(g)


def test_root_out_of_range(triangle):
    with pytest.raises(ValueError):
        solve_route(triangle, CFG(ROOT=3))


def test_root_is_respected(triangle):
    res = solve_route(triangle, CFG(ROOT=2))
    assert res.tour[0] == 2 and res.tour[-1] == 2
    validate_tour(triangle, res.tour)


def test_unknown_method(path4):
    with pytest.raises(ValueError):
        solve_route(path4, method="nope")


def test_resolve_needs_reset(path4):
    first = solve_route(path4)
    with pytest.raises(RuntimeError):
        solve_route(path4)

    path4.reset()
    second = solve_route(path4)
    assert second.tour == first.tour
    assert isclose(second.length, first.length)


def test_house_with_chebyshev(house):
    g = CPPGraph([v.data for v in house.vertices], [(e.u, e.v) for e in house.edges], chebyshev)
    res = solve_route(g, method="exact")
    check_even_degrees(g)
    validate_tour(g, res.tour)
    assert res.n_odd == 4
    assert isclose(res.length, tour_length(g, res.tour))


@pytest.mark.parametrize("seed", range(5))
def test_grid_tours_cover_every_edge(seed):
    inst = grid_instance(4, 5, jitter=2.0, drop=0.3, seed=seed)
    g = build(inst.points, inst.edges, euclid)
    res = solve_route(g)
    check_even_degrees(g)
    validate_tour(g, res.tour)
    assert len(res.tour) - 1 == sum(e.mult for e in g.edges)
    assert isclose(res.length, tour_length(g, res.tour))
    assert res.length >= res.base_length


@pytest.mark.parametrize("seed", range(5))
def test_exact_never_longer_than_greedy(seed):
    inst = grid_instance(3, 4, jitter=1.0, drop=0.3, seed=seed)
    g = build(inst.points, inst.edges, euclid)
    greedy = solve_route(g, method="greedy")
    g.reset()
    exact = solve_route(g, method="exact")
    assert exact.matching_weight <= greedy.matching_weight + 1e-9
    assert exact.length <= greedy.length + 1e-9


def test_auto_picks_by_odd_count(path4):
    assert solve_route(path4, CFG(EXACT_MAX_ODD=2), method="auto").method == "exact"
    path4.reset()
    assert solve_route(path4, CFG(EXACT_MAX_ODD=0), method="auto").method == "greedy"


def test_edgeless_graph_still_checks_method():
    g = CPPGraph(["only"], [], lambda a, b: 1.0)
    with pytest.raises(ValueError):
        solve_route(g, method="nope")
    assert solve_route(g, method="auto").method == "exact"


SHARED_EDGE_GRAPH = [
    (1, 0, 6), (2, 1, 3), (3, 2, 2), (4, 2, 5), (5, 3, 2), (6, 4, 6),
    (7, 3, 5), (0, 1, 6), (1, 3, 1), (4, 6, 6), (1, 0, 6),
]


def test_greedy_tjoin_paths_sharing_an_edge():
    g = weighted_graph(8, SHARED_EDGE_GRAPH)
    res = solve_route(g, method="greedy")

    # greedy pairs (0, 4) then (1, 2): both paths use edge (1, 2)
    steps = [tuple(sorted(p)) for path in res.tjoin for p in zip(path, path[1:])]
    assert steps.count((1, 2)) == 2
    assert g.find_edge(1, 2).mult == 1

    check_even_degrees(g)
    validate_tour(g, res.tour)
    assert res.tour[0] == res.tour[-1] == 0
    assert isclose(res.length, tour_length(g, res.tour))


@pytest.mark.parametrize("method", ["greedy", "exact"])
@pytest.mark.parametrize("seed", range(0, 300, 3))
def test_random_multigraphs(method, seed):
    g = random_multigraph(seed)
    res = solve_route(g, method=method)
    check_even_degrees(g)
    validate_tour(g, res.tour)
    assert len(res.tour) - 1 == sum(e.mult for e in g.edges)
    assert res.extra_length <= res.matching_weight + 1e-9


@pytest.mark.parametrize("seed", range(0, 300, 7))
def test_exact_tour_never_longer_on_multigraphs(seed):
    g = random_multigraph(seed)
    greedy = solve_route(g, method="greedy")
    g.reset()
    exact = solve_route(g, method="exact")
    assert exact.length <= greedy.length + 1e-9
