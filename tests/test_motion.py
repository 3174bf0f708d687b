from types import SimpleNamespace

import pytest

from conftest import isclose
from sketchroute.motion import chebyshev, euclid, get_distance, relative_moves, travel_length, xy


def test_xy_accepts_attributes_and_pairs():
    assert xy(SimpleNamespace(x=1, y=2)) == (1.0, 2.0)
    assert xy([3, 4]) == (3.0, 4.0)


def test_distances():
    assert isclose(euclid((0, 0), (3, 4)), 5.0)
    assert isclose(chebyshev((0, 0), (3, 4)), 4.0)
    assert get_distance("euclid") is euclid
    with pytest.raises(ValueError):
        get_distance("manhattan")


def test_relative_moves_start_from_origin():
    moves = relative_moves([(1, 1), (4, 5), (1, 1)], origin=(1, 0))
    assert moves == [(0.0, 1.0), (3.0, 4.0), (-3.0, -4.0)]
    assert isclose(travel_length(moves), 11.0)


def test_closed_tour_moves_sum_to_zero(house):
    from sketchroute import solve
    path = solve(house)
    moves = relative_moves(path[1:], origin=path[0])
    assert isclose(sum(dx for dx, _ in moves), 0.0)
    assert isclose(sum(dy for _, dy in moves), 0.0)
