# motion.py
"""Hand-off to the motion controller.

The controller receives the tour as payloads with planar coordinates and
moves relative to its current position. Units and timing are its business.
"""
from __future__ import annotations

import math
from typing import Any, List, Sequence, Tuple

Point = Tuple[float, float]


def xy(p: Any) -> Point:
    """Coordinates of a payload: `.x`/`.y` attributes or a 2-sequence."""
    if hasattr(p, "x") and hasattr(p, "y"):
        return float(p.x), float(p.y)
    return float(p[0]), float(p[1])


def relative_moves(path: Sequence[Any], origin: Point = (0.0, 0.0)) -> List[Point]:
    """(dx, dy) for each element, the first one measured from `origin`."""
    moves: List[Point] = []
    cx, cy = float(origin[0]), float(origin[1])
    for p in path:
        x, y = xy(p)
        moves.append((x - cx, y - cy))
        cx, cy = x, y
    return moves


def travel_length(moves: Sequence[Point]) -> float:
    return float(sum(math.hypot(dx, dy) for dx, dy in moves))


def euclid(a: Any, b: Any) -> float:
    (ax, ay), (bx, by) = xy(a), xy(b)
    return math.hypot(ax - bx, ay - by)


def chebyshev(a: Any, b: Any) -> float:
    # both axes move together, so travel time follows the longer axis
    (ax, ay), (bx, by) = xy(a), xy(b)
    return max(abs(ax - bx), abs(ay - by))


DISTANCES = {
    "euclid": euclid,
    "chebyshev": chebyshev,
}


def get_distance(mode: str):
    try:
        return DISTANCES[mode]
    except KeyError:
        raise ValueError(f"unknown dist mode: {mode}") from None
