"""Chinese Postman routes for pen plotters: one closed path over every segment."""

from .errors import (
    DisconnectedGraph,
    InvalidIndex,
    InvalidWeight,
    MatchingError,
    RouteError,
    TrivialGraph,
)
from .graph import CPPGraph
from .matching import MatchGraph
from .solver import RouteResult, build, solve, solve_route

__all__ = [
    "CPPGraph",
    "MatchGraph",
    "RouteResult",
    "build",
    "solve",
    "solve_route",
    "RouteError",
    "InvalidIndex",
    "InvalidWeight",
    "DisconnectedGraph",
    "TrivialGraph",
    "MatchingError",
]

__version__ = "0.1.0"
