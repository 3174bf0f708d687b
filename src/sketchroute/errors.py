# errors.py
from __future__ import annotations


class RouteError(Exception):
    """Base class for every error raised by the route engine."""


class InvalidIndex(RouteError, IndexError):
    """An edge references a vertex that does not exist."""


class InvalidWeight(RouteError, ValueError):
    """The distance function returned a negative, NaN or infinite weight."""


class DisconnectedGraph(RouteError, RuntimeError):
    """Some vertex cannot be reached; the input graph must be connected."""


class TrivialGraph(RouteError, ValueError):
    """The graph has nothing to traverse (no vertices)."""


class MatchingError(RouteError, RuntimeError):
    """No perfect matching exists in the matching graph."""
