from __future__ import annotations

import csv
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

import logging
logger = logging.getLogger(__name__)

from .motion import xy

Point = Tuple[float, float]


@dataclass
class Instance:
    name: str
    points: List[Point]
    edges: List[Tuple[int, int]]
    meta: Dict[str, Any] = field(default_factory=dict)


def _to_point(p: Any, k: int, path: Path) -> Point:
    try:
        return xy(p)
    except (TypeError, ValueError, IndexError, KeyError) as e:
        raise ValueError(f"{path}: point #{k} is not an (x, y) pair: {p!r}") from e


def _to_edge(e: Any, k: int, path: Path) -> Tuple[int, int]:
    try:
        a, b = e
        return int(a), int(b)
    except (TypeError, ValueError) as err:
        raise ValueError(f"{path}: edge #{k} is not an (i, j) pair: {e!r}") from err


def read_instance(path: str | Path) -> Instance:
    """
    Read an instance JSON:
      {"name": "...", "points": [[x, y], ...], "edges": [[i, j], ...], "meta": {...}}
    Index ranges are not checked here; the graph does that.
    """
    p = Path(path)
    raw = json.loads(p.read_text(encoding="utf-8"))
    if "points" not in raw or "edges" not in raw:
        raise ValueError(f"{p}: instance needs 'points' and 'edges'")

    points = [_to_point(q, k, p) for k, q in enumerate(raw["points"])]
    edges = [_to_edge(e, k, p) for k, e in enumerate(raw["edges"])]
    inst = Instance(name=str(raw.get("name", p.stem)), points=points, edges=edges, meta=dict(raw.get("meta", {})))
    logger.debug("read %s: V=%d E=%d", p.name, len(points), len(edges))
    return inst


def write_instance(inst: Instance, path: str | Path) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "name": inst.name,
        "points": [[float(x), float(y)] for x, y in inst.points],
        "edges": [[int(a), int(b)] for a, b in inst.edges],
        "meta": inst.meta,
    }
    p.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return p


def list_instances(folder: str | Path) -> List[Path]:
    return sorted(Path(folder).glob("*.json"))


def write_tour_csv(path: str | Path, tour: Sequence[int], path_points: Sequence[Any]) -> Path:
    """One row per tour vertex: step, vid, x, y."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["step", "vid", "x", "y"])
        for step, (vid, pt) in enumerate(zip(tour, path_points)):
            x, y = xy(pt)
            w.writerow([step, vid, x, y])
    return p
