# src/sketchroute/viz.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from matplotlib.lines import Line2D

from .graph import CPPGraph
from .motion import xy
from .solver import RouteResult

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

STYLE = {
    "once": "#1f77b4",     # edge drawn once
    "twice": "#d62728",    # doubled by the T-join
    "order": "#111111",    # tour direction arrows
    "start": "#2ca02c",
}


def _save_png_and_svg(fig, out_path: Path, *, dpi: int = 300) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=dpi, bbox_inches="tight")
    fig.savefig(out_path.with_suffix(".svg"), bbox_inches="tight")


def plot_tour(
        graph: CPPGraph,
        res: RouteResult,
        out_path: Path,
        title: str,
        *,
        show_order: bool = True,
        max_arrows: int = 60,
        arrow_width: float = 5.0,
        pad: float = 2.0,
        dpi: int = 300,
) -> None:
    """
    Draw the drawing graph and the tour:
    - single edges blue, doubled (T-join) edges red and thicker
    - direction arrows on the first `max_arrows` tour steps
    - start vertex green
    """
    pts: List[Point] = [xy(v.data) for v in graph.vertices]
    if not pts:
        logger.warning("[PLOT] skip empty graph: %s", title)
        return

    fig = plt.figure(figsize=(8, 8))
    ax = fig.add_subplot(111)
    ax.set_title(title)
    ax.set_aspect("equal", adjustable="box")

    xs = [p[0] for p in pts]
    ys = [p[1] for p in pts]
    ax.set_xlim(min(xs) - pad, max(xs) + pad)
    ax.set_ylim(min(ys) - pad, max(ys) + pad)

    once, twice = [], []
    for e in graph.edges:
        seg = [pts[e.u], pts[e.v]]
        (twice if e.mult >= 2 else once).append(seg)
    if once:
        ax.add_collection(LineCollection(once, colors=STYLE["once"], linewidths=1.4, alpha=0.8, zorder=2))
    if twice:
        ax.add_collection(LineCollection(twice, colors=STYLE["twice"], linewidths=2.6, alpha=0.9, zorder=3))

    ax.plot(xs, ys, "o", color="#555555", markersize=3, zorder=4)

    if show_order and len(res.tour) > 1:
        steps = list(zip(res.tour, res.tour[1:]))[:max_arrows]
        bx, by, vx, vy = [], [], [], []
        for a, b in steps:
            (x0, y0), (x1, y1) = pts[a], pts[b]
            dx, dy = x1 - x0, y1 - y0
            if (dx * dx + dy * dy) ** 0.5 <= 1e-9:
                continue
            # short arrow around the segment midpoint
            bx.append(x0 + dx * 0.4)
            by.append(y0 + dy * 0.4)
            vx.append(dx * 0.2)
            vy.append(dy * 0.2)
        if bx:
            ax.quiver(
                bx, by, vx, vy,
                angles="xy", scale_units="xy", scale=1,
                width=0.003,
                headwidth=arrow_width,
                headlength=arrow_width,
                headaxislength=arrow_width,
                color=STYLE["order"],
                alpha=0.8,
                zorder=5,
            )

    sx, sy = pts[res.tour[0]]
    ax.plot(sx, sy, "o", color=STYLE["start"], markersize=9, zorder=6)

    legend_elements = [
        Line2D([0], [0], color=STYLE["once"], lw=1.6, label="Edge (once)"),
        Line2D([0], [0], color=STYLE["twice"], lw=2.8, label="Edge (doubled)"),
        Line2D([0], [0], marker="o", color=STYLE["start"], label="Start", markersize=8, linestyle="None"),
    ]
    ax.legend(handles=legend_elements, loc="upper right")

    _save_png_and_svg(fig, out_path, dpi=dpi)
    plt.close(fig)


def plot_metrics_preview(rows: Sequence[Dict[str, Any]], out_path: Path, title: str, *, dpi: int = 150) -> None:
    """Text-only summary sheet of per-instance metrics."""
    fig = plt.figure(figsize=(10, 4))
    ax = fig.add_subplot(111)
    ax.axis("off")

    lines = [title, "", "Metrics Summary:"]
    for row in rows:
        lines.append(
            f"{str(row.get('instance', '?')):<24} "
            f"odd={int(row['n_odd']):3d} "
            f"L_base={row['L_base']:.1f} "
            f"L_tour={row['L_tour']:.1f} "
            f"x{row['tour_over_base']:.3f}"
        )

    ax.text(
        0.05, 0.95, "\n".join(lines),
        va="top", ha="left",
        fontsize=9, fontfamily="monospace"
    )

    _save_png_and_svg(fig, out_path, dpi=dpi)
    plt.close(fig)
