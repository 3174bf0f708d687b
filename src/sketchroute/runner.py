# runner.py
from __future__ import annotations

import csv
import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, List, Sequence

import logging
logger = logging.getLogger(__name__)

from .dataio import Instance, list_instances, read_instance, write_tour_csv
from .metrics import aggregate_totals, compute_tour_metrics
from .motion import get_distance
from .repro import dump_config, set_global_seed
from .solver import build, solve_route
from .synth import grid_instance
from .validate import check_even_degrees, validate_tour


def _ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


def _write_rows_csv(path: Path, rows: List[Dict[str, Any]]) -> None:
    """
    CSV writer:
    - fieldnames is the union of all keys across rows, preferred columns first
    - write tmp then os.replace
    """
    _ensure_dir(path.parent)
    if not rows:
        return

    preferred = [
        "case", "instance", "method",
        "n_vertices", "n_edges", "n_odd", "n_doubled",
        "L_base", "L_extra", "L_tour", "W_match",
        "tour_over_base", "runtime_s",
    ]

    all_keys = set().union(*(r.keys() for r in rows))
    fieldnames = [k for k in preferred if k in all_keys]
    fieldnames += sorted(all_keys - set(fieldnames))

    tmp = path.with_suffix(path.suffix + ".tmp")
    with open(tmp, "w", newline="", encoding="utf-8-sig") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames, extrasaction="ignore")
        w.writeheader()
        for r in rows:
            w.writerow(r)
    os.replace(tmp, path)


def load_instances(cfg) -> List[Instance]:
    """Instances from INSTANCE_DIR, or N_SEEDS synthetic grids when it has none."""
    folder = Path(cfg.INSTANCE_DIR) if cfg.INSTANCE_DIR else None
    files = list_instances(folder) if folder is not None and folder.is_dir() else []
    if files:
        return [read_instance(p) for p in files]

    logger.info("[DATA] no instances in %s; generating %d synthetic grids", folder, cfg.N_SEEDS)
    insts = []
    for i in range(cfg.N_SEEDS):
        seed = cfg.SEED0 + i
        insts.append(grid_instance(
            cfg.GRID_ROWS, cfg.GRID_COLS,
            spacing=cfg.GRID_SPACING,
            jitter=cfg.GRID_JITTER,
            drop=cfg.GRID_DROP,
            seed=seed,
        ))
    return insts


def run_one_instance(inst: Instance, cfg, method: str, out_case_dir: Path, *, plot: bool = False) -> Dict[str, Any]:
    """
    Solve one instance with one matching method:
      out_case_dir/method/<instance>_tour.csv (+ plot)
    Return the metrics row.
    """
    out_dir = out_case_dir / method
    _ensure_dir(out_dir)

    graph = build(inst.points, inst.edges, get_distance(cfg.DIST_MODE))
    res = solve_route(graph, cfg, method=method)

    if cfg.VALIDATE:
        check_even_degrees(graph)
        validate_tour(graph, res.tour)

    origin = (cfg.ORIGIN_X, cfg.ORIGIN_Y)
    row = compute_tour_metrics(graph, res, origin=origin)
    row.update({
        "case": cfg.CASE_NAME,
        "instance": inst.name,
        "method": method,
        "method_used": res.method,
    })

    write_tour_csv(out_dir / f"{inst.name}_tour.csv", res.tour, res.path)

    if plot:
        from .viz import plot_tour
        plot_tour(
            graph, res,
            out_dir / f"{inst.name}_tour.png",
            title=f"{cfg.CASE_NAME} | {inst.name} | {res.method} | L={res.length:.1f}",
            show_order=cfg.PLOT_SHOW_ORDER,
        )
    return row


def _run_instance_worker(cfg_dict: Dict[str, Any], inst: Instance, methods: List[str], out_case_dir: str,
                         plot: bool) -> List[Dict[str, Any]]:
    """Worker for parallel runs; cfg travels as a plain dict."""
    cfg = SimpleNamespace(**cfg_dict)
    return [run_one_instance(inst, cfg, m, Path(out_case_dir), plot=plot) for m in methods]


def _log_row(row: Dict[str, Any]) -> None:
    logger.info(
        "[OK] %s %s odd=%d L_tour=%.2f (x%.3f) runtime=%.3fs",
        row.get("method"), row.get("instance"), int(row.get("n_odd", 0)),
        row.get("L_tour", 0.0), row.get("tour_over_base", 0.0), row.get("runtime_s", 0.0),
    )


def run_case(cfg, methods: Sequence[str] = ()) -> List[Dict[str, Any]]:
    """
    Solve every instance of the case with each method.
    Output:
      metrics_<method>.csv, totals.csv, summary_stats.csv, tours and plots
    """
    methods = list(methods) or [cfg.MATCH_METHOD]
    set_global_seed(cfg.SEED0)

    out_root = Path(cfg.OUT_ROOT)
    out_case_dir = out_root / cfg.CASE_NAME
    _ensure_dir(out_case_dir)

    if getattr(cfg, "DUMP_CONFIG", True):
        dump_config(cfg, out_case_dir, extra={"methods": methods})

    logger.info("[CASE] %s", cfg.CASE_NAME)
    logger.info(
        "[CFG] methods=%s exact_max_odd=%d dist=%s root=%d validate=%s",
        methods, cfg.EXACT_MAX_ODD, cfg.DIST_MODE, cfg.ROOT, cfg.VALIDATE,
    )
    logger.info("[OUT_ROOT] %s", out_root)

    insts = load_instances(cfg)
    n_plot = int(cfg.PLOT_MAX_INSTANCES) if cfg.PLOT else 0
    rows_all: List[Dict[str, Any]] = []

    n_jobs = int(getattr(cfg, "N_JOBS", 1) or 1)
    if n_jobs > 1 and len(insts) > 1:
        logger.info("[PAR] Running instances in parallel: N_JOBS=%d", n_jobs)
        cfg_dict = dict(getattr(cfg, "__dict__", {}))
        with ProcessPoolExecutor(max_workers=n_jobs) as ex:
            futures = {
                ex.submit(_run_instance_worker, cfg_dict, inst, methods, str(out_case_dir), i < n_plot): inst.name
                for i, inst in enumerate(insts)
            }
            for fut in as_completed(futures):
                for row in fut.result():
                    rows_all.append(row)
                    _log_row(row)
    else:
        for i, inst in enumerate(insts):
            for m in methods:
                row = run_one_instance(inst, cfg, m, out_case_dir, plot=i < n_plot)
                rows_all.append(row)
                _log_row(row)

    rows_all.sort(key=lambda r: (r["method"], r["instance"]))

    totals = []
    for m in methods:
        rows_m = [r for r in rows_all if r["method"] == m]
        _write_rows_csv(out_case_dir / f"metrics_{m}.csv", rows_m)
        t = aggregate_totals(rows_m)
        t.update({"case": cfg.CASE_NAME, "method": m})
        totals.append(t)
    _write_rows_csv(out_case_dir / "totals.csv", totals)

    from .stats import build_summary_stats
    _write_rows_csv(out_case_dir / "summary_stats.csv", build_summary_stats(rows_all, methods))

    if n_plot:
        from .viz import plot_metrics_preview
        for m in methods:
            plot_metrics_preview(
                [r for r in rows_all if r["method"] == m][:40],
                out_case_dir / f"metrics_{m}_preview.png",
                title=f"{cfg.CASE_NAME} | {m}",
            )

    logger.info("Case finished. Output dir: %s", out_case_dir)
    return rows_all
