# stats.py
from __future__ import annotations

from typing import Any, Dict, List
import math
import statistics

import logging
logger = logging.getLogger(__name__)

from scipy.stats import wilcoxon


def _mean(xs): return statistics.mean(xs) if xs else 0.0
def _std(xs):  return statistics.pstdev(xs) if len(xs) > 1 else 0.0


def paired_pvalue(rows: List[Dict[str, Any]], metric: str, a: str, b: str) -> float:
    """Two-sided Wilcoxon signed-rank p value of metric(b) - metric(a), paired by instance."""
    xa = {r["instance"]: r[metric] for r in rows if r["method"] == a}
    xb = {r["instance"]: r[metric] for r in rows if r["method"] == b}
    common = sorted(set(xa) & set(xb))
    d = [xb[k] - xa[k] for k in common if abs(xb[k] - xa[k]) > 1e-12]
    if len(d) <= 1:
        return 1.0
    p = float(wilcoxon(d, zero_method="wilcox", alternative="two-sided").pvalue)
    return 1.0 if math.isnan(p) else p


def build_summary_stats(rows: List[Dict[str, Any]], methods: List[str]) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for m in methods:
        data = [r for r in rows if r["method"] == m]
        out.append(dict(
            method=m,
            n=len(data),
            n_odd_mean=_mean([r["n_odd"] for r in data]),
            n_odd_std=_std([r["n_odd"] for r in data]),
            L_base_mean=_mean([r["L_base"] for r in data]),
            L_extra_mean=_mean([r["L_extra"] for r in data]),
            L_extra_std=_std([r["L_extra"] for r in data]),
            L_tour_mean=_mean([r["L_tour"] for r in data]),
            L_tour_std=_std([r["L_tour"] for r in data]),
            ratio_mean=_mean([r["tour_over_base"] for r in data]),
            ratio_std=_std([r["tour_over_base"] for r in data]),
            runtime_mean=_mean([r.get("runtime_s", 0.0) for r in data]),
            runtime_std=_std([r.get("runtime_s", 0.0) for r in data]),
        ))

    # greedy vs exact on the matching weight, when both ran on the same instances
    if "greedy" in methods and "exact" in methods:
        p = paired_pvalue(rows, "W_match", "exact", "greedy")
        logger.info("[STATS] greedy vs exact W_match: p=%.4g", p)
        for row in out:
            if row["method"] == "greedy":
                row["p_W_vs_exact"] = p

    return out
