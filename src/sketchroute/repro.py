# repro.py
from __future__ import annotations

import json
import os
import platform
import random
import sys
from dataclasses import asdict, is_dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

import numpy as np


def set_global_seed(seed: int) -> None:
    """Seed the module-level `random` and numpy RNGs.

    Synthetic drawings use their own default_rng(seed); this only keeps
    stray global draws deterministic.
    """
    random.seed(seed)
    np.random.seed(seed)


def _cfg_to_dict(cfg: Any) -> Dict[str, Any]:
    if is_dataclass(cfg):
        return asdict(cfg)
    # SimpleNamespace from the parallel workers, or any object with UPPER_CASE fields
    return {k: getattr(cfg, k) for k in dir(cfg) if k.isupper() and not k.startswith("_")}


def dump_config(cfg: Any, out_dir: Path, *, extra: Dict[str, Any] | None = None) -> Path:
    """Write the case config plus interpreter / library versions to config_dump.json."""
    out_dir.mkdir(parents=True, exist_ok=True)
    from . import __version__

    meta: Dict[str, Any] = {
        "timestamp": datetime.now().isoformat(timespec="seconds"),
        "sketchroute": __version__,
        "python": sys.version.replace("\n", " "),
        "numpy": np.__version__,
        "platform": platform.platform(),
        "cwd": os.getcwd(),
    }
    if extra:
        meta.update(extra)

    path = out_dir / "config_dump.json"
    path.write_text(
        json.dumps({"cfg": _cfg_to_dict(cfg), "meta": meta}, ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    return path
