from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
import yaml

DEFAULTS: dict = {
    "data": {"default_dataset": "data/3Dmodel.csv"},
    "grade": {"min": 0.0, "max": 40.0, "unit": "g/T"},
    "stats": {"tons_per_point": 100.0},
    "frame": {"tick_step": 200.0},
    "picking": {"threshold": 8.0},
    "view": {"depth_center": -900.0, "slice_thickness": 200.0, "grade_range": [0.0, 40.0]},
    "fallback": {"rows": 900, "seed": None},
    "camera": {"position": [1200.0, 1100.0, 900.0], "target": [0.0, 0.0, -900.0], "fov": 60.0},
}

@dataclass
class AppCfg:
    root: Path
    default_dataset: Path
    grade_min: float = 0.0
    grade_max: float = 40.0
    grade_unit: str = "g/T"
    tons_per_point: float = 100.0
    tick_step: float = 200.0
    pick_threshold: float = 8.0
    depth_center: float = -900.0
    slice_thickness: float = 200.0
    grade_range: tuple[float, float] = (0.0, 40.0)
    fallback_rows: int = 900
    fallback_seed: int | None = None
    camera: dict = field(default_factory=dict)

def _merge(base: dict, over: dict) -> dict:
    out = {k: dict(v) for k, v in base.items()}
    for k, v in (over or {}).items():
        if k in out and isinstance(v, dict):
            out[k].update(v)
    return out

def _pair(v, name: str) -> tuple[float, float]:
    try:
        a, b = v
        return float(a), float(b)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a [lo, hi] pair, got {v!r}")

def load_cfg(path: str | Path | None = "configs/app.yaml") -> AppCfg:
    """Read configs/app.yaml on top of the built-in defaults.

    A missing file is not an error: every key has a default.
    """
    data: dict = {}
    p = Path(path) if path else None
    if p is not None and p.exists():
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    d = _merge(DEFAULTS, data)
    root = Path(".").resolve()

    gmin, gmax = float(d["grade"]["min"]), float(d["grade"]["max"])
    if not gmax > gmin:
        raise ValueError(f"grade.max ({gmax}) must exceed grade.min ({gmin})")
    tick_step = float(d["frame"]["tick_step"])
    if not tick_step > 0:
        raise ValueError(f"frame.tick_step must be positive, got {tick_step}")
    seed = d["fallback"].get("seed")
    return AppCfg(
        root=root,
        default_dataset=root / d["data"]["default_dataset"],
        grade_min=gmin,
        grade_max=gmax,
        grade_unit=str(d["grade"].get("unit", "g/T")),
        tons_per_point=float(d["stats"]["tons_per_point"]),
        tick_step=tick_step,
        pick_threshold=float(d["picking"]["threshold"]),
        depth_center=float(d["view"]["depth_center"]),
        slice_thickness=float(d["view"]["slice_thickness"]),
        grade_range=_pair(d["view"]["grade_range"], "view.grade_range"),
        fallback_rows=int(d["fallback"]["rows"]),
        fallback_seed=None if seed is None else int(seed),
        camera={
            "position": tuple(float(c) for c in d["camera"]["position"]),
            "target":   tuple(float(c) for c in d["camera"]["target"]),
            "fov":      float(d["camera"]["fov"]),
        },
    )
