# picking.py
# Nearest visible sample to a world-space ray.
from __future__ import annotations
from dataclasses import dataclass
import numpy as np
import pandas as pd

from ore_common.schema import Confidence

DEFAULT_THRESHOLD = 8.0

@dataclass(frozen=True)
class Ray:
    origin: np.ndarray
    direction: np.ndarray

    @classmethod
    def through(cls, origin, target) -> "Ray":
        o = np.asarray(origin, dtype=float)
        return cls(o, np.asarray(target, dtype=float) - o)

    def unit(self) -> np.ndarray:
        d = np.asarray(self.direction, dtype=float)
        n = float(np.linalg.norm(d))
        if n <= 0:
            raise ValueError("ray direction must be non-zero")
        return d / n

@dataclass(frozen=True)
class PickHit:
    index: int                 # row in the visible table
    position: np.ndarray
    grade: float
    confidence: Confidence
    distance_to_ray: float
    distance_along_ray: float

@dataclass(frozen=True)
class Selection:
    grade: str
    depth: str
    confidence: Confidence

def _project_many_to_ray(xyz: np.ndarray, o: np.ndarray, u: np.ndarray):
    """Perpendicular distance of each point to the ray and its along-ray parameter."""
    rel = xyz - o
    t = rel @ u
    q = o + np.outer(t, u)
    dist = np.linalg.norm(xyz - q, axis=1)
    return dist, t

def pick(visible: pd.DataFrame, ray: Ray, threshold: float = DEFAULT_THRESHOLD) -> PickHit | None:
    """Closest visible point within *threshold* of the ray, or None.

    Only points in front of the ray origin count. The first point the ray
    reaches wins; equal along-ray distances go to the one closer to the ray.
    """
    if visible is None or visible.empty:
        return None
    xyz = visible[["X", "Y", "Z"]].to_numpy(float)
    dist, t = _project_many_to_ray(xyz, np.asarray(ray.origin, float), ray.unit())
    ok = (dist <= float(threshold)) & (t >= 0.0)
    if not np.any(ok):
        return None
    idx = np.flatnonzero(ok)
    order = np.lexsort((dist[idx], t[idx]))
    i = int(idx[order[0]])
    row = visible.iloc[i]
    return PickHit(
        index=i,
        position=xyz[i].copy(),
        grade=float(row["GRADE"]),
        confidence=Confidence.from_code(int(row["CONF_CODE"])),
        distance_to_ray=float(dist[i]),
        distance_along_ray=float(t[i]),
    )

def format_grade(grade: float, unit: str = "g/T") -> str:
    return f"{grade:.2f} {unit}"

def hover_text(hit: PickHit | None, unit: str = "g/T") -> str | None:
    return format_grade(hit.grade, unit) if hit else None

def to_selection(hit: PickHit, unit: str = "g/T") -> Selection:
    return Selection(
        grade=format_grade(hit.grade, unit),
        depth=f"{int(np.floor(float(hit.position[2]) + 0.5))} m",
        confidence=hit.confidence,
    )
