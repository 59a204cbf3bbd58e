from __future__ import annotations
from dataclasses import dataclass
import numpy as np
import pandas as pd

@dataclass(frozen=True)
class Bounds:
    min: np.ndarray
    max: np.ndarray
    center: np.ndarray
    size: np.ndarray

    @property
    def z_range(self) -> tuple[float, float]:
        return float(min(self.min[2], self.max[2])), float(max(self.min[2], self.max[2]))

    @property
    def diagonal(self) -> float:
        return float(np.linalg.norm(self.size))

def compute_bounds(points: pd.DataFrame) -> Bounds | None:
    """Axis-aligned box of the X/Y/Z columns; None for an empty table."""
    if points is None or points.empty:
        return None
    xyz = points[["X", "Y", "Z"]].to_numpy(float)
    lo = xyz.min(axis=0)
    hi = xyz.max(axis=0)
    return Bounds(min=lo, max=hi, center=0.5 * (lo + hi), size=hi - lo)

def depth_domain(bounds: Bounds | None) -> tuple[int, int]:
    """Slider domain for depth: floor/ceil of the Z extent, (-1, -1) when empty."""
    if bounds is None:
        return -1, -1
    zmin, zmax = bounds.z_range
    return int(np.floor(zmin)), int(np.ceil(zmax))
