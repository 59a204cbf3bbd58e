# -*- coding: utf-8 -*-
"""
Depth x grade window filter.

Splits the point table into a *visible* set (inside both ranges, coloured by
grade) and a *dimmed* set (flat gray, kept for spatial context) and
aggregates statistics over the visible set. Every call recomputes from
scratch.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
import numpy as np
import pandas as pd

from ore_common.schema import Confidence, CONF_CODES
from .bounds import Bounds
from .colormap import DIM_GRAY, MAX_GRADE, MIN_GRADE, grade_colors

logger = logging.getLogger(__name__)

TONS_PER_POINT = 100.0

@dataclass(frozen=True)
class FilterWindow:
    depth_lo: float
    depth_hi: float
    grade_lo: float
    grade_hi: float

    def __post_init__(self):
        # keep lo <= hi on both axes
        if self.depth_lo > self.depth_hi:
            lo, hi = self.depth_hi, self.depth_lo
            object.__setattr__(self, "depth_lo", lo)
            object.__setattr__(self, "depth_hi", hi)
        if self.grade_lo > self.grade_hi:
            lo, hi = self.grade_hi, self.grade_lo
            object.__setattr__(self, "grade_lo", lo)
            object.__setattr__(self, "grade_hi", hi)

    @classmethod
    def from_center(cls, center: float, thickness: float,
                    grade_lo: float = MIN_GRADE, grade_hi: float = MAX_GRADE) -> "FilterWindow":
        half = 0.5 * float(thickness)
        return cls(center - half, center + half, grade_lo, grade_hi)

    @property
    def depth_center(self) -> float:
        return 0.5 * (self.depth_lo + self.depth_hi)

def clamp_window(window: FilterWindow, bounds: Bounds | None, grades: pd.Series | None = None,
                 gmin: float = MIN_GRADE, gmax: float = MAX_GRADE) -> FilterWindow:
    """Fit *window* into the dataset's ranges.

    Depth ends clamp into the Z extent; a depth window lying entirely outside
    it resets to the full extent. Grade ends clamp into the colour-map domain
    widened to the data's own grade range.
    """
    if bounds is None:
        return window
    zmin, zmax = bounds.z_range
    if window.depth_hi < zmin or window.depth_lo > zmax:
        dlo, dhi = zmin, zmax
    else:
        dlo, dhi = max(window.depth_lo, zmin), min(window.depth_hi, zmax)

    glo_dom, ghi_dom = gmin, gmax
    if grades is not None and len(grades):
        glo_dom = min(glo_dom, float(grades.min()))
        ghi_dom = max(ghi_dom, float(grades.max()))
    glo = min(max(window.grade_lo, glo_dom), ghi_dom)
    ghi = min(max(window.grade_hi, glo_dom), ghi_dom)
    return FilterWindow(dlo, dhi, glo, ghi)

@dataclass
class Stats:
    avg_grade: float = 0.0
    tonnage: float = 0.0
    mix: dict[str, int] = field(default_factory=lambda: {c.value: 0 for c in Confidence})

    @property
    def count(self) -> int:
        return int(sum(self.mix.values()))

    def mix_percent(self) -> dict[str, int]:
        total = max(1, self.count)
        return {k: int(round(100.0 * v / total)) for k, v in self.mix.items()}

@dataclass
class FilterResult:
    visible: pd.DataFrame      # X, Y, Z, GRADE, CONF_CODE, R, G, B
    dimmed: pd.DataFrame       # X, Y, Z, R, G, B
    stats: Stats
    window: FilterWindow

    @property
    def visible_count(self) -> int:
        return len(self.visible)

    @property
    def dimmed_count(self) -> int:
        return len(self.dimmed)

def _empty_result(window: FilterWindow) -> FilterResult:
    vis = pd.DataFrame({c: pd.Series(dtype="float64") for c in ["X", "Y", "Z", "GRADE", "CONF_CODE", "R", "G", "B"]})
    dim = pd.DataFrame({c: pd.Series(dtype="float64") for c in ["X", "Y", "Z", "R", "G", "B"]})
    return FilterResult(vis, dim, Stats(), window)

def apply_filter(
    points: pd.DataFrame,
    window: FilterWindow,
    tons_per_point: float = TONS_PER_POINT,
    gmin: float = MIN_GRADE,
    gmax: float = MAX_GRADE,
) -> FilterResult:
    """Partition *points* by the inclusive depth and grade ranges of *window*."""
    if points is None or points.empty:
        return _empty_result(window)

    z = points["Z"].to_numpy(float)
    g = points["GRADE"].to_numpy(float)
    in_depth = (z >= window.depth_lo) & (z <= window.depth_hi)
    in_grade = (g >= window.grade_lo) & (g <= window.grade_hi)
    mask = in_depth & in_grade

    vis = points.loc[mask, ["X", "Y", "Z", "GRADE"]].reset_index(drop=True)
    conf = points.loc[mask, "CONF"].reset_index(drop=True)
    vis["CONF_CODE"] = conf.map(lambda c: CONF_CODES[Confidence(c)]).astype("int64")
    rgb = grade_colors(vis["GRADE"].to_numpy(float), gmin, gmax) if len(vis) else np.zeros((0, 3))
    vis["R"], vis["G"], vis["B"] = rgb[:, 0], rgb[:, 1], rgb[:, 2]

    dim = points.loc[~mask, ["X", "Y", "Z"]].reset_index(drop=True)
    dim["R"], dim["G"], dim["B"] = DIM_GRAY

    count = len(vis)
    avg = float(vis["GRADE"].sum() / count) if count else 0.0
    mix = {c.value: 0 for c in Confidence}
    for k, v in conf.value_counts().items():
        mix[str(k)] = int(v)
    stats = Stats(avg_grade=avg, tonnage=count * float(tons_per_point), mix=mix)

    logger.debug("filter %s: visible=%d dimmed=%d avg=%.3f", window, count, len(dim), avg)
    return FilterResult(vis, dim, stats, window)
