# frame.py
# Static box/axes/ticks/grid geometry around the point cloud, plus the two
# slice planes that follow the depth window.
from __future__ import annotations
from dataclasses import dataclass, field
import numpy as np

from .bounds import Bounds

# corner index pairs of the 12 box edges (bottom ring, top ring, verticals)
_EDGE_IDX = [(0, 1), (1, 2), (2, 3), (3, 0),
             (4, 5), (5, 6), (6, 7), (7, 4),
             (0, 4), (1, 5), (2, 6), (3, 7)]

@dataclass
class Label:
    text: str
    position: np.ndarray
    size: float = 20.0

@dataclass
class SlicePlane:
    center: np.ndarray
    width: float
    height: float

    @property
    def z(self) -> float:
        return float(self.center[2])

    def corners(self) -> np.ndarray:
        """(4, 3) corners, counter-clockwise from (-w/2, -h/2)."""
        cx, cy, cz = self.center
        hw, hh = 0.5 * self.width, 0.5 * self.height
        return np.array([[cx - hw, cy - hh, cz], [cx + hw, cy - hh, cz],
                         [cx + hw, cy + hh, cz], [cx - hw, cy + hh, cz]], dtype=float)

@dataclass
class Frame:
    edges: np.ndarray                  # (12, 2, 3) segments
    axes: np.ndarray                   # (3, 2, 3) segments from the anchor corner
    ticks: list[float]                 # shallow -> deep
    tick_segments: np.ndarray          # (n, 2, 3)
    tick_labels: list[Label]
    title: Label
    grid: np.ndarray                   # (n, 4, 2, 3) rectangle outline per tick
    slice_top: SlicePlane
    slice_bottom: SlicePlane
    tick_len: float = 10.0
    meta: dict = field(default_factory=dict)

def depth_ticks(zmin: float, zmax: float, step: float = 200.0) -> list[float]:
    """Multiples of *step* inside [zmin, zmax], plus 0 when in range, sorted shallow first."""
    if not step > 0:
        raise ValueError(f"tick step must be positive, got {step}")
    lo, hi = min(zmin, zmax), max(zmin, zmax)
    ticks: list[float] = []
    start = float(np.ceil(lo / step) * step)
    i = 0
    while start + i * step <= hi:
        ticks.append(start + i * step + 0.0)   # avoid -0.0
        i += 1
    if lo <= 0 <= hi and 0.0 not in ticks:
        ticks.append(0.0)
    return sorted(ticks, reverse=True)

def _corners(b: Bounds) -> np.ndarray:
    (x0, y0, z0), (x1, y1, z1) = b.min, b.max
    return np.array([[x0, y0, z0], [x1, y0, z0], [x1, y1, z0], [x0, y1, z0],
                     [x0, y0, z1], [x1, y0, z1], [x1, y1, z1], [x0, y1, z1]], dtype=float)

def _tick_text(z: float) -> str:
    return f"{z:g} m"

def _clamp_z(z: float, b: Bounds) -> float:
    lo, hi = b.z_range
    return float(min(max(z, lo), hi))

def build_frame(bounds: Bounds, depth_lo: float, depth_hi: float, tick_step: float = 200.0) -> Frame:
    """Build the wireframe/axes/tick/grid description for *bounds*."""
    c = _corners(bounds)
    edges = np.array([[c[i], c[j]] for i, j in _EDGE_IDX])

    (x0, y0, z0), (x1, y1, z1) = bounds.min, bounds.max
    anchor = np.array([x0, y0, z1])
    axes = np.array([
        [anchor, [x1, y0, z1]],
        [anchor, [x0, y1, z1]],
        [anchor, [x0, y0, z0]],
    ], dtype=float)

    size_x = float(bounds.size[0])
    tick_len = max(10.0, min(30.0, size_x * 0.05)) if np.isfinite(size_x) else 10.0
    ticks = depth_ticks(z0, z1, tick_step)

    tick_segments = np.array([[[x0, y0, z], [x0 + tick_len, y0, z]] for z in ticks],
                             dtype=float).reshape(-1, 2, 3)
    tick_labels = [Label(_tick_text(z), np.array([x0 - tick_len * 0.4, y0, z])) for z in ticks]
    title = Label("DEPTH", np.array([x0 - tick_len * 0.8, y0, z1 + 20.0]), size=26.0)

    grid = np.array([
        [[[x0, y0, z], [x1, y0, z]], [[x1, y0, z], [x1, y1, z]],
         [[x1, y1, z], [x0, y1, z]], [[x0, y1, z], [x0, y0, z]]]
        for z in ticks
    ], dtype=float).reshape(-1, 4, 2, 3)

    w = max(1.0, float(bounds.size[0]))
    h = max(1.0, float(bounds.size[1]))
    frame = Frame(
        edges=edges, axes=axes, ticks=ticks,
        tick_segments=tick_segments, tick_labels=tick_labels, title=title,
        grid=grid,
        slice_top=SlicePlane(bounds.center.copy(), w, h),
        slice_bottom=SlicePlane(bounds.center.copy(), w, h),
        tick_len=tick_len,
    )
    update_slice_planes(frame, bounds, depth_lo, depth_hi)
    return frame

def update_slice_planes(frame: Frame, bounds: Bounds, depth_lo: float, depth_hi: float) -> Frame:
    """Move the two slice planes to the window bounds (clamped to the Z extent).

    Only the plane centres change; the rest of the frame is left untouched.
    """
    cx, cy = float(bounds.center[0]), float(bounds.center[1])
    frame.slice_top.center = np.array([cx, cy, _clamp_z(depth_hi, bounds)])
    frame.slice_bottom.center = np.array([cx, cy, _clamp_z(depth_lo, bounds)])
    return frame
