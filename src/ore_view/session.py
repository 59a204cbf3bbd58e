# -*- coding: utf-8 -*-
"""
Viewer session state and the event handlers that drive it.

`SessionState` holds everything one operator session owns (dataset, window,
frame, camera, selection). The handlers below take the state explicitly,
recompute synchronously, and write results back. A dataset reload swaps the
point table wholesale; nothing edits it in place.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
import numpy as np
import pandas as pd

from ore_common.config import AppCfg
from ore_ingest.normalize import empty_points, load_points_text
from .bounds import Bounds, compute_bounds, depth_domain
from .camera import CameraController
from .colormap import grade_color
from .filtering import FilterResult, FilterWindow, apply_filter, clamp_window
from .frame import Frame, build_frame, update_slice_planes
from .picking import PickHit, Ray, Selection, hover_text, pick, to_selection

logger = logging.getLogger(__name__)

HIGHLIGHT_RADIUS = 6.0
FALLBACK_MARKER = (0.0, 0.0, -1.0)

@dataclass(frozen=True)
class Highlight:
    position: np.ndarray
    radius: float = HIGHLIGHT_RADIUS

@dataclass
class SessionState:
    cfg: AppCfg
    window: FilterWindow
    camera: CameraController
    points: pd.DataFrame = field(default_factory=empty_points)
    source: str | None = None
    bounds: Bounds | None = None
    frame: Frame | None = None
    result: FilterResult | None = None
    selection: Selection | None = None
    highlight: Highlight | None = None
    tooltip: str | None = None

    @property
    def depth_domain(self) -> tuple[int, int]:
        return depth_domain(self.bounds)

    @property
    def is_empty(self) -> bool:
        return self.points.empty

    def fallback_marker(self):
        """(position, rgb) of the single marker drawn for an empty dataset."""
        return FALLBACK_MARKER, grade_color(self.cfg.grade_min, self.cfg.grade_min, self.cfg.grade_max)

def new_session(cfg: AppCfg) -> SessionState:
    window = FilterWindow.from_center(cfg.depth_center, cfg.slice_thickness, *cfg.grade_range)
    cam = CameraController(cfg.camera.get("position", (1200.0, 1100.0, 900.0)),
                           cfg.camera.get("target", (0.0, 0.0, -900.0)),
                           cfg.camera.get("fov", 60.0))
    return SessionState(cfg=cfg, window=window, camera=cam)

def _refilter(state: SessionState) -> FilterResult:
    state.result = apply_filter(state.points, state.window, state.cfg.tons_per_point,
                                state.cfg.grade_min, state.cfg.grade_max)
    return state.result

def load_dataset(state: SessionState, text: str | None, source: str | None = None) -> SessionState:
    """Replace the dataset and recompute bounds, frame, window and filter."""
    points = load_points_text(text)
    state.points = points
    state.source = source
    state.bounds = compute_bounds(points)
    state.highlight = None
    state.tooltip = None

    if state.bounds is None:
        state.frame = None
        logger.info("dataset %s is empty; showing fallback marker", source or "<text>")
    else:
        state.window = clamp_window(state.window, state.bounds, points["GRADE"],
                                    state.cfg.grade_min, state.cfg.grade_max)
        state.frame = build_frame(state.bounds, state.window.depth_lo, state.window.depth_hi,
                                  state.cfg.tick_step)
        state.camera.fit_if_needed(state.bounds)
        logger.info("dataset %s: %d points, z in [%.1f, %.1f]",
                    source or "<text>", len(points), *state.bounds.z_range)
    _refilter(state)
    return state

def set_window(state: SessionState, window: FilterWindow) -> FilterResult:
    """Apply a new filter window (clamped to the data) and refilter."""
    if state.bounds is not None:
        window = clamp_window(window, state.bounds, state.points["GRADE"],
                              state.cfg.grade_min, state.cfg.grade_max)
    state.window = window
    if state.frame is not None:
        update_slice_planes(state.frame, state.bounds, window.depth_lo, window.depth_hi)
    return _refilter(state)

def set_depth_range(state: SessionState, lo: float, hi: float) -> FilterResult:
    w = state.window
    return set_window(state, FilterWindow(lo, hi, w.grade_lo, w.grade_hi))

def set_grade_range(state: SessionState, lo: float, hi: float) -> FilterResult:
    w = state.window
    return set_window(state, FilterWindow(w.depth_lo, w.depth_hi, lo, hi))

def _pick(state: SessionState, ray: Ray) -> PickHit | None:
    if state.result is None:
        return None
    return pick(state.result.visible, ray, state.cfg.pick_threshold)

def hover(state: SessionState, ray: Ray) -> str | None:
    """Update the transient tooltip; cleared when nothing is under the ray."""
    state.tooltip = hover_text(_pick(state, ray), state.cfg.grade_unit)
    return state.tooltip

def click(state: SessionState, ray: Ray) -> Selection | None:
    """Pick under the ray; on a hit replace the selection and the highlight."""
    hit = _pick(state, ray)
    if hit is None:
        return None
    state.selection = to_selection(hit, state.cfg.grade_unit)
    state.highlight = Highlight(hit.position.copy())
    logger.debug("picked visible[%d] grade=%.2f", hit.index, hit.grade)
    return state.selection

def reset_view(state: SessionState):
    return state.camera.reset_to_fit(state.bounds)
