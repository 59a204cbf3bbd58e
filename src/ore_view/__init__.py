# -*- coding: utf-8 -*-
"""ore_view public API (no side effects on import)."""

from .bounds import Bounds, compute_bounds, depth_domain
from .camera import CameraController, CameraPose, fit_pose
from .colormap import grade_color, grade_colors, legend_samples, legend_labels
from .filtering import FilterResult, FilterWindow, Stats, apply_filter, clamp_window
from .frame import Frame, SlicePlane, build_frame, depth_ticks, update_slice_planes
from .picking import PickHit, Ray, Selection, pick, to_selection
from .session import (
    SessionState,
    new_session,
    load_dataset,
    set_window,
    set_depth_range,
    set_grade_range,
    hover,
    click,
    reset_view,
)
from .slider import DragState, RangeSlider

__all__ = [
    "Bounds", "compute_bounds", "depth_domain",
    "CameraController", "CameraPose", "fit_pose",
    "grade_color", "grade_colors", "legend_samples", "legend_labels",
    "FilterResult", "FilterWindow", "Stats", "apply_filter", "clamp_window",
    "Frame", "SlicePlane", "build_frame", "depth_ticks", "update_slice_planes",
    "PickHit", "Ray", "Selection", "pick", "to_selection",
    "SessionState", "new_session", "load_dataset", "set_window",
    "set_depth_range", "set_grade_range", "hover", "click", "reset_view",
    "DragState", "RangeSlider",
]
