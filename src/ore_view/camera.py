from __future__ import annotations
from dataclasses import dataclass
import numpy as np

from .bounds import Bounds
from .picking import Ray

FIT_SCALE = 0.9
FIT_MARGIN = 600.0
UP = np.array([0.0, 0.0, 1.0])

@dataclass(frozen=True)
class CameraPose:
    position: np.ndarray
    target: np.ndarray

def fit_pose(bounds: Bounds) -> CameraPose:
    """Pose that frames the whole box: offset (r, 0.6r, r) from the centre,
    with r = 0.9 * |size| + 600."""
    r = bounds.diagonal * FIT_SCALE + FIT_MARGIN
    c = np.asarray(bounds.center, dtype=float)
    return CameraPose(position=c + np.array([r, 0.6 * r, r]), target=c.copy())

class CameraController:
    """Holds the presentational camera pose.

    The first successful fit marks the view as initialized; later automatic
    fits are skipped so user orbiting is not overridden. An explicit
    reset always refits.
    """

    def __init__(self, position=(1200.0, 1100.0, 900.0), target=(0.0, 0.0, -900.0), fov: float = 60.0):
        self.pose = CameraPose(np.asarray(position, float), np.asarray(target, float))
        self.fov = float(fov)
        self.initialized = False

    def reset_to_fit(self, bounds: Bounds | None) -> CameraPose:
        if bounds is None:
            return self.pose
        self.pose = fit_pose(bounds)
        self.initialized = True
        return self.pose

    def fit_if_needed(self, bounds: Bounds | None) -> CameraPose:
        if not self.initialized:
            return self.reset_to_fit(bounds)
        return self.pose

    def set_pose(self, position, target) -> CameraPose:
        self.pose = CameraPose(np.asarray(position, float), np.asarray(target, float))
        return self.pose

    def ray_from_pointer(self, ndc_x: float, ndc_y: float, aspect: float = 1.0) -> Ray:
        """World ray through normalised device coords (-1..1, y up), z-up perspective camera."""
        pos, tgt = self.pose.position, self.pose.target
        fwd = tgt - pos
        fwd = fwd / np.linalg.norm(fwd)
        right = np.cross(fwd, UP)
        if np.linalg.norm(right) < 1e-9:      # looking straight up/down
            right = np.array([1.0, 0.0, 0.0])
        right = right / np.linalg.norm(right)
        up = np.cross(right, fwd)
        h = np.tan(np.deg2rad(self.fov) / 2.0)
        d = fwd + float(ndc_x) * h * float(aspect) * right + float(ndc_y) * h * up
        return Ray(pos.copy(), d / np.linalg.norm(d))
