# slider.py
# Two-handle range slider as an explicit drag state machine. Positions are
# fractions of the track (0 = bottom/min, 1 = top/max).
from __future__ import annotations
from enum import Enum

class DragState(Enum):
    IDLE = "idle"
    DRAGGING_MIN = "dragging_min"
    DRAGGING_MAX = "dragging_max"
    DRAGGING_RANGE = "dragging_range"

_START = {"min": DragState.DRAGGING_MIN, "max": DragState.DRAGGING_MAX, "range": DragState.DRAGGING_RANGE}

class RangeSlider:
    def __init__(self, vmin: float, vmax: float, lo: float | None = None, hi: float | None = None,
                 step: float = 10.0, on_change=None):
        if not vmax > vmin:
            raise ValueError(f"slider domain must be increasing, got [{vmin}, {vmax}]")
        self.vmin, self.vmax, self.step = float(vmin), float(vmax), float(step)
        self.lo = self.vmin if lo is None else float(lo)
        self.hi = self.vmax if hi is None else float(hi)
        self.state = DragState.IDLE
        self._offset = 0.0
        self._on_change = on_change

    # --- value <-> position ---
    def value_to_position(self, v: float) -> float:
        return (v - self.vmin) / (self.vmax - self.vmin)

    def position_to_value(self, p: float) -> float:
        v = self.vmin + p * (self.vmax - self.vmin)
        return round(v / self.step) * self.step

    # --- events ---
    def start(self, handle: str, position: float) -> DragState:
        if handle not in _START:
            raise ValueError(f"unknown slider handle: {handle!r}")
        self.state = _START[handle]
        ref = self.hi if handle == "max" else self.lo
        self._offset = _clip01(position) - self.value_to_position(ref)
        return self.state

    def move(self, position: float) -> tuple[float, float]:
        if self.state is DragState.IDLE:
            return self.lo, self.hi
        v = self.position_to_value(_clip01(position) - self._offset)
        if self.state is DragState.DRAGGING_MIN:
            self.lo = max(self.vmin, min(v, self.hi - self.step))
        elif self.state is DragState.DRAGGING_MAX:
            self.hi = min(self.vmax, max(v, self.lo + self.step))
        else:
            width = self.hi - self.lo
            self.lo = max(self.vmin, min(v, self.vmax - width))
            self.hi = self.lo + width
        if self._on_change:
            self._on_change(self.lo, self.hi)
        return self.lo, self.hi

    def end(self) -> DragState:
        self.state = DragState.IDLE
        self._offset = 0.0
        return self.state

def _clip01(p: float) -> float:
    return max(0.0, min(1.0, float(p)))
