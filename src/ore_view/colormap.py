# colormap.py
# Grade -> RGB for point colouring and the legend bar.
from __future__ import annotations
import numpy as np

MIN_GRADE = 0.0
MAX_GRADE = 40.0

# Inverted heat scale: low grade reads "hot", high grade "cool".
# (t, R, G, B) with channels in 0..255.
GRADE_STOPS = np.array([
    [0.00,  25,   0,   0],   # near-black red
    [0.25, 200,  20,   0],   # red
    [0.50, 255, 215,  40],   # yellow
    [0.75, 250, 250, 235],   # near-white
    [1.00, 140, 200, 255],   # light blue
], dtype=float)

DIM_GRAY = (0.28, 0.28, 0.28)

def grade_to_t(grade, gmin: float = MIN_GRADE, gmax: float = MAX_GRADE):
    t = (np.asarray(grade, dtype=float) - gmin) / (gmax - gmin)
    return np.clip(t, 0.0, 1.0)

def grade_colors(grades, gmin: float = MIN_GRADE, gmax: float = MAX_GRADE) -> np.ndarray:
    """Vectorised colour map: (n,) grades -> (n, 3) RGB floats in 0..1.

    Piecewise-linear between adjacent stops; out-of-domain grades clamp to the
    end colours.
    """
    t = np.atleast_1d(grade_to_t(grades, gmin, gmax))
    ts = GRADE_STOPS[:, 0]
    rgb = np.column_stack([np.interp(t, ts, GRADE_STOPS[:, k]) for k in (1, 2, 3)])
    return rgb / 255.0

def grade_color(grade: float, gmin: float = MIN_GRADE, gmax: float = MAX_GRADE) -> tuple[float, float, float]:
    r, g, b = grade_colors([grade], gmin, gmax)[0]
    return float(r), float(g), float(b)

def to_css(rgb) -> str:
    r, g, b = (int(round(float(c) * 255)) for c in rgb)
    return f"rgb({r},{g},{b})"

def legend_samples(height: int = 120, gmin: float = MIN_GRADE, gmax: float = MAX_GRADE) -> np.ndarray:
    """Colours for a vertical legend, row 0 = top = gmax, last row = gmin."""
    if height < 2:
        return grade_colors([gmax], gmin, gmax)
    t = 1.0 - np.arange(height) / (height - 1)
    return grade_colors(gmin + t * (gmax - gmin), gmin, gmax)

def legend_labels(gmin: float = MIN_GRADE, gmax: float = MAX_GRADE) -> list[tuple[float, str]]:
    """(fraction from top, text) pairs for the legend ticks."""
    mid = 0.5 * (gmin + gmax)
    return [(0.0, f"{gmax:g}"), (0.5, f"{mid:g}"), (1.0, f"{gmin:g}")]
