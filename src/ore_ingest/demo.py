# -*- coding: utf-8 -*-
"""Synthetic drill-sample cloud used when no dataset can be read."""
from __future__ import annotations
import numpy as np
import pandas as pd

from ore_common.schema import Confidence

DEMO_HEADER = ["X", "Y", "Z", "AUGT", "CONF"]

def make_demo_csv(n: int = 900, seed: int | None = None) -> str:
    """Random points in a fixed box: x in +-400, y in +-300, z in [-1300, -200].

    Grade centres on 18 with +-10 jitter (floored at 0); confidence is drawn
    uniformly from the three categories.
    """
    rng = np.random.default_rng(seed)
    x = (rng.random(n) - 0.5) * 800
    y = (rng.random(n) - 0.5) * 600
    z = -200 - rng.random(n) * 1100
    a = np.maximum(0.0, 18 + (rng.random(n) - 0.5) * 20)
    c = rng.choice([k.value for k in Confidence], size=n)
    df = pd.DataFrame({"X": x, "Y": y, "Z": z, "AUGT": a, "CONF": c})[DEMO_HEADER]
    return df.to_csv(index=False, float_format="%.2f", lineterminator="\n")
