# -*- coding: utf-8 -*-
from __future__ import annotations
import logging
import numpy as np
import pandas as pd

from ore_common.schema import ColumnMap, Confidence, Point, POINT_COLUMNS, resolve_columns
from .parse import ParsedTable, parse_table

logger = logging.getLogger(__name__)

def empty_points() -> pd.DataFrame:
    return pd.DataFrame({
        "X": pd.Series(dtype="float64"), "Y": pd.Series(dtype="float64"),
        "Z": pd.Series(dtype="float64"), "GRADE": pd.Series(dtype="float64"),
        "CONF": pd.Series(dtype="object"),
    })[POINT_COLUMNS]

def normalize_rows(table: ParsedTable, cols: ColumnMap | None = None) -> pd.DataFrame:
    """Turn parsed rows into a typed point table (X, Y, Z, GRADE, CONF).

    Rows whose X/Y/Z/grade do not all coerce to finite floats are dropped.
    When Z came from an RL/elevation header, positive values are negated so
    Z always reads as depth below the datum.
    """
    if not table.rows:
        return empty_points()
    cols = cols or resolve_columns(table.headers)

    raw = pd.DataFrame.from_records(table.rows)
    def _num(key: str) -> pd.Series:
        h = cols.header(key)
        if h not in raw.columns:
            return pd.Series(np.nan, index=raw.index, dtype="float64")
        return pd.to_numeric(raw[h], errors="coerce").astype("float64")

    x, y, z, g = _num("x"), _num("y"), _num("z"), _num("grade")
    mask = np.isfinite(x) & np.isfinite(y) & np.isfinite(z) & np.isfinite(g)

    if cols.z_is_elevation:
        z = z.where(z <= 0, -z)

    ch = cols.header("conf")
    conf = raw[ch] if ch in raw.columns else pd.Series("", index=raw.index)
    conf = conf.map(lambda s: Confidence.parse(s).value)

    out = pd.DataFrame({"X": x, "Y": y, "Z": z, "GRADE": g, "CONF": conf}).loc[mask]
    out = out.reset_index(drop=True)
    logger.debug("normalize_rows: accepted %d of %d rows", len(out), len(raw))
    return out[POINT_COLUMNS]

def load_points_text(text: str | None) -> pd.DataFrame:
    """Raw CSV text -> normalized point table (possibly empty)."""
    table = parse_table(text)
    pts = normalize_rows(table)
    logger.info("Loaded %d points from %d data rows", len(pts), len(table))
    return pts

def iter_points(df: pd.DataFrame):
    """Yield immutable Point records in table order."""
    for r in df.itertuples(index=False):
        yield Point(float(r.X), float(r.Y), float(r.Z), float(r.GRADE), Confidence(r.CONF))
