# -*- coding: utf-8 -*-
"""ore_ingest public API (no side effects on import)."""

from .parse import ParsedTable, parse_table
from .normalize import (
    normalize_rows,
    load_points_text,
    iter_points,
    empty_points,
)
from .demo import make_demo_csv

__all__ = [
    "ParsedTable",
    "parse_table",
    "normalize_rows",
    "load_points_text",
    "iter_points",
    "empty_points",
    "make_demo_csv",
]
