from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

# Priority-ordered synonyms per semantic field (matched case-insensitively).
SYNONYMS: dict[str, tuple[str, ...]] = {
    "x":     ("x", "easting", "xutm", "lon", "long"),
    "y":     ("y", "northing", "yutm", "lat"),
    "z":     ("z", "depth", "rl", "elevation"),
    "grade": ("augt", "grade", "au", "gpt", "g/t", "gt", "au_gpt"),
    "conf":  ("conf", "confidence", "class"),
}

# Header names looked up when a field stays unresolved.
FALLBACK_HEADERS = {"x": "X", "y": "Y", "z": "Z", "grade": "AUGT", "conf": "CONF"}

ELEVATION_HEADERS = ("rl", "elevation")

@dataclass(frozen=True)
class ColumnMap:
    x: str | None
    y: str | None
    z: str | None
    grade: str | None
    conf: str | None
    z_is_elevation: bool = False

    def header(self, key: str) -> str:
        """Resolved header for *key*, or its fallback name when unresolved."""
        return getattr(self, key) or FALLBACK_HEADERS[key]

def resolve_columns(headers: list[str]) -> ColumnMap:
    """Map arbitrary header spellings to X/Y/Z/grade/confidence.

    For each field the first synonym (in priority order) present among the
    headers wins; the original spelling of the header is returned.
    """
    lower = [str(h).strip().lower() for h in headers]

    def _pick(cands: tuple[str, ...]) -> str | None:
        for c in cands:
            if c in lower:
                return headers[lower.index(c)]
        return None

    picked = {k: _pick(v) for k, v in SYNONYMS.items()}
    z = picked["z"]
    return ColumnMap(
        x=picked["x"], y=picked["y"], z=z,
        grade=picked["grade"], conf=picked["conf"],
        z_is_elevation=(z is not None and z.strip().lower() in ELEVATION_HEADERS),
    )


# --- point records ---------------------------------------------------------
class Confidence(str, Enum):
    MEASURED = "Measured"
    INDICATED = "Indicated"
    INFERRED = "Inferred"

    @property
    def code(self) -> int:
        return CONF_CODES[self]

    @classmethod
    def from_code(cls, code: int) -> "Confidence":
        return _CODE_TO_CONF.get(int(round(code)), cls.INDICATED)

    @classmethod
    def parse(cls, raw: str | None) -> "Confidence":
        """Case-insensitive label match; empty/unknown labels become Indicated."""
        s = (raw or "").strip().lower()
        for c in cls:
            if c.value.lower() == s:
                return c
        return cls.INDICATED

CONF_CODES = {Confidence.MEASURED: 0, Confidence.INDICATED: 1, Confidence.INFERRED: 2}
_CODE_TO_CONF = {v: k for k, v in CONF_CODES.items()}

# Canonical columns of a normalized point table.
POINT_COLUMNS = ["X", "Y", "Z", "GRADE", "CONF"]

@dataclass(frozen=True)
class Point:
    x: float
    y: float
    z: float
    grade: float
    confidence: Confidence = Confidence.INDICATED
