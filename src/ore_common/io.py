from __future__ import annotations
import logging
from pathlib import Path

from ore_ingest.demo import make_demo_csv
from .config import AppCfg

logger = logging.getLogger(__name__)

def decode_bytes(raw: bytes) -> str:
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        return raw.decode("latin-1")

def _read_text(p: Path) -> str:
    return decode_bytes(p.read_bytes())

def read_dataset_text(
    cfg: AppCfg,
    uploaded: bytes | str | None = None,
    path: Path | None = None,
) -> tuple[str, str]:
    """Pick the dataset text to load. Returns (text, source_label).

    Tries (in order):
      1) an uploaded file's contents
      2) an explicit path
      3) cfg.default_dataset
      4) a synthetic demo cloud (always succeeds)
    """
    if uploaded is not None:
        text = uploaded if isinstance(uploaded, str) else decode_bytes(uploaded)
        return text, "upload"

    for p in [path, cfg.default_dataset]:
        if p is None:
            continue
        p = Path(p)
        if not p.exists():
            logger.debug("dataset candidate missing: %s", p)
            continue
        try:
            return _read_text(p), str(p)
        except OSError as e:
            logger.warning("could not read %s (%s); trying next source", p, e)

    logger.warning("no dataset available; using a synthetic cloud of %d rows", cfg.fallback_rows)
    return make_demo_csv(cfg.fallback_rows, seed=cfg.fallback_seed), "synthetic"
