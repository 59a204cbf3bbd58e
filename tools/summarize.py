from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path

# Ensure ./src is importable (script assumed under repo/tools/)
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from ore_common.config import load_cfg
from ore_common.io import read_dataset_text
from ore_view import session as ses
from ore_view.filtering import FilterWindow

def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Load a samples CSV, apply a depth/grade window and print visible stats")
    ap.add_argument("--config", type=str, default=None, help="Path to app.yaml (optional)")
    ap.add_argument("--csv", type=str, default=None, help="Samples CSV (default: configured dataset, else synthetic)")
    ap.add_argument("--depth", type=float, nargs=2, metavar=("LO", "HI"), default=None, help="Depth window (m)")
    ap.add_argument("--grade", type=float, nargs=2, metavar=("LO", "HI"), default=None, help="Grade range")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="[%(name)s] %(message)s")

    cfg = load_cfg(path=args.config) if args.config else load_cfg()
    path = None
    if args.csv:
        path = Path(args.csv)
        if not path.exists():
            raise FileNotFoundError(f"--csv not found: {path}")

    state = ses.new_session(cfg)
    text, source = read_dataset_text(cfg, path=path)
    ses.load_dataset(state, text, source)

    if args.depth or args.grade:
        w = state.window
        dlo, dhi = args.depth or (w.depth_lo, w.depth_hi)
        glo, ghi = args.grade or (w.grade_lo, w.grade_hi)
        ses.set_window(state, FilterWindow(dlo, dhi, glo, ghi))

    w, res = state.window, state.result
    st = res.stats
    print(f"[summary] source={state.source} samples={len(state.points):,}")
    print(f"  window     depth [{w.depth_lo:g}, {w.depth_hi:g}]  grade [{w.grade_lo:g}, {w.grade_hi:g}]")
    print(f"  visible    {res.visible_count:,}   dimmed {res.dimmed_count:,}")
    print(f"  avg grade  {st.avg_grade:.2f} {cfg.grade_unit}")
    print(f"  tonnage    ~{round(st.tonnage):,} tons")
    for k, v in st.mix.items():
        print(f"  {k:10s} {v:,}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
