# streamlit_app.py
# Orebody sample viewer: depth/grade window, 3D scene, picking and stats.
import logging
import sys
from pathlib import Path

import numpy as np
import streamlit as st

sys.path.append(str(Path(__file__).resolve().parent / "src"))

from ore_common.config import load_cfg
from ore_common.io import read_dataset_text
from ore_view import session as ses
from ore_view.colormap import legend_labels, legend_samples
from ore_view.figure import build_figure
from ore_view.filtering import FilterWindow
from ore_view.picking import Ray

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
st.set_page_config(layout="wide", page_title="Orebody 3D Viewer")

cfg = load_cfg()

# ----------------- Session bootstrap -----------------
def _bootstrap() -> ses.SessionState:
    state = ses.new_session(cfg)
    text, source = read_dataset_text(cfg)
    return ses.load_dataset(state, text, source)

if "viewer" not in st.session_state:
    st.session_state["viewer"] = _bootstrap()
    st.session_state["upload_id"] = None
state: ses.SessionState = st.session_state["viewer"]

# ----------------- Sidebar: data source -----------------
st.sidebar.header("Data source")
file = st.sidebar.file_uploader("Upload a samples CSV", type=["csv", "txt"])
if file is not None and st.session_state["upload_id"] != file.file_id:
    text, source = read_dataset_text(cfg, uploaded=file.getvalue())
    ses.load_dataset(state, text, f"{source}:{file.name}")
    st.session_state["upload_id"] = file.file_id
if st.sidebar.button("Reload default dataset"):
    text, source = read_dataset_text(cfg)
    ses.load_dataset(state, text, source)
    st.session_state["upload_id"] = None
st.sidebar.caption(f"Source: {state.source} • {len(state.points):,} samples")

# ----------------- Sidebar: filters -----------------
st.sidebar.header("Filters")
dmin, dmax = state.depth_domain
w = state.window
if dmax > dmin:
    depth_rng = st.sidebar.slider("Depth window (m)", float(dmin), float(dmax),
                                  (float(w.depth_lo), float(w.depth_hi)), step=10.0)
else:
    depth_rng = (w.depth_lo, w.depth_hi)
gmin = min(cfg.grade_min, float(state.points["GRADE"].min())) if not state.is_empty else cfg.grade_min
gmax = max(cfg.grade_max, float(state.points["GRADE"].max())) if not state.is_empty else cfg.grade_max
grade_rng = st.sidebar.slider(f"Grade ({cfg.grade_unit})", float(gmin), float(gmax),
                              (float(w.grade_lo), float(w.grade_hi)), step=0.5)
if (depth_rng, grade_rng) != ((w.depth_lo, w.depth_hi), (w.grade_lo, w.grade_hi)):
    ses.set_window(state, FilterWindow(depth_rng[0], depth_rng[1], grade_rng[0], grade_rng[1]))

st.sidebar.header("Display")
point_size = st.sidebar.slider("Point size", 1, 8, 3)
if st.sidebar.button("Reset view"):
    ses.reset_view(state)

# ----------------- Main: scene + results -----------------
c_scene, c_legend, c_panel = st.columns([8, 1, 3])

with c_scene:
    fig = build_figure(state, point_size=point_size)
    event = st.plotly_chart(fig, use_container_width=True, on_select="rerun",
                            selection_mode="points", key="scene")
    picked = event.get("selection", {}).get("points", []) if event else []
    if picked:
        p = picked[0]
        if all(k in p for k in ("x", "y", "z")):
            ses.click(state, Ray.through(state.camera.pose.position, (p["x"], p["y"], p["z"])))

    with st.expander("Pick a drill column"):
        pc1, pc2, pc3 = st.columns([2, 2, 1])
        px_ = pc1.number_input("X", value=float(state.bounds.center[0]) if state.bounds else 0.0)
        py_ = pc2.number_input("Y", value=float(state.bounds.center[1]) if state.bounds else 0.0)
        if pc3.button("Pick"):
            top = (state.bounds.max[2] if state.bounds else 0.0) + 1000.0
            ray = Ray(np.array([px_, py_, top]), np.array([0.0, 0.0, -1.0]))
            if ses.click(state, ray) is None:
                st.info("No visible sample within reach of that column.")

with c_legend:
    st.caption(cfg.grade_unit)
    bar = np.repeat(legend_samples(120, cfg.grade_min, cfg.grade_max)[:, None, :], 16, axis=1)
    st.image((bar * 255).astype(np.uint8))
    st.caption(" / ".join(t for _, t in legend_labels(cfg.grade_min, cfg.grade_max)))

with c_panel:
    st.subheader("Results")
    sel = state.selection
    st.metric("Grade", sel.grade if sel else "—")
    st.metric("Depth", sel.depth if sel else "—")
    st.metric("Confidence", sel.confidence.value if sel else "—")
    stats = state.result.stats
    st.metric("Avg grade (visible)", f"{stats.avg_grade:.2f} {cfg.grade_unit}")
    st.metric("Visible tonnage (est.)", f"~{round(stats.tonnage):,} tons")
    pct = stats.mix_percent()
    st.caption(" / ".join(f"{pct[k]}% {k}" for k in ("Measured", "Indicated", "Inferred")))
    if state.is_empty:
        st.warning("No valid samples in the dataset; showing placeholder marker.")
