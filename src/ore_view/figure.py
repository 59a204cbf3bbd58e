# figure.py
# Assemble the Plotly 3D scene from a session: points, frame, slice planes,
# highlight and camera. Render-only; never mutates session state.
from __future__ import annotations
import numpy as np
import plotly.graph_objects as go

from .colormap import to_css
from .frame import Frame, SlicePlane
from .picking import format_grade
from .session import SessionState

FRAME_COLOR = "rgba(255,255,255,{a})"

def _segments_xyz(segs: np.ndarray):
    """(n, 2, 3) segments -> x/y/z lists with None breaks for a single lines trace."""
    xs, ys, zs = [], [], []
    for a, b in np.asarray(segs, dtype=float).reshape(-1, 2, 3):
        xs += [a[0], b[0], None]; ys += [a[1], b[1], None]; zs += [a[2], b[2], None]
    return xs, ys, zs

def _lines(segs: np.ndarray, name: str, alpha: float, width: int = 2) -> go.Scatter3d:
    x, y, z = _segments_xyz(segs)
    return go.Scatter3d(x=x, y=y, z=z, mode="lines", name=name, hoverinfo="skip", showlegend=False,
                        line=dict(color=FRAME_COLOR.format(a=alpha), width=width))

def _plane(p: SlicePlane, name: str) -> go.Mesh3d:
    c = p.corners()
    return go.Mesh3d(x=c[:, 0], y=c[:, 1], z=c[:, 2], i=[0, 0], j=[1, 2], k=[2, 3],
                     color="white", opacity=0.07, name=name, hoverinfo="skip", showlegend=False)

def frame_traces(frame: Frame) -> list:
    traces = [
        _lines(frame.edges, "box", 0.25),
        _lines(frame.axes, "axes", 0.8, width=3),
        _lines(frame.tick_segments, "ticks", 0.7),
        _lines(frame.grid.reshape(-1, 2, 3), "grid", 0.18, width=1),
    ]
    labels = frame.tick_labels + [frame.title]
    traces.append(go.Scatter3d(
        x=[l.position[0] for l in labels], y=[l.position[1] for l in labels],
        z=[l.position[2] for l in labels], mode="text", text=[l.text for l in labels],
        textfont=dict(color="white", size=11), hoverinfo="skip", showlegend=False,
    ))
    traces += [_plane(frame.slice_top, "slice top"), _plane(frame.slice_bottom, "slice bottom")]
    return traces

def point_traces(state: SessionState, point_size: int = 3) -> list:
    if state.is_empty or state.result is None:
        pos, rgb = state.fallback_marker()
        return [go.Scatter3d(x=[pos[0]], y=[pos[1]], z=[pos[2]], mode="markers", name="no data",
                             marker=dict(size=point_size, color=to_css(rgb), opacity=0.9))]
    res = state.result
    vis, dim = res.visible, res.dimmed
    unit = state.cfg.grade_unit
    return [
        go.Scatter3d(
            x=dim["X"], y=dim["Y"], z=dim["Z"], mode="markers", name="dimmed",
            marker=dict(size=max(1, point_size - 1), color=[to_css(c) for c in dim[["R", "G", "B"]].to_numpy()],
                        opacity=0.18),
            hoverinfo="skip",
        ),
        go.Scatter3d(
            x=vis["X"], y=vis["Y"], z=vis["Z"], mode="markers", name="visible",
            marker=dict(size=point_size, color=[to_css(c) for c in vis[["R", "G", "B"]].to_numpy()],
                        opacity=0.95),
            text=[format_grade(g, unit) for g in vis["GRADE"]],
            hovertemplate="%{text}<extra></extra>",
        ),
    ]

def plotly_camera(state: SessionState) -> dict:
    """Approximate the session camera pose in Plotly's normalised scene units."""
    pose = state.camera.pose
    scale = float(np.max(state.bounds.size)) if state.bounds is not None else 1.0
    scale = scale if scale > 0 else 1.0
    center = state.bounds.center if state.bounds is not None else pose.target
    eye = (pose.position - pose.target) / scale
    ctr = (pose.target - center) / scale
    return dict(eye=dict(x=eye[0], y=eye[1], z=eye[2]),
                center=dict(x=ctr[0], y=ctr[1], z=ctr[2]),
                up=dict(x=0, y=0, z=1))

def build_figure(state: SessionState, point_size: int = 3, height: int = 780) -> go.Figure:
    traces = point_traces(state, point_size)
    if state.frame is not None:
        traces = frame_traces(state.frame) + traces
    if state.highlight is not None:
        h = state.highlight.position
        traces.append(go.Scatter3d(x=[h[0]], y=[h[1]], z=[h[2]], mode="markers", name="selected",
                                   marker=dict(size=state.highlight.radius, color="white"),
                                   hoverinfo="skip", showlegend=False))
    fig = go.Figure(traces)
    fig.update_layout(
        scene=dict(aspectmode="data", xaxis_title="X", yaxis_title="Y", zaxis_title="Z",
                   camera=plotly_camera(state), bgcolor="#0b0f17"),
        paper_bgcolor="#0b0f17", font=dict(color="white"),
        showlegend=False, height=height, margin=dict(l=0, r=0, t=10, b=10),
        uirevision=state.source or "empty",
    )
    return fig
