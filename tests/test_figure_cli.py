from pathlib import Path

import numpy as np

from ore_view import session as ses
from ore_view.figure import build_figure, plotly_camera
from ore_view.filtering import FilterWindow
from ore_view.picking import Ray
from tools.summarize import main


REPO_CFG = Path(__file__).parent.parent / "configs" / "app.yaml"


def _names(fig):
    return [t.name for t in fig.data if t.name]


def test_figure_layers(cfg, scenario_csv):
    s = ses.load_dataset(ses.new_session(cfg), scenario_csv, "scenario")
    ses.set_window(s, FilterWindow(-600, 0, 0, 30))
    fig = build_figure(s)
    names = _names(fig)
    for n in ("box", "axes", "ticks", "grid", "slice top", "slice bottom", "dimmed", "visible"):
        assert n in names
    vis = next(t for t in fig.data if t.name == "visible")
    assert len(vis.x) == 2
    assert sorted(vis.text) == ["10.00 g/T", "25.00 g/T"]
    assert vis.hovertemplate == "%{text}<extra></extra>"
    assert "selected" not in names

    ses.click(s, Ray(np.array([0.0, 0.0, 100.0]), np.array([0.0, 0.0, -1.0])))
    assert "selected" in _names(build_figure(s))


def test_empty_figure_uses_fallback_marker(cfg):
    s = ses.load_dataset(ses.new_session(cfg), "", None)
    fig = build_figure(s)
    assert _names(fig) == ["no data"]
    assert list(fig.data[0].z) == [-1.0]


def test_plotly_camera_is_relative_to_scene(cfg, scenario_csv):
    s = ses.load_dataset(ses.new_session(cfg), scenario_csv)
    cam = plotly_camera(s)
    assert cam["up"] == dict(x=0, y=0, z=1)
    assert cam["eye"]["x"] > 0 and cam["eye"]["z"] > 0


def test_cli_summary(samples_path, capsys):
    assert main(["--config", str(REPO_CFG), "--csv", str(samples_path),
                 "--depth", "-600", "0", "--grade", "0", "40"]) == 0
    out = capsys.readouterr().out
    assert "samples=4" in out
    assert "visible    4" in out
    assert "~400 tons" in out
