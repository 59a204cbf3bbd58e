"""
Session orchestration: load -> bounds -> frame -> window clamp -> filter,
plus hover/click picking and dataset replacement.
"""

import numpy as np
import pytest

from ore_view import session as ses
from ore_view.colormap import grade_color
from ore_view.filtering import FilterWindow, Stats
from ore_view.picking import Ray


def _down(x, y, z=1000.0):
    return Ray(np.array([x, y, z]), np.array([0.0, 0.0, -1.0]))


@pytest.fixture
def state(cfg, scenario_csv):
    s = ses.new_session(cfg)
    return ses.load_dataset(s, scenario_csv, "scenario")


def test_initial_window_clamped_into_data(state):
    assert (state.window.depth_lo, state.window.depth_hi) == (-900, -800)
    assert state.result.visible_count == 1
    assert state.depth_domain == (-900, -100)
    assert state.camera.initialized


def test_end_to_end_scenario(state):
    ses.set_depth_range(state, -600, 0)
    res = ses.set_grade_range(state, 0, 30)
    assert state.window == FilterWindow(-600, -100, 0, 30)
    assert res.visible["Z"].tolist() == [-100.0, -500.0]
    assert res.dimmed["Z"].tolist() == [-900.0]
    assert res.stats.avg_grade == pytest.approx(17.5)
    assert res.stats.tonnage == 200
    assert res.stats.mix == {"Measured": 1, "Indicated": 1, "Inferred": 0}
    assert state.frame.slice_top.z == -100.0
    assert state.frame.slice_bottom.z == -600.0


def test_click_sets_selection_and_single_highlight(state):
    ses.set_window(state, FilterWindow(-600, 0, 0, 30))
    sel = ses.click(state, _down(0, 0))
    assert sel.grade == "10.00 g/T" and sel.depth == "-100 m"
    assert state.highlight.position.tolist() == [0.0, 0.0, -100.0]

    ses.set_window(state, FilterWindow(-600, -400, 0, 30))
    ses.click(state, _down(0, 0))
    assert state.selection.depth == "-500 m"
    assert state.highlight.position.tolist() == [0.0, 0.0, -500.0]


def test_click_miss_keeps_last_selection(state):
    ses.set_window(state, FilterWindow(-600, 0, 0, 30))
    ses.click(state, _down(0, 0))
    assert ses.click(state, _down(50, 50)) is None
    assert state.selection.grade == "10.00 g/T"
    assert state.highlight is not None


def test_hover_sets_and_clears_tooltip(state):
    ses.set_window(state, FilterWindow(-600, 0, 0, 30))
    assert ses.hover(state, _down(0, 0)) == "10.00 g/T"
    assert ses.hover(state, _down(50, 50)) is None
    assert state.tooltip is None


def test_dimmed_point_not_pickable(state):
    ses.set_window(state, FilterWindow(-600, 0, 0, 30))
    assert ses.click(state, _down(0, 0, z=-700)) is None


def test_reload_resets_out_of_range_window(state):
    ses.set_window(state, FilterWindow(-600, 0, 0, 30))
    ses.click(state, _down(0, 0))
    ses.load_dataset(state, "X,Y,Z,AUGT\n0,0,-2000,5\n10,10,-1500,6", "deep")
    assert (state.window.depth_lo, state.window.depth_hi) == (-2000, -1500)
    assert state.result.visible_count == 2
    assert state.highlight is None
    assert state.selection is not None
    assert state.source == "deep"


def test_reload_does_not_refit_camera(state):
    state.camera.set_pose((1.0, 2.0, 3.0), (0.0, 0.0, 0.0))
    ses.load_dataset(state, "X,Y,Z,AUGT\n0,0,-2000,5\n10,10,-1500,6")
    assert state.camera.pose.position.tolist() == [1.0, 2.0, 3.0]
    pose = ses.reset_view(state)
    assert pose.target.tolist() == [5.0, 5.0, -1750.0]


def test_empty_dataset_is_a_valid_state(cfg):
    s = ses.load_dataset(ses.new_session(cfg), "X,Y,Z,AUGT,CONF", "empty")
    assert s.is_empty
    assert s.bounds is None and s.frame is None
    assert s.result.stats == Stats()
    assert s.depth_domain == (-1, -1)
    pos, rgb = s.fallback_marker()
    assert pos == (0.0, 0.0, -1.0)
    assert rgb == grade_color(0)
    assert ses.click(s, _down(0, 0)) is None
    assert ses.set_depth_range(s, -10, 0).visible_count == 0
