"""
Tests for ingestion: delimited-text parsing, column resolution, point
normalization and the synthetic fallback cloud.
"""

import numpy as np
import pytest

from ore_common.schema import ColumnMap, Confidence, resolve_columns
from ore_ingest import iter_points, load_points_text, make_demo_csv, normalize_rows, parse_table


# ============== parse_table ==============

def test_parse_mixed_newlines_and_padding():
    t = parse_table("X,Y,Z\r\n1,2,3\n 4 , 5 ")
    assert t.headers == ["X", "Y", "Z"]
    assert t.rows == [{"X": "1", "Y": "2", "Z": "3"}, {"X": "4", "Y": "5", "Z": ""}]


def test_parse_header_only_is_empty():
    t = parse_table("X,Y,Z,AUGT\n")
    assert t.headers == [] and t.rows == []
    assert len(parse_table("")) == 0
    assert len(parse_table(None)) == 0


def test_parse_trims_headers_and_ignores_extra_fields():
    t = parse_table(" x ; y \n1;2;3", delimiter=";")
    assert t.headers == ["x", "y"]
    assert t.rows == [{"x": "1", "y": "2"}]


# ============== resolve_columns ==============

def test_resolve_synonyms_case_insensitive():
    m = resolve_columns(["Easting", "NORTHING", "RL", "Au", "Class"])
    assert (m.x, m.y, m.z, m.grade, m.conf) == ("Easting", "NORTHING", "RL", "Au", "Class")
    assert m.z_is_elevation


def test_resolve_priority_order():
    m = resolve_columns(["depth", "Z", "AU", "GRADE", "Long", "Lon", "lat", "y"])
    assert m.z == "Z"
    assert not m.z_is_elevation
    assert m.grade == "GRADE"
    assert m.x == "Lon"
    assert m.y == "y"


def test_resolve_unresolved_falls_back():
    m = resolve_columns(["foo", "bar"])
    assert m.x is None and m.conf is None
    assert m.header("x") == "X"
    assert m.header("grade") == "AUGT"
    assert m.header("conf") == "CONF"


# ============== normalize_rows ==============

def test_fixture_accept_counts(samples_path):
    text = samples_path.read_text()
    table = parse_table(text)
    pts = normalize_rows(table)
    assert len(table) == 7
    assert len(pts) == 4
    assert pts["Z"].tolist() == [-100.0, -300.0, -500.0, -600.0]
    assert pts["CONF"].tolist() == ["Measured", "Indicated", "Inferred", "Indicated"]


def test_all_finite_rows_kept():
    pts = load_points_text("X,Y,Z,AUGT\n1,2,-3,4\n5,6,-7,8")
    assert len(pts) == 2
    assert pts.dtypes["X"] == np.float64


def test_elevation_is_flipped_to_depth():
    pts = load_points_text("E,N,RL,AU\n0,0,120,5\n0,0,-50,5")
    assert pts["Z"].tolist() == [-120.0, -50.0]


def test_plain_z_is_not_flipped():
    pts = load_points_text("X,Y,Z,AU\n0,0,120,5")
    assert pts["Z"].tolist() == [120.0]


def test_z_wins_over_rl_when_both_present():
    pts = load_points_text("X,Y,Z,RL,AU\n0,0,120,300,5")
    assert pts["Z"].tolist() == [120.0]


def test_missing_required_column_gives_empty():
    pts = load_points_text("X,Y,AU\n0,0,5\n1,1,6")
    assert pts.empty
    assert list(pts.columns) == ["X", "Y", "Z", "GRADE", "CONF"]


def test_header_only_gives_empty():
    assert load_points_text("X,Y,Z,AUGT,CONF").empty


def test_explicit_column_map():
    table = parse_table("a,b,c,d\n1,2,-3,4")
    cols = ColumnMap(x="a", y="b", z="c", grade="d", conf=None)
    pts = normalize_rows(table, cols)
    assert pts.iloc[0].tolist() == [1.0, 2.0, -3.0, 4.0, "Indicated"]


def test_iter_points_yields_records():
    pts = load_points_text("X,Y,Z,AUGT,CONF\n1,2,-3,4,Inferred")
    (p,) = list(iter_points(pts))
    assert (p.x, p.y, p.z, p.grade) == (1.0, 2.0, -3.0, 4.0)
    assert p.confidence is Confidence.INFERRED


# ============== demo cloud ==============

def test_demo_csv_shape():
    pts = load_points_text(make_demo_csv(200, seed=7))
    assert len(pts) == 200
    assert pts["Z"].between(-1300, -200).all()
    assert pts["X"].between(-400, 400).all()
    assert pts["Y"].between(-300, 300).all()
    assert (pts["GRADE"] >= 0).all() and (pts["GRADE"] <= 28).all()
    assert set(pts["CONF"]) <= {"Measured", "Indicated", "Inferred"}


def test_demo_csv_seeded_is_deterministic():
    assert make_demo_csv(50, seed=3) == make_demo_csv(50, seed=3)
