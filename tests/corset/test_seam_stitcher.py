from __future__ import annotations

import logging

import pytest

from corset.errors import InvalidCurveError
from corset.panel_model import Curve, SeamSide
from corset.primitives import Point
from corset.seam_stitcher import (
    SeamPolyline,
    build_seam_polyline,
    estimate_waist_y,
    orient_down_to_start_at_waist,
    orient_up_to_end_at_waist,
    stitch_panel_seam,
)


def test_shared_junction_point_is_kept_once() -> None:
    up = Curve("AB_UP", [(10, 0), (10, 50), (10, 100)])
    down = Curve("AB_DOWN", [(10, 100), (10, 150)])

    seam = build_seam_polyline(up, down, 100.0)

    assert len(seam) == len(up) + len(down) - 1
    assert seam.waist_param == 2.0
    assert seam.junction_point == Point(10.0, 100.0)
    assert seam.points[-1] == Point(10.0, 150.0)


def test_gap_between_fragments_is_kept_as_segment(caplog) -> None:
    up = [(10, 0), (10, 100)]
    down = [(12, 100), (12, 200)]

    with caplog.at_level(logging.DEBUG, logger="corset"):
        seam = build_seam_polyline(up, down, 100.0)

    assert len(seam) == 4
    assert seam.waist_param == 1.0
    assert seam.points[1] == Point(10.0, 100.0)
    assert seam.points[2] == Point(12.0, 100.0)
    assert "do not meet at the waist" in caplog.text


def test_fragments_are_reoriented_towards_waist() -> None:
    up = Curve("AB_UP", [(0, 100), (0, 50), (0, 0)])
    down = Curve("AB_DOWN", [(0, 200), (0, 100)])

    seam = build_seam_polyline(up, down, 100.0)

    assert seam.points == (
        Point(0.0, 0.0),
        Point(0.0, 50.0),
        Point(0.0, 100.0),
        Point(0.0, 200.0),
    )
    assert seam.waist_param == 2.0


def test_orientation_keeps_order_on_ties() -> None:
    points = (Point(0.0, 90.0), Point(0.0, 110.0))

    assert orient_up_to_end_at_waist(points, 100.0) == points
    assert orient_down_to_start_at_waist(points, 100.0) == points


def test_orientation_helpers_reverse_when_needed() -> None:
    points = [Point(0.0, 100.0), Point(0.0, 0.0)]

    assert orient_up_to_end_at_waist(points, 100.0) == (Point(0.0, 0.0), Point(0.0, 100.0))
    assert orient_down_to_start_at_waist(points, 100.0) == tuple(points)


def test_missing_fragment_raises() -> None:
    down = Curve("AB_DOWN", [(0, 100), (0, 200)])

    with pytest.raises(InvalidCurveError, match="UP"):
        build_seam_polyline(None, down, 100.0)
    with pytest.raises(InvalidCurveError, match="DOWN"):
        build_seam_polyline(down, None, 100.0)


def test_short_fragment_raises() -> None:
    with pytest.raises(InvalidCurveError, match="too short"):
        build_seam_polyline([(0, 0)], [(0, 100), (0, 200)], 100.0)


def test_seam_polyline_validates_waist_param() -> None:
    with pytest.raises(ValueError):
        SeamPolyline(points=(Point(0, 0), Point(0, 1)), waist_param=2.0)
    with pytest.raises(InvalidCurveError):
        SeamPolyline(points=(Point(0, 0),), waist_param=0.0)


def test_seam_polyline_as_curve() -> None:
    seam = build_seam_polyline([(0, 0), (0, 100)], [(0, 100), (0, 200)], 100.0)

    curve = seam.as_curve("AB")

    assert curve.curve_id == "AB"
    assert curve.points == seam.points


def test_estimate_waist_y_uses_endpoints() -> None:
    waist = Curve("A_WAIST", [(0, 98), (25, 120), (50, 102)])

    assert estimate_waist_y(waist) == pytest.approx(100.0)
    with pytest.raises(InvalidCurveError):
        estimate_waist_y(None)


def test_stitch_panel_seam(panel_factory) -> None:
    panel = panel_factory("B", 0.0, 50.0)

    left = stitch_panel_seam(panel, SeamSide.TO_PREV)
    right = stitch_panel_seam(panel, SeamSide.TO_NEXT)

    assert left.points[0] == Point(0.0, 0.0)
    assert left.junction_point == Point(0.0, 100.0)
    assert right.points[0] == Point(50.0, 0.0)
    assert right.junction_point == Point(50.0, 100.0)
    assert len(right) == 4


def test_stitching_is_repeatable() -> None:
    up = Curve("BC_UP", [(50, 100), (50, 50), (50, 0)])
    down = Curve("BC_DOWN", [(52, 200), (51, 100)])

    first = build_seam_polyline(up, down, 100.0)
    second = build_seam_polyline(up, down, 100.0)

    assert first == second
    assert first.points == second.points
    assert first.waist_param == second.waist_param
