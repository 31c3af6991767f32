from __future__ import annotations

import logging

import pytest

from corset.panel_model import Curve, PanelCurves
from corset.panel_resize import (
    ResizeMode,
    average_x,
    compute_side_shift,
    is_left_side,
    resize_panel,
    resize_panels,
    shift_curve_x,
    shift_edge_curve,
    shift_seam_end,
)
from corset.primitives import Point


@pytest.fixture()
def shaped_panel() -> PanelCurves:
    """Panel B with seams at x=5 and x=95 and a raised top centre."""

    return PanelCurves(
        panel_id="B",
        top=Curve("B_TOP", [(0, 10), (50, 20), (100, 10)]),
        bottom=Curve("B_BOTTOM", [(0, 200), (50, 190), (100, 200)]),
        waist=Curve("B_WAIST", [(0, 100), (50, 105), (100, 100)]),
        seam_to_prev_up=Curve("BA_UP", [(5, 10), (5, 50), (5, 100)]),
        seam_to_prev_down=Curve("BA_DOWN", [(5, 100), (5, 150), (5, 200)]),
        seam_to_next_up=Curve("BC_UP", [(95, 10), (95, 50), (95, 100)]),
        seam_to_next_down=Curve("BC_DOWN", [(95, 100), (95, 150), (95, 200)]),
    )


def test_side_shift_spreads_delta_over_four_seams() -> None:
    assert compute_side_shift(40.0, 5) == pytest.approx(2.0)
    assert compute_side_shift(-40.0, 5) == pytest.approx(-2.0)
    assert compute_side_shift(40.0, 0) == 0.0
    assert compute_side_shift(40.0, -1) == 0.0


def test_average_x_ignores_non_finite_points() -> None:
    curve = Curve("B_WAIST", [(0, 0), (float("nan"), 0), (10, 0)])

    assert average_x(curve) == pytest.approx(5.0)
    assert average_x(None) == 0.0


def test_side_is_decided_against_waist(shaped_panel: PanelCurves) -> None:
    assert is_left_side(shaped_panel.seam_to_prev_up, shaped_panel)
    assert not is_left_side(shaped_panel.seam_to_next_up, shaped_panel)
    assert not is_left_side(shaped_panel.seam_to_prev_up, PanelCurves(panel_id="B"))


def test_negligible_shift_returns_same_curve() -> None:
    curve = Curve("BA_UP", [(5, 10), (5, 100)], path_data="M5 10 L5 100")

    assert shift_curve_x(curve, 0.0005) is curve
    assert shift_edge_curve(curve, 0.0005, -0.0005) is curve
    assert shift_seam_end(curve, -0.0009, top=True) is curve

    moved = shift_curve_x(curve, 2.0)
    assert moved.points == (Point(7.0, 10.0), Point(7.0, 100.0))
    assert moved.curve_id == "BA_UP"
    assert moved.path_data is None


def test_edge_curve_interpolates_between_shifts() -> None:
    curve = Curve("B_WAIST", [(0, 100), (25, 100), (100, 100)])

    moved = shift_edge_curve(curve, -4.0, 4.0)

    assert [point.x for point in moved.points] == pytest.approx([-4.0, 23.0, 104.0])
    assert [point.y for point in moved.points] == pytest.approx([100.0, 100.0, 100.0])


def test_edge_curve_without_width_moves_by_mean_shift() -> None:
    curve = Curve("B_TOP", [(10, 0), (10, 20)])

    moved = shift_edge_curve(curve, -1.0, 3.0)

    assert moved.points == (Point(11.0, 0.0), Point(11.0, 20.0))


def test_top_mode_moves_top_of_up_seams(shaped_panel: PanelCurves) -> None:
    resized = resize_panel(shaped_panel, ResizeMode.TOP, 20.0, 1)

    assert resized.seam_to_prev_up.points == (Point(0, 10), Point(5, 50), Point(5, 100))
    assert resized.seam_to_next_up.points == (Point(100, 10), Point(95, 50), Point(95, 100))
    assert resized.top.points == (Point(-5, 10), Point(50, 20), Point(105, 10))
    assert resized.waist is shaped_panel.waist
    assert resized.bottom is shaped_panel.bottom
    assert resized.seam_to_prev_down is shaped_panel.seam_to_prev_down
    assert resized.seam_to_next_down is shaped_panel.seam_to_next_down


def test_top_mode_handles_seams_drawn_upwards(shaped_panel: PanelCurves) -> None:
    flipped = PanelCurves(
        panel_id="B",
        waist=shaped_panel.waist,
        seam_to_prev_up=shaped_panel.seam_to_prev_up.reversed(),
    )

    resized = resize_panel(flipped, ResizeMode.TOP, 20.0, 1)

    assert resized.seam_to_prev_up.points == (Point(5, 100), Point(5, 50), Point(0, 10))


def test_negative_delta_moves_seams_inwards(shaped_panel: PanelCurves) -> None:
    resized = resize_panel(shaped_panel, ResizeMode.TOP, -20.0, 1)

    assert resized.seam_to_prev_up.first == Point(10.0, 10.0)
    assert resized.seam_to_next_up.first == Point(90.0, 10.0)
    assert resized.top.first == Point(5.0, 10.0)
    assert resized.top.last == Point(95.0, 10.0)


def test_bottom_mode_moves_bottom_of_down_seams(shaped_panel: PanelCurves) -> None:
    resized = resize_panel(shaped_panel, ResizeMode.BOTTOM, 20.0, 1)

    assert resized.seam_to_prev_down.points == (Point(5, 100), Point(5, 150), Point(0, 200))
    assert resized.seam_to_next_down.points == (Point(95, 100), Point(95, 150), Point(100, 200))
    assert resized.bottom.points == (Point(-5, 200), Point(50, 190), Point(105, 200))
    assert resized.top is shaped_panel.top
    assert resized.seam_to_prev_up is shaped_panel.seam_to_prev_up


def test_global_mode_moves_every_curve(shaped_panel: PanelCurves) -> None:
    resized = resize_panel(shaped_panel, ResizeMode.GLOBAL, 20.0, 1)

    assert [point.x for point in resized.seam_to_prev_up.points] == pytest.approx([0, 0, 0])
    assert [point.x for point in resized.seam_to_next_down.points] == pytest.approx([100, 100, 100])
    assert [point.x for point in resized.waist.points] == pytest.approx([-5, 50, 105])
    assert [point.x for point in resized.top.points] == pytest.approx([-5, 50, 105])
    assert [point.x for point in resized.bottom.points] == pytest.approx([-5, 50, 105])
    assert resized.panel_id == shaped_panel.panel_id


@pytest.mark.parametrize("mode", list(ResizeMode))
def test_input_panel_is_left_untouched(shaped_panel: PanelCurves, mode: ResizeMode) -> None:
    before = shaped_panel.seam_to_prev_up.points

    resize_panel(shaped_panel, mode, 20.0, 1)

    assert shaped_panel.seam_to_prev_up.points == before
    assert shaped_panel.top.first == Point(0.0, 10.0)


@pytest.mark.parametrize(
    ("mode", "delta"),
    [(ResizeMode.DISABLED, 20.0), (ResizeMode.GLOBAL, 0.0), ("top", 0.002)],
)
def test_disabled_or_negligible_resize_returns_panel(shaped_panel, mode, delta) -> None:
    assert resize_panel(shaped_panel, mode, delta, 1) is shaped_panel


def test_resize_mode_accepts_values() -> None:
    assert ResizeMode("global") is ResizeMode.GLOBAL
    with pytest.raises(ValueError):
        ResizeMode("hip")


def test_resize_panels_uses_panel_count(three_panels, caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="corset"):
        resized = resize_panels(three_panels, ResizeMode.GLOBAL, 12.0)

    assert len(resized) == 3
    # 12 / (4 * 3) moves each seam by 1 mm.
    assert resized[1].seam_to_prev_up.first.x == pytest.approx(-1.0)
    assert resized[1].seam_to_next_up.first.x == pytest.approx(51.0)
    assert "Completed: Resizing panels" in caplog.text


def test_resize_panels_disabled_keeps_panels(three_panels) -> None:
    resized = resize_panels(three_panels, ResizeMode.DISABLED, 12.0)

    assert resized == three_panels
    assert all(new is old for new, old in zip(resized, three_panels))
