from __future__ import annotations

import math

import pytest

from corset.panel_model import SeamSide
from corset.ring_profile import (
    DEFAULT_RING_OFFSETS_MM,
    build_safe_offsets,
    closest_to_zero_index,
    panel_ring_width,
    ring_half_circumferences,
    ring_radii,
    seam_reach,
)
from corset.seam_stitcher import stitch_panel_seam


def test_closest_to_zero_index() -> None:
    assert closest_to_zero_index([-80.0, -40.0, 0.0, 40.0, 80.0]) == 2
    assert closest_to_zero_index([-1.0, 1.0]) == 0
    with pytest.raises(ValueError):
        closest_to_zero_index([])


def test_panel_ring_width(panel_factory) -> None:
    panel = panel_factory("B", 0.0, 50.0)

    assert panel_ring_width(panel, 0.0) == pytest.approx(50.0)
    assert panel_ring_width(panel, 40.0) == pytest.approx(50.0)
    assert panel_ring_width(panel, -90.0) == pytest.approx(50.0)
    assert panel_ring_width(panel, 120.0) is None


def test_ring_half_circumferences(three_panels) -> None:
    assert ring_half_circumferences(three_panels, [-40.0, 0.0, 120.0]) == pytest.approx([150.0, 150.0, 0.0])


def test_ring_radii_fall_back_to_waist_radius(three_panels) -> None:
    radii = ring_radii(three_panels, [-40.0, 0.0, 120.0])

    assert radii == pytest.approx([150.0 / math.pi] * 3)


def test_ring_radii_require_waist_width() -> None:
    with pytest.raises(ValueError):
        ring_radii([], [0.0])


def test_seam_reach(panel_factory) -> None:
    seam = stitch_panel_seam(panel_factory("B", 0.0, 50.0, top_y=30.0), SeamSide.TO_PREV)

    assert seam_reach(seam, 100.0) == pytest.approx((70.0, 100.0))
    assert seam_reach(seam, 250.0) == pytest.approx((220.0, 0.0))


def test_build_safe_offsets(three_panels) -> None:
    offsets = build_safe_offsets(three_panels, steps_odd=5, margin_mm=5.0)

    assert offsets == pytest.approx((-95.0, -47.5, 0.0, 47.5, 95.0))
    assert offsets[closest_to_zero_index(offsets)] == 0.0


def test_build_safe_offsets_keeps_minimum_reach(panel_factory) -> None:
    shallow = panel_factory("A", 0.0, 50.0, top_y=98.0, bottom_y=103.0)

    assert build_safe_offsets([shallow], steps_odd=3) == pytest.approx((-5.0, 0.0, 5.0))


def test_build_safe_offsets_without_panels() -> None:
    assert build_safe_offsets([]) == DEFAULT_RING_OFFSETS_MM


@pytest.mark.parametrize("steps", [1, 2, 10])
def test_build_safe_offsets_rejects_bad_step_count(three_panels, steps: int) -> None:
    with pytest.raises(ValueError):
        build_safe_offsets(three_panels, steps_odd=steps)
