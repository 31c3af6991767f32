"""Horizontal ring sampling across stitched panel seams.

A ring is the set of seam crossings at a fixed vertical offset from each
panel's waist (positive offsets go up, towards smaller Y). Summing the panel
widths of a ring gives the half circumference of the garment at that level.
"""

from __future__ import annotations

import math
from typing import Sequence

from .panel_model import PanelCurves, SeamSide
from .seam_intersection import sample_at_y
from .seam_stitcher import SeamPolyline, estimate_waist_y, stitch_panel_seam

__all__ = [
    "DEFAULT_RING_OFFSETS_MM",
    "build_safe_offsets",
    "closest_to_zero_index",
    "panel_ring_width",
    "ring_half_circumferences",
    "ring_radii",
    "seam_reach",
]

DEFAULT_RING_OFFSETS_MM: tuple[float, ...] = (-80.0, -40.0, 0.0, 40.0, 80.0)

_MIN_REACH_MM = 5.0


def closest_to_zero_index(values: Sequence[float]) -> int:
    """Index of the value nearest zero; the first one wins ties."""

    if not values:
        msg = "values must not be empty"
        raise ValueError(msg)
    best = 0
    for index in range(1, len(values)):
        if abs(values[index]) < abs(values[best]):
            best = index
    return best


def panel_ring_width(panel: PanelCurves, offset_mm: float) -> float | None:
    """Distance between the left and right seams ``offset_mm`` from the waist."""

    waist_y = estimate_waist_y(panel.waist)
    left = stitch_panel_seam(panel, SeamSide.TO_PREV, waist_y)
    right = stitch_panel_seam(panel, SeamSide.TO_NEXT, waist_y)
    target_y = waist_y - offset_mm
    left_point = sample_at_y(left, target_y)
    right_point = sample_at_y(right, target_y)
    if left_point is None or right_point is None:
        return None
    return (right_point - left_point).length()


def ring_half_circumferences(
    panels: Sequence[PanelCurves],
    offsets_mm: Sequence[float],
) -> list[float]:
    """Sum of the measurable panel widths for each ring offset."""

    totals: list[float] = []
    for offset in offsets_mm:
        total = 0.0
        for panel in panels:
            width = panel_ring_width(panel, offset)
            if width is not None:
                total += width
        totals.append(total)
    return totals


def ring_radii(panels: Sequence[PanelCurves], offsets_mm: Sequence[float]) -> list[float]:
    """Equivalent circle radius for each ring.

    Rings with no measurable width borrow the waist ring's radius.
    """

    half = ring_half_circumferences(panels, offsets_mm)
    waist_half = half[closest_to_zero_index(offsets_mm)]
    if waist_half <= 1e-9:
        msg = "Waist half-circumference is zero."
        raise ValueError(msg)
    waist_radius = waist_half / math.pi
    return [value / math.pi if value > 1e-6 else waist_radius for value in half]


def seam_reach(seam: SeamPolyline, waist_y: float) -> tuple[float, float]:
    """How far ``seam`` extends above and below ``waist_y``, in millimetres."""

    ys = [point.y for point in seam.points]
    return max(0.0, waist_y - min(ys)), max(0.0, max(ys) - waist_y)


def build_safe_offsets(
    panels: Sequence[PanelCurves],
    steps_odd: int = 11,
    margin_mm: float = 5.0,
) -> tuple[float, ...]:
    """Symmetric ring offsets that stay within every panel's seams.

    The top and bottom rings are pulled ``margin_mm`` inside the shortest
    seam reach, where horizontal end segments would otherwise miss.
    """

    if steps_odd < 3 or steps_odd % 2 == 0:
        msg = "steps_odd must be odd and >= 3"
        raise ValueError(msg)

    min_up = math.inf
    min_down = math.inf
    for panel in panels:
        waist_y = estimate_waist_y(panel.waist)
        left = stitch_panel_seam(panel, SeamSide.TO_PREV, waist_y)
        right = stitch_panel_seam(panel, SeamSide.TO_NEXT, waist_y)
        up_left, down_left = seam_reach(left, waist_y)
        up_right, down_right = seam_reach(right, waist_y)
        min_up = min(min_up, up_left, up_right)
        min_down = min(min_down, down_left, down_right)

    if not (math.isfinite(min_up) and math.isfinite(min_down)):
        return DEFAULT_RING_OFFSETS_MM

    up = max(_MIN_REACH_MM, min_up - margin_mm)
    down = max(_MIN_REACH_MM, min_down - margin_mm)

    mid = steps_odd // 2
    offsets: list[float] = []
    for step in range(steps_odd):
        t = (step - mid) / mid
        offsets.append(t * down if t < 0.0 else t * up)
    return tuple(offsets)
