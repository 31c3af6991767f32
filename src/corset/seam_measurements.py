"""Seam length and panel width measurements around the waist line.

Y grows downwards (drawing coordinates), so "above the waist" means
``y < waist_y`` and a positive ``dy`` measures upwards from the waist.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from typing import Iterable, Sequence

import numpy as np

from .engine_defaults import (
    DEFAULT_DY_STEP_MM,
    DY_SEARCH_LIMIT_MM,
    MIN_DY_STEP_MM,
    WAIST_DEAD_ZONE_MM,
)
from .logging_config import log_timing
from .panel_model import Curve, PanelCurves, PanelId, SeamSide

__all__ = [
    "DyRange",
    "SeamMeasurement",
    "SeamSplit",
    "compute_all_seam_measurements",
    "compute_valid_dy_range",
    "curve_length",
    "curve_length_portion",
    "full_circumference",
    "half_circumference",
    "half_waist_circumference",
    "intersect_horizontal_xs",
    "measure_seam_split_at_waist",
    "panel_width_at_dy",
    "waist_reference_y",
]

logger = logging.getLogger(__name__)

_EPS = 1e-9
_SPAN_TOLERANCE = 1e-12


@dataclass(frozen=True, slots=True)
class SeamSplit:
    """Seam fragment length above and below the waist line."""

    above: float
    below: float


@dataclass(frozen=True, slots=True)
class DyRange:
    """How far above and below the waist every panel can be measured."""

    max_up_dy: float
    max_down_dy: float


@dataclass(frozen=True, slots=True)
class SeamMeasurement:
    """Length comparison of the two sides of one seam, e.g. ``AB``.

    ``*_top`` values measure the portion above the waist and ``*_bottom``
    values the portion below it; ``diff_*`` is left minus right.
    """

    seam_name: str
    left_panel: PanelId
    right_panel: PanelId
    left_up_top: float = 0.0
    right_up_top: float = 0.0
    diff_up_top: float = 0.0
    left_down_top: float = 0.0
    right_down_top: float = 0.0
    diff_down_top: float = 0.0
    left_up_bottom: float = 0.0
    right_up_bottom: float = 0.0
    diff_up_bottom: float = 0.0
    left_down_bottom: float = 0.0
    right_down_bottom: float = 0.0
    diff_down_bottom: float = 0.0

    def top_exceeds_tolerance(self, tolerance: float) -> bool:
        return abs(self.diff_up_top) > tolerance or abs(self.diff_down_top) > tolerance

    def bottom_exceeds_tolerance(self, tolerance: float) -> bool:
        return abs(self.diff_up_bottom) > tolerance or abs(self.diff_down_bottom) > tolerance

    def to_mapping(self) -> dict[str, object]:
        data = asdict(self)
        data["left_panel"] = self.left_panel.letter
        data["right_panel"] = self.right_panel.letter
        return data


def waist_reference_y(waist: Curve | None) -> float:
    """Median Y of the finite waist points, ``0.0`` without any."""

    if waist is None:
        return 0.0
    ys = waist.as_array()[:, 1]
    ys = ys[np.isfinite(ys)]
    if ys.size == 0:
        return 0.0
    return float(np.median(ys))


def curve_length(curve: Curve | None) -> float:
    if curve is None:
        return 0.0
    coords = curve.as_array()
    deltas = np.diff(coords, axis=0)
    return float(np.hypot(deltas[:, 0], deltas[:, 1]).sum())


def curve_length_portion(curve: Curve | None, waist_y: float, above: bool) -> float:
    """Length of ``curve`` on one side of ``y = waist_y``.

    Segments straddling the line are split at the crossing.
    """

    if curve is None:
        return 0.0
    length = 0.0
    points = curve.points
    for p0, p1 in zip(points, points[1:]):
        if not (p0.is_finite() and p1.is_finite()):
            continue
        above0 = p0.y < waist_y
        above1 = p1.y < waist_y
        if above0 == above1:
            if above0 == above:
                length += math.hypot(p1.x - p0.x, p1.y - p0.y)
            continue
        t = (waist_y - p0.y) / (p1.y - p0.y)
        xs = p0.x + t * (p1.x - p0.x)
        if above0 == above:
            length += math.hypot(xs - p0.x, waist_y - p0.y)
        else:
            length += math.hypot(p1.x - xs, p1.y - waist_y)
    return length


def measure_seam_split_at_waist(
    panel: PanelCurves | None,
    side: SeamSide,
    up_curve: bool,
) -> SeamSplit:
    if panel is None:
        return SeamSplit(0.0, 0.0)
    waist_y = waist_reference_y(panel.waist)
    up, down = panel.seam_fragments(side)
    seam = up if up_curve else down
    return SeamSplit(
        above=curve_length_portion(seam, waist_y, True),
        below=curve_length_portion(seam, waist_y, False),
    )


def _seam_pair_measurement(
    left_id: PanelId,
    right_id: PanelId,
    left: PanelCurves | None,
    right: PanelCurves | None,
) -> SeamMeasurement:
    name = left_id.name + right_id.name
    if left is None or right is None:
        return SeamMeasurement(seam_name=name, left_panel=left_id, right_panel=right_id)

    l_up = measure_seam_split_at_waist(left, SeamSide.TO_NEXT, True)
    l_down = measure_seam_split_at_waist(left, SeamSide.TO_NEXT, False)
    r_up = measure_seam_split_at_waist(right, SeamSide.TO_PREV, True)
    r_down = measure_seam_split_at_waist(right, SeamSide.TO_PREV, False)

    return SeamMeasurement(
        seam_name=name,
        left_panel=left_id,
        right_panel=right_id,
        left_up_top=l_up.above,
        right_up_top=r_up.above,
        diff_up_top=l_up.above - r_up.above,
        left_down_top=l_down.above,
        right_down_top=r_down.above,
        diff_down_top=l_down.above - r_down.above,
        left_up_bottom=l_up.below,
        right_up_bottom=r_up.below,
        diff_up_bottom=l_up.below - r_up.below,
        left_down_bottom=l_down.below,
        right_down_bottom=r_down.below,
        diff_down_bottom=l_down.below - r_down.below,
    )


def compute_all_seam_measurements(
    panels: Iterable[PanelCurves | None] | None,
) -> list[SeamMeasurement]:
    """Measure every seam between adjacent panel letters present in ``panels``."""

    if not panels:
        return []
    by_id: dict[PanelId, PanelCurves] = {}
    for panel in panels:
        if panel is None:
            continue
        by_id.setdefault(panel.panel_id, panel)
    ids = sorted(by_id)
    if len(ids) < 2:
        return []

    with log_timing(logger, "Measuring seams", panel_count=len(ids)):
        return [
            _seam_pair_measurement(left_id, right_id, by_id.get(left_id), by_id.get(right_id))
            for left_id, right_id in zip(ids, ids[1:])
        ]


def intersect_horizontal_xs(curve: Curve | None, y: float) -> list[float]:
    """Sorted X coordinates where the sampled ``curve`` crosses ``y``."""

    if curve is None:
        return []
    xs: list[float] = []
    points = curve.points
    for a, b in zip(points, points[1:]):
        if not (math.isfinite(a.y) and math.isfinite(b.y)):
            continue
        if abs(b.y - a.y) < _EPS:
            continue
        if y < min(a.y, b.y) - _SPAN_TOLERANCE or y > max(a.y, b.y) + _SPAN_TOLERANCE:
            continue
        t = (y - a.y) / (b.y - a.y)
        x = a.x + t * (b.x - a.x)
        if math.isfinite(x):
            xs.append(x)
    xs.sort()
    return xs


def _extreme_x(
    preferred: Curve | None,
    fallback: Curve | None,
    y: float,
    want_min: bool,
) -> float | None:
    for curve in (preferred, fallback):
        xs = intersect_horizontal_xs(curve, y)
        if xs:
            return xs[0] if want_min else xs[-1]
    return None


def panel_width_at_dy(panel: PanelCurves | None, dy_mm: float) -> float | None:
    """Panel width at ``dy_mm`` above (positive) or below the waist."""

    if panel is None:
        return None
    y = waist_reference_y(panel.waist) - dy_mm
    left_up, left_down = panel.seam_fragments(SeamSide.TO_PREV)
    right_up, right_down = panel.seam_fragments(SeamSide.TO_NEXT)

    if dy_mm >= 0:
        x_left = _extreme_x(left_up, left_down, y, want_min=True)
        x_right = _extreme_x(right_up, right_down, y, want_min=False)
    else:
        x_left = _extreme_x(left_down, left_up, y, want_min=True)
        x_right = _extreme_x(right_down, right_up, y, want_min=False)

    if x_left is None or x_right is None:
        return None
    return abs(x_right - x_left)


def half_circumference(panels: Sequence[PanelCurves] | None, dy_mm: float) -> float:
    if not panels:
        return 0.0
    total = 0.0
    for panel in panels:
        width = panel_width_at_dy(panel, dy_mm)
        if width is not None:
            total += width
    return total


def half_waist_circumference(panels: Sequence[PanelCurves] | None) -> float:
    if not panels:
        return 0.0
    return sum(curve_length(panel.waist) for panel in panels if panel is not None)


def full_circumference(panels: Sequence[PanelCurves] | None, dy_mm: float) -> float:
    if abs(dy_mm) < WAIST_DEAD_ZONE_MM:
        return 2.0 * half_waist_circumference(panels)
    return 2.0 * half_circumference(panels, dy_mm)


def _all_measurable(panels: Sequence[PanelCurves], dy_mm: float) -> bool:
    return all(panel_width_at_dy(panel, dy_mm) is not None for panel in panels)


def _search_reach(panels: Sequence[PanelCurves], step_mm: float, sign: float) -> float:
    """Furthest ``|dy|`` of the first contiguous measurable run in one direction."""

    dy = max(WAIST_DEAD_ZONE_MM, step_mm)
    reach = 0.0
    found = False
    while dy <= DY_SEARCH_LIMIT_MM:
        ok = _all_measurable(panels, sign * dy)
        if ok:
            found = True
            reach = dy
        elif found:
            break
        dy += step_mm
    return reach


def compute_valid_dy_range(
    panels: Sequence[PanelCurves] | None,
    step_mm: float = DEFAULT_DY_STEP_MM,
) -> DyRange:
    """Search how far up and down every panel still has a measurable width."""

    if not panels:
        return DyRange(0.0, 0.0)
    step_mm = max(MIN_DY_STEP_MM, abs(step_mm))
    return DyRange(
        max_up_dy=_search_reach(panels, step_mm, 1.0),
        max_down_dy=_search_reach(panels, step_mm, -1.0),
    )
