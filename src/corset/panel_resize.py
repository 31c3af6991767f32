"""Panel resizing by moving seam nodes sideways.

A change of ``delta_mm`` in the full corset circumference is spread over the
two pattern halves and the two seams of every panel, so each seam moves by
``delta_mm / (4 * panel_count)``. Only X coordinates change and input panels
are never modified; resized curves are new objects without ``path_data``.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum
from typing import Iterable

import numpy as np

from .engine_defaults import NEGLIGIBLE_SHIFT_MM
from .logging_config import log_timing
from .panel_model import Curve, PanelCurves

__all__ = [
    "ResizeMode",
    "average_x",
    "compute_side_shift",
    "is_left_side",
    "resize_panel",
    "resize_panels",
    "shift_curve_x",
    "shift_edge_curve",
    "shift_edge_endpoints",
    "shift_seam_end",
]

logger = logging.getLogger(__name__)


class ResizeMode(str, Enum):
    """Which part of the panels a resize affects."""

    DISABLED = "disabled"
    GLOBAL = "global"
    TOP = "top"
    BOTTOM = "bottom"


def compute_side_shift(delta_mm: float, panel_count: int) -> float:
    """Per-seam X shift for a full circumference change of ``delta_mm``."""

    if panel_count <= 0:
        return 0.0
    return float(delta_mm) / (4.0 * panel_count)


def average_x(curve: Curve | None) -> float:
    """Mean X of the finite points of ``curve``, ``0.0`` without any."""

    if curve is None:
        return 0.0
    xs = curve.as_array()[:, 0]
    xs = xs[np.isfinite(xs)]
    if xs.size == 0:
        return 0.0
    return float(xs.mean())


def is_left_side(curve: Curve | None, panel: PanelCurves) -> bool:
    """``True`` when ``curve`` lies left of the panel's waist on average."""

    if curve is None or panel.waist is None:
        return False
    return average_x(curve) < average_x(panel.waist)


def _negligible(shift_mm: float) -> bool:
    return abs(shift_mm) < NEGLIGIBLE_SHIFT_MM


def _with_x_shifts(curve: Curve, shifts: np.ndarray) -> Curve:
    coords = curve.as_array()
    coords[:, 0] += shifts
    return Curve(curve.curve_id, coords)


def shift_curve_x(curve: Curve | None, shift_mm: float) -> Curve | None:
    """Move every point of ``curve`` by ``shift_mm`` in X."""

    if curve is None or _negligible(shift_mm):
        return curve
    return _with_x_shifts(curve, np.full(len(curve), float(shift_mm)))


def shift_edge_curve(
    curve: Curve | None,
    left_shift_mm: float,
    right_shift_mm: float,
) -> Curve | None:
    """Stretch a curve spanning the panel width, such as TOP or WAIST.

    The leftmost point moves by ``left_shift_mm``, the rightmost by
    ``right_shift_mm`` and points in between by a linear blend of the two.
    A curve with no horizontal extent moves by the mean of both shifts.
    """

    if curve is None or (_negligible(left_shift_mm) and _negligible(right_shift_mm)):
        return curve

    xs = curve.as_array()[:, 0]
    finite = np.isfinite(xs)
    if not finite.any():
        return curve
    min_x = float(xs[finite].min())
    max_x = float(xs[finite].max())
    if max_x - min_x < NEGLIGIBLE_SHIFT_MM:
        return shift_curve_x(curve, 0.5 * (left_shift_mm + right_shift_mm))

    t = np.clip((xs - min_x) / (max_x - min_x), 0.0, 1.0)
    shifts = np.where(finite, left_shift_mm + t * (right_shift_mm - left_shift_mm), 0.0)
    return _with_x_shifts(curve, shifts)


def shift_edge_endpoints(
    curve: Curve | None,
    left_shift_mm: float,
    right_shift_mm: float,
) -> Curve | None:
    """Move only the two end points of an edge curve.

    The end point with the smaller X takes ``left_shift_mm``; interior points
    stay where they are.
    """

    if curve is None or (_negligible(left_shift_mm) and _negligible(right_shift_mm)):
        return curve
    last = len(curve) - 1
    shifts = np.zeros(len(curve))
    if curve.first.x <= curve.last.x:
        shifts[0], shifts[last] = left_shift_mm, right_shift_mm
    else:
        shifts[0], shifts[last] = right_shift_mm, left_shift_mm
    return _with_x_shifts(curve, shifts)


def shift_seam_end(curve: Curve | None, shift_mm: float, *, top: bool) -> Curve | None:
    """Move only the upper (``top=True``) or lower end point of a seam fragment."""

    if curve is None or _negligible(shift_mm):
        return curve
    first_is_end = curve.first.y <= curve.last.y if top else curve.first.y >= curve.last.y
    shifts = np.zeros(len(curve))
    shifts[0 if first_is_end else len(curve) - 1] = shift_mm
    return _with_x_shifts(curve, shifts)


def resize_panel(
    panel: PanelCurves,
    mode: ResizeMode,
    delta_mm: float,
    panel_count: int,
) -> PanelCurves:
    """Return ``panel`` resized for a full circumference change of ``delta_mm``.

    ``GLOBAL`` moves both seams whole and stretches TOP, WAIST and BOTTOM.
    ``TOP`` moves the upper end of the UP seams and the end points of TOP.
    ``BOTTOM`` moves the lower end of the DOWN seams and the end points of
    BOTTOM. Growing (positive ``delta_mm``) moves left seams left and right
    seams right. ``DISABLED`` and negligible shifts return ``panel`` itself.
    """

    mode = ResizeMode(mode)
    side_shift = compute_side_shift(delta_mm, panel_count)
    if mode is ResizeMode.DISABLED or _negligible(side_shift):
        return panel
    left_shift, right_shift = -side_shift, side_shift

    def seam_shift(curve: Curve | None) -> float:
        return left_shift if is_left_side(curve, panel) else right_shift

    if mode is ResizeMode.GLOBAL:
        return replace(
            panel,
            top=shift_edge_curve(panel.top, left_shift, right_shift),
            bottom=shift_edge_curve(panel.bottom, left_shift, right_shift),
            waist=shift_edge_curve(panel.waist, left_shift, right_shift),
            seam_to_prev_up=shift_curve_x(panel.seam_to_prev_up, seam_shift(panel.seam_to_prev_up)),
            seam_to_prev_down=shift_curve_x(panel.seam_to_prev_down, seam_shift(panel.seam_to_prev_down)),
            seam_to_next_up=shift_curve_x(panel.seam_to_next_up, seam_shift(panel.seam_to_next_up)),
            seam_to_next_down=shift_curve_x(panel.seam_to_next_down, seam_shift(panel.seam_to_next_down)),
        )
    if mode is ResizeMode.TOP:
        return replace(
            panel,
            top=shift_edge_endpoints(panel.top, left_shift, right_shift),
            seam_to_prev_up=shift_seam_end(panel.seam_to_prev_up, seam_shift(panel.seam_to_prev_up), top=True),
            seam_to_next_up=shift_seam_end(panel.seam_to_next_up, seam_shift(panel.seam_to_next_up), top=True),
        )
    return replace(
        panel,
        bottom=shift_edge_endpoints(panel.bottom, left_shift, right_shift),
        seam_to_prev_down=shift_seam_end(panel.seam_to_prev_down, seam_shift(panel.seam_to_prev_down), top=False),
        seam_to_next_down=shift_seam_end(panel.seam_to_next_down, seam_shift(panel.seam_to_next_down), top=False),
    )


def resize_panels(
    panels: Iterable[PanelCurves],
    mode: ResizeMode,
    delta_mm: float,
) -> list[PanelCurves]:
    """Resize every panel of one pattern half for a full circumference change."""

    panels = list(panels)
    mode = ResizeMode(mode)
    if mode is ResizeMode.DISABLED or delta_mm == 0:
        return panels
    with log_timing(logger, "Resizing panels", mode=mode.value, delta_mm=float(delta_mm)):
        return [resize_panel(panel, mode, delta_mm, len(panels)) for panel in panels]
