"""Seam allowance classification and offset curves."""

from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence

import numpy as np

from .engine_defaults import DIRECTION_EPS, EngineOptions
from .errors import InvalidCurveError
from .logging_config import log_timing
from .panel_model import Curve, PanelCurves
from .pattern_contract import parse_seam_id
from .primitives import Point
from .seam_stitcher import SeamPolyline

__all__ = [
    "ALLOWANCE_SUFFIX",
    "compute_all_allowances",
    "compute_offset_curve",
    "compute_panel_allowances",
    "generate_side_offset",
    "panel_interior_point",
    "should_generate_allowance",
]

logger = logging.getLogger(__name__)

ALLOWANCE_SUFFIX = "_ALLOW"


def should_generate_allowance(seam_id: str | None) -> bool:
    """Return ``True`` for internal seams such as ``AB_UP`` or ``BA_DOWN``.

    Outer seams (``AA_*``, ``FF_*``) are cut edges and get no allowance.
    Malformed identifiers are classified as not needing one.
    """

    parsed = parse_seam_id(seam_id)
    return parsed is not None and not parsed.is_outer


def panel_interior_point(panel: PanelCurves | None) -> Point | None:
    """Centroid of the finite waist points, used as the panel's inside."""

    if panel is None or panel.waist is None:
        return None
    coords = panel.waist.as_array()
    finite = coords[np.isfinite(coords).all(axis=1)]
    if finite.size == 0:
        return None
    centroid = finite.mean(axis=0)
    return Point(float(centroid[0]), float(centroid[1]))


def _seam_array(seam_curve: Curve | SeamPolyline) -> np.ndarray:
    return np.array([(point.x, point.y) for point in seam_curve.points], dtype=float)


def _local_normal(coords: np.ndarray, index: int) -> np.ndarray | None:
    """Left-hand normal of the seam tangent at ``index``.

    The tangent is a central difference, one-sided at the ends, widened
    until the neighbours are distinct.
    """

    count = len(coords)
    for step in range(1, count):
        before = coords[max(index - step, 0)]
        after = coords[min(index + step, count - 1)]
        tangent = after - before
        length = float(np.hypot(tangent[0], tangent[1]))
        if length >= DIRECTION_EPS:
            return np.array([-tangent[1], tangent[0]]) / length
    return None


def compute_offset_curve(
    seam_curve: Curve | SeamPolyline | None,
    panel: PanelCurves | None,
    distance_mm: float,
) -> tuple[Point, ...] | None:
    """Displace every seam point ``distance_mm`` away from the panel interior.

    Returns ``None`` when the seam or panel is absent, the panel has no usable
    waist, or the distance is not a positive number. The result has the same
    length and ordering as the seam.

    A seam point lying on the interior reference has no radial direction. It
    moves along the perpendicular to the local seam tangent instead, on the
    side the rest of the seam is pushed towards. When the other points push
    in opposite directions and cancel out exactly, as for a straight seam
    through the interior, the left-hand normal of the tangent is kept.
    """

    if seam_curve is None or panel is None:
        return None
    distance_mm = float(distance_mm)
    if not math.isfinite(distance_mm) or distance_mm <= 0.0:
        return None
    if len(seam_curve.points) < 2:
        raise InvalidCurveError(
            "Seam must have at least 2 points",
            curve_id=getattr(seam_curve, "curve_id", None),
        )

    interior = panel_interior_point(panel)
    if interior is None:
        logger.debug("Panel has no usable waist; skipping allowance", extra={"panel": str(panel.panel_id)})
        return None

    coords = _seam_array(seam_curve)
    directions = coords - np.array([interior.x, interior.y])
    lengths = np.hypot(directions[:, 0], directions[:, 1])
    degenerate = lengths < DIRECTION_EPS

    units = np.zeros_like(directions)
    units[~degenerate] = directions[~degenerate] / lengths[~degenerate, None]

    if degenerate.any():
        outward = units[~degenerate].sum(axis=0)
        for index in np.flatnonzero(degenerate):
            normal = _local_normal(coords, int(index))
            if normal is None:
                normal = np.array([1.0, 0.0])
            if float(np.dot(normal, outward)) < 0.0:
                normal = -normal
            logger.debug(
                "Seam point coincides with panel interior; using tangent normal",
                extra={"index": int(index)},
            )
            units[index] = normal

    offset = coords + units * distance_mm
    return tuple(Point(float(x), float(y)) for x, y in offset)


def _left_normal(dx: float, dy: float) -> tuple[float, float, float]:
    length = math.hypot(dx, dy)
    if length <= DIRECTION_EPS:
        return 0.0, 0.0, length
    return -dy / length, dx / length, length


def generate_side_offset(
    seam: Curve,
    allowance_mm: float,
    offset_to_left: bool = True,
) -> Curve:
    """Offset ``seam`` sideways along its per-vertex normals.

    The side is relative to the direction of travel. Normals are averaged at
    interior vertices and kept pointing to the same side along the curve.
    """

    if seam is None:
        raise InvalidCurveError("Seam curve missing")
    if allowance_mm < 0:
        msg = "Allowance must be non-negative"
        raise ValueError(msg)

    points = seam.points
    count = len(points)
    offset_points: list[Point] = []
    previous_normal: tuple[float, float] | None = None

    for index, current in enumerate(points):
        if index == 0:
            nx, ny, _ = _left_normal(points[1].x - current.x, points[1].y - current.y)
        elif index == count - 1:
            nx, ny, _ = _left_normal(current.x - points[index - 1].x, current.y - points[index - 1].y)
        else:
            prev_point = points[index - 1]
            next_point = points[index + 1]
            nx1, ny1, len1 = _left_normal(current.x - prev_point.x, current.y - prev_point.y)
            nx2, ny2, len2 = _left_normal(next_point.x - current.x, next_point.y - current.y)
            nx, ny = nx1 + nx2, ny1 + ny2
            length = math.hypot(nx, ny)
            if length > DIRECTION_EPS:
                nx, ny = nx / length, ny / length
            elif len1 >= len2 and len1 > DIRECTION_EPS:
                # Near 180 degree turn: the longer segment decides.
                nx, ny = nx1, ny1
            elif len2 > DIRECTION_EPS:
                nx, ny = nx2, ny2
            else:
                nx, ny = 0.0, 0.0

        if not offset_to_left:
            nx, ny = -nx, -ny

        if nx != 0.0 or ny != 0.0:
            if previous_normal is not None and nx * previous_normal[0] + ny * previous_normal[1] < 0.0:
                nx, ny = -nx, -ny
            previous_normal = (nx, ny)

        offset_points.append(Point(current.x + nx * allowance_mm, current.y + ny * allowance_mm))

    return Curve(seam.curve_id + ALLOWANCE_SUFFIX, offset_points)


def compute_panel_allowances(
    panel: PanelCurves | None,
    distance_mm: float,
) -> dict[str, Curve]:
    """Allowance curves for every internal seam fragment of ``panel``."""

    allowances: dict[str, Curve] = {}
    if panel is None:
        return allowances
    for seam in panel.seam_curves():
        if not should_generate_allowance(seam.curve_id):
            logger.debug("No allowance for outer seam", extra={"seam": seam.curve_id})
            continue
        offset = compute_offset_curve(seam, panel, distance_mm)
        if offset is None or len(offset) < 2:
            continue
        allowance_id = seam.curve_id + ALLOWANCE_SUFFIX
        allowances[allowance_id] = Curve(allowance_id, offset)
    return allowances


def compute_all_allowances(
    panels: Iterable[PanelCurves] | Sequence[PanelCurves],
    distance_mm: float | None = None,
    *,
    options: EngineOptions | None = None,
) -> dict[str, dict[str, Curve]]:
    """Allowance curves keyed by panel letter, then by allowance id.

    ``distance_mm`` defaults to ``options.allowance_mm``.
    """

    options = options or EngineOptions()
    if distance_mm is None:
        distance_mm = options.allowance_mm
    result: dict[str, dict[str, Curve]] = {}
    with log_timing(logger, "Computing seam allowances", distance_mm=float(distance_mm)):
        for panel in panels:
            if panel is None:
                continue
            result[panel.panel_id.letter] = compute_panel_allowances(panel, distance_mm)
    return result
