"""Crossings of a polyline with a horizontal line and their disambiguation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from .engine_defaults import HORIZONTAL_SEGMENT_EPS, SEGMENT_PARAM_TOLERANCE
from .panel_model import Curve
from .primitives import Point, coerce_points
from .seam_stitcher import SeamPolyline

__all__ = [
    "IntersectionCandidate",
    "intersect_horizontal",
    "pick_closest_to_waist",
    "sample_at_y",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class IntersectionCandidate:
    """Crossing point plus its ``segment_index + t`` parameter."""

    point: Point
    param: float


def _polyline_points(
    polyline: Curve | SeamPolyline | Sequence[Point] | Iterable[Sequence[float]],
) -> tuple[Point, ...]:
    if isinstance(polyline, (Curve, SeamPolyline)):
        return polyline.points
    return coerce_points(polyline)


def intersect_horizontal(
    polyline: Curve | SeamPolyline | Sequence[Point] | Iterable[Sequence[float]],
    target_y: float,
) -> list[IntersectionCandidate]:
    """Return every crossing of ``polyline`` with ``y = target_y`` in segment order.

    Near-horizontal segments are skipped. A crossing exactly on a shared vertex
    is reported once per segment that touches it.
    """

    points = _polyline_points(polyline)
    candidates: list[IntersectionCandidate] = []
    for index in range(len(points) - 1):
        p0 = points[index]
        p1 = points[index + 1]
        dy = p1.y - p0.y
        if abs(dy) < HORIZONTAL_SEGMENT_EPS:
            continue
        if not min(p0.y, p1.y) <= target_y <= max(p0.y, p1.y):
            continue
        t = (target_y - p0.y) / dy
        if t < -SEGMENT_PARAM_TOLERANCE or t > 1.0 + SEGMENT_PARAM_TOLERANCE:
            continue
        x = p0.x + t * (p1.x - p0.x)
        candidates.append(IntersectionCandidate(point=Point(x, target_y), param=index + t))

    logger.debug(
        "Horizontal intersection scan finished",
        extra={"target_y": target_y, "candidates": len(candidates)},
    )
    return candidates


def pick_closest_to_waist(
    candidates: Sequence[IntersectionCandidate] | None,
    reference_param: float,
) -> Point | None:
    """Pick the candidate whose parameter is nearest ``reference_param``.

    Ties go to the earliest candidate. Returns ``None`` when there are no
    candidates.
    """

    if not candidates:
        return None
    best = candidates[0]
    best_distance = abs(best.param - reference_param)
    for candidate in candidates[1:]:
        candidate_distance = abs(candidate.param - reference_param)
        if candidate_distance < best_distance:
            best = candidate
            best_distance = candidate_distance
    return best.point


def sample_at_y(seam: SeamPolyline, target_y: float) -> Point | None:
    """Point where ``seam`` crosses ``target_y`` nearest its waist junction."""

    return pick_closest_to_waist(intersect_horizontal(seam, target_y), seam.waist_param)
