"""Stitch the UP and DOWN fragments of a seam into one waist-anchored polyline."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence, Union

from .engine_defaults import WAIST_JUNCTION_EPS
from .errors import InvalidCurveError
from .panel_model import Curve, PanelCurves, SeamSide
from .primitives import Point, coerce_points

__all__ = [
    "SeamPolyline",
    "build_seam_polyline",
    "estimate_waist_y",
    "orient_down_to_start_at_waist",
    "orient_up_to_end_at_waist",
    "stitch_panel_seam",
]

logger = logging.getLogger(__name__)

PointsLike = Union[Curve, Sequence[Point], Iterable[Sequence[float]]]


@dataclass(frozen=True, slots=True)
class SeamPolyline:
    """Continuous seam polyline with the index of its waist junction.

    ``waist_param`` is a float holding an exact integer index into ``points``;
    it lives in the same ``segment_index + t`` parameter space used by the
    horizontal intersector.
    """

    points: tuple[Point, ...]
    waist_param: float

    def __post_init__(self) -> None:
        if len(self.points) < 2:
            raise InvalidCurveError("Seam polyline must have at least 2 points")
        if not 0.0 <= self.waist_param <= len(self.points) - 1:
            msg = f"waist_param {self.waist_param} outside [0, {len(self.points) - 1}]"
            raise ValueError(msg)

    def __len__(self) -> int:
        return len(self.points)

    @property
    def junction_index(self) -> int:
        return int(self.waist_param)

    @property
    def junction_point(self) -> Point:
        return self.points[self.junction_index]

    def as_curve(self, curve_id: str) -> Curve:
        return Curve(curve_id, self.points)


def _fragment_points(fragment: PointsLike | None, label: str) -> tuple[Point, ...]:
    curve_id = fragment.curve_id if isinstance(fragment, Curve) else None
    if fragment is None:
        raise InvalidCurveError(f"{label} curve missing")
    points = fragment.points if isinstance(fragment, Curve) else coerce_points(fragment)
    if len(points) < 2:
        raise InvalidCurveError(f"{label} curve too short", curve_id=curve_id)
    return points


def orient_up_to_end_at_waist(points: Sequence[Point], waist_y: float) -> tuple[Point, ...]:
    """Return ``points`` ordered so the endpoint nearest the waist line is last."""

    first, last = points[0], points[-1]
    if abs(last.y - waist_y) <= abs(first.y - waist_y):
        return tuple(points)
    return tuple(reversed(points))


def orient_down_to_start_at_waist(points: Sequence[Point], waist_y: float) -> tuple[Point, ...]:
    """Return ``points`` ordered so the endpoint nearest the waist line is first."""

    first, last = points[0], points[-1]
    if abs(first.y - waist_y) <= abs(last.y - waist_y):
        return tuple(points)
    return tuple(reversed(points))


def _same_point(a: Point, b: Point) -> bool:
    return abs(a.x - b.x) < WAIST_JUNCTION_EPS and abs(a.y - b.y) < WAIST_JUNCTION_EPS


def build_seam_polyline(
    up: PointsLike | None,
    down: PointsLike | None,
    waist_y: float,
) -> SeamPolyline:
    """Join the UP and DOWN fragments of a seam at the waist.

    Each fragment is oriented by which endpoint lies nearer ``waist_y``; the
    upstream point order is never trusted. A duplicated junction point is
    dropped, while a real gap between the fragments is kept as a segment.
    """

    up_points = orient_up_to_end_at_waist(_fragment_points(up, "UP"), waist_y)
    down_points = orient_down_to_start_at_waist(_fragment_points(down, "DOWN"), waist_y)

    junction_index = len(up_points) - 1
    if _same_point(up_points[-1], down_points[0]):
        points = up_points + down_points[1:]
    else:
        logger.debug(
            "Seam fragments do not meet at the waist; keeping the gap",
            extra={"gap_mm": (down_points[0] - up_points[-1]).length()},
        )
        points = up_points + down_points

    return SeamPolyline(points=points, waist_param=float(junction_index))


def estimate_waist_y(waist: Curve | None) -> float:
    """Average Y of the waist curve endpoints."""

    if waist is None:
        raise InvalidCurveError("WAIST curve missing")
    return 0.5 * (waist.first.y + waist.last.y)


def stitch_panel_seam(
    panel: PanelCurves,
    side: SeamSide,
    waist_y: float | None = None,
) -> SeamPolyline:
    """Stitch the seam of ``panel`` on ``side`` against its waist line."""

    if waist_y is None:
        waist_y = estimate_waist_y(panel.waist)
    up, down = panel.seam_fragments(side)
    return build_seam_polyline(up, down, waist_y)
