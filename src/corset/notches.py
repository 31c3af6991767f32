"""Sewing notch placement along panel seams."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from .engine_defaults import DEFAULT_NOTCH_COUNT, DEFAULT_NOTCH_LENGTH_MM, EngineOptions
from .logging_config import log_timing
from .panel_model import Curve, PanelCurves, PanelId, SeamSide
from .pattern_contract import parse_seam_id
from .primitives import Point, lerp
from .seam_allowance import panel_interior_point

__all__ = [
    "Notch",
    "PanelNotches",
    "generate_all_notches",
    "generate_panel_notches",
    "inward_normal",
    "notch_positions",
    "point_at_arc_length",
    "tangent_at_arc_length",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Notch:
    """Tick mark running from a seam point into the panel."""

    start: Point
    end: Point
    notch_id: str


@dataclass(frozen=True, slots=True)
class PanelNotches:
    panel_id: PanelId
    notches: tuple[Notch, ...]


def notch_positions(notch_count: int) -> list[float]:
    """Arc-length fractions ``i / (n + 1)`` for ``i = 1..n``."""

    if notch_count <= 0:
        return []
    return [index / (notch_count + 1) for index in range(1, notch_count + 1)]


def _segment_lengths(points: Sequence[Point]) -> list[float]:
    return [math.hypot(b.x - a.x, b.y - a.y) for a, b in zip(points, points[1:])]


def _locate(points: Sequence[Point], fraction: float) -> tuple[int, float] | None:
    """Segment index and in-segment ``t`` at ``fraction`` of the arc length."""

    if len(points) < 2 or not 0.0 <= fraction <= 1.0:
        return None
    lengths = _segment_lengths(points)
    total = sum(lengths)
    if total <= 0.0:
        return None
    target = total * fraction
    travelled = 0.0
    for index, length in enumerate(lengths):
        if length > 0.0 and travelled + length >= target:
            return index, (target - travelled) / length
        travelled += length
    last = max(index for index, length in enumerate(lengths) if length > 0.0)
    return last, 1.0


def point_at_arc_length(points: Sequence[Point], fraction: float) -> Point | None:
    located = _locate(points, fraction)
    if located is None:
        return None
    index, t = located
    return lerp(points[index], points[index + 1], t)


def tangent_at_arc_length(points: Sequence[Point], fraction: float) -> Point | None:
    """Unit tangent of the segment holding ``fraction`` of the arc length."""

    located = _locate(points, fraction)
    if located is None:
        return None
    index, _ = located
    delta = points[index + 1] - points[index]
    return delta.scaled(1.0 / delta.length())


def inward_normal(point: Point, tangent: Point, interior: Point) -> Point:
    """Perpendicular of ``tangent`` that points towards ``interior``."""

    left = Point(-tangent.y, tangent.x)
    right = Point(tangent.y, -tangent.x)
    to_interior = interior - point
    left_dot = left.x * to_interior.x + left.y * to_interior.y
    right_dot = right.x * to_interior.x + right.y * to_interior.y
    return left if left_dot > right_dot else right


def _curve_notches(
    curve: Curve,
    interior: Point,
    notch_count: int,
    notch_length_mm: float,
    panel_name: str,
    neighbor_name: str,
    half: str,
) -> list[Notch]:
    notches: list[Notch] = []
    for fraction in notch_positions(notch_count):
        seam_point = point_at_arc_length(curve.points, fraction)
        tangent = tangent_at_arc_length(curve.points, fraction)
        if seam_point is None or tangent is None:
            continue
        normal = inward_normal(seam_point, tangent, interior)
        end = seam_point + normal.scaled(notch_length_mm)
        percent = int(math.floor(fraction * 100 + 0.5))
        notch_id = f"{panel_name}_NOTCH_{neighbor_name}_{half}_{percent}"
        notches.append(Notch(start=seam_point, end=end, notch_id=notch_id))
    return notches


def generate_panel_notches(
    panel: PanelCurves,
    notch_count: int = DEFAULT_NOTCH_COUNT,
    notch_length_mm: float = DEFAULT_NOTCH_LENGTH_MM,
) -> list[Notch]:
    """Notches for the UP and DOWN fragments of both seams of ``panel``.

    A panel at the edge of the pattern names itself as the neighbour, matching
    the ``AA``/``FF`` outer seam ids.
    """

    if notch_length_mm <= 0:
        msg = "notch_length_mm must be positive"
        raise ValueError(msg)
    interior = panel_interior_point(panel) or Point(0.0, 0.0)
    panel_name = panel.panel_id.name
    neighbors = {
        SeamSide.TO_PREV: panel.panel_id.prev(),
        SeamSide.TO_NEXT: panel.panel_id.next(),
    }

    notches: list[Notch] = []
    for side in (SeamSide.TO_PREV, SeamSide.TO_NEXT):
        up, down = panel.seam_fragments(side)
        for half, curve in (("UP", up), ("DOWN", down)):
            if curve is None:
                continue
            neighbor_name = _neighbor_name(curve, neighbors[side], panel_name)
            notches.extend(
                _curve_notches(curve, interior, notch_count, notch_length_mm, panel_name, neighbor_name, half)
            )
    return notches


def _neighbor_name(curve: Curve, neighbor: PanelId | None, panel_name: str) -> str:
    parsed = parse_seam_id(curve.curve_id)
    if parsed is not None:
        return parsed.second
    return neighbor.name if neighbor is not None else panel_name


def generate_all_notches(
    panels: Iterable[PanelCurves],
    notch_count: int | None = None,
    notch_length_mm: float | None = None,
    *,
    options: EngineOptions | None = None,
) -> list[PanelNotches]:
    """One ``PanelNotches`` per panel; unset arguments come from ``options``."""

    options = options or EngineOptions()
    if notch_count is None:
        notch_count = options.notch_count
    if notch_length_mm is None:
        notch_length_mm = options.notch_length_mm
    result: list[PanelNotches] = []
    with log_timing(logger, "Generating notches", notch_count=notch_count):
        for panel in panels:
            notches = generate_panel_notches(panel, notch_count, notch_length_mm)
            result.append(PanelNotches(panel_id=panel.panel_id, notches=tuple(notches)))
    return result
