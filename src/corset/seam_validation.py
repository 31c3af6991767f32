"""Validation helpers for stitched seams and seam length pairs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .engine_defaults import (
    WAIST_CROSSING_TOLERANCE_MM,
    WAIST_JUNCTION_EPS,
    EngineOptions,
)
from .panel_model import PanelCurves, SeamSide
from .primitives import distance
from .seam_intersection import sample_at_y
from .seam_measurements import SeamMeasurement
from .seam_stitcher import (
    build_seam_polyline,
    estimate_waist_y,
    orient_down_to_start_at_waist,
    orient_up_to_end_at_waist,
)


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """Single validation issue with a stable code."""

    code: str
    message: str
    curve_id: str | None = None


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Aggregate validation result."""

    ok: bool
    issues: tuple[ValidationIssue, ...] = ()

    @property
    def codes(self) -> tuple[str, ...]:
        return tuple(issue.code for issue in self.issues)


def _append_issue(
    issues: list[ValidationIssue],
    code: str,
    message: str,
    curve_id: str | None = None,
) -> None:
    issues.append(ValidationIssue(code=code, message=message, curve_id=curve_id))


def _validate_side(
    issues: list[ValidationIssue],
    panel: PanelCurves,
    side: SeamSide,
    waist_y: float,
    tolerance_mm: float,
) -> None:
    up, down = panel.seam_fragments(side)
    if up is None and down is None:
        return
    if up is None or down is None:
        present = up if up is not None else down
        missing = "UP" if up is None else "DOWN"
        _append_issue(
            issues,
            "missing_seam_fragment",
            f"Panel {panel.panel_id} {side.value} seam has no {missing} fragment.",
            present.curve_id,
        )
        return

    up_end = orient_up_to_end_at_waist(up.points, waist_y)[-1]
    down_start = orient_down_to_start_at_waist(down.points, waist_y)[0]
    if abs(up_end.x - down_start.x) >= WAIST_JUNCTION_EPS or abs(up_end.y - down_start.y) >= WAIST_JUNCTION_EPS:
        _append_issue(
            issues,
            "waist_junction_gap",
            f"{up.curve_id} and {down.curve_id} are {distance(up_end, down_start):.3f} mm apart at the waist.",
            up.curve_id,
        )

    seam = build_seam_polyline(up, down, waist_y)
    crossing = sample_at_y(seam, waist_y)
    if crossing is None:
        _append_issue(
            issues,
            "waist_crossing_missing",
            f"Stitched seam {up.curve_id}/{down.curve_id} never crosses the waist line.",
            up.curve_id,
        )
        return

    offset = distance(crossing, seam.junction_point)
    if offset > tolerance_mm:
        _append_issue(
            issues,
            "waist_crossing_offset",
            f"Waist crossing of {up.curve_id} lies {offset:.3f} mm from the seam junction.",
            up.curve_id,
        )


def validate_panel_seams(
    panel: PanelCurves,
    *,
    tolerance_mm: float = WAIST_CROSSING_TOLERANCE_MM,
) -> ValidationResult:
    """Check that both seams of ``panel`` stitch cleanly at its waist.

    A side with neither fragment is accepted, as happens at the pattern edge.
    The panel must carry a waist curve; ``InvalidCurveError`` propagates
    otherwise.
    """

    waist_y = estimate_waist_y(panel.waist)
    issues: list[ValidationIssue] = []
    for side in (SeamSide.TO_PREV, SeamSide.TO_NEXT):
        _validate_side(issues, panel, side, waist_y, tolerance_mm)
    return ValidationResult(ok=not issues, issues=tuple(issues))


def validate_seam_measurements(
    measurements: Iterable[SeamMeasurement],
    tolerance_mm: float | None = None,
    *,
    options: EngineOptions | None = None,
) -> ValidationResult:
    """Report seams whose two sides differ in length by more than ``tolerance_mm``.

    The tolerance defaults to ``options.seam_length_tolerance_mm``.
    """

    options = options or EngineOptions()
    if tolerance_mm is None:
        tolerance_mm = options.seam_length_tolerance_mm
    issues: list[ValidationIssue] = []
    for measurement in measurements:
        if measurement.top_exceeds_tolerance(tolerance_mm):
            _append_issue(
                issues,
                "seam_length_mismatch_top",
                f"Seam {measurement.seam_name} differs above the waist "
                f"(UP {measurement.diff_up_top:+.2f} mm, DOWN {measurement.diff_down_top:+.2f} mm).",
                measurement.seam_name,
            )
        if measurement.bottom_exceeds_tolerance(tolerance_mm):
            _append_issue(
                issues,
                "seam_length_mismatch_bottom",
                f"Seam {measurement.seam_name} differs below the waist "
                f"(UP {measurement.diff_up_bottom:+.2f} mm, DOWN {measurement.diff_down_bottom:+.2f} mm).",
                measurement.seam_name,
            )
    return ValidationResult(ok=not issues, issues=tuple(issues))


def combine_results(*results: ValidationResult) -> ValidationResult:
    """Combine multiple validation results into one."""

    issues: list[ValidationIssue] = []
    for result in results:
        if not result.ok:
            issues.extend(result.issues)
    return ValidationResult(ok=not issues, issues=tuple(issues))


__all__ = [
    "ValidationIssue",
    "ValidationResult",
    "combine_results",
    "validate_panel_seams",
    "validate_seam_measurements",
]
