"""Corset seam geometry engine."""

from __future__ import annotations

from importlib import import_module

__all__ = [
    "Curve",
    "EngineOptions",
    "IntersectionCandidate",
    "InvalidCurveError",
    "Notch",
    "PanelCurves",
    "PanelId",
    "PatternContract",
    "ResizeMode",
    "Point",
    "SeamMeasurement",
    "SeamPolyline",
    "SeamSide",
    "ValidationIssue",
    "ValidationResult",
    "build_safe_offsets",
    "build_seam_polyline",
    "compute_all_allowances",
    "compute_all_seam_measurements",
    "compute_offset_curve",
    "compute_side_shift",
    "compute_valid_dy_range",
    "full_circumference",
    "generate_all_notches",
    "generate_panel_notches",
    "intersect_horizontal",
    "pick_closest_to_waist",
    "resize_panel",
    "resize_panels",
    "ring_radii",
    "sample_at_y",
    "should_generate_allowance",
    "stitch_panel_seam",
    "validate_panel_seams",
    "validate_seam_measurements",
]

_ATTRIBUTE_MODULES: dict[str, str] = {
    "Curve": ".panel_model",
    "PanelCurves": ".panel_model",
    "PanelId": ".panel_model",
    "SeamSide": ".panel_model",
    "EngineOptions": ".engine_defaults",
    "InvalidCurveError": ".errors",
    "Point": ".primitives",
    "PatternContract": ".pattern_contract",
    "SeamPolyline": ".seam_stitcher",
    "build_seam_polyline": ".seam_stitcher",
    "stitch_panel_seam": ".seam_stitcher",
    "IntersectionCandidate": ".seam_intersection",
    "intersect_horizontal": ".seam_intersection",
    "pick_closest_to_waist": ".seam_intersection",
    "sample_at_y": ".seam_intersection",
    "compute_all_allowances": ".seam_allowance",
    "compute_offset_curve": ".seam_allowance",
    "should_generate_allowance": ".seam_allowance",
    "SeamMeasurement": ".seam_measurements",
    "compute_all_seam_measurements": ".seam_measurements",
    "compute_valid_dy_range": ".seam_measurements",
    "full_circumference": ".seam_measurements",
    "Notch": ".notches",
    "generate_all_notches": ".notches",
    "generate_panel_notches": ".notches",
    "build_safe_offsets": ".ring_profile",
    "ring_radii": ".ring_profile",
    "ValidationIssue": ".seam_validation",
    "ValidationResult": ".seam_validation",
    "ResizeMode": ".panel_resize",
    "compute_side_shift": ".panel_resize",
    "resize_panel": ".panel_resize",
    "resize_panels": ".panel_resize",
    "validate_panel_seams": ".seam_validation",
    "validate_seam_measurements": ".seam_validation",
}


def __getattr__(name: str):
    try:
        module_name = _ATTRIBUTE_MODULES[name]
    except KeyError as exc:
        raise AttributeError(f"module 'corset' has no attribute {name!r}") from exc

    module = import_module(module_name, __name__)
    value = getattr(module, name)
    globals()[name] = value
    return value
