"""Tolerances and user-tunable defaults for the seam geometry engine."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace as _replace
from typing import Any, Mapping

# Coordinates are millimetres throughout.

# Oriented UP end and DOWN start closer than this on both axes are one point.
WAIST_JUNCTION_EPS: float = 1e-6

# Segments with a smaller Y span are never intersected with a horizontal line.
HORIZONTAL_SEGMENT_EPS: float = 1e-12

# Outward slack on the segment parameter t when accepting a crossing.
SEGMENT_PARAM_TOLERANCE: float = 1e-9

# Direction vectors shorter than this are treated as zero length.
DIRECTION_EPS: float = 1e-9

DEFAULT_ALLOWANCE_MM: float = 10.0
DEFAULT_NOTCH_COUNT: int = 3
DEFAULT_NOTCH_LENGTH_MM: float = 4.0

# Measurements within this distance of the waist use the waist curve itself.
WAIST_DEAD_ZONE_MM: float = 0.1
DY_SEARCH_LIMIT_MM: float = 1000.0
MIN_DY_STEP_MM: float = 0.5
DEFAULT_DY_STEP_MM: float = 2.0

DEFAULT_MAX_PANEL: str = "F"
SEAM_LENGTH_TOLERANCE_MM: float = 1.0
WAIST_CROSSING_TOLERANCE_MM: float = 1.0

# Resize shifts smaller than this leave a curve untouched.
NEGLIGIBLE_SHIFT_MM: float = 0.001


@dataclass(frozen=True, slots=True)
class EngineOptions:
    """User-tunable values shared by allowance, notch and measurement helpers."""

    allowance_mm: float = DEFAULT_ALLOWANCE_MM
    notch_count: int = DEFAULT_NOTCH_COUNT
    notch_length_mm: float = DEFAULT_NOTCH_LENGTH_MM
    seam_length_tolerance_mm: float = SEAM_LENGTH_TOLERANCE_MM
    max_panel: str = DEFAULT_MAX_PANEL

    def __post_init__(self) -> None:
        max_panel = str(self.max_panel).strip().upper()
        if len(max_panel) != 1 or not "A" <= max_panel <= "Z":
            msg = f"max_panel must be a single letter A..Z, got {self.max_panel!r}"
            raise ValueError(msg)
        object.__setattr__(self, "max_panel", max_panel)
        object.__setattr__(self, "allowance_mm", float(self.allowance_mm))
        object.__setattr__(self, "notch_count", int(self.notch_count))
        object.__setattr__(self, "notch_length_mm", float(self.notch_length_mm))
        object.__setattr__(
            self, "seam_length_tolerance_mm", float(self.seam_length_tolerance_mm)
        )

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> "EngineOptions":
        if not payload:
            return cls()
        known = {item.name for item in fields(cls)}
        values = {key: value for key, value in payload.items() if key in known and value is not None}
        return cls(**values)

    def to_mapping(self) -> dict[str, Any]:
        return asdict(self)

    def replace(self, **changes: Any) -> "EngineOptions":
        return _replace(self, **changes)


__all__ = [
    "DEFAULT_ALLOWANCE_MM",
    "DEFAULT_DY_STEP_MM",
    "DEFAULT_MAX_PANEL",
    "DEFAULT_NOTCH_COUNT",
    "DEFAULT_NOTCH_LENGTH_MM",
    "DIRECTION_EPS",
    "DY_SEARCH_LIMIT_MM",
    "EngineOptions",
    "HORIZONTAL_SEGMENT_EPS",
    "MIN_DY_STEP_MM",
    "NEGLIGIBLE_SHIFT_MM",
    "SEAM_LENGTH_TOLERANCE_MM",
    "SEGMENT_PARAM_TOLERANCE",
    "WAIST_CROSSING_TOLERANCE_MM",
    "WAIST_DEAD_ZONE_MM",
    "WAIST_JUNCTION_EPS",
]
