"""Shared panel schema for corset seam geometry."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Sequence

import numpy as np

from .errors import InvalidCurveError
from .primitives import Point, coerce_points


class SeamSide(str, Enum):
    """Which neighbour a panel seam joins."""

    TO_PREV = "to_prev"
    TO_NEXT = "to_next"


@dataclass(frozen=True, slots=True)
class Curve:
    """Identified, immutable polyline sampled from a pattern drawing.

    ``path_data`` is the originating path description. It is passed through
    untouched and is ``None`` for synthetically derived curves.
    """

    curve_id: str
    points: tuple[Point, ...]
    path_data: str | None = field(default=None, repr=False, compare=False)

    def __init__(
        self,
        curve_id: str,
        points: Iterable[Point | Sequence[float]] | None,
        path_data: str | None = None,
    ) -> None:
        if curve_id is None or not str(curve_id).strip():
            raise InvalidCurveError("Curve id is required")
        if points is None:
            raise InvalidCurveError("Curve must have at least 2 points", curve_id=str(curve_id))
        coerced = coerce_points(points)
        if len(coerced) < 2:
            raise InvalidCurveError("Curve must have at least 2 points", curve_id=str(curve_id))
        object.__setattr__(self, "curve_id", str(curve_id))
        object.__setattr__(self, "points", coerced)
        object.__setattr__(self, "path_data", path_data)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    @property
    def first(self) -> Point:
        return self.points[0]

    @property
    def last(self) -> Point:
        return self.points[-1]

    def as_array(self) -> np.ndarray:
        """Return the points as an ``(N, 2)`` float array."""

        return np.array([(point.x, point.y) for point in self.points], dtype=float)

    def reversed(self, curve_id: str | None = None) -> "Curve":
        """Copy with the point order flipped; ``path_data`` is not carried over."""

        return Curve(curve_id or self.curve_id, self.points[::-1])


@dataclass(frozen=True, slots=True, order=True)
class PanelId:
    """Pattern panel letter ``A``..``Z``."""

    letter: str

    def __post_init__(self) -> None:
        letter = str(self.letter).strip().upper()
        if len(letter) != 1 or not "A" <= letter <= "Z":
            msg = f"PanelId must be A..Z, got: {self.letter!r}"
            raise ValueError(msg)
        object.__setattr__(self, "letter", letter)

    @property
    def name(self) -> str:
        return self.letter

    def prev(self) -> "PanelId | None":
        if self.letter == "A":
            return None
        return PanelId(chr(ord(self.letter) - 1))

    def next(self) -> "PanelId | None":
        if self.letter == "Z":
            return None
        return PanelId(chr(ord(self.letter) + 1))

    @classmethod
    def range_inclusive(cls, max_letter: str) -> tuple["PanelId", ...]:
        last = cls(max_letter)
        return tuple(cls(chr(code)) for code in range(ord("A"), ord(last.letter) + 1))

    def __str__(self) -> str:
        return self.letter


@dataclass(frozen=True, slots=True)
class PanelCurves:
    """Per-panel bundle of up to seven curves.

    Boundary panels simply leave the seam slots towards the missing neighbour
    empty; there is no panel subclassing.
    """

    panel_id: PanelId
    top: Curve | None = None
    bottom: Curve | None = None
    waist: Curve | None = None
    seam_to_prev_up: Curve | None = None
    seam_to_prev_down: Curve | None = None
    seam_to_next_up: Curve | None = None
    seam_to_next_down: Curve | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.panel_id, PanelId):
            object.__setattr__(self, "panel_id", PanelId(str(self.panel_id)))

    def seam_fragments(self, side: SeamSide) -> tuple[Curve | None, Curve | None]:
        """Return the ``(up, down)`` fragments of the seam on ``side``."""

        if SeamSide(side) is SeamSide.TO_NEXT:
            return self.seam_to_next_up, self.seam_to_next_down
        return self.seam_to_prev_up, self.seam_to_prev_down

    def seam_curves(self) -> Iterator[Curve]:
        for curve in (
            self.seam_to_prev_up,
            self.seam_to_prev_down,
            self.seam_to_next_up,
            self.seam_to_next_down,
        ):
            if curve is not None:
                yield curve


__all__ = ["Curve", "PanelCurves", "PanelId", "SeamSide"]
