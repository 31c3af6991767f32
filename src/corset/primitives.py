"""Planar point primitives shared by every geometry helper."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Sequence


@dataclass(frozen=True, slots=True)
class Point:
    """Immutable 2D point in millimetres; also used as a free vector."""

    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def scaled(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


def coerce_point(value: Point | Sequence[float] | Any) -> Point:
    """Return ``value`` as a :class:`Point`, accepting ``(x, y)`` pairs."""

    if isinstance(value, Point):
        return value
    if isinstance(value, (str, bytes)):
        msg = f"Cannot interpret {value!r} as a 2D point"
        raise TypeError(msg)
    try:
        x, y = value[0], value[1]
    except (TypeError, IndexError, KeyError) as exc:
        msg = f"Cannot interpret {value!r} as a 2D point"
        raise TypeError(msg) from exc
    return Point(float(x), float(y))


def coerce_points(values: Iterable[Point | Sequence[float]]) -> tuple[Point, ...]:
    return tuple(coerce_point(value) for value in values)


def distance(a: Point, b: Point) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def lerp(a: Point, b: Point, t: float) -> Point:
    return Point(a.x + t * (b.x - a.x), a.y + t * (b.y - a.y))


__all__ = ["Point", "coerce_point", "coerce_points", "distance", "lerp"]
