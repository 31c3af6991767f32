"""Exceptions raised by the seam geometry engine."""

from __future__ import annotations


class InvalidCurveError(ValueError):
    """Raised when a curve is absent where required or has fewer than two points."""

    def __init__(self, message: str, *, curve_id: str | None = None) -> None:
        if curve_id:
            message = f"{message} (curve {curve_id!r})"
        super().__init__(message)
        self.curve_id = curve_id


__all__ = ["InvalidCurveError"]
