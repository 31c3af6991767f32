"""Identifier conventions for panel and seam curves."""

from __future__ import annotations

import re
from typing import NamedTuple

from .engine_defaults import DEFAULT_MAX_PANEL
from .panel_model import PanelId

_SEAM_ID_PATTERN = re.compile(r"([A-Z])([A-Z])_(UP|DOWN)")


class SeamId(NamedTuple):
    """Parsed ``<two letters>_<UP|DOWN>`` seam identifier."""

    first: str
    second: str
    half: str

    @property
    def base(self) -> str:
        return self.first + self.second

    @property
    def is_outer(self) -> bool:
        """Seams like ``AA`` or ``FF`` are the cut edges of the pattern."""

        return self.first == self.second


def parse_seam_id(seam_id: str | None) -> SeamId | None:
    """Parse ``seam_id`` or return ``None`` when it does not follow the convention."""

    if not isinstance(seam_id, str):
        return None
    match = _SEAM_ID_PATTERN.fullmatch(seam_id)
    if match is None:
        return None
    first, second, half = match.groups()
    return SeamId(first=first, second=second, half=half)


class PatternContract:
    """Generate curve ids for a pattern with panels ``A``..``max_panel``."""

    def __init__(self, max_panel: str = DEFAULT_MAX_PANEL) -> None:
        self.max_panel = PanelId(max_panel)

    def panel_ids(self) -> tuple[PanelId, ...]:
        return PanelId.range_inclusive(self.max_panel.letter)

    def top_id(self, panel: PanelId) -> str:
        return f"{panel.name}_TOP"

    def bottom_id(self, panel: PanelId) -> str:
        return f"{panel.name}_BOTTOM"

    def waist_id(self, panel: PanelId) -> str:
        return f"{panel.name}_WAIST"

    def seam_to_prev_id(self, panel: PanelId) -> str:
        """``CB`` for panel C, ``AA`` for the first panel."""

        prev = panel.prev()
        if prev is None:
            return panel.name * 2
        return panel.name + prev.name

    def seam_to_next_id(self, panel: PanelId) -> str:
        """``CD`` for panel C, ``FF`` for the last panel of an A..F pattern."""

        if panel.letter >= self.max_panel.letter:
            return panel.name * 2
        following = panel.next()
        if following is None:
            return panel.name * 2
        return panel.name + following.name

    @staticmethod
    def seam_up_id(seam_base: str) -> str:
        return f"{seam_base}_UP"

    @staticmethod
    def seam_down_id(seam_base: str) -> str:
        return f"{seam_base}_DOWN"

    def required_ids(self, panel: PanelId) -> tuple[str, ...]:
        """Ids of the seven curves a panel is extracted from."""

        prev_base = self.seam_to_prev_id(panel)
        next_base = self.seam_to_next_id(panel)
        return (
            self.top_id(panel),
            self.bottom_id(panel),
            self.waist_id(panel),
            self.seam_up_id(prev_base),
            self.seam_down_id(prev_base),
            self.seam_up_id(next_base),
            self.seam_down_id(next_base),
        )


__all__ = ["PatternContract", "SeamId", "parse_seam_id"]
