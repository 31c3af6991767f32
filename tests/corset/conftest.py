from __future__ import annotations

from typing import Callable

import pytest

from corset.panel_model import Curve, PanelCurves, PanelId
from corset.pattern_contract import PatternContract


def _build_panel(
    letter: str,
    left_x: float,
    right_x: float,
    *,
    max_panel: str = "C",
    top_y: float = 0.0,
    waist_y: float = 100.0,
    bottom_y: float = 200.0,
) -> PanelCurves:
    """Rectangular panel with vertical seams, drawn in mixed point order.

    The left UP fragment starts at the waist and the left DOWN fragment ends at
    it, so stitching has to reorient both of them.
    """

    contract = PatternContract(max_panel)
    panel_id = PanelId(letter)
    prev_base = contract.seam_to_prev_id(panel_id)
    next_base = contract.seam_to_next_id(panel_id)
    mid_up = 0.5 * (top_y + waist_y)
    mid_down = 0.5 * (waist_y + bottom_y)
    return PanelCurves(
        panel_id=panel_id,
        top=Curve(contract.top_id(panel_id), [(left_x, top_y), (right_x, top_y)]),
        bottom=Curve(contract.bottom_id(panel_id), [(left_x, bottom_y), (right_x, bottom_y)]),
        waist=Curve(contract.waist_id(panel_id), [(left_x, waist_y), (right_x, waist_y)]),
        seam_to_prev_up=Curve(
            contract.seam_up_id(prev_base),
            [(left_x, waist_y), (left_x, mid_up), (left_x, top_y)],
        ),
        seam_to_prev_down=Curve(
            contract.seam_down_id(prev_base),
            [(left_x, bottom_y), (left_x, waist_y)],
        ),
        seam_to_next_up=Curve(
            contract.seam_up_id(next_base),
            [(right_x, top_y), (right_x, waist_y)],
        ),
        seam_to_next_down=Curve(
            contract.seam_down_id(next_base),
            [(right_x, waist_y), (right_x, mid_down), (right_x, bottom_y)],
        ),
    )


@pytest.fixture()
def panel_factory() -> Callable[..., PanelCurves]:
    return _build_panel


@pytest.fixture()
def three_panels() -> list[PanelCurves]:
    """Panels A, B and C, each 50 mm wide, side by side."""

    return [
        _build_panel("A", -50.0, 0.0),
        _build_panel("B", 0.0, 50.0),
        _build_panel("C", 50.0, 100.0),
    ]
