"""
Tiling Layout

Marked clients share a left column, every other tiled client shares the right
column.
"""

from __future__ import annotations
from typing import List, Optional, TYPE_CHECKING

from .layout_base import (
    Layout,
    LayoutKind,
    LayoutResult,
    marked_area_width,
    stack_column,
)
from ..protocol import Area

if TYPE_CHECKING:
    from ..objects import Client


class TileLayout(Layout):
    """
    Two-column tiling layout.

    The first ``num_marked`` clients are stacked in the marked column, whose
    width is ``marked_width`` of the work area; the rest are stacked in the
    remaining column.
    """

    kind = LayoutKind.TILE

    def __init__(self, symbol: str = "[]="):
        super().__init__(symbol)

    @property
    def name(self) -> str:
        return "tile"

    def calculate(
        self,
        clients: List["Client"],
        area: Area,
        num_marked: int = 0,
        marked_width: float = 0.55,
        visible_count: Optional[int] = None,
    ) -> LayoutResult:
        result = LayoutResult(self.symbol)
        n = len(clients)
        if n == 0:
            return result

        k = min(num_marked, n)
        mw = marked_area_width(n, k, area, marked_width)

        result.geometries.update(stack_column(clients[:k], area.x, area.y, mw, area.height))
        result.geometries.update(
            stack_column(clients[k:], area.x + mw, area.y, area.width - mw, area.height)
        )
        return result
