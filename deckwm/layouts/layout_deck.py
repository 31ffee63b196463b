"""
Deck Layout

Marked clients are tiled in the left column; all other clients are stacked on
top of each other in the right column like a deck of cards.
"""

from __future__ import annotations
from typing import List, Optional, TYPE_CHECKING

from .layout_base import (
    Layout,
    LayoutGeometry,
    LayoutKind,
    LayoutResult,
    marked_area_width,
    stack_column,
)
from ..protocol import Area

if TYPE_CHECKING:
    from ..objects import Client


class DeckLayout(Layout):
    """
    Deck layout - marked column tiled, remaining clients fully overlapped.

    The label reports how many clients share the deck.
    """

    kind = LayoutKind.DECK

    def __init__(self, symbol: str = "D  "):
        super().__init__(symbol)

    @property
    def name(self) -> str:
        return "deck"

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
        stacked = n - k
        if stacked > 0:
            result.symbol = f"D {stacked}"

        mw = marked_area_width(n, k, area, marked_width)
        result.geometries.update(stack_column(clients[:k], area.x, area.y, mw, area.height))
        for client in clients[k:]:
            result.geometries[client] = LayoutGeometry(
                area.x + mw, area.y, area.width - mw, area.height
            )
        return result
