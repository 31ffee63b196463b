"""
Monocle Layout

All windows fullscreen and stacked - only the top one is seen.
"""

from __future__ import annotations
from typing import List, Optional, TYPE_CHECKING

from .layout_base import Layout, LayoutGeometry, LayoutKind, LayoutResult
from ..protocol import Area

if TYPE_CHECKING:
    from ..objects import Client


class MonocleLayout(Layout):
    """
    Monocle layout - all tiled clients take the whole work area.

    The label shows how many clients are tag-visible.
    """

    kind = LayoutKind.MONOCLE

    def __init__(self, symbol: str = "[M]"):
        super().__init__(symbol)

    @property
    def name(self) -> str:
        return "monocle"

    def calculate(
        self,
        clients: List["Client"],
        area: Area,
        num_marked: int = 0,
        marked_width: float = 0.55,
        visible_count: Optional[int] = None,
    ) -> LayoutResult:
        result = LayoutResult(self.symbol)
        count = len(clients) if visible_count is None else visible_count
        if count > 0:
            result.symbol = f"[{count}]"

        for client in clients:
            result.geometries[client] = LayoutGeometry(
                area.x, area.y, area.width, area.height
            )
        return result
