"""
Floating Layout

Traditional floating windows with manual positioning.
"""

from __future__ import annotations
from typing import List, Optional, TYPE_CHECKING

from .layout_base import Layout, LayoutKind, LayoutResult
from ..protocol import Area

if TYPE_CHECKING:
    from ..objects import Client


class FloatingLayout(Layout):
    """
    Floating layout - clients keep their own geometry.
    """

    kind = LayoutKind.FLOATING

    def __init__(self, symbol: str = "><>"):
        super().__init__(symbol)

    @property
    def name(self) -> str:
        return "floating"

    @property
    def arranges(self) -> bool:
        return False

    def calculate(
        self,
        clients: List["Client"],
        area: Area,
        num_marked: int = 0,
        marked_width: float = 0.55,
        visible_count: Optional[int] = None,
    ) -> LayoutResult:
        return LayoutResult(self.symbol)
