"""
Unit tests for TagSet and size hints.
"""

import pytest
from deckwm.objects import Client, Monitor
from deckwm.config import WMConfig
from deckwm.protocol import Area, SizeHintsInfo
from deckwm.sizehints import SizeHints, resolve
from deckwm.tags import TagSet


@pytest.mark.unit
class TestTagSet:
    """Test tag mask helpers."""

    def test_mask_and_clip(self):
        tags = TagSet(["a", "b", "c"])
        assert tags.mask == 0b111
        assert tags.clip(0b11010) == 0b010
        assert tags.is_all(0b111)
        assert not tags.is_all(0b011)

    def test_rejects_empty_and_oversized(self):
        with pytest.raises(ValueError):
            TagSet([])
        with pytest.raises(ValueError):
            TagSet([str(i) for i in range(32)])

    def test_bits_and_lowest_index(self):
        tags = TagSet(["a", "b", "c", "d"])
        assert list(tags.bits(0b1010)) == [1, 3]
        assert tags.lowest_index(0b1100) == 2
        assert tags.lowest_index(0) is None

    def test_cycle_skips_unoccupied(self):
        """Cycling walks to the next occupied tag and wraps."""
        tags = TagSet(["a", "b", "c", "d"])
        assert tags.cycle(0, 1, 0b1000) == 3
        assert tags.cycle(3, 1, 0b0011) == 0
        assert tags.cycle(0, -1, 0b0110) == 2
        assert tags.cycle(0, 1, 0) is None


@pytest.mark.unit
class TestSizeHints:
    """Test ICCCM size hint resolution."""

    def test_base_and_min_fall_back_to_each_other(self):
        hints = SizeHints.from_info(SizeHintsInfo(min_width=50, min_height=40))
        assert (hints.base_width, hints.base_height) == (50, 40)
        assert (hints.min_width, hints.min_height) == (50, 40)

        hints = SizeHints.from_info(SizeHintsInfo(base_width=10, base_height=20))
        assert (hints.min_width, hints.min_height) == (10, 20)

    def test_fixed(self):
        info = SizeHintsInfo(min_width=200, min_height=100, max_width=200, max_height=100)
        assert SizeHints.from_info(info).is_fixed
        assert not SizeHints.from_info(None).is_fixed

    def test_increments(self):
        """Terminal style increments round down above the base size."""
        hints = SizeHints.from_info(
            SizeHintsInfo(base_width=4, base_height=4, width_inc=10, height_inc=20)
        )
        assert hints.constrain(107, 95) == (104, 84)

    def test_max_size(self):
        hints = SizeHints.from_info(SizeHintsInfo(max_width=300, max_height=200))
        assert hints.constrain(500, 500) == (300, 200)

    def test_aspect(self):
        """A 1:1 aspect squares a wide request."""
        hints = SizeHints.from_info(SizeHintsInfo(min_aspect=(1, 1), max_aspect=(1, 1)))
        assert hints.constrain(400, 200) == (200, 200)

    def test_resolve_enforces_minimum_bar_height(self):
        config = WMConfig(rules=[])
        m = Monitor(0, config)
        m.mon_area = Area(0, 0, 1000, 800)
        m.win_area = Area(0, 16, 1000, 784)
        c = Client(1, m)

        x, y, w, h, changed = resolve(c, 10, 20, 3, 3, False, screen=m.mon_area, bar_height=16)

        assert (x, y, w, h) == (10, 20, 16, 16)
        assert changed

    def test_resolve_pulls_offscreen_window_back(self):
        """A window placed beyond the work area is moved back inside."""
        config = WMConfig(rules=[])
        m = Monitor(0, config)
        m.mon_area = Area(0, 0, 1000, 800)
        m.win_area = Area(0, 16, 1000, 784)
        c = Client(1, m)
        c.w, c.h = 100, 100

        x, y, _, _, _ = resolve(c, 1200, 900, 100, 100, False, screen=m.mon_area)

        assert (x, y) == (900, 700)
