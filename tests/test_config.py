"""
Unit tests for configuration and window rules.
"""

import pytest

from deckwm.config import WMConfig, parse_clientbar_mode
from deckwm.layouts import DeckLayout, MonocleLayout
from deckwm.objects import Client, Monitor
from deckwm.protocol import ClientBarMode
from deckwm.rules import Rule, RuleMatcher
from deckwm.tags import TagSet


@pytest.mark.unit
class TestWMConfig:
    """Test configuration defaults and validation."""

    def test_defaults(self):
        config = WMConfig()
        assert len(config.tagset) == 9
        assert config.marked_width == pytest.approx(0.55)
        assert isinstance(config.default_layout(0), DeckLayout)
        assert isinstance(config.alternate_layout(), MonocleLayout)
        assert config.clientbar_mode == ClientBarMode.AUTO

    def test_def_layouts_per_view(self):
        config = WMConfig(def_layouts=[0, 2, 0, 0, 0, 0, 0, 0, 0, 0])
        assert config.default_layout(1).name == "tile"
        assert config.default_layout(2).name == "deck"

    def test_def_layouts_length_is_checked(self):
        with pytest.raises(ValueError):
            WMConfig(def_layouts=[0, 1])

    @pytest.mark.parametrize("value", [0.0, 0.01, 0.99, 1.5])
    def test_marked_width_range(self, value):
        with pytest.raises(ValueError):
            WMConfig(marked_width=value)

    def test_negative_values_are_rejected(self):
        with pytest.raises(ValueError):
            WMConfig(border_width=-1)
        with pytest.raises(ValueError):
            WMConfig(snap=-5)

    def test_empty_layout_table(self):
        with pytest.raises(ValueError):
            WMConfig(layouts=[])

    def test_find_layout_by_name_or_symbol(self):
        config = WMConfig()
        assert config.find_layout("tile").name == "tile"
        assert config.find_layout("[]=").name == "tile"
        assert config.find_layout("spiral") is None

    def test_clientbar_mode_from_string(self):
        assert WMConfig(clientbar_mode="never").clientbar_mode == ClientBarMode.NEVER
        assert parse_clientbar_mode(2) == ClientBarMode.ALWAYS
        with pytest.raises(ValueError):
            parse_clientbar_mode("sometimes")
        with pytest.raises(ValueError):
            parse_clientbar_mode(7)


@pytest.fixture
def monitors():
    config = WMConfig(rules=[])
    return [Monitor(0, config), Monitor(1, config)]


def client_on(monitor, wm_class="", instance="", name=""):
    c = Client(1, monitor, name=name)
    c.wm_class = wm_class
    c.instance = instance
    return c


@pytest.mark.unit
class TestRules:
    """Test rule matching at manage time."""

    def test_no_match_uses_monitor_view(self, monitors):
        matcher = RuleMatcher([Rule(wm_class="Gimp", is_floating=True)], TagSet(["a", "b"]))
        c = client_on(monitors[0], wm_class="XTerm")

        matcher.apply(c, monitors)

        assert c.tags == monitors[0].current_tags
        assert not c.is_floating

    def test_substring_match(self, monitors):
        matcher = RuleMatcher([Rule(title="Mozilla", tags=2)], TagSet(["a", "b"]))
        c = client_on(monitors[0], name="Page - Mozilla Firefox")

        matcher.apply(c, monitors)

        assert c.tags == 2

    def test_matching_rules_accumulate(self, monitors):
        matcher = RuleMatcher(
            [
                Rule(wm_class="MPlayer", tags=1 << 1, is_floating=True),
                Rule(instance="video", tags=1 << 2),
            ],
            TagSet(["a", "b", "c"]),
        )
        c = client_on(monitors[0], wm_class="MPlayer", instance="video")

        matcher.apply(c, monitors)

        assert c.tags == 0b110
        assert c.is_floating

    def test_rule_selects_monitor(self, monitors):
        matcher = RuleMatcher([Rule(wm_class="Term", monitor=1)], TagSet(["a"]))
        c = client_on(monitors[0], wm_class="Term")

        matcher.apply(c, monitors)

        assert c.monitor is monitors[1]
        assert c.tags == monitors[1].current_tags

    def test_invalid_rule_tags_fall_back(self, monitors):
        matcher = RuleMatcher([Rule(wm_class="X", tags=1 << 5)], TagSet(["a", "b"]))
        c = client_on(monitors[0], wm_class="X")

        matcher.apply(c, monitors)

        assert c.tags == 1

    def test_missing_class_matches_broken(self, monitors):
        matcher = RuleMatcher([Rule(wm_class="broken", tags=2)], TagSet(["a", "b"]))
        c = client_on(monitors[0])

        matcher.apply(c, monitors)

        assert c.tags == 2

    def test_inherit(self, monitors):
        parent = client_on(monitors[1])
        parent.tags = 0b101
        c = Client(2)

        RuleMatcher([], TagSet(["a", "b", "c"])).inherit(c, parent)

        assert c.monitor is monitors[1]
        assert c.tags == 0b101
