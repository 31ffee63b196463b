"""
Unit tests for adapter notification handling.
"""

import pytest
from pubsub import pub

from deckwm import topics
from deckwm.manager import WindowManager
from deckwm.protocol import (
    Area,
    ConfigureChanges,
    FullscreenAction,
    Property,
    SizeHintsInfo,
    WindowAttributes,
    WindowGeometry,
    WindowType,
    WMHintsInfo,
    WMState,
)
from deckwm.rules import Rule


@pytest.fixture
def rules_wm(make_config, display):
    """Window manager with a floating rule and a tag rule."""
    config = make_config(
        rules=[
            Rule(wm_class="Gimp", is_floating=True),
            Rule(wm_class="Web", tags=1 << 1),
        ]
    )
    return WindowManager(config, display, root=Area(0, 0, 1000, 800))


def attrs(name, **kwargs):
    kwargs.setdefault("width", 300)
    kwargs.setdefault("height", 200)
    return WindowAttributes(name=name, **kwargs)


@pytest.mark.unit
class TestManage:
    """Test adopting new windows."""

    def test_new_window_is_placed_below_tagbar(self, wm, manage):
        a = manage("a", x=0, y=0)
        assert a.y >= 16
        assert a.tags == 1
        assert wm.display.client_list == [a.window]
        assert wm.display.states[a.window] == WMState.NORMAL

    def test_override_redirect_and_known_windows_are_ignored(self, wm, manage):
        assert wm.events.manage(1, attrs("menu", override_redirect=True)) is None
        a = manage("a", window=2)
        assert wm.events.manage(2, attrs("again")) is None
        assert wm.selmon.clients == [a]

    def test_empty_title_is_broken(self, wm):
        c = wm.events.manage(1, attrs(""))
        assert c.name == "broken"

    def test_floating_rule(self, rules_wm):
        c = rules_wm.events.manage(1, attrs("gimp", wm_class="Gimp"))
        assert c.is_floating
        assert c.bw == rules_wm.config.float_border_width

    def test_tag_rule_follows_new_window(self, rules_wm):
        c = rules_wm.events.manage(1, attrs("browser", wm_class="Web"))
        assert c.tags == 2
        assert rules_wm.selmon.current_tags == 2
        assert rules_wm.selmon.sel is c

    def test_tag_rule_without_following(self, make_config, display):
        config = make_config(rules=[Rule(wm_class="Web", tags=1 << 1)], follow_new_windows=False)
        wm = WindowManager(config, display, root=Area(0, 0, 1000, 800))
        a = wm.events.manage(1, attrs("term"))

        c = wm.events.manage(2, attrs("browser", wm_class="Web"))

        assert c.tags == 2
        assert wm.selmon.current_tags == 1
        assert wm.selmon.sel is a
        wm.check_invariants()

    def test_transient_inherits_from_parent(self, wm, manage):
        parent = manage("main")
        wm.controller.toggle_tag(1 << 4)

        dialog = manage("dialog", transient_for=parent.window)

        assert dialog.is_floating
        assert dialog.tags == parent.tags
        assert dialog.monitor is parent.monitor
        assert wm.selmon.clients[0] is dialog
        wm.check_invariants()

    def test_dialog_type_floats(self, wm, manage):
        c = manage("dialog", window_type=WindowType.DIALOG)
        assert c.is_floating

    def test_fullscreen_at_map(self, wm, manage):
        c = manage("video", fullscreen=True)
        assert c.is_fullscreen
        assert (c.x, c.y, c.w, c.h) == (0, 0, 1000, 800)

    def test_managed_is_published(self, wm):
        received = []

        def on_managed(client):
            received.append(client.name)

        pub.subscribe(on_managed, topics.CLIENT_MANAGED)
        wm.events.manage(1, attrs("a"))
        assert received == ["a"]

    def test_scan_adopts_transients_last(self, wm):
        windows = [
            (2, attrs("dialog", transient_for=1)),
            (1, attrs("main")),
            (3, attrs("unmapped", viewable=False)),
        ]

        managed = wm.events.scan(windows)

        assert [c.name for c in managed] == ["main", "dialog"]
        assert managed[1].is_floating
        assert wm.window_to_client(3) is None


@pytest.mark.unit
class TestUnmanage:
    """Test releasing windows."""

    def test_focus_falls_back_to_previous(self, wm, manage):
        a = manage("a")
        b = manage("b")

        assert wm.events.unmanage(b.window)

        assert wm.selmon.sel is a
        assert wm.display.states[b.window] == WMState.WITHDRAWN
        assert wm.display.client_list == [a.window]
        assert (a.x, a.y, a.w, a.h) == (0, 16, 1000, 784)
        wm.check_invariants()

    def test_destroyed_window_is_not_touched(self, wm, manage):
        a = manage("a")
        wm.display.clear()

        wm.events.unmanage(a.window, destroyed=True)

        assert all(args[0] != a.window for args in wm.display.calls_to("set_state"))
        assert wm.selmon.sel is None
        assert wm.selmon.clients == [] and wm.selmon.stack == []

    def test_unknown_window(self, wm):
        assert not wm.events.unmanage(42)
        assert not wm.events.unmap(42)

    def test_synthetic_unmap_only_withdraws(self, wm, manage):
        a = manage("a")
        assert wm.events.unmap(a.window, synthetic=True)
        assert wm.display.states[a.window] == WMState.WITHDRAWN
        assert wm.window_to_client(a.window) is a

    def test_shutdown_releases_everything(self, wm, manage):
        a = manage("a")
        b = manage("b")
        wm.controller.tag_client(1 << 3)

        wm.events.shutdown()

        assert wm.selmon.current_tags == wm.tagset.mask
        assert wm.selmon.clients == []
        assert wm.display.states[a.window] == WMState.WITHDRAWN
        assert wm.display.states[b.window] == WMState.WITHDRAWN
        assert wm.display.focused is None


@pytest.mark.unit
class TestConfigureRequest:
    """Test client geometry requests."""

    def test_tiled_client_keeps_its_cell(self, wm, manage):
        a = manage("a")
        wm.display.clear()

        assert wm.events.configure_request(a.window, ConfigureChanges(x=5, width=50))

        assert (a.x, a.y, a.w, a.h) == (0, 16, 1000, 784)
        assert wm.display.calls_to("configure") == [(a.window, a.geometry())]

    def test_floating_client_gets_its_request(self, rules_wm):
        c = rules_wm.events.manage(1, attrs("gimp", wm_class="Gimp"))

        rules_wm.events.configure_request(1, ConfigureChanges(x=50, y=60, width=200, height=100))

        assert (c.x, c.y, c.w, c.h) == (50, 60, 200, 100)
        assert rules_wm.display.geometries[1] == WindowGeometry(50, 60, 200, 100, 1)

    def test_oversized_floating_client_is_centered(self, rules_wm):
        c = rules_wm.events.manage(1, attrs("gimp", wm_class="Gimp"))

        rules_wm.events.configure_request(1, ConfigureChanges(x=500, width=900))

        assert c.x == 500 - 902 // 2

    def test_border_width_request(self, wm, manage):
        a = manage("a")
        wm.events.configure_request(a.window, ConfigureChanges(border_width=3))
        assert a.bw == 3

    def test_unknown_window_is_left_to_the_adapter(self, wm):
        assert not wm.events.configure_request(42, ConfigureChanges(x=1))


@pytest.mark.unit
class TestPropertyNotify:
    """Test property changes."""

    def test_title(self, wm, manage):
        a = manage("a")
        wm.events.property_notify(a.window, Property.TITLE, "new title")
        assert a.name == "new title"
        assert wm.display.bars[0].title == "new title"

        wm.events.property_notify(a.window, Property.TITLE, None)
        assert a.name == "broken"

    def test_urgency_of_unfocused_client(self, wm, manage):
        a = manage("a")
        manage("b")

        wm.events.property_notify(a.window, Property.WM_HINTS, WMHintsInfo(urgent=True))

        assert a.is_urgent
        assert wm.display.bars[0].urgent_tags == 1

    def test_urgency_of_focused_client_is_cleared(self, wm, manage):
        a = manage("a")

        wm.events.property_notify(a.window, Property.WM_HINTS, WMHintsInfo(urgent=True))

        assert not a.is_urgent
        assert (a.window,) in wm.display.calls_to("clear_urgency")

    def test_input_hint(self, wm, manage):
        a = manage("a")
        wm.events.property_notify(a.window, Property.WM_HINTS, WMHintsInfo(accepts_input=False))
        assert a.never_focus

    def test_normal_hints(self, wm, manage):
        a = manage("a")
        hints = SizeHintsInfo(min_width=100, min_height=100, max_width=100, max_height=100)
        wm.events.property_notify(a.window, Property.NORMAL_HINTS, hints)
        assert a.is_fixed

    def test_becoming_transient_floats(self, wm, manage):
        a = manage("a")
        b = manage("b")

        wm.events.property_notify(b.window, Property.TRANSIENT_FOR, a.window)

        assert b.is_floating
        assert wm.selmon.clients == [b, a]
        wm.check_invariants()

    def test_becoming_dialog_floats(self, wm, manage):
        a = manage("a")
        b = manage("b")
        wm.controller.focus_client(client=a)

        wm.events.property_notify(a.window, Property.WINDOW_TYPE, WindowType.DIALOG)

        assert a.is_floating
        assert wm.selmon.clients == [a, b]
        wm.check_invariants()

    def test_unknown_window(self, wm):
        assert not wm.events.property_notify(42, Property.TITLE, "x")

    def test_status_text(self, wm):
        wm.events.root_name_changed("12:00")
        assert wm.display.bars[0].status == "12:00"
        wm.events.root_name_changed("")
        assert wm.display.bars[0].status == "deckwm"


@pytest.mark.unit
class TestClientMessages:
    def test_fullscreen_actions(self, wm, manage):
        a = manage("a")
        ev = wm.events

        ev.client_message_fullscreen(a.window, FullscreenAction.ADD)
        assert a.is_fullscreen
        ev.client_message_fullscreen(a.window, FullscreenAction.ADD)
        assert a.is_fullscreen
        ev.client_message_fullscreen(a.window, FullscreenAction.TOGGLE)
        assert not a.is_fullscreen
        ev.client_message_fullscreen(a.window, FullscreenAction.TOGGLE)
        assert a.is_fullscreen
        ev.client_message_fullscreen(a.window, FullscreenAction.REMOVE)
        assert not a.is_fullscreen
        wm.check_invariants()

    def test_activate_shows_client_tags(self, wm, manage):
        a = manage("a")
        wm.controller.tag_client(1 << 2)
        manage("b")

        assert wm.events.activate_window(a.window)

        assert wm.selmon.current_tags == 4
        assert wm.selmon.sel is a
        wm.check_invariants()


@pytest.mark.unit
class TestPointerAndFocus:
    def test_enter_focuses_client(self, wm, manage):
        a = manage("a")
        manage("b")

        wm.events.enter_notify(a.window)

        assert wm.selmon.sel is a

    def test_enter_ignored_during_operation(self, wm, manage):
        a = manage("a")
        b = manage("b")
        wm.controller.toggle_floating()
        assert wm.operations.start_move(10, 10)

        wm.events.enter_notify(a.window)

        assert wm.selmon.sel is b
        wm.events.button_release()
        assert not wm.operations.is_active()

    def test_focus_stealing_is_reverted(self, wm, manage):
        a = manage("a")
        wm.display.clear()

        wm.events.focus_in(999)

        assert wm.display.focused == a.window

    def test_button_press_focuses(self, wm, manage):
        a = manage("a")
        manage("b")
        wm.events.button_press(a.window)
        assert wm.selmon.sel is a
