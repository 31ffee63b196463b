"""
Unit tests for the textual command interface.
"""

import pytest

from deckwm import topics
from deckwm.commands import CommandError, parse_command, run_command
from deckwm.tags import TagSet


@pytest.fixture
def tagset():
    return TagSet(["terminal", "web", "mail", "4"])


@pytest.mark.unit
class TestParseCommand:
    """Test command string parsing."""

    @pytest.mark.parametrize(
        "text,topic,kwargs",
        [
            ("view 2", topics.CMD_VIEW_TAG, {"mask": 2}),
            ("view web", topics.CMD_VIEW_TAG, {"mask": 2}),
            ("view all", topics.CMD_VIEW_TAG, {"mask": 0b1111}),
            ("view", topics.CMD_VIEW_TAG, {"mask": 0}),
            ("toggleview mail", topics.CMD_TOGGLE_TAG_VIEW, {"mask": 4}),
            ("tag 4", topics.CMD_TAG_CLIENT, {"mask": 8}),
            ("toggletag 1", topics.CMD_TOGGLE_TAG, {"mask": 1}),
            ("cycleview next", topics.CMD_CYCLE_VIEW, {"delta": 1}),
            ("shifttag -1", topics.CMD_SHIFT_TAG, {"delta": -1}),
            ("focus next", topics.CMD_CYCLE_FOCUS, {"direction": 1}),
            ("focus prev", topics.CMD_CYCLE_FOCUS, {"direction": -1}),
            ("focus 3", topics.CMD_FOCUS_CLIENT, {"index": 2}),
            ("stackfocus next", topics.CMD_CYCLE_STACKAREA, {"direction": 1}),
            ("monitor left", topics.CMD_FOCUS_MONITOR, {"direction": -1}),
            ("push left", topics.CMD_PUSH_LEFT, {}),
            ("push right", topics.CMD_PUSH_RIGHT, {}),
            ("sendmon next", topics.CMD_SEND_TO_MONITOR, {"direction": 1}),
            ("hide", topics.CMD_HIDE_WINDOW, {}),
            ("hide 2", topics.CMD_TOGGLE_HIDDEN, {"index": 1}),
            ("mark", topics.CMD_TOGGLE_MARK, {}),
            ("float", topics.CMD_TOGGLE_FLOATING, {}),
            ("fullscreen", topics.CMD_TOGGLE_FULLSCREEN, {}),
            ("kill", topics.CMD_KILL_CLIENT, {}),
            ("layout", topics.CMD_SET_LAYOUT, {}),
            ("layout deck", topics.CMD_SET_LAYOUT, {"layout": "deck"}),
            ("markedwidth +0.05", topics.CMD_ADJUST_MARKED_WIDTH, {"delta": 0.05}),
            ("markedwidth -0.05", topics.CMD_ADJUST_MARKED_WIDTH, {"delta": -0.05}),
            ("markedwidth 0.4", topics.CMD_SET_MARKED_WIDTH, {"value": 0.4}),
            ("tagbar", topics.CMD_TOGGLE_TAGBAR, {}),
            ("clientbar", topics.CMD_SET_CLIENTBAR_MODE, {}),
            ("clientbar never", topics.CMD_SET_CLIENTBAR_MODE, {"mode": "never"}),
            ("quit", topics.CMD_QUIT, {}),
        ],
    )
    def test_commands(self, tagset, text, topic, kwargs):
        assert parse_command(text, tagset) == (topic, kwargs)

    @pytest.mark.parametrize(
        "text",
        ["", "dance", "view 9", "view 0", "view nosuchtag", "tag", "focus first", "hide 0",
         "markedwidth wide", "push"],
    )
    def test_invalid_commands(self, tagset, text):
        with pytest.raises(CommandError):
            parse_command(text, tagset)

    def test_command_name_is_case_insensitive(self, tagset):
        assert parse_command("VIEW 1", tagset) == (topics.CMD_VIEW_TAG, {"mask": 1})


@pytest.mark.unit
class TestRunCommand:
    """Test commands reaching the workspace controller over the event bus."""

    def test_view_and_layout(self, wm, manage):
        manage("a")
        manage("b")

        assert run_command("layout deck", wm.tagset)
        assert wm.selmon.layout.name == "deck"

        assert run_command("view 3", wm.tagset)
        assert wm.selmon.current_tags == 4

        assert run_command("view", wm.tagset)
        assert wm.selmon.current_tags == 1

    def test_client_commands(self, wm, manage):
        a = manage("a")
        b = manage("b")

        run_command("mark", wm.tagset)
        assert b.marked
        run_command("focus next", wm.tagset)
        assert wm.selmon.sel is a
        run_command("markedwidth +0.1", wm.tagset)
        assert wm.selmon.marked_width == pytest.approx(0.65)
        run_command("hide 2", wm.tagset)
        assert a.minimized
        wm.check_invariants()

    def test_commands_without_arguments(self, wm, manage):
        manage("a")
        run_command("layout", wm.tagset)
        assert wm.selmon.layout.name == "monocle"
        run_command("clientbar", wm.tagset)
        run_command("sendmon next", wm.tagset)
        run_command("quit", wm.tagset)
        assert not wm.running

    def test_unparsable_command(self, wm):
        assert not run_command("view nosuchtag", wm.tagset)
