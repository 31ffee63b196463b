"""
Textual Commands

Parses command strings such as ``view 3``, ``focus next`` or
``markedwidth +0.05`` into command topics and publishes them on the event
bus. Key binding tools and the headless driver speak this language.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Tuple

from . import topics
from .tags import TagSet

log = logging.getLogger(__name__)

DIRECTIONS = {"next": 1, "right": 1, "+1": 1, "prev": -1, "left": -1, "-1": -1}


class CommandError(ValueError):
    """A command string that cannot be parsed."""


def parse_tag_mask(arg: str, tagset: TagSet) -> int:
    """Resolve a tag argument: a tag name, a 1-based tag number or ``all``."""
    if arg == "all":
        return tagset.mask
    if arg in tagset.names:
        return tagset.bit(tagset.names.index(arg))
    try:
        number = int(arg)
    except ValueError:
        raise CommandError(f"Unknown tag: {arg}")
    if not 1 <= number <= len(tagset):
        raise CommandError(f"Tag number out of range: {number}")
    return tagset.bit(number - 1)


def parse_direction(arg: str) -> int:
    if arg in DIRECTIONS:
        return DIRECTIONS[arg]
    try:
        return int(arg)
    except ValueError:
        raise CommandError(f"Invalid direction: {arg}")


def parse_index(arg: str) -> int:
    """1-based position among visible clients to a 0-based index."""
    try:
        index = int(arg)
    except ValueError:
        raise CommandError(f"Invalid client number: {arg}")
    if index < 1:
        raise CommandError(f"Client numbers start at 1, got {index}")
    return index - 1


def parse_command(text: str, tagset: TagSet) -> Tuple[str, Dict[str, Any]]:
    """Translate a command string into a topic and its message data.

    Args:
        text: The command, e.g. ``"toggleview 2"``
        tagset: Tag names used to resolve tag arguments

    Returns:
        Tuple of (topic name, keyword arguments for pub.sendMessage)

    Raises:
        CommandError: If the command is unknown or its argument invalid
    """
    parts = text.split()
    if not parts:
        raise CommandError("Empty command")
    name, args = parts[0].lower(), [p.strip("\"'") for p in parts[1:]]
    arg = args[0] if args else None

    def required() -> str:
        if arg is None:
            raise CommandError(f"{name} needs an argument")
        return arg

    # Tags
    if name == "view":
        return topics.CMD_VIEW_TAG, {"mask": parse_tag_mask(arg, tagset) if arg else 0}
    if name == "toggleview":
        return topics.CMD_TOGGLE_TAG_VIEW, {"mask": parse_tag_mask(required(), tagset)}
    if name == "tag":
        return topics.CMD_TAG_CLIENT, {"mask": parse_tag_mask(required(), tagset)}
    if name == "toggletag":
        return topics.CMD_TOGGLE_TAG, {"mask": parse_tag_mask(required(), tagset)}
    if name == "cycleview":
        return topics.CMD_CYCLE_VIEW, {"delta": parse_direction(required())}
    if name == "shifttag":
        return topics.CMD_SHIFT_TAG, {"delta": parse_direction(required())}

    # Focus
    if name == "focus":
        value = required()
        if value in DIRECTIONS:
            return topics.CMD_CYCLE_FOCUS, {"direction": DIRECTIONS[value]}
        return topics.CMD_FOCUS_CLIENT, {"index": parse_index(value)}
    if name == "stackfocus":
        return topics.CMD_CYCLE_STACKAREA, {"direction": parse_direction(required())}
    if name == "monitor":
        return topics.CMD_FOCUS_MONITOR, {"direction": parse_direction(required())}

    # Clients
    if name == "push":
        direction = parse_direction(required())
        return (topics.CMD_PUSH_RIGHT if direction > 0 else topics.CMD_PUSH_LEFT), {}
    if name == "sendmon":
        return topics.CMD_SEND_TO_MONITOR, {"direction": parse_direction(required())}
    if name == "hide":
        if arg is None:
            return topics.CMD_HIDE_WINDOW, {}
        return topics.CMD_TOGGLE_HIDDEN, {"index": parse_index(arg)}

    simple = {
        "mark": topics.CMD_TOGGLE_MARK,
        "float": topics.CMD_TOGGLE_FLOATING,
        "fullscreen": topics.CMD_TOGGLE_FULLSCREEN,
        "kill": topics.CMD_KILL_CLIENT,
        "tagbar": topics.CMD_TOGGLE_TAGBAR,
        "quit": topics.CMD_QUIT,
    }
    if name in simple:
        return simple[name], {}

    # Layouts and bars
    if name == "layout":
        return topics.CMD_SET_LAYOUT, ({"layout": arg} if arg else {})
    if name == "markedwidth":
        value = required()
        try:
            number = float(value)
        except ValueError:
            raise CommandError(f"Invalid marked width: {value}")
        if value[0] in "+-":
            return topics.CMD_ADJUST_MARKED_WIDTH, {"delta": number}
        return topics.CMD_SET_MARKED_WIDTH, {"value": number}
    if name == "clientbar":
        return topics.CMD_SET_CLIENTBAR_MODE, ({"mode": arg} if arg else {})

    raise CommandError(f"Unknown command: {name}")


def run_command(text: str, tagset: TagSet) -> bool:
    """Parse a command and publish it on the event bus.

    Returns:
        True if the command was published, False if it could not be parsed
    """
    from pubsub import pub

    try:
        topic, kwargs = parse_command(text, tagset)
    except CommandError as e:
        log.warning("Ignoring command %r: %s", text, e)
        return False

    log.debug("Publishing %s %s", topic, kwargs)
    pub.sendMessage(topic, **kwargs)
    return True
