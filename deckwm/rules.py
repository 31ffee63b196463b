"""
Window Rules

Static rules matched against a newly managed window's class, instance and
title to preassign its tags, floating state and monitor.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
    from .objects import Client, Monitor
    from .tags import TagSet

log = logging.getLogger(__name__)

BROKEN = "broken"


@dataclass
class Rule:
    """A window rule. Matchers set to None match anything."""

    wm_class: Optional[str] = None
    instance: Optional[str] = None
    title: Optional[str] = None
    tags: int = 0
    is_floating: bool = False
    monitor: int = -1

    def matches(self, wm_class: str, instance: str, title: str) -> bool:
        """Substring match on every specified field."""
        return (
            (self.title is None or self.title in title)
            and (self.wm_class is None or self.wm_class in wm_class)
            and (self.instance is None or self.instance in instance)
        )


class RuleMatcher:
    """Applies the configured rule table to clients at manage time."""

    def __init__(self, rules: Sequence[Rule], tagset: "TagSet"):
        self.rules: List[Rule] = list(rules)
        self.tagset = tagset

    def apply(self, client: "Client", monitors: Sequence["Monitor"]):
        """Assign floating state, tags and monitor to a client.

        The client's ``monitor`` must already point at the default monitor.
        When no rule yields a valid tag the monitor's current tagset is used.
        """
        wm_class = client.wm_class or BROKEN
        instance = client.instance or BROKEN

        client.is_floating = False
        client.tags = 0
        for rule in self.rules:
            if not rule.matches(wm_class, instance, client.name):
                continue
            log.debug("Rule %s matched %s", rule, client)
            client.is_floating = client.is_floating or rule.is_floating
            client.tags |= rule.tags
            for monitor in monitors:
                if monitor.num == rule.monitor:
                    client.monitor = monitor
                    break

        tags = self.tagset.clip(client.tags)
        client.tags = tags if tags else client.monitor.current_tags

    def inherit(self, client: "Client", parent: "Client"):
        """Transient windows live with the window they belong to."""
        client.monitor = parent.monitor
        client.tags = parent.tags
