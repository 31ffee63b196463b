"""
Event Topics for the deckwm Window Manager

All pub/sub topics are defined here for easy discovery and documentation.
Topic naming convention: <category>.<action>

Notification topics describe something that already happened. Command topics
(``cmd.*``) ask the workspace controller to do something; they are what key
bindings and the textual command interface publish.
"""

# Client lifecycle events
CLIENT_MANAGED = "client.managed"
"""Published when a window becomes a managed client. Params: client"""

CLIENT_UNMANAGED = "client.unmanaged"
"""Published when a client is released. Params: client"""

# Focus events
FOCUS_CHANGED = "focus.changed"
"""Published when the selected client changes. Params: client (or None)"""

FOCUSED_MONITOR_CHANGED = "focus.monitor_changed"
"""Published when the selected monitor changes. Params: monitor"""

# View events
LAYOUT_CHANGED = "layout.changed"
"""Published when a monitor's active layout changes. Params: monitor, layout"""

TAGS_VIEWED = "tags.viewed"
"""Published when a monitor's viewed tag set changes. Params: monitor, tags"""

BAR_UPDATED = "bar.updated"
"""Published after each arrange pass. Params: state (BarState)"""

# Monitor topology events
MONITOR_ADDED = "monitor.added"
"""Published when an output appears. Params: monitor"""

MONITOR_REMOVED = "monitor.removed"
"""Published when an output disappears. Params: monitor"""

# Operation events (interactive move/resize)
OPERATION_STARTED = "operation.started"
"""Published when an interactive operation starts. Params: client, kind"""

OPERATION_ENDED = "operation.ended"
"""Published when an interactive operation ends. Params: client"""

# Command events (imperative - tell components to do something)
# These are triggered by key bindings or the textual command interface

# Tag commands
CMD_VIEW_TAG = "cmd.view_tag"
"""Command: View a tag mask. Params: mask (0 returns to the previous view)"""

CMD_TOGGLE_TAG_VIEW = "cmd.toggle_tag_view"
"""Command: Add or remove tags from the view. Params: mask"""

CMD_TAG_CLIENT = "cmd.tag_client"
"""Command: Set the selected client's tags. Params: mask"""

CMD_TOGGLE_TAG = "cmd.toggle_tag"
"""Command: Toggle tags on the selected client. Params: mask"""

CMD_CYCLE_VIEW = "cmd.cycle_view"
"""Command: View the next occupied tag. Params: delta"""

CMD_SHIFT_TAG = "cmd.shift_tag"
"""Command: Move the selected client to the next occupied tag. Params: delta"""

# Focus commands
CMD_CYCLE_FOCUS = "cmd.cycle_focus"
"""Command: Focus the next/previous client. Params: direction"""

CMD_CYCLE_STACKAREA = "cmd.cycle_stackarea"
"""Command: Cycle through the deck's hidden clients. Params: direction"""

CMD_FOCUS_CLIENT = "cmd.focus_client"
"""Command: Focus the n-th visible client. Params: index"""

CMD_FOCUS_MONITOR = "cmd.focus_monitor"
"""Command: Select the next/previous monitor. Params: direction"""

# Client commands
CMD_PUSH_LEFT = "cmd.push_left"
"""Command: Move the selected client up the client list."""

CMD_PUSH_RIGHT = "cmd.push_right"
"""Command: Move the selected client down the client list."""

CMD_TOGGLE_MARK = "cmd.toggle_mark"
"""Command: Mark or unmark the selected client."""

CMD_TOGGLE_FLOATING = "cmd.toggle_floating"
"""Command: Toggle floating for the selected client."""

CMD_TOGGLE_FULLSCREEN = "cmd.toggle_fullscreen"
"""Command: Toggle fullscreen for the selected client."""

CMD_TOGGLE_HIDDEN = "cmd.toggle_hidden"
"""Command: Minimize or restore the n-th visible client. Params: index"""

CMD_HIDE_WINDOW = "cmd.hide_window"
"""Command: Minimize the selected client."""

CMD_SEND_TO_MONITOR = "cmd.send_to_monitor"
"""Command: Send the selected client to another monitor. Params: direction"""

CMD_KILL_CLIENT = "cmd.kill_client"
"""Command: Close the selected client."""

# Layout commands
CMD_SET_LAYOUT = "cmd.set_layout"
"""Command: Set or toggle the layout. Params: layout (name or None)"""

CMD_ADJUST_MARKED_WIDTH = "cmd.adjust_marked_width"
"""Command: Grow or shrink the marked area. Params: delta"""

CMD_SET_MARKED_WIDTH = "cmd.set_marked_width"
"""Command: Set the marked area fraction. Params: value"""

# Bar commands
CMD_TOGGLE_TAGBAR = "cmd.toggle_tagbar"
"""Command: Show or hide the tag bar."""

CMD_SET_CLIENTBAR_MODE = "cmd.set_clientbar_mode"
"""Command: Set or cycle the client bar mode. Params: mode (or None)"""

# Session
CMD_QUIT = "cmd.quit"
"""Command: Quit the window manager."""
