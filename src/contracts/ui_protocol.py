"""Web UI websocket event, state and command constants."""

from __future__ import annotations

# Websocket event types
EVENT_HELLO = "hello"
EVENT_STATE_UPDATE = "state_update"
EVENT_POMODORO = "pomodoro"
EVENT_COUNTDOWN = "countdown"
EVENT_NOTIFICATION = "notification"
EVENT_ERROR = "error"

# Inbound message types
MESSAGE_COMMAND = "command"

# UI runtime states
STATE_IDLE = "idle"
STATE_RUNNING = "running"
STATE_PAUSED = "paused"
STATE_FINISHED = "finished"
STATE_ERROR = "error"

STICKY_EVENT_TYPES: frozenset[str] = frozenset(
    {
        EVENT_STATE_UPDATE,
        EVENT_POMODORO,
        EVENT_COUNTDOWN,
        EVENT_NOTIFICATION,
        EVENT_ERROR,
    }
)

STICKY_EVENT_ORDER: tuple[str, ...] = (
    EVENT_POMODORO,
    EVENT_COUNTDOWN,
    EVENT_NOTIFICATION,
    EVENT_ERROR,
    EVENT_STATE_UPDATE,
)
