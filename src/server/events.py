"""Utilities for serializing UI events, parsing commands and sticky state."""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from contracts.ui_protocol import MESSAGE_COMMAND, STICKY_EVENT_ORDER, STICKY_EVENT_TYPES
from pomodoro.constants import USER_ACTIONS


class CommandParseError(ValueError):
    """Raised when an inbound websocket message is not a valid command."""


def make_event(
    event_type: str,
    *,
    now_fn: Callable[[], datetime] | None = None,
    **payload: Any,
) -> str:
    """Serialize an event payload with type and timestamp for websocket delivery."""
    now = now_fn() if now_fn is not None else datetime.now(timezone.utc)
    return json.dumps(
        {
            "type": event_type,
            "timestamp": now.isoformat(),
            **payload,
        }
    )


def parse_command(message: str | bytes) -> tuple[str, Optional[str]]:
    """Return `(action, session)` from a `{"type": "command", ...}` message."""
    try:
        raw = json.loads(message)
    except ValueError as error:
        raise CommandParseError(f"Message is not valid JSON: {error}") from error

    if not isinstance(raw, dict) or raw.get("type") != MESSAGE_COMMAND:
        raise CommandParseError("Expected an object with type 'command'")

    action = raw.get("action")
    if not isinstance(action, str) or action not in USER_ACTIONS:
        allowed = ", ".join(sorted(USER_ACTIONS))
        raise CommandParseError(f"action must be one of: {allowed}")

    session = raw.get("session")
    if session is not None and not isinstance(session, str):
        raise CommandParseError("session must be a string")
    return action, session


class StickyEventStore:
    """Thread-safe cache of sticky events replayed to new websocket clients."""
    def __init__(self):
        self._events: dict[str, str] = {}
        self._lock = threading.Lock()

    def remember(self, event_type: str, message: str) -> None:
        if event_type not in STICKY_EVENT_TYPES:
            return
        with self._lock:
            self._events[event_type] = message

    def snapshot(self) -> list[str]:
        with self._lock:
            return [self._events[key] for key in STICKY_EVENT_ORDER if key in self._events]
