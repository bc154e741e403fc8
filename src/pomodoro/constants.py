"""Phase, action, and reason constants used by the pomodoro cycle."""

from __future__ import annotations

DEFAULT_FOCUS_SECONDS = 25 * 60
DEFAULT_SHORT_BREAK_SECONDS = 5 * 60
DEFAULT_LONG_BREAK_SECONDS = 15 * 60
DEFAULT_LONG_BREAK_EVERY = 4
DEFAULT_POMODORO_SESSION_NAME = "Focus"
MAX_SESSION_NAME_LENGTH = 60

PHASE_IDLE = "idle"
PHASE_FOCUS = "focus"
PHASE_SHORT_BREAK = "short_break"
PHASE_LONG_BREAK = "long_break"
PHASE_STOPPED = "stopped"
PHASE_COMPLETED = "completed"

ACTIVE_PHASES: frozenset[str] = frozenset({PHASE_FOCUS, PHASE_SHORT_BREAK, PHASE_LONG_BREAK})
BREAK_PHASES: frozenset[str] = frozenset({PHASE_SHORT_BREAK, PHASE_LONG_BREAK})

ACTION_START = "start"
ACTION_PAUSE = "pause"
ACTION_CONTINUE = "continue"
ACTION_SKIP = "skip"
ACTION_STOP = "stop"
ACTION_RESET = "reset"

USER_ACTIONS: frozenset[str] = frozenset(
    {ACTION_START, ACTION_PAUSE, ACTION_CONTINUE, ACTION_SKIP, ACTION_STOP, ACTION_RESET}
)

ACTION_SYNC = "sync"
ACTION_TICK = "tick"
ACTION_COMPLETED = "completed"

REASON_STARTED = "started"
REASON_RESET = "reset"
REASON_PAUSED = "paused"
REASON_CONTINUED = "continued"
REASON_SKIPPED = "skipped"
REASON_STOPPED = "stopped"
REASON_ALREADY_ACTIVE = "already_active"
REASON_NOT_RUNNING = "not_running"
REASON_NOT_PAUSED = "not_paused"
REASON_NOT_ACTIVE = "not_active"
REASON_UNSUPPORTED_ACTION = "unsupported_action"

REASON_TICK = "tick"
REASON_COMPLETED = "completed"
REASON_STARTUP = "startup"
