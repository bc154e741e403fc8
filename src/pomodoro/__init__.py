from .service import (
    PhaseDurations,
    PhaseTransition,
    PomodoroAction,
    PomodoroActionResult,
    PomodoroCycle,
    PomodoroPhase,
    PomodoroSnapshot,
)
from .store import SessionState, SessionStateError, SessionStateStore

__all__ = [
    "PhaseDurations",
    "PhaseTransition",
    "PomodoroAction",
    "PomodoroActionResult",
    "PomodoroCycle",
    "PomodoroPhase",
    "PomodoroSnapshot",
    "SessionState",
    "SessionStateError",
    "SessionStateStore",
]
