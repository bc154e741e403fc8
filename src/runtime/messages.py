"""English status and notification text builders for the pomodoro runtime."""

from __future__ import annotations

from pomodoro import PhaseTransition, PomodoroSnapshot
from pomodoro.constants import (
    ACTION_CONTINUE,
    ACTION_PAUSE,
    ACTION_RESET,
    ACTION_SKIP,
    ACTION_START,
    PHASE_COMPLETED,
    PHASE_FOCUS,
    PHASE_LONG_BREAK,
    PHASE_SHORT_BREAK,
    PHASE_STOPPED,
    REASON_ALREADY_ACTIVE,
    REASON_NOT_ACTIVE,
    REASON_NOT_PAUSED,
    REASON_NOT_RUNNING,
)
from view import format_clock

PHASE_LABELS: dict[str, str] = {
    PHASE_FOCUS: "Focus",
    PHASE_SHORT_BREAK: "Short break",
    PHASE_LONG_BREAK: "Long break",
}


def format_duration(milliseconds: int) -> str:
    """Format a duration in milliseconds as clock text."""
    return format_clock(milliseconds)


def phase_label(phase: str) -> str:
    return PHASE_LABELS.get(phase, phase.replace("_", " ").capitalize())


def status_message(snapshot: PomodoroSnapshot) -> str:
    """Build status text for the current cycle snapshot."""
    if snapshot.is_active:
        state = "paused" if snapshot.paused else "running"
        return (
            f"{phase_label(snapshot.phase)} '{snapshot.session}' {state} "
            f"({format_duration(snapshot.remaining_ms)} remaining, "
            f"{snapshot.completed_focus} done today)"
        )
    if snapshot.phase == PHASE_COMPLETED:
        return f"All rounds done. {snapshot.completed_focus} pomodoros today."
    if snapshot.phase == PHASE_STOPPED:
        return f"Stopped. {snapshot.completed_focus} pomodoros today."
    return "Ready"


def phase_started_message(snapshot: PomodoroSnapshot) -> str:
    if snapshot.phase == PHASE_FOCUS:
        return (
            f"Focus on '{snapshot.session}' for "
            f"{format_duration(snapshot.duration_ms)}."
        )
    return f"{phase_label(snapshot.phase)} for {format_duration(snapshot.duration_ms)}."


def transition_message(transition: PhaseTransition) -> str:
    """Return the notification text for a phase that ran out."""
    previous = transition.previous
    current = transition.current
    if current.phase == PHASE_COMPLETED:
        return (
            f"Pomodoro '{previous.session}' complete. "
            f"That was number {current.completed_focus} today. All rounds done."
        )
    if previous.phase == PHASE_FOCUS:
        return (
            f"Pomodoro '{previous.session}' complete "
            f"(#{current.completed_focus} today). "
            f"{phase_label(current.phase)} for {format_duration(current.duration_ms)}."
        )
    return f"Break over. Back to '{current.session}'."


def action_message(action: str, snapshot: PomodoroSnapshot) -> str:
    """Return text for an accepted user action."""
    if action == ACTION_START:
        return phase_started_message(snapshot)
    if action == ACTION_PAUSE:
        return f"Paused with {format_duration(snapshot.remaining_ms)} left."
    if action == ACTION_CONTINUE:
        return "Continuing."
    if action == ACTION_SKIP:
        return f"Skipped. {phase_started_message(snapshot)}"
    if action == ACTION_RESET:
        return f"Restarted. {phase_started_message(snapshot)}"
    return status_message(snapshot)


def rejection_message(action: str, reason: str) -> str:
    """Return text for a user action the cycle refused."""
    if reason == REASON_ALREADY_ACTIVE:
        return "A pomodoro is already running."
    if reason == REASON_NOT_RUNNING and action == ACTION_PAUSE:
        return "Nothing is running."
    if reason == REASON_NOT_PAUSED and action == ACTION_CONTINUE:
        return "The pomodoro is not paused."
    if reason == REASON_NOT_ACTIVE:
        return "There is no active pomodoro."
    return f"Cannot {action} right now."
