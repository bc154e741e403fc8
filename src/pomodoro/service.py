"""Thread-safe in-memory pomodoro focus/break cycle."""

from __future__ import annotations

import datetime as dt
import logging
import math
import threading
from dataclasses import dataclass
from typing import Callable, Literal, Optional

from .constants import (
    ACTION_CONTINUE,
    ACTION_PAUSE,
    ACTION_RESET,
    ACTION_SKIP,
    ACTION_START,
    ACTION_STOP,
    ACTIVE_PHASES,
    BREAK_PHASES,
    DEFAULT_FOCUS_SECONDS,
    DEFAULT_LONG_BREAK_EVERY,
    DEFAULT_LONG_BREAK_SECONDS,
    DEFAULT_POMODORO_SESSION_NAME,
    DEFAULT_SHORT_BREAK_SECONDS,
    MAX_SESSION_NAME_LENGTH,
    PHASE_COMPLETED,
    PHASE_FOCUS,
    PHASE_IDLE,
    PHASE_LONG_BREAK,
    PHASE_SHORT_BREAK,
    PHASE_STOPPED,
    REASON_ALREADY_ACTIVE,
    REASON_CONTINUED,
    REASON_NOT_ACTIVE,
    REASON_NOT_PAUSED,
    REASON_NOT_RUNNING,
    REASON_PAUSED,
    REASON_RESET,
    REASON_SKIPPED,
    REASON_STARTED,
    REASON_STOPPED,
    REASON_UNSUPPORTED_ACTION,
)

PomodoroPhase = Literal["idle", "focus", "short_break", "long_break", "stopped", "completed"]
PomodoroAction = Literal["start", "pause", "continue", "skip", "stop", "reset"]


@dataclass(frozen=True)
class PhaseDurations:
    """Length of each pomodoro phase in milliseconds."""
    focus_ms: int = DEFAULT_FOCUS_SECONDS * 1000
    short_break_ms: int = DEFAULT_SHORT_BREAK_SECONDS * 1000
    long_break_ms: int = DEFAULT_LONG_BREAK_SECONDS * 1000

    def __post_init__(self) -> None:
        for name in ("focus_ms", "short_break_ms", "long_break_ms"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be greater than zero")

    @classmethod
    def from_minutes(
        cls,
        focus: float,
        short_break: float,
        long_break: float,
    ) -> "PhaseDurations":
        return cls(
            focus_ms=_minutes_to_ms(focus, "focus"),
            short_break_ms=_minutes_to_ms(short_break, "short_break"),
            long_break_ms=_minutes_to_ms(long_break, "long_break"),
        )

    def for_phase(self, phase: str) -> int:
        if phase == PHASE_SHORT_BREAK:
            return self.short_break_ms
        if phase == PHASE_LONG_BREAK:
            return self.long_break_ms
        return self.focus_ms


def _minutes_to_ms(minutes: float, name: str) -> int:
    milliseconds = minutes * 60_000
    if not math.isfinite(milliseconds):
        raise ValueError(f"{name} must be a finite number of minutes")
    return int(round(milliseconds))


@dataclass(frozen=True)
class PomodoroSnapshot:
    """Immutable cycle snapshot exposed to runtime and UI publishers."""
    phase: PomodoroPhase
    session: Optional[str]
    paused: bool
    completed_focus: int
    duration_ms: int
    remaining_ms: int
    tally_date: Optional[dt.date] = None

    @property
    def is_active(self) -> bool:
        return self.phase in ACTIVE_PHASES

    @property
    def is_break(self) -> bool:
        return self.phase in BREAK_PHASES


@dataclass(frozen=True)
class PomodoroActionResult:
    """Result envelope returned after applying a user action."""
    action: str
    accepted: bool
    reason: str
    snapshot: PomodoroSnapshot


@dataclass(frozen=True)
class PhaseTransition:
    """Snapshots before and after a phase ran out."""
    previous: PomodoroSnapshot
    current: PomodoroSnapshot

    @property
    def finished(self) -> bool:
        return self.current.phase == PHASE_COMPLETED


class PomodoroCycle:
    """Focus/break state machine.

    Focus phases alternate with short breaks; every `long_break_every`-th
    completed focus phase is followed by a long break instead. With
    `max_rounds` set, the cycle completes after that many focus phases.
    `completed_focus` is a daily tally and restarts from zero once `today()`
    moves past `tally_date`.
    """

    def __init__(
        self,
        *,
        durations: Optional[PhaseDurations] = None,
        long_break_every: int = DEFAULT_LONG_BREAK_EVERY,
        max_rounds: int = 0,
        completed_focus: int = 0,
        tally_date: Optional[dt.date] = None,
        session: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
        today: Callable[[], dt.date] = dt.date.today,
    ):
        if long_break_every < 1:
            raise ValueError("long_break_every must be at least one")
        if max_rounds < 0:
            raise ValueError("max_rounds cannot be negative")
        if completed_focus < 0:
            raise ValueError("completed_focus cannot be negative")

        self._durations = durations or PhaseDurations()
        self._long_break_every = int(long_break_every)
        self._max_rounds = int(max_rounds)
        self._logger = logger or logging.getLogger("pomodoro")
        self._lock = threading.Lock()

        self._phase: PomodoroPhase = PHASE_IDLE
        self._session: str = _sanitize_session_name(session or DEFAULT_POMODORO_SESSION_NAME)
        self._paused = False
        self._completed_focus = int(completed_focus)
        self._today = today
        self._tally_date = tally_date or today()
        self._rounds_this_run = 0
        self._remaining_ms = self._durations.focus_ms

    @property
    def durations(self) -> PhaseDurations:
        return self._durations

    def snapshot(self) -> PomodoroSnapshot:
        with self._lock:
            self._roll_tally_locked()
            return self._snapshot_locked()

    def apply(
        self,
        action: str,
        *,
        session: Optional[str] = None,
    ) -> PomodoroActionResult:
        with self._lock:
            active = self._phase in ACTIVE_PHASES

            if action == ACTION_START:
                if active:
                    return self._result_locked(action, False, REASON_ALREADY_ACTIVE)
                if session:
                    self._session = _sanitize_session_name(session)
                self._rounds_this_run = 0
                self._enter_locked(PHASE_FOCUS)
                return self._result_locked(action, True, REASON_STARTED)

            if action == ACTION_RESET:
                if session:
                    self._session = _sanitize_session_name(session)
                if active:
                    self._enter_locked(self._phase)
                else:
                    self._rounds_this_run = 0
                    self._enter_locked(PHASE_FOCUS)
                return self._result_locked(action, True, REASON_RESET)

            if action == ACTION_PAUSE:
                if not active or self._paused:
                    return self._result_locked(action, False, REASON_NOT_RUNNING)
                self._paused = True
                self._logger.info(
                    "Pomodoro paused: phase=%s remaining=%sms",
                    self._phase,
                    self._remaining_ms,
                )
                return self._result_locked(action, True, REASON_PAUSED)

            if action == ACTION_CONTINUE:
                if not active or not self._paused:
                    return self._result_locked(action, False, REASON_NOT_PAUSED)
                self._paused = False
                self._logger.info("Pomodoro continued: phase=%s", self._phase)
                return self._result_locked(action, True, REASON_CONTINUED)

            if action == ACTION_SKIP:
                if not active:
                    return self._result_locked(action, False, REASON_NOT_ACTIVE)
                skipped = self._phase
                self._enter_locked(PHASE_FOCUS if skipped in BREAK_PHASES else PHASE_SHORT_BREAK)
                self._logger.info("Pomodoro skipped: phase=%s", skipped)
                return self._result_locked(action, True, REASON_SKIPPED)

            if action == ACTION_STOP:
                if not active:
                    return self._result_locked(action, False, REASON_NOT_ACTIVE)
                self._phase = PHASE_STOPPED
                self._paused = False
                self._logger.info(
                    "Pomodoro stopped: session=%s remaining=%sms",
                    self._session,
                    self._remaining_ms,
                )
                return self._result_locked(action, True, REASON_STOPPED)

            return self._result_locked(action, False, REASON_UNSUPPORTED_ACTION)

    def record_remaining(self, remaining_ms: int) -> PomodoroSnapshot:
        """Store the latest countdown value of the running phase."""
        with self._lock:
            if self._phase in ACTIVE_PHASES:
                duration = self._durations.for_phase(self._phase)
                self._remaining_ms = max(0, min(duration, int(remaining_ms)))
            return self._snapshot_locked()

    def complete_phase(self) -> Optional[PhaseTransition]:
        """Advance past the running phase once its countdown reached zero."""
        with self._lock:
            if self._phase not in ACTIVE_PHASES:
                return None

            self._roll_tally_locked()
            self._remaining_ms = 0
            previous = self._snapshot_locked()

            if self._phase == PHASE_FOCUS:
                self._completed_focus += 1
                self._rounds_this_run += 1
                self._logger.info(
                    "Focus completed: session=%s completed=%s",
                    self._session,
                    self._completed_focus,
                )
                if self._max_rounds and self._rounds_this_run >= self._max_rounds:
                    self._phase = PHASE_COMPLETED
                    self._paused = False
                    self._logger.info("Pomodoro cycle completed after %s rounds", self._rounds_this_run)
                elif self._completed_focus % self._long_break_every == 0:
                    self._enter_locked(PHASE_LONG_BREAK)
                else:
                    self._enter_locked(PHASE_SHORT_BREAK)
            else:
                self._logger.info("Break completed: phase=%s", self._phase)
                self._enter_locked(PHASE_FOCUS)

            return PhaseTransition(previous=previous, current=self._snapshot_locked())

    def _roll_tally_locked(self) -> None:
        current_day = self._today()
        if current_day == self._tally_date:
            return
        if self._completed_focus:
            self._logger.info(
                "New day %s, resetting tally of %s pomodoros",
                current_day.isoformat(),
                self._completed_focus,
            )
        self._completed_focus = 0
        self._tally_date = current_day

    def _enter_locked(self, phase: PomodoroPhase) -> None:
        self._phase = phase
        self._paused = False
        self._remaining_ms = self._durations.for_phase(phase)
        self._logger.info(
            "Pomodoro phase started: phase=%s session=%s duration=%sms",
            phase,
            self._session,
            self._remaining_ms,
        )

    def _result_locked(
        self,
        action: str,
        accepted: bool,
        reason: str,
    ) -> PomodoroActionResult:
        return PomodoroActionResult(
            action=action,
            accepted=accepted,
            reason=reason,
            snapshot=self._snapshot_locked(),
        )

    def _snapshot_locked(self) -> PomodoroSnapshot:
        return PomodoroSnapshot(
            phase=self._phase,
            session=self._session,
            paused=self._paused,
            completed_focus=self._completed_focus,
            duration_ms=self._durations.for_phase(self._phase),
            remaining_ms=0 if self._phase == PHASE_COMPLETED else self._remaining_ms,
            tally_date=self._tally_date,
        )


def _sanitize_session_name(name: str) -> str:
    compact = " ".join(name.split())
    compact = compact.strip()[:MAX_SESSION_NAME_LENGTH]
    return compact or DEFAULT_POMODORO_SESSION_NAME
