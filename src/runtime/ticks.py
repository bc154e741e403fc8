"""Tick handlers that render countdown updates and react to finished phases."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from contracts.ui_protocol import EVENT_ERROR, EVENT_NOTIFICATION, STATE_ERROR
from pomodoro import PhaseTransition, PomodoroSnapshot, SessionStateError, SessionStateStore
from pomodoro.constants import ACTION_COMPLETED, REASON_COMPLETED

from .display import TerminalDisplay
from .messages import transition_message
from .ui import RuntimeUIPublisher


class NotifierLike(Protocol):
    def notify(self, message: str) -> None:
        ...


@dataclass(frozen=True)
class TickDependencies:
    """Dependencies required for processing countdown ticks and transitions."""
    display: TerminalDisplay
    notifier: Optional[NotifierLike]
    store: Optional[SessionStateStore]
    logger: logging.Logger
    ui: RuntimeUIPublisher
    publish_idle_state: Callable[[], None]


class TickProcessor:
    """Handles tick side effects such as redraws, notifications and persistence."""
    def __init__(self, dependencies: TickDependencies):
        self._dependencies = dependencies

    def handle_tick(self, snapshot: PomodoroSnapshot) -> None:
        deps = self._dependencies
        deps.display.show(snapshot.remaining_ms)
        deps.ui.publish_countdown_update(snapshot)

    def handle_transition(self, transition: PhaseTransition) -> None:
        deps = self._dependencies
        message = transition_message(transition)

        deps.display.announce(message)
        deps.ui.publish_pomodoro_update(
            transition.current,
            action=ACTION_COMPLETED,
            accepted=True,
            reason=REASON_COMPLETED,
            message=message,
        )
        deps.ui.publish(
            EVENT_NOTIFICATION,
            message=message,
            phase=transition.previous.phase,
        )
        if deps.notifier is not None:
            deps.notifier.notify(message)

        if deps.store is not None:
            try:
                deps.store.save(transition.current)
            except SessionStateError as error:
                deps.logger.error("Failed to persist session state: %s", error)
                deps.ui.publish(EVENT_ERROR, state=STATE_ERROR, message=str(error))

        if transition.finished:
            deps.publish_idle_state()
