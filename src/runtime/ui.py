from __future__ import annotations

from typing import Any, Optional, Protocol

from contracts.ui_protocol import EVENT_COUNTDOWN, EVENT_POMODORO
from pomodoro import PomodoroSnapshot


class UIServerLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...

    def publish_state(
        self,
        state: str,
        *,
        message: Optional[str] = None,
        **payload: Any,
    ) -> None:
        ...


def _snapshot_payload(snapshot: PomodoroSnapshot) -> dict[str, Any]:
    return {
        "phase": snapshot.phase,
        "session": snapshot.session,
        "paused": snapshot.paused,
        "completed_focus": snapshot.completed_focus,
        "duration_ms": snapshot.duration_ms,
        "remaining_ms": snapshot.remaining_ms,
    }


class RuntimeUIPublisher:
    def __init__(self, ui_server: Optional[UIServerLike]):
        self._ui_server = ui_server

    def publish(self, event_type: str, **payload: Any) -> None:
        if self._ui_server:
            self._ui_server.publish(event_type, **payload)

    def publish_state(
        self,
        state: str,
        *,
        message: Optional[str] = None,
        **payload: Any,
    ) -> None:
        if self._ui_server:
            self._ui_server.publish_state(state, message=message, **payload)

    def publish_pomodoro_update(
        self,
        snapshot: PomodoroSnapshot,
        *,
        action: str,
        accepted: Optional[bool] = None,
        reason: str = "",
        message: Optional[str] = None,
    ) -> None:
        payload: dict[str, Any] = {"action": action, **_snapshot_payload(snapshot)}
        if accepted is not None:
            payload["accepted"] = accepted
        if reason:
            payload["reason"] = reason
        if message:
            payload["message"] = message
        self.publish(EVENT_POMODORO, **payload)

    def publish_countdown_update(self, snapshot: PomodoroSnapshot) -> None:
        self.publish(EVENT_COUNTDOWN, **_snapshot_payload(snapshot))
