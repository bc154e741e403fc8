"""JSON persistence of the daily pomodoro tally."""

from __future__ import annotations

import datetime as dt
import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .service import PomodoroSnapshot

STATE_FORMAT_VERSION = 1


class SessionStateError(Exception):
    """Raised when the session state file cannot be read or written."""


@dataclass(frozen=True)
class SessionState:
    """Minimal state carried over between runs on the same day."""
    completed_focus: int
    session: Optional[str]
    date: dt.date
    updated_at: str

    def to_json(self) -> dict[str, Any]:
        return {
            "version": STATE_FORMAT_VERSION,
            "completed_focus": self.completed_focus,
            "session": self.session,
            "date": self.date.isoformat(),
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_json(cls, raw: Any) -> "SessionState":
        if not isinstance(raw, dict):
            raise SessionStateError("Session state must be a JSON object.")
        completed = raw.get("completed_focus")
        if not isinstance(completed, int) or isinstance(completed, bool) or completed < 0:
            raise SessionStateError("completed_focus must be a non-negative integer.")
        session = raw.get("session")
        if session is not None and not isinstance(session, str):
            raise SessionStateError("session must be a string.")
        try:
            date = dt.date.fromisoformat(str(raw.get("date", "")))
        except ValueError as error:
            raise SessionStateError(f"Invalid session state date: {error}") from error
        return cls(
            completed_focus=completed,
            session=session,
            date=date,
            updated_at=str(raw.get("updated_at", "")),
        )


class SessionStateStore:
    """Reads and atomically rewrites the session state file."""

    def __init__(self, path: str | Path, logger: Optional[logging.Logger] = None):
        self._path = Path(path).expanduser()
        self._logger = logger or logging.getLogger("pomodoro.store")

    @property
    def path(self) -> Path:
        return self._path

    def load(self, today: Optional[dt.date] = None) -> Optional[SessionState]:
        """Return today's stored state, or None when absent or from another day."""
        if not self._path.exists():
            return None

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as error:
            raise SessionStateError(f"Failed to read session state {self._path}: {error}") from error

        state = SessionState.from_json(raw)
        current_day = today or dt.date.today()
        if state.date != current_day:
            self._logger.info("Ignoring session state from %s", state.date.isoformat())
            return None
        return state

    def save(
        self,
        snapshot: PomodoroSnapshot,
        *,
        now: Optional[dt.datetime] = None,
    ) -> SessionState:
        moment = now or dt.datetime.now().astimezone()
        completed = snapshot.completed_focus
        if snapshot.tally_date is not None and snapshot.tally_date != moment.date():
            # Nothing has been completed on the new day yet.
            completed = 0
        state = SessionState(
            completed_focus=completed,
            session=snapshot.session,
            date=moment.date(),
            updated_at=moment.isoformat(timespec="seconds"),
        )

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(state.to_json(), fh, indent=2)
                    fh.write("\n")
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as error:
            raise SessionStateError(f"Failed to write session state {self._path}: {error}") from error

        self._logger.debug("Session state saved: %s", self._path)
        return state
