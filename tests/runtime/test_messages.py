import unittest

from pomodoro import PhaseTransition, PomodoroSnapshot
from runtime.messages import (
    action_message,
    rejection_message,
    status_message,
    transition_message,
)


def _snapshot(phase: str, **overrides) -> PomodoroSnapshot:
    values = {
        "phase": phase,
        "session": "Writing",
        "paused": False,
        "completed_focus": 2,
        "duration_ms": 5 * 60 * 1000,
        "remaining_ms": 90_000,
    }
    values.update(overrides)
    return PomodoroSnapshot(**values)


class StatusMessageTests(unittest.TestCase):
    def test_running_phase(self) -> None:
        self.assertEqual(
            "Focus 'Writing' running (01:30 remaining, 2 done today)",
            status_message(_snapshot("focus")),
        )

    def test_paused_break(self) -> None:
        self.assertEqual(
            "Short break 'Writing' paused (01:30 remaining, 2 done today)",
            status_message(_snapshot("short_break", paused=True)),
        )

    def test_inactive_phases(self) -> None:
        self.assertEqual("Ready", status_message(_snapshot("idle")))
        self.assertEqual("Stopped. 2 pomodoros today.", status_message(_snapshot("stopped")))
        self.assertEqual(
            "All rounds done. 2 pomodoros today.",
            status_message(_snapshot("completed")),
        )


class TransitionMessageTests(unittest.TestCase):
    def test_focus_to_long_break(self) -> None:
        transition = PhaseTransition(
            previous=_snapshot("focus", completed_focus=3),
            current=_snapshot("long_break", completed_focus=4, duration_ms=15 * 60 * 1000),
        )

        self.assertEqual(
            "Pomodoro 'Writing' complete (#4 today). Long break for 15:00.",
            transition_message(transition),
        )

    def test_break_to_focus(self) -> None:
        transition = PhaseTransition(
            previous=_snapshot("short_break"),
            current=_snapshot("focus"),
        )

        self.assertEqual("Break over. Back to 'Writing'.", transition_message(transition))


class ActionMessageTests(unittest.TestCase):
    def test_start_announces_focus_length(self) -> None:
        snapshot = _snapshot("focus", duration_ms=25 * 60 * 1000)

        self.assertEqual("Focus on 'Writing' for 25:00.", action_message("start", snapshot))

    def test_pause_reports_remaining_time(self) -> None:
        self.assertEqual("Paused with 01:30 left.", action_message("pause", _snapshot("focus")))

    def test_rejections(self) -> None:
        self.assertEqual(
            "A pomodoro is already running.",
            rejection_message("start", "already_active"),
        )
        self.assertEqual(
            "The pomodoro is not paused.",
            rejection_message("continue", "not_paused"),
        )
        self.assertEqual(
            "There is no active pomodoro.",
            rejection_message("skip", "not_active"),
        )
        self.assertEqual("Cannot dance right now.", rejection_message("dance", "unsupported_action"))


if __name__ == "__main__":
    unittest.main()
