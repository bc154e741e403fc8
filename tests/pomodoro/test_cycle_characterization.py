import datetime as dt
import unittest

from pomodoro import PhaseDurations, PomodoroCycle


def _durations() -> PhaseDurations:
    return PhaseDurations(focus_ms=10_000, short_break_ms=2_000, long_break_ms=5_000)


class PomodoroCycleCharacterizationTests(unittest.TestCase):
    def test_start_enters_focus_with_full_duration(self) -> None:
        cycle = PomodoroCycle(durations=_durations())
        result = cycle.apply("start", session="Deep work")

        self.assertTrue(result.accepted)
        self.assertEqual("started", result.reason)
        self.assertEqual("focus", result.snapshot.phase)
        self.assertEqual("Deep work", result.snapshot.session)
        self.assertEqual(10_000, result.snapshot.duration_ms)
        self.assertEqual(10_000, result.snapshot.remaining_ms)

    def test_start_rejected_while_active(self) -> None:
        cycle = PomodoroCycle(durations=_durations())
        cycle.apply("start")
        result = cycle.apply("start")

        self.assertFalse(result.accepted)
        self.assertEqual("already_active", result.reason)

    def test_pause_rejected_when_not_running(self) -> None:
        cycle = PomodoroCycle(durations=_durations())
        result = cycle.apply("pause")

        self.assertFalse(result.accepted)
        self.assertEqual("not_running", result.reason)

    def test_continue_rejected_when_not_paused(self) -> None:
        cycle = PomodoroCycle(durations=_durations())
        cycle.apply("start")
        result = cycle.apply("continue")

        self.assertFalse(result.accepted)
        self.assertEqual("not_paused", result.reason)

    def test_pause_then_continue_keeps_remaining(self) -> None:
        cycle = PomodoroCycle(durations=_durations())
        cycle.apply("start")
        cycle.record_remaining(7_000)

        paused = cycle.apply("pause")
        continued = cycle.apply("continue")

        self.assertTrue(paused.accepted)
        self.assertTrue(paused.snapshot.paused)
        self.assertEqual(7_000, paused.snapshot.remaining_ms)
        self.assertTrue(continued.accepted)
        self.assertFalse(continued.snapshot.paused)
        self.assertEqual(7_000, continued.snapshot.remaining_ms)

    def test_stop_and_skip_rejected_when_not_active(self) -> None:
        cycle = PomodoroCycle(durations=_durations())

        self.assertEqual("not_active", cycle.apply("stop").reason)
        self.assertEqual("not_active", cycle.apply("skip").reason)

    def test_unknown_action_is_rejected(self) -> None:
        result = PomodoroCycle(durations=_durations()).apply("snooze")

        self.assertFalse(result.accepted)
        self.assertEqual("unsupported_action", result.reason)

    def test_focus_and_breaks_alternate_with_long_break_every_fourth(self) -> None:
        cycle = PomodoroCycle(durations=_durations(), long_break_every=4)
        cycle.apply("start")

        phases = []
        for _ in range(8):
            transition = cycle.complete_phase()
            if transition is None:
                self.fail("Expected a transition while the cycle is active")
            phases.append(transition.current.phase)

        self.assertEqual(
            [
                "short_break",
                "focus",
                "short_break",
                "focus",
                "short_break",
                "focus",
                "long_break",
                "focus",
            ],
            phases,
        )
        self.assertEqual(4, cycle.snapshot().completed_focus)

    def test_long_break_rhythm_counts_restored_focus_phases(self) -> None:
        cycle = PomodoroCycle(durations=_durations(), long_break_every=4, completed_focus=3)
        cycle.apply("start")

        transition = cycle.complete_phase()

        self.assertIsNotNone(transition)
        if transition is None:
            self.fail("Expected a transition")
        self.assertEqual("long_break", transition.current.phase)
        self.assertEqual(5_000, transition.current.remaining_ms)
        self.assertEqual(0, transition.previous.remaining_ms)

    def test_tally_resets_on_a_new_day(self) -> None:
        days = [dt.date(2026, 5, 4)]
        cycle = PomodoroCycle(
            durations=_durations(),
            completed_focus=6,
            tally_date=dt.date(2026, 5, 4),
            today=lambda: days[0],
        )
        cycle.apply("start")
        self.assertEqual(6, cycle.snapshot().completed_focus)

        days[0] = dt.date(2026, 5, 5)

        self.assertEqual(0, cycle.snapshot().completed_focus)
        transition = cycle.complete_phase()
        if transition is None:
            self.fail("Expected a transition")
        self.assertEqual(1, transition.current.completed_focus)
        self.assertEqual(dt.date(2026, 5, 5), transition.current.tally_date)

    def test_max_rounds_completes_the_cycle(self) -> None:
        cycle = PomodoroCycle(durations=_durations(), max_rounds=2)
        cycle.apply("start")

        cycle.complete_phase()
        cycle.complete_phase()
        transition = cycle.complete_phase()

        self.assertIsNotNone(transition)
        if transition is None:
            self.fail("Expected a transition")
        self.assertTrue(transition.finished)
        self.assertEqual("completed", transition.current.phase)
        self.assertFalse(transition.current.is_active)
        self.assertIsNone(cycle.complete_phase())

    def test_skip_focus_goes_to_short_break_without_counting(self) -> None:
        cycle = PomodoroCycle(durations=_durations())
        cycle.apply("start")

        result = cycle.apply("skip")

        self.assertTrue(result.accepted)
        self.assertEqual("short_break", result.snapshot.phase)
        self.assertEqual(0, result.snapshot.completed_focus)
        self.assertEqual("focus", cycle.apply("skip").snapshot.phase)

    def test_stop_keeps_remaining_and_deactivates(self) -> None:
        cycle = PomodoroCycle(durations=_durations())
        cycle.apply("start")
        cycle.record_remaining(4_000)

        result = cycle.apply("stop")

        self.assertTrue(result.accepted)
        self.assertEqual("stopped", result.snapshot.phase)
        self.assertEqual(4_000, result.snapshot.remaining_ms)
        self.assertFalse(result.snapshot.is_active)

    def test_reset_restarts_current_phase(self) -> None:
        cycle = PomodoroCycle(durations=_durations())
        cycle.apply("start")
        cycle.complete_phase()
        cycle.record_remaining(500)

        result = cycle.apply("reset")

        self.assertTrue(result.accepted)
        self.assertEqual("short_break", result.snapshot.phase)
        self.assertEqual(2_000, result.snapshot.remaining_ms)

    def test_reset_starts_focus_when_inactive(self) -> None:
        cycle = PomodoroCycle(durations=_durations())

        result = cycle.apply("reset")

        self.assertTrue(result.accepted)
        self.assertEqual("focus", result.snapshot.phase)

    def test_record_remaining_is_clamped_to_phase_duration(self) -> None:
        cycle = PomodoroCycle(durations=_durations())
        cycle.apply("start")

        self.assertEqual(10_000, cycle.record_remaining(99_999).remaining_ms)
        self.assertEqual(0, cycle.record_remaining(-5).remaining_ms)

    def test_session_name_is_sanitized(self) -> None:
        cycle = PomodoroCycle(durations=_durations())
        raw_session = "   This    is      a   very very very very very very long session name    "
        result = cycle.apply("start", session=raw_session)

        session = result.snapshot.session or ""
        self.assertTrue(session)
        self.assertLessEqual(len(session), 60)
        self.assertEqual(" ".join(session.split()), session)

    def test_durations_from_minutes(self) -> None:
        durations = PhaseDurations.from_minutes(25, 5, 15)

        self.assertEqual(1_500_000, durations.focus_ms)
        self.assertEqual(300_000, durations.short_break_ms)
        self.assertEqual(900_000, durations.long_break_ms)

    def test_durations_reject_zero(self) -> None:
        with self.assertRaises(ValueError):
            PhaseDurations(focus_ms=0)

    def test_durations_from_minutes_reject_non_finite_values(self) -> None:
        for minutes in (float("inf"), float("nan"), 1e306):
            with self.subTest(minutes=minutes):
                with self.assertRaises(ValueError):
                    PhaseDurations.from_minutes(25, minutes, 15)


if __name__ == "__main__":
    unittest.main()
