import io
import unittest

from runtime import TerminalDisplay
from view import TEMPLAR, View


class TerminalDisplayTests(unittest.TestCase):
    def test_single_line_frames_return_carriage(self) -> None:
        stream = io.StringIO()
        display = TerminalDisplay(View(), stream=stream)

        display.show(3000)
        display.show(2000)

        self.assertEqual("00:03\r00:02\r", stream.getvalue())

    def test_shorter_frame_covers_previous_one(self) -> None:
        stream = io.StringIO()
        display = TerminalDisplay(View(), stream=stream)

        display.show(3_600_000)
        display.show(3_599_000)

        self.assertEqual("01:00:00\r59:59   \r", stream.getvalue())

    def test_announce_moves_below_the_clock(self) -> None:
        stream = io.StringIO()
        display = TerminalDisplay(View(), stream=stream)

        display.show(1000)
        display.announce("Break time.")
        display.show(500)

        self.assertEqual("00:01\r\nBreak time.\n00:01\r", stream.getvalue())

    def test_finish_without_frame_writes_nothing(self) -> None:
        stream = io.StringIO()
        TerminalDisplay(View(), stream=stream).finish()

        self.assertEqual("", stream.getvalue())

    def test_multi_line_font_redraws_in_place(self) -> None:
        stream = io.StringIO()
        display = TerminalDisplay(View(TEMPLAR), stream=stream)

        display.show(0)
        first = stream.getvalue()
        display.show(0)
        second = stream.getvalue()[len(first):]

        self.assertEqual(3, first.count("\n"))
        self.assertNotIn("\x1b[", first)
        self.assertTrue(second.startswith("\x1b[3F"))
        self.assertEqual(first, second[len("\x1b[3F"):])


if __name__ == "__main__":
    unittest.main()
