import asyncio
import io
import unittest

from countdown import CLOSED, AsyncCountdown, Response
from runtime import TerminalDisplay, run_countdown
from view import View


class _ScriptedReceiver:
    def __init__(self, values: list[int]):
        self._responses = [Response.of(value) for value in values] + [CLOSED]

    async def recv(self):
        return self._responses.pop(0)


class _ScriptedCountdown:
    def __init__(self, values: list[int]):
        self.values = values
        self.started_with: list[int] = []

    async def start(self, duration_ms: int):
        self.started_with.append(duration_ms)
        return _ScriptedReceiver(self.values)


class RunCountdownTests(unittest.IsolatedAsyncioTestCase):
    async def test_three_second_countdown_renders_each_second(self) -> None:
        stream = io.StringIO()
        countdown = _ScriptedCountdown([3000, 2000, 1000, 0])

        last = await run_countdown(countdown, 3000, TerminalDisplay(View(), stream=stream))

        self.assertEqual("00:03\r00:02\r00:01\r00:00\r", stream.getvalue())
        self.assertEqual([3000], countdown.started_with)
        self.assertEqual(0, last)

    async def test_real_countdown_ends_at_zero(self) -> None:
        stream = io.StringIO()

        last = await asyncio.wait_for(
            run_countdown(AsyncCountdown(50), 1500, TerminalDisplay(View(), stream=stream)),
            timeout=5.0,
        )

        frames = stream.getvalue().split("\r")
        self.assertEqual("00:02", frames[0])
        self.assertEqual("00:00", frames[-2])
        self.assertEqual("", frames[-1])
        self.assertEqual(0, last)


if __name__ == "__main__":
    unittest.main()
