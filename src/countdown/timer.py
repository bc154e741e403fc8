"""Asyncio countdown that publishes the remaining time once per period."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Optional, Protocol

from .channel import ChannelReceiver, ChannelSender, create_channel
from .constants import (
    DEFAULT_CHANNEL_TIMEOUT_MS,
    DEFAULT_PERIOD_MS,
    MAX_DURATION_MS,
    MAX_PERIOD_MS,
    MILLIS_PER_SECOND,
)
from .errors import (
    ChannelTimeout,
    DurationGreaterThanOneDay,
    DurationSmallerThanPeriod,
    IntervalGreaterThanOneHour,
    TimerError,
    ZeroDuration,
    ZeroInterval,
)


class Countdown(Protocol):
    """Anything that can count down a duration and stream the remaining time."""
    async def start(self, duration_ms: int) -> ChannelReceiver[int]:
        ...


class AsyncCountdown:
    """Countdown driven by the running event loop with a drift-free schedule."""

    def __init__(
        self,
        period_ms: int = DEFAULT_PERIOD_MS,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        validate_period(period_ms)
        self._period_ms = int(period_ms)
        self._logger = logger or logging.getLogger("countdown")
        self._task: Optional[asyncio.Task[None]] = None
        self._resumed = asyncio.Event()
        self._resumed.set()
        self._pause_requested = asyncio.Event()
        self._paused_at: Optional[float] = None
        self._paused_total_seconds = 0.0

    @property
    def period_ms(self) -> int:
        return self._period_ms

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def is_paused(self) -> bool:
        return self._paused_at is not None

    async def start(self, duration_ms: int) -> ChannelReceiver[int]:
        """Validate `duration_ms`, spawn the countdown task and return its receiver.

        The receiver yields `duration_ms` first, then the remaining time after
        every period down to zero, and finally the closed marker.
        """
        validate_duration(duration_ms, self._period_ms)
        if self.is_running:
            raise TimerError("Countdown is already running")

        sender, receiver = create_channel(
            int(duration_ms),
            timeout_ms=self._period_ms + DEFAULT_CHANNEL_TIMEOUT_MS,
        )
        self._paused_at = None
        self._paused_total_seconds = 0.0
        self._resumed.set()
        self._pause_requested.clear()
        self._task = asyncio.create_task(
            self._run(sender, int(duration_ms)),
            name="countdown",
        )
        self._logger.debug(
            "Countdown started: duration=%sms period=%sms",
            duration_ms,
            self._period_ms,
        )
        return receiver

    def pause(self) -> bool:
        if not self.is_running or self._paused_at is not None:
            return False
        self._paused_at = asyncio.get_running_loop().time()
        self._resumed.clear()
        self._pause_requested.set()
        self._logger.debug("Countdown paused")
        return True

    def resume(self) -> bool:
        paused_at = self._paused_at
        if paused_at is None:
            return False
        now = asyncio.get_running_loop().time()
        self._paused_total_seconds += max(0.0, now - paused_at)
        self._paused_at = None
        self._pause_requested.clear()
        self._resumed.set()
        self._logger.debug("Countdown resumed")
        return True

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._paused_at = None
        self._pause_requested.clear()
        self._resumed.set()

    async def join(self) -> None:
        """Wait for the countdown task to finish, ignoring cancellation."""
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise

    async def _run(self, sender: ChannelSender[int], duration_ms: int) -> None:
        loop = asyncio.get_running_loop()
        period_seconds = self._period_ms / MILLIS_PER_SECOND
        intervals = calc_intervals(duration_ms, self._period_ms)
        started_at = loop.time()

        try:
            for i in range(1, intervals + 1):
                await self._wait_until(started_at + i * period_seconds)
                sender.send(max(0, duration_ms - i * self._period_ms))
            await sender.close()
        except asyncio.CancelledError:
            sender.abort()
            self._logger.debug("Countdown cancelled")
            raise
        except ChannelTimeout as error:
            sender.abort()
            self._logger.warning("Countdown receiver stopped reading: %s", error)

    async def _wait_until(self, deadline: float) -> None:
        loop = asyncio.get_running_loop()
        while True:
            await self._resumed.wait()
            delay = deadline + self._paused_total_seconds - loop.time()
            if delay <= 0:
                return
            # Sleep until the deadline unless a pause arrives first.
            with contextlib.suppress(TimeoutError):
                await asyncio.wait_for(self._pause_requested.wait(), delay)


def validate_period(period_ms: int) -> None:
    if period_ms <= 0:
        raise ZeroInterval()
    if period_ms > MAX_PERIOD_MS:
        raise IntervalGreaterThanOneHour(period_ms)


def validate_duration(duration_ms: int, period_ms: int) -> None:
    if duration_ms <= 0:
        raise ZeroDuration()
    if duration_ms > MAX_DURATION_MS:
        raise DurationGreaterThanOneDay(duration_ms)
    if period_ms > duration_ms:
        raise DurationSmallerThanPeriod(duration_ms, period_ms)


def calc_intervals(duration_ms: int, period_ms: int) -> int:
    return -(-duration_ms // period_ms)
