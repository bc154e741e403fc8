"""Asynchronous countdown timer with an acknowledged update channel."""

from .channel import (
    CLOSED,
    ChannelReceiver,
    ChannelSender,
    Response,
    create_channel,
)
from .constants import DEFAULT_DURATION_MS, DEFAULT_PERIOD_MS
from .errors import (
    ChannelClosed,
    ChannelError,
    ChannelTimeout,
    CountdownError,
    DurationGreaterThanOneDay,
    DurationSmallerThanPeriod,
    IntervalGreaterThanOneHour,
    InvalidCountdown,
    InvalidDuration,
    TimerError,
    ZeroDuration,
    ZeroInterval,
)
from .timer import AsyncCountdown, Countdown

__all__ = [
    "CLOSED",
    "AsyncCountdown",
    "ChannelClosed",
    "ChannelError",
    "ChannelReceiver",
    "ChannelSender",
    "ChannelTimeout",
    "Countdown",
    "CountdownError",
    "DEFAULT_DURATION_MS",
    "DEFAULT_PERIOD_MS",
    "DurationGreaterThanOneDay",
    "DurationSmallerThanPeriod",
    "IntervalGreaterThanOneHour",
    "InvalidCountdown",
    "InvalidDuration",
    "Response",
    "TimerError",
    "ZeroDuration",
    "ZeroInterval",
    "create_channel",
]
