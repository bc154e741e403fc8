"""Exception hierarchy raised by countdown timers and update channels."""

from __future__ import annotations


class CountdownError(Exception):
    """Base class for countdown and channel failures."""


class TimerError(CountdownError):
    """Raised when a countdown cannot be created or started."""


class InvalidCountdown(TimerError):
    """Raised when the tick period of a countdown is invalid."""


class ZeroInterval(InvalidCountdown):
    def __init__(self) -> None:
        super().__init__("Interval cannot be zero")


class IntervalGreaterThanOneHour(InvalidCountdown):
    def __init__(self, period_ms: int) -> None:
        super().__init__(f"Interval {period_ms}ms cannot be greater than one hour")
        self.period_ms = period_ms


class InvalidDuration(TimerError):
    """Raised when the requested countdown duration is invalid."""


class ZeroDuration(InvalidDuration):
    def __init__(self) -> None:
        super().__init__("Duration cannot be zero")


class DurationGreaterThanOneDay(InvalidDuration):
    def __init__(self, duration_ms: int) -> None:
        super().__init__(f"Duration {duration_ms}ms cannot be greater than one day")
        self.duration_ms = duration_ms


class DurationSmallerThanPeriod(InvalidDuration):
    def __init__(self, duration_ms: int, period_ms: int) -> None:
        super().__init__(
            f"Duration {duration_ms}ms cannot be smaller than period {period_ms}ms"
        )
        self.duration_ms = duration_ms
        self.period_ms = period_ms


class ChannelError(CountdownError):
    """Raised when a countdown update cannot be delivered."""


class ChannelTimeout(ChannelError):
    def __init__(self, timeout_ms: int) -> None:
        super().__init__(f"timed out after {timeout_ms}ms waiting for update")
        self.timeout_ms = timeout_ms


class ChannelClosed(ChannelError):
    def __init__(self) -> None:
        super().__init__("channel is closed")
