"""Acknowledged latest-value channel between a countdown task and its reader."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from .constants import DEFAULT_CHANNEL_TIMEOUT_MS, MILLIS_PER_SECOND
from .errors import ChannelClosed, ChannelTimeout

T = TypeVar("T")


@dataclass(frozen=True)
class Response(Generic[T]):
    """Either the latest value of a channel or the closed marker."""
    value: Optional[T] = None
    closed: bool = False

    @classmethod
    def of(cls, value: T) -> "Response[T]":
        return cls(value=value)


CLOSED: Response[Any] = Response(closed=True)


class _Channel(Generic[T]):
    def __init__(self, initial: T, *, timeout_ms: int):
        if timeout_ms <= 0:
            raise ValueError("timeout_ms must be greater than zero")

        self.timeout_ms = timeout_ms
        self.value = initial
        self.closed = False
        # The initial value counts as an unread update.
        self.updated = asyncio.Event()
        self.updated.set()
        self.acked = asyncio.Event()

    async def wait(self, event: asyncio.Event) -> None:
        try:
            await asyncio.wait_for(event.wait(), self.timeout_ms / MILLIS_PER_SECOND)
        except asyncio.TimeoutError as error:
            raise ChannelTimeout(self.timeout_ms) from error


class ChannelSender(Generic[T]):
    """Writing half: overwrites the slot and closes once the reader caught up."""

    def __init__(self, channel: _Channel[T]):
        self._channel = channel

    @property
    def closed(self) -> bool:
        return self._channel.closed

    def send(self, value: T) -> None:
        chan = self._channel
        if chan.closed:
            raise ChannelClosed()

        chan.value = value
        chan.acked.clear()
        chan.updated.set()

    async def close(self) -> None:
        """Close after the receiver acknowledged the latest value."""
        chan = self._channel
        if chan.closed:
            return

        await chan.wait(chan.acked)
        chan.closed = True
        chan.updated.set()

    def abort(self) -> None:
        """Close immediately, dropping any unread value."""
        chan = self._channel
        chan.closed = True
        chan.updated.set()


class ChannelReceiver(Generic[T]):
    """Reading half: waits for updates and acknowledges each one."""

    def __init__(self, channel: _Channel[T]):
        self._channel = channel

    @property
    def closed(self) -> bool:
        return self._channel.closed

    async def recv(self) -> Response[T]:
        chan = self._channel
        if chan.closed:
            return CLOSED

        await chan.wait(chan.updated)
        if chan.closed:
            return CLOSED

        value = chan.value
        chan.updated.clear()
        chan.acked.set()
        return Response.of(value)


def create_channel(
    initial: T,
    *,
    timeout_ms: int = DEFAULT_CHANNEL_TIMEOUT_MS,
) -> tuple[ChannelSender[T], ChannelReceiver[T]]:
    """Create a connected sender/receiver pair seeded with `initial`."""
    channel = _Channel(initial, timeout_ms=timeout_ms)
    return ChannelSender(channel), ChannelReceiver(channel)
