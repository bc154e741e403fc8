"""Limits and defaults shared by countdown timers and channels."""

from __future__ import annotations

MILLIS_PER_SECOND = 1000
HOUR_MS = 60 * 60 * MILLIS_PER_SECOND
DAY_MS = 24 * HOUR_MS

DEFAULT_PERIOD_MS = 1000
DEFAULT_DURATION_MS = 25 * 60 * MILLIS_PER_SECOND
DEFAULT_CHANNEL_TIMEOUT_MS = 1000

MAX_PERIOD_MS = HOUR_MS
MAX_DURATION_MS = DAY_MS
