"""Synthesized notification tone."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Chime:
    """Short sine tone with linear fade-in and fade-out."""
    frequency_hz: float = 880.0
    duration_seconds: float = 0.4
    sample_rate_hz: int = 22050
    volume: float = 0.3
    fade_seconds: float = 0.02

    def __post_init__(self) -> None:
        if self.frequency_hz <= 0:
            raise ValueError("frequency_hz must be greater than zero")
        if self.duration_seconds <= 0:
            raise ValueError("duration_seconds must be greater than zero")
        if self.sample_rate_hz <= 0:
            raise ValueError("sample_rate_hz must be greater than zero")
        if not 0.0 < self.volume <= 1.0:
            raise ValueError("volume must be in (0, 1]")

    def render(self) -> np.ndarray:
        """Return the tone as mono float32 PCM in [-volume, volume]."""
        samples = max(1, int(round(self.duration_seconds * self.sample_rate_hz)))
        t = np.arange(samples, dtype=np.float64) / self.sample_rate_hz
        wave = np.sin(2.0 * np.pi * self.frequency_hz * t)

        fade = min(samples // 2, int(self.fade_seconds * self.sample_rate_hz))
        if fade > 0:
            ramp = np.linspace(0.0, 1.0, fade, endpoint=False)
            wave[:fade] *= ramp
            wave[-fade:] *= ramp[::-1]

        return (wave * self.volume).astype(np.float32)
