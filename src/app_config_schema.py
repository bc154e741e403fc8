"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

DEFAULT_CONFIG_FILE = "config.toml"
CONFIG_FILE_ENV = "TOMATILLO_CONFIG_FILE"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class CountdownSettings:
    """Tick period of the countdown from `[countdown]`."""
    period_ms: int = 1000


@dataclass(frozen=True)
class PomodoroSettings:
    """Phase lengths and cycle shape from `[pomodoro]`."""
    focus_minutes: float = 25.0
    short_break_minutes: float = 5.0
    long_break_minutes: float = 15.0
    long_break_every: int = 4
    rounds: int = 0
    session: str = ""
    state_file: str = ""


@dataclass(frozen=True)
class ViewSettings:
    """Clock rendering settings from `[view]`."""
    font: str = "none"


@dataclass(frozen=True)
class NotifySettings:
    """Phase transition notification settings from `[notify]`."""
    bell: bool = True
    chime: bool = False
    chime_frequency_hz: float = 880.0
    chime_duration_seconds: float = 0.4
    chime_volume: float = 0.3
    output_device: Optional[int] = None


@dataclass(frozen=True)
class UIServerSettings:
    """Built-in UI server settings from `[ui_server]`."""
    enabled: bool = False
    host: str = "127.0.0.1"
    port: int = 8765
    index_file: str = ""


@dataclass(frozen=True)
class LoggingSettings:
    """Log verbosity from `[logging]`."""
    level: str = "INFO"


@dataclass(frozen=True)
class AppConfig:
    """Complete typed runtime configuration loaded from `config.toml`."""
    countdown: CountdownSettings = field(default_factory=CountdownSettings)
    pomodoro: PomodoroSettings = field(default_factory=PomodoroSettings)
    view: ViewSettings = field(default_factory=ViewSettings)
    notify: NotifySettings = field(default_factory=NotifySettings)
    ui_server: UIServerSettings = field(default_factory=UIServerSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    source_file: str = ""
