"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Mapping

from app_config_schema import (
    AppConfig,
    AppConfigurationError,
    CountdownSettings,
    LoggingSettings,
    NotifySettings,
    PomodoroSettings,
    UIServerSettings,
    ViewSettings,
)
from view import FONTS

_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    return AppConfig(
        countdown=_parse_countdown_settings(_section(raw, "countdown")),
        pomodoro=_parse_pomodoro_settings(_section(raw, "pomodoro"), base_dir=base_dir),
        view=_parse_view_settings(_section(raw, "view")),
        notify=_parse_notify_settings(_section(raw, "notify")),
        ui_server=_parse_ui_server_settings(_section(raw, "ui_server"), base_dir=base_dir),
        logging=_parse_logging_settings(_section(raw, "logging")),
        source_file=source_file,
    )


def _parse_countdown_settings(section: Mapping[str, Any]) -> CountdownSettings:
    return CountdownSettings(
        period_ms=_as_positive_int(section.get("period_ms", 1000), "countdown.period_ms"),
    )


def _parse_pomodoro_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> PomodoroSettings:
    state_file = _as_str(section.get("state_file", ""), "pomodoro.state_file")
    rounds = _as_int(section.get("rounds", 0), "pomodoro.rounds")
    if rounds < 0:
        raise AppConfigurationError("pomodoro.rounds cannot be negative.")
    return PomodoroSettings(
        focus_minutes=_as_positive_float(
            section.get("focus_minutes", 25.0),
            "pomodoro.focus_minutes",
        ),
        short_break_minutes=_as_positive_float(
            section.get("short_break_minutes", 5.0),
            "pomodoro.short_break_minutes",
        ),
        long_break_minutes=_as_positive_float(
            section.get("long_break_minutes", 15.0),
            "pomodoro.long_break_minutes",
        ),
        long_break_every=_as_positive_int(
            section.get("long_break_every", 4),
            "pomodoro.long_break_every",
        ),
        rounds=rounds,
        session=_as_str(section.get("session", ""), "pomodoro.session"),
        state_file=_resolve_path(base_dir, state_file),
    )


def _parse_view_settings(section: Mapping[str, Any]) -> ViewSettings:
    return ViewSettings(font=_as_font_name(section.get("font", "none"), "view.font"))


def _parse_notify_settings(section: Mapping[str, Any]) -> NotifySettings:
    volume = _as_positive_float(section.get("chime_volume", 0.3), "notify.chime_volume")
    if volume > 1.0:
        raise AppConfigurationError("notify.chime_volume must be in (0, 1].")
    return NotifySettings(
        bell=_as_bool(section.get("bell", True), "notify.bell"),
        chime=_as_bool(section.get("chime", False), "notify.chime"),
        chime_frequency_hz=_as_positive_float(
            section.get("chime_frequency_hz", 880.0),
            "notify.chime_frequency_hz",
        ),
        chime_duration_seconds=_as_positive_float(
            section.get("chime_duration_seconds", 0.4),
            "notify.chime_duration_seconds",
        ),
        chime_volume=volume,
        output_device=(
            _as_int(section.get("output_device"), "notify.output_device")
            if "output_device" in section
            else None
        ),
    )


def _parse_ui_server_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> UIServerSettings:
    index_file = _as_str(section.get("index_file", ""), "ui_server.index_file")
    return UIServerSettings(
        enabled=_as_bool(section.get("enabled", False), "ui_server.enabled"),
        host=_as_str(section.get("host", "127.0.0.1"), "ui_server.host"),
        port=_as_int(section.get("port", 8765), "ui_server.port"),
        index_file=_resolve_path(base_dir, index_file),
    )


def _parse_logging_settings(section: Mapping[str, Any]) -> LoggingSettings:
    level = _as_str(section.get("level", "INFO"), "logging.level").upper()
    if level not in _ALLOWED_LOG_LEVELS:
        allowed = ", ".join(sorted(_ALLOWED_LOG_LEVELS))
        raise AppConfigurationError(f"logging.level must be one of: {allowed}.")
    return LoggingSettings(level=level)


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_positive_int(value: Any, field: str) -> int:
    number = _as_int(value, field)
    if number <= 0:
        raise AppConfigurationError(f"{field} must be greater than zero.")
    return number


def _as_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be a float.")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be a float.") from error
    raise AppConfigurationError(f"{field} must be a float.")


def _as_positive_float(value: Any, field: str) -> float:
    number = _as_float(value, field)
    if not math.isfinite(number):
        raise AppConfigurationError(f"{field} must be a finite number.")
    if number <= 0:
        raise AppConfigurationError(f"{field} must be greater than zero.")
    return number


def _as_font_name(value: Any, field: str) -> str:
    name = _as_str(value, field).lower().replace("-", "_") or "none"
    if name not in FONTS:
        allowed = ", ".join(sorted(FONTS))
        raise AppConfigurationError(f"{field} must be one of: {allowed}.")
    return name


def _resolve_path(base_dir: Path, raw: str) -> str:
    if not raw:
        return ""
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)
