from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Mapping, Optional

from app_config_parser import parse_app_config
from app_config_schema import (
    CONFIG_FILE_ENV,
    DEFAULT_CONFIG_FILE,
    AppConfig,
    AppConfigurationError,
    CountdownSettings,
    LoggingSettings,
    NotifySettings,
    PomodoroSettings,
    UIServerSettings,
    ViewSettings,
)

__all__ = [
    "AppConfig",
    "AppConfigurationError",
    "CountdownSettings",
    "LoggingSettings",
    "NotifySettings",
    "PomodoroSettings",
    "UIServerSettings",
    "ViewSettings",
    "load_app_config",
    "resolve_config_path",
]


def resolve_config_path(
    config_path: str | None = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> tuple[Path, bool]:
    """Return the config path to load and whether it was requested explicitly.

    An explicit argument wins over `TOMATILLO_CONFIG_FILE`, which wins over
    `config.toml` in the working directory.
    """
    env = environ if environ is not None else os.environ
    env_path = env.get(CONFIG_FILE_ENV, "").strip() or None
    raw = config_path or env_path or DEFAULT_CONFIG_FILE
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (Path.cwd() / path).resolve()
    return path, bool(config_path or env_path)


def load_app_config(
    config_path: str | None = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    path, explicit = resolve_config_path(config_path, environ=environ)
    if not path.exists():
        if explicit:
            raise AppConfigurationError(f"Config file not found: {path}")
        return AppConfig()
    if not path.is_file():
        raise AppConfigurationError(f"Config path is not a file: {path}")

    try:
        with open(path, "rb") as fh:
            raw = tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError) as error:
        raise AppConfigurationError(f"Failed to parse config TOML: {error}") from error

    return parse_app_config(raw, base_dir=path.parent, source_file=str(path))
