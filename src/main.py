import argparse
import asyncio
import dataclasses
import logging
import math
import sys
from typing import Optional

from app_config import AppConfig, AppConfigurationError, load_app_config
from app_config_schema import NotifySettings
from countdown import AsyncCountdown, CountdownError, InvalidDuration
from notify import Chime, ChimeService, NotificationError, Notifier
from pomodoro import PhaseDurations, SessionStateStore
from runtime import RuntimeBootstrap, RuntimeEngine, TerminalDisplay, run_countdown
from server import ServerConfigurationError, UIServer, UIServerConfig
from view import FONTS, View, get_font

TIME_IS_UP_MESSAGE = "Time is up."


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
    return logging.getLogger("tomatillo")


def _positive_float(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as error:
        raise argparse.ArgumentTypeError(f"expected a number, got {raw!r}") from error
    if not math.isfinite(value):
        raise argparse.ArgumentTypeError(f"expected a finite number, got {raw!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError("must be greater than zero")
    return value


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as error:
        raise argparse.ArgumentTypeError(f"expected an integer, got {raw!r}") from error
    if value <= 0:
        raise argparse.ArgumentTypeError("must be greater than zero")
    return value


def _non_negative_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as error:
        raise argparse.ArgumentTypeError(f"expected an integer, got {raw!r}") from error
    if value < 0:
        raise argparse.ArgumentTypeError("cannot be negative")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tomatillo",
        description="A tiny pomodoro timer for the terminal.",
    )
    parser.add_argument("--config", help="path to config.toml")
    parser.add_argument("--focus", type=_positive_float, metavar="MIN")
    parser.add_argument("--short-break", type=_positive_float, metavar="MIN")
    parser.add_argument("--long-break", type=_positive_float, metavar="MIN")
    parser.add_argument("--long-break-every", type=_positive_int, metavar="N")
    parser.add_argument(
        "--rounds",
        type=_non_negative_int,
        metavar="N",
        help="stop after N focus phases (0 runs until stopped)",
    )
    parser.add_argument("--session", metavar="LABEL")
    parser.add_argument("--font", choices=sorted(FONTS))
    parser.add_argument("--period-ms", type=_positive_int, metavar="MS")
    parser.add_argument("--state-file", metavar="PATH")
    parser.add_argument("--no-bell", action="store_true")
    parser.add_argument("--chime", action="store_true", help="play a tone at transitions")
    parser.add_argument("--ui", action="store_true", help="serve the browser UI")
    parser.add_argument(
        "--countdown",
        type=_positive_float,
        metavar="SECONDS",
        help="run a single countdown instead of the pomodoro cycle",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def apply_cli_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Return `config` with every explicitly given CLI flag applied."""
    pomodoro_changes = {}
    if args.focus is not None:
        pomodoro_changes["focus_minutes"] = args.focus
    if args.short_break is not None:
        pomodoro_changes["short_break_minutes"] = args.short_break
    if args.long_break is not None:
        pomodoro_changes["long_break_minutes"] = args.long_break
    if args.long_break_every is not None:
        pomodoro_changes["long_break_every"] = args.long_break_every
    if args.rounds is not None:
        pomodoro_changes["rounds"] = args.rounds
    if args.session:
        pomodoro_changes["session"] = args.session
    if args.state_file is not None:
        pomodoro_changes["state_file"] = args.state_file

    notify_changes = {}
    if args.no_bell:
        notify_changes["bell"] = False
    if args.chime:
        notify_changes["chime"] = True

    config = dataclasses.replace(
        config,
        pomodoro=dataclasses.replace(config.pomodoro, **pomodoro_changes),
        notify=dataclasses.replace(config.notify, **notify_changes),
    )
    if args.period_ms is not None:
        config = dataclasses.replace(
            config,
            countdown=dataclasses.replace(config.countdown, period_ms=args.period_ms),
        )
    if args.font is not None:
        config = dataclasses.replace(
            config,
            view=dataclasses.replace(config.view, font=args.font),
        )
    if args.ui:
        config = dataclasses.replace(
            config,
            ui_server=dataclasses.replace(config.ui_server, enabled=True),
        )
    return config


def build_notifier(settings: NotifySettings, logger: logging.Logger) -> Notifier:
    chime_service: Optional[ChimeService] = None
    if settings.chime:
        try:
            # sounddevice needs PortAudio, so it is only loaded on request.
            from notify.output import SoundDeviceAudioOutput

            chime_service = ChimeService(
                Chime(
                    frequency_hz=settings.chime_frequency_hz,
                    duration_seconds=settings.chime_duration_seconds,
                    volume=settings.chime_volume,
                ),
                SoundDeviceAudioOutput(
                    output_device_index=settings.output_device,
                    logger=logging.getLogger("notify.output"),
                ),
                logger=logging.getLogger("notify.chime"),
            )
            logger.info("Chime enabled")
        except (ImportError, OSError, ValueError, NotificationError) as error:
            logger.warning("Chime disabled: %s", error)

    return Notifier(
        bell=settings.bell,
        chime=chime_service,
        logger=logging.getLogger("notify"),
    )


async def run_single_countdown(
    period_ms: int,
    duration_ms: int,
    display: TerminalDisplay,
    notifier: Notifier,
) -> None:
    countdown = AsyncCountdown(period_ms, logger=logging.getLogger("countdown"))
    await run_countdown(countdown, duration_ms, display)
    display.announce(TIME_IS_UP_MESSAGE)
    notifier.notify(TIME_IS_UP_MESSAGE)


def build_ui_server(app_config: AppConfig, logger: logging.Logger) -> Optional[UIServer]:
    if not app_config.ui_server.enabled:
        return None
    try:
        ui_server_config = UIServerConfig.from_settings(app_config.ui_server)
        return UIServer(
            config=ui_server_config,
            logger=logging.getLogger("ui_server"),
        )
    except (ServerConfigurationError, OSError) as error:
        logger.error(f"UI server configuration error: {error}")
        logger.warning("Continuing without UI server.")
        return None


def main(argv: Optional[list[str]] = None) -> int:
    """Run the pomodoro cycle, or a single countdown with `--countdown`."""
    args = parse_args(argv)
    logger = setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        app_config = apply_cli_overrides(load_app_config(args.config), args)
    except AppConfigurationError as error:
        logger.error(f"App configuration error: {error}")
        return 1

    if not args.verbose:
        logging.getLogger().setLevel(app_config.logging.level)
    if app_config.source_file:
        logger.info("Loaded runtime config: %s", app_config.source_file)

    display = TerminalDisplay(View(get_font(app_config.view.font)))
    notifier = build_notifier(app_config.notify, logger)

    if args.countdown is not None:
        try:
            duration_ms = args.countdown * 1000
            if not math.isfinite(duration_ms):
                raise InvalidDuration(f"Countdown of {args.countdown} seconds is too long")
            asyncio.run(
                run_single_countdown(
                    app_config.countdown.period_ms,
                    int(round(duration_ms)),
                    display,
                    notifier,
                )
            )
        except CountdownError as error:
            logger.error(f"Countdown error: {error}")
            return 1
        except KeyboardInterrupt:
            display.finish()
            logger.info("Countdown interrupted.")
        return 0

    settings = app_config.pomodoro
    store = (
        SessionStateStore(settings.state_file, logger=logging.getLogger("pomodoro.store"))
        if settings.state_file
        else None
    )

    ui_server = build_ui_server(app_config, logger)
    if ui_server is not None:
        try:
            logger.info("Starting UI server...")
            ui_server.start(timeout_seconds=5.0)
            logger.info(
                "UI server ready at http://%s:%d",
                ui_server.host,
                ui_server.port,
            )
        except RuntimeError as error:
            logger.error(f"UI server startup error: {error}")
            logger.warning("Continuing without UI server.")
            ui_server.stop(timeout_seconds=1.0)
            ui_server = None

    try:
        engine = RuntimeEngine(
            RuntimeBootstrap(
                logger=logging.getLogger("runtime"),
                display=display,
                durations=PhaseDurations.from_minutes(
                    settings.focus_minutes,
                    settings.short_break_minutes,
                    settings.long_break_minutes,
                ),
                period_ms=app_config.countdown.period_ms,
                long_break_every=settings.long_break_every,
                max_rounds=settings.rounds,
                session=settings.session or None,
                notifier=notifier,
                store=store,
                ui_server=ui_server,
                wait_for_commands=ui_server is not None,
            )
        )
    except (CountdownError, ValueError) as error:
        logger.error(f"Configuration error: {error}")
        if ui_server is not None:
            ui_server.stop(timeout_seconds=5.0)
        return 1

    return engine.run()


if __name__ == "__main__":
    sys.exit(main())
