"""Runtime orchestration: one countdown per pomodoro phase plus user commands."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from contracts.ui_protocol import (
    STATE_FINISHED,
    STATE_IDLE,
    STATE_PAUSED,
    STATE_RUNNING,
)
from countdown import AsyncCountdown, ChannelTimeout, Countdown, DEFAULT_PERIOD_MS
from countdown.timer import validate_duration, validate_period
from pomodoro import (
    PhaseDurations,
    PomodoroCycle,
    PomodoroSnapshot,
    SessionState,
    SessionStateError,
    SessionStateStore,
)
from pomodoro.constants import (
    ACTION_CONTINUE,
    ACTION_PAUSE,
    ACTION_START,
    ACTION_STOP,
    ACTION_SYNC,
    DEFAULT_LONG_BREAK_EVERY,
    PHASE_COMPLETED,
    REASON_STARTUP,
)
from server import UIServer

from .display import TerminalDisplay
from .messages import action_message, rejection_message, status_message
from .ticks import NotifierLike, TickDependencies, TickProcessor
from .ui import RuntimeUIPublisher


class DisplayLike(Protocol):
    def show(self, remaining_ms: int) -> None:
        ...


async def run_countdown(countdown: Countdown, duration_ms: int, display: DisplayLike) -> int:
    """Render every value of a single countdown until its channel closes.

    Returns the last remaining time that was received.
    """
    receiver = await countdown.start(duration_ms)
    remaining = duration_ms
    while True:
        response = await receiver.recv()
        if response.closed:
            return remaining
        remaining = response.value
        display.show(remaining)


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    display: TerminalDisplay
    durations: PhaseDurations = PhaseDurations()
    period_ms: int = DEFAULT_PERIOD_MS
    long_break_every: int = DEFAULT_LONG_BREAK_EVERY
    max_rounds: int = 0
    session: Optional[str] = None
    notifier: Optional[NotifierLike] = None
    store: Optional[SessionStateStore] = None
    ui_server: Optional[UIServer] = None
    wait_for_commands: bool = False


class RuntimeEngine:
    """Runs the pomodoro cycle phase by phase and applies user commands."""
    def __init__(self, bootstrap: RuntimeBootstrap):
        validate_period(bootstrap.period_ms)
        durations = bootstrap.durations
        for duration_ms in (
            durations.focus_ms,
            durations.short_break_ms,
            durations.long_break_ms,
        ):
            validate_duration(duration_ms, bootstrap.period_ms)

        self._bootstrap = bootstrap
        self._logger = bootstrap.logger
        self._display = bootstrap.display
        self._ui = RuntimeUIPublisher(bootstrap.ui_server)

        restored = self._restore_state()
        self._cycle = PomodoroCycle(
            durations=durations,
            long_break_every=bootstrap.long_break_every,
            max_rounds=bootstrap.max_rounds,
            completed_focus=restored.completed_focus if restored else 0,
            tally_date=restored.date if restored else None,
            session=bootstrap.session or (restored.session if restored else None),
            logger=logging.getLogger("pomodoro"),
        )
        self._tick_processor = TickProcessor(
            TickDependencies(
                display=self._display,
                notifier=bootstrap.notifier,
                store=bootstrap.store,
                logger=self._logger,
                ui=self._ui,
                publish_idle_state=self._publish_idle_state,
            )
        )

        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._commands: Optional[asyncio.Queue[tuple[str, Optional[str]]]] = None
        self._countdown: Optional[AsyncCountdown] = None

        if bootstrap.ui_server is not None:
            bootstrap.ui_server.set_command_handler(self.submit_command)

    @property
    def cycle(self) -> PomodoroCycle:
        return self._cycle

    def submit_command(self, action: str, session: Optional[str] = None) -> bool:
        """Queue a user action from any thread. Returns False when not running."""
        loop = self._loop
        commands = self._commands
        if loop is None or commands is None or loop.is_closed():
            self._logger.warning("Ignoring command %r: runtime is not running", action)
            return False
        loop.call_soon_threadsafe(commands.put_nowait, (action, session))
        return True

    def run(self) -> int:
        try:
            return asyncio.run(self.run_async())
        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            return 1
        finally:
            self._shutdown()

    async def run_async(self) -> int:
        self._loop = asyncio.get_running_loop()
        self._commands = asyncio.Queue()
        try:
            self._publish_startup_sync()
            self._apply_command(ACTION_START, None)

            while True:
                snapshot = self._cycle.snapshot()
                if snapshot.is_active:
                    await self._run_phase(snapshot)
                    continue
                if not self._bootstrap.wait_for_commands:
                    break
                action, session = await self._commands.get()
                self._apply_command(action, session)
        finally:
            self._loop = None
            self._commands = None
            self._display.finish()

        self._logger.info(status_message(self._cycle.snapshot()))
        return 0

    def _restore_state(self) -> Optional[SessionState]:
        store = self._bootstrap.store
        if store is None:
            return None
        try:
            state = store.load()
        except SessionStateError as error:
            self._logger.warning("Starting with a fresh tally: %s", error)
            return None
        if state is not None:
            self._logger.info(
                "Restored %s completed pomodoros from %s",
                state.completed_focus,
                store.path,
            )
        return state

    async def _run_phase(self, snapshot: PomodoroSnapshot) -> None:
        assert self._commands is not None
        period_ms = self._bootstrap.period_ms
        countdown = AsyncCountdown(period_ms, logger=logging.getLogger("countdown"))
        receiver = await countdown.start(max(snapshot.remaining_ms, period_ms))
        self._countdown = countdown

        recv_task: Optional[asyncio.Future] = None
        command_task: Optional[asyncio.Future] = None
        last_ms = snapshot.remaining_ms
        try:
            while True:
                if recv_task is None:
                    recv_task = asyncio.ensure_future(receiver.recv())
                if command_task is None:
                    command_task = asyncio.ensure_future(self._commands.get())

                done, _ = await asyncio.wait(
                    {recv_task, command_task},
                    return_when=asyncio.FIRST_COMPLETED,
                )

                if command_task in done:
                    action, session = command_task.result()
                    command_task = None
                    if self._apply_command(action, session):
                        return

                if recv_task in done:
                    finished, recv_task = recv_task, None
                    try:
                        response = finished.result()
                    except ChannelTimeout as error:
                        if countdown.is_paused:
                            continue
                        self._logger.warning("Countdown stalled, restarting phase: %s", error)
                        return
                    if response.closed:
                        break
                    last_ms = response.value
                    self._tick_processor.handle_tick(self._cycle.record_remaining(last_ms))
        finally:
            pending = [task for task in (recv_task, command_task) if task is not None]
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
            countdown.cancel()
            await countdown.join()
            self._countdown = None

        if last_ms > 0:
            self._logger.warning("Countdown ended early at %sms, restarting phase", last_ms)
            return

        transition = self._cycle.complete_phase()
        if transition is not None:
            self._tick_processor.handle_transition(transition)

    def _apply_command(self, action: str, session: Optional[str]) -> bool:
        """Apply a user action; True means the running countdown must be replaced."""
        result = self._cycle.apply(action, session=session)
        if result.accepted:
            message = action_message(action, result.snapshot)
        else:
            message = rejection_message(action, result.reason)
            self._logger.info("Rejected %s: %s", action, result.reason)

        self._display.announce(message)
        self._ui.publish_pomodoro_update(
            result.snapshot,
            action=action,
            accepted=result.accepted,
            reason=result.reason,
            message=message,
        )
        if not result.accepted:
            return False

        countdown = self._countdown
        if action == ACTION_PAUSE:
            if countdown is not None:
                countdown.pause()
            self._ui.publish_state(STATE_PAUSED, message=message)
            return False
        if action == ACTION_CONTINUE:
            if countdown is not None:
                countdown.resume()
            self._ui.publish_state(STATE_RUNNING, message=message)
            return False

        if action == ACTION_STOP:
            self._publish_idle_state()
        else:
            self._ui.publish_state(STATE_RUNNING, message=message)
        return True

    def _publish_idle_state(self) -> None:
        snapshot = self._cycle.snapshot()
        state = STATE_FINISHED if snapshot.phase == PHASE_COMPLETED else STATE_IDLE
        self._ui.publish_state(state, message=status_message(snapshot))

    def _publish_startup_sync(self) -> None:
        self._ui.publish_pomodoro_update(
            self._cycle.snapshot(),
            action=ACTION_SYNC,
            accepted=True,
            reason=REASON_STARTUP,
        )

    def _shutdown(self) -> None:
        ui_server = self._bootstrap.ui_server
        if ui_server is not None:
            self._logger.info("Stopping UI server...")
            try:
                ui_server.stop(timeout_seconds=5.0)
            except Exception as error:
                self._logger.error("Error stopping UI server: %s", error, exc_info=True)
