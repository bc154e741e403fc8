from __future__ import annotations

import asyncio
import logging
import threading
from pathlib import Path
from typing import Callable, Optional
from urllib.parse import urlsplit

from websockets.asyncio.server import ServerConnection, broadcast, serve
from websockets.exceptions import ConnectionClosed
from websockets.datastructures import Headers
from websockets.http11 import Request, Response

from contracts.ui_protocol import (
    EVENT_ERROR,
    EVENT_HELLO,
    EVENT_STATE_UPDATE,
    STATE_IDLE,
)

from .config import HEALTHZ_PATH, INDEX_PATH, ROOT_PATH, UIServerConfig
from .events import CommandParseError, StickyEventStore, make_event, parse_command
from .page import DEFAULT_INDEX_HTML

CommandHandler = Callable[[str, Optional[str]], None]

_HTML = "text/html; charset=utf-8"
_TEXT = "text/plain; charset=utf-8"


class UIServer:
    """Serves the status page and pushes pomodoro events to browsers.

    The server owns a private event loop on a daemon thread. `publish` may be
    called from any thread; the latest event of each sticky type is replayed
    to clients that connect later. Commands sent by clients are handed to the
    registered command handler on the server thread.
    """

    def __init__(
        self,
        config: UIServerConfig,
        logger: Optional[logging.Logger] = None,
        command_handler: Optional[CommandHandler] = None,
    ):
        self._config = config
        self._logger = logger or logging.getLogger("ui_server")
        self._command_handler = command_handler
        self._thread: Optional[threading.Thread] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._stop_async: Optional[asyncio.Event] = None
        self._ready = threading.Event()
        self._startup_error: Optional[Exception] = None
        self._clients: set[ServerConnection] = set()
        self._sticky_events = StickyEventStore()

        index_html = (
            Path(config.index_file).read_bytes() if config.index_file else DEFAULT_INDEX_HTML
        )
        self._routes: dict[str, tuple[bytes, str]] = {
            ROOT_PATH: (index_html, _HTML),
            INDEX_PATH: (index_html, _HTML),
            HEALTHZ_PATH: (b"ok\n", _TEXT),
        }

    @property
    def host(self) -> str:
        return self._config.host

    @property
    def port(self) -> int:
        return self._config.port

    def set_command_handler(self, handler: Optional[CommandHandler]) -> None:
        self._command_handler = handler

    def start(self, timeout_seconds: float = 5.0) -> None:
        """Start serving; raises RuntimeError when the socket cannot be bound."""
        self._thread = threading.Thread(target=self._run, daemon=True, name="ui-server")
        self._thread.start()

        if not self._ready.wait(timeout_seconds):
            raise RuntimeError(f"UI server did not start within {timeout_seconds:.1f}s")
        if self._startup_error is not None:
            raise RuntimeError(f"UI server startup failed: {self._startup_error}")

    def stop(self, timeout_seconds: float = 5.0) -> None:
        if self._thread is None:
            return

        loop, stop_async = self._loop, self._stop_async
        if loop is not None and stop_async is not None:
            loop.call_soon_threadsafe(stop_async.set)

        self._thread.join(timeout=timeout_seconds)
        if self._thread.is_alive():
            self._logger.error("UI server thread did not stop within %.1fs", timeout_seconds)
        self._thread = None

    def publish_state(self, state: str, *, message: Optional[str] = None, **payload) -> None:
        event_payload = {"state": state, **payload}
        if message:
            event_payload["message"] = message
        self.publish(EVENT_STATE_UPDATE, **event_payload)

    def publish(self, event_type: str, **payload) -> None:
        message = make_event(event_type, **payload)
        self._sticky_events.remember(event_type, message)

        loop = self._loop
        if loop is None:
            return
        try:
            loop.call_soon_threadsafe(self._broadcast, message)
        except RuntimeError:
            # Loop already closed.
            return

    def _broadcast(self, message: str) -> None:
        broadcast(self._clients, message)

    def _run(self) -> None:
        try:
            asyncio.run(self._serve())
        except Exception as error:
            self._startup_error = error
            self._logger.error("UI server failed: %s", error, exc_info=True)
        finally:
            self._loop = None
            self._stop_async = None
            self._ready.set()

    async def _serve(self) -> None:
        self._stop_async = asyncio.Event()
        # Closing the server on exit also closes open client connections.
        async with serve(
            self._handler,
            host=self._config.host,
            port=self._config.port,
            process_request=self._process_request,
            logger=self._logger,
        ):
            self._loop = asyncio.get_running_loop()
            self._logger.info(
                "UI server running at http://%s:%d (websocket: %s)",
                self._config.host,
                self._config.port,
                self._config.websocket_path,
            )
            self._ready.set()
            await self._stop_async.wait()

    async def _handler(self, websocket: ServerConnection) -> None:
        if urlsplit(websocket.request.path).path != self._config.websocket_path:
            await websocket.close(code=1008, reason="Invalid websocket path")
            return

        self._clients.add(websocket)
        self._logger.info("Client connected: %s", websocket.remote_address)
        try:
            await websocket.send(
                make_event(EVENT_HELLO, state=STATE_IDLE, message="UI websocket connected")
            )
            for message in self._sticky_events.snapshot():
                await websocket.send(message)
            async for message in websocket:
                self._logger.debug("Received from UI: %s", message)
                await self._handle_command(websocket, message)
        except ConnectionClosed:
            pass
        finally:
            self._clients.discard(websocket)
            self._logger.info("Client disconnected: %s", websocket.remote_address)

    async def _handle_command(self, websocket: ServerConnection, message: str | bytes) -> None:
        try:
            action, session = parse_command(message)
        except CommandParseError as error:
            await websocket.send(make_event(EVENT_ERROR, message=str(error)))
            return

        handler = self._command_handler
        if handler is None:
            await websocket.send(make_event(EVENT_ERROR, message="No runtime attached"))
            return
        handler(action, session)

    def _process_request(self, connection: ServerConnection, request: Request) -> Response | None:
        path = urlsplit(request.path).path
        if path == self._config.websocket_path:
            return None

        route = self._routes.get(path)
        if route is None:
            status, reason, body, content_type = 404, "Not Found", b"not found\n", _TEXT
        else:
            status, reason = 200, "OK"
            body, content_type = route

        headers = Headers()
        headers["Content-Type"] = content_type
        headers["Content-Length"] = str(len(body))
        headers["Cache-Control"] = "no-store"
        return Response(status, reason, headers, body)
