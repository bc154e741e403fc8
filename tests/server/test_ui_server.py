import json
import socket
import threading
import unittest
import urllib.error
import urllib.request

from websockets.sync.client import connect

from server import UIServer, UIServerConfig


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


class UIServerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.commands: list[tuple[str, object]] = []
        self.command_received = threading.Event()
        self.server = UIServer(
            UIServerConfig(enabled=True, port=_free_port()),
            command_handler=self._record_command,
        )
        self.server.start(timeout_seconds=5.0)
        self.addCleanup(self.server.stop, 5.0)
        self.base_url = f"http://127.0.0.1:{self.server.port}"
        self.ws_url = f"ws://127.0.0.1:{self.server.port}/ws"

    def _record_command(self, action, session) -> None:
        self.commands.append((action, session))
        self.command_received.set()

    def test_serves_healthz_and_builtin_index(self) -> None:
        with urllib.request.urlopen(f"{self.base_url}/healthz", timeout=5) as response:
            self.assertEqual(200, response.status)
            self.assertEqual(b"ok\n", response.read())

        with urllib.request.urlopen(f"{self.base_url}/", timeout=5) as response:
            self.assertIn(b"<title>tomatillo</title>", response.read())

    def test_unknown_path_returns_404(self) -> None:
        with self.assertRaises(urllib.error.HTTPError) as context:
            urllib.request.urlopen(f"{self.base_url}/missing", timeout=5)
        self.assertEqual(404, context.exception.code)

    def test_new_client_gets_hello_then_sticky_events(self) -> None:
        self.server.publish("countdown", phase="focus", remaining_ms=1000)
        self.server.publish_state("running", message="Focus")

        with connect(self.ws_url, open_timeout=5) as websocket:
            types = [json.loads(websocket.recv(timeout=5))["type"] for _ in range(3)]

        self.assertEqual(["hello", "countdown", "state_update"], types)

    def test_valid_command_is_forwarded(self) -> None:
        with connect(self.ws_url, open_timeout=5) as websocket:
            websocket.recv(timeout=5)
            websocket.send(json.dumps({"type": "command", "action": "pause"}))
            self.assertTrue(self.command_received.wait(5))

        self.assertEqual([("pause", None)], self.commands)

    def test_invalid_command_gets_error_event(self) -> None:
        with connect(self.ws_url, open_timeout=5) as websocket:
            websocket.recv(timeout=5)
            websocket.send(json.dumps({"type": "command", "action": "explode"}))
            reply = json.loads(websocket.recv(timeout=5))

        self.assertEqual("error", reply["type"])
        self.assertEqual([], self.commands)

    def test_connected_client_receives_published_events(self) -> None:
        with connect(self.ws_url, open_timeout=5) as websocket:
            websocket.recv(timeout=5)
            self.server.publish("countdown", phase="focus", remaining_ms=4000)
            event = json.loads(websocket.recv(timeout=5))

        self.assertEqual("countdown", event["type"])
        self.assertEqual(4000, event["remaining_ms"])


class UIServerStartupTests(unittest.TestCase):
    def test_start_fails_when_port_is_taken(self) -> None:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.bind(("127.0.0.1", 0))
            sock.listen()
            server = UIServer(UIServerConfig(enabled=True, port=sock.getsockname()[1]))

            with self.assertRaises(RuntimeError):
                server.start(timeout_seconds=5.0)
            server.stop(timeout_seconds=1.0)


if __name__ == "__main__":
    unittest.main()
