import tempfile
import unittest
from pathlib import Path

from app_config_schema import UIServerSettings
from server.config import ServerConfigurationError, UIServerConfig


class UIServerConfigTests(unittest.TestCase):
    def test_defaults_are_disabled_on_localhost(self) -> None:
        config = UIServerConfig()

        self.assertFalse(config.enabled)
        self.assertEqual("127.0.0.1", config.host)
        self.assertEqual(8765, config.port)
        self.assertEqual("/ws", config.websocket_path)

    def test_from_settings_without_index_file_uses_builtin_page(self) -> None:
        settings = UIServerSettings(enabled=True, host="0.0.0.0", port=9000, index_file="")

        config = UIServerConfig.from_settings(settings)

        self.assertTrue(config.enabled)
        self.assertEqual("0.0.0.0", config.host)
        self.assertEqual(9000, config.port)
        self.assertEqual("", config.index_file)

    def test_from_settings_prefers_explicit_index_file(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            custom = Path(temp_dir) / "index.html"
            custom.write_text("<html></html>", encoding="utf-8")

            settings = UIServerSettings(enabled=True, index_file=str(custom))

            config = UIServerConfig.from_settings(settings)
            self.assertEqual(str(custom), config.index_file)

    def test_rejects_missing_index_file_when_enabled(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            missing = Path(temp_dir) / "missing.html"

            with self.assertRaises(ServerConfigurationError):
                UIServerConfig(enabled=True, index_file=str(missing))

            # Disabled servers never touch the file system.
            UIServerConfig(enabled=False, index_file=str(missing))

    def test_rejects_out_of_range_port(self) -> None:
        with self.assertRaises(ServerConfigurationError):
            UIServerConfig(port=0)
        with self.assertRaises(ServerConfigurationError):
            UIServerConfig(port=65536)

    def test_rejects_blank_host(self) -> None:
        with self.assertRaises(ServerConfigurationError):
            UIServerConfig(host="  ")


if __name__ == "__main__":
    unittest.main()
