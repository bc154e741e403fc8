import importlib
import sys
import types
import unittest
from unittest.mock import patch

import numpy as np

from notify import NotificationError


def _build_sounddevice_stub():
    module = types.ModuleType("sounddevice")
    module.calls = []

    def play(wav, samplerate, device=None):
        module.calls.append(("play", len(wav), samplerate, device))

    def wait():
        module.calls.append(("wait",))

    module.play = play
    module.wait = wait
    return module


class SoundDeviceAudioOutputTests(unittest.TestCase):
    def setUp(self) -> None:
        self.sd = _build_sounddevice_stub()
        patcher = patch.dict(sys.modules, {"sounddevice": self.sd})
        patcher.start()
        self.addCleanup(patcher.stop)
        sys.modules.pop("notify.output", None)
        self.addCleanup(sys.modules.pop, "notify.output", None)
        self.output_module = importlib.import_module("notify.output")

    def test_play_forwards_buffer_to_device(self) -> None:
        output = self.output_module.SoundDeviceAudioOutput(output_device_index=3)

        output.play(np.zeros(100, dtype=np.float32), 8000, blocking=True)

        self.assertEqual([("play", 100, 8000, 3), ("wait",)], self.sd.calls)

    def test_rejects_stereo_and_empty_buffers(self) -> None:
        output = self.output_module.SoundDeviceAudioOutput()

        with self.assertRaises(NotificationError):
            output.play(np.zeros((10, 2), dtype=np.float32), 8000)
        with self.assertRaises(NotificationError):
            output.play(np.zeros(0, dtype=np.float32), 8000)

    def test_device_errors_are_wrapped(self) -> None:
        def broken_play(wav, samplerate, device=None):
            raise RuntimeError("PortAudio unavailable")

        self.sd.play = broken_play
        output = self.output_module.SoundDeviceAudioOutput()

        with self.assertRaises(NotificationError) as context:
            output.play(np.zeros(10, dtype=np.float32), 8000)
        self.assertIn("PortAudio unavailable", str(context.exception))


if __name__ == "__main__":
    unittest.main()
