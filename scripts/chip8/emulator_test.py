import os
import tempfile
import unittest

from chip8.constants import DEFAULT_SPEED
from chip8.emulator import get_args, main, read_rom


class TestEntryPoint(unittest.TestCase):
    def setUp(self):
        os.environ["SDL_VIDEODRIVER"] = "dummy"
        os.environ["SDL_AUDIODRIVER"] = "dummy"
        fd, self.path = tempfile.mkstemp(suffix=".ch8")
        os.close(fd)

    def tearDown(self):
        os.remove(self.path)

    def write_rom(self, data):
        with open(self.path, mode='wb') as f:
            f.write(data)

    def test_args(self):
        _, args = get_args(["-f", "pong.ch8"])
        self.assertEqual(args.file, "pong.ch8")
        self.assertEqual(args.speed, DEFAULT_SPEED)
        self.assertFalse(args.mute)

    def test_read_rom(self):
        self.write_rom(b"\x00\xe0")
        self.assertEqual(read_rom(self.path), b"\x00\xe0")

    def test_missing_rom(self):
        with self.assertRaises(SystemExit):
            main(["-f", self.path + ".missing"])

    def test_crash_dumps_state(self):
        self.write_rom(b"\x00\xee")      # return with an empty stack
        with self.assertRaises(SystemExit) as cm:
            main(["-f", self.path, "--mute"])
        self.assertIn("CRASHED", str(cm.exception.code))
        self.assertIn("PC_REGISTER", str(cm.exception.code))

    def test_running_off_memory_ends_cleanly(self):
        self.write_rom(b"\x1f\xfe")      # jump to the last word, then PC moves past the end
        with self.assertLogs("chip8.emulator", level="INFO") as logs:
            self.assertEqual(main(["-f", self.path, "--mute"]), 0)
        self.assertIn("program ended at 0x1000", logs.output[-1])


if __name__ == "__main__":
    unittest.main()
