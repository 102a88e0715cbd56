import threading

from .constants import KEYS_COUNT


class Keypad:
    """
    state of the 16 keys of the hex keypad (0x0-0xF)

    the input adapter writes it, possibly from another thread, the CPU reads a
    whole snapshot once per cycle
    """
    def __init__(self):
        self._lock = threading.Lock()
        self._pressed = [False] * KEYS_COUNT

    def __str__(self):
        return " ".join(f"{key:X}" for key in self.pressed_keys()) or "-"

    def __getitem__(self, key):
        with self._lock:
            return self._pressed[key & 0xF]

    def __setitem__(self, key, value):
        with self._lock:
            self._pressed[key & 0xF] = bool(value)

    def press(self, key):
        self[key] = True

    def release(self, key):
        self[key] = False

    def clear(self):
        with self._lock:
            self._pressed = [False] * KEYS_COUNT

    def snapshot(self):
        """consistent copy of all the keys states"""
        with self._lock:
            return tuple(self._pressed)

    def pressed_keys(self):
        return [key for key, pressed in enumerate(self.snapshot()) if pressed]

    def untouched(self):
        return not any(self.snapshot())

    def first(self):
        """lowest pressed key, None if no key is pressed"""
        pressed = self.pressed_keys()
        return pressed[0] if pressed else None
