import unittest

from chip8.display import DisplayBuffer
from chip8.drivers import Beeper, Keyboard, Screen, pygame, square_wave
from chip8.keypad import Keypad


class TestKeyboard(unittest.TestCase):
    def setUp(self):
        self.keypad = Keypad()
        self.keyboard = Keyboard(self.keypad)

    def test_keydown_keyup(self):
        self.assertTrue(self.keyboard.handle(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_q)))
        self.assertTrue(self.keypad[0x4])
        self.keyboard.handle(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_x))
        self.assertEqual(self.keypad.pressed_keys(), [0x0, 0x4])
        self.keyboard.handle(pygame.event.Event(pygame.KEYUP, key=pygame.K_q))
        self.assertEqual(self.keypad.pressed_keys(), [0x0])

    def test_unmapped_key(self):
        self.assertTrue(self.keyboard.handle(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_p)))
        self.assertTrue(self.keypad.untouched())

    def test_quit(self):
        self.assertFalse(self.keyboard.handle(pygame.event.Event(pygame.QUIT)))
        self.assertFalse(self.keyboard.handle(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE)))


class TestScreen(unittest.TestCase):
    def test_render(self):
        surface = pygame.Surface((64 * 2, 32 * 2))
        screen = Screen(s=2, surface=surface)
        display = DisplayBuffer()
        display.toggle_pixel(1, 1)
        screen.render(display)
        self.assertFalse(display.dirty)
        self.assertEqual(surface.get_at((2, 2)), screen.foreground)
        self.assertEqual(surface.get_at((3, 3)), screen.foreground)
        self.assertEqual(surface.get_at((0, 0)), screen.background)
        self.assertEqual(surface.get_at((4, 2)), screen.background)


class TestAudio(unittest.TestCase):
    def test_square_wave(self):
        wave = square_wave(frequency=441, sample_rate=44100, channels=2)
        self.assertEqual(len(wave), 100 * 2)
        self.assertGreater(wave[0], 0)
        self.assertEqual(wave[0], wave[1])
        self.assertLess(wave[-1], 0)

    def test_muted_beeper(self):
        beeper = Beeper(muted=True)
        self.assertIsNone(beeper.sound)
        beeper.start()
        self.assertTrue(beeper.playing)
        beeper.stop()
        self.assertFalse(beeper.playing)


if __name__ == "__main__":
    unittest.main()
