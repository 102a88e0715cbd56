import unittest

from chip8.display import DisplayBuffer


class TestDisplayBuffer(unittest.TestCase):
    def setUp(self):
        self.display = DisplayBuffer()

    def test_starts_blank_and_clean(self):
        self.assertFalse(any(self.display.buffer))
        self.assertFalse(self.display.dirty)

    def test_toggle(self):
        self.assertFalse(self.display.toggle_pixel(3, 4))
        self.assertTrue(self.display[3, 4])
        self.assertTrue(self.display.dirty)
        # turning the pixel off again is a collision
        self.assertTrue(self.display.toggle_pixel(3, 4))
        self.assertFalse(self.display.read_pixel(3, 4))

    def test_wrap_around(self):
        self.display.toggle_pixel(64 + 1, 32 + 2)
        self.assertTrue(self.display.read_pixel(1, 2))
        self.assertTrue(self.display.read_pixel(-63, -30))

    def test_clear(self):
        self.display.toggle_pixel(0, 0)
        self.display.mark_clean()
        self.display.clear()
        self.assertFalse(any(self.display.buffer))
        self.assertTrue(self.display.dirty)

    def test_rows(self):
        self.display.toggle_pixel(63, 31)
        rows = self.display.rows()
        self.assertEqual(len(rows), 32)
        self.assertEqual(len(rows[0]), 64)
        self.assertTrue(rows[31][63])
        self.assertEqual(sum(map(sum, rows)), 1)


if __name__ == "__main__":
    unittest.main()
