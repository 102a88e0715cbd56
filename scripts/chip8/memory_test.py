import unittest

from chip8.constants import C8_FONTS, MEMORY_SIZE, ROM_START_ADDRESS
from chip8.errors import MemoryAccessFault, RomTooLarge, StackOverflow, StackUnderflow
from chip8.memory import Memory, Stack


class TestMemory(unittest.TestCase):
    def setUp(self):
        self.mem = Memory()

    def test_fonts_loaded(self):
        self.assertEqual(list(self.mem.read_block(0x000, len(C8_FONTS))),
                         C8_FONTS)

    def test_load_rom(self):
        self.mem.load(b"\x12\x34\xab")
        self.assertEqual(self.mem.read_block(ROM_START_ADDRESS, 3),
                         b"\x12\x34\xab")

    def test_rom_filling_memory(self):
        self.mem.load(bytes([0xAA]) * (MEMORY_SIZE - ROM_START_ADDRESS))
        self.assertEqual(self.mem[MEMORY_SIZE - 1], 0xAA)

    def test_rom_too_large_leaves_memory_untouched(self):
        before = bytes(self.mem.inner)
        with self.assertRaises(RomTooLarge):
            self.mem.load(bytes([0xFF]) * (MEMORY_SIZE - ROM_START_ADDRESS + 1))
        self.assertEqual(bytes(self.mem.inner), before)

    def test_out_of_range_access(self):
        with self.assertRaises(MemoryAccessFault):
            self.mem[MEMORY_SIZE]
        with self.assertRaises(MemoryAccessFault):
            self.mem[-1] = 0
        with self.assertRaises(MemoryAccessFault):
            self.mem.read_block(MEMORY_SIZE - 2, 3)

    def test_font_is_read_only(self):
        with self.assertRaises(MemoryAccessFault):
            self.mem[0x00] = 0x42
        self.assertEqual(self.mem[0x00], C8_FONTS[0])

    def test_failing_block_write_is_atomic(self):
        with self.assertRaises(MemoryAccessFault):
            self.mem.write_block(MEMORY_SIZE - 2, [1, 2, 3])
        self.assertEqual(self.mem.read_block(MEMORY_SIZE - 2, 2), b"\x00\x00")

    def test_clear_keeps_fonts(self):
        self.mem.load(b"\x01\x02")
        self.mem.clear()
        self.assertEqual(self.mem.read_block(ROM_START_ADDRESS, 2), b"\x00\x00")
        self.assertEqual(self.mem[0x00], C8_FONTS[0])


class TestStack(unittest.TestCase):
    def test_push_pop(self):
        stack = Stack()
        stack.push(0x202)
        stack.push(0x304)
        self.assertEqual(len(stack), 2)
        self.assertEqual(stack.pop(), 0x304)
        self.assertEqual(stack.pop(), 0x202)
        self.assertEqual(stack.sp, 0)

    def test_overflow(self):
        stack = Stack()
        for addr in range(16):
            stack.push(0x200 + addr * 2)
        with self.assertRaises(StackOverflow):
            stack.push(0x400)
        self.assertEqual(stack.sp, 16)

    def test_underflow(self):
        with self.assertRaises(StackUnderflow):
            Stack().pop()


if __name__ == "__main__":
    unittest.main()
