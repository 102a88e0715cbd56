# CHIP-8 INFO
# https://chip-8.github.io/extensions/#chip-8
# https://github.com/mattmikolay/chip-8/wiki/Mastering-CHIP%E2%80%908
import os


# ******************** MEMORY LAYOUT
MEMORY_SIZE = 4096
FONT_START_ADDRESS = 0x000
ROM_START_ADDRESS = 0x200
LAST_INSTRUCTION_ADDRESS = MEMORY_SIZE - 2      # an opcode is two bytes long
STACK_SIZE = 16
REGISTERS_COUNT = 16
KEYS_COUNT = 16

C8_FONTS = [0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
            0x20, 0x60, 0x20, 0x20, 0x70,  # 1
            0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
            0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
            0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
            0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
            0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
            0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
            0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
            0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
            0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
            0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
            0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
            0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
            0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
            0xF0, 0x80, 0xF0, 0x80, 0x80]  # F
FONT_GLYPH_SIZE = 5
FONT_END_ADDRESS = FONT_START_ADDRESS + len(C8_FONTS)


# ******************** DISPLAY
SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
SCALE = 15
BLUE = (80, 69, 155)
LIGHT_BLUE = (136, 126, 203)


# ******************** TIMING
TIMER_HZ = 60               # delay/sound timers always tick at 60Hz
DEFAULT_SPEED = 600         # instructions per second
TONE_HZ = 440
SAMPLE_RATE = 44100


# ******************** RUNTIME CONFIGURATION
DEBUG = True if int(os.getenv('DEBUG', 0)) >= 1 else False
