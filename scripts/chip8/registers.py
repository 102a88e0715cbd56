from .constants import REGISTERS_COUNT, ROM_START_ADDRESS


class Registers:
    """V0-VF variable registers plus the I (index) and PC registers"""
    def __init__(self):
        self.v = [0] * REGISTERS_COUNT
        self.index = 0      # specify where the sprites reside in memory
        self.pc = ROM_START_ADDRESS

    def __str__(self):
        v_regs = " ".join(f"V{i:X}:{value:02x}" for i, value in enumerate(self.v))
        return f"PC_REGISTER:0x{self.pc:04x} | IDX_REGISTER:0x{self.index:04x} | VARIABLE_REGISTERS:{v_regs}"

    def set_v(self, x, value):
        """store value in Vx keeping only its lowest 8 bits"""
        self.v[x] = value & 0xFF

    def set_index(self, value):
        self.index = value & 0xFFFF

    def reset(self):
        self.v = [0] * REGISTERS_COUNT
        self.index = 0
        self.pc = ROM_START_ADDRESS
