import logging

from .constants import C8_FONTS, FONT_END_ADDRESS, FONT_START_ADDRESS, MEMORY_SIZE, ROM_START_ADDRESS, STACK_SIZE
from .errors import MemoryAccessFault, RomTooLarge, StackOverflow, StackUnderflow

logger = logging.getLogger(__name__)


# ********** WRAPS A LIST TO REPRESENT A STACK WITH A LIMITED SIZE OF 16 ADDRESSES
class Stack:
    def __init__(self, depth=STACK_SIZE):
        self.addr_list = [0] * depth
        self.sp = 0

    def __len__(self):
        return self.sp

    def __str__(self):
        return str([f"0x{addr:04x}" for addr in self.addr_list[:self.sp]])

    def push(self, address):
        if self.sp >= len(self.addr_list):
            raise StackOverflow(len(self.addr_list))
        self.addr_list[self.sp] = address
        self.sp += 1

    def pop(self):
        if self.sp == 0:
            raise StackUnderflow()
        self.sp -= 1
        address = self.addr_list[self.sp]
        self.addr_list[self.sp] = 0
        return address

    def clear(self):
        self.addr_list = [0] * len(self.addr_list)
        self.sp = 0


# ********** WRAPS A BYTEARRAY TO REPRESENT THE MAIN MEMORY WITH A LIMITED SIZE OF 4KB
class Memory:
    def __init__(self, size=MEMORY_SIZE):
        self.inner = bytearray(size)
        self.inner[FONT_START_ADDRESS:FONT_END_ADDRESS] = bytes(C8_FONTS)

    def __len__(self):
        return len(self.inner)

    def __getitem__(self, address):
        self._check(address)
        return self.inner[address]

    def __setitem__(self, address, value):
        self._check(address)
        if FONT_START_ADDRESS <= address < FONT_END_ADDRESS:
            raise MemoryAccessFault(address, "the font area is read only")
        self.inner[address] = value & 0xFF

    def _check(self, address):
        if not 0 <= address < len(self.inner):
            raise MemoryAccessFault(address)

    def read_block(self, address, length):
        """return `length` bytes starting at `address`, every address of the block must be valid"""
        self._check(address)
        self._check(address + length - 1)
        return bytes(self.inner[address:address + length])

    def write_block(self, address, values):
        # validate the whole block first so a failing write leaves memory untouched
        for offset in range(len(values)):
            if not 0 <= address + offset < len(self.inner):
                raise MemoryAccessFault(address + offset)
            if FONT_START_ADDRESS <= address + offset < FONT_END_ADDRESS:
                raise MemoryAccessFault(address + offset, "the font area is read only")
        self.inner[address:address + len(values)] = bytes(v & 0xFF for v in values)

    def load(self, rom, offset=ROM_START_ADDRESS):
        """copy the ROM bytes at `offset`, raise RomTooLarge and leave memory untouched if they do not fit"""
        rom = bytes(rom)
        if offset < FONT_END_ADDRESS or offset + len(rom) > len(self.inner):
            raise RomTooLarge(len(rom), offset, len(self.inner))
        self.inner[offset:offset + len(rom)] = rom
        logger.info("loaded %d bytes ROM at 0x%04x", len(rom), offset)

    def clear(self):
        self.inner[FONT_END_ADDRESS:] = bytes(len(self.inner) - FONT_END_ADDRESS)
