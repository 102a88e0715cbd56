"""
machine faults raised by the interpreter

FatalMachineFault and its subclasses stop the emulation loop, ResourceFault
is only raised while loading a ROM, DecodeWarning is logged and collected
while execution goes on
"""


class Chip8Error(Exception):
    pass


# ******************** FATAL FAULTS
class FatalMachineFault(Chip8Error):
    pass


class ProgramCounterOutOfRange(FatalMachineFault):
    def __init__(self, pc):
        super().__init__(f"program counter 0x{pc:04x} is outside of the program area")
        self.pc = pc


class StackOverflow(FatalMachineFault):
    def __init__(self, depth):
        super().__init__(f"The CHIP-8 stack can contain at most {depth} addresses. Limit exceeded")
        self.depth = depth


class StackUnderflow(FatalMachineFault):
    def __init__(self):
        super().__init__("return from subroutine with an empty stack")


class MemoryAccessFault(FatalMachineFault):
    def __init__(self, address, reason="out of range"):
        super().__init__(f"memory access at 0x{address:04x}: {reason}")
        self.address = address


class MachineHalted(FatalMachineFault):
    def __init__(self, fault=None):
        super().__init__(f"the machine is halted ({fault})" if fault else "the machine is halted")
        self.fault = fault


# ******************** LOAD TIME FAULTS
class ResourceFault(Chip8Error):
    pass


class RomTooLarge(ResourceFault):
    def __init__(self, size, offset, capacity):
        super().__init__(
            f"a {size} bytes ROM loaded at 0x{offset:04x} does not fit in {capacity} bytes of memory"
        )
        self.size = size
        self.offset = offset


# ******************** DIAGNOSTICS
class DecodeWarning(Warning):
    def __init__(self, opcode, address):
        super().__init__(f"unknown opcode 0x{opcode:04x} at 0x{address:04x}, skipped")
        self.opcode = opcode
        self.address = address
