"""CHIP-8 interpreter core, the pygame front end lives in chip8.emulator"""
from .cpu import Chip8
from .display import DisplayBuffer
from .errors import (
    Chip8Error,
    DecodeWarning,
    FatalMachineFault,
    MachineHalted,
    MemoryAccessFault,
    ProgramCounterOutOfRange,
    ResourceFault,
    RomTooLarge,
    StackOverflow,
    StackUnderflow,
)
from .instructions import Instruction, Op, decode
from .keypad import Keypad
from .memory import Memory, Stack
from .registers import Registers
from .timers import Timers

__version__ = "0.1.0"
