# CHIP-8 INFO
# https://chip-8.github.io/extensions/#chip-8
# https://chip-8.github.io/links/
#
# COMPATIBILITY QUIRKS TABLE
# https://games.gulrak.net/cadmium/chip8-opcode-table.html#quirk6
#
# TEST SUITE
# https://github.com/Timendus/chip8-test-suite
import logging
import random
from collections import Counter
from functools import wraps

from .constants import FONT_GLYPH_SIZE, FONT_START_ADDRESS, LAST_INSTRUCTION_ADDRESS, ROM_START_ADDRESS
from .display import DisplayBuffer
from .errors import DecodeWarning, FatalMachineFault, MachineHalted, ProgramCounterOutOfRange
from .instructions import Op, decode
from .keypad import Keypad
from .memory import Memory, Stack
from .registers import Registers
from .timers import Timers

logger = logging.getLogger(__name__)


# ******************** UTILITIES SECTION
def asm(msg):
    """decorator to log the ASM of the instruction being executed"""
    def decorator(fn):
        @wraps(fn)
        def wrapper_fn(*args, **kwargs):
            mem_addr = args[0].pc - 0x2     # args[0] is self, the PC already points to the next instruction
            vals = fn(*args, **kwargs)      # use the locals() values of each decorated function in the message
            if logger.isEnabledFor(logging.DEBUG):
                vals['mem_addr'] = mem_addr
                logger.debug(msg.format(**vals))
        return wrapper_fn
    return decorator


# ******************** CPU SECTION
class Chip8:
    def __init__(self, rng=None, on_sound_start=None, on_sound_stop=None):
        self.mem = Memory()
        self.stack = Stack()
        self.regs = Registers()
        self.timers = Timers(on_sound_start, on_sound_stop)
        self.display = DisplayBuffer()
        self.keypad = Keypad()
        self.rng = rng or random.Random()
        self.halted = False
        self.fault = None
        self.warnings = Counter()    # (opcode, address) -> times executed
        self.cycles = 0
        self._keys = self.keypad.snapshot()
        self.instructions = {
            Op.CLS: self._clear_screen,
            Op.RET: self._return,
            Op.JP: self._jump,
            Op.CALL: self._call_addr,
            Op.SE_VX_KK: self._skip_if_eq,
            Op.SNE_VX_KK: self._skip_if_not_eq,
            Op.SE_VX_VY: self._skip_if_eq_regs,
            Op.LD_VX_KK: self._set_vk,
            Op.ADD_VX_KK: self._add_to_vk,
            Op.LD_VX_VY: self._set_vx_to_vy,
            Op.OR: self._set_vx_or_vy,
            Op.AND: self._set_vx_and_vy,
            Op.XOR: self._set_vx_xor_vy,
            Op.ADD_VX_VY: self._add_vx_vy,
            Op.SUB: self._sub_vx_vy,
            Op.SHR: self._shr,
            Op.SUBN: self._subn_vx_vy,
            Op.SHL: self._shl,
            Op.SNE_VX_VY: self._skip_if_not_eq_regs,
            Op.LD_I: self._set_idx,
            Op.JP_V0: self._jump_plus,
            Op.RND: self._random_byte_and,
            Op.DRW: self._to_screen,
            Op.SKP: self._skip_if_pressed,
            Op.SKNP: self._skip_if_not_pressed,
            Op.LD_VX_DT: self._set_vx_dt,
            Op.LD_VX_K: self._wait_keypress,
            Op.LD_DT_VX: self._set_dt_vx,
            Op.LD_ST_VX: self._set_st,
            Op.ADD_I_VX: self._add_to_idx,
            Op.LD_F_VX: self._select_char,
            Op.LD_B_VX: self._bcd_repr,
            Op.LD_I_VX: self._store_vregs,
            Op.LD_VX_I: self._load_vregs,
            Op.UNKNOWN: self._unknown,
        }

    def __str__(self):
        registers = str(self.regs)
        stack = f"STACK:{self.stack} | SP:{self.stack.sp}"
        timers = f"TIMERS:{self.timers}"
        flags = f"HALTED:{self.halted} | DIRTY:{self.display.dirty} | KEYPAD:{self.keypad} | DECODE_WARNINGS:{sum(self.warnings.values())}"
        return f"{registers}\n{stack}\n{timers}\n{flags}"

    # shortcuts to the most used registers
    @property
    def pc(self):
        return self.regs.pc

    @pc.setter
    def pc(self, value):
        self.regs.pc = value

    @property
    def v(self):
        return self.regs.v

    @property
    def idx(self):
        return self.regs.index

    def load_rom(self, rom, offset=ROM_START_ADDRESS):
        """copy the ROM bytes in memory starting at offset and point the PC to its first instruction"""
        self.mem.load(rom, offset)
        self.pc = offset

    def reset(self):
        """bring the machine back to its power-on state, the loaded ROM is wiped out"""
        self.mem.clear()
        self.stack.clear()
        self.regs.reset()
        self.timers.reset()
        self.display.clear()
        self.display.mark_clean()
        self.keypad.clear()
        self.halted = False
        self.fault = None
        self.warnings = Counter()
        self.cycles = 0

    # ******************** FETCH / DECODE / EXECUTE
    def fetch(self):
        """read the two bytes opcode at PC (big-endian) and move PC to the next instruction"""
        if not ROM_START_ADDRESS <= self.pc <= LAST_INSTRUCTION_ADDRESS:
            raise ProgramCounterOutOfRange(self.pc)
        opcode = self.mem[self.pc] << 8 | self.mem[self.pc + 1]
        self._goto_next_instruction()
        return opcode

    def cycle(self):
        """emulate one machine cycle: read the keypad, fetch, decode and execute one opcode"""
        if self.halted:
            raise MachineHalted(self.fault)
        try:
            self._keys = self.keypad.snapshot()
            instruction = decode(self.fetch())
            self.instructions[instruction.op](instruction)
        except FatalMachineFault as fault:
            self.halted = True
            self.fault = fault
            if isinstance(fault, ProgramCounterOutOfRange):
                logger.info("machine halted: %s", fault)
            else:
                logger.error("machine halted: %s", fault)
            raise
        self.cycles += 1

    def tick_timers(self):
        """count down delay and sound timers, to be called at 60Hz"""
        self.timers.tick()

    def frame(self, cycles):
        """run a 60Hz frame worth of cycles and then tick the timers once"""
        for _ in range(cycles):
            self.cycle()
        self.tick_timers()

    def _goto_next_instruction(self):
        self.pc += 0x2

    # ******************** INSTRUCTIONS
    def _unknown(self, ins):
        """count the unknown opcode, only its first execution from a given address is logged"""
        key = ins.opcode, self.pc - 0x2
        if key not in self.warnings:
            logger.warning("%s", DecodeWarning(*key))
        self.warnings[key] += 1

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: CLS")
    def _clear_screen(self, ins):
        self.display.clear()
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: RET")
    def _return(self, ins):
        """return from a subroutine"""
        self.pc = self.stack.pop()
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: JP 0x{address:03x}")
    def _jump(self, ins):
        address = ins.nnn
        self.pc = address
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: CALL 0x{address:03x}")
    def _call_addr(self, ins):
        address = ins.nnn
        self.stack.push(self.pc)
        self.pc = address
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SE V{x:X}, {comparison_value}")
    def _skip_if_eq(self, ins):
        x, comparison_value = ins.x, ins.kk
        if self.v[x] == comparison_value:
            self._goto_next_instruction()
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SNE V{x:X}, {comparison_value}")
    def _skip_if_not_eq(self, ins):
        x, comparison_value = ins.x, ins.kk
        if self.v[x] != comparison_value:
            self._goto_next_instruction()
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SE V{x:X}, V{y:X}")
    def _skip_if_eq_regs(self, ins):
        x, y = ins.x, ins.y
        if self.v[x] == self.v[y]:
            self._goto_next_instruction()
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SNE V{x:X}, V{y:X}")
    def _skip_if_not_eq_regs(self, ins):
        x, y = ins.x, ins.y
        if self.v[x] != self.v[y]:
            self._goto_next_instruction()
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD V{x:X}, {value}")
    def _set_vk(self, ins):
        """set the value of one of the 16 variable registers, Vx"""
        x, value = ins.x, ins.kk
        self.regs.set_v(x, value)
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: ADD V{x:X}, {value}")
    def _add_to_vk(self, ins):
        """add to the value already present in one of the variable registers, VF is untouched"""
        x, value = ins.x, ins.kk
        self.regs.set_v(x, self.v[x] + value)   # keep only the lowest 8 bits
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD V{x:X}, V{y:X}")
    def _set_vx_to_vy(self, ins):
        """set the value of Vx equal to that of Vy"""
        x, y = ins.x, ins.y
        self.regs.set_v(x, self.v[y])
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: OR V{x:X}, V{y:X}")
    def _set_vx_or_vy(self, ins):
        x, y = ins.x, ins.y
        self.regs.set_v(x, self.v[x] | self.v[y])
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: AND V{x:X}, V{y:X}")
    def _set_vx_and_vy(self, ins):
        x, y = ins.x, ins.y
        self.regs.set_v(x, self.v[x] & self.v[y])
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: XOR V{x:X}, V{y:X}")
    def _set_vx_xor_vy(self, ins):
        x, y = ins.x, ins.y
        self.regs.set_v(x, self.v[x] ^ self.v[y])
        return locals()

    # the flag is always written after the result so VF holds the flag when x is 0xF
    @asm("mem_addr: 0x{mem_addr:04x}    instruction: ADD V{x:X}, V{y:X}")
    def _add_vx_vy(self, ins):
        """set Vx = Vx + Vy, VF = carry"""
        x, y = ins.x, ins.y
        total = self.v[x] + self.v[y]
        self.regs.set_v(x, total)
        self.regs.set_v(0xF, 1 if total > 0xFF else 0)
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SUB V{x:X}, V{y:X}")
    def _sub_vx_vy(self, ins):
        """set Vx = Vx - Vy, VF = NOT borrow"""
        x, y = ins.x, ins.y
        not_borrow = 1 if self.v[x] >= self.v[y] else 0
        self.regs.set_v(x, self.v[x] - self.v[y])
        self.regs.set_v(0xF, not_borrow)
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SUBN V{x:X}, V{y:X}")
    def _subn_vx_vy(self, ins):
        """set Vx = Vy - Vx, VF = NOT borrow"""
        x, y = ins.x, ins.y
        not_borrow = 1 if self.v[y] >= self.v[x] else 0
        self.regs.set_v(x, self.v[y] - self.v[x])
        self.regs.set_v(0xF, not_borrow)
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SHR V{x:X}")
    def _shr(self, ins):
        """set Vx = Vx SHR 1, VF = shifted out bit"""
        x = ins.x
        lsb = self.v[x] & 0x1
        self.regs.set_v(x, self.v[x] >> 1)
        self.regs.set_v(0xF, lsb)
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SHL V{x:X}")
    def _shl(self, ins):
        """set Vx = Vx SHL 1, VF = shifted out bit"""
        x = ins.x
        msb = (self.v[x] >> 7) & 0x1
        self.regs.set_v(x, self.v[x] << 1)
        self.regs.set_v(0xF, msb)
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD I, 0x{value:03x}")
    def _set_idx(self, ins):
        """set the value of the I register"""
        value = ins.nnn
        self.regs.set_index(value)
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: JP V0, 0x{address:03x}")
    def _jump_plus(self, ins):
        address = ins.nnn
        self.pc = address + self.v[0x0]
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: RND V{x:X}, 0x{kk:02x}")
    def _random_byte_and(self, ins):
        x, kk = ins.x, ins.kk
        rnd = self.rng.randint(0, 255)
        self.regs.set_v(x, rnd & kk)
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: DRW V{x:X}, V{y:X}, {n_bytes}")
    def _to_screen(self, ins):
        """display n-byte sprite starting at memory location I at (Vx, Vy), set VF = collision"""
        x, y, n_bytes = ins.x, ins.y, ins.n
        origin_x, origin_y = self.v[x], self.v[y]
        sprite = self.mem.read_block(self.idx, n_bytes) if n_bytes else b""
        collision = 0
        # step through each sprite byte, one byte is one line of the sprite
        for row, sprite_byte in enumerate(sprite):
            for column in range(8):
                if sprite_byte & (0x80 >> column):
                    # sprites are XORed onto the existing screen and if this
                    # causes any pixel to be erased then VF=1, otherwise VF=0
                    if self.display.toggle_pixel(origin_x + column, origin_y + row):
                        collision = 1
        self.regs.set_v(0xF, collision)
        self.display.dirty = True
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SKP V{x:X}")
    def _skip_if_pressed(self, ins):
        """skip the following instruction if the key corresponding to the hex value stored in Vx is pressed"""
        x = ins.x
        key = self.v[x] & 0xF
        if self._keys[key]:
            self._goto_next_instruction()
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SKNP V{x:X}")
    def _skip_if_not_pressed(self, ins):
        """skip the following instruction if the key corresponding to the hex value stored in Vx is NOT pressed"""
        x = ins.x
        key = self.v[x] & 0xF
        if not self._keys[key]:
            self._goto_next_instruction()
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD V{x:X}, K")
    def _wait_keypress(self, ins):
        """wait for a key press and store the lowest pressed key in Vx"""
        x = ins.x
        pressed = [key for key, down in enumerate(self._keys) if down]
        if not pressed:
            self.pc -= 0x2      # stay on the same instruction until a key is pressed
        else:
            self.regs.set_v(x, pressed[0])
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD V{x:X}, DT")
    def _set_vx_dt(self, ins):
        """set Vx = DT (delay timer) value"""
        x = ins.x
        self.regs.set_v(x, self.timers.delay)
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD DT, V{x:X}")
    def _set_dt_vx(self, ins):
        """set DT (delay timer) = Vx"""
        x = ins.x
        self.timers.set_delay(self.v[x])
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD ST, V{x:X}")
    def _set_st(self, ins):
        """set ST (sound timer) = Vx"""
        x = ins.x
        self.timers.sound = self.v[x]
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: ADD I, V{x:X}")
    def _add_to_idx(self, ins):
        """set I = I + Vx"""
        x = ins.x
        self.regs.set_index(self.idx + self.v[x])
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD F, V{x:X}")
    def _select_char(self, ins):
        """set I to location of sprite for digit Vx"""
        x = ins.x
        digit = self.v[x] & 0xF
        self.regs.set_index(FONT_START_ADDRESS + digit * FONT_GLYPH_SIZE)
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD B, V{x:X}")
    def _bcd_repr(self, ins):
        """store the hundreds digit of Vx in memory at I, the tens digit at I+1, the ones digit at I+2"""
        x = ins.x
        value = self.v[x]
        hundreds, tens, ones = value // 100, (value // 10) % 10, value % 10
        self.mem.write_block(self.idx, [hundreds, tens, ones])
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD [I], V{x:X}")
    def _store_vregs(self, ins):
        """store registers V0 through Vx (included) in memory starting at location I"""
        x = ins.x
        self.mem.write_block(self.idx, self.v[:x + 1])
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD V{x:X}, [I]")
    def _load_vregs(self, ins):
        """read registers V0 through Vx (included) from memory starting at location I"""
        x = ins.x
        self.v[:x + 1] = list(self.mem.read_block(self.idx, x + 1))
        return locals()
