"""
opcode decoding

every 16 bits opcode is decoded once into an Instruction carrying the
instruction kind (Op) and all the operands extracted from the opcode, the CPU
then dispatches on the Op without doing any further bit masking
"""
from enum import Enum
from typing import NamedTuple


class Op(Enum):
    # the value of each member is the opcode with every operand nibble set to zero
    CLS = 0x00E0
    RET = 0x00EE
    JP = 0x1000
    CALL = 0x2000
    SE_VX_KK = 0x3000
    SNE_VX_KK = 0x4000
    SE_VX_VY = 0x5000
    LD_VX_KK = 0x6000
    ADD_VX_KK = 0x7000
    LD_VX_VY = 0x8000
    OR = 0x8001
    AND = 0x8002
    XOR = 0x8003
    ADD_VX_VY = 0x8004
    SUB = 0x8005
    SHR = 0x8006
    SUBN = 0x8007
    SHL = 0x800E
    SNE_VX_VY = 0x9000
    LD_I = 0xA000
    JP_V0 = 0xB000
    RND = 0xC000
    DRW = 0xD000
    SKP = 0xE09E
    SKNP = 0xE0A1
    LD_VX_DT = 0xF007
    LD_VX_K = 0xF00A
    LD_DT_VX = 0xF015
    LD_ST_VX = 0xF018
    ADD_I_VX = 0xF01E
    LD_F_VX = 0xF029
    LD_B_VX = 0xF033
    LD_I_VX = 0xF055
    LD_VX_I = 0xF065
    UNKNOWN = -1


# WATCH OUT: masks order is important!!!
# the lookup stops at the first mask that gives a known pattern
MASKS = {
    0xFFFF: {Op.CLS, Op.RET},
    0xF0FF: {Op.SKP, Op.SKNP, Op.LD_VX_DT, Op.LD_VX_K, Op.LD_DT_VX, Op.LD_ST_VX,
             Op.ADD_I_VX, Op.LD_F_VX, Op.LD_B_VX, Op.LD_I_VX, Op.LD_VX_I},
    0xF00F: {Op.SE_VX_VY, Op.LD_VX_VY, Op.OR, Op.AND, Op.XOR, Op.ADD_VX_VY,
             Op.SUB, Op.SHR, Op.SUBN, Op.SHL, Op.SNE_VX_VY},
    0xF000: {Op.JP, Op.CALL, Op.SE_VX_KK, Op.SNE_VX_KK, Op.LD_VX_KK, Op.ADD_VX_KK,
             Op.LD_I, Op.JP_V0, Op.RND, Op.DRW},
}
PATTERNS = {
    mask: {op.value: op for op in ops}
    for mask, ops in MASKS.items()
}


class Instruction(NamedTuple):
    op: Op
    opcode: int
    x: int          # register selector, bits 8-11
    y: int          # register selector, bits 4-7
    n: int          # 4 bits literal, bits 0-3
    kk: int         # 8 bits literal, bits 0-7
    nnn: int        # 12 bits address, bits 0-11


def decode(opcode: int) -> Instruction:
    """decode opcodes using masks and return the matching Instruction, Op.UNKNOWN if no pattern matches"""
    op = Op.UNKNOWN
    for mask, patterns in PATTERNS.items():
        if (opcode & mask) in patterns:
            op = patterns[opcode & mask]
            break
    return Instruction(
        op=op,
        opcode=opcode,
        x=(opcode & 0x0F00) >> 8,
        y=(opcode & 0x00F0) >> 4,
        n=opcode & 0x000F,
        kk=opcode & 0x00FF,
        nnn=opcode & 0x0FFF,
    )
