import unittest

from chip8.instructions import Op, decode


class TestDecode(unittest.TestCase):
    def test_operands(self):
        ins = decode(0xD12F)
        self.assertEqual(ins.op, Op.DRW)
        self.assertEqual((ins.x, ins.y, ins.n), (0x1, 0x2, 0xF))
        self.assertEqual(ins.kk, 0x2F)
        self.assertEqual(ins.nnn, 0x12F)
        self.assertEqual(ins.opcode, 0xD12F)

    def test_families(self):
        cases = {
            0x00E0: Op.CLS,
            0x00EE: Op.RET,
            0x1ABC: Op.JP,
            0x2ABC: Op.CALL,
            0x3A42: Op.SE_VX_KK,
            0x4A42: Op.SNE_VX_KK,
            0x5AB0: Op.SE_VX_VY,
            0x6A42: Op.LD_VX_KK,
            0x7A42: Op.ADD_VX_KK,
            0x8AB0: Op.LD_VX_VY,
            0x8AB4: Op.ADD_VX_VY,
            0x8ABE: Op.SHL,
            0x9AB0: Op.SNE_VX_VY,
            0xA123: Op.LD_I,
            0xB123: Op.JP_V0,
            0xC1FF: Op.RND,
            0xE39E: Op.SKP,
            0xE3A1: Op.SKNP,
            0xF30A: Op.LD_VX_K,
            0xF333: Op.LD_B_VX,
            0xFF65: Op.LD_VX_I,
        }
        for opcode, op in cases.items():
            with self.subTest(opcode=hex(opcode)):
                self.assertEqual(decode(opcode).op, op)

    def test_unknown(self):
        for opcode in (0x0123, 0x00E1, 0x5AB1, 0x8AB8, 0x9AB1, 0xE3A2, 0xF3FF):
            with self.subTest(opcode=hex(opcode)):
                self.assertEqual(decode(opcode).op, Op.UNKNOWN)


if __name__ == "__main__":
    unittest.main()
