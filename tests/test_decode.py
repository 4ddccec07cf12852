"""Tests for decoding and disassembly."""

import pytest
from chipjax import Op, decode, mnemonic, format_record, disassemble, UnimplementedInstructionError


class TestDecode:
    """Test operand extraction and tagging."""

    def test_fields(self):
        instruction = decode(0xD12F)
        assert instruction.raw == 0xD12F
        assert instruction.op == Op.DRW
        assert instruction.opcode == 0xD
        assert instruction.x == 0x1
        assert instruction.y == 0x2
        assert instruction.n == 0xF
        assert instruction.nn == 0x2F
        assert instruction.nnn == 0x12F

    @pytest.mark.parametrize("raw,op", [
        (0x00E0, Op.CLS), (0x00EE, Op.RET), (0x1ABC, Op.JP), (0x2ABC, Op.CALL),
        (0x3A12, Op.SE_VX_NN), (0x4A12, Op.SNE_VX_NN), (0x5AB0, Op.SE_VX_VY),
        (0x6A12, Op.LD_VX_NN), (0x7A12, Op.ADD_VX_NN), (0x8AB0, Op.LD_VX_VY),
        (0x8AB1, Op.OR), (0x8AB2, Op.AND), (0x8AB3, Op.XOR), (0x8AB4, Op.ADD_VX_VY),
        (0x8AB5, Op.SUB), (0x8AB6, Op.SHR), (0x8AB7, Op.SUBN), (0x8ABE, Op.SHL),
        (0x9AB0, Op.SNE_VX_VY), (0xA123, Op.LD_I), (0xB123, Op.JP_V0), (0xCA12, Op.RND),
        (0xDAB5, Op.DRW), (0xEA9E, Op.SKP), (0xEAA1, Op.SKNP), (0xFA07, Op.LD_VX_DT),
        (0xFA0A, Op.LD_VX_K), (0xFA15, Op.LD_DT_VX), (0xFA18, Op.LD_ST_VX),
        (0xFA1E, Op.ADD_I_VX), (0xFA29, Op.LD_F_VX), (0xFA33, Op.LD_B_VX),
        (0xFA55, Op.LD_MEM_VX), (0xFA65, Op.LD_VX_MEM),
    ])
    def test_every_op(self, raw, op):
        assert decode(raw).op == op

    def test_every_op_covered(self):
        assert len(Op) == 34

    @pytest.mark.parametrize("raw", [0x0000, 0x00E1, 0x8008, 0x800F, 0xE09F, 0xF0FF])
    def test_unknown(self, raw):
        with pytest.raises(UnimplementedInstructionError) as excinfo:
            decode(raw, 0x2A0)
        assert excinfo.value.opcode == raw
        assert excinfo.value.address == 0x2A0
        assert f"0x{raw:04X}" in str(excinfo.value)


class TestDisassembler:
    """Test mnemonics."""

    @pytest.mark.parametrize("raw,text", [
        (0x00E0, "CLS  "),
        (0x00EE, "RET  "),
        (0x1234, "GOTO 234"),
        (0x2208, "CALL 208"),
        (0x3012, "SE   V0,#12"),
        (0x9AB0, "SNE  VA,VB"),
        (0x8AB7, "SUBN VA,VB"),
        (0x8A0E, "SHL  VA"),
        (0xB123, "JP   V0,#0123"),
        (0xFA33, "LD   B,VA"),
        (0xF355, "LD   [I],V3"),
        (0xF365, "LD   V3,[I]"),
    ])
    def test_mnemonic(self, raw, text):
        assert mnemonic(decode(raw)) == text

    def test_format_record(self):
        assert format_record(0x200, 0x6005) == "200-6005 LD   V0,#05"
        assert format_record(0x200, 0x0000) == "200-0000 DW   #0000"

    def test_disassemble_program(self):
        lines = disassemble(bytes([0x60, 0x05, 0xA2, 0x50, 0xD0]))
        assert lines == [
            "200-6005 LD   V0,#05",
            "202-A250 LD   I,#0250",
            "204-D0   DB   #D0",
        ]
