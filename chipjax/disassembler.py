"""Mnemonics for CHIP-8 instructions, used by the execution trace."""

from chipjax.constants import PROGRAM_START
from chipjax.decode import Op, DecodedInstruction, classify, decode

_FORMATS = {
    Op.CLS: "CLS  ",
    Op.RET: "RET  ",
    Op.JP: "GOTO {nnn:03X}",
    Op.CALL: "CALL {nnn:03X}",
    Op.SE_VX_NN: "SE   V{x:X},#{nn:02X}",
    Op.SNE_VX_NN: "SNE  V{x:X},#{nn:02X}",
    Op.SE_VX_VY: "SE   V{x:X},V{y:X}",
    Op.LD_VX_NN: "LD   V{x:X},#{nn:02X}",
    Op.ADD_VX_NN: "ADD  V{x:X},#{nn:02X}",
    Op.LD_VX_VY: "LD   V{x:X},V{y:X}",
    Op.OR: "OR   V{x:X},V{y:X}",
    Op.AND: "AND  V{x:X},V{y:X}",
    Op.XOR: "XOR  V{x:X},V{y:X}",
    Op.ADD_VX_VY: "ADD  V{x:X},V{y:X}",
    Op.SUB: "SUB  V{x:X},V{y:X}",
    Op.SHR: "SHR  V{x:X}",
    Op.SUBN: "SUBN V{x:X},V{y:X}",
    Op.SHL: "SHL  V{x:X}",
    Op.SNE_VX_VY: "SNE  V{x:X},V{y:X}",
    Op.LD_I: "LD   I,#{nnn:04X}",
    Op.JP_V0: "JP   V0,#{nnn:04X}",
    Op.RND: "RND  V{x:X},#{nn:02X}",
    Op.DRW: "DRW  V{x:X},V{y:X},{n:d}",
    Op.SKP: "SKP  V{x:X}",
    Op.SKNP: "SKNP V{x:X}",
    Op.LD_VX_DT: "LD   V{x:X},DT",
    Op.LD_VX_K: "LD   V{x:X},K",
    Op.LD_DT_VX: "LD   DT,V{x:X}",
    Op.LD_ST_VX: "LD   ST,V{x:X}",
    Op.ADD_I_VX: "ADD  I,V{x:X}",
    Op.LD_F_VX: "LD   F,V{x:X}",
    Op.LD_B_VX: "LD   B,V{x:X}",
    Op.LD_MEM_VX: "LD   [I],V{x:X}",
    Op.LD_VX_MEM: "LD   V{x:X},[I]",
}

assert set(_FORMATS) == set(Op)


def mnemonic(instruction: DecodedInstruction) -> str:
    """Render a decoded instruction as assembly text."""
    return _FORMATS[Op(instruction.op)].format(
        x=instruction.x, y=instruction.y, n=instruction.n, nn=instruction.nn, nnn=instruction.nnn
    )


def format_record(address: int, opcode: int) -> str:
    """Render one trace line: ``AAA-OOOO MNEMONIC``."""
    if classify(opcode) is None:
        text = f"DW   #{opcode:04X}"
    else:
        text = mnemonic(decode(opcode))
    return f"{address:03X}-{opcode:04X} {text}"


def disassemble(program: bytes, start: int = PROGRAM_START) -> list[str]:
    """Disassemble a raw program, one line per 16-bit word.

    A trailing odd byte is shown as a ``DB`` line.
    """
    lines = []
    for offset in range(0, len(program) - 1, 2):
        opcode = (program[offset] << 8) | program[offset + 1]
        lines.append(format_record(start + offset, opcode))
    if len(program) % 2:
        lines.append(f"{start + len(program) - 1:03X}-{program[-1]:02X}   DB   #{program[-1]:02X}")
    return lines
