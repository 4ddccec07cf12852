"""CHIP-8 instruction decoding."""

from enum import IntEnum

from chex import dataclass

from chipjax.errors import UnimplementedInstructionError


class Op(IntEnum):
    """One tag per supported instruction; values index the dispatch table."""
    CLS = 0         # 00E0
    RET = 1         # 00EE
    JP = 2          # 1NNN
    CALL = 3        # 2NNN
    SE_VX_NN = 4    # 3XNN
    SNE_VX_NN = 5   # 4XNN
    SE_VX_VY = 6    # 5XY0
    LD_VX_NN = 7    # 6XNN
    ADD_VX_NN = 8   # 7XNN
    LD_VX_VY = 9    # 8XY0
    OR = 10         # 8XY1
    AND = 11        # 8XY2
    XOR = 12        # 8XY3
    ADD_VX_VY = 13  # 8XY4
    SUB = 14        # 8XY5
    SHR = 15        # 8XY6
    SUBN = 16       # 8XY7
    SHL = 17        # 8XYE
    SNE_VX_VY = 18  # 9XY0
    LD_I = 19       # ANNN
    JP_V0 = 20      # BNNN
    RND = 21        # CXNN
    DRW = 22        # DXYN
    SKP = 23        # EX9E
    SKNP = 24       # EXA1
    LD_VX_DT = 25   # FX07
    LD_VX_K = 26    # FX0A
    LD_DT_VX = 27   # FX15
    LD_ST_VX = 28   # FX18
    ADD_I_VX = 29   # FX1E
    LD_F_VX = 30    # FX29
    LD_B_VX = 31    # FX33
    LD_MEM_VX = 32  # FX55
    LD_VX_MEM = 33  # FX65


# Families with a single instruction, keyed by top nibble
_SINGLE_OPS = {
    0x1: Op.JP,
    0x2: Op.CALL,
    0x3: Op.SE_VX_NN,
    0x4: Op.SNE_VX_NN,
    0x5: Op.SE_VX_VY,
    0x6: Op.LD_VX_NN,
    0x7: Op.ADD_VX_NN,
    0x9: Op.SNE_VX_VY,
    0xA: Op.LD_I,
    0xB: Op.JP_V0,
    0xC: Op.RND,
    0xD: Op.DRW,
}

_SYSTEM_OPS = {0x00E0: Op.CLS, 0x00EE: Op.RET}

_ALU_OPS = {
    0x0: Op.LD_VX_VY,
    0x1: Op.OR,
    0x2: Op.AND,
    0x3: Op.XOR,
    0x4: Op.ADD_VX_VY,
    0x5: Op.SUB,
    0x6: Op.SHR,
    0x7: Op.SUBN,
    0xE: Op.SHL,
}

_KEY_OPS = {0x9E: Op.SKP, 0xA1: Op.SKNP}

_MISC_OPS = {
    0x07: Op.LD_VX_DT,
    0x0A: Op.LD_VX_K,
    0x15: Op.LD_DT_VX,
    0x18: Op.LD_ST_VX,
    0x1E: Op.ADD_I_VX,
    0x29: Op.LD_F_VX,
    0x33: Op.LD_B_VX,
    0x55: Op.LD_MEM_VX,
    0x65: Op.LD_VX_MEM,
}


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    raw: int
    op: int      # Op tag
    opcode: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)


def classify(instruction: int) -> Op | None:
    """Return the Op tag for a 16-bit instruction, or None if unknown."""
    family = (instruction & 0xF000) >> 12
    if family in _SINGLE_OPS:
        return _SINGLE_OPS[family]
    if family == 0x0:
        return _SYSTEM_OPS.get(instruction)
    if family == 0x8:
        return _ALU_OPS.get(instruction & 0x000F)
    if family == 0xE:
        return _KEY_OPS.get(instruction & 0x00FF)
    return _MISC_OPS.get(instruction & 0x00FF)


def decode(instruction: int, address: int | None = None) -> DecodedInstruction:
    """Decode 16-bit instruction into components.

    Raises:
        UnimplementedInstructionError: if the instruction is not part of the set.
    """
    instruction = int(instruction)
    op = classify(instruction)
    if op is None:
        raise UnimplementedInstructionError(instruction, address)
    return DecodedInstruction(
        raw=instruction,
        op=int(op),
        opcode=(instruction & 0xF000) >> 12,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        nn=instruction & 0x00FF,
        nnn=instruction & 0x0FFF
    )
