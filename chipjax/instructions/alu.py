"""CHIP-8 ALU operations (8xxx)."""

import jax.numpy as jnp
from chipjax.state import EmulatorState
from chipjax.decode import DecodedInstruction
from chipjax.constants import FLAG_REGISTER


def alu_set(vx, vy):
    """8XY0 - Set: VX = VY."""
    return vy


def alu_or(vx, vy):
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy


def alu_and(vx, vy):
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy


def alu_xor(vx, vy):
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy


def alu_add(vx, vy):
    """8XY4 - Add: VX += VY, set carry flag."""
    result = jnp.astype(vx, jnp.int32) + vy
    carry = result > 255
    return result & 0xFF, carry


def alu_sub_xy(vx, vy):
    """8XY5 - Subtract: VX -= VY, flag set when there is no borrow."""
    no_borrow = vx >= vy
    return (jnp.astype(vx, jnp.int32) - vy) & 0xFF, no_borrow


def alu_shift_right(vx, vy):
    """8XY6 - Shift right: VX >>= 1, flag gets the bit shifted out."""
    return vx >> 1, vx & 1


def alu_sub_yx(vx, vy):
    """8XY7 - Subtract: VX = VY - VX, flag set when there is no borrow."""
    no_borrow = vy >= vx
    return (jnp.astype(vy, jnp.int32) - vx) & 0xFF, no_borrow


def alu_shift_left(vx, vy):
    """8XYE - Shift left: VX <<= 1, flag gets the bit shifted out."""
    return (jnp.astype(vx, jnp.int32) << 1) & 0xFF, (vx & 0x80) >> 7


def make_alu_instruction(alu_fn):
    """Factory for 8XYN instructions that leave VF alone."""
    def alu_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        result = alu_fn(state.V[instruction.x], state.V[instruction.y])
        return state.replace(V=state.V.at[instruction.x].set(jnp.astype(result, jnp.uint8)))
    return alu_instruction


def make_flag_alu_instruction(alu_fn):
    """Factory for 8XYN instructions that report through VF.

    Both values are computed from the operands before either register is
    written, and VF is written last so it holds the flag even when X is F.
    """
    def alu_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        result, flag = alu_fn(state.V[instruction.x], state.V[instruction.y])
        new_V = state.V.at[instruction.x].set(jnp.astype(result, jnp.uint8))
        new_V = new_V.at[FLAG_REGISTER].set(jnp.astype(flag, jnp.uint8))
        return state.replace(V=new_V)
    return alu_instruction


execute_alu_set = make_alu_instruction(alu_set)
execute_alu_or = make_alu_instruction(alu_or)
execute_alu_and = make_alu_instruction(alu_and)
execute_alu_xor = make_alu_instruction(alu_xor)
execute_alu_add = make_flag_alu_instruction(alu_add)
execute_alu_sub_xy = make_flag_alu_instruction(alu_sub_xy)
execute_alu_shift_right = make_flag_alu_instruction(alu_shift_right)
execute_alu_sub_yx = make_flag_alu_instruction(alu_sub_yx)
execute_alu_shift_left = make_flag_alu_instruction(alu_shift_left)
