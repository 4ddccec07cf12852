"""CHIP-8 display operations."""

import jax.numpy as jnp
from chipjax.state import EmulatorState
from chipjax.decode import DecodedInstruction
from chipjax.constants import SCREEN_WIDTH, SCREEN_HEIGHT, SPRITE_WIDTH, FLAG_REGISTER

# Pre-computed coordinate grids for display operations
xx, yy = jnp.meshgrid(jnp.arange(SCREEN_WIDTH), jnp.arange(SCREEN_HEIGHT), indexing='ij')


def sprite_mask(memory: jnp.ndarray, address, x, y, height) -> jnp.ndarray:
    """Screen-sized mask of the sprite bits placed at (x, y).

    Pixels past the right or bottom edge are dropped, nothing wraps.
    """
    x = jnp.astype(x, jnp.int32)
    y = jnp.astype(y, jnp.int32)
    in_sprite = (xx >= x) & (xx < x + SPRITE_WIDTH) & (yy >= y) & (yy < y + height)

    row_offset = jnp.where(in_sprite, yy - y, 0)
    col_offset = jnp.where(in_sprite, xx - x, 0)
    sprite_bytes = memory[jnp.astype(address, jnp.int32) + row_offset]
    return (((sprite_bytes >> (7 - col_offset)) & 1) == 1) & in_sprite


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N, VF = collision."""
    sprite = sprite_mask(state.memory, state.I, state.V[instruction.x], state.V[instruction.y], instruction.n)
    collision = jnp.any(state.display & sprite)

    return state.replace(
        display=state.display ^ sprite,
        V=state.V.at[FLAG_REGISTER].set(jnp.astype(collision, jnp.uint8))
    )
