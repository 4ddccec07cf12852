"""CHIP-8 emulator state structures."""

import jax
import jax.numpy as jnp
import numpy as np
from flax.struct import dataclass, PyTreeNode, field

from chipjax.constants import (
    PROGRAM_START, FONT_START, FONT_DATA, MEMORY_SIZE, SCREEN_WIDTH, SCREEN_HEIGHT,
    NUM_REGISTERS, NUM_KEYS, STACK_SIZE, STACK_POINTER_START, TRACE_SIZE
)


@dataclass(frozen=True)
class StackState:
    """Descending call stack: the pointer starts at the top slot and moves down."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: jnp.ndarray = field(default_factory=lambda: jnp.asarray(STACK_POINTER_START, dtype=jnp.uint8))


@dataclass(frozen=True)
class TraceState:
    """Ring buffer of the last executed (address, opcode) pairs."""
    addresses: jnp.ndarray = field(default_factory=lambda: jnp.zeros(TRACE_SIZE, dtype=jnp.uint16))
    opcodes: jnp.ndarray = field(default_factory=lambda: jnp.zeros(TRACE_SIZE, dtype=jnp.uint16))
    position: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    size: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state.

    ``display`` is indexed ``[x, y]``; use :func:`framebuffer` for a row-major view.
    ``program`` keeps the loaded bytes so the machine can be reset.
    """
    rng: jax.random.PRNGKey
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.astype(PROGRAM_START, jnp.uint16))
    display: jnp.ndarray = field(default_factory=lambda: jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.bool_))
    stack: StackState = StackState()
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    trace: TraceState = TraceState()
    program: bytes = field(pytree_node=False, default=b"")


def create_state(rng: jax.random.PRNGKey = jax.random.PRNGKey(0)) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    state = EmulatorState(rng)
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(FONT_DATA))


def framebuffer(state: EmulatorState) -> np.ndarray:
    """Row-major (32, 64) view of the display with 0/1 cells."""
    return np.asarray(state.display, dtype=np.uint8).T


def registers(state: EmulatorState) -> np.ndarray:
    """Copy of V0-VF."""
    return np.asarray(state.V, dtype=np.uint8)


def stack_contents(state: EmulatorState) -> np.ndarray:
    """Copy of all 16 stack slots, occupied or not."""
    return np.asarray(state.stack.data, dtype=np.uint16)


def scalars(state: EmulatorState) -> dict[str, int]:
    """PC, I, SP, DT and ST as plain ints."""
    return {
        "pc": int(state.pc),
        "i": int(state.I),
        "sp": int(state.stack.pointer),
        "dt": int(state.delay_timer),
        "st": int(state.sound_timer),
    }
