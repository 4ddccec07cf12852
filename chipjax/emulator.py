"""Main CHIP-8 emulator execution engine."""

import secrets

import jax
import jax.lax
import jax.numpy as jnp
from chipjax.state import EmulatorState, create_state
from chipjax.decode import Op, DecodedInstruction, decode
from chipjax.constants import PROGRAM_START, MAX_PROGRAM_SIZE, ADDRESS_MASK, NUM_KEYS, TRACE_SIZE
from chipjax.disassembler import format_record
from chipjax.errors import (
    Chip8Error, UnimplementedInstructionError, ProgramTooLargeError,
    StackOverflowError, StackUnderflowError, MemoryAccessError
)
from chipjax.logging import logger, build_tqdm_progress_bar
from chipjax.stack import is_empty, is_full
from chipjax.instructions.system import execute_clear_screen, execute_return
from chipjax.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key_pressed, execute_skip_if_key_not_pressed
)
from chipjax.instructions.alu import (
    execute_alu_set, execute_alu_or, execute_alu_and, execute_alu_xor, execute_alu_add,
    execute_alu_sub_xy, execute_alu_shift_right, execute_alu_sub_yx, execute_alu_shift_left
)
from chipjax.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chipjax.instructions.display import execute_display
from chipjax.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers
)

# Every Op needs an entry; the switch table below is built in Op order
HANDLERS = {
    Op.CLS: execute_clear_screen,
    Op.RET: execute_return,
    Op.JP: execute_jump,
    Op.CALL: execute_call,
    Op.SE_VX_NN: execute_skip_if_equal_immediate,
    Op.SNE_VX_NN: execute_skip_if_not_equal_immediate,
    Op.SE_VX_VY: execute_skip_if_equal_register,
    Op.LD_VX_NN: execute_set,
    Op.ADD_VX_NN: execute_add,
    Op.LD_VX_VY: execute_alu_set,
    Op.OR: execute_alu_or,
    Op.AND: execute_alu_and,
    Op.XOR: execute_alu_xor,
    Op.ADD_VX_VY: execute_alu_add,
    Op.SUB: execute_alu_sub_xy,
    Op.SHR: execute_alu_shift_right,
    Op.SUBN: execute_alu_sub_yx,
    Op.SHL: execute_alu_shift_left,
    Op.SNE_VX_VY: execute_skip_if_not_equal_register,
    Op.LD_I: execute_set_index,
    Op.JP_V0: execute_jump_with_offset,
    Op.RND: execute_random,
    Op.DRW: execute_display,
    Op.SKP: execute_skip_if_key_pressed,
    Op.SKNP: execute_skip_if_key_not_pressed,
    Op.LD_VX_DT: execute_get_delay_timer,
    Op.LD_VX_K: execute_wait_for_key,
    Op.LD_DT_VX: execute_set_delay_timer,
    Op.LD_ST_VX: execute_set_sound_timer,
    Op.ADD_I_VX: execute_add_to_index,
    Op.LD_F_VX: execute_font_character,
    Op.LD_B_VX: execute_bcd_conversion,
    Op.LD_MEM_VX: execute_store_registers,
    Op.LD_VX_MEM: execute_load_registers,
}

_BRANCHES = tuple(HANDLERS[op] for op in Op)

_process_key = None


def default_rng() -> jax.random.PRNGKey:
    """Fresh key derived from a process-wide key seeded once from OS entropy."""
    global _process_key
    if _process_key is None:
        _process_key = jax.random.PRNGKey(secrets.randbits(32))
    _process_key, key = jax.random.split(_process_key)
    return key


def initialize(program: bytes, rng: jax.random.PRNGKey = None) -> EmulatorState:
    """Create a machine with the font table at 0x100 and ``program`` at 0x200.

    Raises:
        ProgramTooLargeError: if the program does not fit in memory.
    """
    program = bytes(program)
    if len(program) > MAX_PROGRAM_SIZE:
        _fail(ProgramTooLargeError(len(program), MAX_PROGRAM_SIZE))

    state = create_state(default_rng() if rng is None else rng)
    if program:
        rom_array = jnp.array(list(program), dtype=jnp.uint8)
        state = state.replace(memory=state.memory.at[PROGRAM_START:PROGRAM_START + len(program)].set(rom_array))

    logger.debug(f"Loaded {len(program)} byte program at 0x{PROGRAM_START:03X}")
    return state.replace(program=program)


def reset(state: EmulatorState) -> EmulatorState:
    """Reinitialize from the stored program bytes, keeping the random key."""
    logger.debug("Reset")
    return initialize(state.program, rng=state.rng)


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> jnp.uint16:
    """Pack two bytes into uint16."""
    return (high.astype(jnp.uint16) << 8) | low.astype(jnp.uint16)


def fetch(state: EmulatorState) -> tuple[EmulatorState, jnp.uint16]:
    """Fetch next instruction from memory and advance the PC past it."""
    pc = int(state.pc)
    if pc + 1 > ADDRESS_MASK:
        _fail(MemoryAccessError(pc + 1))
    instruction = _pack_u16(state.memory[pc], state.memory[pc + 1])
    return state.replace(pc=jnp.astype(state.pc + 2, jnp.uint16)), instruction


def _fail(error: Chip8Error):
    logger.error(str(error))
    raise error


def _check_bounds(state: EmulatorState, instruction: DecodedInstruction, address: int):
    """Raise before dispatch if the instruction would leave the stack or memory."""
    op = instruction.op
    if op == Op.CALL and is_full(state.stack):
        _fail(StackOverflowError(address))
    if op == Op.RET and is_empty(state.stack):
        _fail(StackUnderflowError(address))

    if op == Op.DRW:
        last = int(state.I) + instruction.n - 1
    elif op == Op.LD_B_VX:
        last = int(state.I) + 2
    elif op in (Op.LD_MEM_VX, Op.LD_VX_MEM):
        last = int(state.I) + instruction.x
    else:
        return
    if last > ADDRESS_MASK:
        _fail(MemoryAccessError(last, instruction.raw))


@jax.jit
def _dispatch(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    return jax.lax.switch(instruction.op, _BRANCHES, state, instruction)


def record_trace(state: EmulatorState, address: int, instruction: int) -> EmulatorState:
    """Append (address, opcode) to the trace ring buffer."""
    trace = state.trace
    position = int(trace.position)
    return state.replace(trace=trace.replace(
        addresses=trace.addresses.at[position].set(address & 0xFFFF),
        opcodes=trace.opcodes.at[position].set(instruction),
        position=jnp.asarray((position + 1) % TRACE_SIZE, dtype=jnp.uint8),
        size=jnp.asarray(min(int(trace.size) + 1, TRACE_SIZE), dtype=jnp.uint8),
    ))


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    The PC is expected to already point past the instruction, as after
    :func:`fetch`.

    Raises:
        UnimplementedInstructionError: for an unknown opcode.
        StackOverflowError, StackUnderflowError: for call/return past the stack.
        MemoryAccessError: for a memory operand past 0xFFF.
    """
    address = (int(state.pc) - 2) & 0xFFFF
    try:
        decoded_instruction = decode(instruction, address)
    except UnimplementedInstructionError as error:
        logger.error(str(error))
        raise
    _check_bounds(state, decoded_instruction, address)

    # program is static pytree data; leave it out of the jit cache key
    program = state.program
    state = _dispatch(state.replace(program=b""), decoded_instruction).replace(program=program)
    return record_trace(state, address, decoded_instruction.raw)


def step(state: EmulatorState) -> EmulatorState:
    """Fetch and execute one instruction."""
    state, instruction = fetch(state)
    return execute(state, int(instruction))


def tick(state: EmulatorState) -> EmulatorState:
    """Decrement each nonzero timer by one."""
    return state.replace(
        delay_timer=jnp.where(state.delay_timer > 0, state.delay_timer - 1, state.delay_timer),
        sound_timer=jnp.where(state.sound_timer > 0, state.sound_timer - 1, state.sound_timer),
    )


def set_key(state: EmulatorState, key: int, pressed: bool) -> EmulatorState:
    """Mark keypad key 0x0-0xF as pressed or released."""
    if not 0 <= key < NUM_KEYS:
        raise ValueError(f"Key must be in 0..{NUM_KEYS - 1}, got {key}")
    return state.replace(keypad=state.keypad.at[key].set(bool(pressed)))


def run_instructions(state: EmulatorState, n: int, progress: bool = False) -> EmulatorState:
    """Execute ``n`` instructions without touching the timers."""
    if not progress:
        for _ in range(n):
            state = step(state)
        return state

    update, close = build_tqdm_progress_bar(n)
    try:
        for i in range(n):
            state = step(state)
            update(i)
    finally:
        close()
    return state


def run_frame(state: EmulatorState, instructions_per_frame: int = 10) -> EmulatorState:
    """Run one 60 Hz frame: ``instructions_per_frame`` steps, then one tick."""
    return tick(run_instructions(state, instructions_per_frame))


def trace_lines(state: EmulatorState) -> list[str]:
    """The trace ring buffer, oldest record first."""
    trace = state.trace
    size = int(trace.size)
    start = (int(trace.position) - size) % TRACE_SIZE
    return [
        format_record(int(trace.addresses[i]), int(trace.opcodes[i]))
        for i in ((start + k) % TRACE_SIZE for k in range(size))
    ]
