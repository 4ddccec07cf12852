"""Tests for system instructions (0xxx)."""

import jax.numpy as jnp
import pytest
from chipjax import execute, StackUnderflowError, UnimplementedInstructionError


def test_execute_clear_screen(fresh_state):
    """Test 00E0 - Clear display."""
    state = fresh_state.replace(display=jnp.ones_like(fresh_state.display))

    state = execute(state, 0x00E0)

    assert jnp.sum(state.display) == 0
    assert state.display.shape == (64, 32)


def test_execute_call_and_return(fresh_state):
    """Test 2NNN (call) and 00EE (return) together."""
    state = fresh_state
    initial_pc = state.pc

    # Call subroutine
    state = execute(state, 0x2300)  # Call 0x300
    assert state.pc == 0x300
    assert state.stack.data[15] == initial_pc
    assert state.stack.pointer == 14

    # Return from subroutine
    state = execute(state, 0x00EE)  # Return
    assert state.pc == initial_pc
    assert state.stack.pointer == 15


def test_return_pops_top_slot(fresh_state):
    """00EE - Pointer moves up first, then the slot is read."""
    state = fresh_state.replace(stack=fresh_state.stack.replace(
        data=fresh_state.stack.data.at[15].set(0x300),
        pointer=jnp.asarray(14, dtype=jnp.uint8),
    ))

    state = execute(state, 0x00EE)

    assert state.stack.pointer == 15
    assert state.pc == 0x300


def test_nested_calls_return_in_order(fresh_state):
    """Two calls then two returns unwind to the original PC."""
    state = execute(fresh_state, 0x2300)
    state = execute(state, 0x2400)
    assert state.stack.data[15] == 0x200
    assert state.stack.data[14] == 0x300

    state = execute(state, 0x00EE)
    assert state.pc == 0x300
    state = execute(state, 0x00EE)
    assert state.pc == 0x200


def test_return_with_empty_stack_fails(fresh_state):
    """00EE with nothing on the stack is fatal and leaves state alone."""
    with pytest.raises(StackUnderflowError):
        execute(fresh_state, 0x00EE)
    assert fresh_state.stack.pointer == 15


@pytest.mark.parametrize("instruction", [0x0000, 0x0123, 0x00E1, 0x00EF, 0x0FFF])
def test_unknown_system_instruction_fails(fresh_state, instruction):
    """0NNN other than 00E0/00EE is unimplemented."""
    with pytest.raises(UnimplementedInstructionError) as excinfo:
        execute(fresh_state, instruction)
    assert excinfo.value.opcode == instruction
