"""CHIP-8 stack operations."""

import jax.numpy as jnp
from chipjax.constants import STACK_SIZE, STACK_POINTER_START
from chipjax.state import StackState


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Store address at the pointer, then move the pointer down."""
    new_data = stack.data.at[stack.pointer].set(jnp.astype(address, jnp.uint16))
    return stack.replace(data=new_data, pointer=jnp.astype(stack.pointer - 1, jnp.uint8))


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Move the pointer up, then load the address there."""
    new_pointer = jnp.astype(stack.pointer + 1, jnp.uint8)
    return stack.replace(pointer=new_pointer), stack.data[new_pointer]


def depth(stack: StackState) -> int:
    """Number of addresses currently on the stack."""
    return (STACK_POINTER_START - int(stack.pointer)) % 256


def is_full(stack: StackState) -> bool:
    return depth(stack) >= STACK_SIZE


def is_empty(stack: StackState) -> bool:
    return depth(stack) == 0
