"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax
import jax.numpy as jnp
from chipjax import initialize


@pytest.fixture
def fresh_state():
    """Provide a fresh, deterministically seeded emulator state for each test."""
    return initialize(b"", rng=jax.random.PRNGKey(0))


def load_program(*words, seed=0):
    """Helper to build a state from 16-bit instruction words."""
    program = b"".join(word.to_bytes(2, "big") for word in words)
    return initialize(program, rng=jax.random.PRNGKey(seed))


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )
