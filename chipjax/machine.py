"""Mutable host-facing wrapper around the functional engine."""

import jax
import numpy as np

from chipjax import emulator
from chipjax.state import EmulatorState, framebuffer, registers, stack_contents, scalars


class Chip8:
    """A CHIP-8 machine that updates itself in place.

    The host owns the timing: call :meth:`step` at the instruction rate and
    :meth:`tick` at 60 Hz, and keep the keypad current with :meth:`set_key`.

    Args:
        program: Raw program bytes, loaded at 0x200.
        seed: Seed for the random instruction. ``None`` draws from the
            process-wide entropy-seeded key.
    """

    def __init__(self, program: bytes, seed: int | None = None):
        rng = None if seed is None else jax.random.PRNGKey(seed)
        self.state: EmulatorState = emulator.initialize(program, rng=rng)
        self.instruction_count = 0

    def step(self) -> None:
        self.state = emulator.step(self.state)
        self.instruction_count += 1

    def tick(self) -> None:
        self.state = emulator.tick(self.state)

    def set_key(self, key: int, pressed: bool) -> None:
        self.state = emulator.set_key(self.state, key, pressed)

    def reset(self) -> None:
        """Discard the current state and reload the original program."""
        self.state = emulator.reset(self.state)
        self.instruction_count = 0

    def run_frame(self, instructions_per_frame: int = 10) -> None:
        for _ in range(instructions_per_frame):
            self.step()
        self.tick()

    @property
    def framebuffer(self) -> np.ndarray:
        return framebuffer(self.state)

    @property
    def registers(self) -> np.ndarray:
        return registers(self.state)

    @property
    def stack(self) -> np.ndarray:
        return stack_contents(self.state)

    @property
    def pc(self) -> int:
        return int(self.state.pc)

    @property
    def i(self) -> int:
        return int(self.state.I)

    @property
    def sp(self) -> int:
        return int(self.state.stack.pointer)

    @property
    def delay_timer(self) -> int:
        return int(self.state.delay_timer)

    @property
    def sound_timer(self) -> int:
        return int(self.state.sound_timer)

    @property
    def sound_active(self) -> bool:
        """Whether a host should be playing the tone right now."""
        return self.sound_timer > 0

    @property
    def trace(self) -> list[str]:
        return emulator.trace_lines(self.state)

    def scalars(self) -> dict[str, int]:
        return scalars(self.state)
