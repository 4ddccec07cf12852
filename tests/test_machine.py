"""Tests for the mutable Chip8 host facade."""

import numpy as np
from chipjax import Chip8


def program(*words):
    return b"".join(word.to_bytes(2, "big") for word in words)


class TestChip8:
    """Test the in-place host interface."""

    def test_step_mutates(self):
        machine = Chip8(program(0x6042, 0xA300), seed=0)
        machine.step()
        machine.step()

        assert machine.registers[0] == 0x42
        assert machine.i == 0x300
        assert machine.pc == 0x204
        assert machine.instruction_count == 2

    def test_timers_and_sound(self):
        machine = Chip8(program(0x6002, 0xF018, 0xF015), seed=0)
        for _ in range(3):
            machine.step()
        assert machine.sound_active
        machine.tick()
        machine.tick()
        assert machine.delay_timer == 0
        assert machine.sound_timer == 0
        assert not machine.sound_active

    def test_key_wait(self):
        machine = Chip8(program(0xF20A), seed=0)
        machine.step()
        assert machine.pc == 0x200
        machine.set_key(0xB, True)
        machine.step()
        assert machine.registers[2] == 0xB

    def test_reset(self):
        machine = Chip8(program(0x00E0, 0xF029, 0xD005, 0x1206), seed=0)
        machine.run_frame(instructions_per_frame=4)
        assert machine.framebuffer.sum() > 0

        machine.reset()

        assert machine.framebuffer.sum() == 0
        assert machine.pc == 0x200
        assert machine.instruction_count == 0
        assert machine.trace == []

    def test_views(self):
        machine = Chip8(program(0x2204, 0x0000, 0x1204), seed=0)
        machine.step()

        assert machine.sp == 14
        assert machine.stack[15] == 0x202
        assert machine.scalars() == {"pc": 0x204, "i": 0, "sp": 14, "dt": 0, "st": 0}
        assert machine.framebuffer.shape == (32, 64)
        assert machine.framebuffer.dtype == np.uint8
        assert machine.trace == ["200-2204 CALL 204"]
