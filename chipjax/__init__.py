"""CHIP-8 virtual machine package."""

from chipjax.state import (
    EmulatorState, StackState, TraceState, create_state,
    framebuffer, registers, stack_contents, scalars
)
from chipjax.emulator import (
    initialize, reset, fetch, execute, step, tick, set_key,
    run_instructions, run_frame, trace_lines
)
from chipjax.decode import Op, DecodedInstruction, decode
from chipjax.disassembler import mnemonic, format_record, disassemble
from chipjax.errors import (
    Chip8Error, UnimplementedInstructionError, ProgramTooLargeError,
    StackOverflowError, StackUnderflowError, MemoryAccessError
)
from chipjax.machine import Chip8
from chipjax.constants import *
from chipjax.rendering import chip8_display_to_rgb, create_color_scheme, batch_render

__all__ = [
    "EmulatorState",
    "StackState",
    "TraceState",
    "create_state",
    "framebuffer",
    "registers",
    "stack_contents",
    "scalars",
    "initialize",
    "reset",
    "fetch",
    "execute",
    "step",
    "tick",
    "set_key",
    "run_instructions",
    "run_frame",
    "trace_lines",
    "Op",
    "DecodedInstruction",
    "decode",
    "mnemonic",
    "format_record",
    "disassemble",
    "Chip8Error",
    "UnimplementedInstructionError",
    "ProgramTooLargeError",
    "StackOverflowError",
    "StackUnderflowError",
    "MemoryAccessError",
    "Chip8",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "chip8_display_to_rgb",
    "create_color_scheme",
    "batch_render",
]
