"""Errors raised by the CHIP-8 engine.

Every error is raised before the offending instruction touches the state,
so a host that catches one can still inspect the machine as it was.
"""


class Chip8Error(Exception):
    """Base class for all engine errors."""


class UnimplementedInstructionError(Chip8Error):
    """Opcode does not match any known instruction."""

    def __init__(self, opcode: int, address: int | None = None):
        self.opcode = opcode
        self.address = address
        location = f" at 0x{address:03X}" if address is not None else ""
        super().__init__(f"Unimplemented instruction 0x{opcode:04X}{location}")


class ProgramTooLargeError(Chip8Error):
    """Program does not fit between the program start and the end of memory."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"Program is {size} bytes, at most {limit} bytes fit in memory")


class StackOverflowError(Chip8Error):
    """Subroutine call with every stack slot in use."""

    def __init__(self, address: int):
        self.address = address
        super().__init__(f"Stack overflow calling from 0x{address:03X}")


class StackUnderflowError(Chip8Error):
    """Return with an empty stack."""

    def __init__(self, address: int):
        self.address = address
        super().__init__(f"Stack underflow returning from 0x{address:03X}")


class MemoryAccessError(Chip8Error):
    """Instruction reads or writes past the end of memory."""

    def __init__(self, address: int, opcode: int | None = None):
        self.address = address
        self.opcode = opcode
        what = f" by 0x{opcode:04X}" if opcode is not None else ""
        super().__init__(f"Memory access out of range at 0x{address:X}{what}")
