"""Draw every hex glyph headlessly and print the screen and trace."""

import time

from chipjax import Chip8, disassemble
from chipjax.logging import ConsoleLogger


def glyph_program() -> bytes:
    """Draw digits 0-F in two rows of eight, then loop forever."""
    words = [0x6000, 0x6100, 0x6200]  # V0 = digit, V1 = x, V2 = y
    words += [
        0xF029,  # 206: I = glyph for V0
        0xD125,  # 208: draw at (V1, V2)
        0x7001,  # 20A: next digit
        0x7106,  # 20C: x += 6
        0x3130,  # 20E: skip if x == 48
        0x1216,  # 210: goto 216
        0x6100,  # 212: x = 0
        0x7206,  # 214: y += 6
        0x3010,  # 216: skip if digit == 16
        0x1206,  # 218: goto 206
        0x121A,  # 21A: halt
    ]
    return b"".join(word.to_bytes(2, "big") for word in words)


if __name__ == "__main__":
    logger = ConsoleLogger(name="demo")
    program = glyph_program()
    for line in disassemble(program):
        logger.debug(line)

    machine = Chip8(program, seed=0)

    start = time.time()
    for _ in range(20):
        machine.run_frame(instructions_per_frame=10)
    logger.info(f"Ran {machine.instruction_count} instructions in {time.time() - start:.2f}s")

    for row in machine.framebuffer:
        print("".join("#" if pixel else "." for pixel in row))

    logger.info("Last instructions:")
    for line in machine.trace:
        logger.info(f"  {line}")
