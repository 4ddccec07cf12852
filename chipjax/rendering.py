"""Framebuffer-to-image helpers for host renderers.

Nothing here opens a window; hosts blit the returned arrays themselves.
"""

from typing import Tuple

import jax.numpy as jnp
import numpy as np

from chipjax.constants import SCREEN_WIDTH, SCREEN_HEIGHT

Color = Tuple[int, int, int]

COLOR_SCHEMES = {
    "classic": ((0, 255, 0), (0, 0, 0)),  # Green on black
    "amber": ((255, 176, 0), (0, 0, 0)),  # Amber on black
    "white": ((255, 255, 255), (0, 0, 0)),  # White on black
    "blue": ((0, 255, 255), (0, 0, 64)),  # Cyan on dark blue
}


def chip8_display_to_rgb(
    display: jnp.ndarray,
    scale: int = 8,
    on_color: Color = (0, 255, 0),
    off_color: Color = (0, 0, 0),
) -> np.ndarray:
    """Convert the CHIP-8 display to an RGB array with optional upscaling.

    Args:
        display: Boolean array of shape (64, 32), indexed ``[x, y]``
        scale: Upscaling factor (default: 8x)
        on_color: RGB color for lit pixels
        off_color: RGB color for dark pixels

    Returns:
        uint8 array of shape (32*scale, 64*scale, 3)
    """
    pixels = np.asarray(display, dtype=np.bool_)
    if pixels.shape != (SCREEN_WIDTH, SCREEN_HEIGHT):
        raise ValueError(f"Expected display shape ({SCREEN_WIDTH}, {SCREEN_HEIGHT}), got {pixels.shape}")

    # (64 width, 32 height) -> (32 rows, 64 columns)
    pixels = pixels.T

    rgb_frame = np.empty((*pixels.shape, 3), dtype=np.uint8)
    rgb_frame[pixels] = on_color
    rgb_frame[~pixels] = off_color

    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    return rgb_frame


def create_color_scheme(scheme: str = "classic") -> Tuple[Color, Color]:
    """Get a predefined ``(on_color, off_color)`` pair."""
    if scheme not in COLOR_SCHEMES:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(COLOR_SCHEMES.keys())}"
        )
    return COLOR_SCHEMES[scheme]


def batch_render(
    displays: jnp.ndarray, scale: int = 4, color_scheme: str = "classic", padding: int = 5
) -> np.ndarray:
    """Render several displays in a grid with transparent spacing.

    Args:
        displays: Array of shape (batch_size, 64, 32)
        scale: Upscaling factor for each display
        color_scheme: Color scheme name
        padding: Transparent gap between displays, in output pixels

    Returns:
        RGBA array with the displays laid out row by row
    """
    batch_size = displays.shape[0]
    on_color, off_color = create_color_scheme(color_scheme)

    grid_cols = int(np.ceil(np.sqrt(batch_size)))
    grid_rows = int(np.ceil(batch_size / grid_cols))

    display_height, display_width = SCREEN_HEIGHT * scale, SCREEN_WIDTH * scale
    grid_height = grid_rows * display_height + (grid_rows - 1) * padding
    grid_width = grid_cols * display_width + (grid_cols - 1) * padding
    grid_image = np.zeros((grid_height, grid_width, 4), dtype=np.uint8)

    for i in range(batch_size):
        rgb = chip8_display_to_rgb(displays[i], scale, on_color, off_color)
        row, col = divmod(i, grid_cols)
        y_start = row * (display_height + padding)
        x_start = col * (display_width + padding)
        grid_image[y_start:y_start + display_height, x_start:x_start + display_width, :3] = rgb
        grid_image[y_start:y_start + display_height, x_start:x_start + display_width, 3] = 255

    return grid_image
