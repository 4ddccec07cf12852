"""Tests for framebuffer rendering helpers."""

import jax.numpy as jnp
import numpy as np
import pytest
from chipjax import chip8_display_to_rgb, create_color_scheme, batch_render


def test_display_to_rgb_orientation():
    display = jnp.zeros((64, 32), dtype=jnp.bool_).at[3, 1].set(True)

    rgb = chip8_display_to_rgb(display, scale=1, on_color=(1, 2, 3), off_color=(9, 9, 9))

    assert rgb.shape == (32, 64, 3)
    assert rgb[1, 3].tolist() == [1, 2, 3]
    assert rgb[0, 0].tolist() == [9, 9, 9]


def test_display_to_rgb_scale():
    display = jnp.ones((64, 32), dtype=jnp.bool_)
    rgb = chip8_display_to_rgb(display, scale=2)
    assert rgb.shape == (64, 128, 3)
    assert (rgb[..., 1] == 255).all()


def test_display_shape_checked():
    with pytest.raises(ValueError):
        chip8_display_to_rgb(jnp.zeros((32, 64), dtype=jnp.bool_))


def test_color_schemes():
    assert create_color_scheme("classic") == ((0, 255, 0), (0, 0, 0))
    with pytest.raises(ValueError):
        create_color_scheme("nope")


def test_batch_render_grid():
    displays = jnp.zeros((3, 64, 32), dtype=jnp.bool_)
    grid = batch_render(displays, scale=1, padding=5)

    # 3 displays -> 2x2 grid
    assert grid.shape == (32 * 2 + 5, 64 * 2 + 5, 4)
    assert grid[0, 0, 3] == 255
    assert grid[32, 0, 3] == 0  # padding row is transparent
    assert grid[40, 100, 3] == 0  # empty fourth cell
    assert np.count_nonzero(grid[..., 3]) == 3 * 32 * 64
