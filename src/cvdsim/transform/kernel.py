"""
kernel.py
---------

Vectorized deficiency-simulation kernel.

simulate_rgb is the single implementation of the per-pixel math; both
transform_pixel (one pixel) and transform_buffer (chunks of an image) call
it, so the two always agree bit for bit.

Pipeline per pixel
------------------
1. 8-bit sRGB -> [0, 1] -> linear (srgb_to_linear)
2. 3x3 matrix product in linear space
3. linear -> sRGB (linear_to_srgb), x255, round, clamp to [0, 255]
4. blend with the original: original * (1 - strength) + simulated * strength,
   rounded

Rounding is half-up (floor(x + 0.5)) in both places.

Notes
-----
- Matrix output is not clamped before step 3. linear_to_srgb is monotonic
  and fixes 0 and 1, so clamping there would give the same 8-bit result as
  the clamp in step 3.
- The product is written as three elementwise terms rather than a dot so
  every pixel is computed the same way whatever the batch size.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

from cvdsim.color.conversions import linear_to_srgb, srgb_to_linear


def _round_half_up(x: jnp.ndarray) -> jnp.ndarray:
    return jnp.floor(x + 0.5)


@jax.jit
def simulate_rgb(
    rgb: jnp.ndarray,
    matrix: jnp.ndarray,
    strength: float | jnp.ndarray = 1.0,
) -> jnp.ndarray:
    """
    Simulate a color vision deficiency on a batch of RGB colors.

    Parameters
    ----------
    rgb : jnp.ndarray, shape (N, 3)
        8-bit sRGB channel values (any numeric dtype).
    matrix : jnp.ndarray, shape (3, 3)
        Linear-RGB transformation, rows = output channels.
    strength : float
        Blend factor between original (0) and simulated (1). Not clamped.

    Returns
    -------
    jnp.ndarray, shape (N, 3)
        Blended channel values as whole-number floats. In [0, 255] when
        strength is in [0, 1]; callers decide how to store them.
    """
    original = jnp.asarray(rgb, dtype=jnp.float64)
    matrix = jnp.asarray(matrix, dtype=jnp.float64)
    linear = srgb_to_linear(original / 255.0)

    # out[n, i] = m[i, 0] * R[n] + m[i, 1] * G[n] + m[i, 2] * B[n]
    mixed = (
        matrix[:, 0] * linear[:, 0:1]
        + matrix[:, 1] * linear[:, 1:2]
        + matrix[:, 2] * linear[:, 2:3]
    )

    simulated = jnp.clip(_round_half_up(linear_to_srgb(mixed) * 255.0), 0.0, 255.0)

    strength = jnp.asarray(strength, dtype=jnp.float64)
    return _round_half_up(original * (1.0 - strength) + simulated * strength)
