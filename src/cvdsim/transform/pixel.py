"""
pixel.py
--------

Single-color deficiency simulation.

Used directly for small, interactive color sets (e.g. preview grids, palette
swatches). For whole images use transform_buffer, which runs the same
kernel over many pixels at once.
"""

from __future__ import annotations

import warnings
from typing import Sequence

import jax.numpy as jnp
import numpy as np

from cvdsim.data.types import MatrixLike, RGBColor, as_rgb, as_transform_matrix
from cvdsim.transform.kernel import simulate_rgb


def check_strength(strength: float, *, stacklevel: int = 3) -> float:
    """
    Return ``strength`` as a float, warning if it lies outside [0, 1].

    Out-of-range strengths are extrapolated linearly, never clamped.
    """
    strength = float(strength)
    if not 0.0 <= strength <= 1.0:
        warnings.warn(
            f"strength={strength} is outside [0, 1]; the blend will extrapolate",
            RuntimeWarning,
            stacklevel=stacklevel,
        )
    return strength


def transform_pixel(
    rgb: Sequence[int],
    matrix: MatrixLike,
    strength: float = 1.0,
) -> RGBColor:
    """
    Simulate a color vision deficiency on one color.

    Parameters
    ----------
    rgb : sequence of int
        (r, g, b), each an integer in [0, 255].
    matrix : TransformMatrix or array-like, shape (3, 3)
        Linear-RGB transformation matrix.
    strength : float, default=1.0
        0 returns ``rgb`` unchanged, 1 returns the fully simulated color.

    Returns
    -------
    RGBColor
        A new color. Channels are in [0, 255] when strength is in [0, 1].

    Raises
    ------
    InvalidChannelValue
        If ``rgb`` is not three integers in [0, 255].
    InvalidMatrixShape
        If ``matrix`` is not 3x3.

    Examples
    --------
    >>> from cvdsim.data.types import IDENTITY
    >>> transform_pixel((100, 150, 200), IDENTITY, strength=0.5)
    RGBColor(r=100, g=150, b=200)
    """
    color = as_rgb(rgb)
    m = as_transform_matrix(matrix)
    strength = check_strength(strength)

    out = simulate_rgb(jnp.asarray([color], dtype=jnp.float64), m.as_array(), strength)
    r, g, b = np.asarray(out[0]).astype(np.int64).tolist()
    return RGBColor(r, g, b)
