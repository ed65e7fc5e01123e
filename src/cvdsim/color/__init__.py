"""
color
=====

Per-channel color math.

This subpackage provides:
- conversions : sRGB <-> linear transfer functions (jax.numpy, traceable).
- palette : HSV sweep and CSS formatting helpers for preview grids.
"""

from .conversions import linear_to_srgb, srgb_to_linear
from .palette import hsv_to_rgb, rgb_to_css, round_half_up

__all__ = [
    # conversions
    "srgb_to_linear",
    "linear_to_srgb",
    # palette
    "hsv_to_rgb",
    "rgb_to_css",
    "round_half_up",
]
