"""
palette.py
----------

Helpers for generating and formatting display colors.

functions:
- hsv_to_rgb(h, s, v): HSV (hue in degrees) to an 8-bit RGBColor
- rgb_to_css(rgb): CSS ``rgb()`` string
"""

from __future__ import annotations

import colorsys
import math
from typing import Sequence

from cvdsim.data.types import RGBColor


def round_half_up(x: float) -> int:
    """Round to the nearest integer, ties toward +inf."""
    return int(math.floor(x + 0.5))


def hsv_to_rgb(h: float, s: float, v: float) -> RGBColor:
    """
    Convert an HSV color to 8-bit RGB.

    Parameters
    ----------
    h : float
        Hue in degrees, [0, 360]. 360 wraps to red.
    s : float
        Saturation, [0, 1].
    v : float
        Value (brightness), [0, 1].

    Returns
    -------
    RGBColor
    """
    r, g, b = colorsys.hsv_to_rgb((h % 360.0) / 360.0, s, v)
    return RGBColor(round_half_up(r * 255), round_half_up(g * 255), round_half_up(b * 255))


def rgb_to_css(rgb: Sequence[int]) -> str:
    """Format an RGB triple as ``rgb(r, g, b)``."""
    return f"rgb({rgb[0]}, {rgb[1]}, {rgb[2]})"
