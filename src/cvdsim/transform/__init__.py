"""
cvdsim.transform
================

The color transformation pipeline: one pixel, or a whole RGBA buffer.

Includes
--------
- simulate_rgb (kernel): jitted, vectorized per-pixel math
- transform_pixel: one RGBColor in, one RGBColor out
- transform_buffer: RGBA buffer in, new RGBA buffer out (chunked, threaded,
  cancellable)
- TransformConfig: worker count, chunk size
- CancelToken: cooperative cancellation for transform_buffer

All arithmetic runs in jax.numpy; matrices are passed in explicitly, never
looked up here.

Typical usage
-------------
    from cvdsim.transform import transform_pixel, transform_buffer
"""

from .buffer import CancelToken, transform_buffer
from .config import TransformConfig
from .kernel import simulate_rgb
from .pixel import transform_pixel

__all__ = [
    "simulate_rgb",
    "transform_pixel",
    "transform_buffer",
    "TransformConfig",
    "CancelToken",
]
