"""
buffer.py
---------

Bulk deficiency simulation over RGBA pixel buffers.

MVP implementation:
- Splits the buffer into contiguous chunks of pixels.
- Runs the jitted kernel on each chunk, on a fixed-size thread pool.
- Copies alpha through untouched.
- Writes into a fresh output array; the input is never modified.

Cancellation
------------
A CancelToken is checked before each chunk and once more after all chunks
have finished. A cancelled run raises TransformCancelled instead of
returning, so a partially transformed buffer never reaches the caller.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import jax.numpy as jnp
import numpy as np

from cvdsim.data.types import (
    CHANNELS,
    SAMPLES_PER_PIXEL,
    MatrixLike,
    as_pixel_buffer,
    as_transform_matrix,
)
from cvdsim.errors import TransformCancelled
from cvdsim.transform.config import TransformConfig
from cvdsim.transform.kernel import simulate_rgb
from cvdsim.transform.pixel import check_strength


class CancelToken:
    """
    Cooperative cancellation flag for an in-flight transform.

    Thread-safe; cancel() may be called from any thread.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise TransformCancelled("transform was cancelled")


def _chunk_bounds(n_pixels: int, chunk_pixels: int) -> list[tuple[int, int]]:
    return [
        (start, min(start + chunk_pixels, n_pixels))
        for start in range(0, n_pixels, chunk_pixels)
    ]


def transform_buffer(
    buffer,
    matrix: MatrixLike,
    strength: float = 1.0,
    *,
    config: TransformConfig | None = None,
    cancel: CancelToken | None = None,
) -> np.ndarray:
    """
    Simulate a color vision deficiency on every pixel of an RGBA buffer.

    Parameters
    ----------
    buffer : bytes, bytearray, sequence of int, or array
        RGBA samples; total length a multiple of 4. Arrays may be shaped,
        e.g. (H, W, 4).
    matrix : TransformMatrix or array-like, shape (3, 3)
        Linear-RGB transformation matrix.
    strength : float, default=1.0
        Blend factor, as in transform_pixel.
    config : TransformConfig, optional
        Worker count and chunk size. Defaults to TransformConfig().
    cancel : CancelToken, optional
        Token checked between chunks.

    Returns
    -------
    np.ndarray
        New uint8 array with the same shape as ``buffer``. RGB samples equal
        transform_pixel applied to each pixel (clamped to [0, 255] when an
        out-of-range strength extrapolates past it); alpha samples are
        copied unchanged.

    Raises
    ------
    InvalidBufferLength
        If the buffer does not hold whole RGBA groups.
    InvalidChannelValue
        If samples are not integers in [0, 255].
    InvalidMatrixShape
        If ``matrix`` is not 3x3.
    TransformCancelled
        If ``cancel`` was triggered before the run completed.
    """
    config = config or TransformConfig()
    data = as_pixel_buffer(buffer)
    m = as_transform_matrix(matrix).as_array()
    strength = check_strength(strength)

    pixels = data.reshape(-1, SAMPLES_PER_PIXEL)
    out = pixels.copy()
    n_pixels = pixels.shape[0]
    chunk = min(config.chunk_pixels, max(n_pixels, 1))

    def run_chunk(bounds: tuple[int, int]) -> None:
        if cancel is not None:
            cancel.raise_if_cancelled()
        start, stop = bounds
        rgb = np.zeros((chunk, CHANNELS), dtype=np.float64)
        rgb[: stop - start] = pixels[start:stop, :CHANNELS]
        result = np.asarray(simulate_rgb(jnp.asarray(rgb), m, strength))
        # disjoint row ranges; no lock needed
        out[start:stop, :CHANNELS] = np.clip(result[: stop - start], 0, 255).astype(
            np.uint8
        )

    bounds = _chunk_bounds(n_pixels, chunk)
    if config.workers == 1 or len(bounds) <= 1:
        for b in bounds:
            run_chunk(b)
    else:
        with ThreadPoolExecutor(max_workers=config.workers) as pool:
            futures = [pool.submit(run_chunk, b) for b in bounds]
            try:
                for f in futures:
                    f.result()
            except TransformCancelled:
                for f in futures:
                    f.cancel()
                raise

    if cancel is not None:
        cancel.raise_if_cancelled()
    return out.reshape(data.shape)
