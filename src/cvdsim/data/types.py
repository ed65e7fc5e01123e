"""
types.py
--------

Value types shared across cvdsim.

defines:
- RGBColor: immutable 8-bit sRGB triple
- TransformMatrix: immutable 3x3 linear-RGB transformation matrix
- ImageBuffer: decoded image as a flat RGBA pixel buffer

Notes
-----
- Pixel data is held in NumPy (mutable!) uint8 arrays for I/O and storage.
- Arithmetic happens in jax.numpy inside cvdsim.transform; convert with
  TransformMatrix.as_array() or jnp.asarray() only at that boundary.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import NamedTuple, Sequence, Union

import jax.numpy as jnp
import numpy as np

from cvdsim.errors import InvalidBufferLength, InvalidChannelValue, InvalidMatrixShape

CHANNELS = 3
SAMPLES_PER_PIXEL = 4  # R, G, B, A


class RGBColor(NamedTuple):
    """An 8-bit sRGB color. Channels are integers, nominally in [0, 255]."""

    r: int
    g: int
    b: int


def _is_channel(value) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, numbers.Integral) and 0 <= value <= 255


def as_rgb(value: Sequence[int]) -> RGBColor:
    """
    Validate an (r, g, b) triple and return it as an RGBColor.

    Parameters
    ----------
    value : sequence of int
        Three integer channels in [0, 255].

    Returns
    -------
    RGBColor

    Raises
    ------
    InvalidChannelValue
        If ``value`` is not a triple, or any channel is non-integral
        (floats and booleans included) or outside [0, 255].
    """
    if isinstance(value, (str, bytes)):
        raise InvalidChannelValue(f"expected an (r, g, b) triple, got {value!r}")
    try:
        channels = tuple(value)
    except TypeError as err:
        raise InvalidChannelValue(
            f"expected an (r, g, b) triple, got {value!r}"
        ) from err
    if len(channels) != CHANNELS:
        raise InvalidChannelValue(
            f"expected 3 channels, got {len(channels)}: {channels!r}"
        )
    for name, channel in zip("rgb", channels):
        if not _is_channel(channel):
            raise InvalidChannelValue(
                f"channel {name} must be an integer in [0, 255], got {channel!r}"
            )
    return RGBColor(*(int(c) for c in channels))


@dataclass(frozen=True)
class TransformMatrix:
    """
    3x3 transformation applied to linear RGB.

    Attributes
    ----------
    rows : tuple of three 3-tuples of float
        ``rows[i][j]`` is the contribution of input channel j to output
        channel i, channels ordered (R, G, B).

    Notes
    -----
    No constraint is placed on the values; a misconfigured matrix can map
    colors out of gamut. The pixel transform clamps its output.
    """

    rows: tuple[tuple[float, float, float], ...]

    def __post_init__(self):
        """Validate shape."""
        if len(self.rows) != CHANNELS or any(len(r) != CHANNELS for r in self.rows):
            raise InvalidMatrixShape(
                f"transformation matrix must be 3x3, got rows {self.rows!r}"
            )

    @classmethod
    def from_rows(cls, rows) -> TransformMatrix:
        """Build from nested sequences or an array of shape (3, 3)."""
        try:
            arr = np.asarray(rows, dtype=float)
        except (TypeError, ValueError) as err:
            raise InvalidMatrixShape(
                f"transformation matrix must be a 3x3 grid of numbers: {err}"
            ) from err
        if arr.shape != (CHANNELS, CHANNELS):
            raise InvalidMatrixShape(
                f"transformation matrix must be 3x3, got shape {arr.shape}"
            )
        return cls(tuple(tuple(float(v) for v in row) for row in arr))

    def as_array(self) -> jnp.ndarray:
        """Return the matrix as a float jnp array of shape (3, 3)."""
        return jnp.asarray(self.rows, dtype=jnp.float64)

    def to_list(self) -> list[list[float]]:
        return [list(row) for row in self.rows]

    def __getitem__(self, index):
        return self.rows[index]


IDENTITY = TransformMatrix(((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)))

MatrixLike = Union[TransformMatrix, Sequence[Sequence[float]], np.ndarray, jnp.ndarray]


def as_transform_matrix(matrix: MatrixLike) -> TransformMatrix:
    """
    Coerce ``matrix`` to a TransformMatrix.

    Raises
    ------
    InvalidMatrixShape
        If ``matrix`` is not exactly 3x3.
    """
    if isinstance(matrix, TransformMatrix):
        return matrix
    return TransformMatrix.from_rows(matrix)


def as_pixel_buffer(data) -> np.ndarray:
    """
    Validate RGBA sample data and return it as a uint8 NumPy array.

    Parameters
    ----------
    data : bytes, bytearray, memoryview, sequence of int, or array
        Samples in repeating R, G, B, A order. Arrays may have any shape
        (e.g. (H, W, 4)) as long as their total size is a multiple of 4.

    Returns
    -------
    np.ndarray
        uint8 array with the same shape as ``data`` (1-D for bytes and
        sequences). May share memory with ``data``; callers must not mutate.

    Raises
    ------
    InvalidBufferLength
        If the number of samples is not a multiple of 4.
    InvalidChannelValue
        If samples are non-integral or outside [0, 255].
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        arr = np.frombuffer(data, dtype=np.uint8)
    else:
        arr = np.asarray(data)
        if arr.size == 0:
            arr = arr.astype(np.uint8)
        elif arr.dtype != np.uint8:
            if arr.dtype.kind not in "iu":
                raise InvalidChannelValue(
                    f"pixel samples must be integers, got dtype {arr.dtype}"
                )
            if arr.min() < 0 or arr.max() > 255:
                raise InvalidChannelValue("pixel samples must lie in [0, 255]")
            arr = arr.astype(np.uint8)

    if arr.size % SAMPLES_PER_PIXEL != 0:
        raise InvalidBufferLength(
            f"RGBA buffer length must be a multiple of 4, got {arr.size}"
        )
    return arr


@dataclass(frozen=True)
class ImageBuffer:
    """
    A decoded image.

    Attributes
    ----------
    width, height : int
        Dimensions in pixels.
    data : np.ndarray
        Flat uint8 RGBA samples, length ``width * height * 4``, row-major.
    """

    width: int
    height: int
    data: np.ndarray

    def __post_init__(self):
        """Validate that ``data`` matches the dimensions."""
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"image dimensions must be non-negative, got {self.width}x{self.height}"
            )
        data = as_pixel_buffer(self.data).reshape(-1)
        expected = self.width * self.height * SAMPLES_PER_PIXEL
        if data.size != expected:
            raise InvalidBufferLength(
                f"{self.width}x{self.height} RGBA image needs {expected} samples, "
                f"got {data.size}"
            )
        object.__setattr__(self, "data", data)

    @property
    def pixels(self) -> np.ndarray:
        """View of ``data`` with shape (height, width, 4)."""
        return self.data.reshape(self.height, self.width, SAMPLES_PER_PIXEL)

    def __len__(self) -> int:
        """Return number of pixels."""
        return self.width * self.height
