"""
io.py
-----

I/O utilities for images and matrix catalogs.

Supports:
- Any raster format Pillow can decode, loaded as an RGBA ImageBuffer
- JSON for MatrixCatalog configuration files

Notes
-----
- Images are checked against a size limit before decoding and are
  downsampled on load (default: half size), which keeps interactive
  re-rendering fast on large photos.
- Pixel data is returned as NumPy uint8 arrays (via ImageBuffer).
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from cvdsim.data.matrices import MatrixCatalog
from cvdsim.data.types import ImageBuffer
from cvdsim.errors import ImageTooLarge, UnsupportedImage

PathLike = Union[str, Path]

MAX_IMAGE_BYTES = 10 * 1024 * 1024
DEFAULT_SCALE = 0.5


def load_image(
    path: PathLike,
    *,
    scale: float = DEFAULT_SCALE,
    max_bytes: int | None = MAX_IMAGE_BYTES,
) -> ImageBuffer:
    """
    Decode an image file into an RGBA ImageBuffer.

    Parameters
    ----------
    path : str or Path
        Image file.
    scale : float, default=0.5
        Resize factor applied after decoding. 1.0 keeps the original size.
    max_bytes : int or None, default=10 MiB
        Reject files larger than this. None disables the check.

    Returns
    -------
    ImageBuffer

    Raises
    ------
    ImageTooLarge
        If the file is larger than ``max_bytes``.
    UnsupportedImage
        If Pillow cannot decode the file.
    """
    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale}")
    size = os.path.getsize(path)
    if max_bytes is not None and size > max_bytes:
        raise ImageTooLarge(
            f"{path}: {size} bytes exceeds the {max_bytes}-byte limit"
        )

    try:
        with Image.open(path) as img:
            rgba = img.convert("RGBA")
    except UnidentifiedImageError as err:
        raise UnsupportedImage(f"{path}: not a valid image file") from err

    if scale != 1.0:
        width = max(1, int(rgba.width * scale))
        height = max(1, int(rgba.height * scale))
        rgba = rgba.resize((width, height), Image.Resampling.BILINEAR)

    data = np.asarray(rgba, dtype=np.uint8).reshape(-1)
    return ImageBuffer(width=rgba.width, height=rgba.height, data=data)


def save_image(image: ImageBuffer, path: PathLike) -> None:
    """
    Write an ImageBuffer to disk. The format follows the file extension.

    Parameters
    ----------
    image : ImageBuffer
    path : str or Path
    """
    # (H, W, 4) uint8 is decoded as RGBA
    Image.fromarray(np.ascontiguousarray(image.pixels)).save(path)


def load_catalog(path: PathLike, **kwargs) -> MatrixCatalog:
    """
    Load a MatrixCatalog from a JSON file.

    Parameters
    ----------
    path : str or Path
    **kwargs
        Forwarded to MatrixCatalog (e.g. ``default_algorithm``).

    Returns
    -------
    MatrixCatalog
    """
    with open(path, encoding="utf-8") as f:
        return MatrixCatalog.from_dict(json.load(f), **kwargs)


def save_catalog(catalog: MatrixCatalog, path: PathLike) -> None:
    """
    Save a MatrixCatalog as JSON.
    """
    with open(path, "w", encoding="utf-8") as f:
        json.dump(catalog.to_dict(), f, indent=2)
