"""
cvdsim
======

Color vision deficiency simulation for design and accessibility review.

Colors are remapped through 3x3 matrices in linear RGB and blended with the
original by a strength factor. The same jitted JAX kernel handles a single
color (preview swatches) and whole RGBA images (chunked across a thread
pool).

----------------------------------------------------------------------
Workflow
----------------------------------------------------------------------

Core design
-----------
1. Color conversions (color/conversions.py):
   - srgb_to_linear / linear_to_srgb, the piecewise sRGB transfer curve.

2. Transform (transform/):
   - kernel.simulate_rgb: decode -> matrix -> encode -> clamp -> blend,
     vectorized over N pixels.
   - transform_pixel: one RGBColor, validated.
   - transform_buffer: an RGBA buffer, alpha preserved, cancellable.

3. Catalog (data/matrices.py):
   - MatrixCatalog maps (deficiency type, algorithm) to a TransformMatrix.
   - Built once by the caller and passed in; the transform never looks it up.

4. Session (session/):
   - SimulationSession keeps the selection and renders the loaded image.
   - FrameStore publishes a finished render in one atomic swap.

Unified import style
--------------------
Top-level:
  from cvdsim import transform_pixel, transform_buffer, default_catalog
  from cvdsim import SimulationSession, TransformConfig, CancelToken

Subpackages:
  from cvdsim.color import srgb_to_linear, linear_to_srgb, hsv_to_rgb, rgb_to_css
  from cvdsim.data import RGBColor, TransformMatrix, ImageBuffer, MatrixCatalog
  from cvdsim.data.io import load_image, save_image, load_catalog, save_catalog
  from cvdsim.preview import preview_grid
  from cvdsim.session import SimulationSession, FrameStore, Frame

Data flow
---------
- catalog = default_catalog() (or data.io.load_catalog(path))
- matrix = catalog.matrix("deuteranopia", "machado")
- transform_pixel((255, 0, 0), matrix, strength=1.0) -> RGBColor
- transform_buffer(image.data, matrix, strength=0.5) -> new uint8 buffer

Numerics
--------
- No clamp between the matrix product and the sRGB encode; the 8-bit
  result is clamped to [0, 255].
- Rounding is half-up.
- Importing cvdsim enables jax_enable_x64; the pipeline computes in float64.
- Strength is not clamped. Values outside [0, 1] extrapolate and emit a
  RuntimeWarning.

----------------------------------------------------------------------
"""

import jax

# 8-bit rounding needs double precision; must run before any array is created
jax.config.update("jax_enable_x64", True)

# Re-export subpackages for unified import style (e.g., cvdsim.transform)
from . import color as color
from . import data as data
from . import preview as preview
from . import session as session
from . import transform as transform

# Color math
from .color.conversions import linear_to_srgb, srgb_to_linear

# Data
from .data.matrices import DeficiencyType, MatrixCatalog, default_catalog
from .data.types import IDENTITY, ImageBuffer, RGBColor, TransformMatrix

# Errors
from .errors import (
    CVDSimError,
    ImageTooLarge,
    InvalidBufferLength,
    InvalidChannelValue,
    InvalidMatrixShape,
    TransformCancelled,
    UnknownAlgorithm,
    UnknownDeficiency,
    UnsupportedImage,
)
from .preview.grid import GridCell, preview_grid

# Orchestration
from .session.frames import Frame, FrameStore
from .session.simulation_session import SimulationSession

# Transform
from .transform.buffer import CancelToken, transform_buffer
from .transform.config import TransformConfig
from .transform.pixel import transform_pixel

__version__ = "0.1.0"

__all__ = [
    # Color math
    "srgb_to_linear",
    "linear_to_srgb",
    # Transform
    "transform_pixel",
    "transform_buffer",
    "TransformConfig",
    "CancelToken",
    # Data
    "RGBColor",
    "TransformMatrix",
    "ImageBuffer",
    "IDENTITY",
    "DeficiencyType",
    "MatrixCatalog",
    "default_catalog",
    # Preview
    "GridCell",
    "preview_grid",
    # Session orchestration
    "SimulationSession",
    "FrameStore",
    "Frame",
    # Errors
    "CVDSimError",
    "InvalidMatrixShape",
    "InvalidChannelValue",
    "InvalidBufferLength",
    "UnknownDeficiency",
    "UnknownAlgorithm",
    "ImageTooLarge",
    "UnsupportedImage",
    "TransformCancelled",
    # Subpackages
    "color",
    "data",
    "transform",
    "preview",
    "session",
]
