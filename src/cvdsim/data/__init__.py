"""
cvdsim.data
===========

submodule for the values the transform pipeline consumes and produces.

Includes:
- types: RGBColor, TransformMatrix, ImageBuffer and their validators
- matrices: DeficiencyType, MatrixCatalog, default_catalog
- io: load/save images (Pillow) and catalogs (JSON)
"""

from .matrices import DEFAULT_ALGORITHM, DeficiencyType, MatrixCatalog, default_catalog
from .types import (
    IDENTITY,
    ImageBuffer,
    RGBColor,
    TransformMatrix,
    as_pixel_buffer,
    as_rgb,
    as_transform_matrix,
)

__all__ = [
    "DEFAULT_ALGORITHM",
    "DeficiencyType",
    "MatrixCatalog",
    "default_catalog",
    "IDENTITY",
    "ImageBuffer",
    "RGBColor",
    "TransformMatrix",
    "as_pixel_buffer",
    "as_rgb",
    "as_transform_matrix",
]
