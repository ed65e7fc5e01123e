"""
errors.py
---------

Exception types raised by cvdsim.

Precondition violations (bad matrix shape, bad channel values, malformed
buffers) signal a bug in the calling layer. They subclass the built-in
exception a caller would otherwise expect (ValueError, KeyError), so
``except ValueError`` keeps working.
"""

from __future__ import annotations


class CVDSimError(Exception):
    """Base class for all cvdsim errors."""


class InvalidMatrixShape(CVDSimError, ValueError):
    """A transformation matrix is not exactly 3x3."""


class InvalidChannelValue(CVDSimError, ValueError):
    """An RGB channel is not an integer in [0, 255]."""


class InvalidBufferLength(CVDSimError, ValueError):
    """A pixel buffer does not hold whole RGBA groups."""


class UnknownDeficiency(CVDSimError, KeyError):
    """No catalog entry for the requested deficiency type."""


class UnknownAlgorithm(CVDSimError, KeyError):
    """The deficiency type has no matrix for the requested algorithm."""


class ImageTooLarge(CVDSimError, ValueError):
    """An image file exceeds the configured size limit."""


class UnsupportedImage(CVDSimError, ValueError):
    """A file could not be decoded as an image."""


class TransformCancelled(CVDSimError, RuntimeError):
    """A bulk transform was cancelled before it completed."""
