"""
config.py
---------

Execution settings for bulk pixel transforms.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _default_workers() -> int:
    return max(1, min(4, os.cpu_count() or 1))


@dataclass
class TransformConfig:
    """
    Configuration for transform_buffer.

    Attributes
    ----------
    workers : int
        Size of the thread pool that processes chunks. 1 runs inline.
    chunk_pixels : int
        Pixels per chunk. Every chunk is padded to this size so the
        compiled kernel is reused across chunks.

    Examples
    --------
    >>> # Single-threaded, small chunks (tests, tiny images)
    >>> config = TransformConfig(workers=1, chunk_pixels=1024)
    """

    workers: int = field(default_factory=_default_workers)
    chunk_pixels: int = 1 << 16

    def __post_init__(self):
        """Validate configuration."""
        if self.workers <= 0:
            raise ValueError(f"workers must be positive, got {self.workers}")
        if self.chunk_pixels <= 0:
            raise ValueError(
                f"chunk_pixels must be positive, got {self.chunk_pixels}"
            )
