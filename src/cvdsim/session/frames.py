"""
frames.py
---------

Atomic hand-off of rendered images to a display stage.

A render writes into its own private buffer. Only a completed render is
wrapped in a Frame and installed with FrameStore.publish(), which swaps the
current frame under a lock. Readers therefore see either the previous frame
or the new one, never a half-transformed image.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass

from cvdsim.data.types import ImageBuffer


@dataclass(frozen=True)
class Frame:
    """
    A completed render.

    Attributes
    ----------
    image : ImageBuffer
        Simulated image (data is read-only).
    mode : str
        Deficiency key used.
    algorithm : str | None
        Algorithm used, or None for single-matrix deficiency types.
    strength : float
        Blend strength used.
    generation : int
        Render sequence number; higher is newer.
    """

    image: ImageBuffer
    mode: str
    algorithm: str | None
    strength: float
    generation: int


class FrameStore:
    """
    Holds the current Frame and replaces it atomically.

    Frames older than the current one (lower generation) are rejected, so a
    slow render that finishes late cannot overwrite a newer result.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._current: Frame | None = None
        self._generation = -1

    @property
    def current(self) -> Frame | None:
        with self._lock:
            return self._current

    def publish(self, frame: Frame) -> bool:
        """
        Install ``frame`` as current.

        Returns
        -------
        bool
            True if installed, False if its generation is stale (a newer
            frame was published, or clear() retired it).
        """
        frame.image.data.flags.writeable = False
        with self._lock:
            if frame.generation <= self._generation:
                return False
            self._current = frame
            self._generation = frame.generation
            return True

    def clear(self, generation: int | None = None) -> None:
        """
        Drop the current frame.

        If ``generation`` is given, frames up to and including it are
        rejected from now on.
        """
        with self._lock:
            self._current = None
            if generation is not None:
                self._generation = max(self._generation, generation)
