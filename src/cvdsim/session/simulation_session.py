"""
simulation_session.py
---------------------

SimulationSession ties the catalog, the user's selection and the bulk
transform together for an interactive front end.

Responsibilities
----------------
1. Track the selected deficiency type, algorithm and strength.
2. Resolve the selection to a TransformMatrix through the catalog.
3. Render the loaded image with transform_buffer, cancelling any render
   still in flight.
4. Publish finished renders atomically through a FrameStore.

Debouncing of rapid input changes is left to the front end; each render()
call supersedes the previous one.
"""

from __future__ import annotations

import threading
from concurrent.futures import Executor, Future
from typing import NamedTuple

from cvdsim.data.matrices import MatrixCatalog
from cvdsim.data.types import ImageBuffer, TransformMatrix
from cvdsim.errors import TransformCancelled
from cvdsim.preview.grid import GridCell, preview_grid
from cvdsim.session.frames import Frame, FrameStore
from cvdsim.transform.buffer import CancelToken, transform_buffer
from cvdsim.transform.config import TransformConfig


class _Selection(NamedTuple):
    """Selection captured at the start of a render."""

    mode: str
    algorithm: str | None
    strength: float
    matrix: TransformMatrix


class SimulationSession:
    """
    Interactive simulation state.

    Parameters
    ----------
    catalog : MatrixCatalog
        Matrix lookup, built once by the caller.
    mode : str, default="normal"
        Initial deficiency type.
    strength : float, default=0.5
        Initial blend strength.
    config : TransformConfig, optional
        Settings for bulk renders.

    Attributes
    ----------
    frames : FrameStore
        Holds the most recent completed render.
    source : ImageBuffer or None
        The image being simulated.
    """

    def __init__(
        self,
        catalog: MatrixCatalog,
        *,
        mode: str = "normal",
        strength: float = 0.5,
        config: TransformConfig | None = None,
    ):
        self.catalog = catalog
        self.config = config or TransformConfig()
        self.frames = FrameStore()
        self.source: ImageBuffer | None = None

        _ = catalog[mode]  # raises UnknownDeficiency
        self._mode = mode
        self._algorithm = catalog.default_algorithm
        self.strength = float(strength)

        self._lock = threading.Lock()
        self._generation = 0
        self._token: CancelToken | None = None

    # ------------------------------------------------------------------
    # SELECTION
    # ------------------------------------------------------------------
    @property
    def mode(self) -> str:
        return self._mode

    @property
    def algorithm(self) -> str | None:
        """Selected algorithm, or None if the mode has no algorithm choice."""
        if not self.catalog[self._mode].has_algorithms:
            return None
        return self._algorithm

    @property
    def algorithms(self) -> tuple[str, ...]:
        """Algorithms available for the current mode."""
        return self.catalog.algorithms(self._mode)

    def select_mode(self, mode: str) -> None:
        """Switch deficiency type; the algorithm resets to the default."""
        _ = self.catalog[mode]
        with self._lock:
            self._mode = mode
            self._algorithm = self.catalog.default_algorithm

    def select_algorithm(self, algorithm: str) -> None:
        """Switch algorithm within the current deficiency type."""
        with self._lock:
            # validates against the current mode (no-op for single-matrix modes)
            self.catalog.matrix(self._mode, algorithm)
            self._algorithm = algorithm

    @property
    def matrix(self) -> TransformMatrix:
        return self.catalog.matrix(self._mode, self._algorithm)

    # ------------------------------------------------------------------
    # IMAGE
    # ------------------------------------------------------------------
    def load(self, image: ImageBuffer) -> None:
        """Set the image to simulate. The current frame is kept until re-rendered."""
        self.source = image

    def clear(self) -> None:
        """Drop the image, cancel any render and clear the current frame."""
        with self._lock:
            if self._token is not None:
                self._token.cancel()
            self._token = None
            generation = self._generation
        self.source = None
        self.frames.clear(generation)

    def preview(self, rows: int = 12, cols: int = 24) -> list[list[GridCell]]:
        """Preview grid for the current selection."""
        return preview_grid(self.matrix, self.strength, rows, cols)

    # ------------------------------------------------------------------
    # RENDERING
    # ------------------------------------------------------------------
    def _begin_render(self) -> tuple[CancelToken, int, _Selection]:
        with self._lock:
            if self._token is not None:
                self._token.cancel()
            self._generation += 1
            self._token = CancelToken()
            entry = self.catalog[self._mode]
            selection = _Selection(
                mode=self._mode,
                algorithm=self._algorithm if entry.has_algorithms else None,
                strength=self.strength,
                matrix=entry.resolve(
                    self._algorithm, default=self.catalog.default_algorithm
                ),
            )
            return self._token, self._generation, selection

    def render(self) -> Frame | None:
        """
        Render the source image with the current selection.

        Any render still running is cancelled first.

        Returns
        -------
        Frame or None
            The published frame; None if there is no image, the render was
            cancelled, or a newer render already published.
        """
        source = self.source
        if source is None:
            return None
        token, generation, selection = self._begin_render()

        try:
            data = transform_buffer(
                source.data,
                selection.matrix,
                selection.strength,
                config=self.config,
                cancel=token,
            )
        except TransformCancelled:
            return None

        frame = Frame(
            image=ImageBuffer(source.width, source.height, data),
            mode=selection.mode,
            algorithm=selection.algorithm,
            strength=selection.strength,
            generation=generation,
        )
        if token.cancelled or not self.frames.publish(frame):
            return None
        return frame

    def render_async(self, executor: Executor) -> Future:
        """Submit render() to ``executor``; the Future resolves to its result."""
        return executor.submit(self.render)

    def cancel(self) -> None:
        """Cancel the in-flight render, if any."""
        with self._lock:
            if self._token is not None:
                self._token.cancel()
