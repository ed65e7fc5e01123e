"""
grid.py
-------

Hue/saturation preview grid.

Shows how a sweep of fully bright colors looks under a deficiency
simulation, without needing an image:
- rows step saturation from 1/rows up to 1
- columns step hue from 0 to 360 degrees (both ends included)

Each cell is computed with transform_pixel, one call per cell.
"""

from __future__ import annotations

from dataclasses import dataclass

from cvdsim.color.palette import hsv_to_rgb, rgb_to_css, round_half_up
from cvdsim.data.types import MatrixLike, RGBColor, as_transform_matrix
from cvdsim.transform.pixel import transform_pixel

DEFAULT_ROWS = 12
DEFAULT_COLS = 24


@dataclass(frozen=True)
class GridCell:
    """
    One swatch of the preview grid.

    Attributes
    ----------
    row, col : int
        Position in the grid.
    hue : float
        Degrees, [0, 360].
    saturation : float
        (0, 1].
    original : RGBColor
        The swept color.
    simulated : RGBColor
        ``original`` under the simulation.
    """

    row: int
    col: int
    hue: float
    saturation: float
    original: RGBColor
    simulated: RGBColor

    @property
    def title(self) -> str:
        """Tooltip text describing the cell."""
        return (
            f"Hue: {round_half_up(self.hue)}°, Sat: {self.saturation:.2f}\n"
            f"Original: {rgb_to_css(self.original)}\n"
            f"Simulated: {rgb_to_css(self.simulated)}"
        )


def sweep_colors(
    rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS
) -> list[list[tuple[float, float, RGBColor]]]:
    """
    Generate the (hue, saturation, color) sweep without simulating it.

    Returns
    -------
    list of rows, each a list of (hue, saturation, RGBColor)
    """
    if rows < 1 or cols < 1:
        raise ValueError(f"grid needs at least one row and column, got {rows}x{cols}")
    grid = []
    for row in range(rows):
        saturation = (row + 1) / rows
        line = []
        for col in range(cols):
            hue = (col / (cols - 1)) * 360.0 if cols > 1 else 0.0
            line.append((hue, saturation, hsv_to_rgb(hue, saturation, 1.0)))
        grid.append(line)
    return grid


def preview_grid(
    matrix: MatrixLike,
    strength: float = 1.0,
    rows: int = DEFAULT_ROWS,
    cols: int = DEFAULT_COLS,
) -> list[list[GridCell]]:
    """
    Build the preview grid for a matrix and strength.

    Parameters
    ----------
    matrix : TransformMatrix or array-like, shape (3, 3)
    strength : float, default=1.0
    rows, cols : int, default=12, 24

    Returns
    -------
    list of rows of GridCell
    """
    m = as_transform_matrix(matrix)
    return [
        [
            GridCell(
                row=r,
                col=c,
                hue=hue,
                saturation=sat,
                original=rgb,
                simulated=transform_pixel(rgb, m, strength),
            )
            for c, (hue, sat, rgb) in enumerate(line)
        ]
        for r, line in enumerate(sweep_colors(rows, cols))
    ]
