"""
preview
=======

Image-free previews of a simulation.

- preview_grid: hue x saturation swatches with their simulated colors
- sweep_colors: the underlying HSV sweep
"""

from cvdsim.preview.grid import GridCell, preview_grid, sweep_colors

__all__ = [
    "GridCell",
    "preview_grid",
    "sweep_colors",
]
