"""
Simulation example: preview grid and before/after image for each deficiency
----------------------------------------------------------------------------

This script walks through the two ways cvdsim is used by a front end:

1. The hue/saturation preview grid, computed one swatch at a time with
   transform_pixel (no image required).
2. A bulk render of an RGBA image with transform_buffer, driven through a
   SimulationSession exactly as an interactive UI would drive it.

No input file is needed: a synthetic test card (hue ramp over a gray ramp,
with a transparent corner) is generated in memory. Pass a path on the
command line to use a real image instead.

Note:
- Strength 0 leaves every color unchanged; strength 1 shows the full
  simulation. The session default is 0.5.
- "normal" and "achromatopsia" have no algorithm choice; the others default
  to "machado".
"""

from __future__ import annotations

import os
import sys

import matplotlib.pyplot as plt
import numpy as np

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../../../src")))
# --8<-- [start:imports]
from cvdsim import ImageBuffer, SimulationSession, default_catalog
from cvdsim.data.io import load_image
from cvdsim.transform import TransformConfig

# --8<-- [end:imports]

PLOTS_DIR = os.path.join(os.path.dirname(__file__), "plots")
STRENGTH = 1.0


def make_test_card(width: int = 256, height: int = 128) -> ImageBuffer:
    """Hue ramp (top half), gray ramp (bottom half), transparent top-left corner."""
    x = np.linspace(0.0, 1.0, width)
    h6 = x * 6.0
    rgb = np.stack(
        [
            np.clip(np.abs(h6 - 3.0) - 1.0, 0.0, 1.0),
            np.clip(2.0 - np.abs(h6 - 2.0), 0.0, 1.0),
            np.clip(2.0 - np.abs(h6 - 4.0), 0.0, 1.0),
        ],
        axis=-1,
    )
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[: height // 2, :, :3] = np.round(rgb * 255).astype(np.uint8)
    pixels[height // 2 :, :, :3] = np.round(x * 255).astype(np.uint8)[:, None]
    pixels[..., 3] = 255
    pixels[:16, :16, 3] = 0
    return ImageBuffer(width=width, height=height, data=pixels)


catalog = default_catalog()
session = SimulationSession(catalog, strength=STRENGTH, config=TransformConfig(workers=4))

if len(sys.argv) > 1:
    source = load_image(sys.argv[1])
else:
    source = make_test_card()
session.load(source)

os.makedirs(PLOTS_DIR, exist_ok=True)

# ---------- Preview grid ----------
# --8<-- [start:preview]
session.select_mode("deuteranopia")
grid = session.preview(rows=12, cols=24)
original = np.array([[cell.original for cell in row] for row in grid], dtype=np.uint8)
simulated = np.array([[cell.simulated for cell in row] for row in grid], dtype=np.uint8)
# --8<-- [end:preview]

fig, axes = plt.subplots(1, 2, figsize=(10, 3))
axes[0].imshow(original)
axes[0].set_title("Original sweep")
axes[1].imshow(simulated)
axes[1].set_title(f"Deuteranopia ({session.algorithm}), strength {STRENGTH:.1f}")
for ax in axes:
    ax.set_xlabel("hue")
    ax.set_ylabel("saturation")
    ax.set_xticks([])
    ax.set_yticks([])
plt.tight_layout()
grid_path = os.path.join(PLOTS_DIR, "preview_grid.png")
fig.savefig(grid_path, dpi=200, bbox_inches="tight")
print(f"Saved preview grid to {grid_path}")
print(grid[0][0].title)
plt.show()

# ---------- Bulk render per deficiency type ----------
keys = [k for k in catalog.keys() if k != "normal"]
fig, axes = plt.subplots(2, (len(keys) + 2) // 2, figsize=(14, 5))
axes = axes.ravel()
axes[0].imshow(source.pixels)
axes[0].set_title("Original")

# --8<-- [start:render]
for ax, key in zip(axes[1:], keys):
    session.select_mode(key)
    frame = session.render()
    ax.imshow(frame.image.pixels)
    label = key if frame.algorithm is None else f"{key} ({frame.algorithm})"
    ax.set_title(label, fontsize=9)
# --8<-- [end:render]

for ax in axes:
    ax.axis("off")
plt.tight_layout()
render_path = os.path.join(PLOTS_DIR, "before_after.png")
fig.savefig(render_path, dpi=200, bbox_inches="tight")
print(f"Saved renders to {render_path}")
plt.show()
