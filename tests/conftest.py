"""
Central pytest configuration for this project.

This file is automatically discovered by pytest and is intended for:

- **Fixtures**: reusable objects or setup logic shared across multiple test files.
- **Pytest hooks**: project-wide customizations of pytest behavior (e.g., modifying CLI options, adding markers).

Notes
-----
- Contributors should
  install the package in editable mode (`pip install -e .`) so that imports are resolved
  consistently in local dev and CI environments.
- Keep this file focused on test setup. Do not add application logic here.
"""

import numpy as np
import pytest

from cvdsim.data.matrices import default_catalog
from cvdsim.data.types import IDENTITY, TransformMatrix


@pytest.fixture
def catalog():
    """The built-in matrix catalog."""
    return default_catalog()


@pytest.fixture
def identity_matrix():
    return IDENTITY


@pytest.fixture
def achromatopsia_matrix():
    """Luminance-weighted gray: every row is (0.299, 0.587, 0.114)."""
    return TransformMatrix.from_rows([[0.299, 0.587, 0.114]] * 3)


@pytest.fixture
def random_colors():
    """A reproducible set of in-range RGB triples, including the extremes."""
    rng = np.random.default_rng(0)
    colors = [tuple(int(v) for v in c) for c in rng.integers(0, 256, size=(40, 3))]
    return colors + [(0, 0, 0), (255, 255, 255), (255, 0, 0), (0, 255, 0), (0, 0, 255)]


@pytest.fixture
def rgba_buffer():
    """A small random RGBA image, shape (8, 10, 4), with varied alpha."""
    rng = np.random.default_rng(1)
    return rng.integers(0, 256, size=(8, 10, 4), dtype=np.uint8)
