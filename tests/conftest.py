import os
import sys

import numpy as np
import pytest

# Ensure the repository root is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from blend_tables.palette_data import Palette


def make_bw_palette() -> Palette:
    """Index 0 black, index 1 white, everything else mid grey."""
    rows = np.full((256, 3), 128, dtype=np.uint8)
    rows[0] = (0, 0, 0)
    rows[1] = (255, 255, 255)
    return Palette.from_rgb(rows)


def make_random_palette(seed: int = 7) -> Palette:
    rng = np.random.default_rng(seed)
    rows = rng.integers(0, 256, size=(256, 3), dtype=np.uint8)
    return Palette.from_rgb(rows)


@pytest.fixture
def bw_palette() -> Palette:
    return make_bw_palette()


@pytest.fixture
def random_palette() -> Palette:
    return make_random_palette()


@pytest.fixture
def palette_file(tmp_path, random_palette):
    path = tmp_path / "test.pal"
    path.write_bytes(random_palette.to_bytes())
    return path
