# blend_tables/nearest.py
from __future__ import annotations

"""
Nearest palette colour by squared Euclidean distance in RGB.

Both paths pick the lowest index among equally close entries:
  nearest_palette_index   : scalar scan, stops at the first exact match
  nearest_palette_indices : vectorised argmin over (N, 256) distances
"""

from typing import Sequence, Union

import numpy as np

from .core_types import RGBTuple, U8Rows
from .palette_data import Palette


def nearest_palette_index(
    rgb: Union[RGBTuple, Sequence[int]], palette: Palette
) -> int:
    """Index of the palette entry closest to rgb. Alpha is ignored."""
    r, g, b = int(rgb[0]), int(rgb[1]), int(rgb[2])
    best_dist = 256 * 256 * 4
    best_idx = 0
    for i, (pr, pg, pb) in enumerate(palette.rgb.tolist()):
        dr = r - pr
        dg = g - pg
        db = b - pb
        dist = dr * dr + dg * dg + db * db
        if dist < best_dist:
            if dist == 0:
                return i
            best_dist = dist
            best_idx = i
    return best_idx


def squared_distances(rgb_rows: np.ndarray, pal_rgb: U8Rows) -> np.ndarray:
    """(N, P) int32 squared RGB distances between rows and palette entries."""
    src = np.asarray(rgb_rows, dtype=np.int32)[:, :3]
    pal = np.asarray(pal_rgb, dtype=np.int32)[:, :3]
    diff = src[:, None, :] - pal[None, :, :]
    return np.einsum("npc,npc->np", diff, diff)


def nearest_palette_indices(rgb_rows: np.ndarray, pal_rgb: U8Rows) -> np.ndarray:
    """For each RGB(A) row, the nearest palette index as uint8."""
    if len(rgb_rows) == 0:
        return np.zeros((0,), dtype=np.uint8)
    dist2 = squared_distances(rgb_rows, pal_rgb)
    # argmin returns the first minimum, matching the scalar tie-break.
    return np.argmin(dist2, axis=1).astype(np.uint8)


__all__ = ["nearest_palette_index", "squared_distances", "nearest_palette_indices"]
