# blend_tables/analysis.py
from __future__ import annotations

"""
Blend table statistics for debug output.

Exports:
  index_usage(table, top_k=10) -> [(palette_index, count), ...]
  background_kept_share(table) -> float
  foreground_kept_share(table) -> float
  summarise_table(table) -> [(name, value), ...]
"""

from typing import Any, List, Tuple

import numpy as np

from .constants import PALETTE_ENTRIES, TABLE_SIDE
from .core_types import U8Table
from .utils import format_percentage


def _grid(table: U8Table) -> np.ndarray:
    return np.asarray(table, dtype=np.uint8).reshape(TABLE_SIDE, TABLE_SIDE)


def index_usage(table: U8Table, top_k: int = 10) -> List[Tuple[int, int]]:
    """Most used result indices, sorted by count descending then index."""
    counts = np.bincount(np.asarray(table, dtype=np.uint8), minlength=PALETTE_ENTRIES)
    order = sorted(range(PALETTE_ENTRIES), key=lambda i: (-int(counts[i]), i))
    return [(i, int(counts[i])) for i in order[:top_k] if counts[i] > 0]


def background_kept_share(table: U8Table) -> float:
    """Fraction of cells whose result is the background index itself."""
    grid = _grid(table)
    bg = np.arange(TABLE_SIDE, dtype=np.uint8)[:, None]
    return float(np.count_nonzero(grid == bg)) / grid.size


def foreground_kept_share(table: U8Table) -> float:
    """Fraction of cells whose result is the foreground index itself."""
    grid = _grid(table)
    fg = np.arange(TABLE_SIDE, dtype=np.uint8)[None, :]
    return float(np.count_nonzero(grid == fg)) / grid.size


def summarise_table(table: U8Table) -> List[Tuple[str, Any]]:
    """Name/value pairs suited to key_value_pairs_to_string."""
    used = int(np.count_nonzero(np.bincount(np.asarray(table, dtype=np.uint8))))
    top_idx, top_count = index_usage(table, top_k=1)[0]
    return [
        ("Indices used", used),
        ("Top index", f"{top_idx} ({format_percentage(top_count / np.asarray(table).size)})"),
        ("Keeps bg", format_percentage(background_kept_share(table))),
        ("Keeps fg", format_percentage(foreground_kept_share(table))),
    ]


__all__ = [
    "index_usage",
    "background_kept_share",
    "foreground_kept_share",
    "summarise_table",
]
