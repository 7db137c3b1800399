# blend_tables/tables.py
from __future__ import annotations

"""
Blend table generation.

A table has one byte per (background, foreground) pair, laid out background
major: offset = bg * 256 + fg. Each byte is the palette index nearest to the
composited colour.

Exports:
  level_to_amount(level) -> int
  build_table(palette, style, amount, workers=1) -> U8Table
  generate_table(palette, style, level, workers=1) -> U8Table
  blend_cell(palette, style, amount, bg, fg) -> int
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Tuple

import numpy as np

from .blend import composite_pixel, composite_rows
from .constants import LEVEL_AMOUNT_STEP, MAX_LEVEL, MIN_LEVEL, TABLE_SIDE, TABLE_SIZE
from .core_types import U8Table
from .errors import InvalidLevelError
from .nearest import nearest_palette_index, nearest_palette_indices
from .palette_data import Palette
from .style import BlendStyle
from .utils import split_rows_into_parts

ROWS_PER_BLOCK = 16


def validate_level(level: int) -> int:
    """Return level as int, or raise InvalidLevelError outside 1..9."""
    if isinstance(level, bool) or not isinstance(level, (int, np.integer)):
        raise InvalidLevelError(level)
    if not MIN_LEVEL <= int(level) <= MAX_LEVEL:
        raise InvalidLevelError(level)
    return int(level)


def level_to_amount(level: int) -> int:
    """
    Blend amount for a transparency level.

    Levels are tenths of full opacity and the product is truncated, so level 9
    gives 230 rather than 255: 25, 51, 76, 102, 128, 153, 179, 204, 230.
    """
    level = validate_level(level)
    return int(np.float32(LEVEL_AMOUNT_STEP) * np.float32(level))


def _fill_rows(
    out: U8Table,
    palette: Palette,
    style: BlendStyle,
    amount: int,
    span: Tuple[int, int],
) -> None:
    """Fill background rows [start, end) of out in place."""
    start, end = span
    rgba = palette.rgba
    # Blocks keep the (cells, 256) distance matrix around 12 MB.
    for lo in range(start, end, ROWS_PER_BLOCK):
        hi = min(lo + ROWS_PER_BLOCK, end)
        bg = np.repeat(rgba[lo:hi], TABLE_SIDE, axis=0)
        fg = np.tile(rgba, (hi - lo, 1))
        blended = composite_rows(bg, fg, style, amount)
        out[lo * TABLE_SIDE : hi * TABLE_SIDE] = nearest_palette_indices(
            blended, palette.rgb
        )


def build_table(
    palette: Palette, style: BlendStyle, amount: int, workers: int = 1
) -> U8Table:
    """
    Blend every (background, foreground) pair at the given amount (0..255).

    Background rows are independent, so with workers > 1 they are split into
    contiguous spans and filled on a thread pool. The palette is read-only and
    each span writes a disjoint slice of the output.
    """
    out = np.zeros((TABLE_SIZE,), dtype=np.uint8)
    workers = max(1, int(workers))
    spans = split_rows_into_parts(TABLE_SIDE, workers)
    if workers == 1 or len(spans) == 1:
        for span in spans:
            _fill_rows(out, palette, style, amount, span)
        return out

    with ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [
            ex.submit(_fill_rows, out, palette, style, amount, span) for span in spans
        ]
        for fut in futures:
            fut.result()
    return out


def generate_table(
    palette: Palette, style: BlendStyle, level: int, workers: int = 1
) -> U8Table:
    """Blend table for one transparency level (1..9)."""
    return build_table(palette, style, level_to_amount(level), workers=workers)


def blend_cell(
    palette: Palette, style: BlendStyle, amount: int, bg: int, fg: int
) -> int:
    """
    Reference result for a single table cell, computed with the scalar
    compositor and the scalar nearest search.
    """
    result = composite_pixel(palette.colour_at(bg), palette.colour_at(fg), style, amount)
    return nearest_palette_index(result.rgb, palette)


__all__ = [
    "validate_level",
    "level_to_amount",
    "build_table",
    "generate_table",
    "blend_cell",
]
