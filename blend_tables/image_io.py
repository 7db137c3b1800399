# blend_tables/image_io.py
from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

from .constants import PREVIEW_SUFFIX, TABLE_SIDE, TABLE_SIZE
from .core_types import U8Table
from .errors import TableWriteError
from .palette_data import Palette

"""
Table file I/O and preview images.

Tables are written as raw bytes. Previews are 256x256 paletted PNGs where row
y is the background index and column x the foreground index.
"""


def _check_table(table: np.ndarray) -> U8Table:
    arr = np.asarray(table)
    if arr.dtype != np.uint8 or arr.shape != (TABLE_SIZE,):
        raise ValueError(f"expected uint8 ({TABLE_SIZE},) table, got {arr.dtype} {arr.shape}")
    return arr


def write_table_file(path: Union[str, Path], table: U8Table) -> Path:
    """Write exactly 65536 bytes. Raises TableWriteError on any OS failure."""
    path = Path(path)
    data = _check_table(table).tobytes()
    try:
        with path.open("wb") as fh:
            fh.write(data)
    except OSError as e:
        raise TableWriteError(path, e.strerror or str(e)) from e
    return path


def read_table_file(path: Union[str, Path]) -> U8Table:
    """Read a table written by write_table_file."""
    data = Path(path).read_bytes()
    if len(data) != TABLE_SIZE:
        raise ValueError(f"{path}: expected {TABLE_SIZE} bytes, got {len(data)}")
    return np.frombuffer(data, dtype=np.uint8).copy()


def table_to_image(table: U8Table, palette: Palette) -> Image.Image:
    """Paletted 256x256 view of a table, coloured with the source palette."""
    grid = _check_table(table).reshape(TABLE_SIDE, TABLE_SIDE)
    im = Image.frombytes("P", (TABLE_SIDE, TABLE_SIDE), grid.tobytes())
    im.putpalette(palette.to_bytes())
    return im


def preview_path_for(table_path: Union[str, Path]) -> Path:
    return Path(table_path).with_suffix(PREVIEW_SUFFIX)


def save_table_preview(
    path: Union[str, Path], table: U8Table, palette: Palette
) -> Path:
    path = Path(path)
    if path.suffix.lower() != PREVIEW_SUFFIX:
        path = path.with_suffix(PREVIEW_SUFFIX)
    try:
        table_to_image(table, palette).save(path)
    except OSError as e:
        raise TableWriteError(path, e.strerror or str(e)) from e
    return path


__all__ = [
    "write_table_file",
    "read_table_file",
    "table_to_image",
    "preview_path_for",
    "save_table_preview",
]
