# blend_tables/palette_data.py
from __future__ import annotations

"""
Palette loading and read-only lookup.

Exports:
  Palette
    Palette.from_bytes(data) -> Palette       # first 768 bytes, RGB triplets
    Palette.from_rgb(rows)   -> Palette       # (256,3) rows, mainly for tests
    palette.colour_at(i)     -> Colour
    palette.rgb / palette.rgba                # read-only uint8 views
  read_palette_file(path) -> Palette
"""

from pathlib import Path
from typing import Iterator, Sequence, Union

import numpy as np

from .constants import CHANNELS_PER_ENTRY, OPAQUE, PALETTE_BYTES, PALETTE_ENTRIES
from .core_types import Colour, RGBTuple, U8Palette, U8Rows
from .errors import InvalidPaletteSizeError, PaletteReadError


class Palette:
    """Exactly 256 RGBA entries; alpha is 255 for every loaded entry."""

    __slots__ = ("_rgba",)

    def __init__(self, rgba: U8Palette) -> None:
        arr = np.array(rgba, dtype=np.uint8, copy=True)
        if arr.shape != (PALETTE_ENTRIES, 4):
            raise ValueError(f"expected uint8 ({PALETTE_ENTRIES},4) palette")
        arr.setflags(write=False)
        self._rgba = arr

    @classmethod
    def from_bytes(cls, data: Union[bytes, bytearray, memoryview]) -> "Palette":
        """Consume the first 768 bytes as RGB triplets. Trailing bytes are ignored."""
        if len(data) < PALETTE_BYTES:
            raise InvalidPaletteSizeError(len(data), PALETTE_BYTES)
        raw = np.frombuffer(bytes(data[:PALETTE_BYTES]), dtype=np.uint8)
        return cls.from_rgb(raw.reshape(PALETTE_ENTRIES, CHANNELS_PER_ENTRY))

    @classmethod
    def from_rgb(cls, rows: Union[U8Rows, Sequence[RGBTuple]]) -> "Palette":
        """Build from 256 RGB rows with alpha forced to 255."""
        rgb = np.asarray(rows, dtype=np.uint8)
        if rgb.shape != (PALETTE_ENTRIES, CHANNELS_PER_ENTRY):
            raise ValueError(f"expected {PALETTE_ENTRIES} RGB rows, got {rgb.shape}")
        rgba = np.empty((PALETTE_ENTRIES, 4), dtype=np.uint8)
        rgba[:, :3] = rgb
        rgba[:, 3] = OPAQUE
        return cls(rgba)

    @property
    def rgba(self) -> U8Palette:
        return self._rgba

    @property
    def rgb(self) -> U8Rows:
        return self._rgba[:, :3]

    def colour_at(self, index: int) -> Colour:
        if not 0 <= index < PALETTE_ENTRIES:
            raise IndexError(f"palette index out of range: {index}")
        return Colour.from_row(self._rgba[index])

    def to_bytes(self) -> bytes:
        """Raw 768-byte RGB form, as read from disk."""
        return self.rgb.tobytes()

    def __len__(self) -> int:
        return PALETTE_ENTRIES

    def __iter__(self) -> Iterator[Colour]:
        for i in range(PALETTE_ENTRIES):
            yield self.colour_at(i)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Palette):
            return NotImplemented
        return bool(np.array_equal(self._rgba, other._rgba))

    def __hash__(self) -> int:
        return hash(self._rgba.tobytes())


def read_palette_file(path: Union[str, Path]) -> Palette:
    """
    Read a raw palette file (>= 768 bytes, no header).

    Raises:
      PaletteReadError        : file missing or unreadable
      InvalidPaletteSizeError : fewer than 768 bytes
    """
    path = Path(path)
    try:
        with path.open("rb") as fh:
            data = fh.read(PALETTE_BYTES)
    except OSError as e:
        raise PaletteReadError(path, e.strerror or str(e)) from e
    return Palette.from_bytes(data)


__all__ = ["Palette", "read_palette_file"]
