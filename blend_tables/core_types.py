# blend_tables/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

from dataclasses import dataclass, field
from typing import Callable, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .constants import ALL_LEVELS, DEFAULT_PREFIX, OPAQUE
from .style import BlendStyle

# Basic aliases

RGBTuple = Tuple[int, int, int]
RGBATuple = Tuple[int, int, int, int]

U8Palette = NDArray[np.uint8]  # (256, 4) RGBA rows
U8Rows = NDArray[np.uint8]  # (N, 3) or (N, 4) colour rows
U8Table = NDArray[np.uint8]  # (65536,) palette indices, offset bg * 256 + fg
LevelSet = Tuple[int, ...]  # ascending, distinct, each in 1..9

# Value objects


@dataclass(frozen=True)
class Colour:
    """One 8-bit RGBA colour. Alpha 0 marks an empty background pixel."""

    red: int
    green: int
    blue: int
    alpha: int = OPAQUE

    @property
    def rgb(self) -> RGBTuple:
        return (self.red, self.green, self.blue)

    @property
    def rgba(self) -> RGBATuple:
        return (self.red, self.green, self.blue, self.alpha)

    @classmethod
    def from_row(cls, row: Union[Sequence[int], NDArray[np.generic]]) -> "Colour":
        """Build from a 3- or 4-length row; missing alpha means opaque."""
        values = coerce_to_channel_tuple(row)
        if len(values) == 3:
            return cls(values[0], values[1], values[2])
        return cls(values[0], values[1], values[2], values[3])


@dataclass(frozen=True)
class BlendConfig:
    """
    Immutable run configuration threaded into table generation.

    style   : blend style for every table in the run
    levels  : ascending transparency levels to produce
    prefix  : output filename prefix
    workers : threads splitting the rows of one table
    jobs    : tables computed concurrently (emission stays ascending)
    """

    style: BlendStyle = BlendStyle.TRANSLUCENT
    levels: LevelSet = field(default=ALL_LEVELS)
    prefix: str = DEFAULT_PREFIX
    workers: int = 1
    jobs: int = 1


# Small helpers


def clamp_channel(value: int) -> int:
    """Clamp an integer channel to [0, 255]."""
    return 0 if value < 0 else 255 if value > 255 else value


def coerce_to_channel_tuple(
    value: Union[Sequence[int], NDArray[np.generic]],
) -> Tuple[int, ...]:
    """
    Coerce a 3- or 4-length sequence or array row to a tuple of ints.
    Helpful when extracting values from NumPy rows.
    """
    if isinstance(value, np.ndarray):
        flat = value.reshape(-1)
        if flat.size not in (3, 4):
            raise ValueError("expected an RGB or RGBA row")
        return tuple(int(v) for v in flat.tolist())
    if len(value) not in (3, 4):
        raise ValueError("expected an RGB or RGBA row")
    return tuple(int(v) for v in value)


# Callable signatures

TableSink = Callable[[int, U8Table], object]  # (level, table) -> anything

__all__ = [
    # aliases / types
    "RGBTuple",
    "RGBATuple",
    "U8Palette",
    "U8Rows",
    "U8Table",
    "LevelSet",
    # value objects
    "Colour",
    "BlendConfig",
    # helpers
    "clamp_channel",
    "coerce_to_channel_tuple",
    # callable signatures
    "TableSink",
]
