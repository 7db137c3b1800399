# blend_tables/errors.py
from __future__ import annotations

"""
Error kinds raised by the library.

Library code raises these; only the CLI turns them into log lines and an exit
status. The IO errors subclass OSError so callers catching OSError still see
them.
"""

from pathlib import Path
from typing import Optional, Union


class BlendTableError(Exception):
    """Base class for every error raised by blend_tables."""


class InvalidPaletteSizeError(BlendTableError, ValueError):
    """Palette data is shorter than 256 RGB triplets."""

    def __init__(self, size: int, expected: int) -> None:
        super().__init__(
            f"palette has incorrect size: {size} bytes, need at least {expected}"
        )
        self.size = size
        self.expected = expected


class PaletteReadError(BlendTableError, OSError):
    """Palette file could not be opened or read."""

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None) -> None:
        msg = f"could not read palette file {path}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.path = Path(path)


class TableWriteError(BlendTableError, OSError):
    """A blend table (or its preview) could not be written."""

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None) -> None:
        msg = f"could not write {path}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.path = Path(path)


class InvalidLevelError(BlendTableError, ValueError):
    """Transparency level outside 1..9."""

    def __init__(self, level: object) -> None:
        super().__init__(f"transparency level must be in 1..9, got {level!r}")
        self.level = level


__all__ = [
    "BlendTableError",
    "InvalidPaletteSizeError",
    "PaletteReadError",
    "TableWriteError",
    "InvalidLevelError",
]
