# blend_tables/__init__.py
"""
blend_tables package.

Purpose:
  Precompute translucency lookup tables for a 256-colour palette. Each table
  maps (background index, foreground index) to the palette index nearest to
  their blend at one of nine transparency levels. See make_tables.py for CLI.

Public API:
  Palette, read_palette_file : palette loading.
  BlendStyle                 : translucent, add, subtract, reversesubtract, modulate.
  composite_pixel            : blend one colour pair.
  nearest_palette_index      : quantise an RGB triple to the palette.
  generate_table             : one 65536-byte table for a level (1..9).
  run_tables                 : ordered generation of a table set into a sink.
  BlendConfig                : immutable run configuration.

Quick start:
  from blend_tables import read_palette_file, BlendStyle, generate_table
  pal = read_palette_file("PLAYPAL.pal")
  table = generate_table(pal, BlendStyle.TRANSLUCENT, 5)
"""

__version__ = "1.0.0"

from .blend import composite_pixel, composite_rows
from .core_types import BlendConfig, Colour
from .errors import (
    BlendTableError,
    InvalidLevelError,
    InvalidPaletteSizeError,
    PaletteReadError,
    TableWriteError,
)
from .nearest import nearest_palette_index, nearest_palette_indices
from .palette_data import Palette, read_palette_file
from .run import FileTableSink, iter_tables, parse_level_digits, run_tables, table_filename
from .style import BlendStyle, parse_blend_style
from .tables import blend_cell, build_table, generate_table, level_to_amount

__all__ = [
    "__version__",
    "Palette",
    "read_palette_file",
    "Colour",
    "BlendConfig",
    "BlendStyle",
    "parse_blend_style",
    "composite_pixel",
    "composite_rows",
    "nearest_palette_index",
    "nearest_palette_indices",
    "level_to_amount",
    "build_table",
    "generate_table",
    "blend_cell",
    "parse_level_digits",
    "table_filename",
    "iter_tables",
    "FileTableSink",
    "run_tables",
    "BlendTableError",
    "InvalidPaletteSizeError",
    "PaletteReadError",
    "TableWriteError",
    "InvalidLevelError",
]
