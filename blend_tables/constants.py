# blend_tables/constants.py
"""
Fixed sizes, defaults and naming shared across the project.

- Palette layout (PALETTE_ENTRIES, PALETTE_BYTES)
- Table layout (TABLE_SIDE, TABLE_SIZE)
- Transparency levels (MIN_LEVEL, MAX_LEVEL, LEVEL_AMOUNT_STEP)
- Output naming (DEFAULT_PREFIX, DEFAULT_LEVEL_DIGITS, TABLE_FILENAME_TEMPLATE)
"""
from __future__ import annotations

from typing import Tuple

# =========================
# Palette layout
# =========================
PALETTE_ENTRIES = 256
CHANNELS_PER_ENTRY = 3
PALETTE_BYTES = PALETTE_ENTRIES * CHANNELS_PER_ENTRY  # 768
OPAQUE = 255
TRANSPARENT = 0

# =========================
# Table layout
# =========================
TABLE_SIDE = PALETTE_ENTRIES
TABLE_SIZE = TABLE_SIDE * TABLE_SIDE  # 65536, offset = bg * 256 + fg

# =========================
# Transparency levels
# =========================
MIN_LEVEL = 1
MAX_LEVEL = 9
ALL_LEVELS: Tuple[int, ...] = tuple(range(MIN_LEVEL, MAX_LEVEL + 1))

# Levels are tenths of full opacity; 10/10 needs no table.
LEVEL_AMOUNT_STEP = 256.0 / 10.0

# Non-translucent styles scale the foreground by amount / 256.
ADDITIVE_DIVISOR = 256.0

# =========================
# Output naming
# =========================
DEFAULT_PREFIX = "TRANS"
DEFAULT_LEVEL_DIGITS = "123456789"
TABLE_FILENAME_TEMPLATE = "{prefix}{level}0.lmp"
PREVIEW_SUFFIX = ".png"
