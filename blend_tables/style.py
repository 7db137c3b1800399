# blend_tables/style.py
from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional

"""
Blend style selection helpers.

Exports:
- BlendStyle
- parse_blend_style(name, current=BlendStyle.TRANSLUCENT) -> BlendStyle
- resolve_blend_style(names, default=BlendStyle.TRANSLUCENT) -> BlendStyle

Notes:
- Names are matched case-insensitively.
- An unrecognised name is not an error: the current style is kept.
"""


class BlendStyle(Enum):
    TRANSLUCENT = "translucent"
    ADD = "add"
    SUBTRACT = "subtract"
    REVERSE_SUBTRACT = "reversesubtract"
    MODULATE = "modulate"


STYLE_NAMES = tuple(s.value for s in BlendStyle)


def parse_blend_style(
    name: Optional[str], current: BlendStyle = BlendStyle.TRANSLUCENT
) -> BlendStyle:
    """
    Map a style name to a BlendStyle.
    - "translucent" | "add" | "subtract" | "reversesubtract" | "modulate"
    - anything else (including None) → current
    """
    if not name:
        return current
    key = name.strip().lower()
    for style in BlendStyle:
        if style.value == key:
            return style
    return current


def resolve_blend_style(
    names: Optional[Iterable[str]], default: BlendStyle = BlendStyle.TRANSLUCENT
) -> BlendStyle:
    """
    Fold several requested names left to right.
    The last recognised name wins; unrecognised ones are skipped.
    """
    style = default
    for name in names or ():
        style = parse_blend_style(name, style)
    return style


__all__ = ["BlendStyle", "STYLE_NAMES", "parse_blend_style", "resolve_blend_style"]
