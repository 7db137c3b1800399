# blend_tables/blend.py
from __future__ import annotations

"""
Pixel compositing for the five blend styles.

composite_pixel : one background/foreground pair, returns a Colour.
composite_rows  : the same maths over (N, 4) uint8 rows, used to build tables.

Rules shared by both paths:
  - full_alpha = amount - (255 - foreground.alpha), signed.
  - Translucent: full_alpha <= 0 keeps the background. Otherwise
    a = min(full_alpha, 255) and each channel is (bg*(255-a) + fg*a) // 255.
    An empty background (alpha 0) is never blended onto; the result keeps the
    background RGB with alpha 0.
  - Add / Subtract / ReverseSubtract scale the foreground by amount/256.
  - Modulate scales the background by foreground/256 and ignores amount.
  - Non-translucent results are always opaque.
  - Fractions truncate toward zero, then clamp to [0, 255].

All intermediate values in the fractional styles are dyadic with at most
17 significant bits, so float64 reproduces the float32 arithmetic exactly.
"""

import math

import numpy as np

from .constants import ADDITIVE_DIVISOR, OPAQUE, TRANSPARENT
from .core_types import Colour, clamp_channel
from .style import BlendStyle


def _check_amount(amount: int) -> int:
    amount = int(amount)
    if not 0 <= amount <= 255:
        raise ValueError(f"blend amount must be in 0..255, got {amount}")
    return amount


# Scalar path


def _translucent_pixel(background: Colour, foreground: Colour, amount: int) -> Colour:
    full_alpha = amount - (OPAQUE - foreground.alpha)
    if full_alpha <= 0:
        return background

    alpha = min(full_alpha, OPAQUE)

    # Nothing behind: match the software renderer and don't blend.
    if background.alpha == TRANSPARENT:
        return Colour(background.red, background.green, background.blue, TRANSPARENT)

    beta = OPAQUE - alpha
    return Colour(
        (background.red * beta + foreground.red * alpha) // OPAQUE,
        (background.green * beta + foreground.green * alpha) // OPAQUE,
        (background.blue * beta + foreground.blue * alpha) // OPAQUE,
        OPAQUE,
    )


def composite_pixel(
    background: Colour, foreground: Colour, style: BlendStyle, amount: int
) -> Colour:
    """Blend foreground over background with the given style and amount (0..255)."""
    amount = _check_amount(amount)
    if style is BlendStyle.TRANSLUCENT:
        return _translucent_pixel(background, foreground, amount)

    bg = background.rgb
    if style is BlendStyle.MODULATE:
        factors = [c / ADDITIVE_DIVISOR for c in foreground.rgb]
        out = [math.trunc(b * f) for b, f in zip(bg, factors)]
    else:
        falpha = amount / ADDITIVE_DIVISOR
        scaled = [c * falpha for c in foreground.rgb]
        if style is BlendStyle.ADD:
            out = [math.trunc(b + f) for b, f in zip(bg, scaled)]
        elif style is BlendStyle.SUBTRACT:
            out = [math.trunc(b - f) for b, f in zip(bg, scaled)]
        elif style is BlendStyle.REVERSE_SUBTRACT:
            out = [math.trunc(-b + f) for b, f in zip(bg, scaled)]
        else:
            raise ValueError(f"unknown blend style: {style!r}")

    r, g, b = (clamp_channel(v) for v in out)
    return Colour(r, g, b, OPAQUE)


# Vectorised path


def _translucent_rows(bg: np.ndarray, fg: np.ndarray, amount: int) -> np.ndarray:
    out = bg.copy()
    full_alpha = amount - (OPAQUE - fg[:, 3])
    blend = full_alpha > 0
    if not np.any(blend):
        return out

    alpha = np.minimum(full_alpha, OPAQUE)[:, None]
    beta = OPAQUE - alpha
    mixed = (bg[:, :3] * beta + fg[:, :3] * alpha) // OPAQUE

    empty = blend & (bg[:, 3] == TRANSPARENT)
    solid = blend & ~empty
    out[solid, :3] = mixed[solid]
    out[solid, 3] = OPAQUE
    out[empty, 3] = TRANSPARENT
    return out


def composite_rows(
    bg_rgba: np.ndarray, fg_rgba: np.ndarray, style: BlendStyle, amount: int
) -> np.ndarray:
    """
    Vectorised composite_pixel.

    Args:
      bg_rgba : uint8 [N,4] background colours
      fg_rgba : uint8 [N,4] foreground colours
      style   : BlendStyle
      amount  : int 0..255

    Returns:
      uint8 [N,4] composited colours.
    """
    amount = _check_amount(amount)
    bg = np.asarray(bg_rgba, dtype=np.int32)
    fg = np.asarray(fg_rgba, dtype=np.int32)
    if bg.shape != fg.shape or bg.ndim != 2 or bg.shape[1] != 4:
        raise ValueError("expected matching (N,4) background and foreground rows")

    if style is BlendStyle.TRANSLUCENT:
        return _translucent_rows(bg, fg, amount).astype(np.uint8)

    bg_rgb = bg[:, :3].astype(np.float64)
    if style is BlendStyle.MODULATE:
        mixed = bg_rgb * (fg[:, :3] / ADDITIVE_DIVISOR)
    else:
        scaled = fg[:, :3] * (amount / ADDITIVE_DIVISOR)
        if style is BlendStyle.ADD:
            mixed = bg_rgb + scaled
        elif style is BlendStyle.SUBTRACT:
            mixed = bg_rgb - scaled
        elif style is BlendStyle.REVERSE_SUBTRACT:
            mixed = -bg_rgb + scaled
        else:
            raise ValueError(f"unknown blend style: {style!r}")

    out = np.empty(bg.shape, dtype=np.uint8)
    out[:, :3] = np.clip(np.trunc(mixed), 0, 255).astype(np.uint8)
    out[:, 3] = OPAQUE
    return out


__all__ = ["composite_pixel", "composite_rows"]
