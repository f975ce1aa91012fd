from __future__ import annotations

import math

from PIL import Image, ImageMath

# Luminosity weights in thousandths: 0.299 R + 0.587 G + 0.114 B.
LUMA_WEIGHTS = (299, 587, 114)
LUMA_SCALE = 1000


def round_half_away(value: float) -> int:
    """Round to the nearest integer, sending exact halves away from zero."""
    magnitude = abs(value)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return int(math.copysign(whole, value))


def clamp_byte(value: int) -> int:
    return min(255, max(0, value))


def luma_value(r: int, g: int, b: int) -> int:
    wr, wg, wb = LUMA_WEIGHTS
    return clamp_byte((wr * r + wg * g + wb * b + LUMA_SCALE // 2) // LUMA_SCALE)


def rgb_to_luma(img: Image.Image) -> Image.Image:
    """Project ``img`` onto a single ``L`` channel with the luminosity weights.

    This is the only RGB to luma conversion in the package: the validator and
    the transform chain both use it. The sum is done in 32-bit integer
    arithmetic, so it agrees with :func:`luma_value` pixel for pixel.
    Pillow's own ``convert("L")`` rounds with fixed-point weights and gives
    different values at some boundaries.
    """

    r, g, b = (band.convert("I") for band in img.convert("RGB").split())
    wr, wg, wb = LUMA_WEIGHTS
    weighted = ImageMath.lambda_eval(
        lambda args: (args["r"] * wr + args["g"] * wg + args["b"] * wb + LUMA_SCALE // 2) / LUMA_SCALE,
        r=r,
        g=g,
        b=b,
    )
    return weighted.convert("L")
