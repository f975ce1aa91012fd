from __future__ import annotations

from typing import Tuple

from PIL import Image

from ..config import DEFAULT_SETTINGS, PipelineSettings
from ..errors import InvariantViolation
from .luma import round_half_away

BINARY_LEVELS = frozenset((0, 255))


def fit_size(src_size: Tuple[int, int], target_size: Tuple[int, int]) -> Tuple[int, int]:
    """Return the largest size with the source aspect ratio inside ``target_size``.

    Small sources are scaled up. Each axis is kept at least one pixel wide so
    very thin sources still land on the canvas.
    """

    src_w, src_h = src_size
    target_w, target_h = target_size
    if src_w < 1 or src_h < 1:
        raise ValueError(f"Cannot fit an empty image of size {src_w}x{src_h}")
    scale = min(target_w / src_w, target_h / src_h)
    new_w = min(target_w, max(1, round_half_away(src_w * scale)))
    new_h = min(target_h, max(1, round_half_away(src_h * scale)))
    return new_w, new_h


def padding_offsets(content_size: Tuple[int, int], target_size: Tuple[int, int]) -> Tuple[int, int]:
    return (target_size[0] - content_size[0]) // 2, (target_size[1] - content_size[1]) // 2


def canonicalize(img: Image.Image, settings: PipelineSettings = DEFAULT_SETTINGS) -> Image.Image:
    src = img.convert("L")
    target_size = settings.target_size
    new_size = fit_size(src.size, target_size)

    # Nearest neighbour only: any smoothing filter would put gray values back
    # into a binary image.
    resized = src.resize(new_size, Image.Resampling.NEAREST)

    canvas = Image.new("L", target_size, 0)
    canvas.paste(resized, padding_offsets(new_size, target_size))
    return canvas


def ensure_canonical(img: Image.Image, settings: PipelineSettings = DEFAULT_SETTINGS) -> Image.Image:
    if img.mode != "L":
        raise InvariantViolation(f"Canonical image must be mode L, got {img.mode}")
    if img.size != settings.target_size:
        raise InvariantViolation(
            f"Canonical image must be {settings.target_width}x{settings.target_height}, "
            f"got {img.size[0]}x{img.size[1]}"
        )
    present = {value for value, count in enumerate(img.histogram()) if count}
    if not present <= BINARY_LEVELS:
        stray = sorted(present - BINARY_LEVELS)
        raise InvariantViolation(f"Canonical image holds non-binary values: {stray[:8]}")
    return img
