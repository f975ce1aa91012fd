from __future__ import annotations

from PIL import Image, ImageOps

from ..config import DEFAULT_SETTINGS, PipelineSettings


def threshold_lut(threshold: int) -> list[int]:
    return [255 if value > threshold else 0 for value in range(256)]


def apply_threshold(
    img: Image.Image,
    threshold: int | None = None,
    settings: PipelineSettings = DEFAULT_SETTINGS,
) -> Image.Image:
    """Collapse ``img`` to pure black and white.

    Values strictly above ``threshold`` become 255, everything else 0, so the
    result only ever holds those two levels.
    """

    if threshold is None:
        threshold = settings.threshold_value
    return img.convert("L").point(threshold_lut(threshold))


def invert(img: Image.Image) -> Image.Image:
    return ImageOps.invert(img.convert("L"))
