from __future__ import annotations

from PIL import Image

from ..config import DEFAULT_SETTINGS, PipelineSettings
from .luma import clamp_byte, round_half_away

CONTRAST_PIVOT = 128


def contrast_lut(factor: float, pivot: int = CONTRAST_PIVOT) -> list[int]:
    return [
        clamp_byte(round_half_away((value - pivot) * factor + pivot))
        for value in range(256)
    ]


def enhance_contrast(
    img: Image.Image,
    factor: float | None = None,
    settings: PipelineSettings = DEFAULT_SETTINGS,
) -> Image.Image:
    # Linear stretch around mid-gray; identity when the factor is 1.
    if factor is None:
        factor = settings.contrast_factor
    return img.convert("L").point(contrast_lut(factor))
