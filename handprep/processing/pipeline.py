from __future__ import annotations

import io
import logging
import time

from PIL import Image

from ..config import DEFAULT_SETTINGS, PipelineSettings
from ..errors import ValidationRejected
from ..validation import validate_luma
from .binarize import apply_threshold, invert
from .canonical import canonicalize, ensure_canonical
from .decode import ImageSource, decode_image
from .enhance import enhance_contrast
from .luma import rgb_to_luma

logger = logging.getLogger(__name__)


def transform(rgb: Image.Image, settings: PipelineSettings = DEFAULT_SETTINGS) -> Image.Image:
    """Turn a validated RGB photo into the canonical classifier input.

    Dark strokes on light paper come out as white strokes on black, fitted
    inside ``settings.target_size`` and padded with black.
    """

    return transform_luma(rgb_to_luma(rgb), settings)


def transform_luma(luma: Image.Image, settings: PipelineSettings = DEFAULT_SETTINGS) -> Image.Image:
    started = time.perf_counter()
    enhanced = enhance_contrast(luma, settings=settings)
    binary = apply_threshold(enhanced, settings=settings)
    inverted = invert(binary)
    canonical = canonicalize(inverted, settings=settings)
    logger.debug(
        "Transformed %dx%d source in %.1f ms",
        luma.width,
        luma.height,
        (time.perf_counter() - started) * 1000,
    )
    return canonical


def encode_png(img: Image.Image) -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, "PNG", optimize=True)
    return buffer.getvalue()


def canonical_image(source: ImageSource, settings: PipelineSettings = DEFAULT_SETTINGS) -> Image.Image:
    luma = rgb_to_luma(decode_image(source))
    outcome = validate_luma(luma, settings)
    if not outcome.accepted:
        raise ValidationRejected(outcome)
    return ensure_canonical(transform_luma(luma, settings), settings)


def process(source: ImageSource, settings: PipelineSettings = DEFAULT_SETTINGS) -> bytes:
    return encode_png(canonical_image(source, settings))
