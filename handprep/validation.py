"""Pre-flight checks deciding whether a photo looks like a handwriting sample.

The validator expects dark handwriting on white paper. It measures the luma
histogram once and runs four checks in a fixed order; the first failing check
decides the verdict and later checks are not consulted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from PIL import Image

from .config import DEFAULT_SETTINGS, PipelineSettings
from .errors import DECODE_FAILURE_MESSAGE, DecodeError, FailureReason
from .processing.decode import ImageSource, decode_image
from .processing.luma import rgb_to_luma

logger = logging.getLogger(__name__)

MESSAGES = {
    FailureReason.TOO_MANY_COLORS: (
        "Image has too many colors. Please use white paper with dark handwriting only."
    ),
    FailureReason.LOW_CONTRAST: (
        "Image has low contrast. Ensure good lighting and dark handwriting."
    ),
    FailureReason.INSUFFICIENT_BRIGHTNESS: (
        "Image brightness is unsuitable. Ensure proper lighting without overexposure."
    ),
    FailureReason.INVALID_BLACK_PIXEL_RATIO: (
        "Image content ratio is unsuitable. Ensure handwriting fills frame appropriately."
    ),
    FailureReason.DECODE_FAILURE: DECODE_FAILURE_MESSAGE,
}


@dataclass(frozen=True)
class ValidationOutcome:
    accepted: bool
    reason: Optional[FailureReason] = None
    message: Optional[str] = None

    @classmethod
    def success(cls) -> "ValidationOutcome":
        return cls(accepted=True)

    @classmethod
    def failure(cls, reason: FailureReason, message: Optional[str] = None) -> "ValidationOutcome":
        return cls(accepted=False, reason=reason, message=message or MESSAGES[reason])

    def to_dict(self) -> dict:
        return {
            "accepted": self.accepted,
            "reason": self.reason.value if self.reason else None,
            "message": self.message,
        }


@dataclass(frozen=True)
class LumaStats:
    pixel_count: int
    mean: float
    variance: float
    minimum: int
    maximum: int
    ink_count: int

    @property
    def contrast(self) -> int:
        return self.maximum - self.minimum

    @property
    def ink_ratio(self) -> float:
        return self.ink_count / self.pixel_count

    @classmethod
    def from_histogram(cls, histogram: Sequence[int], threshold: int) -> "LumaStats":
        """Summarise a 256-bin luma histogram.

        Variance is the population variance. Pixels at or below ``threshold``
        count as ink, mirroring the binarization the pipeline later applies.
        """

        total = sum(histogram)
        if total == 0:
            raise ValueError("Cannot measure an empty image")
        mean = sum(value * count for value, count in enumerate(histogram)) / total
        variance = sum(count * (value - mean) ** 2 for value, count in enumerate(histogram)) / total
        present = [value for value, count in enumerate(histogram) if count]
        return cls(
            pixel_count=total,
            mean=mean,
            variance=variance,
            minimum=present[0],
            maximum=present[-1],
            ink_count=sum(histogram[: threshold + 1]),
        )


def measure_luma(luma: Image.Image, settings: PipelineSettings = DEFAULT_SETTINGS) -> LumaStats:
    return LumaStats.from_histogram(luma.histogram(), settings.threshold_value)


def measure(img: Image.Image, settings: PipelineSettings = DEFAULT_SETTINGS) -> LumaStats:
    return measure_luma(rgb_to_luma(img), settings)


def _check_color_variance(stats: LumaStats, settings: PipelineSettings) -> bool:
    return stats.variance <= settings.max_color_variance


def _check_contrast(stats: LumaStats, settings: PipelineSettings) -> bool:
    return stats.contrast >= settings.min_contrast


def _check_brightness(stats: LumaStats, settings: PipelineSettings) -> bool:
    return settings.min_brightness <= stats.mean <= settings.max_brightness


def _check_black_pixel_ratio(stats: LumaStats, settings: PipelineSettings) -> bool:
    return settings.min_black_ratio <= stats.ink_ratio <= settings.max_black_ratio


Check = Callable[[LumaStats, PipelineSettings], bool]

CHECKS: Tuple[Tuple[FailureReason, Check], ...] = (
    (FailureReason.TOO_MANY_COLORS, _check_color_variance),
    (FailureReason.LOW_CONTRAST, _check_contrast),
    (FailureReason.INSUFFICIENT_BRIGHTNESS, _check_brightness),
    (FailureReason.INVALID_BLACK_PIXEL_RATIO, _check_black_pixel_ratio),
)


def validate_luma(luma: Image.Image, settings: PipelineSettings = DEFAULT_SETTINGS) -> ValidationOutcome:
    """Run the checks against an already projected ``L`` image."""
    stats = measure_luma(luma, settings)
    for reason, check in CHECKS:
        if not check(stats, settings):
            logger.info(
                "Rejected image (%s): variance=%.1f contrast=%d mean=%.1f ink_ratio=%.3f",
                reason.value,
                stats.variance,
                stats.contrast,
                stats.mean,
                stats.ink_ratio,
            )
            return ValidationOutcome.failure(reason)
    return ValidationOutcome.success()


def validate(img: Image.Image, settings: PipelineSettings = DEFAULT_SETTINGS) -> ValidationOutcome:
    return validate_luma(rgb_to_luma(img), settings)


def validate_bytes(source: ImageSource, settings: PipelineSettings = DEFAULT_SETTINGS) -> ValidationOutcome:
    try:
        img = decode_image(source)
    except DecodeError:
        return ValidationOutcome.failure(FailureReason.DECODE_FAILURE)
    return validate(img, settings)
