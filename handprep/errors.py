"""Failure taxonomy shared by the validator, the pipeline and the service."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .validation import ValidationOutcome


class FailureReason(enum.Enum):
    TOO_MANY_COLORS = "too_many_colors"
    LOW_CONTRAST = "low_contrast"
    INSUFFICIENT_BRIGHTNESS = "insufficient_brightness"
    INVALID_BLACK_PIXEL_RATIO = "invalid_black_pixel_ratio"
    DECODE_FAILURE = "decode_failure"


DECODE_FAILURE_MESSAGE = "Unable to decode image. Please select a valid image file."


class PipelineError(Exception):
    """Base class for every failure the pipeline reports to its callers.

    ``message`` is always safe to show to an end user; the underlying cause,
    when there is one, is chained on ``__cause__`` instead.
    """

    reason: FailureReason | None = None

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DecodeError(PipelineError):
    reason = FailureReason.DECODE_FAILURE

    def __init__(self, message: str = DECODE_FAILURE_MESSAGE) -> None:
        super().__init__(message)


class ValidationRejected(PipelineError):
    def __init__(self, outcome: "ValidationOutcome") -> None:
        super().__init__(outcome.message or "Image was rejected.")
        self.outcome = outcome
        self.reason = outcome.reason

    def __reduce__(self):
        return (type(self), (self.outcome,))


class InvariantViolation(PipelineError):
    """Raised when a transform produces output breaking the canonical format."""
