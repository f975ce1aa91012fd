"""Validation and canonicalization of handwriting photos."""

from .config import DEFAULT_SETTINGS, PipelineSettings, ServiceSettings
from .errors import DecodeError, FailureReason, InvariantViolation, PipelineError, ValidationRejected
from . import processing
from .processing import canonical_image, process
from .validation import LumaStats, ValidationOutcome, validate, validate_bytes, validate_luma
from . import infrastructure

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "DEFAULT_SETTINGS",
    "PipelineSettings",
    "ServiceSettings",
    "DecodeError",
    "FailureReason",
    "InvariantViolation",
    "PipelineError",
    "ValidationRejected",
    "LumaStats",
    "ValidationOutcome",
    "canonical_image",
    "process",
    "validate",
    "validate_bytes",
    "validate_luma",
    "infrastructure",
    "processing",
]
