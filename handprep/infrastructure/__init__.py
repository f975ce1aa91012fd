"""Infrastructure helpers for background dispatch and HTTP responses."""

from .responses import send_error, send_outcome, send_png
from .workers import WORKERS, PipelineResult, PipelineWorkers

__all__ = [
    "WORKERS",
    "PipelineResult",
    "PipelineWorkers",
    "send_error",
    "send_outcome",
    "send_png",
]
