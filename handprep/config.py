import logging
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class PipelineSettings:
    max_color_variance: float = 5000.0
    min_contrast: float = 30.0
    min_brightness: float = 50.0
    max_brightness: float = 240.0
    min_black_ratio: float = 0.05
    max_black_ratio: float = 0.80
    threshold_value: int = 128
    contrast_factor: float = 1.5
    target_width: int = 256
    target_height: int = 64

    def __post_init__(self) -> None:
        if self.target_width < 1 or self.target_height < 1:
            raise ValueError(
                f"Target size must be positive, got {self.target_width}x{self.target_height}"
            )
        if not 0 <= self.threshold_value <= 255:
            raise ValueError(f"threshold_value must be within 0..255, got {self.threshold_value}")
        if self.contrast_factor <= 0:
            raise ValueError(f"contrast_factor must be positive, got {self.contrast_factor}")
        if self.min_brightness > self.max_brightness:
            raise ValueError("min_brightness cannot exceed max_brightness")
        if not 0.0 <= self.min_black_ratio <= self.max_black_ratio <= 1.0:
            raise ValueError("Black pixel ratios must satisfy 0 <= min <= max <= 1")

    @property
    def target_size(self) -> tuple[int, int]:
        return self.target_width, self.target_height

    @classmethod
    def from_env(cls) -> "PipelineSettings":
        return cls(
            max_color_variance=float(os.getenv("MAX_COLOR_VARIANCE", "5000.0")),
            min_contrast=float(os.getenv("MIN_CONTRAST", "30.0")),
            min_brightness=float(os.getenv("MIN_BRIGHTNESS", "50.0")),
            max_brightness=float(os.getenv("MAX_BRIGHTNESS", "240.0")),
            min_black_ratio=float(os.getenv("MIN_BLACK_RATIO", "0.05")),
            max_black_ratio=float(os.getenv("MAX_BLACK_RATIO", "0.80")),
            threshold_value=int(os.getenv("THRESHOLD_VALUE", "128")),
            contrast_factor=float(os.getenv("CONTRAST_FACTOR", "1.5")),
            target_width=int(os.getenv("TARGET_WIDTH", "256")),
            target_height=int(os.getenv("TARGET_HEIGHT", "64")),
        )


@dataclass(frozen=True)
class ServiceSettings:
    port: int
    log_level: str
    workers: int
    max_upload_bytes: int

    @classmethod
    def from_env(cls) -> "ServiceSettings":
        return cls(
            port=int(os.getenv("PORT", "5500")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            workers=int(os.getenv("WORKERS", "4")),
            max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", str(20 * 1024 * 1024))),
        )


DEFAULT_SETTINGS = PipelineSettings.from_env()
SETTINGS = ServiceSettings.from_env()


def configure_logging() -> logging.Logger:
    logging.basicConfig(level=SETTINGS.log_level)
    return logging.getLogger("handprep")
