"""Image transforms that turn a handwriting photo into the canonical format."""

from .luma import luma_value, rgb_to_luma, round_half_away
from .decode import decode_image
from .enhance import enhance_contrast
from .binarize import apply_threshold, invert
from .canonical import canonicalize, ensure_canonical, fit_size
from .pipeline import canonical_image, encode_png, process, transform, transform_luma

__all__ = [
    "luma_value",
    "rgb_to_luma",
    "round_half_away",
    "decode_image",
    "enhance_contrast",
    "apply_threshold",
    "invert",
    "canonicalize",
    "ensure_canonical",
    "fit_size",
    "canonical_image",
    "encode_png",
    "process",
    "transform",
    "transform_luma",
]
