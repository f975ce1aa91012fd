from __future__ import annotations

import io
import logging
import os
from typing import BinaryIO, Union

from PIL import Image, ImageMath, UnidentifiedImageError

from ..errors import DecodeError

logger = logging.getLogger(__name__)

ImageSource = Union[bytes, bytearray, memoryview, str, os.PathLike, BinaryIO]

SIXTEEN_BIT_MODES = ("I;16", "I;16L", "I;16B", "I;16N")


def _open(source: ImageSource) -> Image.Image:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return Image.open(io.BytesIO(bytes(source)))
    return Image.open(source)


def _to_eight_bit(img: Image.Image) -> Image.Image:
    # 16-bit grayscale would otherwise clip to white on conversion. A plain
    # 32-bit "I" image is only rescaled when it actually uses the wide range.
    if img.mode not in SIXTEEN_BIT_MODES and img.mode != "I":
        return img
    wide = img.convert("I")
    if img.mode in SIXTEEN_BIT_MODES or wide.getextrema()[1] > 255:
        wide = ImageMath.lambda_eval(lambda args: (args["v"] + 128) / 257, v=wide)
    return wide.convert("L")


def decode_image(source: ImageSource) -> Image.Image:
    """Decode ``source`` into an RGB image, dropping any alpha channel.

    ``source`` may be raw encoded bytes, a filesystem path or a binary file
    object. Anything Pillow cannot fully decode is reported as
    :class:`~handprep.errors.DecodeError`.
    """

    try:
        with _open(source) as img:
            img.load()
            if img.width < 1 or img.height < 1:
                raise DecodeError()
            return _to_eight_bit(img).convert("RGB")
    except DecodeError:
        raise
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError, SyntaxError) as exc:
        logger.warning("Could not decode image: %s", exc)
        raise DecodeError() from exc
