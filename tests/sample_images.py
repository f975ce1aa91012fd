"""Builders for in-memory test images."""

import io
import random

from PIL import Image


def encode(img: Image.Image, fmt: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, fmt)
    return buffer.getvalue()


def handwriting_sample(
    size=(1000, 400),
    paper=(255, 255, 255),
    ink=(100, 100, 100),
    coverage=0.2,
) -> Image.Image:
    """Light paper with a centred block of dark ink covering ``coverage`` of the area."""
    width, height = size
    img = Image.new("RGB", size, paper)
    block_w = width // 2
    block_h = round(height * coverage * 2)
    left = (width - block_w) // 2
    top = (height - block_h) // 2
    img.paste(ink, (left, top, left + block_w, top + block_h))
    return img


def random_luma(size, seed: int, low: int = 0, high: int = 255) -> Image.Image:
    rng = random.Random(seed)
    img = Image.new("L", size)
    img.putdata([rng.randint(low, high) for _ in range(size[0] * size[1])])
    return img


def random_binary(size, seed: int) -> Image.Image:
    rng = random.Random(seed)
    img = Image.new("L", size)
    img.putdata([rng.choice((0, 255)) for _ in range(size[0] * size[1])])
    return img


def checkerboard(size=(200, 200)) -> Image.Image:
    width, height = size
    img = Image.new("RGB", size)
    img.putdata(
        [
            (255, 255, 255) if (x + y) % 2 else (0, 0, 0)
            for y in range(height)
            for x in range(width)
        ]
    )
    return img


def pixels(img: Image.Image) -> list:
    """Pixel values in raster order: ints for one band, tuples otherwise."""
    data = img.tobytes()
    bands = len(img.getbands())
    if bands == 1:
        return list(data)
    return [tuple(data[i : i + bands]) for i in range(0, len(data), bands)]
