import pytest

from sample_images import encode, handwriting_sample


@pytest.fixture
def sample_png() -> bytes:
    return encode(handwriting_sample())
