import math
from dataclasses import replace

import pytest
from PIL import Image

from handprep.config import DEFAULT_SETTINGS, PipelineSettings
from handprep.errors import FailureReason
from handprep.validation import MESSAGES, LumaStats, ValidationOutcome, measure, validate, validate_bytes
from sample_images import checkerboard, encode, handwriting_sample


def test_handwriting_sample_is_accepted():
    outcome = validate(handwriting_sample())

    assert outcome == ValidationOutcome(accepted=True, reason=None, message=None)


def test_uniform_gray_is_low_contrast():
    outcome = validate(Image.new("RGB", (120, 80), (128, 128, 128)))

    assert not outcome.accepted
    assert outcome.reason is FailureReason.LOW_CONTRAST


def test_checkerboard_has_too_many_colors():
    img = checkerboard((200, 200))

    assert measure(img).variance == pytest.approx(16256.25)
    assert validate(img).reason is FailureReason.TOO_MANY_COLORS


def test_single_small_mark_has_invalid_ink_ratio():
    img = Image.new("RGB", (200, 200), (230, 230, 230))
    img.paste((0, 0, 0), (95, 95, 105, 105))

    outcome = validate(img)

    assert outcome.reason is FailureReason.INVALID_BLACK_PIXEL_RATIO
    assert measure(img).ink_ratio == pytest.approx(100 / 40000)


def test_mostly_dark_frame_has_invalid_ink_ratio():
    img = handwriting_sample(size=(100, 100), paper=(100, 100, 100), ink=(200, 200, 200), coverage=0.1)

    assert validate(img).reason is FailureReason.INVALID_BLACK_PIXEL_RATIO


def test_dark_image_has_insufficient_brightness():
    img = handwriting_sample(size=(100, 100), paper=(20, 20, 20), ink=(60, 60, 60), coverage=0.4)

    assert validate(img).reason is FailureReason.INSUFFICIENT_BRIGHTNESS


def test_overexposed_image_has_insufficient_brightness():
    img = handwriting_sample(size=(100, 100), paper=(250, 250, 250), ink=(200, 200, 200), coverage=0.1)

    assert validate(img).reason is FailureReason.INSUFFICIENT_BRIGHTNESS


def test_first_failing_check_wins():
    # Flat and very dark: fails contrast, brightness and ink ratio, but
    # contrast is checked first.
    outcome = validate(Image.new("RGB", (10, 10), (5, 5, 5)))

    assert outcome.reason is FailureReason.LOW_CONTRAST


def test_rejections_carry_distinct_messages():
    outcome = validate(checkerboard((20, 20)))

    assert outcome.message == MESSAGES[FailureReason.TOO_MANY_COLORS]
    assert len(set(MESSAGES.values())) == len(FailureReason)


def test_validate_is_deterministic():
    img = handwriting_sample(size=(300, 120))

    assert validate(img) == validate(img.copy())
    assert validate_bytes(encode(img)) == validate_bytes(encode(img))


def test_variance_threshold_can_be_tightened():
    strict = replace(DEFAULT_SETTINGS, max_color_variance=3000.0)

    assert validate(handwriting_sample()).accepted
    assert validate(handwriting_sample(), strict).reason is FailureReason.TOO_MANY_COLORS


def test_contrast_threshold_boundary_is_inclusive():
    img = handwriting_sample(size=(100, 100), paper=(200, 200, 200), ink=(120, 120, 120))
    stats = measure(img)

    assert stats.contrast == 80
    assert validate(img, replace(DEFAULT_SETTINGS, min_contrast=80.0)).accepted
    assert validate(img, replace(DEFAULT_SETTINGS, min_contrast=81.0)).reason is FailureReason.LOW_CONTRAST


def test_ink_threshold_follows_settings():
    img = handwriting_sample(size=(100, 100), ink=(140, 140, 140))

    assert validate(img).reason is FailureReason.INVALID_BLACK_PIXEL_RATIO
    assert validate(img, PipelineSettings(threshold_value=140)).accepted


def test_validate_bytes_reports_decode_failure_separately():
    outcome = validate_bytes(b"definitely not an image")

    assert not outcome.accepted
    assert outcome.reason is FailureReason.DECODE_FAILURE
    assert "Unable to decode image" in outcome.message


def test_validate_bytes_accepts_jpeg():
    outcome = validate_bytes(encode(handwriting_sample(size=(400, 160)), "JPEG"))

    assert outcome.accepted


def test_luma_stats_from_histogram():
    histogram = [0] * 256
    histogram[0] = 1
    histogram[200] = 3

    stats = LumaStats.from_histogram(histogram, threshold=128)

    assert stats.pixel_count == 4
    assert stats.mean == pytest.approx(150.0)
    assert stats.variance == pytest.approx(7500.0)
    assert (stats.minimum, stats.maximum) == (0, 200)
    assert stats.ink_ratio == pytest.approx(0.25)


def test_outcome_to_dict():
    assert ValidationOutcome.success().to_dict() == {"accepted": True, "reason": None, "message": None}
    failure = ValidationOutcome.failure(FailureReason.LOW_CONTRAST)
    assert failure.to_dict()["reason"] == "low_contrast"


@pytest.mark.parametrize(
    "field, stat, direction, reason",
    [
        ("max_color_variance", "variance", -math.inf, FailureReason.TOO_MANY_COLORS),
        ("min_brightness", "mean", math.inf, FailureReason.INSUFFICIENT_BRIGHTNESS),
        ("max_brightness", "mean", -math.inf, FailureReason.INSUFFICIENT_BRIGHTNESS),
        ("min_black_ratio", "ink_ratio", math.inf, FailureReason.INVALID_BLACK_PIXEL_RATIO),
        ("max_black_ratio", "ink_ratio", -math.inf, FailureReason.INVALID_BLACK_PIXEL_RATIO),
    ],
)
def test_threshold_boundaries_are_inclusive(field, stat, direction, reason):
    img = handwriting_sample(size=(100, 100))
    measured = getattr(measure(img), stat)

    at_limit = replace(DEFAULT_SETTINGS, **{field: measured})
    past_limit = replace(DEFAULT_SETTINGS, **{field: math.nextafter(measured, direction)})

    assert validate(img, at_limit).accepted
    outcome = validate(img, past_limit)
    assert not outcome.accepted
    assert outcome.reason is reason
