"""Tests for vision service."""

import asyncio
import random

import pytest

from biteqube.domain.errors import PayloadTooLargeError, ValidationError
from biteqube.services.vision import (
    DEMO_LABELS,
    FALLBACK_LABELS,
    MAX_IMAGE_BYTES,
    VisionService,
    detect_mime_type,
    validate_image_upload,
)
from tests.conftest import FakeImageClassifier

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"rest"


def test_classify_returns_top_three_with_spaces() -> None:
    classifier = FakeImageClassifier()
    service = VisionService(client=classifier)

    predictions = asyncio.run(service.classify(PNG_BYTES))

    assert [item.label for item in predictions] == [
        "chicken curry",
        "butter chicken",
        "samosa",
    ]
    assert predictions[0].score == pytest.approx(0.91)
    assert classifier.received == ["iVBORw0KGgpyZXN0"]


def test_classify_falls_back_on_error() -> None:
    service = VisionService(
        client=FakeImageClassifier(fail=True), rng=random.Random(3)
    )

    predictions = asyncio.run(service.classify(PNG_BYTES))

    assert len(predictions) == 1
    assert predictions[0].label in FALLBACK_LABELS
    assert predictions[0].score == 0.85


def test_classify_falls_back_on_empty_result() -> None:
    service = VisionService(client=FakeImageClassifier(predictions=[]))

    predictions = asyncio.run(service.classify(PNG_BYTES))

    assert predictions[0].score == 0.85


def test_demo_mode_returns_confident_random_label() -> None:
    service = VisionService(client=None, rng=random.Random(7))

    predictions = asyncio.run(service.classify(PNG_BYTES))

    assert service.demo_mode
    assert predictions[0].label in DEMO_LABELS
    assert 0.7 <= predictions[0].score <= 1.0


def test_validate_image_upload_accepts_declared_image() -> None:
    validate_image_upload(b"anything", "image/heic")


def test_validate_image_upload_sniffs_signature() -> None:
    validate_image_upload(PNG_BYTES, "application/octet-stream")


def test_validate_image_upload_rejects_non_images() -> None:
    with pytest.raises(ValidationError, match="valid image file"):
        validate_image_upload(b"%PDF-1.7", "application/pdf")
    with pytest.raises(ValidationError):
        validate_image_upload(b"", "image/png")


def test_validate_image_upload_rejects_large_files() -> None:
    with pytest.raises(PayloadTooLargeError, match="less than 5MB"):
        validate_image_upload(b"\xff\xd8\xff" + b"0" * MAX_IMAGE_BYTES, "image/jpeg")


def test_detect_mime_type() -> None:
    assert detect_mime_type(b"\xff\xd8\xff\xe0") == "image/jpeg"
    assert detect_mime_type(PNG_BYTES) == "image/png"
    assert detect_mime_type(b"RIFF\x00\x00\x00\x00WEBPVP8 ") == "image/webp"
    assert detect_mime_type(b"GIF89a...") == "image/gif"
    assert detect_mime_type(b"plain text") is None
