"""Food image classification with a demo fallback."""

import base64
import logging
import random
from dataclasses import dataclass, field
from typing import Protocol

from biteqube.domain.errors import PayloadTooLargeError, ValidationError
from biteqube.domain.vision import Classification

logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 5 * 1024 * 1024
IMAGE_TOO_LARGE_MESSAGE = "Image size should be less than 5MB"
TOP_PREDICTIONS = 3

DEMO_LABELS = (
    "pasta",
    "salad",
    "chicken",
    "pizza",
    "stir-fry",
    "burger",
    "tacos",
    "cake",
    "smoothie",
    "pancakes",
    "sushi",
    "curry",
    "sandwich",
    "soup",
    "noodles",
)
FALLBACK_LABELS = DEMO_LABELS[:10]
FALLBACK_SCORE = 0.85


class ImageClassifier(Protocol):
    """Interface for a hosted image classification model."""

    async def classify(self, image_base64: str) -> list[dict[str, object]]:
        """Return raw label/score predictions for a base64 image."""


@dataclass
class VisionService:
    """Classify food photos, falling back to random labels."""

    client: ImageClassifier | None
    rng: random.Random = field(default_factory=random.Random)

    @property
    def demo_mode(self) -> bool:
        return self.client is None

    async def classify(self, image_bytes: bytes) -> list[Classification]:
        """Return up to three predictions, best first."""
        if self.client is None:
            logger.warning("Image classifier not configured, using demo mode")
            return [
                Classification(
                    label=self.rng.choice(DEMO_LABELS),
                    score=self.rng.random() * 0.3 + 0.7,
                )
            ]
        try:
            raw = await self.client.classify(_to_base64(image_bytes))
            predictions = _parse_predictions(raw)
            if not predictions:
                raise RuntimeError("No classification results")
            return predictions
        except Exception:
            logger.exception("Image classification failed, using fallback label")
            return [
                Classification(
                    label=self.rng.choice(FALLBACK_LABELS), score=FALLBACK_SCORE
                )
            ]


def validate_image_upload(image_bytes: bytes, content_type: str | None) -> None:
    """Reject empty, oversized or non-image uploads."""
    if not image_bytes:
        raise ValidationError("Please select a valid image file")
    if len(image_bytes) > MAX_IMAGE_BYTES:
        raise PayloadTooLargeError(IMAGE_TOO_LARGE_MESSAGE)
    declared = (content_type or "").split(";")[0].strip().lower()
    if declared.startswith("image/"):
        return
    if detect_mime_type(image_bytes) is None:
        raise ValidationError("Please select a valid image file")


def detect_mime_type(image_bytes: bytes) -> str | None:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    return None


def _to_base64(image_bytes: bytes) -> str:
    return base64.b64encode(image_bytes).decode("utf-8")


def _parse_predictions(raw: list[dict[str, object]]) -> list[Classification]:
    predictions = []
    for item in raw[:TOP_PREDICTIONS]:
        label = str(item.get("label", "")).replace("_", " ")
        predictions.append(
            Classification(label=label, score=float(item.get("score", 0.0)))
        )
    return predictions
