"""Models for image classification results."""

from pydantic import BaseModel, Field


class Classification(BaseModel):
    """Single food label predicted for an image."""

    label: str
    score: float = Field(ge=0.0, le=1.0)
