"""Face detection value objects."""
from typing import List

from pydantic import BaseModel, Field

from facematch.domain.entities.face import DetectedFace, ImageDimensions


class DetectionResult(BaseModel):
    """Result of face detection on one image."""
    image_dimensions: ImageDimensions = Field(..., description="Size of the original image")
    faces: List[DetectedFace] = Field(default_factory=list, description="List of detected faces")
