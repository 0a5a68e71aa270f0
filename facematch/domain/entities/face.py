"""Core face domain entities.

All coordinates are expressed in original-image pixel space, i.e. before any
resizing done by a detection backend.
"""
from typing import List, Optional, Tuple, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator


class BoundingBox(BaseModel):
    """Face bounding box in pixels."""
    model_config = ConfigDict(frozen=True)

    x: float = Field(..., description="Left coordinate of the bounding box")
    y: float = Field(..., description="Top coordinate of the bounding box")
    width: float = Field(..., gt=0, description="Width of the bounding box")
    height: float = Field(..., gt=0, description="Height of the bounding box")


class ImageDimensions(BaseModel):
    """Size of the original (pre-resize) image."""
    model_config = ConfigDict(frozen=True)

    width: float = Field(..., gt=0, description="Image width in pixels")
    height: float = Field(..., gt=0, description="Image height in pixels")


class LandmarkPosition(BaseModel):
    """A single facial landmark point."""
    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class DetectedFace(BaseModel):
    """One face as returned by a detection provider."""
    model_config = ConfigDict(frozen=True)

    bounding_box: BoundingBox = Field(..., description="Bounding box coordinates")
    landmarks: Optional[List[LandmarkPosition]] = Field(
        None, description="Landmark points, typically 68 or 106 of them"
    )
    confidence: float = Field(1.0, ge=0.0, le=1.0, description="Detector confidence score")
    descriptor: Optional[Tuple[float, ...]] = Field(
        None, description="Fixed-length face descriptor vector"
    )

    @field_validator("descriptor", mode="before")
    @classmethod
    def validate_descriptor(
        cls, v: Optional[Union[np.ndarray, list, tuple]]
    ) -> Optional[Tuple[float, ...]]:
        """Convert numpy arrays and lists to a tuple of floats."""
        if v is None:
            return None
        if isinstance(v, np.ndarray):
            return tuple(float(value) for value in v.ravel())
        return tuple(float(value) for value in v)
