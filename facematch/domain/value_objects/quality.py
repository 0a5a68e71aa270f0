"""Face quality value objects."""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from facematch.domain.entities.face import DetectedFace


class FaceQualityConfig(BaseModel):
    """Thresholds a detection must meet to be trusted for matching."""
    model_config = ConfigDict(frozen=True)

    min_pixel_size: float = Field(120, description="Minimum face dimension in pixels")
    min_face_area_percentage: float = Field(2.0, description="Minimum face area as % of image area")
    min_relative_size: float = Field(5.0, description="Minimum face size as % of smaller image dimension")
    min_aspect_ratio: float = Field(0.6, description="Minimum width/height ratio")
    max_aspect_ratio: float = Field(1.8, description="Maximum width/height ratio")
    min_landmark_coverage: float = Field(0.5, description="Minimum landmark coverage (0-1)")
    min_confidence: float = Field(0.65, description="Minimum detector confidence (0-1)")


class FaceQualityMetrics(BaseModel):
    """Metrics derived from a single detection."""
    model_config = ConfigDict(frozen=True)

    pixel_size: float = Field(..., description="Minimum face dimension in pixels")
    face_area_percentage: float = Field(..., description="Face area as % of image area")
    relative_size: float = Field(..., description="Face size as % of smaller image dimension")
    aspect_ratio: float = Field(..., description="Face width/height ratio")
    landmark_coverage: Optional[float] = Field(
        None, description="Landmark bounding-box area over face bounding-box area"
    )
    confidence: float = Field(..., description="Detection confidence (0-1)")


class FaceQualityResult(BaseModel):
    """Outcome of the quality gate for one detection."""
    model_config = ConfigDict(frozen=True)

    metrics: FaceQualityMetrics
    reasons: List[str] = Field(default_factory=list, description="Why the face was rejected")

    @computed_field
    @property
    def is_valid(self) -> bool:
        return not self.reasons


class FaceAssessment(BaseModel):
    """A detected face paired with its quality result."""
    model_config = ConfigDict(frozen=True)

    index: int = Field(..., description="Position of the face in the detection result")
    face: DetectedFace
    quality: FaceQualityResult

    @property
    def is_valid(self) -> bool:
        return self.quality.is_valid
