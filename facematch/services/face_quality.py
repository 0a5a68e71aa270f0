"""Face quality validation.

Decides whether a single detection is trustworthy enough for its descriptor to
be used in matching. Detections that are too small, too distorted, too poorly
covered by landmarks, or too low-confidence are rejected with human-readable
reasons, so callers can explain the failure to the user.

Rejection is a returned value, never an exception. Every check runs
independently and all failures are reported, not just the first one.

Example:
    ```python
    result = validate_face_detection(
        BoundingBox(x=0, y=0, width=50, height=50),
        ImageDimensions(width=1000, height=1000),
        confidence=0.9,
    )
    result.is_valid   # False
    result.reasons    # ["Face too small (50px). Minimum 120px required.", ...]
    ```

All coordinates must be in original image space (not resized).
"""
from typing import List, Optional, Sequence

from facematch.domain.entities.face import BoundingBox, ImageDimensions, LandmarkPosition
from facematch.domain.value_objects.detection import DetectionResult
from facematch.domain.value_objects.quality import (
    FaceAssessment,
    FaceQualityConfig,
    FaceQualityMetrics,
    FaceQualityResult,
)

DEFAULT_QUALITY_CONFIG = FaceQualityConfig()


def calculate_landmark_coverage(
    bounding_box: BoundingBox,
    landmarks: Sequence[LandmarkPosition],
) -> float:
    """Area of the landmarks' bounding box relative to the face bounding box."""
    xs = [point.x for point in landmarks]
    ys = [point.y for point in landmarks]
    landmark_area = (max(xs) - min(xs)) * (max(ys) - min(ys))
    return landmark_area / (bounding_box.width * bounding_box.height)


def calculate_face_quality_metrics(
    bounding_box: BoundingBox,
    image_dimensions: ImageDimensions,
    landmarks: Optional[Sequence[LandmarkPosition]] = None,
    confidence: Optional[float] = 1.0,
) -> FaceQualityMetrics:
    """Compute all quality metrics for one detection.

    Args:
        bounding_box: Face bounding box in original image pixels
        image_dimensions: Size of the original image
        landmarks: Landmark points; None or empty means not available
        confidence: Detector score (0-1); None is treated as 1.0

    Returns:
        FaceQualityMetrics
    """
    face_width = bounding_box.width
    face_height = bounding_box.height
    image_width = image_dimensions.width
    image_height = image_dimensions.height

    pixel_size = min(face_width, face_height)
    face_area_percentage = (face_width * face_height) / (image_width * image_height) * 100
    relative_size = pixel_size / min(image_width, image_height) * 100
    aspect_ratio = face_width / face_height

    landmark_coverage = (
        calculate_landmark_coverage(bounding_box, landmarks) if landmarks else None
    )

    return FaceQualityMetrics(
        pixel_size=pixel_size,
        face_area_percentage=face_area_percentage,
        relative_size=relative_size,
        aspect_ratio=aspect_ratio,
        landmark_coverage=landmark_coverage,
        confidence=1.0 if confidence is None else confidence,
    )


def validate_face_quality(
    metrics: FaceQualityMetrics,
    config: Optional[FaceQualityConfig] = None,
) -> FaceQualityResult:
    """Check metrics against thresholds and collect a reason for every failure."""
    cfg = config or DEFAULT_QUALITY_CONFIG
    reasons: List[str] = []

    if metrics.pixel_size < cfg.min_pixel_size:
        reasons.append(
            f"Face too small ({round(metrics.pixel_size)}px). "
            f"Minimum {cfg.min_pixel_size:g}px required."
        )

    if metrics.face_area_percentage < cfg.min_face_area_percentage:
        reasons.append(
            f"Face area too small ({metrics.face_area_percentage:.2f}% of image). "
            f"Minimum {cfg.min_face_area_percentage:g}% required."
        )

    if metrics.relative_size < cfg.min_relative_size:
        reasons.append(
            f"Face too small relative to image ({metrics.relative_size:.2f}% of smaller dimension). "
            f"Minimum {cfg.min_relative_size:g}% required."
        )

    if metrics.aspect_ratio < cfg.min_aspect_ratio:
        reasons.append(
            f"Face aspect ratio too narrow ({metrics.aspect_ratio:.2f}). "
            f"Minimum {cfg.min_aspect_ratio:g} required. This may be a partial face."
        )
    if metrics.aspect_ratio > cfg.max_aspect_ratio:
        reasons.append(
            f"Face aspect ratio too wide ({metrics.aspect_ratio:.2f}). "
            f"Maximum {cfg.max_aspect_ratio:g} allowed. This may be a partial face."
        )

    # Only checked when landmarks were supplied
    if metrics.landmark_coverage is not None and metrics.landmark_coverage < cfg.min_landmark_coverage:
        reasons.append(
            f"Landmark coverage insufficient ({metrics.landmark_coverage * 100:.1f}%). "
            f"Minimum {cfg.min_landmark_coverage * 100:.0f}% required."
        )

    if metrics.confidence < cfg.min_confidence:
        reasons.append(
            f"Face confidence too low ({metrics.confidence * 100:.0f}%). "
            f"Minimum {cfg.min_confidence * 100:.0f}% required."
        )

    return FaceQualityResult(metrics=metrics, reasons=reasons)


def validate_face_detection(
    bounding_box: BoundingBox,
    image_dimensions: ImageDimensions,
    landmarks: Optional[Sequence[LandmarkPosition]] = None,
    confidence: Optional[float] = 1.0,
    config: Optional[FaceQualityConfig] = None,
) -> FaceQualityResult:
    """Calculate metrics for a detection and validate them in one call."""
    metrics = calculate_face_quality_metrics(
        bounding_box,
        image_dimensions,
        landmarks,
        confidence,
    )
    return validate_face_quality(metrics, config)


def assess_faces(
    detection: DetectionResult,
    config: Optional[FaceQualityConfig] = None,
) -> List[FaceAssessment]:
    """Run the quality gate on every face of one detection result."""
    return [
        FaceAssessment(
            index=index,
            face=face,
            quality=validate_face_detection(
                face.bounding_box,
                detection.image_dimensions,
                face.landmarks,
                face.confidence,
                config,
            ),
        )
        for index, face in enumerate(detection.faces)
    ]


def valid_faces(
    detection: DetectionResult,
    config: Optional[FaceQualityConfig] = None,
) -> List[FaceAssessment]:
    """Faces of a detection result that pass the quality gate."""
    return [assessment for assessment in assess_faces(detection, config) if assessment.is_valid]
