"""CLI tool for checking face quality in a photo with visualization."""
import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

import cv2
import numpy as np

from facematch.core.config import settings
from facematch.core.exceptions import FaceMatchError
from facematch.core.logging import get_logger, setup_logging
from facematch.domain.value_objects.quality import FaceAssessment
from facematch.services.detection.factory import get_face_detection_provider
from facematch.services.face_quality import assess_faces

logger = get_logger(__name__)

VALID_COLOR = (0, 180, 0)  # Darker green
REJECTED_COLOR = (0, 0, 200)  # Red
TEXT_COLOR = (255, 255, 255)


def draw_assessments(
    image: np.ndarray,
    assessments: List[FaceAssessment],
    output_path: Optional[Path] = None
) -> np.ndarray:
    """
    Draw bounding boxes coloured by quality result on a copy of the image.

    Args:
        image: Original image as numpy array
        assessments: Quality results of the detected faces
        output_path: Optional path to save the annotated image

    Returns:
        The annotated image
    """
    img_draw = image.copy()
    font_scale = 0.6
    thickness = 2
    padding = 10

    for assessment in assessments:
        bbox = assessment.face.bounding_box
        x1, y1 = int(bbox.x), int(bbox.y)
        x2, y2 = int(bbox.x + bbox.width), int(bbox.y + bbox.height)
        color = VALID_COLOR if assessment.is_valid else REJECTED_COLOR

        cv2.rectangle(img_draw, (x1, y1), (x2, y2), color, thickness)

        label = f"Face {assessment.index}: {assessment.face.confidence * 100:.0f}%"
        (text_width, text_height), _ = cv2.getTextSize(
            label, cv2.FONT_HERSHEY_SIMPLEX, font_scale, thickness
        )
        cv2.rectangle(
            img_draw,
            (x1, y1 - text_height - padding * 2),
            (x1 + text_width + padding, y1),
            color,
            -1
        )
        cv2.putText(
            img_draw,
            label,
            (x1 + padding // 2, y1 - padding),
            cv2.FONT_HERSHEY_SIMPLEX,
            font_scale,
            TEXT_COLOR,
            thickness
        )

    if output_path:
        cv2.imwrite(str(output_path), img_draw)
        logger.info("Saved annotated image", path=str(output_path))

    return img_draw


async def check_photo(image_path: str, save_output: bool = True) -> int:
    """
    Detect faces in an image and report their quality.

    Args:
        image_path: Path to the image file
        save_output: Whether to save the annotated image

    Returns:
        Process exit code: 0 when at least one face passes the quality gate
    """
    image_file = Path(image_path)
    if not image_file.exists():
        logger.error("Image file not found", path=image_path)
        return 1

    image_bytes = image_file.read_bytes()

    try:
        provider = get_face_detection_provider()
        detection = await provider.detect_all_faces(
            image_bytes, max_faces=settings.MAX_FACES_PER_IMAGE
        )
    except FaceMatchError as e:
        logger.error("Face detection failed", error=str(e), details=e.details)
        return 1

    assessments = assess_faces(detection, settings.face_quality_config)
    logger.info(
        "Face quality check completed",
        num_faces=len(assessments),
        image_size=(detection.image_dimensions.width, detection.image_dimensions.height),
        image_path=image_path
    )

    for assessment in assessments:
        metrics = assessment.quality.metrics
        logger.info(
            f"Face {assessment.index} {'accepted' if assessment.is_valid else 'rejected'}",
            pixel_size=round(metrics.pixel_size),
            face_area_percentage=round(metrics.face_area_percentage, 2),
            relative_size=round(metrics.relative_size, 2),
            aspect_ratio=round(metrics.aspect_ratio, 2),
            landmark_coverage=metrics.landmark_coverage,
            confidence=round(metrics.confidence, 3),
            reasons=assessment.quality.reasons,
        )

    if save_output and assessments:
        img = cv2.imdecode(np.frombuffer(image_bytes, np.uint8), cv2.IMREAD_COLOR)
        output_path = image_file.parent / f"{image_file.stem}_checked{image_file.suffix}"
        draw_assessments(img, assessments, output_path)

    return 0 if any(assessment.is_valid for assessment in assessments) else 2


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Check the quality of faces in an image")
    parser.add_argument("image_path", help="Path to the image file")
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {settings.VERSION}"
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Don't save the annotated image"
    )
    args = parser.parse_args()

    setup_logging()
    sys.exit(asyncio.run(check_photo(args.image_path, not args.no_save)))


if __name__ == "__main__":
    main()
