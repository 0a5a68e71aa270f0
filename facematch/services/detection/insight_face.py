"""
InsightFace-based implementation of the face detection provider.

This module adapts the InsightFace library to the FaceDetectionProvider
interface. It decodes the image, runs detection, landmark and embedding
models, and converts the results to DetectedFace objects in original image
pixel coordinates.

Example:
    ```python
    async with InsightFaceDetectionProvider() as provider:
        with open("image.jpg", "rb") as f:
            result = await provider.detect_all_faces(f.read())
    ```

Note:
    This implementation uses CPU inference by default. For GPU support,
    pass 'CUDAExecutionProvider' in the providers list.
"""
import math
from typing import Any, List, Optional, Sequence, Tuple

import cv2
import numpy as np
from insightface.app import FaceAnalysis
from insightface.app.common import Face as InsightFace

from facematch.core.config import settings
from facematch.core.exceptions import InvalidImageError, ModelLoadError
from facematch.core.logging import get_logger
from facematch.domain.entities.face import (
    BoundingBox,
    DetectedFace,
    ImageDimensions,
    LandmarkPosition,
)
from facematch.domain.interfaces.detection.face_detection import FaceDetectionProvider
from facematch.domain.value_objects.detection import DetectionResult

logger = get_logger(__name__)


class InsightFaceDetectionProvider(FaceDetectionProvider):
    """
    InsightFace-based face detection provider.

    Attributes:
        model: InsightFace model instance for face analysis
        max_image_pixels: Images larger than this are downscaled before detection
        descriptor_scale: Factor applied to the unit-norm embedding, see DESCRIPTOR_SCALE
    """

    name = "insightface"

    def __init__(
        self,
        model_name: Optional[str] = None,
        model_cache_dir: Optional[str] = None,
        max_image_pixels: Optional[int] = None,
        descriptor_scale: Optional[float] = None,
        providers: Optional[Sequence[str]] = None,
    ) -> None:
        """Initialize InsightFace model.

        Raises:
            ModelLoadError: If the model files cannot be loaded
        """
        self.max_image_pixels = max_image_pixels or settings.MAX_IMAGE_PIXELS
        self.descriptor_scale = descriptor_scale or settings.DESCRIPTOR_SCALE
        try:
            self.model = FaceAnalysis(
                name=model_name or settings.MODEL_NAME,
                root=model_cache_dir or settings.MODEL_CACHE_DIR,
                providers=list(providers or ['CPUExecutionProvider'])
            )
            # Detection size affects accuracy significantly
            self.model.prepare(ctx_id=0, det_size=(640, 640))
        except Exception as e:
            logger.error("Failed to load InsightFace model", error=str(e), exc_info=True)
            raise ModelLoadError(f"Failed to load face model: {str(e)}")

    async def __aenter__(self) -> "InsightFaceDetectionProvider":
        logger.debug("Entering InsightFace provider context")
        return self

    async def __aexit__(self, exc_type: Optional[type], exc_val: Optional[Exception],
                        exc_tb: Optional[Any]) -> None:
        logger.debug("Cleaning up InsightFace provider resources")
        if exc_type:
            logger.error(
                "Error occurred during context exit",
                error=str(exc_val),
                exc_info=True
            )
        self.model = None

    def _load_image(self, image_bytes: bytes) -> Tuple[np.ndarray, ImageDimensions, float]:
        """Decode image bytes and downscale large images.

        Returns:
            The image to run detection on, the original dimensions, and the
            factor mapping detection coordinates back to original pixels
        """
        nparr = np.frombuffer(image_bytes, np.uint8)
        img = cv2.imdecode(nparr, cv2.IMREAD_COLOR)

        if img is None:
            raise InvalidImageError("Failed to decode image")

        height, width = img.shape[:2]
        dimensions = ImageDimensions(width=width, height=height)
        pixels = width * height

        if pixels <= self.max_image_pixels:
            return img, dimensions, 1.0

        scale = math.sqrt(self.max_image_pixels / pixels)
        new_width = int(width * scale)
        new_height = int(height * scale)

        logger.info(
            "Resizing large image",
            original_size=(width, height),
            new_size=(new_width, new_height)
        )

        img = cv2.resize(img, (new_width, new_height), interpolation=cv2.INTER_AREA)
        return img, dimensions, width / new_width

    @staticmethod
    def _convert_landmarks(face_data: InsightFace, factor: float) -> Optional[List[LandmarkPosition]]:
        """Dense 106-point landmarks only.

        The 5 detection keypoints span an inner box of the face, so they are
        not reported as landmarks.
        """
        points = getattr(face_data, "landmark_2d_106", None)
        if points is None:
            return None
        return [
            LandmarkPosition(x=float(x) * factor, y=float(y) * factor)
            for x, y in np.asarray(points)[:, :2]
        ]

    def _convert_to_face(self, face_data: InsightFace, factor: float) -> Optional[DetectedFace]:
        """
        Convert an InsightFace detection to a DetectedFace.

        Args:
            face_data: Face detection result from InsightFace
            factor: Scale from detection image to original image pixels

        Returns:
            DetectedFace in original image pixels, or None for a degenerate box
        """
        x1, y1, x2, y2 = (float(value) * factor for value in face_data.bbox[:4])
        if x2 <= x1 or y2 <= y1:
            logger.debug("Skipping degenerate detection", bbox=[x1, y1, x2, y2])
            return None

        embedding = getattr(face_data, "normed_embedding", None)
        if embedding is not None:
            embedding = np.asarray(embedding, dtype=np.float64) * self.descriptor_scale
        confidence = min(max(float(face_data.det_score), 0.0), 1.0)

        return DetectedFace(
            bounding_box=BoundingBox(x=x1, y=y1, width=x2 - x1, height=y2 - y1),
            landmarks=self._convert_landmarks(face_data, factor),
            confidence=confidence,
            descriptor=embedding,
        )

    async def detect_all_faces(
        self,
        image_bytes: bytes,
        max_faces: Optional[int] = None,
    ) -> DetectionResult:
        """Detect all faces, most confident first."""
        img, dimensions, factor = self._load_image(image_bytes)

        try:
            faces = self.model.get(img, max_num=0 if max_faces is None else max_faces)
        except Exception as e:
            logger.error(
                "Face processing failed",
                error=str(e),
                image_shape=img.shape,
                exc_info=True
            )
            raise

        faces = sorted(faces or [], key=lambda face: float(face.det_score), reverse=True)
        if max_faces is not None:
            faces = faces[:max_faces]

        detected = [self._convert_to_face(face, factor) for face in faces]
        detected = [face for face in detected if face is not None]

        logger.debug("Face detection results", faces_found=len(detected), max_faces=max_faces)

        return DetectionResult(image_dimensions=dimensions, faces=detected)

    async def detect_face(self, image_bytes: bytes) -> DetectionResult:
        """Detect the most confident face only."""
        result = await self.detect_all_faces(image_bytes)
        return DetectionResult(
            image_dimensions=result.image_dimensions,
            faces=result.faces[:1],
        )
