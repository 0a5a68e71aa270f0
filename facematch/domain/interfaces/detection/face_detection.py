"""Face detection provider interface."""
from abc import ABC, abstractmethod
from typing import Optional

from ...value_objects.detection import DetectionResult


class FaceDetectionProvider(ABC):
    """Interface for face detection backends.

    A provider is a black box returning, per detected face, a bounding box,
    optional landmarks, a confidence score and a descriptor. The quality and
    matching code never depends on a concrete provider.
    """

    name: str = "base"

    @abstractmethod
    async def detect_face(self, image_bytes: bytes) -> DetectionResult:
        """
        Detect the single most confident face in the provided image.

        Args:
            image_bytes: Raw image data

        Returns:
            DetectionResult with at most one face

        Raises:
            InvalidImageError: If the image format is invalid
        """
        pass

    @abstractmethod
    async def detect_all_faces(
        self,
        image_bytes: bytes,
        max_faces: Optional[int] = None,
    ) -> DetectionResult:
        """
        Detect every face in the provided image.

        Args:
            image_bytes: Raw image data
            max_faces: Maximum number of faces to return (None for no limit)

        Returns:
            DetectionResult with faces ordered by descending confidence.
            An image without faces yields an empty list, not an error.

        Raises:
            InvalidImageError: If the image format is invalid
        """
        pass
