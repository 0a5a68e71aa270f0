"""Factory for face detection providers."""
from typing import Optional

from facematch.core.config import settings
from facematch.core.exceptions import UnknownProviderError
from facematch.domain.interfaces.detection.face_detection import FaceDetectionProvider

SUPPORTED_PROVIDERS = ("insightface",)


def create_face_detection_provider(name: str = "insightface") -> FaceDetectionProvider:
    """
    Create a face detection provider by name.

    Backends are imported lazily so the matching core can be used without
    any model runtime installed.

    Raises:
        UnknownProviderError: If no provider is registered under the name
        ModelLoadError: If the provider's model fails to load
    """
    if name == "insightface":
        from facematch.services.detection.insight_face import InsightFaceDetectionProvider

        return InsightFaceDetectionProvider()

    raise UnknownProviderError(
        f"Unknown face detection provider: {name}",
        details={"provider": name, "supported": list(SUPPORTED_PROVIDERS)},
    )


def get_face_detection_provider(name: Optional[str] = None) -> FaceDetectionProvider:
    """Create the provider configured by DETECTION_PROVIDER."""
    return create_face_detection_provider(name or settings.DETECTION_PROVIDER)
