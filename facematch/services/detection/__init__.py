"""Face detection providers."""
from .factory import create_face_detection_provider, get_face_detection_provider

__all__ = ["create_face_detection_provider", "get_face_detection_provider"]
