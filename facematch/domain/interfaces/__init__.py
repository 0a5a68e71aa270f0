"""Service interfaces package."""
from .detection import FaceDetectionProvider
from .storage import PhotoRepository

__all__ = ["FaceDetectionProvider", "PhotoRepository"]
