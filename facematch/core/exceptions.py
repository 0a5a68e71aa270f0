"""Custom exceptions for the face matching service."""
from typing import Optional


class FaceMatchError(Exception):
    """Base exception for face matching operations."""

    def __init__(self, message: str, details: Optional[dict] = None):
        """
        Initialize face match error.

        Args:
            message: Error description
            details: Additional error context
        """
        super().__init__(message)
        self.details = details or {}


class InvalidImageError(FaceMatchError):
    """Raised when the provided image is invalid or cannot be processed."""
    pass


class NoFaceDetectedError(FaceMatchError):
    """Raised when no face is detected in the image."""
    pass


class MultipleFacesError(FaceMatchError):
    """Raised when several usable faces are found and none was selected."""
    pass


class FaceQualityError(FaceMatchError):
    """Raised when the selected face fails the quality gate."""
    pass


class InvalidFaceSelectionError(FaceMatchError):
    """Raised when a face index does not refer to a detected face."""
    pass


class PartnerNotFoundError(FaceMatchError):
    """Raised when the target partner does not exist for the user."""
    pass


class ModelLoadError(FaceMatchError):
    """Raised when the face detection model fails to load."""
    pass


class UnknownProviderError(FaceMatchError):
    """Raised when no detection provider is registered under a name."""
    pass
