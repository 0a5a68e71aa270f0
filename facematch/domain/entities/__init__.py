"""Domain entities package."""
from .face import BoundingBox, DetectedFace, ImageDimensions, LandmarkPosition
from .partner import CandidatePhoto, PartnerInfo

__all__ = [
    "BoundingBox",
    "CandidatePhoto",
    "DetectedFace",
    "ImageDimensions",
    "LandmarkPosition",
    "PartnerInfo",
]
