"""Services package."""
from .enrichment import build_partner_lookup, enrich_matches
from .face_matching import calculate_face_similarity, find_face_matches, is_face_match
from .face_quality import (
    assess_faces,
    calculate_face_quality_metrics,
    validate_face_detection,
    validate_face_quality,
)
from .photo_analysis import PhotoAnalysisService
from .upload_decision import analyze_photo_upload_for_partner, analyze_photo_upload_without_partner

__all__ = [
    "PhotoAnalysisService",
    "analyze_photo_upload_for_partner",
    "analyze_photo_upload_without_partner",
    "assess_faces",
    "build_partner_lookup",
    "calculate_face_quality_metrics",
    "calculate_face_similarity",
    "enrich_matches",
    "find_face_matches",
    "is_face_match",
    "validate_face_detection",
    "validate_face_quality",
]
