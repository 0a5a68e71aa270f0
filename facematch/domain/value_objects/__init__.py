"""Value objects package."""
from .detection import DetectionResult
from .matching import DecisionReason, FaceMatch, UploadAnalysis, UploadDecision, UploadDecisionType
from .quality import FaceAssessment, FaceQualityConfig, FaceQualityMetrics, FaceQualityResult

__all__ = [
    "DecisionReason",
    "DetectionResult",
    "FaceAssessment",
    "FaceMatch",
    "FaceQualityConfig",
    "FaceQualityMetrics",
    "FaceQualityResult",
    "UploadAnalysis",
    "UploadDecision",
    "UploadDecisionType",
]
