"""Configuration settings for the face matching service."""
from pydantic_settings import BaseSettings, SettingsConfigDict

from facematch.domain.value_objects.quality import FaceQualityConfig


class Settings(BaseSettings):
    """Application settings.

    These settings are loaded from environment variables with the following precedence:
    1. Environment variables
    2. .env file
    3. Default values

    Attributes:
        SIMILARITY_THRESHOLD: Minimum similarity (0-1) for two descriptors to match
        DESCRIPTOR_SCALE: Factor applied to unit-norm embeddings by the detection backend
        FACE_MIN_*/FACE_MAX_*: Face quality gate thresholds
        DETECTION_PROVIDER: Name of the face detection backend to use
    """
    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="",  # No prefix for environment variables
    )

    # Core Settings
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"

    # Face matching settings
    SIMILARITY_THRESHOLD: float = 0.6
    # InsightFace embeddings are unit-norm; scaled by 0.4, cosine 0.5 lands
    # exactly on the 0.6 similarity floor
    DESCRIPTOR_SCALE: float = 0.4

    # Face quality settings
    FACE_MIN_PIXEL_SIZE: float = 120
    FACE_MIN_AREA_PERCENTAGE: float = 2.0
    FACE_MIN_RELATIVE_SIZE: float = 5.0
    FACE_MIN_ASPECT_RATIO: float = 0.6
    FACE_MAX_ASPECT_RATIO: float = 1.8
    FACE_MIN_LANDMARK_COVERAGE: float = 0.5
    FACE_MIN_CONFIDENCE: float = 0.65

    @property
    def face_quality_config(self) -> FaceQualityConfig:
        """Get the quality gate thresholds as a config object."""
        return FaceQualityConfig(
            min_pixel_size=self.FACE_MIN_PIXEL_SIZE,
            min_face_area_percentage=self.FACE_MIN_AREA_PERCENTAGE,
            min_relative_size=self.FACE_MIN_RELATIVE_SIZE,
            min_aspect_ratio=self.FACE_MIN_ASPECT_RATIO,
            max_aspect_ratio=self.FACE_MAX_ASPECT_RATIO,
            min_landmark_coverage=self.FACE_MIN_LANDMARK_COVERAGE,
            min_confidence=self.FACE_MIN_CONFIDENCE,
        )

    # Face detection settings
    DETECTION_PROVIDER: str = "insightface"
    MODEL_NAME: str = "buffalo_l"
    MODEL_CACHE_DIR: str = ".model_cache"
    MAX_IMAGE_PIXELS: int = 1920 * 1080  # ~2MP (Full HD)
    MAX_FACES_PER_IMAGE: int = 20

    # Optional settings with defaults
    LOG_LEVEL: str = "INFO"

settings = Settings()
