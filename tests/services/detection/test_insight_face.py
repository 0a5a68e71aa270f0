"""Tests for the InsightFace detection provider.

The model itself is not loaded; conversion and image handling are tested on a
provider instance created without running its constructor.
"""
from types import SimpleNamespace

import numpy as np
import pytest

pytest.importorskip("insightface")

import cv2  # noqa: E402

from facematch.core.exceptions import InvalidImageError  # noqa: E402
from facematch.domain.entities.face import ImageDimensions  # noqa: E402
from facematch.services.face_matching import (  # noqa: E402
    DEFAULT_SIMILARITY_THRESHOLD,
    calculate_face_similarity,
)
from facematch.services.face_quality import validate_face_detection  # noqa: E402
from facematch.services.detection.insight_face import InsightFaceDetectionProvider  # noqa: E402


@pytest.fixture
def provider():
    """Provider without a loaded model."""
    instance = InsightFaceDetectionProvider.__new__(InsightFaceDetectionProvider)
    instance.max_image_pixels = 400 * 300
    instance.descriptor_scale = 0.4
    instance.model = None
    return instance


def encode_image(width: int, height: int) -> bytes:
    ok, buffer = cv2.imencode(".png", np.zeros((height, width, 3), dtype=np.uint8))
    assert ok
    return buffer.tobytes()


class TestInsightFaceProvider:
    """Image loading and result conversion."""

    def test_invalid_image(self, provider):
        with pytest.raises(InvalidImageError):
            provider._load_image(b"definitely not an image")

    def test_small_image_is_not_resized(self, provider):
        img, dimensions, factor = provider._load_image(encode_image(200, 100))

        assert img.shape[:2] == (100, 200)
        assert (dimensions.width, dimensions.height) == (200, 100)
        assert factor == 1.0

    def test_large_image_is_downscaled(self, provider):
        img, dimensions, factor = provider._load_image(encode_image(800, 600))

        assert (dimensions.width, dimensions.height) == (800, 600)
        assert img.shape[1] == 400
        assert factor == pytest.approx(2.0)

    def test_convert_to_face_uses_original_pixels(self, provider):
        face_data = SimpleNamespace(
            bbox=np.array([10.0, 20.0, 110.0, 140.0]),
            det_score=np.float32(0.87),
            kps=np.array([[30.0, 50.0], [90.0, 50.0], [60.0, 80.0], [40.0, 110.0], [80.0, 110.0]]),
            normed_embedding=np.full(512, 0.5, dtype=np.float32),
        )

        face = provider._convert_to_face(face_data, 2.0)

        assert face.bounding_box.x == 20.0
        assert face.bounding_box.y == 40.0
        assert face.bounding_box.width == 200.0
        assert face.bounding_box.height == 240.0
        assert face.confidence == pytest.approx(0.87)
        assert len(face.descriptor) == 512
        assert face.descriptor[0] == pytest.approx(0.5 * 0.4)

    def test_convert_degenerate_box(self, provider):
        face_data = SimpleNamespace(bbox=np.array([10.0, 20.0, 10.0, 40.0]), det_score=0.9)

        assert provider._convert_to_face(face_data, 1.0) is None

    def test_dense_landmarks_are_scaled(self, provider):
        points = np.column_stack([np.linspace(15.0, 105.0, 106), np.linspace(25.0, 135.0, 106)])
        face_data = SimpleNamespace(
            bbox=np.array([10.0, 20.0, 110.0, 140.0]),
            det_score=0.9,
            landmark_2d_106=points,
        )

        face = provider._convert_to_face(face_data, 2.0)

        assert len(face.landmarks) == 106
        assert (face.landmarks[0].x, face.landmarks[0].y) == (30.0, 50.0)
        assert face.descriptor is None


class TestKeypointOnlyDetection:
    """The 5 detection keypoints cover an inner box of the face."""

    def test_keypoints_are_not_reported_as_landmarks(self, provider):
        face_data = SimpleNamespace(
            bbox=np.array([100.0, 100.0, 300.0, 340.0]),
            det_score=0.95,
            kps=np.array([[150.0, 180.0], [250.0, 180.0], [200.0, 230.0], [160.0, 280.0], [240.0, 280.0]]),
        )

        face = provider._convert_to_face(face_data, 1.0)

        assert face.landmarks is None

    def test_clear_keypoint_only_face_passes_quality_gate(self, provider):
        face_data = SimpleNamespace(
            bbox=np.array([100.0, 100.0, 300.0, 340.0]),
            det_score=0.95,
            kps=np.array([[150.0, 180.0], [250.0, 180.0], [200.0, 230.0], [160.0, 280.0], [240.0, 280.0]]),
        )
        face = provider._convert_to_face(face_data, 1.0)

        result = validate_face_detection(
            face.bounding_box,
            ImageDimensions(width=1000, height=1000),
            face.landmarks,
            face.confidence,
        )

        assert result.is_valid, result.reasons


def unit_pair(cosine: float, size: int = 512):
    """Two unit vectors with the given cosine similarity."""
    first = np.zeros(size)
    first[0] = 1.0
    second = np.zeros(size)
    second[0] = cosine
    second[1] = np.sqrt(1.0 - cosine ** 2)
    return first, second


def embedded_face(provider, embedding):
    face_data = SimpleNamespace(
        bbox=np.array([0.0, 0.0, 200.0, 240.0]),
        det_score=0.95,
        normed_embedding=embedding.astype(np.float32),
    )
    return provider._convert_to_face(face_data, 1.0)


class TestDescriptorScale:
    """Scaled InsightFace embeddings against the similarity floor."""

    def test_same_person_pair_matches(self, provider):
        first, second = unit_pair(0.7)

        similarity = calculate_face_similarity(
            embedded_face(provider, first).descriptor,
            embedded_face(provider, second).descriptor,
        )

        assert similarity >= DEFAULT_SIMILARITY_THRESHOLD
        assert similarity == pytest.approx(1 - 0.4 * np.sqrt(0.6), abs=1e-4)

    def test_unrelated_pair_does_not_match(self, provider):
        first, second = unit_pair(0.0)

        similarity = calculate_face_similarity(
            embedded_face(provider, first).descriptor,
            embedded_face(provider, second).descriptor,
        )

        assert similarity < DEFAULT_SIMILARITY_THRESHOLD

    def test_identical_embeddings(self, provider):
        first, _ = unit_pair(0.0)

        similarity = calculate_face_similarity(
            embedded_face(provider, first).descriptor,
            embedded_face(provider, first).descriptor,
        )

        assert similarity == pytest.approx(1.0)
