"""Shared fixtures and fakes for the test suite."""
from typing import Dict, List, Optional, Sequence

import pytest

from facematch.domain.entities.face import BoundingBox, DetectedFace, ImageDimensions
from facematch.domain.entities.partner import CandidatePhoto, PartnerInfo
from facematch.domain.interfaces.detection.face_detection import FaceDetectionProvider
from facematch.domain.interfaces.storage.photo_repository import PhotoRepository
from facematch.domain.value_objects.detection import DetectionResult

DESCRIPTOR_LENGTH = 128


def make_descriptor(*values: float, length: int = DESCRIPTOR_LENGTH) -> List[float]:
    """Descriptor whose leading components are the given values, rest zeros."""
    return list(values) + [0.0] * (length - len(values))


def make_face(
    width: float = 300,
    height: float = 300,
    confidence: float = 0.95,
    descriptor: Optional[Sequence[float]] = None,
    x: float = 100,
    y: float = 100,
) -> DetectedFace:
    return DetectedFace(
        bounding_box=BoundingBox(x=x, y=y, width=width, height=height),
        confidence=confidence,
        descriptor=descriptor if descriptor is not None else make_descriptor(),
    )


class InMemoryPhotoRepository(PhotoRepository):
    """Photo repository backed by plain dictionaries."""

    def __init__(self) -> None:
        self.partners: Dict[str, Dict[str, PartnerInfo]] = {}
        self.photos: List[CandidatePhoto] = []
        self.requested_partner_ids: List[List[str]] = []

    def add_partner(self, user_id: str, partner: PartnerInfo) -> PartnerInfo:
        self.partners.setdefault(user_id, {})[partner.id] = partner
        return partner

    def add_photo(self, photo_id: str, partner_id: str, descriptor: Sequence[float]) -> CandidatePhoto:
        photo = CandidatePhoto(photo_id=photo_id, partner_id=partner_id, descriptor=descriptor)
        self.photos.append(photo)
        return photo

    async def get_partner(self, user_id: str, partner_id: str) -> Optional[PartnerInfo]:
        return self.partners.get(user_id, {}).get(partner_id)

    async def list_partners(self, user_id: str) -> List[PartnerInfo]:
        return list(self.partners.get(user_id, {}).values())

    async def list_candidate_photos(self, partner_ids: Sequence[str]) -> List[CandidatePhoto]:
        self.requested_partner_ids.append(list(partner_ids))
        return [photo for photo in self.photos if photo.partner_id in partner_ids]


class FakeDetectionProvider(FaceDetectionProvider):
    """Detection provider returning a fixed list of faces."""

    name = "fake"

    def __init__(self, faces: Sequence[DetectedFace], image_size: float = 1000) -> None:
        self.faces = list(faces)
        self.image_dimensions = ImageDimensions(width=image_size, height=image_size)
        self.calls = 0

    async def detect_all_faces(self, image_bytes: bytes, max_faces: Optional[int] = None) -> DetectionResult:
        self.calls += 1
        faces = self.faces if max_faces is None else self.faces[:max_faces]
        return DetectionResult(image_dimensions=self.image_dimensions, faces=faces)

    async def detect_face(self, image_bytes: bytes) -> DetectionResult:
        result = await self.detect_all_faces(image_bytes)
        return DetectionResult(image_dimensions=result.image_dimensions, faces=result.faces[:1])


@pytest.fixture
def repository():
    """Repository with two partners of user-1 and one of another user."""
    repo = InMemoryPhotoRepository()
    repo.add_partner("user-1", PartnerInfo(id="alice", first_name="Alice", last_name="Smith"))
    repo.add_partner(
        "user-1",
        PartnerInfo(
            id="bob",
            first_name="Bob",
            profile_picture_storage_path="partners/bob/profile.jpg",
            black_flag=True,
        ),
    )
    repo.add_partner("user-2", PartnerInfo(id="carol", first_name="Carol"))
    return repo
