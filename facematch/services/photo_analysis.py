"""Photo analysis service for deciding where an uploaded photo belongs."""
from typing import List, Optional, Sequence

from facematch.core.config import Settings, settings as default_settings
from facematch.core.exceptions import (
    FaceQualityError,
    InvalidFaceSelectionError,
    MultipleFacesError,
    NoFaceDetectedError,
    PartnerNotFoundError,
)
from facematch.core.logging import get_logger
from facematch.domain.interfaces.detection.face_detection import FaceDetectionProvider
from facematch.domain.interfaces.storage.photo_repository import PhotoRepository
from facematch.domain.value_objects.matching import UploadAnalysis
from facematch.domain.value_objects.quality import FaceAssessment
from facematch.services.enrichment import build_partner_lookup, enrich_matches
from facematch.services.face_matching import find_face_matches
from facematch.services.face_quality import assess_faces
from facematch.services.upload_decision import (
    analyze_photo_upload_for_partner,
    analyze_photo_upload_without_partner,
)

logger = get_logger(__name__)


class PhotoAnalysisService:
    """Service running the full upload pipeline for one user's partners.

    This service:
    1. Detects faces with the configured provider and applies the quality gate
    2. Loads candidate photos for the user's partners from the repository
    3. Matches the selected face against them and enriches the matches
    4. Returns the upload decision

    Example:
        ```python
        service = PhotoAnalysisService(repository, detection_provider)

        analysis = await service.analyze_image(
            user_id="user-1",
            image_bytes=image_bytes,
            partner_id="partner-1",
        )
        analysis.decision.type  # UploadDecisionType.ATTACH
        ```
    """

    def __init__(
        self,
        repository: PhotoRepository,
        detection_provider: Optional[FaceDetectionProvider] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        """Initialize the photo analysis service.

        Args:
            repository: Storage collaborator returning partners and candidate photos
            detection_provider: Face detection backend, required only for image analysis
            settings: Thresholds to use, defaults to the application settings
        """
        self.repository = repository
        self.detection_provider = detection_provider
        self.settings = settings or default_settings

    @property
    def similarity_threshold(self) -> float:
        return self.settings.SIMILARITY_THRESHOLD

    async def assess_image(self, image_bytes: bytes) -> List[FaceAssessment]:
        """Detect every face of an image and run the quality gate on each."""
        if self.detection_provider is None:
            raise ValueError("A detection provider is required to analyze images")

        detection = await self.detection_provider.detect_all_faces(
            image_bytes, max_faces=self.settings.MAX_FACES_PER_IMAGE
        )
        assessments = assess_faces(detection, self.settings.face_quality_config)
        logger.info(
            "Assessed detected faces",
            faces_count=len(assessments),
            valid_count=sum(1 for assessment in assessments if assessment.is_valid),
        )
        return assessments

    async def select_face(
        self,
        image_bytes: bytes,
        face_index: Optional[int] = None,
    ) -> FaceAssessment:
        """
        Pick the face of an image to match with.

        Args:
            image_bytes: Raw image data
            face_index: Index of the face chosen by the user, if several were found

        Returns:
            The selected face, which passed the quality gate and has a descriptor

        Raises:
            NoFaceDetectedError: If the image has no face
            FaceQualityError: If no face, or the selected face, is good enough
            MultipleFacesError: If several good faces exist and none was selected
            InvalidFaceSelectionError: If face_index does not refer to a detected face
        """
        assessments = await self.assess_image(image_bytes)
        if not assessments:
            raise NoFaceDetectedError("No faces detected in image")

        if face_index is not None:
            if not 0 <= face_index < len(assessments):
                raise InvalidFaceSelectionError(
                    f"Face index {face_index} is out of range",
                    details={"face_index": face_index, "faces_count": len(assessments)},
                )
            selected = assessments[face_index]
            if not selected.is_valid:
                raise FaceQualityError(
                    "Selected face does not meet quality requirements",
                    details={"face_index": face_index, "reasons": selected.quality.reasons},
                )
        else:
            usable = [assessment for assessment in assessments if assessment.is_valid]
            if not usable:
                raise FaceQualityError(
                    "No face meets quality requirements",
                    details={
                        "faces_count": len(assessments),
                        "reasons": [assessment.quality.reasons for assessment in assessments],
                    },
                )
            if len(usable) > 1:
                raise MultipleFacesError(
                    f"{len(usable)} faces found, select one",
                    details={"face_indexes": [assessment.index for assessment in usable]},
                )
            selected = usable[0]

        if selected.face.descriptor is None:
            raise FaceQualityError(
                "Selected face has no descriptor",
                details={"face_index": selected.index},
            )
        return selected

    async def analyze_for_partner(
        self,
        user_id: str,
        partner_id: str,
        descriptor: Sequence[float],
    ) -> UploadAnalysis:
        """
        Analyze a face descriptor uploaded to a selected partner.

        Raises:
            PartnerNotFoundError: If the partner does not belong to the user
        """
        partner = await self.repository.get_partner(user_id, partner_id)
        if partner is None:
            raise PartnerNotFoundError(
                "Partner not found",
                details={"partner_id": partner_id},
            )

        partner_photos = await self.repository.list_candidate_photos([partner_id])

        other_partners = [
            other for other in await self.repository.list_partners(user_id)
            if other.id != partner_id
        ]
        other_photos = []
        if other_partners:
            other_photos = await self.repository.list_candidate_photos(
                [other.id for other in other_partners]
            )

        threshold = self.similarity_threshold
        lookup = build_partner_lookup([partner, *other_partners])
        partner_matches = enrich_matches(
            find_face_matches(descriptor, partner_photos, threshold), lookup
        )
        other_partner_matches = enrich_matches(
            find_face_matches(descriptor, other_photos, threshold), lookup
        )

        logger.info(
            "Matched upload for partner",
            partner_id=partner_id,
            partner_photos=len(partner_photos),
            other_photos=len(other_photos),
            partner_matches=len(partner_matches),
            other_partner_matches=len(other_partner_matches),
        )

        return analyze_photo_upload_for_partner(
            partner_matches,
            other_partner_matches,
            partner_has_other_photos=bool(partner_photos),
            other_partners_have_photos=bool(other_photos),
        )

    async def analyze_without_partner(
        self,
        user_id: str,
        descriptor: Sequence[float],
    ) -> UploadAnalysis:
        """Analyze a face descriptor uploaded without selecting a partner."""
        partners = await self.repository.list_partners(user_id)
        photos = []
        if partners:
            photos = await self.repository.list_candidate_photos([partner.id for partner in partners])

        all_matches = enrich_matches(
            find_face_matches(descriptor, photos, self.similarity_threshold),
            build_partner_lookup(partners),
        )

        logger.info(
            "Matched upload across partners",
            partners=len(partners),
            photos=len(photos),
            matches_count=len(all_matches),
        )

        return analyze_photo_upload_without_partner(all_matches)

    async def analyze_image(
        self,
        user_id: str,
        image_bytes: bytes,
        partner_id: Optional[str] = None,
        face_index: Optional[int] = None,
    ) -> UploadAnalysis:
        """Select a face in an image and run the matching upload flow for it."""
        selected = await self.select_face(image_bytes, face_index)
        descriptor = selected.face.descriptor

        if partner_id is None:
            return await self.analyze_without_partner(user_id, descriptor)
        return await self.analyze_for_partner(user_id, partner_id, descriptor)
