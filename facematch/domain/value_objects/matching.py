"""Face matching and upload decision value objects."""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class FaceMatch(BaseModel):
    """A stored photo whose descriptor is similar to the query descriptor."""
    model_config = ConfigDict(frozen=True)

    photo_id: str = Field(..., description="Matched photo identifier")
    partner_id: str = Field(..., description="Partner owning the matched photo")
    similarity: float = Field(..., ge=0.0, le=1.0, description="Similarity score (0.0 to 1.0)")
    partner_name: Optional[str] = Field(None, description="Display name of the partner")
    partner_profile_picture: Optional[str] = Field(
        None, description="Storage path of the partner's profile picture"
    )
    black_flag: bool = Field(False, description="Whether the partner is flagged by the user")

    @computed_field
    @property
    def confidence(self) -> float:
        """Similarity as a percentage."""
        return self.similarity * 100


class UploadDecisionType(str, Enum):
    """What the caller should do with an uploaded photo."""
    ATTACH = "attach"
    ATTACH_WITH_WARNING = "attach_with_warning"
    EXISTING_MATCHES_FOUND = "existing_matches_found"
    CREATE_NEW = "create_new"


class DecisionReason(str, Enum):
    """Context for a decision, used to pick the message shown to the user."""
    FIRST_PHOTO_FOR_PARTNER = "first_photo_for_partner"
    MATCHES_PARTNER = "matches_partner"
    NO_MATCH_IN_PARTNER_PHOTOS = "no_match_in_partner_photos"
    MATCHES_OTHER_PARTNERS = "matches_other_partners"
    MATCHES_EXISTING_PARTNERS = "matches_existing_partners"
    NO_MATCHES = "no_matches"


class UploadDecision(BaseModel):
    """Recommendation for one upload request. Never persisted."""
    model_config = ConfigDict(frozen=True)

    type: UploadDecisionType
    reason: DecisionReason
    matches: List[FaceMatch] = Field(default_factory=list, description="Matches backing the decision")

    @property
    def requires_confirmation(self) -> bool:
        """Whether the user has to confirm before the photo is stored."""
        return self.type in (
            UploadDecisionType.ATTACH_WITH_WARNING,
            UploadDecisionType.EXISTING_MATCHES_FOUND,
        )


class UploadAnalysis(BaseModel):
    """Decision plus the context the caller renders alongside it."""
    model_config = ConfigDict(frozen=True)

    decision: UploadDecision
    matches: List[FaceMatch] = Field(default_factory=list, description="Matches surfaced to the user")
    partner_matches: List[FaceMatch] = Field(
        default_factory=list, description="Matches within the target partner's own photos"
    )
    other_partner_matches: List[FaceMatch] = Field(
        default_factory=list, description="Matches against every other partner"
    )
    partner_has_other_photos: Optional[bool] = Field(
        None, description="Whether the target partner already had photos with descriptors"
    )
    other_partners_have_photos: Optional[bool] = Field(
        None, description="Whether any other partner had photos with descriptors"
    )
