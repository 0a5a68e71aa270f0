"""Partner (tracked contact) entities as seen by the matching core."""
from typing import Optional, Tuple, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator


class PartnerInfo(BaseModel):
    """Presentation data of a partner, used to enrich matches."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Partner identifier")
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_picture_storage_path: Optional[str] = None
    black_flag: bool = False

    @property
    def display_name(self) -> Optional[str]:
        """Full name, or None when the partner has no name at all."""
        name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return name or None


class CandidatePhoto(BaseModel):
    """A stored partner photo with its previously computed descriptor."""
    model_config = ConfigDict(frozen=True)

    photo_id: str = Field(..., description="Photo identifier")
    partner_id: str = Field(..., description="Identifier of the partner owning the photo")
    descriptor: Tuple[float, ...] = Field(..., description="Face descriptor of the photo")
    partner_name: Optional[str] = None
    partner_profile_picture: Optional[str] = None

    @field_validator("descriptor", mode="before")
    @classmethod
    def validate_descriptor(cls, v: Union[np.ndarray, list, tuple]) -> Tuple[float, ...]:
        """Convert numpy arrays and lists to a tuple of floats."""
        if isinstance(v, np.ndarray):
            return tuple(float(value) for value in v.ravel())
        return tuple(float(value) for value in v)
