"""Photo repository interface for stored partner photos."""
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ...entities.partner import CandidatePhoto, PartnerInfo


class PhotoRepository(ABC):
    """Interface for reading partners and their photo descriptors."""

    @abstractmethod
    async def get_partner(self, user_id: str, partner_id: str) -> Optional[PartnerInfo]:
        """
        Get a partner owned by the user.

        Args:
            user_id: Owner of the partner
            partner_id: Partner identifier

        Returns:
            The partner, or None if it does not exist or belongs to someone else
        """
        pass

    @abstractmethod
    async def list_partners(self, user_id: str) -> List[PartnerInfo]:
        """
        List every partner owned by the user.

        Args:
            user_id: Owner of the partners

        Returns:
            List of partners, possibly empty
        """
        pass

    @abstractmethod
    async def list_candidate_photos(self, partner_ids: Sequence[str]) -> List[CandidatePhoto]:
        """
        List the photos of the given partners that have a face descriptor.

        Photos stored without a descriptor must not be returned.

        Args:
            partner_ids: Partners whose photos are requested

        Returns:
            List of candidate photos, possibly empty
        """
        pass
