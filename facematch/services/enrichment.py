"""Attach partner presentation data to face matches."""
from typing import Dict, Iterable, List, Mapping, Sequence

from facematch.domain.entities.partner import PartnerInfo
from facematch.domain.value_objects.matching import FaceMatch


def build_partner_lookup(partners: Iterable[PartnerInfo]) -> Dict[str, PartnerInfo]:
    """Index partners by id."""
    return {partner.id: partner for partner in partners}


def enrich_match(match: FaceMatch, partners: Mapping[str, PartnerInfo]) -> FaceMatch:
    """Copy of a match carrying its partner's name, picture and flag.

    A match whose partner is not in the lookup gets empty enrichment fields.
    """
    partner = partners.get(match.partner_id)
    if partner is None:
        return match.model_copy(
            update={
                "partner_name": None,
                "partner_profile_picture": None,
                "black_flag": False,
            }
        )
    return match.model_copy(
        update={
            "partner_name": partner.display_name,
            "partner_profile_picture": partner.profile_picture_storage_path,
            "black_flag": partner.black_flag,
        }
    )


def enrich_matches(
    matches: Sequence[FaceMatch],
    partners: Mapping[str, PartnerInfo],
) -> List[FaceMatch]:
    """Enrich every match, preserving order."""
    return [enrich_match(match, partners) for match in matches]
