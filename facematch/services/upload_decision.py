"""Upload decision engine.

Turns two independently computed match sets into one recommendation for the
caller. There are two upload flows:

1. Upload to a pre-selected partner (``analyze_photo_upload_for_partner``):
   - any match against *another* partner → ``attach_with_warning``; this
     always wins, even when the photo also matches the selected partner
   - otherwise → ``attach``; matching the selected partner's own photos is
     expected and never a warning

2. Upload without a partner (``analyze_photo_upload_without_partner``):
   - any match → ``existing_matches_found``; the user picks a partner or
     overrides and creates a new one
   - no match → ``create_new``

An uploaded photo is never merged silently into a partner it only resembles.
The "has photos" flags do not change the decision type, they only choose the
reason reported with it.
"""
from typing import Sequence

from facematch.core.logging import get_logger
from facematch.domain.value_objects.matching import (
    DecisionReason,
    FaceMatch,
    UploadAnalysis,
    UploadDecision,
    UploadDecisionType,
)

logger = get_logger(__name__)


def analyze_photo_upload_for_partner(
    partner_matches: Sequence[FaceMatch],
    other_partner_matches: Sequence[FaceMatch],
    partner_has_other_photos: bool,
    other_partners_have_photos: bool = False,
) -> UploadAnalysis:
    """
    Decide what to do with a photo uploaded to a selected partner.

    Args:
        partner_matches: Matches within the selected partner's photos
        other_partner_matches: Matches against every other partner's photos
        partner_has_other_photos: Whether the selected partner had photos to compare with
        other_partners_have_photos: Whether other partners had photos to compare with

    Returns:
        UploadAnalysis with an ``attach`` or ``attach_with_warning`` decision
    """
    partner_matches = list(partner_matches)
    other_partner_matches = list(other_partner_matches)

    if other_partner_matches:
        decision = UploadDecision(
            type=UploadDecisionType.ATTACH_WITH_WARNING,
            reason=DecisionReason.MATCHES_OTHER_PARTNERS,
            matches=other_partner_matches,
        )
    else:
        if not partner_has_other_photos:
            reason = DecisionReason.FIRST_PHOTO_FOR_PARTNER
        elif partner_matches:
            reason = DecisionReason.MATCHES_PARTNER
        else:
            reason = DecisionReason.NO_MATCH_IN_PARTNER_PHOTOS
        decision = UploadDecision(
            type=UploadDecisionType.ATTACH,
            reason=reason,
            matches=partner_matches,
        )

    logger.debug(
        "Analyzed upload for partner",
        decision=decision.type.value,
        reason=decision.reason.value,
        partner_matches=len(partner_matches),
        other_partner_matches=len(other_partner_matches),
    )

    return UploadAnalysis(
        decision=decision,
        matches=decision.matches,
        partner_matches=partner_matches,
        other_partner_matches=other_partner_matches,
        partner_has_other_photos=partner_has_other_photos,
        other_partners_have_photos=other_partners_have_photos,
    )


def analyze_photo_upload_without_partner(all_matches: Sequence[FaceMatch]) -> UploadAnalysis:
    """
    Decide what to do with a photo uploaded without selecting a partner.

    Args:
        all_matches: Matches across every partner of the user

    Returns:
        UploadAnalysis with an ``existing_matches_found`` or ``create_new`` decision
    """
    all_matches = list(all_matches)

    if all_matches:
        decision = UploadDecision(
            type=UploadDecisionType.EXISTING_MATCHES_FOUND,
            reason=DecisionReason.MATCHES_EXISTING_PARTNERS,
            matches=all_matches,
        )
    else:
        decision = UploadDecision(
            type=UploadDecisionType.CREATE_NEW,
            reason=DecisionReason.NO_MATCHES,
        )

    logger.debug(
        "Analyzed upload without partner",
        decision=decision.type.value,
        matches=len(all_matches),
    )

    return UploadAnalysis(
        decision=decision,
        matches=decision.matches,
    )
