"""Descriptor matching for finding similar stored photos.

Similarity is derived from the Euclidean distance between two descriptors:

    similarity = max(0, 1 - min(distance, 1))

Descriptors from the upstream model are normalised so that distances of 1 or
more indicate unrelated faces, which all map to a similarity of 0.
"""
from typing import List, Sequence

import numpy as np

from facematch.core.logging import get_logger
from facematch.domain.entities.partner import CandidatePhoto
from facematch.domain.value_objects.matching import FaceMatch

logger = get_logger(__name__)

DEFAULT_SIMILARITY_THRESHOLD = 0.6


def calculate_face_similarity(
    descriptor1: Sequence[float],
    descriptor2: Sequence[float],
) -> float:
    """
    Calculate similarity (0-1) between two face descriptors.

    Descriptors of different lengths come from different models and can
    never match, so they score 0.

    Args:
        descriptor1: First descriptor
        descriptor2: Second descriptor

    Returns:
        Similarity where 1 means identical descriptors
    """
    if len(descriptor1) != len(descriptor2):
        logger.warning(
            "Descriptor length mismatch",
            length1=len(descriptor1),
            length2=len(descriptor2),
        )
        return 0.0

    distance = float(
        np.linalg.norm(np.asarray(descriptor1, dtype=np.float64) - np.asarray(descriptor2, dtype=np.float64))
    )
    return max(0.0, 1.0 - min(distance, 1.0))


def find_face_matches(
    query_descriptor: Sequence[float],
    candidates: Sequence[CandidatePhoto],
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> List[FaceMatch]:
    """
    Rank stored photos by similarity to a query descriptor.

    Candidates must already be restricted to photos that have a descriptor.
    Equal similarities keep their input order.

    Args:
        query_descriptor: Descriptor of the uploaded face
        candidates: Stored photos to compare against
        threshold: Minimum similarity for a candidate to be kept (0.0 to 1.0)

    Returns:
        Matches with similarity >= threshold, highest similarity first
    """
    matches: List[FaceMatch] = []

    for candidate in candidates:
        similarity = calculate_face_similarity(query_descriptor, candidate.descriptor)
        if similarity >= threshold:
            matches.append(
                FaceMatch(
                    photo_id=candidate.photo_id,
                    partner_id=candidate.partner_id,
                    similarity=similarity,
                    partner_name=candidate.partner_name,
                    partner_profile_picture=candidate.partner_profile_picture,
                )
            )

    # sorted() is stable, including with reverse=True
    return sorted(matches, key=lambda match: match.similarity, reverse=True)


def is_face_match(similarity: float, threshold: float = DEFAULT_SIMILARITY_THRESHOLD) -> bool:
    """Check if a similarity score counts as a match."""
    return similarity >= threshold
