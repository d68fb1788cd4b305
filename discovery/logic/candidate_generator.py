"""
Tiered Candidate Generator

Pulls candidates from each source in priority order until the page is full.
Later tiers never return IDs already picked by earlier ones.
"""

import logging
from typing import List, Sequence, Set

from .candidate_sources import Candidate, CandidateSource
from .contracts import RequesterProfile

logger = logging.getLogger(__name__)


def generate_candidates(
    sources: Sequence[CandidateSource],
    exclusions: Set[str],
    requester: RequesterProfile,
    limit: int
) -> List[Candidate]:
    """
    Generate up to `limit` candidates across all tiers.

    Args:
        sources: Candidate sources, highest priority first
        exclusions: IDs that must never be returned
        requester: Requesting user's profile
        limit: Page size (already clamped)

    Returns:
        Candidates in tier order, no duplicates, none excluded
    """
    candidates: List[Candidate] = []
    seen: Set[str] = set(exclusions)

    for source in sources:
        remaining = limit - len(candidates)
        if remaining <= 0:
            break
        cap = source.cap_for(limit, remaining)
        if cap <= 0:
            continue

        fetched = source.fetch(set(seen), requester, cap)

        added = 0
        for candidate in fetched:
            if added >= cap:
                break
            cid = candidate.candidate_id
            if cid in seen:
                continue
            seen.add(cid)
            candidates.append(candidate)
            added += 1

        logger.info(f"Tier '{source.tier}' ({type(source).__name__}): {added} candidates (cap {cap})")

    return candidates
