"""
Ranker

Orders scored candidates by relevance. Ties keep their incoming order, so
social-tier candidates stay ahead of interest-tier ones at equal score.
"""

from typing import List, Tuple, TypeVar

from .contracts import ScoredGroup, ScoredUser

Scored = TypeVar("Scored", ScoredGroup, ScoredUser)


def rank_candidates(scored_candidates: List[Scored]) -> List[Scored]:
    """
    Rank candidates by relevance score (descending).

    Python's sort is stable with reverse=True, so equal scores keep tier order.
    """
    return sorted(
        scored_candidates,
        key=lambda x: x.relevance_score,
        reverse=True
    )


def page_slice(ranked: List[Scored], limit: int, offset: int) -> Tuple[List[Scored], int, bool]:
    """
    Cut the page out of a ranked list.

    The slice always starts at 0; `offset` only feeds `has_more`.

    Returns:
        (page, total, has_more)
    """
    total = len(ranked)
    return ranked[:limit], total, total > offset + limit
