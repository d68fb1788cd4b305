"""
Relevance Scorers

Signal functions for group and user candidates. Each returns the points one
signal contributes; `score_group` / `score_user` add them to the base score.
A signal whose inputs are missing contributes nothing.
"""

from typing import Dict, List, Optional, Sequence

from .constants import DEFAULT_WEIGHTS, OPPOSITE_GENDERS, ScoringWeights
from .contracts import (
    CandidateGroup,
    CandidateUser,
    RequesterProfile,
    ScoredGroup,
    ScoredUser,
)


# =============================================================================
# SHARED SIGNALS
# =============================================================================

def matching_interests(
    requester_interests: Sequence[str],
    candidate_interests: Optional[Sequence[str]]
) -> List[str]:
    """Candidate tags the requester also has, in the candidate's order."""
    if not candidate_interests or not requester_interests:
        return []
    wanted = set(requester_interests)
    return [tag for tag in dict.fromkeys(candidate_interests) if tag in wanted]


def score_interest_overlap(shared: Sequence[str], weights: ScoringWeights) -> int:
    return len(shared) * weights.shared_interest


# =============================================================================
# GROUP SIGNALS
# =============================================================================

def count_connections_in_group(
    connected_user_ids: Sequence[str],
    member_ids: Sequence[str]
) -> int:
    """Number of distinct connected users among the group's members."""
    connected = set(connected_user_ids)
    return len({m for m in member_ids if m in connected})


def score_group_size(member_count: int, weights: ScoringWeights) -> int:
    if weights.group_size_min <= member_count <= weights.group_size_max:
        return weights.group_size_bonus
    return 0


def score_group_activity(member_count: int, weights: ScoringWeights) -> int:
    """Member count as a stand-in for activity, capped."""
    return min(member_count * weights.activity_per_member, weights.activity_cap)


def score_group(
    requester: RequesterProfile,
    candidate: CandidateGroup,
    weights: ScoringWeights = DEFAULT_WEIGHTS
) -> ScoredGroup:
    shared = matching_interests(requester.interests, candidate.interests)
    member_ids = candidate.member_ids
    connections = count_connections_in_group(requester.connected_user_ids, member_ids)

    signals: Dict[str, int] = {
        "base": weights.base_score,
        "interests": score_interest_overlap(shared, weights),
        "connections": connections * weights.connection_in_group,
        "group_size": score_group_size(len(member_ids), weights),
        "activity": score_group_activity(len(member_ids), weights),
    }

    return ScoredGroup(
        candidate=candidate,
        relevance_score=sum(signals.values()),
        matching_interests=shared,
        mutual_connections=connections,
        signals=signals,
    )


# =============================================================================
# USER SIGNALS
# =============================================================================

def score_gender(
    requester_gender: Optional[str],
    candidate_gender: Optional[str],
    weights: ScoringWeights
) -> int:
    """Bonus only for the exact "male"/"female" pairing; anything else scores 0."""
    if not requester_gender or not candidate_gender:
        return 0
    if OPPOSITE_GENDERS.get(requester_gender) == candidate_gender:
        return weights.opposite_gender
    return 0


def score_age_proximity(
    requester_age: Optional[int],
    candidate_age: Optional[int],
    weights: ScoringWeights
) -> int:
    # 0 counts as unknown
    if not requester_age or not candidate_age:
        return 0
    diff = abs(requester_age - candidate_age)
    for max_diff, points in weights.age_bands:
        if diff <= max_diff:
            return points
    return 0


def score_user(
    requester: RequesterProfile,
    candidate: CandidateUser,
    weights: ScoringWeights = DEFAULT_WEIGHTS
) -> ScoredUser:
    shared = matching_interests(requester.interests, candidate.interests)

    signals: Dict[str, int] = {
        "base": weights.base_score,
        "interests": score_interest_overlap(shared, weights),
        "gender": score_gender(requester.gender, candidate.gender, weights),
        "age": score_age_proximity(requester.age, candidate.age, weights),
        "shared_group": weights.shared_group_connection if candidate.shares_group else 0,
    }

    return ScoredUser(
        candidate=candidate,
        relevance_score=sum(signals.values()),
        matching_interests=shared,
        is_group_connection=candidate.shares_group,
        signals=signals,
    )
