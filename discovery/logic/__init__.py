"""
Discovery Logic Module

Deterministic candidate sourcing and relevance scoring for group and user
discovery.
"""

from .contracts import (
    RequesterProfile,
    DiscoveryQuery,
    MemberSummary,
    CandidateGroup,
    CandidateUser,
    ScoredGroup,
    ScoredUser,
    GroupDiscoveryOutput,
    UserDiscoveryOutput,
)
from .constants import ScoringWeights, DEFAULT_WEIGHTS, load_weights_from_env
from .engine import DiscoveryEngine, get_group_recommendations, get_user_recommendations
from .errors import (
    DiscoveryError,
    RequesterNotFoundError,
    CandidateNotFoundError,
    DiscoveryInternalError,
)

__all__ = [
    # Main engine
    "DiscoveryEngine",
    "get_group_recommendations",
    "get_user_recommendations",

    # Contracts
    "RequesterProfile",
    "DiscoveryQuery",
    "MemberSummary",
    "CandidateGroup",
    "CandidateUser",
    "ScoredGroup",
    "ScoredUser",
    "GroupDiscoveryOutput",
    "UserDiscoveryOutput",

    # Configuration
    "ScoringWeights",
    "DEFAULT_WEIGHTS",
    "load_weights_from_env",

    # Errors
    "DiscoveryError",
    "RequesterNotFoundError",
    "CandidateNotFoundError",
    "DiscoveryInternalError",
]
