"""
Data Contracts for the Discovery Engine

Pydantic models for the requester profile and query (input), the candidates
passed between pipeline stages, and the discovery outputs.
"""

from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from .constants import DEFAULT_LIMIT, DEFAULT_OFFSET, TIER_INTEREST
from .params import parse_bool, parse_limit, parse_offset


# =============================================================================
# INPUT CONTRACTS
# =============================================================================

class RequesterProfile(BaseModel):
    """
    The requesting user plus the parts of their social graph that scoring
    and sourcing need.
    """
    user_id: str
    age: Optional[int] = None
    gender: Optional[str] = None
    interests: List[str] = Field(default_factory=list)

    # Groups the requester belongs to
    group_ids: List[str] = Field(default_factory=list)
    # Counterparts of accepted matches
    connected_user_ids: List[str] = Field(default_factory=list)


class DiscoveryQuery(BaseModel):
    """
    Paging/filter parameters for one discovery request.

    Raw values are accepted and normalised: limit is clamped to
    MIN_LIMIT..MAX_LIMIT (falling back to DEFAULT_LIMIT), offset falls back
    to DEFAULT_OFFSET. exclude_swiped left as None takes the pipeline's
    default.
    """
    limit: int = DEFAULT_LIMIT
    offset: int = DEFAULT_OFFSET
    exclude_swiped: Optional[bool] = None

    @field_validator("limit", mode="before")
    @classmethod
    def _clamp_limit(cls, value):
        return parse_limit(value)

    @field_validator("offset", mode="before")
    @classmethod
    def _clamp_offset(cls, value):
        return parse_offset(value)

    @field_validator("exclude_swiped", mode="before")
    @classmethod
    def _parse_exclude_swiped(cls, value):
        return parse_bool(value, None)

    def resolve_exclude_swiped(self, default: bool) -> bool:
        return default if self.exclude_swiped is None else self.exclude_swiped


# =============================================================================
# INTERMEDIATE DATA STRUCTURES
# =============================================================================

class MemberSummary(BaseModel):
    """Member preview embedded in a group candidate."""
    user_id: str
    name: str = ""
    photos: List[str] = Field(default_factory=list)


class CandidateGroup(BaseModel):
    """A group as fetched by a candidate source, before scoring."""
    group_id: str
    name: str = ""
    bio: str = ""
    photos: List[str] = Field(default_factory=list)
    interests: List[str] = Field(default_factory=list)
    members: List[MemberSummary] = Field(default_factory=list)
    is_private: bool = False
    created_at: Optional[datetime] = None

    tier: str = TIER_INTEREST

    @property
    def candidate_id(self) -> str:
        return self.group_id

    @property
    def member_ids(self) -> List[str]:
        return [m.user_id for m in self.members]


class CandidateUser(BaseModel):
    """A user as fetched by a candidate source, before scoring."""
    user_id: str
    name: str = ""
    photos: List[str] = Field(default_factory=list)
    age: Optional[int] = None
    gender: Optional[str] = None
    bio: str = ""
    interests: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    tier: str = TIER_INTEREST
    # Shares at least one group with the requester
    shares_group: bool = False

    @property
    def candidate_id(self) -> str:
        return self.user_id


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class ScoredGroup(BaseModel):
    candidate: CandidateGroup
    relevance_score: int = 0
    matching_interests: List[str] = Field(default_factory=list)
    mutual_connections: int = 0
    # signal name -> points contributed (base included)
    signals: Dict[str, int] = Field(default_factory=dict)


class ScoredUser(BaseModel):
    candidate: CandidateUser
    relevance_score: int = 0
    matching_interests: List[str] = Field(default_factory=list)
    is_group_connection: bool = False
    signals: Dict[str, int] = Field(default_factory=dict)


class GroupDiscoveryOutput(BaseModel):
    groups: List[ScoredGroup] = Field(default_factory=list)
    total: int = 0
    has_more: bool = False


class UserDiscoveryOutput(BaseModel):
    users: List[ScoredUser] = Field(default_factory=list)
    total: int = 0
    has_more: bool = False
