"""
Candidate Sources

Each source is one retrieval tier behind a common interface. The candidate
generator calls sources in priority order, so a source only ever sees
exclusions that already include everything picked by earlier tiers.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Set, Union
from sqlalchemy.orm import Session

from models import Group, GroupInterest, User, UserInterest
from .adapter import build_group_candidate, build_user_candidate, group_mate_ids
from .constants import SOCIAL_TIER_SHARE, TIER_INTEREST, TIER_SOCIAL
from .contracts import CandidateGroup, CandidateUser, RequesterProfile

Candidate = Union[CandidateGroup, CandidateUser]


class CandidateSource(ABC):
    """Abstract base class for a retrieval tier."""

    tier: str = TIER_INTEREST
    # Fraction of the page this tier may fill; None takes whatever remains
    share: Optional[float] = None

    def __init__(self, db: Session):
        self.db = db

    def cap_for(self, limit: int, remaining: int) -> int:
        """How many candidates this tier may return for a page of `limit`."""
        if self.share is None:
            return max(0, remaining)
        return max(0, min(remaining, int(limit * self.share)))

    @abstractmethod
    def fetch(
        self,
        exclusions: Set[str],
        requester: RequesterProfile,
        cap: int
    ) -> List[Candidate]:
        """Return at most `cap` candidates whose IDs are not in `exclusions`."""
        pass


# =============================================================================
# GROUP SOURCES
# =============================================================================

class SocialGroupSource(CandidateSource):
    """
    Groups containing users the requester is connected to.

    With no connections any non-excluded group qualifies.
    """

    tier = TIER_SOCIAL
    share = SOCIAL_TIER_SHARE

    def fetch(self, exclusions, requester, cap):
        if cap <= 0:
            return []
        query = self.db.query(Group)
        if exclusions:
            query = query.filter(Group.id.notin_(list(exclusions)))
        if requester.connected_user_ids:
            query = query.filter(
                Group.members.any(User.id.in_(requester.connected_user_ids))
            )
        groups = query.order_by(Group.created_at.desc(), Group.id).limit(cap).all()
        return [build_group_candidate(g, tier=self.tier) for g in groups]


class InterestGroupSource(CandidateSource):
    """Public groups sharing at least one interest tag, newest first."""

    tier = TIER_INTEREST

    def fetch(self, exclusions, requester, cap):
        if cap <= 0 or not requester.interests:
            return []
        query = self.db.query(Group).filter(
            Group.is_private.is_(False),
            Group.interest_tags.any(GroupInterest.tag.in_(requester.interests)),
        )
        if exclusions:
            query = query.filter(Group.id.notin_(list(exclusions)))
        groups = query.order_by(Group.created_at.desc(), Group.id).limit(cap).all()
        return [build_group_candidate(g, tier=self.tier) for g in groups]


# =============================================================================
# USER SOURCES
# =============================================================================

class SharedGroupUserSource(CandidateSource):
    """
    Second-degree connections: users sharing a group with the requester.

    With no groups any non-excluded user qualifies.
    """

    tier = TIER_SOCIAL
    share = SOCIAL_TIER_SHARE

    def fetch(self, exclusions, requester, cap):
        if cap <= 0:
            return []
        query = self.db.query(User).filter(User.id != requester.user_id)
        if exclusions:
            query = query.filter(User.id.notin_(list(exclusions)))

        shares_group = bool(requester.group_ids)
        if shares_group:
            mates = group_mate_ids(self.db, requester.group_ids)
            mates.discard(requester.user_id)
            if not mates:
                return []
            query = query.filter(User.id.in_(list(mates)))

        users = query.order_by(User.created_at.desc(), User.id).limit(cap).all()
        return [
            build_user_candidate(u, tier=self.tier, shares_group=shares_group)
            for u in users
        ]


class InterestUserSource(CandidateSource):
    """Users sharing at least one interest tag, newest first."""

    tier = TIER_INTEREST

    def fetch(self, exclusions, requester, cap):
        if cap <= 0 or not requester.interests:
            return []
        query = self.db.query(User).filter(
            User.id != requester.user_id,
            User.interest_tags.any(UserInterest.tag.in_(requester.interests)),
        )
        if exclusions:
            query = query.filter(User.id.notin_(list(exclusions)))
        users = query.order_by(User.created_at.desc(), User.id).limit(cap).all()

        mates = group_mate_ids(self.db, requester.group_ids)
        return [
            build_user_candidate(u, tier=self.tier, shares_group=u.id in mates)
            for u in users
        ]
