"""
Data Adapter for Discovery Engine

Reads users, groups, matches and swipes and transforms rows into the
engine's contracts.

This is a pure READ + TRANSFORM layer:
- NO scoring logic
- NO ranking
- NO DB writes
"""

from typing import Iterable, List, Optional, Sequence, Set
from sqlalchemy import or_
from sqlalchemy.orm import Session

from models import Group, Match, Swipe, User, group_members
from .constants import CONNECTED_MATCH_STATUSES, TIER_INTEREST
from .contracts import CandidateGroup, CandidateUser, MemberSummary, RequesterProfile
from .errors import RequesterNotFoundError


def _clean_tags(tags: Optional[Iterable[str]]) -> List[str]:
    """Drop empty/None tags and duplicates, keeping first-seen order."""
    if not tags:
        return []
    return list(dict.fromkeys(t for t in tags if t))


def _clean_photos(photos) -> List[str]:
    if not photos:
        return []
    return [p for p in photos if isinstance(p, str)]


# =============================================================================
# SOCIAL GRAPH READS
# =============================================================================

def member_group_ids(db: Session, user_id: str) -> List[str]:
    """IDs of groups the user is a member of."""
    rows = (
        db.query(group_members.c.group_id)
        .filter(group_members.c.user_id == user_id)
        .order_by(group_members.c.group_id)
        .all()
    )
    return [group_id for (group_id,) in rows]


def group_mate_ids(db: Session, group_ids: Sequence[str]) -> Set[str]:
    """Every member of the given groups."""
    if not group_ids:
        return set()
    rows = (
        db.query(group_members.c.user_id)
        .filter(group_members.c.group_id.in_(list(group_ids)))
        .distinct()
        .all()
    )
    return {member_id for (member_id,) in rows}


def match_counterpart_ids(
    db: Session,
    user_id: str,
    statuses: Optional[Sequence[str]] = None
) -> List[str]:
    """
    IDs of users on the other side of the user's matches.

    Args:
        db: Database session
        user_id: The user whose matches are read
        statuses: Restrict to these match statuses; None means any status

    Returns:
        Distinct counterpart IDs, oldest match first
    """
    query = db.query(Match.user_id, Match.matched_user_id).filter(
        or_(Match.user_id == user_id, Match.matched_user_id == user_id)
    )
    if statuses is not None:
        query = query.filter(Match.status.in_(list(statuses)))
    query = query.order_by(Match.created_at, Match.id)

    counterparts: List[str] = []
    for initiator, matched in query.all():
        other = matched if initiator == user_id else initiator
        if other and other != user_id and other not in counterparts:
            counterparts.append(other)
    return counterparts


def connected_user_ids(db: Session, user_id: str) -> List[str]:
    """Users connected to the requester through an accepted match."""
    return match_counterpart_ids(db, user_id, CONNECTED_MATCH_STATUSES)


def swiped_target_ids(db: Session, user_id: str) -> Set[str]:
    """Every user or group the user has swiped on, either direction."""
    rows = db.query(Swipe.swiped_id).filter(Swipe.user_id == user_id).distinct().all()
    return {target_id for (target_id,) in rows}


def load_requester(db: Session, user_id: str) -> RequesterProfile:
    """
    Load the requesting user with interests, groups and connections.

    Raises:
        RequesterNotFoundError: if no user has this id
    """
    user = db.get(User, user_id)
    if user is None:
        raise RequesterNotFoundError(user_id)

    return RequesterProfile(
        user_id=user.id,
        age=user.age,
        gender=user.gender,
        interests=_clean_tags(user.interests),
        group_ids=member_group_ids(db, user.id),
        connected_user_ids=connected_user_ids(db, user.id),
    )


# =============================================================================
# ROW -> CANDIDATE
# =============================================================================

def build_group_candidate(group: Group, tier: str = TIER_INTEREST) -> CandidateGroup:
    members = [
        MemberSummary(
            user_id=member.id,
            name=member.name or "",
            photos=_clean_photos(member.photos),
        )
        for member in (group.members or [])
        if member is not None
    ]
    return CandidateGroup(
        group_id=group.id,
        name=group.name or "",
        bio=group.bio or "",
        photos=_clean_photos(group.photos),
        interests=_clean_tags(group.interests),
        members=members,
        is_private=bool(group.is_private),
        created_at=group.created_at,
        tier=tier,
    )


def build_user_candidate(
    user: User,
    tier: str = TIER_INTEREST,
    shares_group: bool = False
) -> CandidateUser:
    return CandidateUser(
        user_id=user.id,
        name=user.name or "",
        photos=_clean_photos(user.photos),
        age=user.age,
        gender=user.gender,
        bio=user.bio or "",
        interests=_clean_tags(user.interests),
        created_at=user.created_at,
        tier=tier,
        shares_group=shares_group,
    )


def get_group(db: Session, group_id: str) -> Optional[Group]:
    return db.get(Group, group_id)


def get_user(db: Session, user_id: str) -> Optional[User]:
    return db.get(User, user_id)
