"""
Candidate Exclusion Resolver

Computes the IDs that must never be recommended to a requester.
Read-only; the requester profile is loaded (and validated) by the caller.
"""

from typing import Set
from sqlalchemy.orm import Session

from .adapter import match_counterpart_ids, swiped_target_ids
from .contracts import RequesterProfile


def resolve_group_exclusions(
    db: Session,
    requester: RequesterProfile,
    exclude_swiped: bool
) -> Set[str]:
    """
    Groups the requester already belongs to, plus (optionally) every group
    they have swiped on.
    """
    excluded: Set[str] = set(requester.group_ids)
    if exclude_swiped:
        excluded |= swiped_target_ids(db, requester.user_id)
    return excluded


def resolve_user_exclusions(
    db: Session,
    requester: RequesterProfile,
    exclude_swiped: bool
) -> Set[str]:
    """
    The requester, every user sharing a match with them (any status), plus
    (optionally) every user they have swiped on.
    """
    excluded: Set[str] = {requester.user_id}
    excluded.update(match_counterpart_ids(db, requester.user_id))
    if exclude_swiped:
        excluded |= swiped_target_ids(db, requester.user_id)
    return excluded
