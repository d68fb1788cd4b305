"""
Discovery Engine

Main orchestrator for group and user discovery. Both pipelines share one
shape:

1. Load requester profile (NotFound if missing)
2. Resolve exclusions
3. Generate candidates, social tier first then interest tier
4. Score every candidate
5. Rank (stable) and cut the page
"""

import logging
import time
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .adapter import (
    build_group_candidate,
    build_user_candidate,
    get_group,
    get_user,
    group_mate_ids,
    load_requester,
)
from .candidate_generator import generate_candidates
from .candidate_sources import (
    InterestGroupSource,
    InterestUserSource,
    SharedGroupUserSource,
    SocialGroupSource,
)
from .constants import (
    DEFAULT_WEIGHTS,
    GROUP_EXCLUDE_SWIPED_DEFAULT,
    USER_EXCLUDE_SWIPED_DEFAULT,
    ScoringWeights,
)
from .contracts import (
    DiscoveryQuery,
    GroupDiscoveryOutput,
    ScoredGroup,
    ScoredUser,
    UserDiscoveryOutput,
)
from .errors import CandidateNotFoundError, DiscoveryError, DiscoveryInternalError
from .exclusions import resolve_group_exclusions, resolve_user_exclusions
from .output_assembler import assemble_group_output, assemble_user_output
from .ranker import rank_candidates
from .scorers import score_group, score_user

logger = logging.getLogger(__name__)

ENGINE_VERSION = "1.0.0"


class DiscoveryEngine:
    """
    Ranks groups and users for a requester.

    Stateless between calls: every result is a function of the database
    snapshot, the request parameters and the injected weights.
    """

    def __init__(self, db: Session, weights: Optional[ScoringWeights] = None):
        self.db = db
        self.weights = weights or DEFAULT_WEIGHTS
        self.version = ENGINE_VERSION

    def discover_groups(
        self,
        requester_id: str,
        query: Optional[DiscoveryQuery] = None
    ) -> GroupDiscoveryOutput:
        """
        Recommend groups the requester is not a member of.

        Raises:
            RequesterNotFoundError: requester id does not resolve
            DiscoveryInternalError: database failure
        """
        query = query or DiscoveryQuery()
        exclude_swiped = query.resolve_exclude_swiped(GROUP_EXCLUDE_SWIPED_DEFAULT)
        start_time = time.perf_counter()
        logger.info(f"Discovering groups for {requester_id} (limit={query.limit}, exclude_swiped={exclude_swiped})")

        try:
            requester = load_requester(self.db, requester_id)
            exclusions = resolve_group_exclusions(self.db, requester, exclude_swiped)
            logger.info(f"Excluding {len(exclusions)} groups; {len(requester.connected_user_ids)} connections")

            sources = [SocialGroupSource(self.db), InterestGroupSource(self.db)]
            candidates = generate_candidates(sources, exclusions, requester, query.limit)
            scored = [score_group(requester, c, self.weights) for c in candidates]
        except DiscoveryError:
            raise
        except SQLAlchemyError as e:
            logger.exception(f"Database error while discovering groups for {requester_id}")
            raise DiscoveryInternalError("Failed to load group candidates") from e

        output = assemble_group_output(rank_candidates(scored), query)

        processing_time = (time.perf_counter() - start_time) * 1000
        logger.info(f"Group discovery complete: {len(output.groups)}/{output.total} ({processing_time:.2f}ms)")
        return output

    def discover_users(
        self,
        requester_id: str,
        query: Optional[DiscoveryQuery] = None
    ) -> UserDiscoveryOutput:
        """
        Recommend users the requester has not matched (or, optionally,
        swiped on).

        Raises:
            RequesterNotFoundError: requester id does not resolve
            DiscoveryInternalError: database failure
        """
        query = query or DiscoveryQuery()
        exclude_swiped = query.resolve_exclude_swiped(USER_EXCLUDE_SWIPED_DEFAULT)
        start_time = time.perf_counter()
        logger.info(f"Discovering users for {requester_id} (limit={query.limit}, exclude_swiped={exclude_swiped})")

        try:
            requester = load_requester(self.db, requester_id)
            exclusions = resolve_user_exclusions(self.db, requester, exclude_swiped)
            logger.info(f"Excluding {len(exclusions)} users; requester in {len(requester.group_ids)} groups")

            sources = [SharedGroupUserSource(self.db), InterestUserSource(self.db)]
            candidates = generate_candidates(sources, exclusions, requester, query.limit)
            scored = [score_user(requester, c, self.weights) for c in candidates]
        except DiscoveryError:
            raise
        except SQLAlchemyError as e:
            logger.exception(f"Database error while discovering users for {requester_id}")
            raise DiscoveryInternalError("Failed to load user candidates") from e

        output = assemble_user_output(rank_candidates(scored), query)

        processing_time = (time.perf_counter() - start_time) * 1000
        logger.info(f"User discovery complete: {len(output.users)}/{output.total} ({processing_time:.2f}ms)")
        return output

    def score_single_group(self, requester_id: str, group_id: str) -> ScoredGroup:
        """
        Score one group for the requester, regardless of exclusions.

        Useful for explaining why a group ranks where it does.
        """
        try:
            requester = load_requester(self.db, requester_id)
            group = get_group(self.db, group_id)
            if group is None:
                raise CandidateNotFoundError("group", group_id)
            candidate = build_group_candidate(group)
        except DiscoveryError:
            raise
        except SQLAlchemyError as e:
            logger.exception(f"Database error while scoring group {group_id}")
            raise DiscoveryInternalError("Failed to load group") from e
        return score_group(requester, candidate, self.weights)

    def score_single_user(self, requester_id: str, user_id: str) -> ScoredUser:
        """Score one user for the requester, regardless of exclusions."""
        try:
            requester = load_requester(self.db, requester_id)
            user = get_user(self.db, user_id)
            if user is None:
                raise CandidateNotFoundError("user", user_id)
            mates = group_mate_ids(self.db, requester.group_ids)
            candidate = build_user_candidate(
                user, shares_group=user.id != requester.user_id and user.id in mates
            )
        except DiscoveryError:
            raise
        except SQLAlchemyError as e:
            logger.exception(f"Database error while scoring user {user_id}")
            raise DiscoveryInternalError("Failed to load user") from e
        return score_user(requester, candidate, self.weights)


# Convenience functions for simple usage
def get_group_recommendations(
    db: Session,
    requester_id: str,
    query: Optional[DiscoveryQuery] = None,
    weights: Optional[ScoringWeights] = None
) -> GroupDiscoveryOutput:
    return DiscoveryEngine(db, weights).discover_groups(requester_id, query)


def get_user_recommendations(
    db: Session,
    requester_id: str,
    query: Optional[DiscoveryQuery] = None,
    weights: Optional[ScoringWeights] = None
) -> UserDiscoveryOutput:
    return DiscoveryEngine(db, weights).discover_users(requester_id, query)
