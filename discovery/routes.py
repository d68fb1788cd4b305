"""
Discovery API Routes

Exposes the discovery engine via REST API.
GET /api/discover/groups and GET /api/discover/users
"""

import logging
from functools import lru_cache
from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from db import get_db
from utils.auth_utils import auth_requester
from .logic.constants import ScoringWeights, load_weights_from_env
from .logic.contracts import DiscoveryQuery, ScoredGroup, ScoredUser
from .logic.engine import DiscoveryEngine, ENGINE_VERSION
from .logic.errors import CandidateNotFoundError, DiscoveryInternalError, RequesterNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/discover", tags=["discovery"])


@lru_cache(maxsize=1)
def get_scoring_weights() -> ScoringWeights:
    """Weights are read from the environment once per process."""
    return load_weights_from_env()


def _internal_error() -> JSONResponse:
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.get("/groups", summary="Discover groups")
def discover_groups(
    limit: Optional[str] = Query(default=None),
    offset: Optional[str] = Query(default=None),
    exclude_swiped: Optional[str] = Query(default=None, alias="excludeSwiped"),
    requester_id: str = Depends(auth_requester),
    weights: ScoringWeights = Depends(get_scoring_weights),
    db_session=Depends(get_db),
):
    """
    Recommend groups for the authenticated user.

    **Query:**
    - `limit`: page size, clamped to 1-50 (default 20)
    - `offset`: only used to compute `hasMore` (default 0)
    - `excludeSwiped`: "true" hides groups already swiped on (default "false")
    """
    query = DiscoveryQuery(limit=limit, offset=offset, exclude_swiped=exclude_swiped)
    try:
        db: Session
        with db_session as db:
            output = DiscoveryEngine(db, weights).discover_groups(requester_id, query)
            return {
                "groups": [_serialize_group(g) for g in output.groups],
                "total": output.total,
                "hasMore": output.has_more,
            }
    except RequesterNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    except DiscoveryInternalError:
        return _internal_error()
    except Exception:
        logger.exception("Error in discover_groups")
        return _internal_error()


@router.get("/users", summary="Discover users")
def discover_users(
    limit: Optional[str] = Query(default=None),
    offset: Optional[str] = Query(default=None),
    exclude_swiped: Optional[str] = Query(default=None, alias="excludeSwiped"),
    requester_id: str = Depends(auth_requester),
    weights: ScoringWeights = Depends(get_scoring_weights),
    db_session=Depends(get_db),
):
    """
    Recommend users for the authenticated user.

    **Query:**
    - `limit`: page size, clamped to 1-50 (default 20)
    - `offset`: only used to compute `hasMore` (default 0)
    - `excludeSwiped`: "true" hides users already swiped on (default "true")
    """
    query = DiscoveryQuery(limit=limit, offset=offset, exclude_swiped=exclude_swiped)
    try:
        db: Session
        with db_session as db:
            output = DiscoveryEngine(db, weights).discover_users(requester_id, query)
            return {
                "users": [_serialize_user(u) for u in output.users],
                "total": output.total,
                "hasMore": output.has_more,
            }
    except RequesterNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    except DiscoveryInternalError:
        return _internal_error()
    except Exception:
        logger.exception("Error in discover_users")
        return _internal_error()


@router.get("/groups/{candidate_id}/score", summary="Explain one group's score")
def explain_group_score(
    candidate_id: str,
    requester_id: str = Depends(auth_requester),
    weights: ScoringWeights = Depends(get_scoring_weights),
    db_session=Depends(get_db),
):
    try:
        db: Session
        with db_session as db:
            scored = DiscoveryEngine(db, weights).score_single_group(requester_id, candidate_id)
            return {**_serialize_group(scored), "signals": scored.signals}
    except RequesterNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    except CandidateNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DiscoveryInternalError:
        return _internal_error()
    except Exception:
        logger.exception(f"Error scoring group {candidate_id}")
        return _internal_error()


@router.get("/users/{candidate_id}/score", summary="Explain one user's score")
def explain_user_score(
    candidate_id: str,
    requester_id: str = Depends(auth_requester),
    weights: ScoringWeights = Depends(get_scoring_weights),
    db_session=Depends(get_db),
):
    try:
        db: Session
        with db_session as db:
            scored = DiscoveryEngine(db, weights).score_single_user(requester_id, candidate_id)
            return {**_serialize_user(scored), "signals": scored.signals}
    except RequesterNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    except CandidateNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DiscoveryInternalError:
        return _internal_error()
    except Exception:
        logger.exception(f"Error scoring user {candidate_id}")
        return _internal_error()


# =============================================================================
# SERIALIZATION
# =============================================================================

def _serialize_group(scored: ScoredGroup) -> Dict[str, Any]:
    """Convert ScoredGroup to the client's JSON shape."""
    group = scored.candidate
    return {
        "_id": group.group_id,
        "name": group.name,
        "bio": group.bio,
        "photos": group.photos,
        "interests": group.interests,
        "members": [
            {"_id": m.user_id, "name": m.name, "photos": m.photos}
            for m in group.members
        ],
        "isPrivate": group.is_private,
        "createdAt": group.created_at.isoformat() if group.created_at else None,
        "relevanceScore": scored.relevance_score,
        "matchingInterests": scored.matching_interests,
        "mutualConnections": scored.mutual_connections,
    }


def _serialize_user(scored: ScoredUser) -> Dict[str, Any]:
    """Convert ScoredUser to the client's JSON shape."""
    user = scored.candidate
    return {
        "_id": user.user_id,
        "name": user.name,
        "photos": user.photos,
        "age": user.age,
        "gender": user.gender,
        "bio": user.bio,
        "interests": user.interests,
        "relevanceScore": scored.relevance_score,
        "matchingInterests": scored.matching_interests,
        "isGroupConnection": scored.is_group_connection,
    }


# =============================================================================
# HEALTH CHECK
# =============================================================================

@router.get("/health", summary="Discovery engine health check")
def health_check():
    """Check if discovery engine is operational."""
    return {"status": "ok", "engine": "discovery", "version": ENGINE_VERSION}
