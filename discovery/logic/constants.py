"""
Discovery Engine Constants

Score weights, paging bounds and relationship vocabularies used by the
discovery pipelines. All scoring is a deterministic weighted sum.
"""

import logging
import os
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# =============================================================================
# PAGING
# =============================================================================

DEFAULT_LIMIT = 20
MIN_LIMIT = 1
MAX_LIMIT = 50
DEFAULT_OFFSET = 0

# Social tiers may fill at most this fraction of a page
SOCIAL_TIER_SHARE = 0.5

# excludeSwiped defaults differ per pipeline; kept as the mobile client expects
GROUP_EXCLUDE_SWIPED_DEFAULT = False
USER_EXCLUDE_SWIPED_DEFAULT = True

# =============================================================================
# RELATIONSHIP VOCABULARY
# =============================================================================

# Match statuses that make the counterpart a social connection.
# "matched" is a legacy value still present on older documents.
CONNECTED_MATCH_STATUSES = ("accepted", "matched")

# Only these pairs earn the gender signal
OPPOSITE_GENDERS: Dict[str, str] = {
    "male": "female",
    "female": "male",
}

# =============================================================================
# TIERS
# =============================================================================

TIER_SOCIAL = "social"
TIER_INTEREST = "interest"

# =============================================================================
# SCORE WEIGHTS
# =============================================================================


class ScoringWeights(BaseModel):
    """
    Weights for every relevance signal.

    One instance is injected into the engine; tests and tuning swap it out
    instead of touching the scorers.
    """
    base_score: int = 50
    shared_interest: int = 10           # per shared interest tag

    # Groups
    connection_in_group: int = 15       # per connected user among members
    group_size_bonus: int = 10          # flat, when size is in range
    group_size_min: int = 3
    group_size_max: int = 10
    activity_per_member: int = 2
    activity_cap: int = 20

    # Users
    opposite_gender: int = 20
    # (max age difference, points), checked in order
    age_bands: List[Tuple[int, int]] = Field(
        default_factory=lambda: [(2, 15), (5, 10), (10, 5)]
    )
    shared_group_connection: int = 25


# env var -> ScoringWeights field
WEIGHT_ENV_OVERRIDES: Dict[str, str] = {
    "DISCOVERY_BASE_SCORE": "base_score",
    "DISCOVERY_SHARED_INTEREST_POINTS": "shared_interest",
    "DISCOVERY_GROUP_CONNECTION_POINTS": "connection_in_group",
    "DISCOVERY_GROUP_SIZE_POINTS": "group_size_bonus",
    "DISCOVERY_OPPOSITE_GENDER_POINTS": "opposite_gender",
    "DISCOVERY_SHARED_GROUP_POINTS": "shared_group_connection",
}


def load_weights_from_env(environ: Optional[Dict[str, str]] = None) -> ScoringWeights:
    """
    Build ScoringWeights, applying integer overrides from the environment.

    Unset or malformed values keep the default.
    """
    environ = os.environ if environ is None else environ
    overrides: Dict[str, int] = {}
    for env_var, field_name in WEIGHT_ENV_OVERRIDES.items():
        raw = environ.get(env_var)
        if raw is None:
            continue
        try:
            overrides[field_name] = int(raw)
        except ValueError:
            logger.warning(f"Ignoring non-integer {env_var}={raw!r}")
            continue
        logger.info(f"Applied weight override: {env_var} -> {field_name}")
    return ScoringWeights(**overrides)


DEFAULT_WEIGHTS = ScoringWeights()
