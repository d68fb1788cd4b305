"""
Output Assembler

Builds the discovery outputs from ranked candidates.
"""

from typing import List

from .contracts import (
    DiscoveryQuery,
    GroupDiscoveryOutput,
    ScoredGroup,
    ScoredUser,
    UserDiscoveryOutput,
)
from .ranker import page_slice


def assemble_group_output(
    ranked: List[ScoredGroup],
    query: DiscoveryQuery
) -> GroupDiscoveryOutput:
    page, total, has_more = page_slice(ranked, query.limit, query.offset)
    return GroupDiscoveryOutput(groups=page, total=total, has_more=has_more)


def assemble_user_output(
    ranked: List[ScoredUser],
    query: DiscoveryQuery
) -> UserDiscoveryOutput:
    page, total, has_more = page_slice(ranked, query.limit, query.offset)
    return UserDiscoveryOutput(users=page, total=total, has_more=has_more)
