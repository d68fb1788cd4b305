from discovery.logic.candidate_generator import generate_candidates
from discovery.logic.candidate_sources import CandidateSource
from discovery.logic.constants import TIER_INTEREST, TIER_SOCIAL
from discovery.logic.contracts import CandidateUser, RequesterProfile

REQUESTER = RequesterProfile(user_id="me", interests=["hiking"])


class ListSource(CandidateSource):
    """Serves a fixed list, recording what it was asked for."""

    def __init__(self, ids, tier, share=None, honour_exclusions=True):
        super().__init__(db=None)
        self.items = [CandidateUser(user_id=i, tier=tier) for i in ids]
        self.tier = tier
        self.share = share
        self.honour_exclusions = honour_exclusions
        self.calls = []

    def fetch(self, exclusions, requester, cap):
        self.calls.append((set(exclusions), cap))
        if not self.honour_exclusions:
            return list(self.items)
        return [c for c in self.items if c.user_id not in exclusions][:cap]


def _ids(candidates):
    return [c.candidate_id for c in candidates]


def test_social_tier_capped_at_half_page_and_interest_fills_rest():
    social = ListSource([f"s{i}" for i in range(10)], TIER_SOCIAL, share=0.5)
    interest = ListSource([f"i{i}" for i in range(10)], TIER_INTEREST)

    result = generate_candidates([social, interest], set(), REQUESTER, limit=5)

    assert _ids(result) == ["s0", "s1", "i0", "i1", "i2"]
    assert social.calls[0][1] == 2
    assert interest.calls[0][1] == 3


def test_interest_tier_fills_slots_social_tier_left_empty():
    social = ListSource(["s0"], TIER_SOCIAL, share=0.5)
    interest = ListSource([f"i{i}" for i in range(10)], TIER_INTEREST)

    result = generate_candidates([social, interest], set(), REQUESTER, limit=6)

    assert len(result) == 6
    assert interest.calls[0][1] == 5


def test_later_tiers_see_earlier_picks_as_exclusions():
    social = ListSource(["a", "b"], TIER_SOCIAL, share=0.5)
    interest = ListSource(["a", "b", "c"], TIER_INTEREST)

    result = generate_candidates([social, interest], {"x"}, REQUESTER, limit=4)

    assert _ids(result) == ["a", "b", "c"]
    assert interest.calls[0][0] == {"x", "a", "b"}
    assert [c.tier for c in result] == [TIER_SOCIAL, TIER_SOCIAL, TIER_INTEREST]


def test_misbehaving_source_cannot_break_invariants():
    social = ListSource(["x", "a", "a", "b", "c"], TIER_SOCIAL, share=0.5, honour_exclusions=False)
    interest = ListSource(["a", "d"], TIER_INTEREST, honour_exclusions=False)

    result = generate_candidates([social, interest], {"x"}, REQUESTER, limit=4)

    ids = _ids(result)
    assert "x" not in ids
    assert len(ids) == len(set(ids)) <= 4
    assert ids == ["a", "b", "d"]


def test_page_of_one_skips_social_tier():
    social = ListSource(["s0"], TIER_SOCIAL, share=0.5)
    interest = ListSource(["i0", "i1"], TIER_INTEREST)

    result = generate_candidates([social, interest], set(), REQUESTER, limit=1)

    assert _ids(result) == ["i0"]
    assert social.calls == []
