from discovery.logic.constants import ScoringWeights, load_weights_from_env
from discovery.logic.contracts import (
    CandidateGroup,
    CandidateUser,
    MemberSummary,
    RequesterProfile,
)
from discovery.logic.scorers import (
    count_connections_in_group,
    matching_interests,
    score_age_proximity,
    score_gender,
    score_group,
    score_group_activity,
    score_group_size,
    score_user,
)

W = ScoringWeights()


def _group(member_ids, interests=()):
    return CandidateGroup(
        group_id="g1",
        interests=list(interests),
        members=[MemberSummary(user_id=m) for m in member_ids],
    )


def test_two_shared_interests_add_twenty():
    requester = RequesterProfile(user_id="me", interests=["hiking", "art"])
    candidate = CandidateUser(user_id="u1", interests=["art", "hiking", "music"])

    scored = score_user(requester, candidate)

    assert scored.matching_interests == ["art", "hiking"]
    assert scored.signals["interests"] == 20
    assert scored.relevance_score >= 70


def test_opposite_gender_close_age_one_interest_scores_95():
    requester = RequesterProfile(user_id="me", age=30, gender="male", interests=["hiking"])
    candidate = CandidateUser(user_id="u1", age=32, gender="female", interests=["hiking"])

    scored = score_user(requester, candidate)

    assert scored.relevance_score == 95
    assert scored.is_group_connection is False


def test_shared_group_connection_adds_bonus():
    requester = RequesterProfile(user_id="me", age=30, gender="male", interests=["hiking"])
    candidate = CandidateUser(
        user_id="u1", age=32, gender="female", interests=["hiking"], shares_group=True
    )

    scored = score_user(requester, candidate)

    assert scored.relevance_score == 120
    assert scored.is_group_connection is True


def test_age_bands():
    assert score_age_proximity(30, 32, W) == 15
    assert score_age_proximity(30, 27, W) == 10
    assert score_age_proximity(30, 35, W) == 10
    assert score_age_proximity(30, 40, W) == 5
    assert score_age_proximity(30, 41, W) == 0
    assert score_age_proximity(None, 30, W) == 0
    assert score_age_proximity(30, None, W) == 0


def test_gender_signal_only_for_exact_binary_opposites():
    assert score_gender("male", "female", W) == 20
    assert score_gender("female", "male", W) == 20
    assert score_gender("Female", "MALE", W) == 0
    assert score_gender("male", "male", W) == 0
    assert score_gender("other", "female", W) == 0
    assert score_gender(None, "female", W) == 0
    assert score_gender("male", None, W) == 0


def test_missing_optional_fields_score_base_only():
    requester = RequesterProfile(user_id="me", age=30, gender="male", interests=["hiking"])
    candidate = CandidateUser(user_id="u1")

    scored = score_user(requester, candidate)

    assert scored.relevance_score == 50
    assert scored.matching_interests == []


def test_matching_interests_deduplicates_and_handles_empty():
    assert matching_interests(["a", "b"], ["b", "b", "a", "c"]) == ["b", "a"]
    assert matching_interests([], ["a"]) == []
    assert matching_interests(["a"], None) == []


def test_group_size_bonus_range():
    assert score_group_size(2, W) == 0
    assert score_group_size(3, W) == 10
    assert score_group_size(10, W) == 10
    assert score_group_size(11, W) == 0


def test_group_activity_is_capped():
    assert score_group_activity(0, W) == 0
    assert score_group_activity(4, W) == 8
    assert score_group_activity(10, W) == 20
    assert score_group_activity(25, W) == 20


def test_connections_in_group_counts_distinct_members():
    assert count_connections_in_group(["a", "b"], ["a", "b", "c", "a"]) == 2
    assert count_connections_in_group([], ["a"]) == 0


def test_group_score_combines_all_signals():
    requester = RequesterProfile(
        user_id="me",
        interests=["karaoke", "bowling"],
        connected_user_ids=["c1", "c2"],
    )
    candidate = _group(["c1", "c2", "x"], interests=["bowling"])

    scored = score_group(requester, candidate)

    # 50 base + 10 interest + 2*15 connections + 10 size + 6 activity
    assert scored.relevance_score == 106
    assert scored.mutual_connections == 2
    assert scored.matching_interests == ["bowling"]
    assert sum(scored.signals.values()) == scored.relevance_score


def test_injected_weights_change_scores():
    weights = ScoringWeights(base_score=0, shared_interest=1, opposite_gender=0, age_bands=[])
    requester = RequesterProfile(user_id="me", age=30, gender="male", interests=["a", "b"])
    candidate = CandidateUser(user_id="u1", age=30, gender="female", interests=["a", "b"])

    assert score_user(requester, candidate, weights).relevance_score == 2


def test_load_weights_from_env_applies_integer_overrides():
    weights = load_weights_from_env({
        "DISCOVERY_BASE_SCORE": "40",
        "DISCOVERY_SHARED_GROUP_POINTS": "not-a-number",
    })

    assert weights.base_score == 40
    assert weights.shared_group_connection == 25
    assert weights.shared_interest == 10
