import random
from datetime import datetime

from discovery.logic.adapter import load_requester
from discovery.logic.contracts import DiscoveryQuery
from discovery.logic.engine import DiscoveryEngine
from discovery.logic.exclusions import resolve_group_exclusions, resolve_user_exclusions
from models import Group, User
from seed_data import seed


def test_seed_creates_requested_rows(db_session):
    counts = seed(db_session, user_count=15, group_count=4, rng=random.Random(3), now=datetime(2024, 6, 1))

    assert counts["users"] == 15
    assert counts["groups"] == 4
    assert db_session.query(User).count() == 15
    assert db_session.query(Group).count() == 4
    assert all(g.members for g in db_session.query(Group).all())


def test_discovery_invariants_hold_on_seeded_data(db_session):
    seed(db_session, user_count=40, group_count=12, rng=random.Random(1), now=datetime(2024, 6, 1))
    engine = DiscoveryEngine(db_session)

    for user in db_session.query(User).order_by(User.id).limit(10).all():
        requester = load_requester(db_session, user.id)
        for limit in (1, 7, 20):
            query = DiscoveryQuery(limit=limit, exclude_swiped=True)

            users = engine.discover_users(user.id, query).users
            user_ids = [u.candidate.user_id for u in users]
            excluded_users = resolve_user_exclusions(db_session, requester, True)
            assert len(user_ids) <= limit
            assert len(set(user_ids)) == len(user_ids)
            assert not excluded_users & set(user_ids)
            assert [u.relevance_score for u in users] == sorted(
                (u.relevance_score for u in users), reverse=True
            )

            groups = engine.discover_groups(user.id, query).groups
            group_ids = [g.candidate.group_id for g in groups]
            excluded_groups = resolve_group_exclusions(db_session, requester, True)
            assert len(group_ids) <= limit
            assert len(set(group_ids)) == len(group_ids)
            assert not excluded_groups & set(group_ids)
