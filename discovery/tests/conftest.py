"""Shared fixtures: in-memory database, row factories and an API client."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import itertools
from contextlib import contextmanager
from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from db import Base, get_db
from models import Group, Match, Swipe, User
from utils.auth_utils import create_token


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, future=True)
    session = Session()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


class Factory:
    """Creates rows with strictly increasing created_at so ordering is predictable."""

    def __init__(self, db):
        self.db = db
        self._counter = itertools.count(1)
        self.base_time = datetime(2024, 1, 1, 12, 0, 0)

    def _next(self):
        n = next(self._counter)
        return n, self.base_time + timedelta(minutes=n)

    def user(self, name=None, age=None, gender=None, interests=(), photos=None):
        n, created_at = self._next()
        user = User(
            name=name or f"user{n}",
            email=f"user{n}@example.com",
            age=age,
            gender=gender,
            photos=photos,
            created_at=created_at,
        )
        user.set_interests(interests)
        self.db.add(user)
        self.db.flush()
        return user

    def group(self, members=(), interests=(), is_private=False, name=None, creator=None):
        members = list(members)
        creator = creator or (members[0] if members else self.user())
        n, created_at = self._next()
        group = Group(
            name=name or f"group{n}",
            invite_code=f"CODE{n:04d}",
            created_by=creator.id,
            is_private=is_private,
            created_at=created_at,
        )
        group.set_interests(interests)
        group.members = members
        self.db.add(group)
        self.db.flush()
        return group

    def match(self, user, other, status="accepted", match_type="user-to-user"):
        _, created_at = self._next()
        match = Match(
            user_id=user.id,
            matched_user_id=other.id,
            match_type=match_type,
            status=status,
            created_at=created_at,
        )
        self.db.add(match)
        self.db.flush()
        return match

    def swipe(self, actor, target_id, direction="right"):
        _, created_at = self._next()
        swipe = Swipe(user_id=actor.id, swiped_id=target_id, direction=direction, created_at=created_at)
        self.db.add(swipe)
        self.db.flush()
        return swipe


@pytest.fixture
def factory(db_session):
    return Factory(db_session)


@pytest.fixture
def client(db_session):
    from fastapi.testclient import TestClient

    from discovery.logic.constants import DEFAULT_WEIGHTS
    from discovery.routes import get_scoring_weights
    from main import app

    @contextmanager
    def _test_db():
        yield db_session

    app.dependency_overrides[get_db] = lambda: _test_db()
    app.dependency_overrides[get_scoring_weights] = lambda: DEFAULT_WEIGHTS
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(user):
        return {"Authorization": f"Bearer {create_token(user.id)}"}
    return _headers
