"""
Seed demo users, groups, matches and swipes for local discovery testing.

Run from the repository root:
    python seed_data.py --users 60 --groups 15 --seed 7
"""

import argparse
import random
import string
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from models import Group, Match, Swipe, User

GENDERS = ["male", "female", "other"]

INTEREST_OPTIONS = [
    "hiking", "movies", "reading", "cooking", "travel",
    "photography", "music", "dancing", "gaming", "yoga",
    "fitness", "art", "technology", "fashion", "sports",
]

GROUP_INTEREST_OPTIONS = [
    "clubbing", "concerts", "bowling", "escape rooms", "karaoke",
    "board games", "wine tasting", "comedy shows", "dining out", "beach days",
    "hiking", "music", "art", "travel", "sports",
]

FIRST_NAMES = [
    "Alex", "Sam", "Jordan", "Taylor", "Morgan", "Casey", "Riley", "Jamie",
    "Avery", "Quinn", "Parker", "Rowan", "Skyler", "Dakota", "Emerson", "Hayden",
]
LAST_NAMES = [
    "Smith", "Garcia", "Chen", "Patel", "Kim", "Nguyen", "Okafor", "Silva",
    "Novak", "Rossi", "Murphy", "Haddad",
]


def _random_subset(rng: random.Random, items: List, max_count: int) -> List:
    """1..max_count distinct items."""
    if not items:
        return []
    count = rng.randint(1, max(1, min(max_count, len(items))))
    return rng.sample(items, count)


def _invite_code(rng: random.Random) -> str:
    return "".join(rng.choices(string.ascii_uppercase + string.digits, k=8))


def create_users(db: Session, rng: random.Random, count: int, now: datetime) -> List[User]:
    users = []
    for i in range(count):
        first, last = rng.choice(FIRST_NAMES), rng.choice(LAST_NAMES)
        user = User(
            name=f"{first} {last}",
            email=f"{first.lower()}.{last.lower()}.{i}@example.com",
            age=rng.randint(18, 50),
            gender=rng.choice(GENDERS),
            bio=f"Hi, I'm {first}.",
            photos=[f"https://picsum.photos/seed/user{i}-{p}/400/600" for p in range(rng.randint(1, 3))],
            created_at=now - timedelta(minutes=count - i),
        )
        user.set_interests(_random_subset(rng, INTEREST_OPTIONS, 5))
        db.add(user)
        users.append(user)
    db.flush()
    return users


def create_groups(db: Session, rng: random.Random, users: List[User], count: int, now: datetime) -> List[Group]:
    groups = []
    for i in range(count):
        members = _random_subset(rng, users, 6)
        creator = members[0]
        group = Group(
            name=f"{creator.name.split()[0]}'s crew #{i + 1}",
            bio="Looking for another group to hang out with.",
            photos=[f"https://picsum.photos/seed/group{i}/600/400"],
            is_private=rng.random() < 0.2,
            invite_code=_invite_code(rng),
            created_by=creator.id,
            created_at=now - timedelta(hours=count - i),
        )
        group.set_interests(_random_subset(rng, GROUP_INTEREST_OPTIONS, 4))
        group.members = members
        db.add(group)
        groups.append(group)
    db.flush()
    return groups


def create_matches(db: Session, rng: random.Random, users: List[User], per_user: int = 2) -> List[Match]:
    """Random user-to-user matches, biased toward accepted."""
    matches = []
    seen = set()
    for user in users:
        others = [u for u in users if u.id != user.id]
        for other in _random_subset(rng, others, per_user):
            pair = frozenset((user.id, other.id))
            if pair in seen:
                continue
            seen.add(pair)
            roll = rng.random()
            status = "accepted" if roll < 0.6 else ("pending" if roll < 0.85 else "rejected")
            match = Match(
                user_id=user.id,
                matched_user_id=other.id,
                match_type="user-to-user",
                status=status,
            )
            db.add(match)
            matches.append(match)
    db.flush()
    return matches


def create_swipes(
    db: Session,
    rng: random.Random,
    users: List[User],
    groups: List[Group],
    per_user: int = 4
) -> List[Swipe]:
    """Each user swipes on a few users and groups, at most once per target."""
    swipes = []
    for user in users:
        targets = [u.id for u in users if u.id != user.id] + [g.id for g in groups]
        for target_id in _random_subset(rng, targets, per_user):
            swipe = Swipe(
                user_id=user.id,
                swiped_id=target_id,
                direction=rng.choice(["left", "right"]),
            )
            db.add(swipe)
            swipes.append(swipe)
    db.flush()
    return swipes


def seed(
    db: Session,
    user_count: int = 40,
    group_count: int = 12,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None
) -> Dict[str, int]:
    """Populate the database and return how many rows of each kind were created."""
    rng = rng or random.Random()
    now = now or datetime.utcnow()

    users = create_users(db, rng, user_count, now)
    groups = create_groups(db, rng, users, group_count, now) if users else []
    matches = create_matches(db, rng, users)
    swipes = create_swipes(db, rng, users, groups)
    db.commit()

    return {
        "users": len(users),
        "groups": len(groups),
        "matches": len(matches),
        "swipes": len(swipes),
    }


def main():
    parser = argparse.ArgumentParser(description="Seed discovery demo data")
    parser.add_argument("--users", type=int, default=40)
    parser.add_argument("--groups", type=int, default=12)
    parser.add_argument("--seed", type=int, default=None, help="Random seed for repeatable data")
    args = parser.parse_args()

    from db import Base, SessionLocal, engine
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        counts = seed(db, args.users, args.groups, random.Random(args.seed))
        for kind, n in counts.items():
            print(f"Created {n} {kind}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
