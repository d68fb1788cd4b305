# Export all ORM models so every mapper is registered on Base.metadata
from .models_user import User, UserInterest
from .models import Group, GroupInterest, Match, Swipe, group_members

__all__ = [
    "User",
    "UserInterest",
    "Group",
    "GroupInterest",
    "Match",
    "Swipe",
    "group_members",
]
