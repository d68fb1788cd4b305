from datetime import datetime
from sqlalchemy import (
    Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, Table, Text, UniqueConstraint,
)
from sqlalchemy.orm import relationship
from db import Base
from .models_user import new_id


group_members = Table(
    "group_members",
    Base.metadata,
    Column("group_id", String(36), ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class GroupInterest(Base):
    __tablename__ = "group_interests"
    __table_args__ = (UniqueConstraint("group_id", "tag", name="uq_group_interest"),)
    id = Column(Integer, primary_key=True, autoincrement=True)
    group_id = Column(String(36), ForeignKey("groups.id", ondelete="CASCADE"), index=True, nullable=False)
    tag = Column(String(64), index=True, nullable=False)


class Group(Base):
    __tablename__ = "groups"
    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    bio = Column(Text, default="")
    photos = Column(JSON, default=list)
    is_private = Column(Boolean, default=False, nullable=False)
    invite_code = Column(String(32), unique=True, nullable=False)
    created_by = Column(String(36), ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=False), default=datetime.utcnow, nullable=False)

    interest_tags = relationship(
        "GroupInterest",
        cascade="all, delete-orphan",
        order_by="GroupInterest.id",
        lazy="selectin",
    )
    members = relationship("User", secondary=group_members, back_populates="groups", lazy="selectin")

    @property
    def interests(self) -> list[str]:
        return [t.tag for t in self.interest_tags]

    def set_interests(self, tags):
        self.interest_tags = [GroupInterest(tag=t) for t in dict.fromkeys(tags or [])]


class Match(Base):
    __tablename__ = "matches"
    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    matched_user_id = Column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    user_group_id = Column(String(36), ForeignKey("groups.id"), nullable=True)
    matched_group_id = Column(String(36), ForeignKey("groups.id"), nullable=True)
    match_type = Column(String(32), nullable=False, default="user-to-user")  # user-to-user | user-to-group | group-to-group
    status = Column(String(16), nullable=False, default="pending")  # pending | accepted | rejected
    created_at = Column(DateTime(timezone=False), default=datetime.utcnow, nullable=False)


class Swipe(Base):
    __tablename__ = "swipes"
    __table_args__ = (UniqueConstraint("user_id", "swiped_id", name="uq_swipe_actor_target"),)
    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    # target user or group id
    swiped_id = Column(String(36), index=True, nullable=False)
    direction = Column(String(8), nullable=False)  # left | right
    created_at = Column(DateTime(timezone=False), default=datetime.utcnow, nullable=False)
