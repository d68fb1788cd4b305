import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Text, DateTime, JSON, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from db import Base


def new_id() -> str:
    return str(uuid.uuid4())


class UserInterest(Base):
    __tablename__ = "user_interests"
    __table_args__ = (UniqueConstraint("user_id", "tag", name="uq_user_interest"),)
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    tag = Column(String(64), index=True, nullable=False)


class User(Base):
    __tablename__ = "users"
    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    age = Column(Integer, nullable=True)
    gender = Column(String(32), nullable=True)
    bio = Column(Text, default="")
    photos = Column(JSON, default=list)
    created_at = Column(DateTime(timezone=False), default=datetime.utcnow, nullable=False)

    interest_tags = relationship(
        "UserInterest",
        cascade="all, delete-orphan",
        order_by="UserInterest.id",
        lazy="selectin",
    )
    groups = relationship("Group", secondary="group_members", back_populates="members")

    @property
    def interests(self) -> list[str]:
        return [t.tag for t in self.interest_tags]

    def set_interests(self, tags):
        self.interest_tags = [UserInterest(tag=t) for t in dict.fromkeys(tags or [])]
