# backend/luz/models/user.py
"""Operator accounts (Google sign-in) and their studio memberships."""

from enum import Enum

from sqlalchemy import Boolean, CheckConstraint, Column, ForeignKey, String
from sqlalchemy.orm import relationship
import ulid

from ..database import Base
from .types import UTCDateTime, utcnow


class StudioRole(str, Enum):
    OWNER = "owner"
    MANAGER = "manager"


class User(Base):
    __tablename__ = "users"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    google_sub = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=True)
    name = Column(String(255), nullable=True)
    avatar_url = Column(String(1024), nullable=True)
    is_admin = Column(Boolean, nullable=False, default=False)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)

    studios = relationship(
        "StudioOwner", back_populates="user", cascade="all, delete", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<User {self.id}: {self.email}>"


class StudioOwner(Base):
    __tablename__ = "studio_owners"

    studio_id = Column(
        String(26), ForeignKey("studios.id", ondelete="CASCADE"), primary_key=True
    )
    user_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    role = Column(String(20), nullable=False, default=StudioRole.OWNER.value)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)

    studio = relationship("Studio", back_populates="owners")
    user = relationship("User", back_populates="studios")

    __table_args__ = (
        CheckConstraint("role IN ('owner', 'manager')", name="ck_studio_owners_role"),
    )
