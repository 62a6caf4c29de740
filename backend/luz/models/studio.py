# backend/luz/models/studio.py
"""
Studio model.

A studio is the tenant boundary: customers, slots and invites all belong to
exactly one studio, and deleting a studio removes everything beneath it.
"""

from sqlalchemy import CHAR, Column, String
from sqlalchemy.orm import relationship
import ulid

from ..database import Base
from .types import UTCDateTime, utcnow


class Studio(Base):
    __tablename__ = "studios"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    slug = Column(String(50), nullable=False, unique=True, index=True)
    name = Column(String(100), nullable=False)
    timezone = Column(String(64), nullable=False, default="Asia/Jerusalem")
    currency = Column(CHAR(3), nullable=False, default="ILS")
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)

    customers = relationship(
        "Customer", back_populates="studio", cascade="all, delete", passive_deletes=True
    )
    slots = relationship(
        "Slot", back_populates="studio", cascade="all, delete", passive_deletes=True
    )
    owners = relationship(
        "StudioOwner", back_populates="studio", cascade="all, delete", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Studio {self.slug}>"
