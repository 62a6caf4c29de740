# backend/luz/models/invite.py
"""Invite model: a short-hash link that lets a customer book without an account."""

from sqlalchemy import Column, ForeignKey, String
from sqlalchemy.orm import relationship
import ulid

from ..database import Base
from .types import UTCDateTime, utcnow


class Invite(Base):
    __tablename__ = "invites"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    studio_id = Column(
        String(26), ForeignKey("studios.id", ondelete="CASCADE"), nullable=False, index=True
    )
    customer_id = Column(
        String(26), ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    short_hash = Column(String(32), nullable=False, unique=True, index=True)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)
    expires_at = Column(UTCDateTime, nullable=False)

    studio = relationship("Studio")
    customer = relationship("Customer", back_populates="invites")

    def __repr__(self) -> str:
        return f"<Invite {self.short_hash}: customer={self.customer_id}>"
