# backend/luz/models/customer.py
"""Customer and Child models."""

from sqlalchemy import Column, ForeignKey, Index, String
from sqlalchemy.orm import relationship
import ulid

from ..database import Base
from .types import UTCDateTime, utcnow


class Customer(Base):
    """An adult client of a studio, identified by phone and/or email."""

    __tablename__ = "customers"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    studio_id = Column(
        String(26), ForeignKey("studios.id", ondelete="CASCADE"), nullable=False, index=True
    )
    first_name = Column(String(100), nullable=False)
    avatar_key = Column(String(100), nullable=True)
    contact_phone = Column(String(50), nullable=True)
    contact_email = Column(String(255), nullable=True)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)

    studio = relationship("Studio", back_populates="customers")
    children = relationship(
        "Child", back_populates="customer", cascade="all, delete", passive_deletes=True
    )
    bookings = relationship(
        "Booking", back_populates="customer", cascade="all, delete", passive_deletes=True
    )
    invites = relationship(
        "Invite", back_populates="customer", cascade="all, delete", passive_deletes=True
    )

    __table_args__ = (
        Index("ix_customers_studio_email", "studio_id", "contact_email"),
        Index("ix_customers_studio_phone", "studio_id", "contact_phone"),
    )

    def __repr__(self) -> str:
        return f"<Customer {self.id}: {self.first_name}>"


class Child(Base):
    """A minor attached to a customer; studio membership is inherited from the parent."""

    __tablename__ = "children"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    customer_id = Column(
        String(26), ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    first_name = Column(String(100), nullable=False)
    avatar_key = Column(String(100), nullable=False)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)

    customer = relationship("Customer", back_populates="children")
    bookings = relationship(
        "Booking", back_populates="child", cascade="all, delete", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Child {self.id}: {self.first_name}>"
