# backend/luz/models/booking.py
"""
Booking model for the Luz platform.

A booking reserves one place in a slot for exactly one party: an adult
customer or a child, never both. Status and payment are tracked
independently; cancellation does not release the place unless the
operator switches the capacity policy.
"""

from enum import Enum

from sqlalchemy import Boolean, CheckConstraint, Column, ForeignKey, Index, String
from sqlalchemy.orm import relationship
import ulid

from ..database import Base
from .types import UTCDateTime, utcnow


class BookingStatus(str, Enum):
    """Booking lifecycle statuses."""

    CONFIRMED = "CONFIRMED"  # Default on creation
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"


class PaymentMethod(str, Enum):
    """How an offline payment was collected."""

    CASH = "cash"
    BIT = "bit"
    PAYBOX = "paybox"
    TRANSFER = "transfer"


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    slot_id = Column(
        String(26), ForeignKey("slots.id", ondelete="CASCADE"), nullable=False, index=True
    )
    customer_id = Column(
        String(26), ForeignKey("customers.id", ondelete="CASCADE"), nullable=True, index=True
    )
    child_id = Column(
        String(26), ForeignKey("children.id", ondelete="CASCADE"), nullable=True, index=True
    )
    status = Column(String(20), nullable=False, default=BookingStatus.CONFIRMED.value)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)

    paid = Column(Boolean, nullable=False, default=False)
    paid_at = Column(UTCDateTime, nullable=True)
    paid_method = Column(String(20), nullable=True)

    slot = relationship("Slot", back_populates="bookings")
    customer = relationship("Customer", back_populates="bookings")
    child = relationship("Child", back_populates="bookings")

    __table_args__ = (
        CheckConstraint(
            "(customer_id IS NOT NULL AND child_id IS NULL) "
            "OR (customer_id IS NULL AND child_id IS NOT NULL)",
            name="one_party",
        ),
        CheckConstraint(
            "status IN ('CONFIRMED', 'CANCELLED', 'NO_SHOW')",
            name="ck_bookings_status",
        ),
        CheckConstraint(
            "paid_method IS NULL OR paid_method IN ('cash', 'bit', 'paybox', 'transfer')",
            name="ck_bookings_paid_method",
        ),
        Index("ix_bookings_created_at", "created_at"),
    )

    def mark_paid(self, method: PaymentMethod, paid_at=None) -> None:
        """Record an offline payment."""
        self.paid = True
        self.paid_method = method.value
        self.paid_at = paid_at or utcnow()

    def __repr__(self) -> str:
        party = f"customer={self.customer_id}" if self.customer_id else f"child={self.child_id}"
        return f"<Booking {self.id}: slot={self.slot_id}, {party}, status={self.status}>"
