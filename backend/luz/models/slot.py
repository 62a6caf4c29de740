# backend/luz/models/slot.py
"""
Slot model.

A slot is a scheduled class occurrence with a participant capacity. The
``for_children`` flag decides whether bookings name a child or an adult.
"""

from sqlalchemy import Boolean, CheckConstraint, Column, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
import ulid

from ..database import Base
from .types import UTCDateTime, utcnow


class Slot(Base):
    __tablename__ = "slots"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    studio_id = Column(
        String(26), ForeignKey("studios.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(200), nullable=False)
    starts_at = Column(UTCDateTime, nullable=False, index=True)
    duration_min = Column(Integer, nullable=False)
    recurrence_rule = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    min_participants = Column(Integer, nullable=False, default=1)
    max_participants = Column(Integer, nullable=False)
    for_children = Column(Boolean, nullable=False, default=False)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)

    studio = relationship("Studio", back_populates="slots")
    bookings = relationship(
        "Booking", back_populates="slot", cascade="all, delete", passive_deletes=True
    )

    __table_args__ = (
        CheckConstraint("duration_min > 0 AND duration_min <= 1440", name="ck_slots_duration"),
        CheckConstraint("min_participants >= 0", name="ck_slots_min_non_negative"),
        CheckConstraint("max_participants >= 1", name="ck_slots_max_positive"),
        CheckConstraint("min_participants <= max_participants", name="ck_slots_min_le_max"),
        CheckConstraint("price >= 0", name="ck_slots_price_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Slot {self.id}: {self.title} @ {self.starts_at}>"
