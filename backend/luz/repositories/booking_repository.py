# backend/luz/repositories/booking_repository.py
"""
Booking Repository for the Luz platform

Implements the booking queries: filtered listing, enriched single-row
loads and studio scoping. Studio membership of a booking is derived from
its slot.
"""

from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ..core.exceptions import RepositoryException
from ..models.booking import Booking
from ..models.slot import Slot
from .base_repository import BaseRepository


@dataclass
class BookingFilters:
    """Optional equality filters for listing bookings."""

    studio_id: Optional[str] = None
    customer_id: Optional[str] = None
    child_id: Optional[str] = None
    slot_id: Optional[str] = None
    status: Optional[str] = None
    paid: Optional[bool] = None
    limit: int = 50
    offset: int = 0


class BookingRepository(BaseRepository[Booking]):
    def __init__(self, db: Session):
        super().__init__(db, Booking)

    def get_with_details(self, booking_id: str) -> Optional[Booking]:
        """Load a booking with its slot, customer and child in one round-trip."""
        try:
            return (
                self.db.query(Booking)
                .options(
                    joinedload(Booking.slot),
                    joinedload(Booking.customer),
                    joinedload(Booking.child),
                )
                .filter(Booking.id == booking_id)
                .first()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading booking {booking_id}: {str(e)}")
            raise RepositoryException(f"Failed to load booking: {str(e)}")

    def list_filtered(
        self, filters: BookingFilters, allowed_studio_ids: Optional[List[str]] = None
    ) -> List[Booking]:
        """
        Bookings matching every given filter, newest first.

        ``allowed_studio_ids`` restricts results to slots of those studios;
        ``None`` means unrestricted (admin), an empty list matches nothing.
        """
        try:
            query = self.db.query(Booking).join(Slot, Slot.id == Booking.slot_id)

            if allowed_studio_ids is not None:
                if not allowed_studio_ids:
                    return []
                query = query.filter(Slot.studio_id.in_(allowed_studio_ids))
            if filters.studio_id:
                query = query.filter(Slot.studio_id == filters.studio_id)
            if filters.customer_id:
                query = query.filter(Booking.customer_id == filters.customer_id)
            if filters.child_id:
                query = query.filter(Booking.child_id == filters.child_id)
            if filters.slot_id:
                query = query.filter(Booking.slot_id == filters.slot_id)
            if filters.status:
                query = query.filter(Booking.status == filters.status)
            if filters.paid is not None:
                query = query.filter(Booking.paid.is_(filters.paid))

            return (
                query.order_by(Booking.created_at.desc(), Booking.id.desc())
                .offset(filters.offset)
                .limit(filters.limit)
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing bookings: {str(e)}")
            raise RepositoryException(f"Failed to list bookings: {str(e)}")
