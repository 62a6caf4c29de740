# backend/luz/repositories/slot_repository.py
"""Slot data access, including the row lock used by booking creation."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from ..core.exceptions import RepositoryException
from ..models.booking import Booking
from ..models.slot import Slot
from .base_repository import BaseRepository


class SlotRepository(BaseRepository[Slot]):
    def __init__(self, db: Session):
        super().__init__(db, Slot)

    def get_for_update(self, slot_id: str) -> Optional[Slot]:
        """
        Load the slot holding a row lock until the transaction ends.

        Concurrent booking creators for the same slot queue on this lock, so
        a capacity count taken after it cannot be invalidated by another
        insert before commit. SQLite has no row locks and ignores the clause.
        """
        try:
            return self.lock_query(slot_id).first()
        except SQLAlchemyError as e:
            self.logger.error(f"Error locking slot {slot_id}: {str(e)}")
            raise RepositoryException(f"Failed to lock slot: {str(e)}")

    def lock_query(self, slot_id: str) -> Query:
        return (
            self.db.query(Slot)
            .filter(Slot.id == slot_id)
            .with_for_update()
            .populate_existing()
        )

    def count_bookings(self, slot_id: str, exclude_statuses: Optional[List[str]] = None) -> int:
        try:
            query = self.db.query(func.count(Booking.id)).filter(Booking.slot_id == slot_id)
            if exclude_statuses:
                query = query.filter(Booking.status.notin_(exclude_statuses))
            return int(query.scalar() or 0)
        except SQLAlchemyError as e:
            self.logger.error(f"Error counting bookings for slot {slot_id}: {str(e)}")
            raise RepositoryException(f"Failed to count slot bookings: {str(e)}")

    def list_for_studio(self, studio_id: str) -> List[Slot]:
        try:
            return (
                self.db.query(Slot)
                .filter(Slot.studio_id == studio_id)
                .order_by(Slot.starts_at)
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing slots for studio {studio_id}: {str(e)}")
            raise RepositoryException(f"Failed to list slots: {str(e)}")

    def list_active_between(self, studio_id: str, start: datetime, end: datetime) -> List[Slot]:
        """Active slots with ``start <= starts_at < end``, earliest first."""
        try:
            return (
                self.db.query(Slot)
                .filter(
                    Slot.studio_id == studio_id,
                    Slot.active.is_(True),
                    Slot.starts_at >= start,
                    Slot.starts_at < end,
                )
                .order_by(Slot.starts_at)
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing week slots for studio {studio_id}: {str(e)}")
            raise RepositoryException(f"Failed to list slots: {str(e)}")
