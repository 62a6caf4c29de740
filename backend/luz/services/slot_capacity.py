# backend/luz/services/slot_capacity.py
"""
Slot capacity guard.

Capacity is derived, never stored: the number of booking rows referencing
a slot is compared with the slot's ``max_participants`` every time a
booking is about to be inserted.
"""

from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.exceptions import NotFoundException
from ..models.booking import BookingStatus
from ..repositories.factory import RepositoryFactory
from .base import BaseService


@dataclass(frozen=True)
class CapacitySnapshot:
    slot_id: str
    booked_count: int
    max_participants: int

    @property
    def has_room(self) -> bool:
        return self.booked_count < self.max_participants

    @property
    def remaining(self) -> int:
        return max(self.max_participants - self.booked_count, 0)


class SlotCapacityGuard(BaseService):
    """
    Counts the places taken in a slot.

    With ``lock=True`` the slot row is locked first (``SELECT ... FOR UPDATE``),
    so the count and the caller's subsequent insert happen under the same lock
    and two creators racing for the last place are serialised. The lock is
    released when the caller's transaction commits or rolls back.
    """

    def __init__(self, db: Session, excludes_cancelled: Optional[bool] = None):
        super().__init__(db)
        self.slot_repository = RepositoryFactory.create_slot_repository(db)
        if excludes_cancelled is None:
            excludes_cancelled = settings.booking_capacity_excludes_cancelled
        self.excludes_cancelled = excludes_cancelled

    def _excluded_statuses(self) -> Optional[List[str]]:
        if self.excludes_cancelled:
            return [BookingStatus.CANCELLED.value]
        return None

    @BaseService.measure_operation("check_capacity")
    def check(self, slot_id: str, *, lock: bool = False) -> CapacitySnapshot:
        if lock:
            slot = self.slot_repository.get_for_update(slot_id)
        else:
            slot = self.slot_repository.get_by_id(slot_id)
        if slot is None:
            raise NotFoundException("Slot not found or not available", code="SLOT_NOT_FOUND")

        booked = self.slot_repository.count_bookings(
            slot_id, exclude_statuses=self._excluded_statuses()
        )
        return CapacitySnapshot(
            slot_id=slot_id,
            booked_count=booked,
            max_participants=int(slot.max_participants),
        )
