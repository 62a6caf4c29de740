# backend/luz/services/booking_service.py
"""
Booking Service for the Luz platform

Handles the booking lifecycle for studio operators:
- creation (slot availability, party validation, capacity)
- filtered listing and enriched lookups
- status changes, offline payment recording and deletion

Every write runs in one transaction. Creation takes a row lock on the slot
before counting its bookings, so the capacity check and the insert cannot
be interleaved with another creator for the same slot.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.exceptions import AlreadyPaidException, CapacityReachedException, NotFoundException
from ..models.booking import Booking, BookingStatus, PaymentMethod
from ..models.slot import Slot
from ..models.user import User
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.booking_repository import BookingFilters
from ..repositories.factory import RepositoryFactory
from ..schemas.booking import BookingCreate, BookingListQuery
from .base import BaseService
from .booking_validator import BookingValidator, PartyRequest, ResolvedParty
from .permission_service import PermissionService
from .slot_capacity import SlotCapacityGuard


class BookingService(BaseService):
    """Service layer for operator-facing booking operations."""

    def __init__(self, db: Session):
        super().__init__(db)
        self.booking_repository = RepositoryFactory.create_booking_repository(db)
        self.slot_repository = RepositoryFactory.create_slot_repository(db)
        self.permissions = PermissionService(db)
        self.validator = BookingValidator(db)
        self.capacity_guard = SlotCapacityGuard(db)

    @BaseService.measure_operation("create_booking")
    def create_booking(self, actor: User, data: BookingCreate) -> Booking:
        """
        Create a CONFIRMED, unpaid booking.

        Raises:
            NotFoundException: slot missing, inactive or in a studio the actor cannot
                manage; party not in the slot's studio
            ValidationException: malformed party or party type mismatch
            CapacityReachedException: slot already full
        """
        with self.transaction():
            slot = self.get_bookable_slot(data.slot_id)
            if not self.permissions.can_access_studio(actor, slot.studio_id):
                raise NotFoundException(
                    "Slot not found or not available", code="SLOT_NOT_FOUND"
                )

            party = self.validator.resolve_party(
                slot,
                PartyRequest(
                    customer_id=data.customer_id,
                    child_id=data.child_id,
                    child_data=data.child_data,
                ),
            )
            booking = self.place_booking(slot, party, channel="operator")

        self.log_operation(
            "create_booking", booking_id=booking.id, slot_id=slot.id, user_id=actor.id
        )
        return booking

    def get_bookable_slot(self, slot_id: str, studio_id: Optional[str] = None) -> Slot:
        """Active slot by id, optionally restricted to one studio."""
        slot = self.slot_repository.get_by_id(slot_id)
        if slot is None or not slot.active or (studio_id and slot.studio_id != studio_id):
            raise NotFoundException("Slot not found or not available", code="SLOT_NOT_FOUND")
        return slot

    def place_booking(self, slot: Slot, party: ResolvedParty, channel: str) -> Booking:
        """
        Insert the booking if the slot still has room.

        Must run inside the caller's transaction: the slot lock taken by the
        capacity check is held until that transaction ends.
        """
        snapshot = self.capacity_guard.check(slot.id, lock=True)
        if not snapshot.has_room:
            prometheus_metrics.record_capacity_rejection(channel)
            raise CapacityReachedException(
                slot.id, snapshot.booked_count, snapshot.max_participants
            )

        booking = self.booking_repository.create(
            slot_id=slot.id,
            customer_id=party.customer_id,
            child_id=party.child_id,
            status=BookingStatus.CONFIRMED.value,
            paid=False,
        )
        prometheus_metrics.record_booking_created(channel)
        return booking

    @BaseService.measure_operation("list_bookings")
    def list_bookings(self, actor: User, query: BookingListQuery) -> List[Booking]:
        """Bookings matching the filters, newest first, limited to the actor's studios."""
        limit = min(query.limit, settings.bookings_max_limit)
        filters = BookingFilters(
            studio_id=query.studio_id,
            customer_id=query.customer_id,
            child_id=query.child_id,
            slot_id=query.slot_id,
            status=query.status.value if query.status else None,
            paid=query.paid,
            limit=limit,
            offset=query.offset,
        )
        return self.booking_repository.list_filtered(
            filters, allowed_studio_ids=self.permissions.accessible_studio_ids(actor)
        )

    @BaseService.measure_operation("get_booking")
    def get_booking(self, actor: User, booking_id: str) -> Dict[str, Any]:
        booking = self._get_visible_booking(actor, booking_id)
        return self._enrich(booking)

    @BaseService.measure_operation("update_booking_status")
    def update_status(self, actor: User, booking_id: str, status: BookingStatus) -> Booking:
        """Overwrite the status; any transition between known statuses is allowed."""
        with self.transaction():
            booking = self._get_visible_booking(actor, booking_id)
            previous = booking.status
            self.booking_repository.update(booking, status=status.value)

        self.log_operation(
            "update_booking_status",
            booking_id=booking_id,
            previous_status=previous,
            status=status.value,
        )
        return booking

    @BaseService.measure_operation("record_payment")
    def record_payment(
        self,
        actor: User,
        booking_id: str,
        method: PaymentMethod,
        paid_at: Optional[datetime] = None,
    ) -> Booking:
        """Mark a booking paid; a second payment on the same booking is rejected."""
        with self.transaction():
            booking = self._get_visible_booking(actor, booking_id)
            if booking.paid:
                raise AlreadyPaidException(booking_id)
            booking.mark_paid(method, paid_at or datetime.now(timezone.utc))
            self.booking_repository.flush()

        self.log_operation("record_payment", booking_id=booking_id, method=method.value)
        return booking

    @BaseService.measure_operation("delete_booking")
    def delete_booking(self, actor: User, booking_id: str) -> Dict[str, Any]:
        with self.transaction():
            booking = self._get_visible_booking(actor, booking_id)
            slot_id = booking.slot_id
            self.booking_repository.delete(booking)

        self.log_operation("delete_booking", booking_id=booking_id, slot_id=slot_id)
        return {
            "message": "Booking deleted successfully",
            "deleted": {"booking_id": booking_id, "slot_id": slot_id},
        }

    def _get_visible_booking(self, actor: User, booking_id: str) -> Booking:
        """Booking by id; bookings of studios the actor cannot manage look missing."""
        booking = self.booking_repository.get_with_details(booking_id)
        if booking is None or not self.permissions.can_access_studio(
            actor, booking.slot.studio_id
        ):
            raise NotFoundException("Booking not found", code="BOOKING_NOT_FOUND")
        return booking

    @staticmethod
    def _enrich(booking: Booking) -> Dict[str, Any]:
        slot = booking.slot
        customer = booking.customer
        child = booking.child
        return {
            "id": booking.id,
            "slot_id": booking.slot_id,
            "customer_id": booking.customer_id,
            "child_id": booking.child_id,
            "status": booking.status,
            "created_at": booking.created_at,
            "paid": booking.paid,
            "paid_at": booking.paid_at,
            "paid_method": booking.paid_method,
            "slot_title": slot.title,
            "starts_at": slot.starts_at,
            "duration_min": slot.duration_min,
            "price": slot.price,
            "customer_name": customer.first_name if customer else None,
            "contact_email": customer.contact_email if customer else None,
            "contact_phone": customer.contact_phone if customer else None,
            "child_name": child.first_name if child else None,
        }
