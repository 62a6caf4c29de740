# backend/luz/services/invite_service.py
"""
Invite services.

An invite is a capability link: whoever holds its short hash can book on
behalf of the invite's customer, within the invite's studio, until the
invite expires. Unknown and expired hashes are indistinguishable to the
caller.
"""

from datetime import datetime, timedelta, timezone
import secrets
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.exceptions import NotFoundException, ServiceException
from ..models.booking import Booking
from ..models.customer import Customer
from ..models.user import User
from ..repositories.factory import RepositoryFactory
from ..schemas.booking import InviteBookingCreate
from ..schemas.invite import InviteCreate, InviteCustomer
from .base import BaseService
from .booking_service import BookingService
from .booking_validator import PartyRequest
from .permission_service import PermissionService

SHORT_HASH_BYTES = 8
MAX_HASH_ATTEMPTS = 5


def generate_short_hash() -> str:
    """16 hex characters from 8 random bytes."""
    return secrets.token_hex(SHORT_HASH_BYTES)


class InviteService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.studio_repository = RepositoryFactory.create_studio_repository(db)
        self.customer_repository = RepositoryFactory.create_customer_repository(db)
        self.invite_repository = RepositoryFactory.create_invite_repository(db)
        self.permissions = PermissionService(db)

    @BaseService.measure_operation("create_invite")
    def create_invite(self, actor: User, data: InviteCreate) -> Dict[str, Any]:
        with self.transaction():
            studio = self.studio_repository.get_by_id(data.studio_id)
            if studio is None:
                raise NotFoundException("Studio not found", code="STUDIO_NOT_FOUND")
            self.permissions.ensure_studio_access(actor, studio.id)

            customer = self._find_or_create_customer(studio.id, data.customer)
            invite = self.invite_repository.create(
                studio_id=studio.id,
                customer_id=customer.id,
                short_hash=self._unique_hash(),
                expires_at=datetime.now(timezone.utc) + timedelta(days=settings.invite_ttl_days),
            )

        self.log_operation(
            "create_invite", invite_id=invite.id, studio_id=studio.id, customer_id=customer.id
        )
        return {
            "id": invite.id,
            "studio_id": invite.studio_id,
            "customer_id": invite.customer_id,
            "short_hash": invite.short_hash,
            "created_at": invite.created_at,
            "expires_at": invite.expires_at,
            "invite_url": f"/{settings.invite_url_prefix}/{studio.slug}/{invite.short_hash}",
        }

    def _find_or_create_customer(self, studio_id: str, data: InviteCustomer) -> Customer:
        existing = self.customer_repository.find_by_contact(
            studio_id, email=data.email, phone=data.phone
        )
        if existing is not None:
            return existing
        return self.customer_repository.create(
            studio_id=studio_id,
            first_name=data.first_name,
            contact_email=data.email,
            contact_phone=data.phone,
        )

    def _unique_hash(self) -> str:
        for _ in range(MAX_HASH_ATTEMPTS):
            candidate = generate_short_hash()
            if not self.invite_repository.hash_exists(candidate):
                return candidate
        raise ServiceException("Could not allocate a unique invite hash", code="INVITE_HASH")


class InviteBookingService(BaseService):
    """Unauthenticated booking through an invite link."""

    def __init__(self, db: Session, booking_service: Optional[BookingService] = None):
        super().__init__(db)
        self.invite_repository = RepositoryFactory.create_invite_repository(db)
        self.booking_service = booking_service or BookingService(db)

    @BaseService.measure_operation("create_invite_booking")
    def create_booking(self, short_hash: str, data: InviteBookingCreate) -> Booking:
        """
        Book a slot for the invite's customer or one of their children.

        Raises:
            NotFoundException: invite unknown or expired, slot not in the invite's
                studio or inactive, child not owned by the invite's customer
            ValidationException: child missing for a children's slot, or child
                given for an adult slot
            CapacityReachedException: slot already full
        """
        with self.transaction():
            invite = self.invite_repository.get_active_by_hash(
                short_hash, datetime.now(timezone.utc)
            )
            if invite is None:
                raise NotFoundException("Invite not found or expired", code="INVITE_NOT_FOUND")

            slot = self.booking_service.get_bookable_slot(data.slot_id, studio_id=invite.studio_id)
            party = self.booking_service.validator.resolve_party(
                slot,
                PartyRequest(
                    customer_id=invite.customer_id,
                    child_id=data.child_id,
                    child_data=data.child,
                    customer_implied=True,
                ),
            )
            booking = self.booking_service.place_booking(slot, party, channel="invite")

        self.log_operation(
            "create_invite_booking", booking_id=booking.id, invite_id=invite.id, slot_id=slot.id
        )
        return booking
