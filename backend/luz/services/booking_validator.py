# backend/luz/services/booking_validator.py
"""
Booking party validation.

Turns a booking request into exactly one party (an adult customer or a
child) that is allowed to book a given slot. Checks run in a fixed order:

1. request shape (which identifiers were supplied together)
2. party type against ``slot.for_children``
3. studio scoping: the party must belong to the slot's studio

Scoping failures are reported as not-found, never forbidden, so a caller
cannot probe for ids that belong to another studio. An inline child is
only created once all checks pass, in the caller's open transaction.
"""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.exceptions import NotFoundException, ValidationException
from ..models.customer import Child, Customer
from ..models.slot import Slot
from ..repositories.factory import RepositoryFactory
from ..schemas.booking import ChildData
from .base import BaseService


@dataclass
class PartyRequest:
    """
    The party fields of a booking request.

    ``customer_implied`` marks the invite path, where ``customer_id`` comes
    from the invite rather than from the caller.
    """

    customer_id: Optional[str] = None
    child_id: Optional[str] = None
    child_data: Optional[ChildData] = None
    customer_implied: bool = False

    @property
    def names_child(self) -> bool:
        return bool(self.child_id or self.child_data)


@dataclass
class ResolvedParty:
    customer: Optional[Customer] = None
    child: Optional[Child] = None
    child_created: bool = False

    @property
    def customer_id(self) -> Optional[str]:
        return self.customer.id if self.customer is not None else None

    @property
    def child_id(self) -> Optional[str]:
        return self.child.id if self.child is not None else None


class BookingValidator(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.customer_repository = RepositoryFactory.create_customer_repository(db)
        self.child_repository = RepositoryFactory.create_child_repository(db)

    def resolve_party(self, slot: Slot, request: PartyRequest) -> ResolvedParty:
        self._check_shape(request)
        self._check_party_type(slot, request)

        if request.child_id:
            return ResolvedParty(child=self._scoped_child(slot, request))

        customer = self._scoped_customer(slot, request.customer_id)
        if request.child_data is None:
            return ResolvedParty(customer=customer)

        child = self.child_repository.create(
            customer_id=customer.id,
            first_name=request.child_data.first_name,
            avatar_key=request.child_data.avatar_key or settings.default_child_avatar_key,
        )
        self.log_operation("inline_child_created", child_id=child.id, customer_id=customer.id)
        return ResolvedParty(child=child, child_created=True)

    def _check_shape(self, request: PartyRequest) -> None:
        if request.child_id and request.child_data is not None:
            raise ValidationException(
                "ambiguous party: provide childId or child data, not both",
                code="AMBIGUOUS_PARTY",
            )
        if request.customer_implied:
            return
        if request.customer_id and request.child_id:
            raise ValidationException(
                "ambiguous party: provide customerId or childId, not both",
                code="AMBIGUOUS_PARTY",
            )
        if request.child_data is not None and not request.customer_id:
            raise ValidationException(
                "customerId required for inline child creation",
                code="CUSTOMER_REQUIRED",
            )
        if not request.customer_id and not request.child_id:
            raise ValidationException("customerId or childId is required", code="PARTY_REQUIRED")

    def _check_party_type(self, slot: Slot, request: PartyRequest) -> None:
        if request.names_child and not slot.for_children:
            raise ValidationException("This slot is not for children", code="PARTY_TYPE_MISMATCH")
        if not request.names_child and slot.for_children:
            raise ValidationException("This slot requires a child", code="PARTY_TYPE_MISMATCH")

    def _scoped_customer(self, slot: Slot, customer_id: Optional[str]) -> Customer:
        customer = (
            self.customer_repository.get_in_studio(customer_id, slot.studio_id)
            if customer_id
            else None
        )
        if customer is None:
            raise NotFoundException("Customer not found", code="CUSTOMER_NOT_FOUND")
        return customer

    def _scoped_child(self, slot: Slot, request: PartyRequest) -> Child:
        child = self.child_repository.get_in_studio(request.child_id, slot.studio_id)
        if child is None or (
            request.customer_implied and child.customer_id != request.customer_id
        ):
            raise NotFoundException("Child not found", code="CHILD_NOT_FOUND")
        return child
