# backend/luz/routes/studios.py
"""
Studio routes: studios, their slots and their customers.

Endpoints:
    POST / - Create a studio (creator becomes owner)
    GET / - Studios the caller can manage
    POST /{studio_id}/slots - Create a slot
    GET /{studio_id}/slots - List a studio's slots
    PATCH /slots/{slot_id}/active - Activate or deactivate a slot
    POST /{studio_id}/customers - Create a customer
    GET /{studio_id}/customers - Customers with child and booking counts
"""

import asyncio
import logging
from typing import List

from fastapi import APIRouter, Depends, status

from ..api.dependencies import get_current_user, get_customer_service, get_studio_service
from ..core.exceptions import DomainException
from ..models.user import User
from ..schemas.base import StrictRequestModel
from ..schemas.customer import CustomerCreate, CustomerListItem, CustomerResponse
from ..schemas.studio import SlotCreate, SlotResponse, StudioCreate, StudioResponse
from ..services.customer_service import CustomerService
from ..services.studio_service import StudioService
from .common import ensure_ulid, handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["studios"])


class SlotActiveUpdate(StrictRequestModel):
    active: bool


@router.post("", response_model=StudioResponse, status_code=status.HTTP_201_CREATED)
async def create_studio(
    payload: StudioCreate,
    current_user: User = Depends(get_current_user),
    studio_service: StudioService = Depends(get_studio_service),
) -> StudioResponse:
    try:
        studio = await asyncio.to_thread(studio_service.create_studio, current_user, payload)
        return StudioResponse.model_validate(studio)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("", response_model=List[StudioResponse])
async def list_studios(
    current_user: User = Depends(get_current_user),
    studio_service: StudioService = Depends(get_studio_service),
) -> List[StudioResponse]:
    studios = await asyncio.to_thread(studio_service.list_studios, current_user)
    return [StudioResponse.model_validate(s) for s in studios]


@router.post(
    "/{studio_id}/slots", response_model=SlotResponse, status_code=status.HTTP_201_CREATED
)
async def create_slot(
    studio_id: str,
    payload: SlotCreate,
    current_user: User = Depends(get_current_user),
    studio_service: StudioService = Depends(get_studio_service),
) -> SlotResponse:
    ensure_ulid(studio_id, "studio")
    try:
        slot = await asyncio.to_thread(
            studio_service.create_slot, current_user, studio_id, payload
        )
        return SlotResponse.model_validate(slot)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{studio_id}/slots", response_model=List[SlotResponse])
async def list_slots(
    studio_id: str,
    current_user: User = Depends(get_current_user),
    studio_service: StudioService = Depends(get_studio_service),
) -> List[SlotResponse]:
    ensure_ulid(studio_id, "studio")
    try:
        slots = await asyncio.to_thread(studio_service.list_slots, current_user, studio_id)
        return [SlotResponse.model_validate(s) for s in slots]
    except DomainException as e:
        handle_domain_exception(e)


@router.patch("/slots/{slot_id}/active", response_model=SlotResponse)
async def set_slot_active(
    slot_id: str,
    payload: SlotActiveUpdate,
    current_user: User = Depends(get_current_user),
    studio_service: StudioService = Depends(get_studio_service),
) -> SlotResponse:
    """Inactive slots stay listed for the studio but take no new bookings."""
    ensure_ulid(slot_id, "slot")
    try:
        slot = await asyncio.to_thread(
            studio_service.set_slot_active, current_user, slot_id, payload.active
        )
        return SlotResponse.model_validate(slot)
    except DomainException as e:
        handle_domain_exception(e)


@router.post(
    "/{studio_id}/customers",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_customer(
    studio_id: str,
    payload: CustomerCreate,
    current_user: User = Depends(get_current_user),
    customer_service: CustomerService = Depends(get_customer_service),
) -> CustomerResponse:
    """Create a customer; a clash on email or phone within the studio is 409."""
    ensure_ulid(studio_id, "studio")
    try:
        customer = await asyncio.to_thread(
            customer_service.create_customer, current_user, studio_id, payload
        )
        return CustomerResponse.model_validate(customer)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{studio_id}/customers", response_model=List[CustomerListItem])
async def list_customers(
    studio_id: str,
    current_user: User = Depends(get_current_user),
    customer_service: CustomerService = Depends(get_customer_service),
) -> List[CustomerListItem]:
    ensure_ulid(studio_id, "studio")
    try:
        rows = await asyncio.to_thread(customer_service.list_customers, current_user, studio_id)
        return [CustomerListItem.model_validate(row) for row in rows]
    except DomainException as e:
        handle_domain_exception(e)
