# backend/luz/routes/bookings.py
"""
Operator booking routes.

All business logic delegated to BookingService.

Endpoints:
    POST / - Create a booking for a customer or child
    GET / - List bookings with filters and pagination
    GET /{booking_id} - Booking with slot, customer and child details
    PATCH /{booking_id}/status - Overwrite booking status
    PATCH /{booking_id}/payment - Record an offline payment
    DELETE /{booking_id} - Hard delete
"""

import asyncio
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ..api.dependencies import get_booking_service, get_current_user
from ..core.config import settings
from ..core.exceptions import DomainException
from ..models.booking import BookingStatus
from ..models.user import User
from ..schemas.booking import (
    BookingCreate,
    BookingDeleteResponse,
    BookingDetailResponse,
    BookingListQuery,
    BookingPaymentUpdate,
    BookingResponse,
    BookingStatusUpdate,
)
from ..services.booking_service import BookingService
from .common import ensure_ulid, handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bookings"])


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: BookingCreate,
    current_user: User = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    """
    Create a booking.

    The party is exactly one of: ``customerId``; ``childId``; or
    ``customerId`` plus ``childData`` for a child created on the fly.
    """
    try:
        booking = await asyncio.to_thread(
            booking_service.create_booking, current_user, payload
        )
        return BookingResponse.model_validate(booking)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("", response_model=List[BookingResponse])
async def list_bookings(
    studio_id: Optional[str] = Query(None, alias="studioId"),
    customer_id: Optional[str] = Query(None, alias="customerId"),
    child_id: Optional[str] = Query(None, alias="childId"),
    slot_id: Optional[str] = Query(None, alias="slotId"),
    booking_status: Optional[BookingStatus] = Query(None, alias="status"),
    paid: Optional[bool] = Query(None),
    limit: int = Query(settings.bookings_default_limit, ge=1, le=settings.bookings_max_limit),
    offset: int = Query(0, ge=0),
    current_user: User = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> List[BookingResponse]:
    """List bookings newest first; non-admins only see their own studios."""
    query = BookingListQuery(
        studio_id=studio_id,
        customer_id=customer_id,
        child_id=child_id,
        slot_id=slot_id,
        status=booking_status,
        paid=paid,
        limit=limit,
        offset=offset,
    )
    try:
        bookings = await asyncio.to_thread(booking_service.list_bookings, current_user, query)
        return [BookingResponse.model_validate(b) for b in bookings]
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{booking_id}", response_model=BookingDetailResponse)
async def get_booking(
    booking_id: str,
    current_user: User = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingDetailResponse:
    ensure_ulid(booking_id, "booking")
    try:
        details = await asyncio.to_thread(booking_service.get_booking, current_user, booking_id)
        return BookingDetailResponse.model_validate(details)
    except DomainException as e:
        handle_domain_exception(e)


@router.patch("/{booking_id}/status", response_model=BookingResponse)
async def update_booking_status(
    booking_id: str,
    payload: BookingStatusUpdate,
    current_user: User = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    ensure_ulid(booking_id, "booking")
    try:
        booking = await asyncio.to_thread(
            booking_service.update_status,
            current_user,
            booking_id,
            BookingStatus(payload.status),
        )
        return BookingResponse.model_validate(booking)
    except DomainException as e:
        handle_domain_exception(e)


@router.patch("/{booking_id}/payment", response_model=BookingResponse)
async def record_booking_payment(
    booking_id: str,
    payload: BookingPaymentUpdate,
    current_user: User = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    """Mark the booking paid with an offline method (cash, bit, paybox, transfer)."""
    ensure_ulid(booking_id, "booking")
    try:
        booking = await asyncio.to_thread(
            booking_service.record_payment,
            current_user,
            booking_id,
            payload.paid_method,
            payload.paid_at,
        )
        return BookingResponse.model_validate(booking)
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("/{booking_id}", response_model=BookingDeleteResponse)
async def delete_booking(
    booking_id: str,
    current_user: User = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingDeleteResponse:
    ensure_ulid(booking_id, "booking")
    try:
        result = await asyncio.to_thread(booking_service.delete_booking, current_user, booking_id)
        return BookingDeleteResponse.model_validate(result)
    except DomainException as e:
        handle_domain_exception(e)
