# backend/luz/routes/public.py
"""
Public routes (no authentication).

Endpoints:
    GET /{slug}/slots?week=YYYY-WW - A studio's active slots for one ISO week
    POST /invites/{short_hash}/bookings - Book through an invite link
"""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ..api.dependencies import get_invite_booking_service, get_public_service
from ..core.exceptions import DomainException
from ..schemas.booking import BookingResponse, InviteBookingCreate
from ..schemas.public import WeeklySlotsResponse
from ..services.invite_service import InviteBookingService
from ..services.public_service import PublicService
from .common import handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["public"])


@router.get("/{slug}/slots", response_model=WeeklySlotsResponse)
async def get_weekly_slots(
    slug: str,
    week: Optional[str] = Query(None, description="ISO week, YYYY-WW"),
    public_service: PublicService = Depends(get_public_service),
) -> WeeklySlotsResponse:
    try:
        result = await asyncio.to_thread(public_service.weekly_slots, slug, week or "")
        return WeeklySlotsResponse.model_validate(result)
    except DomainException as e:
        handle_domain_exception(e)


@router.post(
    "/invites/{short_hash}/bookings",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_invite_booking(
    short_hash: str,
    payload: InviteBookingCreate,
    invite_booking_service: InviteBookingService = Depends(get_invite_booking_service),
) -> BookingResponse:
    """
    Book on behalf of the invite's customer.

    Unknown and expired invites both answer 404.
    """
    try:
        booking = await asyncio.to_thread(
            invite_booking_service.create_booking, short_hash, payload
        )
        return BookingResponse.model_validate(booking)
    except DomainException as e:
        handle_domain_exception(e)
