"""
Booking request/response schemas.

A booking request names its party in one of a few shapes; the shapes are
checked by the booking validator rather than here so that each rejection
carries its own message.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from ..models.booking import BookingStatus, PaymentMethod
from .base import Money, StrictModel, StrictRequestModel


class ChildData(StrictRequestModel):
    """Inline child to create together with the booking."""

    first_name: str = Field(..., min_length=1, max_length=100)
    avatar_key: Optional[str] = Field(default=None, min_length=1, max_length=100)


class BookingCreate(StrictRequestModel):
    slot_id: str = Field(..., min_length=1)
    customer_id: Optional[str] = None
    child_id: Optional[str] = None
    child_data: Optional[ChildData] = None


class InviteBookingCreate(StrictRequestModel):
    slot_id: str = Field(..., min_length=1)
    child_id: Optional[str] = None
    child: Optional[ChildData] = None


class BookingStatusUpdate(StrictRequestModel):
    status: BookingStatus


class BookingPaymentUpdate(StrictRequestModel):
    paid_method: PaymentMethod
    paid_at: Optional[datetime] = None


class BookingListQuery(StrictRequestModel):
    studio_id: Optional[str] = None
    customer_id: Optional[str] = None
    child_id: Optional[str] = None
    slot_id: Optional[str] = None
    status: Optional[BookingStatus] = None
    paid: Optional[bool] = None
    limit: int = Field(default=50, ge=1, le=200)
    offset: int = Field(default=0, ge=0)


class BookingResponse(StrictModel):
    id: str
    slot_id: str
    customer_id: Optional[str] = None
    child_id: Optional[str] = None
    status: BookingStatus
    created_at: datetime
    paid: bool
    paid_at: Optional[datetime] = None
    paid_method: Optional[PaymentMethod] = None


class BookingDetailResponse(BookingResponse):
    slot_title: str
    starts_at: datetime
    duration_min: int
    price: Money
    customer_name: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    child_name: Optional[str] = None


class BookingDeletionSummary(StrictModel):
    booking_id: str
    slot_id: str


class BookingDeleteResponse(StrictModel):
    message: str
    deleted: BookingDeletionSummary
