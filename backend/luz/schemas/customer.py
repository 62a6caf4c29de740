"""Customer and child request/response schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field, model_validator

from .base import StrictModel, StrictRequestModel


class CustomerCreate(StrictRequestModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    avatar_key: Optional[str] = Field(default=None, max_length=100)
    contact_phone: Optional[str] = Field(default=None, min_length=1, max_length=50)
    contact_email: Optional[EmailStr] = None

    @model_validator(mode="after")
    def _require_contact(self) -> "CustomerCreate":
        if not self.contact_phone and not self.contact_email:
            raise ValueError("Either contactPhone or contactEmail must be provided")
        return self


class CustomerUpdate(StrictRequestModel):
    """Partial update; only fields present in the body are applied."""

    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    avatar_key: Optional[str] = Field(default=None, max_length=100)
    contact_phone: Optional[str] = Field(default=None, min_length=1, max_length=50)
    contact_email: Optional[EmailStr] = None


class CustomerResponse(StrictModel):
    id: str
    studio_id: str
    first_name: str
    avatar_key: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    created_at: datetime


class CustomerListItem(CustomerResponse):
    children_count: int = 0
    bookings_count: int = 0


class ChildCreate(StrictRequestModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    avatar_key: str = Field(..., min_length=1, max_length=100)


class ChildUpdate(StrictRequestModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    avatar_key: Optional[str] = Field(default=None, min_length=1, max_length=100)


class ChildResponse(StrictModel):
    id: str
    customer_id: str
    first_name: str
    avatar_key: str
    created_at: datetime


class ChildListItem(ChildResponse):
    bookings_count: int = 0


class ChildDetailResponse(ChildResponse):
    customer_name: str
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    studio_name: str
    studio_slug: str
    total_bookings: int = 0


class CustomerDetailResponse(CustomerResponse):
    studio_name: str
    studio_slug: str
    children: List[ChildResponse] = Field(default_factory=list)
    total_bookings: int = 0


class CustomerDeletionSummary(StrictModel):
    customer_id: str
    customer_name: str
    children_deleted: int
    bookings_deleted: int


class CustomerDeleteResponse(StrictModel):
    message: str
    deleted: CustomerDeletionSummary


class ChildDeletionSummary(StrictModel):
    child_id: str
    child_name: str
    bookings_deleted: int


class ChildDeleteResponse(StrictModel):
    message: str
    deleted: ChildDeletionSummary
