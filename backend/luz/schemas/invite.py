"""Invite request/response schemas."""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, model_validator

from .base import StrictModel, StrictRequestModel


class InviteCustomer(StrictRequestModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, min_length=1, max_length=50)

    @model_validator(mode="after")
    def _require_contact(self) -> "InviteCustomer":
        if not self.email and not self.phone:
            raise ValueError("Either email or phone must be provided")
        return self


class InviteCreate(StrictRequestModel):
    studio_id: str = Field(..., min_length=1)
    customer: InviteCustomer


class InviteResponse(StrictModel):
    id: str
    studio_id: str
    customer_id: str
    short_hash: str
    created_at: datetime
    expires_at: datetime
    invite_url: str
