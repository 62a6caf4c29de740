"""Studio and slot request/response schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from .base import Money, StrictModel, StrictRequestModel

SLUG_PATTERN = r"^[a-z0-9-]+$"
CURRENCY_PATTERN = r"^[A-Z]{3}$"


class StudioCreate(StrictRequestModel):
    slug: str = Field(..., min_length=1, max_length=50, pattern=SLUG_PATTERN)
    name: str = Field(..., min_length=1, max_length=100)
    timezone: str = Field(default="Asia/Jerusalem", min_length=1, max_length=64)
    currency: str = Field(default="ILS", min_length=3, max_length=3, pattern=CURRENCY_PATTERN)


class StudioResponse(StrictModel):
    id: str
    slug: str
    name: str
    timezone: str
    currency: str
    created_at: datetime


class SlotCreate(StrictRequestModel):
    title: str = Field(..., min_length=1, max_length=200)
    starts_at: datetime
    duration_min: int = Field(..., ge=1, le=1440)
    recurrence_rule: Optional[str] = Field(default=None, description="RFC 5545 RRULE, stored as-is")
    price: Money
    min_participants: int = Field(..., ge=0)
    max_participants: int = Field(..., ge=1)
    for_children: bool = False

    @field_validator("price")
    @classmethod
    def _non_negative_price(cls, value: Money) -> Money:
        if value < 0:
            raise ValueError("price must be greater than or equal to 0")
        return value

    @model_validator(mode="after")
    def _require_aware_start(self) -> "SlotCreate":
        if self.starts_at.tzinfo is None:
            raise ValueError("startsAt must include a timezone offset")
        return self


class SlotResponse(StrictModel):
    id: str
    studio_id: str
    title: str
    starts_at: datetime
    duration_min: int
    recurrence_rule: Optional[str] = None
    price: Money
    min_participants: int
    max_participants: int
    for_children: bool
    active: bool
