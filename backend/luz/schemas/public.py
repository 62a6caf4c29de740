"""Unauthenticated schedule view."""

from typing import Dict, List

from .base import StrictModel
from .studio import SlotResponse


class PublicStudio(StrictModel):
    id: str
    name: str
    timezone: str
    currency: str


class WeeklySlotsResponse(StrictModel):
    studio: PublicStudio
    week: str
    slots_by_day: Dict[str, List[SlotResponse]]
