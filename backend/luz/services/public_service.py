# backend/luz/services/public_service.py
"""Unauthenticated read-only views of a studio's schedule."""

from collections import OrderedDict
from datetime import date, datetime, time, timedelta, timezone
import re
from typing import Any, Dict, List, Tuple

from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundException, ValidationException
from ..repositories.factory import RepositoryFactory
from ..schemas.studio import SlotResponse
from .base import BaseService

WEEK_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


def parse_week(week: str) -> Tuple[datetime, datetime]:
    """
    UTC bounds ``[monday 00:00, next monday 00:00)`` of an ISO ``YYYY-WW`` week.

    Raises:
        ValidationException: missing, malformed or out-of-range week
    """
    if not week:
        raise ValidationException(
            "Week parameter is required (format: YYYY-WW)", code="WEEK_REQUIRED"
        )
    match = WEEK_PATTERN.match(week)
    if not match:
        raise ValidationException("Invalid week format. Use YYYY-WW", code="INVALID_WEEK")

    year, week_number = int(match.group(1)), int(match.group(2))
    try:
        monday = date.fromisocalendar(year, week_number, 1)
    except ValueError:
        raise ValidationException("Invalid week format. Use YYYY-WW", code="INVALID_WEEK")

    start = datetime.combine(monday, time.min, tzinfo=timezone.utc)
    return start, start + timedelta(days=7)


class PublicService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.studio_repository = RepositoryFactory.create_studio_repository(db)
        self.slot_repository = RepositoryFactory.create_slot_repository(db)

    @BaseService.measure_operation("weekly_slots")
    def weekly_slots(self, slug: str, week: str) -> Dict[str, Any]:
        """Active slots of the studio in the given week, grouped by UTC date."""
        start, end = parse_week(week)

        studio = self.studio_repository.get_by_slug(slug)
        if studio is None:
            raise NotFoundException("Studio not found", code="STUDIO_NOT_FOUND")

        slots_by_day: Dict[str, List[SlotResponse]] = OrderedDict()
        for slot in self.slot_repository.list_active_between(studio.id, start, end):
            day = slot.starts_at.astimezone(timezone.utc).date().isoformat()
            slots_by_day.setdefault(day, []).append(SlotResponse.model_validate(slot))

        return {
            "studio": {
                "id": studio.id,
                "name": studio.name,
                "timezone": studio.timezone,
                "currency": studio.currency,
            },
            "week": week,
            "slots_by_day": slots_by_day,
        }
