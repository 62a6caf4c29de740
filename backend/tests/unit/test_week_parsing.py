from datetime import datetime, timezone

import pytest

from luz.core.exceptions import ValidationException
from luz.services.public_service import parse_week


def test_iso_week_bounds():
    start, end = parse_week("2025-11")

    assert start == datetime(2025, 3, 10, tzinfo=timezone.utc)
    assert end == datetime(2025, 3, 17, tzinfo=timezone.utc)


def test_first_iso_week_can_start_in_previous_year():
    start, _ = parse_week("2025-01")

    assert start == datetime(2024, 12, 30, tzinfo=timezone.utc)


def test_missing_week():
    with pytest.raises(ValidationException) as exc_info:
        parse_week("")
    assert exc_info.value.message == "Week parameter is required (format: YYYY-WW)"


@pytest.mark.parametrize("week", ["2025-W11", "2025-1", "25-11", "2025-54", "2025-00"])
def test_invalid_week(week):
    with pytest.raises(ValidationException) as exc_info:
        parse_week(week)
    assert exc_info.value.message == "Invalid week format. Use YYYY-WW"
