# backend/luz/routes/common.py
"""Helpers shared by the route modules."""

from typing import NoReturn

from fastapi import HTTPException, status

from ..core.exceptions import DomainException, ValidationException
from ..core.ulid_helper import is_valid_ulid


def handle_domain_exception(exc: DomainException) -> NoReturn:
    """Convert domain exceptions to HTTP exceptions."""
    if hasattr(exc, "to_http_exception"):
        raise exc.to_http_exception()
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


def ensure_ulid(value: str, entity: str) -> str:
    """Reject path identifiers that are not ULIDs with 400 "Invalid <entity> ID"."""
    if not is_valid_ulid(value):
        handle_domain_exception(
            ValidationException(f"Invalid {entity} ID", code="INVALID_ID", details={"id": value})
        )
    return value
