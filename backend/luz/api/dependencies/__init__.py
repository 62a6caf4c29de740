# backend/luz/api/dependencies/__init__.py
"""
Central export point for all dependencies.
"""

from .auth import get_current_user, require_admin
from .database import get_database, get_db
from .services import (
    get_auth_service,
    get_booking_service,
    get_customer_service,
    get_google_verifier,
    get_invite_booking_service,
    get_invite_service,
    get_public_service,
    get_studio_service,
)

__all__ = [
    # Auth
    "get_current_user",
    "require_admin",
    # Database
    "get_database",
    "get_db",
    # Services
    "get_auth_service",
    "get_booking_service",
    "get_customer_service",
    "get_google_verifier",
    "get_invite_booking_service",
    "get_invite_service",
    "get_public_service",
    "get_studio_service",
]
