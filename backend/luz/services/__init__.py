# backend/luz/services/__init__.py
"""
Service layer for the Luz platform.

Services own business rules and transactions; they receive a Session and
build their repositories through RepositoryFactory.
"""

from .auth_service import AuthService
from .base import BaseService
from .booking_service import BookingService
from .booking_validator import BookingValidator, PartyRequest, ResolvedParty
from .customer_service import CustomerService
from .invite_service import InviteBookingService, InviteService
from .permission_service import PermissionService
from .public_service import PublicService
from .slot_capacity import CapacitySnapshot, SlotCapacityGuard
from .studio_service import StudioService

__all__ = [
    "AuthService",
    "BaseService",
    "BookingService",
    "BookingValidator",
    "CapacitySnapshot",
    "CustomerService",
    "InviteBookingService",
    "InviteService",
    "PartyRequest",
    "PermissionService",
    "PublicService",
    "ResolvedParty",
    "SlotCapacityGuard",
    "StudioService",
]
