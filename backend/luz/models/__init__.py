# backend/luz/models/__init__.py
"""
Database models for the Luz platform.

Importing this package registers every table on ``Base.metadata``.
"""

from .booking import Booking, BookingStatus, PaymentMethod
from .customer import Child, Customer
from .invite import Invite
from .slot import Slot
from .studio import Studio
from .user import StudioOwner, StudioRole, User

__all__ = [
    "Booking",
    "BookingStatus",
    "PaymentMethod",
    "Child",
    "Customer",
    "Invite",
    "Slot",
    "Studio",
    "StudioOwner",
    "StudioRole",
    "User",
]
