# backend/luz/repositories/__init__.py
"""
Repository layer for the Luz platform.

Repositories own all SQL; services own transactions and business rules.
"""

from .base_repository import BaseRepository
from .booking_repository import BookingFilters, BookingRepository
from .customer_repository import ChildRepository, CustomerRepository
from .factory import RepositoryFactory
from .invite_repository import InviteRepository
from .slot_repository import SlotRepository
from .studio_repository import StudioRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "BookingFilters",
    "BookingRepository",
    "ChildRepository",
    "CustomerRepository",
    "InviteRepository",
    "RepositoryFactory",
    "SlotRepository",
    "StudioRepository",
    "UserRepository",
]
