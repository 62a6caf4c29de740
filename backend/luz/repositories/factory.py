# backend/luz/repositories/factory.py
"""
Repository Factory for the Luz platform

Provides centralized creation of repository instances,
ensuring consistent initialization and dependency injection.
"""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

# Avoid circular imports
if TYPE_CHECKING:
    from .booking_repository import BookingRepository
    from .customer_repository import ChildRepository, CustomerRepository
    from .invite_repository import InviteRepository
    from .slot_repository import SlotRepository
    from .studio_repository import StudioRepository
    from .user_repository import UserRepository


class RepositoryFactory:
    """
    Factory class for creating repository instances.

    Centralizes repository creation to ensure consistent initialization
    and makes it easy to swap implementations if needed.
    """

    @staticmethod
    def create_studio_repository(db: Session) -> "StudioRepository":
        from .studio_repository import StudioRepository

        return StudioRepository(db)

    @staticmethod
    def create_customer_repository(db: Session) -> "CustomerRepository":
        from .customer_repository import CustomerRepository

        return CustomerRepository(db)

    @staticmethod
    def create_child_repository(db: Session) -> "ChildRepository":
        from .customer_repository import ChildRepository

        return ChildRepository(db)

    @staticmethod
    def create_slot_repository(db: Session) -> "SlotRepository":
        """Create repository for slot queries and slot row locks."""
        from .slot_repository import SlotRepository

        return SlotRepository(db)

    @staticmethod
    def create_booking_repository(db: Session) -> "BookingRepository":
        """Create repository for booking operations."""
        from .booking_repository import BookingRepository

        return BookingRepository(db)

    @staticmethod
    def create_invite_repository(db: Session) -> "InviteRepository":
        from .invite_repository import InviteRepository

        return InviteRepository(db)

    @staticmethod
    def create_user_repository(db: Session) -> "UserRepository":
        from .user_repository import UserRepository

        return UserRepository(db)
