# backend/luz/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

This module provides factory functions that create service instances
with their required dependencies properly injected.
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ...core.google_verify import GoogleIdTokenVerifier
from ...services.auth_service import AuthService
from ...services.booking_service import BookingService
from ...services.customer_service import CustomerService
from ...services.invite_service import InviteBookingService, InviteService
from ...services.public_service import PublicService
from ...services.studio_service import StudioService
from .database import get_db


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return BookingService(db)


def get_invite_service(db: Session = Depends(get_db)) -> InviteService:
    return InviteService(db)


def get_invite_booking_service(db: Session = Depends(get_db)) -> InviteBookingService:
    return InviteBookingService(db)


def get_studio_service(db: Session = Depends(get_db)) -> StudioService:
    return StudioService(db)


def get_customer_service(db: Session = Depends(get_db)) -> CustomerService:
    return CustomerService(db)


def get_public_service(db: Session = Depends(get_db)) -> PublicService:
    return PublicService(db)


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_google_verifier(request: Request) -> GoogleIdTokenVerifier:
    """Verifier owned by the app; tests swap it through dependency_overrides."""
    return request.app.state.google_verifier
