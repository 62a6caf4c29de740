# backend/luz/core/exceptions.py
"""
Domain-specific exceptions for the Luz booking platform.

These exceptions provide clear, business-focused error messages
that can be caught and handled appropriately at the API layer.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        """Convert to an HTTPException carrying the structured detail."""
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class ValidationException(DomainException):
    """Raised when business validation fails."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundException(DomainException):
    """Raised when a requested resource is not found (or is outside the caller's tenant)."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictException(DomainException):
    """Raised when there's a conflict with existing data."""

    status_code = status.HTTP_409_CONFLICT


class ForbiddenException(DomainException):
    """Raised when user lacks permission for an action."""

    status_code = status.HTTP_403_FORBIDDEN


class ServiceException(DomainException):
    """Raised when a service operation fails."""

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "message": "An error occurred processing your request",
                "code": self.code,
                "details": {},
            },
        )


# Specific business exceptions


class CapacityReachedException(ConflictException):
    """Raised when a slot already holds max_participants bookings."""

    def __init__(self, slot_id: str, booked_count: int, max_participants: int):
        super().__init__(
            message="Slot is fully booked",
            code="CAPACITY_REACHED",
            details={
                "slot_id": slot_id,
                "booked_count": booked_count,
                "max_participants": max_participants,
            },
        )


class DuplicateCustomerException(ConflictException):
    """Raised when a studio already has a customer with the same email or phone."""

    def __init__(self, existing: Dict[str, Any]):
        super().__init__(
            message="Customer with this contact information already exists",
            code="DUPLICATE_CUSTOMER",
            details={"customer": existing},
        )


class AlreadyPaidException(ValidationException):
    """Raised when payment is recorded for a booking that is already paid."""

    def __init__(self, booking_id: str):
        super().__init__(
            message="Booking is already marked as paid",
            code="ALREADY_PAID",
            details={"booking_id": booking_id},
        )


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    This exception is used when data access operations fail,
    such as database connection issues, query failures, or
    constraint violations.
    """
