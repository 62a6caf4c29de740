# backend/luz/services/customer_service.py
"""
Customer and child management.

Customers are unique per studio by email and by phone. Deleting a customer
removes its children, bookings and invites through ON DELETE CASCADE;
deleting a child removes its bookings.
"""

from typing import Any, Dict, List

from sqlalchemy.orm import Session

from ..core.exceptions import DuplicateCustomerException, NotFoundException, ValidationException
from ..models.customer import Child, Customer
from ..models.user import User
from ..repositories.factory import RepositoryFactory
from ..schemas.customer import (
    ChildCreate,
    ChildUpdate,
    CustomerCreate,
    CustomerResponse,
    CustomerUpdate,
)
from .base import BaseService
from .permission_service import PermissionService


class CustomerService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.studio_repository = RepositoryFactory.create_studio_repository(db)
        self.customer_repository = RepositoryFactory.create_customer_repository(db)
        self.child_repository = RepositoryFactory.create_child_repository(db)
        self.booking_repository = RepositoryFactory.create_booking_repository(db)
        self.permissions = PermissionService(db)

    def _require_studio(self, actor: User, studio_id: str) -> None:
        if self.studio_repository.get_by_id(studio_id) is None:
            raise NotFoundException("Studio not found", code="STUDIO_NOT_FOUND")
        self.permissions.ensure_studio_access(actor, studio_id)

    def _get_customer(self, actor: User, customer_id: str) -> Customer:
        customer = self.customer_repository.get_with_studio(customer_id)
        if customer is None:
            raise NotFoundException("Customer not found", code="CUSTOMER_NOT_FOUND")
        self.permissions.ensure_studio_access(actor, customer.studio_id)
        return customer

    def _reject_duplicate(
        self, studio_id: str, email: Any, phone: Any, exclude_id: Any = None
    ) -> None:
        existing = self.customer_repository.find_by_contact(
            studio_id, email=email, phone=phone, exclude_id=exclude_id
        )
        if existing is not None:
            raise DuplicateCustomerException(
                CustomerResponse.model_validate(existing).model_dump(mode="json")
            )

    @BaseService.measure_operation("create_customer")
    def create_customer(self, actor: User, studio_id: str, data: CustomerCreate) -> Customer:
        with self.transaction():
            self._require_studio(actor, studio_id)
            self._reject_duplicate(studio_id, data.contact_email, data.contact_phone)
            customer = self.customer_repository.create(
                studio_id=studio_id,
                first_name=data.first_name,
                avatar_key=data.avatar_key,
                contact_phone=data.contact_phone,
                contact_email=data.contact_email,
            )

        self.log_operation("create_customer", customer_id=customer.id, studio_id=studio_id)
        return customer

    @BaseService.measure_operation("list_customers")
    def list_customers(self, actor: User, studio_id: str) -> List[Dict[str, Any]]:
        self._require_studio(actor, studio_id)
        rows = self.customer_repository.list_with_counts(studio_id)
        return [
            {
                **CustomerResponse.model_validate(customer).model_dump(),
                "children_count": children,
                "bookings_count": bookings,
            }
            for customer, children, bookings in rows
        ]

    @BaseService.measure_operation("get_customer")
    def get_customer(self, actor: User, customer_id: str) -> Dict[str, Any]:
        customer = self._get_customer(actor, customer_id)
        children = self.child_repository.list_for_customer(customer.id)
        return {
            **CustomerResponse.model_validate(customer).model_dump(),
            "studio_name": customer.studio.name,
            "studio_slug": customer.studio.slug,
            "children": children,
            "total_bookings": self.booking_repository.count(customer_id=customer.id),
        }

    @BaseService.measure_operation("update_customer")
    def update_customer(self, actor: User, customer_id: str, data: CustomerUpdate) -> Customer:
        updates = data.model_dump(exclude_unset=True)
        if not updates:
            raise ValidationException("No fields to update", code="EMPTY_UPDATE")
        if "first_name" in updates and updates["first_name"] is None:
            raise ValidationException("firstName cannot be null", code="INVALID_FIELD")

        with self.transaction():
            customer = self._get_customer(actor, customer_id)
            email = updates.get("contact_email", customer.contact_email)
            phone = updates.get("contact_phone", customer.contact_phone)
            if email is None and phone is None:
                raise ValidationException(
                    "Either contactPhone or contactEmail must be provided",
                    code="CONTACT_REQUIRED",
                )
            if "contact_email" in updates or "contact_phone" in updates:
                self._reject_duplicate(
                    customer.studio_id,
                    updates.get("contact_email"),
                    updates.get("contact_phone"),
                    exclude_id=customer.id,
                )
            self.customer_repository.update(customer, **updates)

        self.log_operation("update_customer", customer_id=customer_id, fields=sorted(updates))
        return customer

    @BaseService.measure_operation("delete_customer")
    def delete_customer(self, actor: User, customer_id: str) -> Dict[str, Any]:
        with self.transaction():
            customer = self._get_customer(actor, customer_id)
            summary = {
                "customer_id": customer.id,
                "customer_name": customer.first_name,
                "children_deleted": self.child_repository.count(customer_id=customer.id),
                "bookings_deleted": self.customer_repository.count_all_bookings(customer.id),
            }
            self.customer_repository.delete(customer)

        self.log_operation("delete_customer", **summary)
        return {"message": "Customer deleted successfully", "deleted": summary}

    # Children

    @BaseService.measure_operation("create_child")
    def create_child(self, actor: User, customer_id: str, data: ChildCreate) -> Child:
        with self.transaction():
            customer = self._get_customer(actor, customer_id)
            child = self.child_repository.create(
                customer_id=customer.id,
                first_name=data.first_name,
                avatar_key=data.avatar_key,
            )

        self.log_operation("create_child", child_id=child.id, customer_id=customer_id)
        return child

    @BaseService.measure_operation("list_children")
    def list_children(self, actor: User, customer_id: str) -> List[Dict[str, Any]]:
        customer = self._get_customer(actor, customer_id)
        return [
            {
                "id": child.id,
                "customer_id": child.customer_id,
                "first_name": child.first_name,
                "avatar_key": child.avatar_key,
                "created_at": child.created_at,
                "bookings_count": bookings,
            }
            for child, bookings in self.child_repository.list_with_counts(customer.id)
        ]

    def _get_child(self, actor: User, child_id: str) -> Child:
        child = self.child_repository.get_with_customer(child_id)
        if child is None:
            raise NotFoundException("Child not found", code="CHILD_NOT_FOUND")
        self.permissions.ensure_studio_access(actor, child.customer.studio_id)
        return child

    @BaseService.measure_operation("get_child")
    def get_child(self, actor: User, child_id: str) -> Dict[str, Any]:
        child = self._get_child(actor, child_id)
        customer = child.customer
        return {
            "id": child.id,
            "customer_id": child.customer_id,
            "first_name": child.first_name,
            "avatar_key": child.avatar_key,
            "created_at": child.created_at,
            "customer_name": customer.first_name,
            "contact_email": customer.contact_email,
            "contact_phone": customer.contact_phone,
            "studio_name": customer.studio.name,
            "studio_slug": customer.studio.slug,
            "total_bookings": self.child_repository.count_bookings(child.id),
        }

    @BaseService.measure_operation("update_child")
    def update_child(self, actor: User, child_id: str, data: ChildUpdate) -> Child:
        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        if not updates:
            raise ValidationException("No fields to update", code="EMPTY_UPDATE")

        with self.transaction():
            child = self._get_child(actor, child_id)
            self.child_repository.update(child, **updates)

        self.log_operation("update_child", child_id=child_id, fields=sorted(updates))
        return child

    @BaseService.measure_operation("delete_child")
    def delete_child(self, actor: User, child_id: str) -> Dict[str, Any]:
        with self.transaction():
            child = self._get_child(actor, child_id)
            summary = {
                "child_id": child.id,
                "child_name": child.first_name,
                "bookings_deleted": self.child_repository.count_bookings(child.id),
            }
            self.child_repository.delete(child)

        self.log_operation("delete_child", **summary)
        return {"message": "Child deleted successfully", "deleted": summary}
