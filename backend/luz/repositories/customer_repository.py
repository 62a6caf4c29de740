# backend/luz/repositories/customer_repository.py
"""
Customer and Child data access.

Studio scoping lives here: a child belongs to a studio only through its
parent customer, so every child lookup that needs the studio joins through
``customers``.
"""

from typing import List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ..core.exceptions import RepositoryException
from ..models.booking import Booking
from ..models.customer import Child, Customer
from .base_repository import BaseRepository


class CustomerRepository(BaseRepository[Customer]):
    def __init__(self, db: Session):
        super().__init__(db, Customer)

    def get_with_studio(self, customer_id: str) -> Optional[Customer]:
        try:
            return (
                self.db.query(Customer)
                .options(joinedload(Customer.studio))
                .filter(Customer.id == customer_id)
                .first()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading customer {customer_id}: {str(e)}")
            raise RepositoryException(f"Failed to load customer: {str(e)}")

    def get_in_studio(self, customer_id: str, studio_id: str) -> Optional[Customer]:
        return self.find_one_by(id=customer_id, studio_id=studio_id)

    def find_by_contact(
        self,
        studio_id: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        exclude_id: Optional[str] = None,
    ) -> Optional[Customer]:
        """First customer of the studio matching the email or the phone."""
        clauses = []
        if email:
            clauses.append(Customer.contact_email == email)
        if phone:
            clauses.append(Customer.contact_phone == phone)
        if not clauses:
            return None

        try:
            query = self.db.query(Customer).filter(Customer.studio_id == studio_id, or_(*clauses))
            if exclude_id:
                query = query.filter(Customer.id != exclude_id)
            return query.order_by(Customer.created_at).first()
        except SQLAlchemyError as e:
            self.logger.error(f"Error finding customer by contact: {str(e)}")
            raise RepositoryException(f"Failed to find customer: {str(e)}")

    def list_with_counts(self, studio_id: str) -> List[Tuple[Customer, int, int]]:
        """Customers of a studio with (children_count, bookings_count), newest first."""
        try:
            children_sq = (
                self.db.query(Child.customer_id, func.count(Child.id).label("children_count"))
                .group_by(Child.customer_id)
                .subquery()
            )
            bookings_sq = (
                self.db.query(Booking.customer_id, func.count(Booking.id).label("bookings_count"))
                .filter(Booking.customer_id.isnot(None))
                .group_by(Booking.customer_id)
                .subquery()
            )
            rows = (
                self.db.query(
                    Customer,
                    func.coalesce(children_sq.c.children_count, 0),
                    func.coalesce(bookings_sq.c.bookings_count, 0),
                )
                .outerjoin(children_sq, children_sq.c.customer_id == Customer.id)
                .outerjoin(bookings_sq, bookings_sq.c.customer_id == Customer.id)
                .filter(Customer.studio_id == studio_id)
                .order_by(Customer.created_at.desc())
                .all()
            )
            return [(customer, int(children), int(bookings)) for customer, children, bookings in rows]
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing customers for studio {studio_id}: {str(e)}")
            raise RepositoryException(f"Failed to list customers: {str(e)}")

    def count_all_bookings(self, customer_id: str) -> int:
        """Bookings of the customer plus bookings of its children."""
        try:
            child_ids = self.db.query(Child.id).filter(Child.customer_id == customer_id)
            return (
                self.db.query(func.count(Booking.id))
                .filter(
                    or_(Booking.customer_id == customer_id, Booking.child_id.in_(child_ids))
                )
                .scalar()
                or 0
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error counting bookings for customer {customer_id}: {str(e)}")
            raise RepositoryException(f"Failed to count bookings: {str(e)}")


class ChildRepository(BaseRepository[Child]):
    def __init__(self, db: Session):
        super().__init__(db, Child)

    def get_with_customer(self, child_id: str) -> Optional[Child]:
        try:
            return (
                self.db.query(Child)
                .options(joinedload(Child.customer))
                .filter(Child.id == child_id)
                .first()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading child {child_id}: {str(e)}")
            raise RepositoryException(f"Failed to load child: {str(e)}")

    def get_in_studio(self, child_id: str, studio_id: str) -> Optional[Child]:
        """The child, if its parent customer belongs to ``studio_id``."""
        try:
            return (
                self.db.query(Child)
                .join(Customer, Customer.id == Child.customer_id)
                .filter(Child.id == child_id, Customer.studio_id == studio_id)
                .first()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading child {child_id} in studio {studio_id}: {str(e)}")
            raise RepositoryException(f"Failed to load child: {str(e)}")

    def list_for_customer(self, customer_id: str) -> List[Child]:
        try:
            return (
                self.db.query(Child)
                .filter(Child.customer_id == customer_id)
                .order_by(Child.created_at, Child.id)
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing children of {customer_id}: {str(e)}")
            raise RepositoryException(f"Failed to list children: {str(e)}")

    def list_with_counts(self, customer_id: str) -> List[Tuple[Child, int]]:
        """Children of a customer with their bookings_count, newest first."""
        try:
            rows = (
                self.db.query(Child, func.count(Booking.id))
                .outerjoin(Booking, Booking.child_id == Child.id)
                .filter(Child.customer_id == customer_id)
                .group_by(Child.id)
                .order_by(Child.created_at.desc())
                .all()
            )
            return [(child, int(bookings)) for child, bookings in rows]
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing children of {customer_id}: {str(e)}")
            raise RepositoryException(f"Failed to list children: {str(e)}")

    def count_bookings(self, child_id: str) -> int:
        try:
            return self.db.query(Booking).filter(Booking.child_id == child_id).count()
        except SQLAlchemyError as e:
            self.logger.error(f"Error counting bookings for child {child_id}: {str(e)}")
            raise RepositoryException(f"Failed to count bookings: {str(e)}")
