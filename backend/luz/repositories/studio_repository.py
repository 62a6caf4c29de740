# backend/luz/repositories/studio_repository.py
"""Studio and studio-membership data access."""

from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.studio import Studio
from ..models.user import StudioOwner, StudioRole
from .base_repository import BaseRepository


class StudioRepository(BaseRepository[Studio]):
    def __init__(self, db: Session):
        super().__init__(db, Studio)

    def get_by_slug(self, slug: str) -> Optional[Studio]:
        return self.find_one_by(slug=slug)

    def slug_exists(self, slug: str) -> bool:
        return self.exists(slug=slug)

    def add_member(
        self, studio_id: str, user_id: str, role: StudioRole = StudioRole.OWNER
    ) -> StudioOwner:
        try:
            membership = StudioOwner(studio_id=studio_id, user_id=user_id, role=role.value)
            self.db.add(membership)
            self.db.flush()
            return membership
        except SQLAlchemyError as e:
            self.logger.error(f"Error adding member {user_id} to studio {studio_id}: {str(e)}")
            raise RepositoryException(f"Failed to add studio member: {str(e)}")

    def is_member(self, studio_id: str, user_id: str) -> bool:
        """True when the user has an owner or manager row for the studio."""
        try:
            return (
                self.db.query(StudioOwner.user_id)
                .filter(StudioOwner.studio_id == studio_id, StudioOwner.user_id == user_id)
                .first()
                is not None
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error checking membership: {str(e)}")
            raise RepositoryException(f"Failed to check studio membership: {str(e)}")

    def member_studio_ids(self, user_id: str) -> List[str]:
        try:
            rows = self.db.query(StudioOwner.studio_id).filter(StudioOwner.user_id == user_id).all()
            return [row[0] for row in rows]
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing studios for user {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to list user studios: {str(e)}")

    def list_for_user(self, user_id: str) -> List[Studio]:
        try:
            return (
                self.db.query(Studio)
                .join(StudioOwner, StudioOwner.studio_id == Studio.id)
                .filter(StudioOwner.user_id == user_id)
                .order_by(Studio.name)
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing studios for user {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to list user studios: {str(e)}")

    def list_all(self) -> List[Studio]:
        try:
            return self.db.query(Studio).order_by(Studio.name).all()
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing studios: {str(e)}")
            raise RepositoryException(f"Failed to list studios: {str(e)}")
