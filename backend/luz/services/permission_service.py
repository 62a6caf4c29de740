# backend/luz/services/permission_service.py
"""
Permission service for studio-scoped access control.

An operator may act on a studio when they are an admin or hold an owner
or manager row for it in ``studio_owners``.
"""

from typing import TYPE_CHECKING, Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import ForbiddenException
from ..models.user import User
from ..repositories.factory import RepositoryFactory
from .base import BaseService

if TYPE_CHECKING:
    from ..repositories.studio_repository import StudioRepository


class PermissionService(BaseService):
    """Answers "may this user act on that studio?" with a per-request cache."""

    def __init__(self, db: Session):
        super().__init__(db)
        self._cache: Dict[str, bool] = {}
        self.studio_repository: "StudioRepository" = RepositoryFactory.create_studio_repository(db)

    def can_access_studio(self, user: User, studio_id: str) -> bool:
        if user.is_admin:
            return True

        cache_key = f"{user.id}:{studio_id}"
        if cache_key not in self._cache:
            self._cache[cache_key] = self.studio_repository.is_member(studio_id, user.id)
        return self._cache[cache_key]

    def ensure_studio_access(self, user: User, studio_id: str) -> None:
        """Raise 403 unless the user may act on the studio."""
        if not self.can_access_studio(user, studio_id):
            self.logger.info(
                "Studio access denied",
                extra={"user_id": user.id, "studio_id": studio_id},
            )
            raise ForbiddenException("forbidden", code="FORBIDDEN")

    def accessible_studio_ids(self, user: User) -> Optional[List[str]]:
        """Studios the user may see; ``None`` means every studio (admin)."""
        if user.is_admin:
            return None
        return self.studio_repository.member_studio_ids(user.id)
