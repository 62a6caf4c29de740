# backend/luz/repositories/invite_repository.py
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ..core.exceptions import RepositoryException
from ..models.invite import Invite
from .base_repository import BaseRepository


class InviteRepository(BaseRepository[Invite]):
    def __init__(self, db: Session):
        super().__init__(db, Invite)

    def get_active_by_hash(self, short_hash: str, now: datetime) -> Optional[Invite]:
        """Invite for the hash if it has not expired; expired and unknown look the same."""
        try:
            return (
                self.db.query(Invite)
                .options(joinedload(Invite.studio), joinedload(Invite.customer))
                .filter(Invite.short_hash == short_hash, Invite.expires_at > now)
                .first()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error resolving invite: {str(e)}")
            raise RepositoryException(f"Failed to resolve invite: {str(e)}")

    def hash_exists(self, short_hash: str) -> bool:
        return self.exists(short_hash=short_hash)
