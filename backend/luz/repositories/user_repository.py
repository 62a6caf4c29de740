# backend/luz/repositories/user_repository.py
from typing import Optional

from sqlalchemy.orm import Session

from ..models.user import User
from .base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self, db: Session):
        super().__init__(db, User)

    def get_by_google_sub(self, google_sub: str) -> Optional[User]:
        return self.find_one_by(google_sub=google_sub)
