# backend/luz/services/auth_service.py
"""Operator sign-in: Google profile to local user plus access token."""

from dataclasses import dataclass

from sqlalchemy.orm import Session

from ..auth import create_access_token
from ..core.google_verify import GoogleProfile
from ..models.user import User
from ..repositories.factory import RepositoryFactory
from .base import BaseService


@dataclass
class SignInResult:
    user: User
    access_token: str


class AuthService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)

    @BaseService.measure_operation("upsert_google_user")
    def upsert_google_user(self, profile: GoogleProfile) -> User:
        """Create the user on first sign-in; refresh email, name and avatar afterwards."""
        with self.transaction():
            user = self.user_repository.get_by_google_sub(profile.sub)
            fields = {"email": profile.email, "name": profile.name, "avatar_url": profile.picture}
            if user is None:
                user = self.user_repository.create(google_sub=profile.sub, **fields)
                self.log_operation("user_created", user_id=user.id)
            else:
                self.user_repository.update(user, **fields)
        return user

    def sign_in(self, profile: GoogleProfile) -> SignInResult:
        user = self.upsert_google_user(profile)
        token = create_access_token(user.id, is_admin=bool(user.is_admin))
        self.log_operation("sign_in", user_id=user.id)
        return SignInResult(user=user, access_token=token)
