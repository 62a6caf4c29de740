# backend/luz/api/dependencies/auth.py
"""
Authentication dependencies.

Resolves the bearer token into a ``User`` row; the lookup runs off the
event loop with asyncio.to_thread.
"""

import asyncio
import logging

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from ...auth import get_current_user_id
from ...models.user import User
from ...repositories.factory import RepositoryFactory
from .database import get_db

logger = logging.getLogger(__name__)


async def get_current_user(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> User:
    """
    Get the current authenticated user from the database.

    Raises:
        HTTPException: 401 if the token's subject no longer exists
    """
    user_repository = RepositoryFactory.create_user_repository(db)
    user = await asyncio.to_thread(user_repository.get_by_id, user_id)
    if user is None:
        logger.warning(f"Token subject {user_id} not found")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    request.state.current_user = user
    return user


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Allow only admin users."""
    if not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="forbidden")
    return current_user
