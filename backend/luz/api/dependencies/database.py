# backend/luz/api/dependencies/database.py
"""
Database-related dependencies.
"""

from typing import Generator

from fastapi import Request
from sqlalchemy.orm import Session

from ...database import Database


def get_database(request: Request) -> Database:
    """The Database object created by ``create_app`` (or injected by tests)."""
    return request.app.state.database


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Get database session dependency.

    One session per request; commits on success, rolls back on any
    exception and always closes.
    """
    db = get_database(request).session()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
