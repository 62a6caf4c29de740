"""
Database engine, session factory, and metadata shared across the application.

The engine is owned by an explicit ``Database`` object rather than a module
global: ``create_app()`` builds one from settings (tests inject their own) and
stores it on ``app.state.database``.
"""

from __future__ import annotations

from datetime import datetime
import logging
from typing import Any, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeMeta, Session, declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool

from luz.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

Base: DeclarativeMeta = declarative_base()


def _build_engine_kwargs(config: Settings) -> dict[str, Any]:
    """Pool and connect arguments for the configured database URL."""
    url = config.database_url
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}

    connect_args: dict[str, Any] = {"connect_timeout": 5, "application_name": "luz_api"}
    if config.db_statement_timeout_ms:
        connect_args["options"] = f"-c statement_timeout={config.db_statement_timeout_ms}"

    return {
        "poolclass": QueuePool,
        "pool_size": config.db_pool_size,
        "max_overflow": config.db_max_overflow,
        "pool_timeout": config.db_pool_timeout,
        "pool_pre_ping": True,
        "pool_recycle": 300,
        "connect_args": connect_args,
    }


def _enable_sqlite_foreign_keys(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection: Any, connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class Database:
    """Owns one engine and the session factory bound to it."""

    def __init__(
        self,
        url: Optional[str] = None,
        *,
        engine: Optional[Engine] = None,
        config: Optional[Settings] = None,
    ) -> None:
        config = config or default_settings
        if engine is None:
            if url is not None:
                config = config.model_copy(update={"database_url": url})
            engine = create_engine(config.database_url, **_build_engine_kwargs(config))

        self.engine: Engine = engine
        if engine.dialect.name == "sqlite":
            _enable_sqlite_foreign_keys(engine)

        @event.listens_for(engine, "connect")
        def receive_connect(dbapi_connection: Any, connection_record: Any) -> None:
            connection_record.info["connect_time"] = datetime.now()
            logger.debug("Database connection established")

        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, bind=engine, expire_on_commit=False
        )

    def session(self) -> Session:
        return self.SessionLocal()

    def create_all(self) -> None:
        # Import models so every table is registered on the metadata
        from luz import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


__all__ = ["Base", "Database"]
