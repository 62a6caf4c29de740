# backend/luz/main.py
"""
Luz API application factory.

``create_app`` wires configuration, logging, the database, middleware,
error handlers and routers. Tests call it with their own ``Database``.
"""

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import Settings, settings as default_settings
from .core.google_verify import GoogleIdTokenVerifier
from .core.request_context import attach_request_id_filter
from .database import Database
from .errors import register_error_handlers
from .middleware.request_logging import RequestLoggingMiddleware
from .routes import auth, bookings, customers, health, invites, public, studios

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(config: Settings) -> None:
    """Configure root logging once; every record carries the request id."""
    logging.basicConfig(level=config.log_level, format=LOG_FORMAT)
    attach_request_id_filter()


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown."""
    logger.info(f"Luz API starting up (environment={app.state.settings.environment})")
    yield
    logger.info("Luz API shutting down")
    app.state.database.dispose()


def create_app(
    config: Optional[Settings] = None,
    database: Optional[Database] = None,
    google_verifier: Optional[GoogleIdTokenVerifier] = None,
) -> FastAPI:
    config = config or default_settings
    configure_logging(config)

    app = FastAPI(
        title="Luz API",
        description="Booking backend for small studios",
        version="1.0.0",
        lifespan=app_lifespan,
        docs_url=None if config.is_production else "/docs",
        redoc_url=None if config.is_production else "/redoc",
    )
    app.state.settings = config
    app.state.database = database or Database(config=config)
    app.state.google_verifier = google_verifier or GoogleIdTokenVerifier(
        client_ids=config.google_client_ids,
        jwks_url=config.google_jwks_url,
        issuers=config.google_issuers,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["*"],
    )
    # Added last so it runs outermost and sees every response
    app.add_middleware(RequestLoggingMiddleware)
    logger.info("CORS allow_origins=%s", config.cors_origins)

    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router, prefix="/auth")
    app.include_router(studios.router, prefix="/studios")
    app.include_router(customers.router)
    app.include_router(invites.router, prefix="/invites")
    app.include_router(bookings.router, prefix="/bookings")
    app.include_router(public.router, prefix="/public")

    return app


app = create_app()
