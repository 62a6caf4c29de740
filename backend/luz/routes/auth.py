# backend/luz/routes/auth.py
"""
Authentication routes.

Operators sign in with a Google ID token; the API answers with its own
short-lived access token and a refresh cookie.
"""

import asyncio
import logging
import secrets

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..api.dependencies import get_auth_service, get_google_verifier, require_admin
from ..core.config import settings
from ..core.google_verify import GoogleIdTokenVerifier, GoogleTokenError
from ..models.user import User
from ..schemas.auth import AuthConfigResponse, AuthUser, GoogleTokenRequest, TokenResponse
from ..services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

REFRESH_COOKIE_NAME = "refresh_token"


def _set_refresh_cookie(response: Response) -> None:
    # Opaque and unstored; nothing reads it back until rotation exists.
    response.set_cookie(
        key=REFRESH_COOKIE_NAME,
        value=f"r.{secrets.token_urlsafe(32)}",
        max_age=settings.refresh_cookie_max_age_days * 24 * 60 * 60,
        httponly=True,
        secure=True,
        samesite="none",
    )


@router.post(
    "/google/token",
    response_model=TokenResponse,
    response_model_by_alias=True,
)
async def google_token(
    payload: GoogleTokenRequest,
    response: Response,
    verifier: GoogleIdTokenVerifier = Depends(get_google_verifier),
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """
    Exchange a Google ID token for an access token.

    Any verification failure is reported as 401 "invalid token".
    """
    try:
        profile = await verifier.verify(payload.id_token)
    except GoogleTokenError as e:
        logger.info(f"Google ID token rejected: {str(e)}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid token")

    result = await asyncio.to_thread(auth_service.sign_in, profile)
    _set_refresh_cookie(response)
    return TokenResponse(
        access_token=result.access_token,
        user=AuthUser.model_validate(result.user),
    )


@router.get("/config", response_model=AuthConfigResponse)
async def auth_config(_: User = Depends(require_admin)) -> AuthConfigResponse:
    """Audiences accepted for Google sign-in (admin only)."""
    return AuthConfigResponse(audiences=list(settings.google_client_ids))
