"""Google ID token verification against Google's published JWKS."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
import json
import logging
from typing import List, Optional, Sequence

import httpx
import jwt
from jwt.algorithms import RSAAlgorithm

from .config import settings

logger = logging.getLogger(__name__)


class GoogleTokenError(Exception):
    """The ID token could not be verified."""


@dataclass(frozen=True)
class GoogleProfile:
    sub: str
    email: Optional[str] = None
    email_verified: Optional[bool] = None
    name: Optional[str] = None
    picture: Optional[str] = None


class JWKSCache:
    """Cache for Google signing keys with 1-hour TTL."""

    def __init__(self, jwks_url: str) -> None:
        self._jwks_url = jwks_url
        self._keys: Optional[dict[str, dict[str, object]]] = None
        self._fetched_at: Optional[datetime] = None
        self._ttl = timedelta(hours=1)
        self._lock = asyncio.Lock()

    async def get_signing_key(self, token: str) -> dict[str, object]:
        """Get the signing key for a token, fetching JWKS if needed."""
        kid = jwt.get_unverified_header(token).get("kid")
        if not kid:
            raise GoogleTokenError("Missing kid in token header")

        if self._should_refresh() or not self._keys or kid not in self._keys:
            await self._fetch_jwks(force=bool(self._keys) and kid not in self._keys)
        if not self._keys or kid not in self._keys:
            raise GoogleTokenError(f"Unknown signing key: {kid}")
        return self._keys[kid]

    def _should_refresh(self) -> bool:
        if self._keys is None or self._fetched_at is None:
            return True
        return datetime.now(timezone.utc) - self._fetched_at > self._ttl

    async def _fetch_jwks(self, force: bool = False) -> None:
        async with self._lock:
            if not force and not self._should_refresh() and self._keys:
                return
            async with httpx.AsyncClient(timeout=10.0) as client:
                response = await client.get(self._jwks_url)
                response.raise_for_status()
                jwks = response.json()

            self._keys = {key["kid"]: key for key in jwks.get("keys", []) if "kid" in key}
            self._fetched_at = datetime.now(timezone.utc)
            logger.debug("Fetched %d Google signing keys", len(self._keys))


class GoogleIdTokenVerifier:
    """Verifies RS256 Google ID tokens for a set of accepted OAuth client ids."""

    def __init__(
        self,
        client_ids: Optional[Sequence[str]] = None,
        jwks_url: Optional[str] = None,
        issuers: Optional[Sequence[str]] = None,
    ) -> None:
        self.client_ids: List[str] = list(
            client_ids if client_ids is not None else settings.google_client_ids
        )
        self.issuers: List[str] = list(issuers if issuers is not None else settings.google_issuers)
        self._jwks = JWKSCache(jwks_url or settings.google_jwks_url)

    async def verify(self, id_token: str) -> GoogleProfile:
        if not id_token:
            raise GoogleTokenError("missing id token")
        if not self.client_ids:
            raise GoogleTokenError("no allowed client ids")

        try:
            signing_key = await self._jwks.get_signing_key(id_token)
            public_key = RSAAlgorithm.from_jwk(json.dumps(signing_key))
            payload = jwt.decode(
                id_token,
                public_key,
                algorithms=["RS256"],
                audience=self.client_ids,
                options={"verify_iss": False},
            )
        except (jwt.InvalidTokenError, httpx.HTTPError, ValueError) as exc:
            raise GoogleTokenError(str(exc)) from exc

        if payload.get("iss") not in self.issuers:
            raise GoogleTokenError("Unexpected token issuer")
        if not payload.get("sub"):
            raise GoogleTokenError("Token payload missing 'sub'")

        return GoogleProfile(
            sub=str(payload["sub"]),
            email=payload.get("email") if isinstance(payload.get("email"), str) else None,
            email_verified=payload.get("email_verified"),
            name=payload.get("name") if isinstance(payload.get("name"), str) else None,
            picture=payload.get("picture") if isinstance(payload.get("picture"), str) else None,
        )
