"""
Authentication schemas.

Token responses keep the camelCase keys the sign-in client already reads.
"""

from typing import List, Optional

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from .base import StrictModel, StrictRequestModel


class GoogleTokenRequest(StrictRequestModel):
    id_token: str = Field(..., min_length=10)


class CamelResponseModel(StrictModel):
    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )


class AuthUser(CamelResponseModel):
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    is_admin: bool


class TokenResponse(CamelResponseModel):
    access_token: str
    token_type: str = "bearer"
    user: AuthUser


class AuthConfigResponse(StrictModel):
    audiences: List[str]
