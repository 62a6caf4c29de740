from datetime import timedelta

import jwt
import pytest

from luz.auth import create_access_token, decode_access_token
from luz.core.config import settings


def test_claims_round_trip():
    token = create_access_token("01HZY0000000000000000000AB", is_admin=True)

    claims = decode_access_token(token)

    assert claims["sub"] == "01HZY0000000000000000000AB"
    assert claims["is_admin"] is True
    assert claims["exp"] - claims["iat"] == settings.access_token_expire_minutes * 60


def test_expired_token_is_rejected():
    token = create_access_token("user-1", expires_delta=timedelta(seconds=-1))

    with pytest.raises(jwt.ExpiredSignatureError):
        decode_access_token(token)


def test_token_signed_with_other_secret_is_rejected():
    forged = jwt.encode({"sub": "user-1", "exp": 9999999999}, "other-secret", algorithm="HS256")

    with pytest.raises(jwt.InvalidSignatureError):
        decode_access_token(forged)
