"""
Unit tests for authentication dependencies

Tests:
1. BackendJWTBearer token verification
2. get_current_user / get_optional_user dependency functions
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from app.auth.dependencies import BackendJWTBearer, get_current_user, get_optional_user


def bearer(token):
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


@pytest.mark.unit
class TestBackendJWTBearer:
    """Token verification"""

    def test_verify_token_valid(self, test_jwt_token, test_user_data):
        payload = BackendJWTBearer().verify_token(test_jwt_token)
        assert payload["sub"] == test_user_data["sub"]

    def test_verify_token_expired(self, expired_jwt_token):
        with pytest.raises(HTTPException) as exc_info:
            BackendJWTBearer().verify_token(expired_jwt_token)
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Token has expired"
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}

    def test_verify_token_wrong_secret(self, test_user_data, token_factory):
        token = token_factory(test_user_data, secret="another-secret")
        with pytest.raises(HTTPException) as exc_info:
            BackendJWTBearer().verify_token(token)
        assert exc_info.value.status_code == 401

    def test_verify_token_invalid_audience(self, test_user_data, token_factory):
        token = token_factory({**test_user_data, "aud": "someone-else"})
        with pytest.raises(HTTPException) as exc_info:
            BackendJWTBearer().verify_token(token)
        assert exc_info.value.detail == "Invalid token claims"

    def test_verify_token_without_subject(self, test_user_data, token_factory):
        claims = dict(test_user_data)
        del claims["sub"]
        with pytest.raises(HTTPException):
            BackendJWTBearer().verify_token(token_factory(claims))

    def test_verify_garbage(self):
        with pytest.raises(HTTPException) as exc_info:
            BackendJWTBearer().verify_token("not-a-token")
        assert exc_info.value.detail == "Invalid token"

    def test_get_user_info(self, test_jwt_token, test_user_data):
        user = BackendJWTBearer().get_user_info(test_jwt_token)
        assert user["user_id"] == test_user_data["sub"]
        assert user["email"] == "testuser@example.com"
        assert user["name"] == "Test User"
        assert user["role"] == "authenticated"
        assert user["expires_at"] == test_user_data["exp"]

    def test_custom_secret(self, token_factory):
        claims = {
            "sub": "abc",
            "aud": "dashboard",
            "exp": int((datetime.now(timezone.utc) + timedelta(minutes=5)).timestamp()),
        }
        token = token_factory(claims, secret="s3cret")
        payload = BackendJWTBearer(secret="s3cret", audience="dashboard").verify_token(token)
        assert payload["sub"] == "abc"


@pytest.mark.unit
class TestDependencyFunctions:

    async def test_get_current_user_valid(self, test_jwt_token):
        user = await get_current_user(bearer(test_jwt_token))
        assert user["email"] == "testuser@example.com"

    async def test_get_current_user_no_credentials(self):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(None)
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Authorization required"

    async def test_get_current_user_invalid_token(self):
        with pytest.raises(HTTPException):
            await get_current_user(bearer("invalid"))

    async def test_get_optional_user_valid(self, test_jwt_token):
        user = await get_optional_user(bearer(test_jwt_token))
        assert user["user_id"]

    async def test_get_optional_user_no_credentials(self):
        assert await get_optional_user(None) is None

    async def test_get_optional_user_invalid_token(self, expired_jwt_token):
        assert await get_optional_user(bearer(expired_jwt_token)) is None
