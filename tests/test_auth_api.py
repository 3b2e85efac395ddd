"""
Integration tests for the identity endpoints
"""

import pytest

from app.core.config import settings

API = settings.api_v1_prefix


@pytest.mark.integration
class TestUserInfoEndpoints:

    def test_get_me_success(self, test_client, test_jwt_token, test_user_data):
        response = test_client.get(
            f"{API}/auth/me",
            headers={"Authorization": f"Bearer {test_jwt_token}"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["user_id"] == test_user_data["sub"]
        assert data["email"] == "testuser@example.com"
        assert data["name"] == "Test User"
        assert data["token_expires_at"] is not None

    def test_get_me_no_token(self, test_client):
        response = test_client.get(f"{API}/auth/me")
        assert response.status_code == 401

    def test_get_me_expired_token(self, test_client, expired_jwt_token):
        response = test_client.get(
            f"{API}/auth/me",
            headers={"Authorization": f"Bearer {expired_jwt_token}"},
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Token has expired"

    def test_auth_status_authenticated(self, test_client, test_jwt_token):
        response = test_client.get(
            f"{API}/auth/status",
            headers={"Authorization": f"Bearer {test_jwt_token}"},
        )
        assert response.json()["authenticated"] is True

    def test_auth_status_not_authenticated(self, test_client):
        assert test_client.get(f"{API}/auth/status").json() == {"authenticated": False, "user": None}

    def test_protected_route_with_real_token(self, client, test_jwt_token):
        from app.auth.dependencies import get_current_user
        from app.main import app

        app.dependency_overrides.pop(get_current_user)
        response = client.get(
            f"{API}/categories/",
            headers={"Authorization": f"Bearer {test_jwt_token}"},
        )
        assert response.status_code == 200
