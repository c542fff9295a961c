"""
Tests for admin-portal login and token handling.
"""

from datetime import timedelta

from jose import jwt

from fiverivers.core.config import settings
from fiverivers.core.security import create_access_token


class TestLogin:
    def test_login_with_login_id(self, client, admin_user, admin_password):
        response = client.post("/auth/login", json={"loginId": admin_user.login_id, "password": admin_password})

        assert response.status_code == 200
        claims = jwt.decode(response.json()["token"], settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        assert claims["userId"] == admin_user.id
        assert claims["email"] == admin_user.email
        assert claims["exp"]

    def test_login_with_email(self, client, admin_user, admin_password):
        response = client.post("/auth/login", json={"loginId": admin_user.email, "password": admin_password})
        assert response.status_code == 200

    def test_missing_fields(self, client):
        response = client.post("/auth/login", json={"loginId": "admin"})

        assert response.status_code == 400
        assert response.json() == {"error": "Login ID and password are required"}

    def test_wrong_password(self, client, admin_user, admin_password):
        response = client.post("/auth/login", json={"loginId": admin_user.login_id, "password": "nope"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}

    def test_unknown_user(self, client, admin_user, admin_password):
        response = client.post("/auth/login", json={"loginId": "ghost", "password": admin_password})
        assert response.status_code == 401

    def test_inactive_user(self, client, db_session, admin_user, admin_password):
        admin_user.is_active = False
        db_session.commit()

        response = client.post("/auth/login", json={"loginId": admin_user.login_id, "password": admin_password})

        assert response.status_code == 403

    def test_password_is_hashed(self, admin_user, admin_password):
        assert admin_user.hashed_password != admin_password
        assert admin_user.hashed_password.startswith("$2")


class TestTokens:
    def test_expired_token_rejected(self, client, admin_user, admin_password):
        token = create_access_token(
            {"userId": admin_user.id, "email": admin_user.email},
            expires_delta=timedelta(minutes=-1),
        )

        response = client.get("/drivers", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_token_for_deleted_user_rejected(self, client):
        token = create_access_token({"userId": 404, "email": "gone@example.com"})

        response = client.get("/drivers", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_health_needs_no_token(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
