"""API tests for registration, login and token handling."""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from src.infrastructure.security import create_access_token, decode_access_token
from src.modules.common.constants import ADMINISTRATOR_ROLE, CUSTOMER_ROLE
from src.modules.user.schemas import UserRead

ADMIN_PASSWORD = "admin-password-1"
CUSTOMER_PASSWORD = "customer-password-1"


class TestUserAPI:
    """API tests for user endpoints."""

    @pytest.mark.asyncio
    async def test_register_success(self, client: AsyncClient):
        """Test registering a new customer."""
        user_data = {"username": "new_reader", "email": "new@bookstore.com", "password": "long-enough-pw"}

        response = await client.post("/api/users/register", json=user_data)

        assert response.status_code == 201
        data = response.json()
        assert data["username"] == "new_reader"
        assert data["email"] == "new@bookstore.com"
        assert data["role"] == CUSTOMER_ROLE
        assert "password" not in data
        assert "hashed_password" not in data

    @pytest.mark.asyncio
    async def test_register_duplicate(self, client: AsyncClient, customer_user: UserRead):
        """Test that a taken username or email conflicts."""
        response = await client.post(
            "/api/users/register",
            json={"username": customer_user.username, "email": "other@bookstore.com", "password": "long-enough-pw"},
        )
        assert response.status_code == 409

        response = await client.post(
            "/api/users/register",
            json={"username": "someone_else", "email": customer_user.email, "password": "long-enough-pw"},
        )
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_register_invalid_data(self, client: AsyncClient):
        """Test registration with missing or invalid data."""
        response = await client.post("/api/users/register")
        assert response.status_code == 400

        response = await client.post(
            "/api/users/register", json={"username": "ab cd", "email": "x@bookstore.com", "password": "long-enough-pw"}
        )
        assert response.status_code == 400

        response = await client.post(
            "/api/users/register", json={"username": "shortpw", "email": "x@bookstore.com", "password": "short"}
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email", ["a@b..c", "x@-bad-.com.", "no-at-sign.com", "two@@bookstore.com"])
    async def test_register_invalid_email(self, client: AsyncClient, email: str):
        """Test that malformed email addresses are rejected."""
        response = await client.post(
            "/api/users/register", json={"username": "mailer", "email": email, "password": "long-enough-pw"}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_register_normalizes_email(self, client: AsyncClient):
        """Test that email addresses are stored in lowercase."""
        response = await client.post(
            "/api/users/register",
            json={"username": "shouter", "email": "Shouter@BookStore.com", "password": "long-enough-pw"},
        )

        assert response.status_code == 201
        assert response.json()["email"] == "shouter@bookstore.com"

    @pytest.mark.asyncio
    async def test_login_success(self, client: AsyncClient, customer_user: UserRead):
        """Test logging in returns a usable bearer token."""
        response = await client.post(
            "/api/users/login", json={"username": customer_user.username, "password": CUSTOMER_PASSWORD}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["expires_in"] > 0

        payload = decode_access_token(data["access_token"])
        assert payload is not None
        assert payload.sub == str(customer_user.id)
        assert payload.role == CUSTOMER_ROLE

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client: AsyncClient, customer_user: UserRead):
        """Test that a wrong password is unauthorized."""
        response = await client.post(
            "/api/users/login", json={"username": customer_user.username, "password": "wrong-password"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid username or password"

    @pytest.mark.asyncio
    async def test_login_unknown_user(self, client: AsyncClient):
        """Test that an unknown user gets the same answer as a wrong password."""
        response = await client.post("/api/users/login", json={"username": "nobody", "password": "whatever-pw"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid username or password"

    @pytest.mark.asyncio
    async def test_login_empty_body(self, client: AsyncClient):
        """Test that logging in without credentials is bad input."""
        response = await client.post("/api/users/login")

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_admin_login_can_manage_authors(self, client: AsyncClient, admin_user: UserRead):
        """Test the full flow of logging in as administrator and creating an author."""
        assert admin_user.role == ADMINISTRATOR_ROLE

        response = await client.post("/api/users/login", json={"username": "admin", "password": ADMIN_PASSWORD})
        token = response.json()["access_token"]

        response = await client.post(
            "/api/authors",
            json={"first_name": "Octavia", "last_name": "Butler"},
            headers={"Authorization": f"Bearer {token}"},
        )
        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_expired_token_is_rejected(self, client: AsyncClient, admin_user: UserRead):
        """Test that an expired token is unauthorized."""
        token = create_access_token(
            user_id=admin_user.id,
            username=admin_user.username,
            role=admin_user.role,
            expires_delta=timedelta(minutes=-1),
        )

        response = await client.post(
            "/api/authors",
            json={"first_name": "Octavia", "last_name": "Butler"},
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_token_for_deleted_user_is_rejected(self, client: AsyncClient):
        """Test that a token whose subject no longer exists is unauthorized."""
        token = create_access_token(user_id=4242, username="ghost", role=ADMINISTRATOR_ROLE)

        response = await client.delete("/api/authors/1", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_health_check(self, client: AsyncClient):
        """Test the health endpoint."""
        response = await client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
