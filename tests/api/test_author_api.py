"""API tests for Author endpoints."""

import logging
from datetime import datetime, timedelta
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import SQLAlchemyError

from src.interfaces.api.dependencies import get_author_service
from src.interfaces.main import app
from src.modules.author.crud import AuthorRepository
from src.modules.author.services import AuthorService
from src.modules.common.exceptions import INTERNAL_ERROR_MESSAGE


class TestAuthorAPI:
    """API tests for author endpoints."""

    @pytest.mark.asyncio
    async def test_get_authors_empty(self, client: AsyncClient):
        """Test listing authors when there are none."""
        response = await client.get("/api/authors")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_get_authors_ordered_by_id(self, client: AsyncClient, test_author: dict, test_author_2: dict):
        """Test that authors are listed in id order."""
        response = await client.get("/api/authors")

        assert response.status_code == 200
        data = response.json()
        assert [a["id"] for a in data] == [test_author["id"], test_author_2["id"]]
        assert data[0]["last_name"] == "Le Guin"
        assert data[1]["bio"] is None

    @pytest.mark.asyncio
    async def test_get_author(self, client: AsyncClient, test_author: dict):
        """Test getting a single author."""
        response = await client.get(f"/api/authors/{test_author['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == test_author["id"]
        assert data["first_name"] == test_author["first_name"]
        assert data["last_name"] == test_author["last_name"]
        assert data["bio"] == test_author["bio"]
        assert "created_at" in data
        assert "updated_at" in data

    @pytest.mark.asyncio
    async def test_get_author_timestamps_are_utc(self, client: AsyncClient, test_author: dict):
        """Test that stored timestamps come back timezone aware in UTC."""
        response = await client.get(f"/api/authors/{test_author['id']}")

        assert response.status_code == 200
        created_at = datetime.fromisoformat(response.json()["created_at"])
        assert created_at.utcoffset() == timedelta(0)

    @pytest.mark.asyncio
    async def test_get_author_not_found(self, client: AsyncClient):
        """Test getting an author that does not exist."""
        response = await client.get("/api/authors/999")

        assert response.status_code == 404
        assert "not found" in response.json()["detail"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("author_id", [0, -1])
    async def test_get_author_non_positive_id(self, client: AsyncClient, author_id: int):
        """Test that non-positive ids are simply not found."""
        response = await client.get(f"/api/authors/{author_id}")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_get_author_non_integer_id(self, client: AsyncClient):
        """Test that a non-integer path id is rejected as bad input."""
        response = await client.get("/api/authors/abc")

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_create_author_success(self, client: AsyncClient, admin_headers: dict):
        """Test creating an author and reading it back."""
        author_data = {"first_name": "Mary", "last_name": "Shelley", "bio": "Wrote Frankenstein"}

        response = await client.post("/api/authors", json=author_data, headers=admin_headers)

        assert response.status_code == 201
        created = response.json()
        assert created["first_name"] == author_data["first_name"]
        assert created["last_name"] == author_data["last_name"]
        assert created["bio"] == author_data["bio"]
        assert response.headers["location"].endswith(f"/api/authors/{created['id']}")

        response = await client.get(f"/api/authors/{created['id']}")
        assert response.status_code == 200
        fetched = response.json()
        for field, value in author_data.items():
            assert fetched[field] == value

    @pytest.mark.asyncio
    async def test_create_author_empty_body(self, client: AsyncClient, admin_headers: dict):
        """Test that creating an author without a body is rejected."""
        response = await client.post("/api/authors", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Request body is required"

    @pytest.mark.asyncio
    async def test_create_author_validation_errors(self, client: AsyncClient, admin_headers: dict):
        """Test that schema-invalid author data is rejected with 400."""
        response = await client.post("/api/authors", json={"first_name": "Mary"}, headers=admin_headers)
        assert response.status_code == 400

        response = await client.post(
            "/api/authors", json={"first_name": "Mary", "last_name": "x" * 101}, headers=admin_headers
        )
        assert response.status_code == 400

        response = await client.post(
            "/api/authors", json={"first_name": "Mary", "last_name": "Shelley", "bio": "x" * 251}, headers=admin_headers
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_create_author_validation_errors_are_logged(
        self, client: AsyncClient, admin_headers: dict, caplog: pytest.LogCaptureFixture
    ):
        """Test that a schema-invalid create logs the attempt and the rejection."""
        caplog.set_level(logging.INFO)

        response = await client.post("/api/authors", json={"first_name": "Mary"}, headers=admin_headers)

        assert response.status_code == 400
        messages = [r.getMessage() for r in caplog.records if r.name == "src.modules.author.services"]
        assert messages == [
            "AuthorService - create: Create Attempted",
            "AuthorService - create: Data was incomplete",
        ]

    @pytest.mark.asyncio
    async def test_update_author_validation_errors_are_logged(
        self, client: AsyncClient, admin_headers: dict, test_author: dict, caplog: pytest.LogCaptureFixture
    ):
        """Test that a schema-invalid update logs the attempt and the rejection."""
        caplog.set_level(logging.INFO)
        author_id = test_author["id"]

        response = await client.put(
            f"/api/authors/{author_id}", json={"id": author_id, "first_name": "Mary"}, headers=admin_headers
        )

        assert response.status_code == 400
        messages = [r.getMessage() for r in caplog.records if r.name == "src.modules.author.services"]
        assert messages == [
            f"AuthorService - update: Update Attempted - id: {author_id}",
            "AuthorService - update: Data was incomplete",
        ]
        warning = next(r for r in caplog.records if r.getMessage() == "AuthorService - update: Data was incomplete")
        assert warning.levelno == logging.WARNING

    @pytest.mark.asyncio
    async def test_create_author_requires_token(self, client: AsyncClient):
        """Test that creating an author without a token is unauthorized."""
        response = await client.post("/api/authors", json={"first_name": "Mary", "last_name": "Shelley"})

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_create_author_invalid_token(self, client: AsyncClient):
        """Test that a garbage token is unauthorized."""
        response = await client.post(
            "/api/authors",
            json={"first_name": "Mary", "last_name": "Shelley"},
            headers={"Authorization": "Bearer not-a-token"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_create_author_requires_admin(self, client: AsyncClient, customer_headers: dict):
        """Test that customers cannot create authors."""
        response = await client.post(
            "/api/authors", json={"first_name": "Mary", "last_name": "Shelley"}, headers=customer_headers
        )

        assert response.status_code == 403

        response = await client.get("/api/authors")
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_update_author_success(self, client: AsyncClient, admin_headers: dict, test_author: dict):
        """Test replacing an author's fields."""
        author_id = test_author["id"]
        update_data = {"id": author_id, "first_name": "Ursula K.", "last_name": "Le Guin", "bio": None}

        response = await client.put(f"/api/authors/{author_id}", json=update_data, headers=admin_headers)

        assert response.status_code == 204
        assert response.content == b""

        response = await client.get(f"/api/authors/{author_id}")
        data = response.json()
        assert data["first_name"] == "Ursula K."
        assert data["bio"] is None

    @pytest.mark.asyncio
    async def test_update_author_is_idempotent(self, client: AsyncClient, admin_headers: dict, test_author: dict):
        """Test that applying the same update twice gives the same state."""
        author_id = test_author["id"]
        update_data = {"id": author_id, "first_name": "Ursula", "last_name": "Le Guin", "bio": "Updated bio"}

        first = await client.put(f"/api/authors/{author_id}", json=update_data, headers=admin_headers)
        after_first = (await client.get(f"/api/authors/{author_id}")).json()
        second = await client.put(f"/api/authors/{author_id}", json=update_data, headers=admin_headers)
        after_second = (await client.get(f"/api/authors/{author_id}")).json()

        assert first.status_code == 204
        assert second.status_code == 204
        for field in ("first_name", "last_name", "bio"):
            assert after_first[field] == after_second[field]

    @pytest.mark.asyncio
    async def test_update_author_mismatched_id(self, client: AsyncClient, admin_headers: dict, test_author: dict):
        """Test that a body id different from the path id is rejected."""
        author_id = test_author["id"]
        update_data = {"id": author_id + 1, "first_name": "Ursula", "last_name": "Le Guin"}

        response = await client.put(f"/api/authors/{author_id}", json=update_data, headers=admin_headers)
        assert response.status_code == 400

        # Neither id exists here; the mismatch still wins over not-found.
        response = await client.put(
            "/api/authors/5", json={"id": 6, "first_name": "A", "last_name": "B"}, headers=admin_headers
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_update_author_bad_data(self, client: AsyncClient, admin_headers: dict):
        """Test update with a non-positive id or no body."""
        response = await client.put(
            "/api/authors/0", json={"id": 0, "first_name": "A", "last_name": "B"}, headers=admin_headers
        )
        assert response.status_code == 400

        response = await client.put("/api/authors/1", headers=admin_headers)
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_update_author_not_found(self, client: AsyncClient, admin_headers: dict):
        """Test updating an author that does not exist."""
        response = await client.put(
            "/api/authors/999", json={"id": 999, "first_name": "A", "last_name": "B"}, headers=admin_headers
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_author_requires_admin(self, client: AsyncClient, customer_headers: dict, test_author: dict):
        """Test that customers cannot update authors."""
        author_id = test_author["id"]
        update_data = {"id": author_id, "first_name": "X", "last_name": "Y"}

        response = await client.put(f"/api/authors/{author_id}", json=update_data)
        assert response.status_code == 401

        response = await client.put(f"/api/authors/{author_id}", json=update_data, headers=customer_headers)
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_delete_author_success(self, client: AsyncClient, admin_headers: dict, test_author: dict):
        """Test deleting an author, after which it is gone."""
        author_id = test_author["id"]

        response = await client.delete(f"/api/authors/{author_id}", headers=admin_headers)
        assert response.status_code == 204

        response = await client.get(f"/api/authors/{author_id}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_author_not_found(self, client: AsyncClient, admin_headers: dict):
        """Test deleting an author that does not exist."""
        response = await client.delete("/api/authors/999", headers=admin_headers)

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_author_invalid_id(self, client: AsyncClient, admin_headers: dict):
        """Test deleting with a non-positive id."""
        response = await client.delete("/api/authors/0", headers=admin_headers)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_delete_author_requires_admin(self, client: AsyncClient, customer_headers: dict, test_author: dict):
        """Test that only administrators can delete authors."""
        author_id = test_author["id"]

        response = await client.delete(f"/api/authors/{author_id}")
        assert response.status_code == 401

        response = await client.delete(f"/api/authors/{author_id}", headers=customer_headers)
        assert response.status_code == 403

        response = await client.get(f"/api/authors/{author_id}")
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_repository_fault_returns_generic_500(self, client: AsyncClient):
        """Test that repository faults surface as a 500 with the generic message."""
        repository = AsyncMock(spec=AuthorRepository)
        repository.find_all.side_effect = SQLAlchemyError("connection lost")
        app.dependency_overrides[get_author_service] = lambda: AuthorService(repository=repository)

        response = await client.get("/api/authors")

        assert response.status_code == 500
        assert response.json() == {"detail": INTERNAL_ERROR_MESSAGE}

    @pytest.mark.asyncio
    async def test_repository_failure_on_create_returns_500(self, client: AsyncClient, admin_headers: dict):
        """Test that an unsuccessful create surfaces as a 500."""
        repository = AsyncMock(spec=AuthorRepository)
        repository.create.return_value = False
        app.dependency_overrides[get_author_service] = lambda: AuthorService(repository=repository)

        response = await client.post(
            "/api/authors", json={"first_name": "Mary", "last_name": "Shelley"}, headers=admin_headers
        )

        assert response.status_code == 500
        assert response.json()["detail"] == INTERNAL_ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_correlation_id_is_echoed(self, client: AsyncClient):
        """Test that the request's correlation id comes back on the response."""
        response = await client.get("/api/authors", headers={"X-Correlation-ID": "abc-123"})

        assert response.headers["x-correlation-id"] == "abc-123"

        response = await client.get("/api/authors")
        assert response.headers["x-correlation-id"]
