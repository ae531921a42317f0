"""
Taskboard Backend — User API Tests
====================================

What:  /api/users listing, lookup, self-only update and delete.
"""

import pytest
from sqlalchemy import func, select

from app.models import Task
from helpers import TEST_PASSWORD, login_headers, register


class TestUsersRead:

    @pytest.mark.asyncio
    async def test_requires_authentication(self, test_client):
        response = await test_client.get("/api/users")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_list_users(self, test_client, auth_headers):
        await register(test_client, name="Bob", email="bob@example.com")

        response = await test_client.get("/api/users", headers=auth_headers)

        assert response.status_code == 200
        assert [u["email"] for u in response.json()] == ["alice@example.com", "bob@example.com"]
        assert response.headers["X-Total-Count"] == "2"
        assert all("password_hash" not in u for u in response.json())

    @pytest.mark.asyncio
    async def test_get_user(self, test_client, registered_user, auth_headers):
        response = await test_client.get(f"/api/users/{registered_user['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["name"] == "Alice"

    @pytest.mark.asyncio
    async def test_get_missing_user(self, test_client, auth_headers):
        response = await test_client.get("/api/users/9999", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"


class TestUsersWrite:

    @pytest.mark.asyncio
    async def test_update_self(self, test_client, registered_user, auth_headers):
        response = await test_client.put(
            f"/api/users/{registered_user['id']}",
            json={"name": "Alicia", "password": "brand-new-password"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Alicia"

        old = await test_client.post(
            "/api/auth/login", json={"email": "alice@example.com", "password": TEST_PASSWORD}
        )
        assert old.status_code == 401
        new = await test_client.post(
            "/api/auth/login",
            json={"email": "alice@example.com", "password": "brand-new-password"},
        )
        assert new.status_code == 200

    @pytest.mark.asyncio
    async def test_update_email_conflict(self, test_client, registered_user, auth_headers):
        await register(test_client, name="Bob", email="bob@example.com")

        response = await test_client.put(
            f"/api/users/{registered_user['id']}",
            json={"email": "bob@example.com"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Email already in use"

    @pytest.mark.asyncio
    async def test_cannot_update_someone_else(self, test_client, auth_headers):
        bob = await register(test_client, name="Bob", email="bob@example.com")

        response = await test_client.put(
            f"/api/users/{bob['id']}", json={"name": "Mallory"}, headers=auth_headers
        )

        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"

    @pytest.mark.asyncio
    async def test_cannot_delete_someone_else(self, test_client, auth_headers):
        bob = await register(test_client, name="Bob", email="bob@example.com")

        response = await test_client.delete(f"/api/users/{bob['id']}", headers=auth_headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_delete_self_removes_tasks(
        self, test_client, db_engine, registered_user, auth_headers
    ):
        await test_client.post("/api/tasks", json={"title": "Orphan?"}, headers=auth_headers)
        bob = await register(test_client, name="Bob", email="bob@example.com")
        bob_headers = await login_headers(test_client, email="bob@example.com")

        response = await test_client.delete(
            f"/api/users/{registered_user['id']}", headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["email"] == "alice@example.com"

        users = await test_client.get("/api/users", headers=bob_headers)
        assert [u["id"] for u in users.json()] == [bob["id"]]

        # The deleted user's token no longer resolves to an account.
        me = await test_client.get("/api/auth/me", headers=auth_headers)
        assert me.status_code == 401

        async with db_engine.connect() as conn:
            remaining = await conn.scalar(
                select(func.count()).select_from(Task).where(Task.user_id == registered_user["id"])
            )
        assert remaining == 0


class TestUsersMissingVersusForbidden:

    @pytest.mark.asyncio
    async def test_update_missing_user_is_404(self, test_client, auth_headers):
        response = await test_client.put(
            "/api/users/9999", json={"name": "Z"}, headers=auth_headers
        )

        assert response.status_code == 404
        assert response.json()["message"] == "User with ID 9999 not found"

    @pytest.mark.asyncio
    async def test_delete_missing_user_is_404(self, test_client, auth_headers):
        response = await test_client.delete("/api/users/9999", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "User with ID 9999 not found"

    @pytest.mark.asyncio
    async def test_existing_other_account_is_403(self, test_client, auth_headers):
        bob = await register(test_client, name="Bob", email="bob@example.com")

        response = await test_client.put(
            f"/api/users/{bob['id']}", json={"name": "Z"}, headers=auth_headers
        )

        assert response.status_code == 403
        assert response.json()["message"] == "You can only modify your own account"


class TestUsersValidation:

    @pytest.mark.asyncio
    async def test_blank_name_rejected(self, test_client, registered_user, auth_headers):
        response = await test_client.put(
            f"/api/users/{registered_user['id']}", json={"name": "   "}, headers=auth_headers
        )

        assert response.status_code == 422
        me = await test_client.get("/api/auth/me", headers=auth_headers)
        assert me.json()["name"] == "Alice"

    @pytest.mark.asyncio
    async def test_invalid_email_rejected(self, test_client, registered_user, auth_headers):
        response = await test_client.put(
            f"/api/users/{registered_user['id']}", json={"email": "a@@b.com"}, headers=auth_headers
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_timestamps_are_utc_after_reload(self, test_client, registered_user, auth_headers):
        response = await test_client.get(f"/api/users/{registered_user['id']}", headers=auth_headers)

        body = response.json()
        assert body["created_at"].endswith(("Z", "+00:00"))
        assert body["updated_at"].endswith(("Z", "+00:00"))
