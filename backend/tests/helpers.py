"""Shared helpers for the test suite (mock results, API shortcuts)."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from app.models import Task

TEST_PASSWORD = "correct-horse-battery"


def scalar_result(value):
    """Mimic the Result of `await db.execute(select(...))` for a single row."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


def scalars_result(values):
    """Mimic the Result of a multi-row select."""
    result = MagicMock()
    result.scalars.return_value.all.return_value = list(values)
    return result


def assign_ids_on_flush(session, start_id=1):
    """
    Make `session.flush()` behave like an INSERT: every object handed to
    `session.add()` gets an id and timestamps.
    """
    async def _flush():
        for offset, call in enumerate(session.add.call_args_list):
            obj = call.args[0]
            if obj.id is None:
                obj.id = start_id + offset
            now = datetime.now(timezone.utc)
            if obj.created_at is None:
                obj.created_at = now
            if obj.updated_at is None:
                obj.updated_at = now
            if isinstance(obj, Task) and obj.completed is None:
                obj.completed = False

    session.flush = AsyncMock(side_effect=_flush)


async def register(client, name="Alice", email="alice@example.com", password=TEST_PASSWORD):
    response = await client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()


async def login_headers(client, email="alice@example.com", password=TEST_PASSWORD):
    response = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
