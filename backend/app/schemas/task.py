"""
Taskboard Backend — Task Request/Response Schemas
===================================================

What:  API contract for /api/tasks.
Why:   Keeps the HTTP shape independent of the ORM model; `user_id` is never
       accepted from the client, only derived from the access token.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.schemas.common import ensure_utc


def _strip_title(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("Title must not be blank")
    return v


class TaskCreate(BaseModel):
    """Body of POST /api/tasks."""
    title: str = Field(max_length=255, description="What needs doing")
    completed: bool = Field(default=False, description="Whether the task is already done")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _strip_title(v)


class TaskUpdate(BaseModel):
    """
    Body of PUT /api/tasks/{id}.

    Partial update: only fields present in the request body are applied
    (read with `model_dump(exclude_unset=True)`). An explicit null is
    treated the same as an absent field.
    """
    title: Optional[str] = Field(default=None, max_length=255)
    completed: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        return _strip_title(v)

    def changes(self) -> dict:
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}


class TaskResponse(BaseModel):
    """A task as returned by every task endpoint."""
    id: int
    title: str
    completed: bool
    user_id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("created_at", "updated_at")
    @classmethod
    def as_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)
