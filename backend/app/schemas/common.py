"""
Taskboard Backend — Shared Pydantic Schemas
=============================================

What:  Response models shared by every router (the error envelope, the
       health payload) and the UTC helper used by the resource schemas.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standardized error body returned by every exception handler.

    Example:
        {
            "error": "not_found",
            "message": "Task not found",
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


def ensure_utc(value: datetime) -> datetime:
    """
    Attach UTC to a naive timestamp.

    Every timestamp column is written in UTC, but SQLite hands them back
    without tzinfo; PostgreSQL already returns aware values.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
