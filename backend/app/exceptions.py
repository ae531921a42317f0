"""
Taskboard Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions, one per HTTP failure class.
How:   Services raise them; global handlers registered in main.py translate
       each type into a JSON error body with the matching status code.

Exception Hierarchy:
    TaskboardError (base)
    ├── ValidationError          → 400 Bad Request
    ├── AuthenticationError      → 401 Unauthorized
    ├── PermissionDeniedError    → 403 Forbidden
    ├── NotFoundError            → 404 Not Found
    ├── RateLimitExceededError   → 429 Too Many Requests
    └── DatabaseError            → 500 Internal Server Error

Routes therefore contain no try/except: a service either returns a value or
raises one of these.
"""

from typing import Any, Dict, Optional


class TaskboardError(Exception):
    """
    Base exception for all Taskboard application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where the handler allows)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TaskboardError):
    """
    Raised when client input breaks a business rule (e.g. duplicate email,
    missing refresh token).

    Schema-level problems (wrong types, missing required fields) never reach
    this class; FastAPI rejects them with 422 first.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthenticationError(TaskboardError):
    """
    Raised when the caller cannot be identified: bad credentials, or a missing,
    expired or malformed access token.

    HTTP:    401 Unauthorized, with `WWW-Authenticate: Bearer`.
    """

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PermissionDeniedError(TaskboardError):
    """
    Raised when the caller is known but may not perform the action, and when a
    refresh token is rejected.

    HTTP:    403 Forbidden
    """

    def __init__(
        self,
        message: str = "You do not have permission to perform this action",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(TaskboardError):
    """
    Raised when a requested resource does not exist (or is not owned by the
    caller, for tasks).

    Message forms:
        NotFoundError(resource="task")                 → "Task not found"
        NotFoundError(resource="user", resource_id=7)  → "User with ID 7 not found"
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        label = resource.capitalize()
        message = f"{label} not found"
        if resource_id is not None:
            message = f"{label} with ID {resource_id} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(TaskboardError):
    """
    Raised when a service operation fails unexpectedly.

    The message is the operation-level summary ("Failed to fetch tasks");
    the underlying exception type goes in context and is only logged.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(TaskboardError):
    """Raised when a client exceeds the per-IP request rate limit (429)."""

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
