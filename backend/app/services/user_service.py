"""
Taskboard Backend — User Service
==================================

What:  User CRUD plus the credential workflows (login, token refresh).
Who:   Called by the /api/users and /api/auth route handlers.

Flows:
    register  → email unique? → hash password → insert → UserResponse
    login     → lookup by normalised email → verify hash → token pair
    refresh   → decode refresh token → user still exists? → new token pair

Error Mapping (via global handlers):
    ValidationError        → 400 (duplicate email, missing refresh token)
    AuthenticationError    → 401 (bad credentials)
    PermissionDeniedError  → 403 (invalid refresh token, someone else's account)
    NotFoundError          → 404
    DatabaseError          → 500 ("Failed to ... user")
"""

import logging
from typing import List, Optional

import jwt
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.security import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
    hash_password,
    verify_password,
)
from app.config import settings
from app.exceptions import (
    AuthenticationError,
    DatabaseError,
    NotFoundError,
    PermissionDeniedError,
    TaskboardError,
    ValidationError,
)
from app.models.task import Task
from app.models.user import User, utcnow
from app.schemas.user import (
    TokenResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
    normalize_email,
)

logger = logging.getLogger(__name__)


def _email_in_use() -> ValidationError:
    return ValidationError(message="Email already in use", field="email")


def _require_self(user: User, acting_user_id: int) -> None:
    if user.id != acting_user_id:
        logger.warning("User %s tried to modify user %s", acting_user_id, user.id)
        raise PermissionDeniedError(message="You can only modify your own account")


class UserService:
    """Business logic layer for users and authentication."""

    # ── Lookups ───────────────────────────────────────────────────────────

    async def find_user(self, db: AsyncSession, user_id: int) -> Optional[User]:
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def find_user_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        normalized = normalize_email(email)
        if not normalized:
            return None
        result = await db.execute(select(User).where(User.email == normalized))
        return result.scalar_one_or_none()

    # ── CRUD ──────────────────────────────────────────────────────────────

    async def list_users(self, db: AsyncSession) -> List[UserResponse]:
        try:
            result = await db.execute(select(User).order_by(User.id))
            users = list(result.scalars().all())
            logger.info("Fetched %d users", len(users))
            return [UserResponse.model_validate(user) for user in users]

        except Exception as e:
            logger.error("Failed to fetch users: %s", e, exc_info=True)
            raise DatabaseError(
                message="Failed to fetch users",
                context={"error_type": type(e).__name__},
            )

    async def get_user(self, db: AsyncSession, user_id: int) -> UserResponse:
        """
        Raises:
            NotFoundError: "User not found" (→ 404)
        """
        try:
            logger.info("Fetching user %s", user_id)
            user = await self.find_user(db, user_id)
            if user is None:
                raise NotFoundError(resource="user")
            return UserResponse.model_validate(user)

        except TaskboardError:
            raise
        except Exception as e:
            logger.error("Failed to fetch user %s: %s", user_id, e, exc_info=True)
            raise DatabaseError(
                message="Failed to fetch user",
                context={"user_id": user_id, "error_type": type(e).__name__},
            )

    async def create_user(self, db: AsyncSession, payload: UserCreate) -> UserResponse:
        """
        Register a new account.

        The uniqueness check runs first for a friendly 400; the unique index
        still catches two concurrent registrations with the same email.
        """
        try:
            logger.info("Creating user")
            if await self.find_user_by_email(db, payload.email) is not None:
                raise _email_in_use()

            user = User(
                name=payload.name,
                email=normalize_email(payload.email),
                password_hash=hash_password(payload.password),
            )
            db.add(user)
            await db.flush()
            logger.info("User %s created", user.id)
            return UserResponse.model_validate(user)

        except TaskboardError:
            raise
        except IntegrityError:
            raise _email_in_use()
        except Exception as e:
            logger.error("Failed to create user: %s", e, exc_info=True)
            raise DatabaseError(
                message="Failed to create user",
                context={"error_type": type(e).__name__},
            )

    async def update_user(
        self,
        db: AsyncSession,
        user_id: int,
        payload: UserUpdate,
        acting_user_id: int,
    ) -> UserResponse:
        """
        Partially update a user. A new password is re-hashed; a new email must
        not belong to another account.

        Raises:
            NotFoundError: "User with ID {id} not found"
            PermissionDeniedError: the account is not the caller's own
            ValidationError: "Email already in use"
        """
        try:
            changes = payload.changes()
            logger.info("Updating user %s: %s", user_id, sorted(changes))

            user = await self.find_user(db, user_id)
            if user is None:
                raise NotFoundError(resource="user", resource_id=user_id)
            _require_self(user, acting_user_id)

            if "email" in changes and changes["email"] != user.email:
                existing = await self.find_user_by_email(db, changes["email"])
                if existing is not None and existing.id != user.id:
                    raise _email_in_use()

            if "password" in changes:
                user.password_hash = hash_password(changes.pop("password"))

            for field, value in changes.items():
                setattr(user, field, value)

            if changes or payload.password:
                user.updated_at = utcnow()
                await db.flush()

            return UserResponse.model_validate(user)

        except TaskboardError:
            raise
        except IntegrityError:
            raise _email_in_use()
        except Exception as e:
            logger.error("Failed to update user %s: %s", user_id, e, exc_info=True)
            raise DatabaseError(
                message="Failed to update user",
                context={"user_id": user_id, "error_type": type(e).__name__},
            )

    async def delete_user(
        self,
        db: AsyncSession,
        user_id: int,
        acting_user_id: int,
    ) -> UserResponse:
        """
        Delete the caller's own account and all of its tasks; return the user
        as it was. A missing id is a 404 before ownership is considered.

        Tasks are removed with an explicit DELETE so the behaviour does not
        depend on the backend enforcing ON DELETE CASCADE (SQLite does not by
        default).
        """
        try:
            logger.info("Deleting user %s", user_id)
            user = await self.find_user(db, user_id)
            if user is None:
                raise NotFoundError(resource="user", resource_id=user_id)
            _require_self(user, acting_user_id)

            deleted = UserResponse.model_validate(user)
            await db.execute(delete(Task).where(Task.user_id == user_id))
            await db.delete(user)
            await db.flush()
            return deleted

        except TaskboardError:
            raise
        except Exception as e:
            logger.error("Failed to delete user %s: %s", user_id, e, exc_info=True)
            raise DatabaseError(
                message="Failed to delete user",
                context={"user_id": user_id, "error_type": type(e).__name__},
            )

    # ── Credentials ───────────────────────────────────────────────────────

    def generate_tokens(self, user: User) -> TokenResponse:
        return TokenResponse(
            access_token=create_access_token(user.id),
            refresh_token=create_refresh_token(user.id),
            expires_in=settings.access_token_expire_minutes * 60,
        )

    async def login(self, db: AsyncSession, email: str, password: str) -> TokenResponse:
        """
        Exchange email + password for a token pair.

        Unknown email and wrong password raise the same AuthenticationError so
        the response does not reveal which accounts exist.
        """
        try:
            logger.info("User login attempt: %s", normalize_email(email))
            user = await self.find_user_by_email(db, email)
            if user is None or not verify_password(password, user.password_hash):
                raise AuthenticationError(message="Invalid email or password")
            return self.generate_tokens(user)

        except TaskboardError:
            raise
        except Exception as e:
            logger.error("Failed to log in user: %s", e, exc_info=True)
            raise DatabaseError(
                message="Failed to log in user",
                context={"error_type": type(e).__name__},
            )

    async def refresh_tokens(
        self,
        db: AsyncSession,
        refresh_token: Optional[str],
    ) -> TokenResponse:
        """
        Issue a fresh token pair from a valid refresh token.

        Raises:
            ValidationError: token missing or blank (→ 400)
            PermissionDeniedError: token invalid, expired, of the wrong type,
                or its user no longer exists (→ 403)
        """
        try:
            logger.info("Refreshing token")
            if not refresh_token or not refresh_token.strip():
                raise ValidationError(message="Refresh token is required", field="refresh_token")

            try:
                user_id = decode_refresh_token(refresh_token.strip())
            except jwt.InvalidTokenError as e:
                logger.info("Rejected refresh token: %s", e)
                raise PermissionDeniedError(message="Invalid refresh token")

            user = await self.find_user(db, user_id)
            if user is None:
                raise PermissionDeniedError(
                    message="Invalid refresh token",
                    context={"reason": "user_not_found"},
                )
            return self.generate_tokens(user)

        except TaskboardError:
            raise
        except Exception as e:
            logger.error("Failed to refresh access token: %s", e, exc_info=True)
            raise DatabaseError(
                message="Failed to refresh access token",
                context={"error_type": type(e).__name__},
            )


user_service = UserService()
