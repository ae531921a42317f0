"""
Taskboard Backend — User Route Handlers
=========================================

What:  Read, update and delete user accounts. Account creation lives in
       auth.py (registration).

Access Rules:
    - Every route requires a valid access token.
    - Any authenticated user may list users or view one.
    - Update and delete are restricted to the caller's own account. A missing
      id is 404; an existing account that is not the caller's is 403. There
      are no admin roles.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import get_current_user
from app.database import get_db_session
from app.models.user import User
from app.schemas.common import ErrorResponse
from app.schemas.user import UserResponse, UserUpdate
from app.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])

_COMMON = {
    401: {"description": "Missing or invalid access token", "model": ErrorResponse},
    404: {"description": "User not found", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}
_OWNER_ONLY = {403: {"description": "Not your account", "model": ErrorResponse}}


@router.get("", response_model=List[UserResponse], responses=_COMMON, summary="List users")
async def get_all_users(
    response: Response,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[UserResponse]:
    users = await user_service.list_users(db)
    response.headers["X-Total-Count"] = str(len(users))
    return users


@router.get("/{user_id}", response_model=UserResponse, responses=_COMMON, summary="Get a user")
async def get_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.get_user(db, user_id)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    responses={**_COMMON, **_OWNER_ONLY},
    summary="Update your account",
)
async def update_user(
    user_id: int,
    payload: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    """Change name, email and/or password. A new password is re-hashed."""
    return await user_service.update_user(db, user_id, payload, acting_user_id=current_user.id)


@router.delete(
    "/{user_id}",
    response_model=UserResponse,
    responses={**_COMMON, **_OWNER_ONLY},
    summary="Delete your account",
)
async def delete_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    """Deletes the account and all of its tasks; returns the deleted user."""
    return await user_service.delete_user(db, user_id, acting_user_id=current_user.id)
