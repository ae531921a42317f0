"""
Taskboard Backend — Authentication Route Handlers
===================================================

What:  Registration, login, token refresh and "who am I".

Token Flow:
    1. POST /api/auth/register  → 201 user
    2. POST /api/auth/login     → {access_token, refresh_token}
    3. Call protected routes with `Authorization: Bearer <access_token>`
    4. When the access token expires: POST /api/auth/refresh with the
       refresh token → a new pair
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import get_current_user
from app.database import get_db_session
from app.models.user import User
from app.schemas.common import ErrorResponse
from app.schemas.user import (
    LoginRequest,
    RefreshRequest,
    TokenResponse,
    UserCreate,
    UserResponse,
)
from app.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/register",
    status_code=201,
    response_model=UserResponse,
    responses={
        400: {"description": "Email already in use", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create an account",
)
async def register(
    payload: UserCreate,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.create_user(db, payload)


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={
        401: {"description": "Invalid email or password", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Log in with email and password",
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> TokenResponse:
    return await user_service.login(db, payload.email, payload.password)


@router.post(
    "/refresh",
    response_model=TokenResponse,
    responses={
        400: {"description": "Refresh token is required", "model": ErrorResponse},
        403: {"description": "Invalid refresh token", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Exchange a refresh token for a new token pair",
)
async def refresh(
    payload: Optional[RefreshRequest] = None,
    db: AsyncSession = Depends(get_db_session),
) -> TokenResponse:
    # The body itself may be omitted; that is reported as a missing token.
    token = payload.refresh_token if payload else None
    return await user_service.refresh_tokens(db, token)


@router.get(
    "/me",
    response_model=UserResponse,
    responses={401: {"description": "Missing or invalid access token", "model": ErrorResponse}},
    summary="Get the authenticated user",
)
async def me(current_user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.model_validate(current_user)
