"""
Taskboard Backend — Task Route Handlers
=========================================

What:  CRUD endpoints for the authenticated user's tasks.
How:   `get_current_user` resolves the bearer token; the user's id is passed to
       TaskService, which scopes every query to that owner.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import get_current_user
from app.database import get_db_session
from app.models.user import User
from app.schemas.common import ErrorResponse
from app.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from app.services.task_service import task_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])

_NOT_FOUND = {404: {"description": "Task not found", "model": ErrorResponse}}
_COMMON = {
    401: {"description": "Missing or invalid access token", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=List[TaskResponse],
    responses=_COMMON,
    summary="List the current user's tasks",
)
async def get_all_tasks(
    response: Response,
    completed: Optional[bool] = Query(
        default=None,
        description="Only return tasks with this completion state",
    ),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[TaskResponse]:
    tasks = await task_service.list_tasks(db, user_id=current_user.id, completed=completed)
    response.headers["X-Total-Count"] = str(len(tasks))
    return tasks


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    responses={**_NOT_FOUND, **_COMMON},
    summary="Get one task",
)
async def get_task(
    task_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> TaskResponse:
    return await task_service.get_task(db, task_id=task_id, user_id=current_user.id)


@router.post(
    "",
    status_code=201,
    response_model=TaskResponse,
    responses=_COMMON,
    summary="Create a task",
)
async def create_task(
    payload: TaskCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> TaskResponse:
    """Create a task owned by the caller. `completed` defaults to false."""
    return await task_service.create_task(db, user_id=current_user.id, payload=payload)


@router.put(
    "/{task_id}",
    response_model=TaskResponse,
    responses={**_NOT_FOUND, **_COMMON},
    summary="Update a task (partial)",
)
async def update_task(
    task_id: int,
    payload: TaskUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> TaskResponse:
    """Only `title` and/or `completed` present in the body are changed."""
    return await task_service.update_task(
        db, task_id=task_id, user_id=current_user.id, payload=payload
    )


@router.delete(
    "/{task_id}",
    response_model=TaskResponse,
    responses={**_NOT_FOUND, **_COMMON},
    summary="Delete a task",
)
async def delete_task(
    task_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> TaskResponse:
    """Returns the task as it was before deletion."""
    return await task_service.delete_task(db, task_id=task_id, user_id=current_user.id)
