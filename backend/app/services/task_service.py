"""
Taskboard Backend — Task Service
==================================

What:  CRUD for tasks, always scoped to the owning user.
Who:   Called by the /api/tasks route handlers with the authenticated user's id.

Ownership Rule:
    Every lookup filters on both `Task.id` and `Task.user_id`. A task owned by
    someone else is reported exactly like a missing one (NotFoundError → 404)
    so ids of other users' tasks cannot be discovered.

Error Handling:
    NotFoundError propagates unchanged. Anything unexpected is logged with a
    traceback and re-raised as DatabaseError carrying the operation message
    ("Failed to fetch tasks", ...), which the global handler turns into a 500.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, TaskboardError
from app.models.task import Task
from app.models.user import utcnow
from app.schemas.task import TaskCreate, TaskResponse, TaskUpdate

logger = logging.getLogger(__name__)


class TaskService:
    """
    Business logic layer for task operations.

    Stateless: the session is passed to every call, so a single module-level
    instance is shared by all requests.
    """

    async def _find_owned(self, db: AsyncSession, task_id: int, user_id: int) -> Task:
        result = await db.execute(
            select(Task).where(Task.id == task_id, Task.user_id == user_id)
        )
        task = result.scalar_one_or_none()
        if task is None:
            raise NotFoundError(resource="task")
        return task

    async def list_tasks(
        self,
        db: AsyncSession,
        user_id: int,
        completed: Optional[bool] = None,
    ) -> List[TaskResponse]:
        """
        Return the user's tasks ordered by id (creation order).

        Args:
            db: Async database session
            user_id: Owner whose tasks are listed
            completed: Optional filter on completion state
        """
        try:
            query = select(Task).where(Task.user_id == user_id)
            if completed is not None:
                query = query.where(Task.completed == completed)
            query = query.order_by(Task.id)

            result = await db.execute(query)
            tasks = list(result.scalars().all())
            logger.info("Fetched %d tasks for user %s", len(tasks), user_id)
            return [TaskResponse.model_validate(task) for task in tasks]

        except Exception as e:
            logger.error("Failed to fetch tasks for user %s: %s", user_id, e, exc_info=True)
            raise DatabaseError(
                message="Failed to fetch tasks",
                context={"user_id": user_id, "error_type": type(e).__name__},
            )

    async def get_task(self, db: AsyncSession, task_id: int, user_id: int) -> TaskResponse:
        """
        Fetch one of the user's tasks.

        Raises:
            NotFoundError: No such task for this user (→ 404 "Task not found")
            DatabaseError: Query failed (→ 500 "Failed to fetch task")
        """
        try:
            task = await self._find_owned(db, task_id, user_id)
            return TaskResponse.model_validate(task)

        except TaskboardError:
            raise
        except Exception as e:
            logger.error("Failed to fetch task %s: %s", task_id, e, exc_info=True)
            raise DatabaseError(
                message="Failed to fetch task",
                context={"task_id": task_id, "error_type": type(e).__name__},
            )

    async def create_task(
        self,
        db: AsyncSession,
        user_id: int,
        payload: TaskCreate,
    ) -> TaskResponse:
        """Create a task owned by `user_id`. The flush assigns id and timestamps."""
        try:
            task = Task(
                title=payload.title,
                completed=payload.completed,
                user_id=user_id,
            )
            db.add(task)
            await db.flush()
            logger.info("Task %s created for user %s", task.id, user_id)
            return TaskResponse.model_validate(task)

        except Exception as e:
            logger.error("Failed to create task for user %s: %s", user_id, e, exc_info=True)
            raise DatabaseError(
                message="Failed to create task",
                context={"user_id": user_id, "error_type": type(e).__name__},
            )

    async def update_task(
        self,
        db: AsyncSession,
        task_id: int,
        user_id: int,
        payload: TaskUpdate,
    ) -> TaskResponse:
        """
        Apply a partial update. Fields missing from the body are untouched;
        an empty body returns the task as it is.

        Raises:
            NotFoundError: No such task for this user
            DatabaseError: Query or flush failed
        """
        try:
            task = await self._find_owned(db, task_id, user_id)

            changes = payload.changes()
            if changes:
                for field, value in changes.items():
                    setattr(task, field, value)
                task.updated_at = utcnow()
                await db.flush()
                logger.info("Task %s updated: %s", task_id, sorted(changes))

            return TaskResponse.model_validate(task)

        except TaskboardError:
            raise
        except Exception as e:
            logger.error("Failed to update task %s: %s", task_id, e, exc_info=True)
            raise DatabaseError(
                message="Failed to update task",
                context={"task_id": task_id, "error_type": type(e).__name__},
            )

    async def delete_task(self, db: AsyncSession, task_id: int, user_id: int) -> TaskResponse:
        """Delete one of the user's tasks and return it as it was."""
        try:
            task = await self._find_owned(db, task_id, user_id)
            deleted = TaskResponse.model_validate(task)

            await db.delete(task)
            await db.flush()
            logger.info("Task %s deleted by user %s", task_id, user_id)
            return deleted

        except TaskboardError:
            raise
        except Exception as e:
            logger.error("Failed to delete task %s: %s", task_id, e, exc_info=True)
            raise DatabaseError(
                message="Failed to delete task",
                context={"task_id": task_id, "error_type": type(e).__name__},
            )


task_service = TaskService()
