"""
Taskboard Backend — Task SQLAlchemy Model
===========================================

What:  ORM model for the `tasks` table.
Who:   TaskService, always filtering on `user_id` so one user can never read
       or change another user's tasks.

Index on user_id:
    Every task query is "tasks of user X", so the owner column is indexed.
    ON DELETE CASCADE removes a user's tasks with the user on PostgreSQL;
    UserService also deletes them explicitly so SQLite behaves the same.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, false
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.user import utcnow


class Task(Base):
    """A to-do item belonging to exactly one user."""

    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owner of the task",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, user_id={self.user_id}, completed={self.completed})>"
