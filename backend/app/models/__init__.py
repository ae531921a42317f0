# Importing the models registers them on Base.metadata (Alembic, create_all).
from app.models.task import Task
from app.models.user import User

__all__ = ["Task", "User"]
