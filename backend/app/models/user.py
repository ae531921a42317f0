"""
Taskboard Backend — User SQLAlchemy Model
===========================================

What:  ORM model for the `users` table.
Who:   UserService (CRUD, login, refresh) and the auth dependency.

Table Design:
    - Integer primary key: user ids appear in URLs (/api/users/{id}) and as the
      JWT `sub` claim.
    - email: unique, stored normalised (stripped, lower-cased) so that lookups
      on login never depend on how the user typed it.
    - password_hash: passlib pbkdf2_sha256 string; the plaintext is never stored
      and the hash is never serialised.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """A registered account. Owns zero or more tasks."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Normalised login identifier",
    )

    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

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
        return f"<User(id={self.id}, email='{self.email}')>"
