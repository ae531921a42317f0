"""
Taskboard Backend — Application Package Initializer
===================================================

What:  Marks the `app` directory as a Python package.
Who:   Imported by uvicorn (`app.main:app`), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← status codes, headers, bodies
    ├─────────────────────────────────────┤
    │     Auth (tokens, current user)     │  ← JWT + password hashing
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← ownership, uniqueness, errors
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch the ORM directly; services never build HTTP responses.
"""

__version__ = "1.0.0"
