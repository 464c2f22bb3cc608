"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the Library API.

The stored records are small documents (a book with its genre tags, an
author, a user) linked by reference. They live in plain tables:
- authors
- books (references authors)
- book_genres (ordered genre tags of a book)
- users

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives -> create a new session
2. Use session for all database operations in that request
3. Services commit each write on success and roll back on failure
4. Close session when request ends

This is implemented using FastAPI's dependency injection, which the
GraphQL context getter also depends on.
"""

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from library_api.config import get_settings

settings = get_settings()


def _engine_options() -> dict[str, Any]:
    """
    Engine keyword arguments for the configured backend.

    SQLite (used by tests and quick local runs) does not take pool sizing
    and needs check_same_thread disabled because FastAPI runs sync
    dependencies in a thread pool.
    """
    if settings.is_sqlite:
        return {
            "connect_args": {"check_same_thread": False},
            "echo": settings.debug,
        }

    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": True,  # Verify connections are alive before using
        "echo": settings.debug,  # Log SQL in debug mode
    }


# =============================================================================
# Database Engine
# =============================================================================
engine = create_engine(settings.database_url, **_engine_options())


# =============================================================================
# Session Factory
# =============================================================================
# - autoflush=False: Don't auto-flush before queries (more predictable behavior)
# - bind=engine: Connect sessions to our database engine
SessionLocal = sessionmaker(
    autoflush=False,
    bind=engine,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic uses Base.metadata to discover the tables for migrations.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Creates a session, yields it to the request (the GraphQL context in
    this application) and closes it when the request ends, even if an
    exception occurred.

    Tests replace this dependency through app.dependency_overrides.

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def create_tables() -> None:
    """
    Create all database tables.

    WARNING: In production, use Alembic migrations instead!
    """
    Base.metadata.create_all(bind=engine)
