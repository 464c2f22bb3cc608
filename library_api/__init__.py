"""
Library API Application Package

GraphQL API over a small library: books, their authors, and the users
who may add books and edit authors.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy database connection and session management
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- models/: SQLAlchemy ORM models
- schemas/: Pydantic input schemas validated before business logic
- services/: Business logic (catalog, users, tokens, pub/sub)
- graphql/: Strawberry schema, resolvers and request context
"""

__version__ = "0.1.0"
