"""
Pydantic Schemas Package

Typed input structures, one per operation, validated at the GraphQL
boundary before reaching the services.

WHY Separate Schemas from SQLAlchemy Models?
============================================
1. Validation: Input rules live in one place, independent of storage
2. Decoupling: Database schema can evolve independently of the API
3. Typing: Services receive explicit typed inputs, not argument dicts
"""

from library_api.schemas.author import AuthorBornUpdate
from library_api.schemas.book import BookCreate, BookFilter
from library_api.schemas.user import LoginRequest, UserCreate

__all__ = [
    "AuthorBornUpdate",
    "BookCreate",
    "BookFilter",
    "LoginRequest",
    "UserCreate",
]
