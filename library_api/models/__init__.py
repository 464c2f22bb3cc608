"""
SQLAlchemy Models Package

This package contains all database models for the Library API.

Model Relationships:
- Author <-> Book: One-to-Many (a book references exactly one author)
- Book <-> BookGenre: One-to-Many (ordered genre tags)
- User: standalone, used for authentication

Import all models here to:
1. Make them available as: from library_api.models import Book, Author, User
2. Ensure Alembic discovers them for migrations
"""

from library_api.models.author import Author
from library_api.models.book import Book, BookGenre
from library_api.models.user import User

__all__ = [
    "Author",
    "Book",
    "BookGenre",
    "User",
]
