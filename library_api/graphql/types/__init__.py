"""
GraphQL Types Package

This package contains the GraphQL type definitions that map to our
SQLAlchemy models. Types are defined using Strawberry's decorator syntax
and exposed under the schema names Book, Author, User and Token.
"""

from library_api.graphql.types.author import AuthorType
from library_api.graphql.types.book import BookType
from library_api.graphql.types.user import TokenType, UserType

__all__ = [
    "AuthorType",
    "BookType",
    "TokenType",
    "UserType",
]
